from abc import ABC, abstractmethod
from typing import Optional

from user_service.domain.models.user import User
from user_service.domain.models.user_query import UserFilter, UserPage, UserStatistics


class UserRepository(ABC):
    @abstractmethod
    async def create(self, user: User) -> User:
        pass

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[User]:
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        pass

    @abstractmethod
    async def email_exists(self, email: str, exclude_id: Optional[int] = None) -> bool:
        pass

    @abstractmethod
    async def list_users(self, user_filter: UserFilter) -> UserPage:
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        pass

    @abstractmethod
    async def set_active(self, user_id: int, is_active: bool) -> Optional[User]:
        pass

    @abstractmethod
    async def delete(self, user_id: int) -> bool:
        pass

    @abstractmethod
    async def get_statistics(self) -> UserStatistics:
        pass
