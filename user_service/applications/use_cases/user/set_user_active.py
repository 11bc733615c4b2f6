from user_service.applications.interfaces.dtos.user import UserPublic
from user_service.applications.services.user_dto_mapper import UserDtoMapper
from user_service.domain.exceptions import NotFoundError
from user_service.domain.ports.repositories.user_repository import UserRepository


class SetUserActiveUseCase:
    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def execute(self, user_id: int, is_active: bool) -> UserPublic:
        user = await self.user_repository.set_active(user_id, is_active)
        if not user:
            raise NotFoundError("User not found")
        return UserDtoMapper.to_user_public(user)
