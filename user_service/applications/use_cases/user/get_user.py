from user_service.applications.interfaces.dtos.user import UserPublic
from user_service.applications.services.user_dto_mapper import UserDtoMapper
from user_service.domain.exceptions import NotFoundError
from user_service.domain.ports.repositories.user_repository import UserRepository


class GetUserUseCase:
    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def execute(self, user_id: int) -> UserPublic:
        user = await self.user_repository.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return UserDtoMapper.to_user_public(user)
