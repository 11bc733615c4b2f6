from user_service.applications.interfaces.dtos.user import UserPublic, UserUpdateSchema
from user_service.applications.services.user_dto_mapper import UserDtoMapper
from user_service.domain.exceptions import EmailAlreadyExistsError, NotFoundError
from user_service.domain.ports.repositories.user_repository import UserRepository
from user_service.infrastructure.logging.logger import Logger

logger = Logger.get_logger(__name__)

NULLABLE_FIELDS = {"age", "department", "salary"}


class UpdateUserUseCase:
    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def execute(self, user_id: int, user_data: UserUpdateSchema) -> UserPublic:
        existing_user = await self.user_repository.get_by_id(user_id)
        if not existing_user:
            raise NotFoundError("User not found")

        changes = {
            field: value
            for field, value in user_data.model_dump(exclude_unset=True).items()
            if value is not None or field in NULLABLE_FIELDS
        }
        if not changes:
            return UserDtoMapper.to_user_public(existing_user)

        if changes.get("email") and await self.user_repository.email_exists(changes["email"], exclude_id=user_id):
            raise EmailAlreadyExistsError()

        updated_user = existing_user.model_copy(update=changes)
        saved_user = await self.user_repository.update(updated_user)

        logger.info("User %s updated fields: %s", user_id, ", ".join(sorted(changes)))

        return UserDtoMapper.to_user_public(saved_user)
