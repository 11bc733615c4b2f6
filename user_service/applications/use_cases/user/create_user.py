from user_service.applications.interfaces.dtos.user import UserPublic, UserSchema
from user_service.applications.services.user_dto_mapper import UserDtoMapper
from user_service.domain.exceptions import EmailAlreadyExistsError
from user_service.domain.models.user import User
from user_service.domain.ports.repositories.user_repository import UserRepository
from user_service.infrastructure.logging.logger import Logger

logger = Logger.get_logger(__name__)


class CreateUserUseCase:
    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def execute(self, user_data: UserSchema) -> UserPublic:
        logger.info("Creating user: %s", user_data.email)

        if await self.user_repository.email_exists(user_data.email):
            raise EmailAlreadyExistsError()

        user = User(
            name=user_data.name,
            email=user_data.email,
            age=user_data.age,
            department=user_data.department,
            salary=user_data.salary,
        )

        created_user = await self.user_repository.create(user)

        if created_user.id is None:
            raise RuntimeError("User creation failed - no ID assigned")

        logger.info("User created successfully: %s", created_user.id)

        return UserDtoMapper.to_user_public(created_user)
