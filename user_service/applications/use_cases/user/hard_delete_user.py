from user_service.applications.interfaces.dtos.message import Message
from user_service.domain.exceptions import NotFoundError
from user_service.domain.ports.repositories.user_repository import UserRepository
from user_service.infrastructure.logging.logger import Logger

logger = Logger.get_logger(__name__)


class HardDeleteUserUseCase:
    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def execute(self, user_id: int) -> Message:
        existing_user = await self.user_repository.get_by_id(user_id)
        if not existing_user:
            raise NotFoundError("User not found")

        success = await self.user_repository.delete(user_id)
        if not success:
            raise RuntimeError("Failed to delete user")

        logger.info("User %s permanently deleted", user_id)
        return Message(message="User permanently deleted")
