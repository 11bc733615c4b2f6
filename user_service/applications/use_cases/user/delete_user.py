from user_service.applications.interfaces.dtos.message import Message
from user_service.domain.exceptions import NotFoundError
from user_service.domain.ports.repositories.user_repository import UserRepository


class DeleteUserUseCase:
    """Soft delete: the row stays and keeps its email, only is_active is cleared."""

    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def execute(self, user_id: int) -> Message:
        deactivated = await self.user_repository.set_active(user_id, False)
        if not deactivated:
            raise NotFoundError("User not found")

        return Message(message="User deactivated successfully")
