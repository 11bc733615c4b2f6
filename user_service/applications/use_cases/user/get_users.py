from user_service.applications.interfaces.dtos.filter_page import UserFilterPage
from user_service.applications.interfaces.dtos.user import UserList
from user_service.applications.services.user_dto_mapper import UserDtoMapper
from user_service.domain.ports.repositories.user_repository import UserRepository


class GetUsersUseCase:
    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def execute(self, filter_page: UserFilterPage) -> UserList:
        page = await self.user_repository.list_users(filter_page.to_domain())
        return UserDtoMapper.to_user_list(page)
