from user_service.applications.interfaces.dtos.statistics import UserStatisticsPublic
from user_service.applications.services.user_dto_mapper import UserDtoMapper
from user_service.domain.ports.repositories.user_repository import UserRepository


class GetUserStatisticsUseCase:
    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def execute(self) -> UserStatisticsPublic:
        statistics = await self.user_repository.get_statistics()
        return UserDtoMapper.to_statistics_public(statistics)
