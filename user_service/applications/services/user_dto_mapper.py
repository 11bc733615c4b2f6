from user_service.applications.interfaces.dtos.statistics import UserStatisticsPublic
from user_service.applications.interfaces.dtos.user import PaginationPublic, UserList, UserPublic
from user_service.domain.models.user import User
from user_service.domain.models.user_query import UserPage, UserStatistics


class UserDtoMapper:
    """Maps domain users and query results to response DTOs"""

    @staticmethod
    def to_user_public(user: User) -> UserPublic:
        if user.id is None:
            raise RuntimeError("User has no ID assigned")
        return UserPublic(
            id=user.id,
            name=user.name,
            email=user.email,
            age=user.age,
            department=user.department,
            salary=user.salary,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    @staticmethod
    def to_user_list(page: UserPage) -> UserList:
        return UserList(
            data=[UserDtoMapper.to_user_public(user) for user in page.data],
            pagination=PaginationPublic.model_validate(page.pagination),
        )

    @staticmethod
    def to_statistics_public(statistics: UserStatistics) -> UserStatisticsPublic:
        return UserStatisticsPublic.model_validate(statistics)
