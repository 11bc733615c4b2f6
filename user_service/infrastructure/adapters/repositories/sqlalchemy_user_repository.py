from typing import Any, Optional

from sqlalchemy import case, desc, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from user_service.domain.exceptions import EmailAlreadyExistsError, NotFoundError
from user_service.domain.models.user import User as DomainUser
from user_service.domain.models.user_query import (
    DepartmentStatistics,
    Pagination,
    StatisticsOverview,
    UserFilter,
    UserPage,
    UserStatistics,
)
from user_service.domain.ports.repositories.user_repository import UserRepository
from user_service.infrastructure.adapters.repositories.user_query_builder import UserQueryBuilder
from user_service.infrastructure.logging.logger import Logger
from user_service.infrastructure.persistence.models import User as SQLUser

logger = Logger.get_logger(__name__)


def _number(value: Any) -> Optional[float]:
    # AVG/MIN/MAX over no rows come back as NULL; keep that as "no data"
    if value is None:
        return None
    return round(float(value), 2)


class SQLAlchemyUserRepository(UserRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    def _to_domain(self, sql_user: SQLUser) -> DomainUser:
        return DomainUser(
            id=sql_user.id,
            name=sql_user.name,
            email=sql_user.email,
            age=sql_user.age,
            department=sql_user.department,
            salary=sql_user.salary,
            is_active=sql_user.is_active,
            created_at=sql_user.created_at,
            updated_at=sql_user.updated_at,
        )

    async def _get_sql_user(self, user_id: int) -> Optional[SQLUser]:
        return await self.session.scalar(select(SQLUser).where(SQLUser.id == user_id))

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            if "email" in str(e.orig).lower():
                raise EmailAlreadyExistsError() from e
            raise

    async def create(self, user: DomainUser) -> DomainUser:
        sql_user = SQLUser(
            name=user.name,
            email=user.email,
            age=user.age,
            department=user.department,
            salary=user.salary,
            is_active=user.is_active,
        )
        self.session.add(sql_user)
        await self._commit()
        await self.session.refresh(sql_user)
        return self._to_domain(sql_user)

    async def get_by_id(self, user_id: int) -> Optional[DomainUser]:
        sql_user = await self._get_sql_user(user_id)
        return self._to_domain(sql_user) if sql_user else None

    async def get_by_email(self, email: str) -> Optional[DomainUser]:
        sql_user = await self.session.scalar(select(SQLUser).where(SQLUser.email == email))
        return self._to_domain(sql_user) if sql_user else None

    async def email_exists(self, email: str, exclude_id: Optional[int] = None) -> bool:
        query = select(SQLUser.id).where(SQLUser.email == email)
        if exclude_id is not None:
            query = query.where(SQLUser.id != exclude_id)
        return await self.session.scalar(query.limit(1)) is not None

    async def list_users(self, user_filter: UserFilter) -> UserPage:
        builder = UserQueryBuilder.from_filter(user_filter)

        # Count and fetch run back to back without a shared snapshot;
        # a concurrent write may shift the page by a row.
        total_items = await self.session.scalar(builder.count_statement()) or 0
        sql_users = await self.session.scalars(
            builder.page_statement(
                sort_by=user_filter.sort_by,
                sort_order=user_filter.sort_order,
                offset=user_filter.offset,
                limit=user_filter.limit,
            )
        )

        logger.debug(
            "Listed users page=%s limit=%s predicates=%s total=%s",
            user_filter.page,
            user_filter.limit,
            len(builder.conditions),
            total_items,
        )
        return UserPage(
            data=[self._to_domain(sql_user) for sql_user in sql_users.all()],
            pagination=Pagination.from_totals(
                total_items=total_items,
                page=user_filter.page,
                limit=user_filter.limit,
            ),
        )

    async def update(self, user: DomainUser) -> DomainUser:
        sql_user = await self._get_sql_user(user.id)
        if not sql_user:
            raise NotFoundError("User not found")

        sql_user.name = user.name
        sql_user.email = user.email
        sql_user.age = user.age
        sql_user.department = user.department
        sql_user.salary = user.salary
        sql_user.is_active = user.is_active
        # every write moves the timestamp, even when no column value changed
        sql_user.updated_at = func.now()

        await self._commit()
        await self.session.refresh(sql_user)
        return self._to_domain(sql_user)

    async def set_active(self, user_id: int, is_active: bool) -> Optional[DomainUser]:
        sql_user = await self._get_sql_user(user_id)
        if not sql_user:
            return None

        sql_user.is_active = is_active
        sql_user.updated_at = func.now()
        await self._commit()
        await self.session.refresh(sql_user)
        return self._to_domain(sql_user)

    async def delete(self, user_id: int) -> bool:
        sql_user = await self._get_sql_user(user_id)
        if not sql_user:
            return False

        await self.session.delete(sql_user)
        await self.session.commit()
        return True

    async def get_statistics(self) -> UserStatistics:
        overview_row = (
            await self.session.execute(
                select(
                    func.count(SQLUser.id).label("total_users"),
                    func.count(case((SQLUser.is_active.is_(True), 1))).label("active_users"),
                    func.count(case((SQLUser.is_active.is_(False), 1))).label("inactive_users"),
                    func.avg(SQLUser.age).label("average_age"),
                    func.avg(SQLUser.salary).label("average_salary"),
                    func.min(SQLUser.salary).label("min_salary"),
                    func.max(SQLUser.salary).label("max_salary"),
                )
            )
        ).one()

        user_count = func.count(SQLUser.id).label("user_count")
        department_rows = (
            await self.session.execute(
                select(
                    SQLUser.department,
                    user_count,
                    func.avg(SQLUser.salary).label("avg_salary"),
                )
                .where(SQLUser.department.is_not(None), SQLUser.is_active.is_(True))
                .group_by(SQLUser.department)
                .order_by(desc(user_count))
            )
        ).all()

        return UserStatistics(
            overview=StatisticsOverview(
                total_users=overview_row.total_users or 0,
                active_users=overview_row.active_users or 0,
                inactive_users=overview_row.inactive_users or 0,
                average_age=_number(overview_row.average_age),
                average_salary=_number(overview_row.average_salary),
                min_salary=_number(overview_row.min_salary),
                max_salary=_number(overview_row.max_salary),
            ),
            by_department=[
                DepartmentStatistics(
                    department=row.department,
                    user_count=row.user_count,
                    avg_salary=_number(row.avg_salary),
                )
                for row in department_rows
            ],
        )
