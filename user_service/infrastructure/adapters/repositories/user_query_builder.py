from typing import Any, List, Optional, Tuple

from sqlalchemy import ColumnElement, Select, func, select

from user_service.domain.models.user_query import SortField, SortOrder, UserFilter
from user_service.infrastructure.persistence.models import User as SQLUser

SORT_COLUMNS = {
    SortField.NAME: SQLUser.name,
    SortField.EMAIL: SQLUser.email,
    SortField.AGE: SQLUser.age,
    SortField.SALARY: SQLUser.salary,
    SortField.CREATED_AT: SQLUser.created_at,
}


class UserQueryBuilder:
    """Builds the count and page statements of a filtered user listing.

    Each supplied filter value adds exactly one predicate and predicates are
    ANDed. Values are always bound as parameters; substring fragments are
    matched case-insensitively with LIKE wildcards escaped. Both statements
    share the same predicate list, so the count always describes the set the
    page is cut from.
    """

    def __init__(self) -> None:
        self._conditions: List[ColumnElement[bool]] = []

    @classmethod
    def from_filter(cls, user_filter: UserFilter) -> "UserQueryBuilder":
        return (
            cls()
            .contains(SQLUser.name, user_filter.name)
            .contains(SQLUser.email, user_filter.email)
            .contains(SQLUser.department, user_filter.department)
            .equals(SQLUser.is_active, user_filter.is_active)
            .at_least(SQLUser.age, user_filter.min_age)
            .at_most(SQLUser.age, user_filter.max_age)
            .at_least(SQLUser.salary, user_filter.min_salary)
            .at_most(SQLUser.salary, user_filter.max_salary)
        )

    @property
    def conditions(self) -> Tuple[ColumnElement[bool], ...]:
        return tuple(self._conditions)

    def contains(self, column: Any, fragment: Optional[str]) -> "UserQueryBuilder":
        if fragment:
            self._conditions.append(column.icontains(fragment, autoescape=True))
        return self

    def equals(self, column: Any, value: Any) -> "UserQueryBuilder":
        # False is a real filter value, only None means "not supplied"
        if value is not None:
            self._conditions.append(column == value)
        return self

    def at_least(self, column: Any, bound: Optional[float]) -> "UserQueryBuilder":
        if bound is not None:
            self._conditions.append(column >= bound)
        return self

    def at_most(self, column: Any, bound: Optional[float]) -> "UserQueryBuilder":
        if bound is not None:
            self._conditions.append(column <= bound)
        return self

    def count_statement(self) -> Select:
        return select(func.count()).select_from(SQLUser).where(*self._conditions)

    def page_statement(
        self,
        *,
        sort_by: SortField = SortField.CREATED_AT,
        sort_order: SortOrder = SortOrder.DESC,
        offset: int = 0,
        limit: int = 10,
    ) -> Select:
        column = SORT_COLUMNS[sort_by]
        ordering = column.asc() if sort_order == SortOrder.ASC else column.desc()
        return select(SQLUser).where(*self._conditions).order_by(ordering).offset(offset).limit(limit)
