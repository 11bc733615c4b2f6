import math
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from user_service.domain.models.user import User


class SortField(str, Enum):
    NAME = "name"
    EMAIL = "email"
    AGE = "age"
    SALARY = "salary"
    CREATED_AT = "created_at"


class SortOrder(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


class UserFilter(BaseModel):
    """Optional predicates plus the sort and page window of a user list query.

    Values are expected to be validated already; ranges are not re-checked here.
    """

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    email: Optional[str] = None
    department: Optional[str] = None
    is_active: Optional[bool] = None
    min_age: Optional[int] = None
    max_age: Optional[int] = None
    min_salary: Optional[float] = None
    max_salary: Optional[float] = None
    page: int = 1
    limit: int = 10
    sort_by: SortField = SortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class Pagination(BaseModel):
    model_config = ConfigDict(frozen=True)

    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next: bool
    has_prev: bool

    @classmethod
    def from_totals(cls, *, total_items: int, page: int, limit: int) -> "Pagination":
        total_pages = math.ceil(total_items / limit) if total_items else 0
        return cls(
            current_page=page,
            total_pages=total_pages,
            total_items=total_items,
            items_per_page=limit,
            has_next=page < total_pages,
            has_prev=page > 1,
        )


class UserPage(BaseModel):
    data: List[User] = Field(default_factory=list)
    pagination: Pagination


class StatisticsOverview(BaseModel):
    """Aggregates over every stored user.

    Averages, minimum and maximum are None when there are no values to
    aggregate, which keeps "no data" apart from a real average of zero.
    """

    total_users: int = 0
    active_users: int = 0
    inactive_users: int = 0
    average_age: Optional[float] = None
    average_salary: Optional[float] = None
    min_salary: Optional[float] = None
    max_salary: Optional[float] = None


class DepartmentStatistics(BaseModel):
    department: str
    user_count: int
    avg_salary: Optional[float] = None


class UserStatistics(BaseModel):
    overview: StatisticsOverview
    by_department: List[DepartmentStatistics] = Field(default_factory=list)
