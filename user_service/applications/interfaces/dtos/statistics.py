from typing import Optional

from pydantic import BaseModel, ConfigDict


class StatisticsOverviewPublic(BaseModel):
    total_users: int
    active_users: int
    inactive_users: int
    # null means there was nothing to aggregate
    average_age: Optional[float] = None
    average_salary: Optional[float] = None
    min_salary: Optional[float] = None
    max_salary: Optional[float] = None
    model_config = ConfigDict(from_attributes=True)


class DepartmentStatisticsPublic(BaseModel):
    department: str
    user_count: int
    avg_salary: Optional[float] = None
    model_config = ConfigDict(from_attributes=True)


class UserStatisticsPublic(BaseModel):
    overview: StatisticsOverviewPublic
    by_department: list[DepartmentStatisticsPublic]
    model_config = ConfigDict(from_attributes=True)
