from typing import Optional

from pydantic import BaseModel, Field, model_validator

from user_service.domain.models.user_query import SortField, SortOrder, UserFilter


class UserFilterPage(BaseModel):
    name: Optional[str] = Field(default=None, max_length=100, description="Substring of the user name")
    email: Optional[str] = Field(default=None, max_length=320, description="Substring of the email")
    department: Optional[str] = Field(default=None, max_length=50, description="Substring of the department")
    is_active: Optional[bool] = Field(default=None, description="Only active (true) or inactive (false) users")
    min_age: Optional[int] = Field(default=None, ge=0, le=120)
    max_age: Optional[int] = Field(default=None, ge=0, le=120)
    min_salary: Optional[float] = Field(default=None, ge=0)
    max_salary: Optional[float] = Field(default=None, ge=0)
    page: int = Field(default=1, ge=1, description="Page number, starting at 1")
    limit: int = Field(default=10, ge=1, le=100, description="Maximum number of items per page")
    sort_by: SortField = SortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC

    @model_validator(mode="after")
    def check_ranges(self) -> "UserFilterPage":
        if self.min_age is not None and self.max_age is not None and self.min_age > self.max_age:
            raise ValueError("Maximum age must be greater than minimum age")
        if self.min_salary is not None and self.max_salary is not None and self.min_salary > self.max_salary:
            raise ValueError("Maximum salary must be greater than minimum salary")
        return self

    def to_domain(self) -> UserFilter:
        return UserFilter(**self.model_dump())
