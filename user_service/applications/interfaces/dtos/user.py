from datetime import datetime
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _two_decimals(value: Optional[float]) -> Optional[float]:
    return round(value, 2) if value is not None else None


Department = Annotated[Optional[str], Field(max_length=50), AfterValidator(_blank_to_none)]
Salary = Annotated[Optional[float], Field(ge=0, le=999999.99), AfterValidator(_two_decimals)]


class UserSchema(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    age: Optional[int] = Field(default=None, ge=16, le=120)
    department: Department = None
    salary: Salary = None


class UserUpdateSchema(BaseModel):
    """Partial update: only the fields present in the request body are applied."""

    name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    email: Optional[EmailStr] = None
    age: Optional[int] = Field(default=None, ge=16, le=120)
    department: Department = None
    salary: Salary = None
    is_active: Optional[bool] = None


class UserPublic(BaseModel):
    id: int
    name: str
    email: str
    age: Optional[int] = None
    department: Optional[str] = None
    salary: Optional[float] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class PaginationPublic(BaseModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next: bool
    has_prev: bool
    model_config = ConfigDict(from_attributes=True)


class UserList(BaseModel):
    data: list[UserPublic]
    pagination: PaginationPublic
