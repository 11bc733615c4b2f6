from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class User(BaseModel):
    name: str
    email: str
    age: Optional[int] = None
    department: Optional[str] = None
    salary: Optional[float] = None
    is_active: bool = True
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
