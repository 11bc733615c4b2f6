from datetime import datetime
from typing import Optional

from sqlalchemy import Numeric, String, func, true
from sqlalchemy.orm import Mapped, mapped_column, registry

table_registry = registry()


@table_registry.mapped_as_dataclass
class User:
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(init=False, primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True)
    age: Mapped[Optional[int]] = mapped_column(default=None)
    department: Mapped[Optional[str]] = mapped_column(String(50), default=None, index=True)
    salary: Mapped[Optional[float]] = mapped_column(Numeric(10, 2, asdecimal=False), default=None)
    is_active: Mapped[bool] = mapped_column(default=True, server_default=true(), index=True)

    created_at: Mapped[datetime] = mapped_column(init=False, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(init=False, server_default=func.now(), onupdate=func.now())
