from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from user_service.domain.ports.repositories.user_repository import UserRepository
from user_service.infrastructure.adapters.repositories.sqlalchemy_user_repository import (
    SQLAlchemyUserRepository,
)
from user_service.infrastructure.config.settings import Settings
from user_service.infrastructure.persistence.database import get_session


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def get_user_repository(session: Annotated[AsyncSession, Depends(get_session)]) -> UserRepository:
    return SQLAlchemyUserRepository(session)
