from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine

from user_service.infrastructure.config.settings import Settings
from user_service.infrastructure.logging.logger import Logger
from user_service.infrastructure.persistence.models import table_registry

logger = Logger.get_logger(__name__)


class _EngineStore:
    engine: Optional[AsyncEngine] = None


def set_engine(engine: AsyncEngine) -> None:
    _EngineStore.engine = engine


def get_engine() -> AsyncEngine:
    if _EngineStore.engine is None:
        settings = Settings()
        _EngineStore.engine = create_async_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
    return _EngineStore.engine


async def get_session():
    engine = get_engine()
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


async def create_tables(engine: AsyncEngine) -> None:
    """Create the users table (and its indexes) when missing."""
    async with engine.begin() as conn:
        await conn.run_sync(table_registry.metadata.create_all)
    logger.info("Database schema is up to date")


async def dispose_engine() -> None:
    if _EngineStore.engine is not None:
        await _EngineStore.engine.dispose()
        _EngineStore.engine = None
