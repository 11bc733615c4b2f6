from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from user_service.app import app
from user_service.domain.ports.repositories.user_repository import UserRepository
from user_service.infrastructure.adapters.repositories.sqlalchemy_user_repository import (
    SQLAlchemyUserRepository,
)
from user_service.infrastructure.persistence.database import get_session
from user_service.infrastructure.persistence.models import table_registry

from .factories import user_factory

SQLITE_URL = "sqlite+aiosqlite://"


class BaseIntegrationTest:
    """Base class for integration tests running against an in-memory SQLite store"""

    @pytest_asyncio.fixture
    async def engine(self):
        """Create test database engine"""
        engine = create_async_engine(SQLITE_URL, poolclass=StaticPool, connect_args={"check_same_thread": False})

        async with engine.begin() as conn:
            await conn.run_sync(table_registry.metadata.create_all)

        yield engine

        async with engine.begin() as conn:
            await conn.run_sync(table_registry.metadata.drop_all)
        await engine.dispose()

    @pytest_asyncio.fixture
    async def test_session(self, engine):
        """Create test database session"""
        async with AsyncSession(engine, expire_on_commit=False) as session:
            yield session

    @pytest.fixture
    def user_repository(self, test_session):
        return SQLAlchemyUserRepository(test_session)

    @pytest_asyncio.fixture
    async def client(self, test_session):
        """Create test HTTP client with database override"""

        async def override_get_session():
            yield test_session

        app.dependency_overrides[get_session] = override_get_session

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac

        app.dependency_overrides.clear()


@pytest.fixture
def mock_user_repository():
    """Mock user repository for use case testing"""
    return AsyncMock(spec=UserRepository)


@pytest.fixture
def sample_user():
    return user_factory.create_domain_user(id=1)
