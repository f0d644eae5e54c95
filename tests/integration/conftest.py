"""Integration test fixtures.

Provides fixtures for integration testing with a real database and the
FastAPI app. Uses a SQLite in-memory database for fast, isolated tests.
"""

import os
from collections.abc import AsyncGenerator

# The app reads its settings at import time
TEST_SECRET_KEY = "integration-test-secret-key-at-least-32-chars"
os.environ.setdefault("SECRET_KEY", TEST_SECRET_KEY)
os.environ.setdefault("DB_CREATE_TABLES_ON_STARTUP", "false")

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from identity_service.infrastructure.persistence.database import (  # noqa: E402
    Base,
    create_session_factory,
)
from identity_service.infrastructure.persistence.models import identity_model  # noqa: E402, F401
from identity_service.infrastructure.repositories.credential_store_impl import (  # noqa: E402
    SqlAlchemyCredentialStore,
)
from identity_service.main import app  # noqa: E402
from identity_service.presentation.dependencies import get_session_factory  # noqa: E402

# Test database URL (SQLite in-memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine]:
    """Create a test database engine using SQLite in-memory."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop all tables after test
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def test_session_factory(
    test_engine: AsyncEngine,
) -> async_sessionmaker[AsyncSession]:
    """Create a test session factory."""
    return create_session_factory(test_engine)


@pytest_asyncio.fixture
async def credential_store(test_session_factory) -> SqlAlchemyCredentialStore:
    """Provide the real SQLAlchemy credential store over the test database."""
    return SqlAlchemyCredentialStore(test_session_factory)


@pytest_asyncio.fixture
async def client(test_session_factory) -> AsyncGenerator[AsyncClient]:
    """
    Create an HTTP client bound to the FastAPI app with the test database.

    This client uses the real application but with an in-memory database.
    """

    # Override the session factory dependency
    def override_get_session_factory():
        return test_session_factory

    app.dependency_overrides[get_session_factory] = override_get_session_factory

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as test_client:
        yield test_client

    # Clean up overrides
    app.dependency_overrides.clear()
