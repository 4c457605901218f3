"""
Pytest configuration and fixtures for testing.

Integration tests run against an in-memory SQLite database through
aiosqlite; every test gets a fresh database.
"""

import os
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlmodel.pool import StaticPool

# Keep the import-time engine in memory and the error log out of the tree
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FILE_PATH", os.devnull)

from sqlpager.settings import settings  # noqa: E402
from tests.mocks.models import PAGINATED_MODELS  # noqa: E402


@pytest_asyncio.fixture
async def engine():
    """Create in-memory SQLite engine with all test tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine):
    """Create database session for testing."""
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


@pytest_asyncio.fixture
async def seeded_session(session):
    """
    Session over 100 users and 100 devices.

    Names run user001..user100 and ages are ``i // 10`` (0..10).
    """
    for model in PAGINATED_MODELS:
        session.add_all(
            [model(name=f"user{i:03d}", age=i // 10) for i in range(1, 101)]
        )
    await session.commit()
    return session


@pytest.fixture(autouse=True)
def reset_pagination_settings():
    """Restore global and per-model pagination settings after each test."""
    snapshot = {
        "DEFAULT_PER_PAGE": settings.DEFAULT_PER_PAGE,
        "MAX_PER_PAGE": settings.MAX_PER_PAGE,
        "MAX_PAGES": settings.MAX_PAGES,
        "PAGE_METHOD_NAME": settings.PAGE_METHOD_NAME,
        "PARAM_NAME": settings.PARAM_NAME,
    }
    yield
    for name, value in snapshot.items():
        setattr(settings, name, value)
    for model in PAGINATED_MODELS:
        model.reset_pagination()


@pytest.fixture
def mock_db_session():
    """
    Provides a mock AsyncSession.

    ``exec`` is an AsyncMock; tests set ``side_effect`` to a list of
    result mocks built with
    ``tests.mocks.session_mocks.make_result``.
    """
    session = AsyncMock()
    session.exec = AsyncMock()
    return session

