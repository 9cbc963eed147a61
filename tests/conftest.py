"""Pytest configuration and fixtures for cachedrepo.

In-memory collaborators come from tests.fakes; SQLAlchemy tests run on an
async in-memory SQLite engine. All imports use cachedrepo.*.
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from cachedrepo.core.config import get_settings
from cachedrepo.infrastructure.persistence.database import Base
from tests.fakes import FakeArticleStore, FakeCache


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    """Isolate tests from a local .env and clear the settings cache."""
    monkeypatch.chdir("/")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def cache() -> FakeCache:
    return FakeCache()


@pytest.fixture
def store() -> FakeArticleStore:
    return FakeArticleStore()


@pytest.fixture
async def engine():
    """Async in-memory SQLite engine with all tables created."""
    eng = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield eng
    finally:
        await eng.dispose()


@pytest.fixture
async def db_session(engine) -> AsyncSession:
    """Session for repository tests. Rolls back after test."""
    session_factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session
        await session.rollback()
