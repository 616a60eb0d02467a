# tests/fixtures/db.py
"""
DB fixtures for tests (async, SQLite in memory):
- One StaticPool connection per test so every session sees the same database
- Foreign keys enforced (`create_engine_from_url` installs the pragma hook)
- Tables created before and dropped after each test
- Repositories wired to the per-test session factory
"""

from typing import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from filmoteka.db import base
from filmoteka.db.session import build_session_maker, create_engine_from_url
from filmoteka.repositories import ActorRepository, FilmRepository, UserRepository

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture(scope="session", autouse=True)
def anyio_backend():
    return "asyncio"


@pytest.fixture()
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database with the full schema."""
    engine = create_engine_from_url(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(base.Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(base.Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture()
def session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return build_session_maker(engine)


@pytest.fixture()
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    """Plain session for tests that inspect tables directly."""
    async with session_maker() as session:
        yield session


@pytest.fixture()
def actor_repo(session_maker) -> ActorRepository:
    return ActorRepository(session_maker)


@pytest.fixture()
def film_repo(session_maker) -> FilmRepository:
    return FilmRepository(session_maker)


@pytest.fixture()
def user_repo(session_maker) -> UserRepository:
    return UserRepository(session_maker)
