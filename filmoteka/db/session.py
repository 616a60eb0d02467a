# filmoteka/db/session.py
from __future__ import annotations

"""
Filmoteka: Database Engine & Session Factory

- One pooled async engine per process, created by the composition root.
- Repositories receive an `async_sessionmaker` and open exactly one
  transaction per operation (`async with sessions.begin() as session`).
- SQLite connections get `PRAGMA foreign_keys=ON` so association writes hit
  the same FK checks as PostgreSQL.
"""

import logging
from typing import Any

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from filmoteka.core.config import Settings

logger = logging.getLogger("filmoteka.db")


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine_from_url(url: str, **engine_kwargs: Any) -> AsyncEngine:
    """Build an async engine; SQLite URLs get the FK pragma hook."""
    engine = create_async_engine(url, **engine_kwargs)
    if make_url(url).get_backend_name() == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def build_engine(settings: Settings) -> AsyncEngine:
    """Async engine configured from settings (pool knobs skipped for SQLite)."""
    url = settings.ASYNC_DATABASE_URL
    kwargs: dict[str, Any] = {"echo": settings.DB_ECHO}
    if make_url(url).get_backend_name() != "sqlite":
        kwargs.update(
            pool_pre_ping=True,
            pool_recycle=settings.DB_POOL_RECYCLE,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
        )
    return create_engine_from_url(url, **kwargs)


def build_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def db_healthcheck(engine: AsyncEngine) -> bool:
    """Quick SELECT 1 to verify DB connectivity (used by /readyz)."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception:
        logger.exception("DB healthcheck failed")
        return False


__all__ = [
    "create_engine_from_url",
    "build_engine",
    "build_session_maker",
    "db_healthcheck",
]
