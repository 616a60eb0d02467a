from __future__ import annotations

"""
Shared plumbing for the relational repositories.

- `SqlRepository._transaction()` opens one session + transaction per
  operation. Domain errors raised inside pass through untouched (after the
  rollback); SQLAlchemy failures, including commit failures, come out as
  `RepositoryError` chained to the driver error.
- Column tuples and row mappers keep SELECT/RETURNING lists in one place.
- `coalesce_patch()` builds the "keep the stored value when the field was
  not supplied" expressions used by partial updates.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Iterable, Mapping

from sqlalchemy import ColumnElement, Table, func, literal
from sqlalchemy.engine import Row
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from filmoteka.core.exceptions import CatalogError, RepositoryError
from filmoteka.db.models import ActorModel, FilmModel, UserModel
from filmoteka.domain.entities import Actor, Film, User
from filmoteka.domain.types import UNSET, Role, Sex

logger = logging.getLogger("filmoteka.repositories")

actors: Table = ActorModel.__table__  # type: ignore[assignment]
films: Table = FilmModel.__table__  # type: ignore[assignment]
users: Table = UserModel.__table__  # type: ignore[assignment]

ACTOR_COLUMNS = (actors.c.id, actors.c.name, actors.c.sex, actors.c.birthday)
FILM_COLUMNS = (films.c.id, films.c.name, films.c.description, films.c.publish_date, films.c.rating)
USER_COLUMNS = (users.c.id, users.c.login, users.c.role)


# ─────────────────────────────────────────────────────────────
# Row mappers
# ─────────────────────────────────────────────────────────────
def actor_from_row(row: Row[Any] | Mapping[str, Any]) -> Actor:
    m = row._mapping if isinstance(row, Row) else row
    return Actor(id=m["id"], name=m["name"], sex=Sex(m["sex"]), birthday=m["birthday"])


def film_from_row(row: Row[Any] | Mapping[str, Any]) -> Film:
    m = row._mapping if isinstance(row, Row) else row
    return Film(
        id=m["id"],
        name=m["name"],
        description=m["description"],
        publish_date=m["publish_date"],
        rating=m["rating"],
    )


def user_from_row(row: Row[Any]) -> User:
    return User(id=row.id, login=row.login, role=Role(row.role))


# ─────────────────────────────────────────────────────────────
# Partial updates
# ─────────────────────────────────────────────────────────────
def coalesce_patch(table: Table, patch: object, fields: Iterable[str]) -> dict[str, ColumnElement[Any]]:
    """`{field: COALESCE(:value, table.field)}` for every field of the patch.

    `UNSET` binds as NULL, so an empty patch is an identity update that still
    matches (and counts) the target row.
    """
    values: dict[str, ColumnElement[Any]] = {}
    for name in fields:
        value = getattr(patch, name)
        column = table.c[name]
        values[name] = func.coalesce(literal(None if value is UNSET else value, column.type), column)
    return values


# ─────────────────────────────────────────────────────────────
# Base repository
# ─────────────────────────────────────────────────────────────
class SqlRepository:
    """Holds the session factory; subclasses implement the operations."""

    def __init__(self, sessions: async_sessionmaker[AsyncSession]) -> None:
        self._sessions = sessions

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncIterator[AsyncSession]:
        try:
            async with self._sessions.begin() as session:
                yield session
        except CatalogError:
            raise
        except SQLAlchemyError as exc:
            logger.error("%s failed: %s", operation, exc)
            raise RepositoryError(f"{operation}: {exc}") from exc


__all__ = [
    "actors",
    "films",
    "users",
    "ACTOR_COLUMNS",
    "FILM_COLUMNS",
    "USER_COLUMNS",
    "actor_from_row",
    "film_from_row",
    "user_from_row",
    "coalesce_patch",
    "SqlRepository",
]
