from __future__ import annotations

"""
Film repository
===============

Operations
----------
- `create_film(draft, actor_ids)` → film row + `film_actor` links + cast reload
- `update_film(film_id, patch)`   → COALESCE update; `patch.actors` set ⇒ links
                                    replaced wholesale (empty list clears them)
- `delete_film(film_id)`          → DELETE; zero rows ⇒ `FilmNotFound`
- `get_films(query)`              → search by film or actor name, sort, then one
                                    bulk query for the casts of the returned films

Unknown actor ids surface as `ActorNotFound` through `is_actor_fk_violation`,
the only engine-specific piece of this module.
"""

from collections import defaultdict
from typing import Any, Callable, Dict, Iterable, List

from sqlalchemy import asc, delete, desc, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from filmoteka.core.exceptions import ActorNotFound, FilmNotFound, RepositoryError
from filmoteka.db.models import FILM_ACTOR_ACTOR_FK, film_actor
from filmoteka.domain.entities import Actor, FilmDraft, FilmPatch, FilmQuery, FilmWithActors
from filmoteka.domain.types import Id, Order, OrderField, SearchField
from filmoteka.repositories.base import (
    ACTOR_COLUMNS,
    FILM_COLUMNS,
    SqlRepository,
    actor_from_row,
    actors,
    coalesce_patch,
    film_from_row,
    films,
    logger,
)

_PATCH_FIELDS = ("name", "description", "publish_date", "rating")

# Only these columns and directions may reach ORDER BY
_ORDER_COLUMNS = {
    OrderField.RATING: films.c.rating,
    OrderField.NAME: films.c.name,
    OrderField.PUBLISH_DATE: films.c.publish_date,
}
_DIRECTIONS: Dict[Order, Callable[[Any], Any]] = {Order.ASC: asc, Order.DESC: desc}

_PG_FOREIGN_KEY_VIOLATION = "23503"
_SQLITE_FOREIGN_KEY_MESSAGE = "FOREIGN KEY constraint failed"


def is_actor_fk_violation(exc: IntegrityError) -> bool:
    """True when `exc` is the film_actor → actors foreign-key violation.

    PostgreSQL (asyncpg) reports SQLSTATE 23503 plus the constraint name;
    SQLite only reports a generic message, and the only FK a link insert can
    break there is the actor one (the film row was written in the same
    transaction).
    """
    orig = exc.orig
    cause = getattr(orig, "__cause__", None)
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None) or getattr(cause, "sqlstate", None)
    if sqlstate is not None:
        if sqlstate != _PG_FOREIGN_KEY_VIOLATION:
            return False
        constraint = getattr(cause, "constraint_name", None) or getattr(orig, "constraint_name", None)
        return constraint is None or constraint == FILM_ACTOR_ACTOR_FK
    return _SQLITE_FOREIGN_KEY_MESSAGE in str(orig)


def order_clause(field: OrderField, order: Order):
    try:
        column = _ORDER_COLUMNS[OrderField(field)]
        direction = _DIRECTIONS[Order(order)]
    except (KeyError, ValueError) as exc:
        raise ValueError(f"unsupported ordering {field!r} {order!r}") from exc
    return direction(column)


class FilmRepository(SqlRepository):
    async def create_film(self, draft: FilmDraft, actor_ids: Iterable[Id] = ()) -> FilmWithActors:
        stmt = (
            insert(films)
            .values(
                name=draft.name,
                description=draft.description,
                publish_date=draft.publish_date,
                rating=draft.rating,
            )
            .returning(*FILM_COLUMNS)
        )
        ids = list(actor_ids)
        async with self._transaction("create film") as session:
            row = (await session.execute(stmt)).one_or_none()
            if row is None:
                raise RepositoryError("create film: insert returned no row")
            if ids:
                await self._link_actors(session, row.id, ids)
            cast = await self._film_actors(session, row.id)

        return FilmWithActors(**vars(film_from_row(row)), actors=cast)

    async def update_film(self, film_id: Id, patch: FilmPatch) -> FilmWithActors:
        stmt = (
            update(films)
            .where(films.c.id == film_id)
            .values(**coalesce_patch(films, patch, _PATCH_FIELDS))
            .returning(*FILM_COLUMNS)
        )
        async with self._transaction("update film") as session:
            row = (await session.execute(stmt)).one_or_none()
            if row is None:
                raise FilmNotFound()
            if patch.update_actors:
                await session.execute(delete(film_actor).where(film_actor.c.film_id == film_id))
                if patch.actors:
                    await self._link_actors(session, film_id, patch.actors)  # type: ignore[arg-type]
            cast = await self._film_actors(session, film_id)

        return FilmWithActors(**vars(film_from_row(row)), actors=cast)

    async def delete_film(self, film_id: Id) -> None:
        async with self._transaction("delete film") as session:
            result = await session.execute(delete(films).where(films.c.id == film_id))
            if result.rowcount < 1:
                raise FilmNotFound()

    async def get_films(self, query: FilmQuery) -> List[FilmWithActors]:
        """Films matching `query`, sorted server-side, each with its cast."""
        if query.search_field is SearchField.ACTOR:
            stmt = (
                select(*FILM_COLUMNS)
                .distinct()
                .join_from(films, film_actor, films.c.id == film_actor.c.film_id)
                .join(actors, actors.c.id == film_actor.c.actor_id)
                .where(actors.c.name.contains(query.pattern, autoescape=True))
            )
        else:
            stmt = select(*FILM_COLUMNS).where(films.c.name.contains(query.pattern, autoescape=True))
        stmt = stmt.order_by(order_clause(query.order_field, query.order), films.c.id)

        async with self._transaction("get films") as session:
            film_rows = (await session.execute(stmt)).all()
            if not film_rows:
                return []
            casts = await self._casts(session, [r.id for r in film_rows])

        return [
            FilmWithActors(**vars(film_from_row(r)), actors=casts.get(r.id, []))
            for r in film_rows
        ]

    # ── helpers ───────────────────────────────────────────────
    @staticmethod
    async def _link_actors(session: AsyncSession, film_id: Id, actor_ids: Iterable[Id]) -> None:
        rows = [{"film_id": film_id, "actor_id": actor_id} for actor_id in dict.fromkeys(actor_ids)]
        try:
            await session.execute(insert(film_actor), rows)
        except IntegrityError as exc:
            if is_actor_fk_violation(exc):
                logger.info("film %s references a missing actor: %s", film_id, exc.orig)
                raise ActorNotFound() from exc
            raise

    @staticmethod
    async def _film_actors(session: AsyncSession, film_id: Id) -> List[Actor]:
        stmt = (
            select(*ACTOR_COLUMNS)
            .join_from(film_actor, actors, actors.c.id == film_actor.c.actor_id)
            .where(film_actor.c.film_id == film_id)
            .order_by(actors.c.id)
        )
        return [actor_from_row(r) for r in (await session.execute(stmt)).all()]

    @staticmethod
    async def _casts(session: AsyncSession, film_ids: List[Id]) -> Dict[Id, List[Actor]]:
        stmt = (
            select(film_actor.c.film_id, *ACTOR_COLUMNS)
            .join_from(film_actor, actors, actors.c.id == film_actor.c.actor_id)
            .where(film_actor.c.film_id.in_(film_ids))
            .order_by(film_actor.c.film_id, actors.c.id)
        )
        grouped: Dict[Id, List[Actor]] = defaultdict(list)
        for row in (await session.execute(stmt)).all():
            grouped[row.film_id].append(actor_from_row(row))
        return grouped


__all__ = ["FilmRepository", "is_actor_fk_violation", "order_clause"]
