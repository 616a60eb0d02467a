from __future__ import annotations

"""
Actor repository
================

Operations
----------
- `create_actor(draft)`            → single INSERT … RETURNING
- `update_actor(actor_id, patch)`  → COALESCE update + film list, one transaction
- `delete_actor(actor_id)`         → DELETE; zero rows ⇒ `ActorNotFound`
- `get_actors()`                   → actors + all (actor, film) pairs, one snapshot

Film links are removed by the `film_actor` FK cascade on delete.
"""

from collections import defaultdict
from typing import Dict, List

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from filmoteka.core.exceptions import ActorNotFound, RepositoryError
from filmoteka.db.models import film_actor
from filmoteka.domain.entities import ActorDraft, Actor, ActorPatch, ActorWithFilms, Film
from filmoteka.domain.types import Id
from filmoteka.repositories.base import (
    ACTOR_COLUMNS,
    FILM_COLUMNS,
    SqlRepository,
    actor_from_row,
    actors,
    coalesce_patch,
    film_from_row,
    films,
)

_PATCH_FIELDS = ("name", "sex", "birthday")


class ActorRepository(SqlRepository):
    async def create_actor(self, draft: ActorDraft) -> Actor:
        stmt = (
            insert(actors)
            .values(name=draft.name, sex=draft.sex, birthday=draft.birthday)
            .returning(*ACTOR_COLUMNS)
        )
        async with self._transaction("create actor") as session:
            row = (await session.execute(stmt)).one_or_none()
            if row is None:
                raise RepositoryError("create actor: insert returned no row")
        return actor_from_row(row)

    async def update_actor(self, actor_id: Id, patch: ActorPatch) -> ActorWithFilms:
        """Apply the supplied fields and return the actor with its films.

        Raises `ActorNotFound` (after rollback) when no row has `actor_id`.
        """
        stmt = (
            update(actors)
            .where(actors.c.id == actor_id)
            .values(**coalesce_patch(actors, patch, _PATCH_FIELDS))
            .returning(*ACTOR_COLUMNS)
        )
        async with self._transaction("update actor") as session:
            row = (await session.execute(stmt)).one_or_none()
            if row is None:
                raise ActorNotFound()
            filmography = await self._actor_films(session, actor_id)

        actor = actor_from_row(row)
        return ActorWithFilms(**vars(actor), films=filmography)

    async def delete_actor(self, actor_id: Id) -> None:
        async with self._transaction("delete actor") as session:
            result = await session.execute(delete(actors).where(actors.c.id == actor_id))
            if result.rowcount < 1:
                raise ActorNotFound()

    async def get_actors(self) -> List[ActorWithFilms]:
        """All actors in id order, each with its (possibly empty) film list."""
        links_stmt = (
            select(film_actor.c.actor_id, *FILM_COLUMNS)
            .join_from(film_actor, films, films.c.id == film_actor.c.film_id)
            .order_by(film_actor.c.actor_id, films.c.id)
        )
        async with self._transaction("get actors") as session:
            actor_rows = (await session.execute(select(*ACTOR_COLUMNS).order_by(actors.c.id))).all()
            link_rows = (await session.execute(links_stmt)).all()

        by_actor: Dict[Id, List[Film]] = defaultdict(list)
        for link in link_rows:
            by_actor[link.actor_id].append(film_from_row(link))

        result: List[ActorWithFilms] = []
        for row in actor_rows:
            actor = actor_from_row(row)
            result.append(ActorWithFilms(**vars(actor), films=list(by_actor.get(actor.id, []))))
        return result

    # ── helpers ───────────────────────────────────────────────
    @staticmethod
    async def _actor_films(session: AsyncSession, actor_id: Id) -> List[Film]:
        stmt = (
            select(*FILM_COLUMNS)
            .join_from(film_actor, films, films.c.id == film_actor.c.film_id)
            .where(film_actor.c.actor_id == actor_id)
            .order_by(films.c.id)
        )
        return [film_from_row(r) for r in (await session.execute(stmt)).all()]


__all__ = ["ActorRepository"]
