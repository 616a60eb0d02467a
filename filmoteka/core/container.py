# filmoteka/core/container.py
from __future__ import annotations

"""
Composition root
================
Builds every long-lived handle once per application and hands them out by
reference; nothing below this module reaches for a global.

    container = Container.from_settings(settings)
    app.state.container = container      # done by create_app()

Tests build one with `Container.build(engine=..., redis=...)` to plug in an
SQLite engine and a mocked Redis client.
"""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine

from filmoteka.core.config import Settings
from filmoteka.core.redis_client import RedisClient
from filmoteka.db.session import build_engine, build_session_maker
from filmoteka.repositories import ActorRepository, FilmRepository, RedisSessionStore, UserRepository
from filmoteka.services.auth import SessionManager


@dataclass
class Container:
    settings: Settings
    engine: AsyncEngine
    redis: RedisClient
    actors: ActorRepository
    films: FilmRepository
    users: UserRepository
    sessions: RedisSessionStore
    auth: SessionManager

    @classmethod
    def build(cls, settings: Settings, *, engine: AsyncEngine, redis: RedisClient) -> "Container":
        session_maker = build_session_maker(engine)
        users = UserRepository(session_maker)
        sessions = RedisSessionStore(redis)
        return cls(
            settings=settings,
            engine=engine,
            redis=redis,
            actors=ActorRepository(session_maker),
            films=FilmRepository(session_maker),
            users=users,
            sessions=sessions,
            auth=SessionManager(users, sessions, ttl=settings.session_ttl),
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Container":
        return cls.build(settings, engine=build_engine(settings), redis=RedisClient.from_settings(settings))

    async def startup(self) -> None:
        await self.redis.connect()

    async def shutdown(self) -> None:
        await self.redis.close()
        await self.engine.dispose()


__all__ = ["Container"]
