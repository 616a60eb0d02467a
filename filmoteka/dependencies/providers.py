# filmoteka/dependencies/providers.py
from __future__ import annotations

"""
Request-scoped access to the composition root.

`create_app()` stores a `Container` on `app.state.container`; routes ask for
the pieces they need through these providers instead of importing globals,
so tests can swap the whole graph by building the app with their own
container.
"""

from fastapi import Depends, Request

from filmoteka.core.config import Settings
from filmoteka.core.container import Container
from filmoteka.repositories import ActorRepository, FilmRepository, UserRepository
from filmoteka.services.auth import SessionManager


def get_container(request: Request) -> Container:
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise RuntimeError("Application container is not configured; build the app with create_app().")
    return container


def get_settings(container: Container = Depends(get_container)) -> Settings:
    return container.settings


def get_actor_repository(container: Container = Depends(get_container)) -> ActorRepository:
    return container.actors


def get_film_repository(container: Container = Depends(get_container)) -> FilmRepository:
    return container.films


def get_user_repository(container: Container = Depends(get_container)) -> UserRepository:
    return container.users


def get_session_manager(container: Container = Depends(get_container)) -> SessionManager:
    return container.auth


__all__ = [
    "get_container",
    "get_settings",
    "get_actor_repository",
    "get_film_repository",
    "get_user_repository",
    "get_session_manager",
]
