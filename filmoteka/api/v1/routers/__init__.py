"""
🧭 Filmoteka • API v1 Router Aggregator
======================================

    from filmoteka.api.v1.routers import build_v1_router
    app.include_router(build_v1_router(), prefix=settings.API_PREFIX)

Session and role checks live in the child routers (see
`filmoteka.dependencies.auth`); this module only composes them.
"""

from fastapi import APIRouter

from .actors import router as actors_router
from .auth import router as auth_router
from .films import router as films_router
from .users import router as users_router


def build_v1_router() -> APIRouter:
    router = APIRouter()
    router.include_router(auth_router)
    router.include_router(actors_router)
    router.include_router(films_router)
    router.include_router(users_router)
    return router


router = build_v1_router()

__all__ = ["router", "build_v1_router", "actors_router", "films_router", "users_router", "auth_router"]
