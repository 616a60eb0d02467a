# filmoteka/main.py
from __future__ import annotations

"""
# Filmoteka API: Application Entrypoint (FastAPI)

Application factory and lifecycle for the film/actor catalog.

## Design Goals
- Deterministic, testable **app factory** (`create_app`) with explicit lifespan.
- One **composition root** per app (`app.state.container`): engine, Redis,
  repositories and the session manager are built once and injected.
- Centralized exception handling rendering `application/problem+json`.
- Graceful local/dev behavior (best-effort Redis connect, never crash on import).

## Probes
- `/healthz`: liveness (process up).
- `/readyz`: readiness (DB `SELECT 1` + Redis `PING`).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from filmoteka.api.v1.routers import build_v1_router
from filmoteka.core.config import Settings, settings as default_settings
from filmoteka.core.container import Container
from filmoteka.core.exception_handlers import (
    app_exception_handler,
    global_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from filmoteka.core.exceptions import AppException
from filmoteka.core.logger import setup_logging
from filmoteka.db.session import db_healthcheck
from filmoteka.middleware.request_id import RequestIDMiddleware

logger = logging.getLogger("filmoteka")


# ─────────────────────────────────────────────────────────────────────────────
# 🔄 Lifespan: startup & shutdown
# ─────────────────────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Startup:
        - Best-effort connect to Redis (non-fatal; `/readyz` reports it).

    Shutdown:
        - Close Redis and dispose the DB engine.
    """
    container: Container = app.state.container
    logger.info("✅ %s starting up", container.settings.PROJECT_NAME)

    try:
        await container.startup()
    except RuntimeError:
        logger.exception("Redis connect failed (continuing in degraded mode)")

    try:
        yield
    finally:
        await container.shutdown()
        logger.info("🛑 %s shut down", container.settings.PROJECT_NAME)


# ─────────────────────────────────────────────────────────────────────────────
# 🏗️ App factory
# ─────────────────────────────────────────────────────────────────────────────
def create_app(settings: Optional[Settings] = None, container: Optional[Container] = None) -> FastAPI:
    """
    Build and configure the FastAPI app instance.

    Parameters
    ----------
    settings:
        Defaults to the module-level `filmoteka.core.config.settings`.
    container:
        Prebuilt dependency graph; when omitted one is built from `settings`
        (engine creation is lazy, nothing connects until first use).
    """
    setup_logging()
    settings = settings or (container.settings if container else default_settings)
    container = container or Container.from_settings(settings)

    docs_enabled = settings.ENABLE_DOCS
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan,
    )
    app.state.container = container

    # ── Middleware ──────────────────────────────────────────────────────────
    app.add_middleware(RequestIDMiddleware)

    # ── Exception handlers ──────────────────────────────────────────────────
    app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, global_exception_handler)  # type: ignore[arg-type]

    # ── Routers ─────────────────────────────────────────────────────────────
    app.include_router(build_v1_router(), prefix=settings.API_PREFIX)

    # ── Meta endpoints ──────────────────────────────────────────────────────
    @app.get("/healthz", tags=["meta"])
    async def healthz() -> dict[str, bool]:
        """Liveness probe; no external checks."""
        return {"ok": True}

    @app.get("/readyz", tags=["meta"])
    async def readyz() -> dict[str, object]:
        db_ok = await db_healthcheck(container.engine)
        redis_ok = await container.redis.is_connected()
        return {
            "ready": bool(db_ok and redis_ok),
            "checks": {"db": db_ok, "redis": redis_ok},
        }

    return app


# ─────────────────────────────────────────────────────────────────────────────
# 🚀 Module-level ASGI app for Uvicorn
# ─────────────────────────────────────────────────────────────────────────────
app = create_app()
