# tests/fixtures/app.py

"""
🧩 App Fixture:
- Builds the real app through `create_app()` with a test container
  (in-memory SQLite engine + mocked Redis)
- Returns HTTP client fixtures for integration tests
"""

from typing import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from filmoteka.core.config import Settings
from filmoteka.core.container import Container
from filmoteka.main import create_app

BASE_URL = "http://test"


@pytest.fixture()
def test_settings() -> Settings:
    return Settings(
        ENV="development",
        API_PREFIX="/api",
        DATABASE_URL_OVERRIDE="sqlite+aiosqlite://",
        SESSION_TTL_HOURS=48,
    )


@pytest.fixture()
def container(test_settings, engine, redis_client) -> Container:
    return Container.build(test_settings, engine=engine, redis=redis_client)


@pytest.fixture()
def app(test_settings, container) -> FastAPI:
    """🧪 The production app factory wired to test infrastructure."""
    return create_app(settings=test_settings, container=container)


def make_client(app: FastAPI) -> AsyncClient:
    # raise_app_exceptions=False: let the 500 handler's response reach the test
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    return AsyncClient(transport=transport, base_url=BASE_URL)


@pytest.fixture()
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """
    🌐 Anonymous async HTTP client.
    """
    async with make_client(app) as client:
        yield client
