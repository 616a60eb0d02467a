# tests/fixtures/redis.py
"""
🔌 Redis fixtures
- `mock_redis`: the in-memory client, for direct inspection in tests
- `redis_client`: a real `RedisClient` manager with the mock plugged in
- `session_store`: `RedisSessionStore` on top of it
"""

import pytest

from filmoteka.core.redis_client import RedisClient
from filmoteka.repositories import RedisSessionStore
from tests.fixtures.mocks.redis import MockRedisClient


@pytest.fixture()
def mock_redis() -> MockRedisClient:
    return MockRedisClient()


@pytest.fixture()
def redis_client(mock_redis: MockRedisClient) -> RedisClient:
    client = RedisClient("redis://mock:6379/0")
    client._client = mock_redis  # `client` only builds a pool when none is set
    return client


@pytest.fixture()
def session_store(redis_client: RedisClient) -> RedisSessionStore:
    return RedisSessionStore(redis_client)
