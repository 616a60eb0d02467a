# filmoteka/core/redis_client.py
from __future__ import annotations

"""
Redis handle for the session store.

`RedisClient` owns one pooled `redis.asyncio.Redis`. The pool is created
lazily on first access, so a Redis outage at startup does not break the app:
commands issued later simply fail with `RedisError`, which the session store
turns into `SessionStoreError`.

    rc = RedisClient.from_settings(settings)
    await rc.connect()          # optional warm-up with retries
    await rc.client.get("k")
    await rc.close()
"""

import asyncio
import logging
from typing import Any, Optional, Protocol

import redis.asyncio as redis
from redis.exceptions import RedisError

from filmoteka.core.config import Settings

logger = logging.getLogger("filmoteka.redis")


class SessionRedis(Protocol):
    """The subset of commands the catalog uses."""

    async def ping(self) -> Any: ...
    async def set(self, name: str, value: Any, *, ex: Optional[int] = None) -> Any: ...
    async def getex(self, name: str, *, ex: Optional[int] = None) -> Any: ...
    async def delete(self, *names: Any) -> Any: ...
    async def close(self) -> Any: ...


class RedisClient:
    def __init__(
        self,
        url: str,
        *,
        connect_attempts: int = 5,
        socket_timeout: float = 3.0,
        max_connections: int = 64,
    ) -> None:
        self.url = url.strip()
        self.connect_attempts = connect_attempts
        self.socket_timeout = socket_timeout
        self.max_connections = max_connections
        self._client: Optional[SessionRedis] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "RedisClient":
        return cls(
            settings.REDIS_URL,
            connect_attempts=settings.REDIS_CONNECT_ATTEMPTS,
            socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
            max_connections=settings.REDIS_MAX_CONNECTIONS,
        )

    @property
    def client(self) -> SessionRedis:
        if self._client is None:
            self._client = redis.Redis.from_url(
                self.url,
                decode_responses=True,
                socket_timeout=self.socket_timeout,
                socket_connect_timeout=self.socket_timeout,
                max_connections=self.max_connections,
                health_check_interval=30,
            )
        return self._client

    async def connect(self) -> None:
        """
        Ping until Redis answers.

        Waits 0.2s, 0.4s, 0.8s ... (capped at 2s) between attempts and raises
        `RuntimeError` once `connect_attempts` pings have failed.
        """
        last_err: Optional[Exception] = None
        for attempt in range(1, self.connect_attempts + 1):
            try:
                await self.client.ping()
                logger.info("✅ Redis reachable at %s", self._safe_url())
                return
            except (RedisError, OSError) as e:
                last_err = e
                delay = min(2.0, 0.2 * 2 ** (attempt - 1))
                logger.warning("Redis ping %s/%s failed: %r", attempt, self.connect_attempts, e)
                if attempt < self.connect_attempts:
                    await asyncio.sleep(delay)
        raise RuntimeError("Redis unreachable") from last_err

    async def close(self) -> None:
        client, self._client = self._client, None
        if client is None:
            return
        try:
            await client.close()
        except RedisError as e:
            logger.warning("Error closing Redis pool: %s", e)

    async def is_connected(self) -> bool:
        """Readiness check: True when `PING` succeeds right now."""
        try:
            return bool(await self.client.ping())
        except (RedisError, OSError):
            return False

    def _safe_url(self) -> str:
        # hide credentials in logs
        head, sep, tail = self.url.rpartition("@")
        return f"redis://***@{tail}" if sep else self.url


__all__ = ["RedisClient", "SessionRedis"]
