from __future__ import annotations

"""
Session store (Redis)
=====================
`token → user id` entries with a TTL.

- `set(token, user_id, ttl)`              SET token user_id EX ttl
- `get_user_id(token, refresh_ttl)`       GETEX token EX refresh_ttl (read and
                                          slide the expiry in one round-trip)
- `delete(token)`                         DEL token (absent token is fine)

Every Redis failure is re-raised as `SessionStoreError(operation, token)`
chained to the driver error; an absent or expired token is `NoSession`.
"""

from datetime import timedelta

from redis.exceptions import RedisError

from filmoteka.core.exceptions import NoSession, SessionStoreError
from filmoteka.core.redis_client import RedisClient
from filmoteka.domain.types import Id


def _seconds(ttl: timedelta) -> int:
    seconds = int(ttl.total_seconds())
    if seconds <= 0:
        raise ValueError(f"session ttl must be positive, got {ttl!r}")
    return seconds


class RedisSessionStore:
    def __init__(self, redis: RedisClient) -> None:
        self._redis = redis

    async def set(self, token: str, user_id: Id, ttl: timedelta) -> None:
        seconds = _seconds(ttl)
        try:
            await self._redis.client.set(token, str(user_id), ex=seconds)
        except RedisError as exc:
            raise SessionStoreError("set", token) from exc

    async def get_user_id(self, token: str, refresh_ttl: timedelta) -> Id:
        seconds = _seconds(refresh_ttl)
        try:
            raw = await self._redis.client.getex(token, ex=seconds)
        except RedisError as exc:
            raise SessionStoreError("get", token) from exc
        if raw is None:
            raise NoSession()
        try:
            return int(raw)
        except (TypeError, ValueError) as exc:
            raise SessionStoreError("decode user id", token) from exc

    async def delete(self, token: str) -> None:
        try:
            await self._redis.client.delete(token)
        except RedisError as exc:
            raise SessionStoreError("delete", token) from exc


__all__ = ["RedisSessionStore"]
