# filmoteka/services/auth/session_manager.py
from __future__ import annotations

"""
Session manager: cookie sessions for the catalog API
=====================================================

Lifecycle of a token
--------------------
absent ──login──▶ valid (expiry slides on every check) ──logout / user gone──▶ absent

What this module provides
-------------------------
- **Login**: bcrypt check against the stored hash, then a fresh random token
  stored with the session TTL. `UserNotFound` and `IncorrectPassword` stay
  distinct here; the HTTP layer collapses them into one response.
- **Logout**: delete the token; store failures propagate.
- **Session check**: token → user id (refreshing the TTL) → user row. A token
  that points at a deleted user is removed and reported as `NoSession`.
"""

import asyncio
import logging
from datetime import timedelta

from filmoteka.core.exceptions import IncorrectPassword, NoSession, RepositoryError, SessionStoreError, UserNotFound
from filmoteka.core.security import new_session_token, verify_password
from filmoteka.domain.entities import User
from filmoteka.repositories.session import RedisSessionStore
from filmoteka.repositories.user import UserRepository

logger = logging.getLogger("filmoteka.auth")

EXPIRED_SESSION_TIME = timedelta(hours=48)


class SessionManager:
    def __init__(
        self,
        users: UserRepository,
        sessions: RedisSessionStore,
        *,
        ttl: timedelta = EXPIRED_SESSION_TIME,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self.ttl = ttl

    async def login(self, login: str, password: str) -> str:
        """
        Verify credentials and open a session.

        Steps
        -----
        - **[Step 1]** Load the stored hash (`UserNotFound` if no such login).
        - **[Step 2]** bcrypt compare off the event loop (`IncorrectPassword`;
          a corrupt stored hash is a `RepositoryError`).
        - **[Step 3]** Store a new random token with the session TTL.
        """
        # ── [Step 1] Stored hash ─────────────────────────────────────────
        credentials = await self._users.get_password_by_login(login)

        # ── [Step 2] Slow, salted comparison ─────────────────────────────
        try:
            matches = await asyncio.to_thread(verify_password, password, credentials.password_hash)
        except ValueError as exc:
            raise RepositoryError(f"unreadable password hash for user {credentials.id}") from exc
        if not matches:
            raise IncorrectPassword()

        # ── [Step 3] New session ─────────────────────────────────────────
        token = new_session_token()
        await self._sessions.set(token, credentials.id, self.ttl)
        logger.info("User %s logged in", credentials.id)
        return token

    async def logout(self, token: str) -> None:
        await self._sessions.delete(token)

    async def get_user(self, token: str) -> User:
        """Resolve a session token to its user, sliding the session expiry.

        Raises `NoSession` for unknown/expired tokens and for tokens whose
        user has been deleted. The stale token is removed on a best-effort
        basis; a store failure while removing it is only logged.
        """
        user_id = await self._sessions.get_user_id(token, self.ttl)
        try:
            return await self._users.get_user_by_id(user_id)
        except UserNotFound:
            logger.info("Session points at deleted user %s; dropping it", user_id)
        try:
            await self._sessions.delete(token)
        except SessionStoreError as exc:
            logger.warning("Could not drop orphaned session of user %s: %s", user_id, exc)
        raise NoSession()


__all__ = ["SessionManager", "EXPIRED_SESSION_TIME"]
