# filmoteka/dependencies/auth.py
from __future__ import annotations

"""
Session-cookie guards
---------------------
Centralized helpers so every router enforces sessions and roles the same way.

Exports
- current_session: require a live session; refreshes the cookie on success
- ensure_no_session: for `/login`; 418 when the caller is already logged in
- require_admin: `current_session` + admin role, 403 otherwise
- set_session_cookie / clear_session_cookie: cookie writers shared with
  the auth router
"""

from fastapi import Depends, Request, Response
from loguru import logger

from filmoteka.core.config import Settings
from filmoteka.core.exceptions import (
    CatalogError,
    NoSession,
    NotAuthenticatedException,
    PermissionDeniedException,
    SessionExistsException,
)
from filmoteka.domain.entities import AuthenticatedSession
from filmoteka.dependencies.providers import get_session_manager, get_settings
from filmoteka.services.auth import SessionManager


def set_session_cookie(response: Response, settings: Settings, token: str) -> None:
    max_age = int(settings.session_ttl.total_seconds())
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=max_age,
        expires=max_age,
        path="/",
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    # supersedes a refresh queued earlier in the same request (logout)
    del response.headers["set-cookie"]
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )


def _cleared_cookie_header(settings: Settings) -> str:
    """`Set-Cookie` value that expires the session cookie, for error responses."""
    probe = Response()
    clear_session_cookie(probe, settings)
    return probe.headers["set-cookie"]


async def current_session(
    request: Request,
    response: Response,
    settings: Settings = Depends(get_settings),
    auth: SessionManager = Depends(get_session_manager),
) -> AuthenticatedSession:
    """
    Resolve the session cookie to a user.

    Steps
    -----
    - **[Step 1]** No cookie → 401.
    - **[Step 2]** Unknown/expired token (or deleted user) → 401 and the
      stale cookie is cleared. Store/database failures propagate (500).
    - **[Step 3]** Re-issue the cookie with a fresh expiry.
    """
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        raise NotAuthenticatedException()

    try:
        user = await auth.get_user(token)
    except NoSession:
        raise NotAuthenticatedException(clear_cookie=_cleared_cookie_header(settings)) from None

    set_session_cookie(response, settings, token)
    return AuthenticatedSession(token=token, user=user)


async def ensure_no_session(
    request: Request,
    response: Response,
    settings: Settings = Depends(get_settings),
    auth: SessionManager = Depends(get_session_manager),
) -> None:
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        return
    try:
        await auth.get_user(token)
    except CatalogError as exc:
        logger.info("Ignoring unusable session cookie on login: {}", exc)
        clear_session_cookie(response, settings)
        return
    raise SessionExistsException()


async def require_admin(session: AuthenticatedSession = Depends(current_session)) -> AuthenticatedSession:
    if not session.user.is_admin:
        raise PermissionDeniedException(role=session.user.role.value)
    return session


__all__ = [
    "current_session",
    "ensure_no_session",
    "require_admin",
    "set_session_cookie",
    "clear_session_cookie",
]
