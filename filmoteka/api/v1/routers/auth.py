# filmoteka/api/v1/routers/auth.py
from __future__ import annotations

"""
🔐 Login / Logout
=================
- `POST /login`: anonymous only (418 with a live session). Wrong login and
  wrong password produce the same 409 so callers cannot probe for accounts.
- `POST /logout`: drops the server-side session and expires the cookie. A
  session-store failure is logged and the cookie is expired anyway.
"""

from fastapi import APIRouter, Depends, Response
from loguru import logger

from filmoteka.core.config import Settings
from filmoteka.core.exceptions import ConflictException, IncorrectPassword, SessionStoreError, UserNotFound
from filmoteka.dependencies import current_session, ensure_no_session
from filmoteka.dependencies.auth import clear_session_cookie, set_session_cookie
from filmoteka.dependencies.providers import get_session_manager, get_settings
from filmoteka.domain.entities import AuthenticatedSession
from filmoteka.schemas.user import LoginRequest
from filmoteka.services.auth import SessionManager

router = APIRouter(tags=["Auth"])


@router.post(
    "/login",
    response_class=Response,
    dependencies=[Depends(ensure_no_session)],
    summary="Open a session",
)
async def login(
    payload: LoginRequest,
    response: Response,
    settings: Settings = Depends(get_settings),
    auth: SessionManager = Depends(get_session_manager),
) -> None:
    try:
        token = await auth.login(payload.login, payload.password)
    except (IncorrectPassword, UserNotFound):
        logger.info("Failed login for {!r}", payload.login)
        raise ConflictException("incorrect login or password") from None
    set_session_cookie(response, settings, token)


@router.post("/logout", response_class=Response, summary="Close the current session")
async def logout(
    response: Response,
    session: AuthenticatedSession = Depends(current_session),
    settings: Settings = Depends(get_settings),
    auth: SessionManager = Depends(get_session_manager),
) -> None:
    try:
        await auth.logout(session.token)
    except SessionStoreError as exc:
        logger.warning("Logout could not delete session for user {}: {}", session.user.id, exc)
    clear_session_cookie(response, settings)


__all__ = ["router"]
