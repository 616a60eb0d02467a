# filmoteka/api/v1/routers/users.py
from __future__ import annotations

"""
👤 Users
========
Account administration. Passwords are bcrypt-hashed before they reach the
repository and are never returned.
"""

import asyncio
from typing import List

from fastapi import APIRouter, Depends, Path, Response, status
from loguru import logger

from filmoteka.core.exceptions import ConflictException, LoginAlreadyExists, NotFoundException, UserNotFound
from filmoteka.core.security import get_password_hash
from filmoteka.dependencies import current_session, get_user_repository, require_admin
from filmoteka.domain.entities import AuthenticatedSession, UserDraft
from filmoteka.repositories import UserRepository
from filmoteka.schemas.user import RoleUpdate, UserCreate, UserOut

router = APIRouter(tags=["Users"])


@router.post(
    "/user",
    response_model=UserOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
)
async def create_user(
    payload: UserCreate,
    _admin: AuthenticatedSession = Depends(require_admin),
    users: UserRepository = Depends(get_user_repository),
) -> UserOut:
    password_hash = await asyncio.to_thread(get_password_hash, payload.password)
    try:
        user = await users.create_user(UserDraft(login=payload.login, password_hash=password_hash, role=payload.role))
    except LoginAlreadyExists as exc:
        logger.info("Login {!r} already taken by user {}", payload.login, exc.user.id)
        raise ConflictException("user already exists") from None
    logger.info("User {} created with role {}", user.id, user.role.value)
    return UserOut.model_validate(user)


@router.put("/user/{user_id}/role", response_model=UserOut, summary="Change a user's role")
async def update_user_role(
    payload: RoleUpdate,
    user_id: int = Path(..., ge=1),
    _admin: AuthenticatedSession = Depends(require_admin),
    users: UserRepository = Depends(get_user_repository),
) -> UserOut:
    try:
        user = await users.update_user_role(user_id, payload.role)
    except UserNotFound as exc:
        logger.info("Role change for missing user {}", user_id)
        raise NotFoundException(str(exc)) from None
    return UserOut.model_validate(user)


@router.delete("/user/{user_id}", response_class=Response, summary="Delete a user")
async def delete_user(
    user_id: int = Path(..., ge=1),
    _admin: AuthenticatedSession = Depends(require_admin),
    users: UserRepository = Depends(get_user_repository),
) -> None:
    try:
        await users.delete_user(user_id)
    except UserNotFound as exc:
        logger.info("Delete of missing user {}", user_id)
        raise NotFoundException(str(exc)) from None
    logger.info("User {} deleted", user_id)


@router.get("/user/list", response_model=List[UserOut], summary="List users")
async def list_users(
    _session: AuthenticatedSession = Depends(current_session),
    users: UserRepository = Depends(get_user_repository),
) -> List[UserOut]:
    return [UserOut.model_validate(u) for u in await users.get_users()]


__all__ = ["router"]
