# filmoteka/schemas/user.py
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from filmoteka.domain.types import Role


class UserCreate(BaseModel):
    login: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=255)
    role: Role = Role.USER


class RoleUpdate(BaseModel):
    role: Role


class LoginRequest(BaseModel):
    login: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserOut(BaseModel):
    """Public user record; the password hash is never part of it."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    login: str
    role: Role


__all__ = ["UserCreate", "RoleUpdate", "LoginRequest", "UserOut"]
