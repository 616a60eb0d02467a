from __future__ import annotations

"""
Domain primitives shared by repositories, services and schemas.

Design notes
------------
• All enums subclass `str, PyEnum` for JSON-friendly serialization.
• VALUE STRINGS are **stable** once deployed (stored in the database).
• `UNSET` marks a partial-update field the caller did not supply; `None` is
  never used for that purpose.
"""

from enum import Enum as PyEnum
from typing import Final, TypeVar, Union

Id = int  # storage-assigned, positive, fits in BIGINT

RATING_MIN: Final = 0
RATING_MAX: Final = 10


# ──────────────────────────────────────────────────────────────
# Enumerations
# ──────────────────────────────────────────────────────────────
class Sex(str, PyEnum):
    MALE = "male"
    FEMALE = "female"


class Role(str, PyEnum):
    ADMIN = "admin"
    USER = "user"


class Order(str, PyEnum):
    """Sort direction; accepts any letter case on input."""
    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def _missing_(cls, value: object):
        if isinstance(value, str):
            upper = value.upper()
            for member in cls:
                if member.value == upper:
                    return member
        return None


class OrderField(str, PyEnum):
    RATING = "rating"
    NAME = "name"
    PUBLISH_DATE = "publish_date"


class SearchField(str, PyEnum):
    FILM = "film"
    ACTOR = "actor"


# Search string that matches every film
SEARCH_ALL: Final = "*"


# ──────────────────────────────────────────────────────────────
# Optional wrapper for partial updates
# ──────────────────────────────────────────────────────────────
class _Unset:
    """Singleton type for "field not supplied"."""

    _instance: "_Unset | None" = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final = _Unset()

T = TypeVar("T")
Maybe = Union[T, _Unset]


def is_set(value: object) -> bool:
    return value is not UNSET


__all__ = [
    "Id",
    "RATING_MIN",
    "RATING_MAX",
    "Sex",
    "Role",
    "Order",
    "OrderField",
    "SearchField",
    "SEARCH_ALL",
    "UNSET",
    "Maybe",
    "is_set",
]
