from __future__ import annotations

"""
Value objects exchanged between the repositories, the session manager and
the HTTP layer. They are plain frozen dataclasses: no ORM state leaks out of
the repository boundary.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import List

from filmoteka.domain.types import (
    RATING_MAX,
    RATING_MIN,
    SEARCH_ALL,
    UNSET,
    Id,
    Maybe,
    Order,
    OrderField,
    Role,
    SearchField,
    Sex,
    is_set,
)


def _check_rating(rating: object) -> None:
    if is_set(rating) and not (RATING_MIN <= int(rating) <= RATING_MAX):  # type: ignore[arg-type]
        raise ValueError(f"rating must be within {RATING_MIN}..{RATING_MAX}, got {rating}")


# ── Actors ────────────────────────────────────────────────────
@dataclass(frozen=True)
class ActorDraft:
    name: str
    sex: Sex
    birthday: date


@dataclass(frozen=True)
class Actor:
    id: Id
    name: str
    sex: Sex
    birthday: date


@dataclass(frozen=True)
class ActorPatch:
    """Fields left as `UNSET` keep their stored value."""
    name: Maybe[str] = UNSET
    sex: Maybe[Sex] = UNSET
    birthday: Maybe[date] = UNSET


# ── Films ─────────────────────────────────────────────────────
@dataclass(frozen=True)
class FilmDraft:
    name: str
    description: str
    publish_date: date
    rating: int

    def __post_init__(self) -> None:
        _check_rating(self.rating)


@dataclass(frozen=True)
class Film:
    id: Id
    name: str
    description: str
    publish_date: date
    rating: int


@dataclass(frozen=True)
class FilmPatch:
    """Scalar fields follow `ActorPatch` rules.

    `actors` is `UNSET` to leave associations alone; any list (even empty)
    replaces them wholesale.
    """
    name: Maybe[str] = UNSET
    description: Maybe[str] = UNSET
    publish_date: Maybe[date] = UNSET
    rating: Maybe[int] = UNSET
    actors: Maybe[List[Id]] = UNSET

    def __post_init__(self) -> None:
        _check_rating(self.rating)

    @property
    def update_actors(self) -> bool:
        return is_set(self.actors)


@dataclass(frozen=True)
class ActorWithFilms(Actor):
    films: List[Film] = field(default_factory=list)


@dataclass(frozen=True)
class FilmWithActors(Film):
    actors: List[Actor] = field(default_factory=list)


@dataclass(frozen=True)
class FilmQuery:
    """Listing parameters; defaults mirror the public API defaults."""
    search_string: str = SEARCH_ALL
    search_field: SearchField = SearchField.FILM
    order_field: OrderField = OrderField.RATING
    order: Order = Order.DESC

    @property
    def pattern(self) -> str:
        """Substring to match; the `*` sentinel matches everything."""
        return "" if self.search_string == SEARCH_ALL else self.search_string


# ── Users ─────────────────────────────────────────────────────
@dataclass(frozen=True)
class UserDraft:
    login: str
    password_hash: str
    role: Role = Role.USER


@dataclass(frozen=True)
class User:
    id: Id
    login: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


@dataclass(frozen=True)
class UserCredentials:
    """Only ever handed to the session manager's login path."""
    id: Id
    password_hash: str = field(repr=False)


@dataclass(frozen=True)
class AuthenticatedSession:
    token: str
    user: User


__all__ = [
    "ActorDraft",
    "Actor",
    "ActorPatch",
    "ActorWithFilms",
    "FilmDraft",
    "Film",
    "FilmPatch",
    "FilmWithActors",
    "FilmQuery",
    "UserDraft",
    "User",
    "UserCredentials",
    "AuthenticatedSession",
]
