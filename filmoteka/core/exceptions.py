# filmoteka/core/exceptions.py
from __future__ import annotations

"""
Filmoteka: Exceptions
======================
Two families live here:

1. **Domain errors** (`CatalogError` and friends) raised by repositories, the
   session store and the session manager. Callers test them by class
   (`except ActorNotFound:`), never by message. Infrastructure failures are
   wrapped in `RepositoryError` / `SessionStoreError` with the failing
   operation in the message and the original exception chained as `__cause__`.

2. **HTTP errors** (`AppException` and subclasses) raised by the delivery
   layer and rendered by `filmoteka.core.exception_handlers` as
   `application/problem+json`.

Usage
-----
    try:
        await actors.delete_actor(actor_id)
    except ActorNotFound:
        raise NotFoundException("actor not found")
"""

from typing import TYPE_CHECKING, Any, Dict, Optional

from fastapi import HTTPException, status

if TYPE_CHECKING:  # pragma: no cover
    from filmoteka.domain.entities import User

__all__ = [
    # domain
    "CatalogError",
    "NotFoundError",
    "ActorNotFound",
    "FilmNotFound",
    "UserNotFound",
    "ConflictError",
    "LoginAlreadyExists",
    "AuthError",
    "IncorrectPassword",
    "NoSession",
    "RepositoryError",
    "SessionStoreError",
    # http
    "AppException",
    "BadRequestException",
    "NotAuthenticatedException",
    "PermissionDeniedException",
    "NotFoundException",
    "ConflictException",
    "SessionExistsException",
]


# ──────────────────────────────────────────────────────────────
# 🧭 Domain taxonomy
# ──────────────────────────────────────────────────────────────
class CatalogError(Exception):
    """Base class for every error the catalog core emits."""


class NotFoundError(CatalogError):
    """The targeted row does not exist."""


class ActorNotFound(NotFoundError):
    def __init__(self, message: str = "actor not found") -> None:
        super().__init__(message)


class FilmNotFound(NotFoundError):
    def __init__(self, message: str = "film not found") -> None:
        super().__init__(message)


class UserNotFound(NotFoundError):
    def __init__(self, message: str = "user not found") -> None:
        super().__init__(message)


class ConflictError(CatalogError):
    """The write collides with existing state."""


class LoginAlreadyExists(ConflictError):
    """Raised by `UserRepository.create_user`; `user` is the row already stored."""

    def __init__(self, user: "User", message: str = "login already exists") -> None:
        super().__init__(message)
        self.user = user


class AuthError(CatalogError):
    """Credential or session failure."""


class IncorrectPassword(AuthError):
    def __init__(self, message: str = "incorrect password") -> None:
        super().__init__(message)


class NoSession(AuthError):
    def __init__(self, message: str = "no session") -> None:
        super().__init__(message)


class RepositoryError(CatalogError):
    """Infrastructure failure (connection, transaction, query or scan)."""


class SessionStoreError(RepositoryError):
    """Key-value engine failure, tagged with the operation and token."""

    def __init__(self, operation: str, token: str) -> None:
        super().__init__(f"session store: {operation} failed for token {token!r}")
        self.operation = operation
        self.token = token


# ──────────────────────────────────────────────────────────────
# 📦 HTTP: AppException
# ──────────────────────────────────────────────────────────────
class AppException(HTTPException):
    """Base application-level HTTP exception with optional metadata.

    Attributes
    -----------
    status_code : int
        HTTP status code.
    message : str
        Human-readable error message (serialized as `detail` as well).
    code : int
        Internal/typed error code. Defaults to `status_code`.
    details : Any
        Machine-readable details (ids, constraint names, ...).
    headers : dict | None
        Extra response headers (e.g. `Set-Cookie` to clear a stale session).
    """

    def __init__(
        self,
        *,
        status_code: int,
        message: str,
        code: Optional[int] = None,
        details: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=message, headers=headers)
        self.code: int = int(code or status_code)
        self.message: str = message
        self.details: Optional[Any] = details

    def to_problem(self, *, instance: str = "", request_id: Optional[str] = None) -> Dict[str, Any]:
        """Return the problem+json body for this error."""
        body: Dict[str, Any] = {
            "type": "about:blank",
            "title": type(self).__name__.replace("Exception", "") or "Error",
            "detail": self.message,
            "status": self.status_code,
            "instance": instance,
        }
        if self.code != self.status_code:
            body["code"] = self.code
        if self.details is not None:
            body["details"] = self.details
        if request_id:
            body["request_id"] = request_id
        return body


class BadRequestException(AppException):
    def __init__(self, message: str = "invalid query parameter", *, details: Optional[Any] = None) -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, message=message, details=details)


class NotAuthenticatedException(AppException):
    """401; pass `clear_cookie` (a ready `Set-Cookie` value) to drop a stale session."""

    def __init__(self, message: str = "no session", *, clear_cookie: Optional[str] = None) -> None:
        headers = {"set-cookie": clear_cookie} if clear_cookie else None
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, message=message, headers=headers)


class PermissionDeniedException(AppException):
    """Raised when the current role is not allowed to call a route."""

    def __init__(self, *, role: str, message: str = "the user with the current role does not have enough permissions") -> None:
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            message=message,
            details={"role": role},
        )


class NotFoundException(AppException):
    def __init__(self, message: str) -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, message=message)


class ConflictException(AppException):
    def __init__(self, message: str) -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, message=message)


class SessionExistsException(AppException):
    """418 for `/login` calls made with a live session cookie."""

    def __init__(self, message: str = "already logged in") -> None:
        super().__init__(status_code=status.HTTP_418_IM_A_TEAPOT, message=message)
