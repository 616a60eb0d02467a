from __future__ import annotations

"""
User repository
===============
Accounts for the catalog API. Login uniqueness is enforced by a single
`INSERT … ON CONFLICT (login) DO NOTHING RETURNING` statement; when it
returns nothing the stored row is read back and handed out inside
`LoginAlreadyExists` (the stored row is never modified).
"""

from typing import Any, Callable, Dict, List

from sqlalchemy import delete, select, update
from sqlalchemy.dialects import postgresql, sqlite

from filmoteka.core.exceptions import LoginAlreadyExists, RepositoryError, UserNotFound
from filmoteka.domain.entities import User, UserCredentials, UserDraft
from filmoteka.domain.types import Id, Role
from filmoteka.repositories.base import USER_COLUMNS, SqlRepository, user_from_row, users

# Dialects whose insert construct supports ON CONFLICT DO NOTHING
_CONFLICT_AWARE_INSERTS: Dict[str, Callable[..., Any]] = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class UserRepository(SqlRepository):
    async def create_user(self, draft: UserDraft) -> User:
        """Insert a user unless the login is taken.

        Raises `LoginAlreadyExists` carrying the existing user otherwise.
        """
        async with self._transaction("create user") as session:
            dialect = session.get_bind().dialect.name
            try:
                insert_factory = _CONFLICT_AWARE_INSERTS[dialect]
            except KeyError:
                raise RepositoryError(f"create user: unsupported dialect {dialect!r}") from None

            stmt = (
                insert_factory(users)
                .values(login=draft.login, password=draft.password_hash, role=draft.role)
                .on_conflict_do_nothing(index_elements=[users.c.login])
                .returning(*USER_COLUMNS)
            )
            row = (await session.execute(stmt)).one_or_none()
            if row is None:
                existing = (
                    await session.execute(select(*USER_COLUMNS).where(users.c.login == draft.login))
                ).one_or_none()
                if existing is None:
                    raise RepositoryError("create user: conflicting login vanished before it could be read")
                raise LoginAlreadyExists(user_from_row(existing))
        return user_from_row(row)

    async def update_user_role(self, user_id: Id, role: Role) -> User:
        stmt = update(users).where(users.c.id == user_id).values(role=role).returning(*USER_COLUMNS)
        async with self._transaction("update user role") as session:
            row = (await session.execute(stmt)).one_or_none()
            if row is None:
                raise UserNotFound()
        return user_from_row(row)

    async def delete_user(self, user_id: Id) -> None:
        async with self._transaction("delete user") as session:
            result = await session.execute(delete(users).where(users.c.id == user_id))
            if result.rowcount < 1:
                raise UserNotFound()

    async def get_password_by_login(self, login: str) -> UserCredentials:
        stmt = select(users.c.id, users.c.password).where(users.c.login == login)
        async with self._transaction("get password by login") as session:
            row = (await session.execute(stmt)).one_or_none()
        if row is None:
            raise UserNotFound()
        return UserCredentials(id=row.id, password_hash=row.password)

    async def get_user_by_id(self, user_id: Id) -> User:
        async with self._transaction("get user by id") as session:
            row = (await session.execute(select(*USER_COLUMNS).where(users.c.id == user_id))).one_or_none()
        if row is None:
            raise UserNotFound()
        return user_from_row(row)

    async def get_users(self) -> List[User]:
        async with self._transaction("get users") as session:
            rows = (await session.execute(select(*USER_COLUMNS).order_by(users.c.id))).all()
        return [user_from_row(r) for r in rows]


__all__ = ["UserRepository"]
