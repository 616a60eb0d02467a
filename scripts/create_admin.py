#!/usr/bin/env python3
"""
Filmoteka • Bootstrap an administrator
=====================================

Every mutating endpoint requires an admin session, so the first admin has to
be created out of band. Connects with the regular settings (`.env` /
environment) and inserts the user directly.

Usage
-----
    python scripts/create_admin.py --login root --password 'S3cret!'
    python scripts/create_admin.py --login alice --password x --promote

With `--promote`, an existing account with that login is switched to the
admin role instead of failing.
"""

import argparse
import asyncio
import sys

from filmoteka.core.config import settings
from filmoteka.core.exceptions import LoginAlreadyExists
from filmoteka.core.security import get_password_hash
from filmoteka.db.session import build_engine, build_session_maker
from filmoteka.domain.entities import UserDraft
from filmoteka.domain.types import Role
from filmoteka.repositories import UserRepository


async def _run(login: str, password: str, promote: bool) -> int:
    engine = build_engine(settings)
    users = UserRepository(build_session_maker(engine))
    try:
        draft = UserDraft(login=login, password_hash=get_password_hash(password), role=Role.ADMIN)
        try:
            user = await users.create_user(draft)
        except LoginAlreadyExists as exc:
            if not promote:
                print(f"Login {login!r} already exists (id={exc.user.id}, role={exc.user.role.value}).")
                return 1
            user = await users.update_user_role(exc.user.id, Role.ADMIN)
            print(f"Promoted existing user {user.login!r} (id={user.id}) to admin.")
            return 0
        print(f"Created admin {user.login!r} (id={user.id}).")
        return 0
    finally:
        await engine.dispose()


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--login", required=True, help="Login of the administrator")
    ap.add_argument("--password", required=True, help="Plain-text password (hashed with bcrypt before storing)")
    ap.add_argument("--promote", action="store_true", help="Promote an existing user with this login")
    args = ap.parse_args()
    sys.exit(asyncio.run(_run(args.login, args.password, args.promote)))


if __name__ == "__main__":
    main()
