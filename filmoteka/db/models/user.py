from __future__ import annotations

"""
👤 Filmoteka: User
===================
`users(id, login UNIQUE, password, role)`. `password` holds a bcrypt hash and
never leaves the repository except through `get_password_by_login`.
"""

from sqlalchemy import Enum as SAEnum, String
from sqlalchemy.orm import Mapped, mapped_column

from filmoteka.db.base_class import Base, PKMixin
from filmoteka.domain.types import Role


class UserModel(PKMixin, Base):
    __tablename__ = "users"

    login: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[Role] = mapped_column(
        SAEnum(Role, name="role", native_enum=False, length=16, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=Role.USER,
    )


__all__ = ["UserModel"]
