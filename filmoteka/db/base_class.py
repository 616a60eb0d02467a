# filmoteka/db/base_class.py
from __future__ import annotations

"""
# Filmoteka: SQLAlchemy Base & Mixins

SQLAlchemy 2.0 declarative **Base** with:
- Global **naming conventions** (stable constraint names; the film/actor
  foreign key name is what the film repository matches on)
- `PKMixin`: BIGINT surrogate primary key

Usage:
    from filmoteka.db.base_class import Base, PKMixin

    class ActorModel(PKMixin, Base):
        __tablename__ = "actors"
        name: Mapped[str] = mapped_column(String(255))
"""

from sqlalchemy import BigInteger, Integer, MetaData
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# ──────────────────────────────────────────────────────────────────────────────
# 🏷️ Naming conventions (stable constraint names for Alembic)
# ──────────────────────────────────────────────────────────────────────────────

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# SQLite only auto-increments INTEGER PRIMARY KEY
BigIntId = BigInteger().with_variant(Integer(), "sqlite")


# ──────────────────────────────────────────────────────────────────────────────
# 🧱 Declarative Base
# ──────────────────────────────────────────────────────────────────────────────

class Base(DeclarativeBase):
    """Global declarative base for catalog models."""
    metadata = MetaData(naming_convention=NAMING_CONVENTION)

    def __repr__(self) -> str:  # pragma: no cover (repr convenience)
        attrs = [f"{key}={getattr(self, key)!r}" for key in ("id", "name", "login") if hasattr(self, key)]
        return f"{self.__class__.__name__}({', '.join(attrs)})"


# ──────────────────────────────────────────────────────────────────────────────
# 🧩 Common mixins
# ──────────────────────────────────────────────────────────────────────────────

class PKMixin:
    """Surrogate BIGINT primary key (auto-increment)."""
    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)


__all__ = ["Base", "PKMixin", "BigIntId", "NAMING_CONVENTION"]
