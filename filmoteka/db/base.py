# filmoteka/db/base.py
"""
Filmoteka: SQLAlchemy Base registry
====================================

Import all ORM models so their tables are registered on `Base.metadata`
(Alembic autogeneration and `metadata.create_all` in tests rely on it).

Tip: Keep this file import-only; no runtime logic.
"""

from filmoteka.db.base_class import Base
from filmoteka.db.models.actor import ActorModel
from filmoteka.db.models.film import FilmModel, film_actor
from filmoteka.db.models.user import UserModel

__all__ = ["Base", "ActorModel", "FilmModel", "film_actor", "UserModel"]
