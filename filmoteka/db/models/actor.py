from __future__ import annotations

"""
🎭 Filmoteka: Actor
====================
`actors(id, name, sex, birthday)`; film links live in `film_actor`
(see `filmoteka.db.models.film`) and cascade when an actor is deleted.
"""

from datetime import date

from sqlalchemy import Date, Enum as SAEnum, String
from sqlalchemy.orm import Mapped, mapped_column

from filmoteka.db.base_class import Base, PKMixin
from filmoteka.domain.types import Sex


class ActorModel(PKMixin, Base):
    __tablename__ = "actors"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    sex: Mapped[Sex] = mapped_column(
        SAEnum(Sex, name="sex", native_enum=False, length=16, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    birthday: Mapped[date] = mapped_column(Date, nullable=False)


__all__ = ["ActorModel"]
