from __future__ import annotations

"""
🎬 Filmoteka: Film + film/actor association
=============================================

Tables
------
• `films(id, name, description, publish_date, rating)` with `0 <= rating <= 10`
• `film_actor(film_id, actor_id)`: plain association, both FKs cascade

The actor FK is named by convention (`fk_film_actor_actor_id_actors`); its
violation is how the film repository recognises an unknown actor id.
"""

from datetime import date

from sqlalchemy import CheckConstraint, Column, Date, ForeignKey, SmallInteger, String, Table
from sqlalchemy.orm import Mapped, mapped_column

from filmoteka.db.base_class import Base, BigIntId, PKMixin
from filmoteka.domain.types import RATING_MAX, RATING_MIN


class FilmModel(PKMixin, Base):
    __tablename__ = "films"

    name: Mapped[str] = mapped_column(String(150), nullable=False, index=True)
    description: Mapped[str] = mapped_column(String(1000), nullable=False, default="")
    publish_date: Mapped[date] = mapped_column(Date, nullable=False)
    rating: Mapped[int] = mapped_column(SmallInteger, nullable=False)

    __table_args__ = (
        CheckConstraint(f"rating >= {RATING_MIN} AND rating <= {RATING_MAX}", name="rating_range"),
    )


film_actor = Table(
    "film_actor",
    Base.metadata,
    Column("film_id", BigIntId, ForeignKey("films.id", ondelete="CASCADE"), primary_key=True),
    Column("actor_id", BigIntId, ForeignKey("actors.id", ondelete="CASCADE"), primary_key=True, index=True),
)

FILM_ACTOR_ACTOR_FK = "fk_film_actor_actor_id_actors"


__all__ = ["FilmModel", "film_actor", "FILM_ACTOR_ACTOR_FK"]
