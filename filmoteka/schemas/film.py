# filmoteka/schemas/film.py
from __future__ import annotations

"""
Pydantic schemas for films
==========================

- `FilmCreate` requires every field, including the cast (`actors`, may be
  an empty list).
- `FilmUpdate` makes everything optional; sending `actors` (even `[]`)
  replaces the whole cast, omitting it leaves the cast untouched.
- `FilmListParams` carries the validated `/film/list` query string. Sort
  field and direction only ever come from the enums in
  `filmoteka.domain.types`.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator

from filmoteka.domain.entities import FilmDraft, FilmPatch, FilmQuery
from filmoteka.domain.types import RATING_MAX, RATING_MIN, SEARCH_ALL, Order, OrderField, SearchField
from filmoteka.schemas.actor import ActorOut
from filmoteka.schemas.common import DayDate


class FilmCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    description: str = Field(..., max_length=1000)
    data_publish: DayDate = Field(..., description="Release date, dd.mm.yyyy")
    rating: int = Field(..., ge=RATING_MIN, le=RATING_MAX)
    actors: List[PositiveInt] = Field(..., description="Actor ids making up the cast")

    def to_draft(self) -> FilmDraft:
        return FilmDraft(
            name=self.name,
            description=self.description,
            publish_date=self.data_publish,
            rating=self.rating,
        )


class FilmUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=150)
    description: Optional[str] = Field(None, max_length=1000)
    data_publish: Optional[DayDate] = None
    rating: Optional[int] = Field(None, ge=RATING_MIN, le=RATING_MAX)
    actors: Optional[List[PositiveInt]] = None

    def to_patch(self) -> FilmPatch:
        supplied = self.model_dump(exclude_unset=True, exclude_none=True).keys()
        fields = {}
        for name in supplied:
            target = "publish_date" if name == "data_publish" else name
            fields[target] = getattr(self, name)
        return FilmPatch(**fields)


class FilmOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    name: str
    description: str
    data_publish: DayDate = Field(..., validation_alias="publish_date")
    rating: int
    actors: List[ActorOut] = Field(default_factory=list)


class FilmListParams(BaseModel):
    search_string: str = SEARCH_ALL
    search_by: SearchField = SearchField.FILM
    sort_by: OrderField = OrderField.RATING
    sort_order: Order = Order.DESC

    @field_validator("sort_order", mode="before")
    @classmethod
    def _upper_order(cls, value):
        return value.upper() if isinstance(value, str) else value

    def to_query(self) -> FilmQuery:
        return FilmQuery(
            search_string=self.search_string,
            search_field=self.search_by,
            order_field=self.sort_by,
            order=self.sort_order,
        )


__all__ = ["FilmCreate", "FilmUpdate", "FilmOut", "FilmListParams"]
