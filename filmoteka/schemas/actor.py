# filmoteka/schemas/actor.py
from __future__ import annotations

"""
Pydantic schemas for actors
===========================

Request bodies convert themselves into domain values (`to_draft` /
`to_patch`); response models are built from domain dataclasses with
`from_attributes=True`.

Notes
-----
- `ActorUpdate` distinguishes "field absent" from "field supplied": only
  fields present in the JSON body (and not `null`) end up in the patch.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from filmoteka.domain.entities import ActorDraft, ActorPatch
from filmoteka.domain.types import Sex
from filmoteka.schemas.common import DayDate


class ActorCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Full name")
    sex: Sex = Field(..., description="male | female")
    birthday: DayDate = Field(..., description="dd.mm.yyyy")

    def to_draft(self) -> ActorDraft:
        return ActorDraft(name=self.name, sex=self.sex, birthday=self.birthday)


class ActorUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    sex: Optional[Sex] = None
    birthday: Optional[DayDate] = None

    def to_patch(self) -> ActorPatch:
        supplied = self.model_dump(exclude_unset=True, exclude_none=True)
        return ActorPatch(**{name: getattr(self, name) for name in supplied})


class ActorOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    sex: Sex
    birthday: DayDate


class ActorFilmOut(BaseModel):
    """Film as listed under an actor (no nested cast)."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    name: str
    description: str
    data_publish: DayDate = Field(..., validation_alias="publish_date")
    rating: int


class ActorWithFilmsOut(ActorOut):
    films: List[ActorFilmOut] = Field(default_factory=list)


__all__ = ["ActorCreate", "ActorUpdate", "ActorOut", "ActorFilmOut", "ActorWithFilmsOut"]
