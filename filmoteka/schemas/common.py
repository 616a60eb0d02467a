# filmoteka/schemas/common.py
from __future__ import annotations

"""
Shared schema primitives.

`DayDate` is the wire format for every calendar date in the API:
`dd.mm.yyyy` (e.g. "12.02.2002") on input and output.
"""

from datetime import date, datetime
from typing import Annotated, Any

from pydantic import BeforeValidator, PlainSerializer, WithJsonSchema

DATE_FORMAT = "%d.%m.%Y"


def parse_day_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError("date must be a dd.mm.yyyy string")
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except ValueError:
        raise ValueError(f"invalid date {value!r}, expected dd.mm.yyyy") from None


def format_day_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


DayDate = Annotated[
    date,
    BeforeValidator(parse_day_date),
    PlainSerializer(format_day_date, return_type=str),
    WithJsonSchema({"type": "string", "pattern": r"^\d{2}\.\d{2}\.\d{4}$", "examples": ["12.02.2002"]}),
]


__all__ = ["DATE_FORMAT", "DayDate", "parse_day_date", "format_day_date"]
