from __future__ import annotations
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ReferenceItem(BaseModel):
    """Lookup row: requests may carry only the id, name is resolved."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=1)
    name: Optional[str] = None


class Genre(ReferenceItem):
    pass


class Mpa(ReferenceItem):
    pass


GENRES: list[Genre] = [
    Genre(id=1, name="Комедия"),
    Genre(id=2, name="Драма"),
    Genre(id=3, name="Мультфильм"),
    Genre(id=4, name="Триллер"),
    Genre(id=5, name="Документальный"),
    Genre(id=6, name="Боевик"),
]

MPA_RATINGS: list[Mpa] = [
    Mpa(id=1, name="G"),
    Mpa(id=2, name="PG"),
    Mpa(id=3, name="PG-13"),
    Mpa(id=4, name="R"),
    Mpa(id=5, name="NC-17"),
]
