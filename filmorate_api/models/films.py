from __future__ import annotations
from datetime import date
from typing import List, Optional, Set

from pydantic import BaseModel, ConfigDict, Field, field_validator

from filmorate_api.models.references import Genre, Mpa


class FilmBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1)
    description: Optional[str] = Field(default=None, max_length=200)
    release_date: date = Field(..., alias="releaseDate")
    duration: int = Field(..., gt=0, description="minutes")
    mpa: Optional[Mpa] = None
    genres: List[Genre] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name must not be blank")
        return value

    @field_validator("genres", mode="before")
    @classmethod
    def genres_or_empty(cls, value):
        return [] if value is None else value

    @field_validator("genres")
    @classmethod
    def unique_genres(cls, value: List[Genre]) -> List[Genre]:
        # порядок первого вхождения сохраняем, дубли по id выкидываем
        seen: dict[int, Genre] = {}
        for genre in value:
            seen.setdefault(genre.id, genre)
        return list(seen.values())


class FilmCreateRequest(FilmBase):
    pass


class FilmUpdateRequest(FilmBase):
    id: int = Field(..., ge=1)


class Film(FilmBase):
    id: Optional[int] = None
    likes: Set[int] = Field(default_factory=set)
