"""Service layer for films, likes and the popularity ranking."""

from __future__ import annotations

import logging
from datetime import date
from typing import List

from filmorate_api.core.exceptions import NotFoundError, ValidationError
from filmorate_api.models.films import Film, FilmBase, FilmUpdateRequest
from filmorate_api.models.references import Genre, Mpa
from filmorate_api.services.repositories.base import (
    FilmStorage, ReferenceStorage, UserStorage,
)

log = logging.getLogger(__name__)

MIN_RELEASE_DATE = date(1895, 12, 28)


class FilmService:
    """Validate film input and orchestrate film/user storages."""

    def __init__(
            self,
            films: FilmStorage,
            users: UserStorage,
            genres: ReferenceStorage[Genre],
            mpa: ReferenceStorage[Mpa]) -> None:
        self.films = films
        self.users = users
        self.genres = genres
        self.mpa = mpa

    # ---------- helpers ----------

    @staticmethod
    def _validate_release_date(data: FilmBase) -> None:
        if data.release_date < MIN_RELEASE_DATE:
            log.warning(
                'film_release_date_invalid',
                extra={'release_date': data.release_date.isoformat()})
            raise ValidationError(
                'Release date must not be earlier than 1895-12-28')

    async def _resolve_references(self, data: FilmBase) -> Film:
        """Replace bare {id} MPA/genre refs with stored rows."""
        mpa = None
        if data.mpa is not None:
            mpa = await self.mpa.find_by_id(data.mpa.id)
            if mpa is None:
                raise NotFoundError(f'MPA rating with id = {data.mpa.id} '
                                    'not found')
        genres = []
        for ref in data.genres:
            genre = await self.genres.find_by_id(ref.id)
            if genre is None:
                raise NotFoundError(f'Genre with id = {ref.id} not found')
            genres.append(genre)
        return Film(
            name=data.name,
            description=data.description,
            release_date=data.release_date,
            duration=data.duration,
            mpa=mpa,
            genres=genres,
        )

    async def _get_film(self, film_id: int) -> Film:
        film = await self.films.find_by_id(film_id)
        if film is None:
            log.warning('film_not_found', extra={'film_id': film_id})
            raise NotFoundError(f'Film with id = {film_id} not found')
        return film

    async def _ensure_user(self, user_id: int) -> None:
        if await self.users.find_by_id(user_id) is None:
            log.warning('user_not_found', extra={'user_id': user_id})
            raise NotFoundError(f'User with id = {user_id} not found')

    # ---------- CRUD ----------

    async def add(self, data: FilmBase) -> Film:
        """Validate and store a new film, returning it with its id."""
        log.info('film_add', extra={'film_name': data.name})
        self._validate_release_date(data)
        film = await self._resolve_references(data)
        created = await self.films.add(film)
        log.info('film_added', extra={'film_id': created.id})
        return created

    async def update(self, data: FilmUpdateRequest) -> Film:
        """Fully replace an existing film; likes are preserved."""
        log.info('film_update', extra={'film_id': data.id})
        self._validate_release_date(data)
        await self._get_film(data.id)
        film = await self._resolve_references(data)
        return await self.films.update(film.model_copy(update={'id': data.id}))

    async def find_all(self) -> List[Film]:
        return await self.films.find_all()

    async def find_by_id(self, film_id: int) -> Film:
        return await self._get_film(film_id)

    # ---------- LIKES ----------

    async def like(self, film_id: int, user_id: int) -> Film:
        await self._get_film(film_id)
        await self._ensure_user(user_id)
        await self.films.add_like(film_id, user_id)
        log.info('film_liked', extra={'film_id': film_id, 'user_id': user_id})
        return await self._get_film(film_id)

    async def delete_like(self, film_id: int, user_id: int) -> Film:
        await self._get_film(film_id)
        await self._ensure_user(user_id)
        await self.films.remove_like(film_id, user_id)
        log.info('film_like_removed',
                 extra={'film_id': film_id, 'user_id': user_id})
        return await self._get_film(film_id)

    async def get_popular_films(self, count: int = 10) -> List[Film]:
        """Films by like count descending, ties by id ascending."""
        if count < 1:
            raise ValidationError('count must be positive')
        films = await self.films.find_all()
        films.sort(key=lambda f: (-len(f.likes), f.id))
        return films[:count]
