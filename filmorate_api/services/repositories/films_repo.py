"""Mongo repository for films and their genre/like join collections."""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from filmorate_api.models.films import Film
from filmorate_api.models.references import Genre, Mpa
from filmorate_api.services.repositories.counters_repo import CountersRepo
from filmorate_api.services.repositories.references_repo import (
    GenresRepo, MpaRepo,
)

log = logging.getLogger(__name__)


class FilmsRepo:
    """Film rows live in `films`; genres and likes are separate join rows."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self._films = db['films']
        self._genres = db['film_genres']
        self._likes = db['film_likes']
        self._counters = CountersRepo(db)
        self._genre_names = GenresRepo(db)
        self._mpa_names = MpaRepo(db)

    async def ensure_indexes(self) -> None:
        """Unique film id plus unique (film, genre) and (film, user) pairs."""
        await self._films.create_index([('film_id', 1)], unique=True)
        await self._genres.create_index(
            [('film_id', 1), ('genre_id', 1)],
            unique=True,
        )
        await self._likes.create_index(
            [('film_id', 1), ('user_id', 1)],
            unique=True,
        )

    # ---------- WRITE ----------

    async def add(self, film: Film) -> Film:
        film_id = await self._counters.next_id('films')
        await self._films.insert_one(self._to_doc(film_id, film))
        await self._save_genres(film_id, film.genres)
        log.info('film_inserted', extra={'film_id': film_id})
        return film.model_copy(update={'id': film_id, 'likes': set()})

    async def update(self, film: Film) -> Film:
        await self._films.replace_one(
            {'film_id': film.id},
            self._to_doc(film.id, film),
        )
        # жанры заменяем целиком: удалить старые, вставить новые
        await self._genres.delete_many({'film_id': film.id})
        await self._save_genres(film.id, film.genres)
        log.info('film_replaced', extra={'film_id': film.id})
        return await self.find_by_id(film.id)

    async def add_like(self, film_id: int, user_id: int) -> None:
        """Idempotent: an existing (film, user) row is left untouched."""
        await self._likes.update_one(
            {'film_id': film_id, 'user_id': user_id},
            {'$setOnInsert': {'created_at': datetime.now(timezone.utc)}},
            upsert=True,
        )

    async def remove_like(self, film_id: int, user_id: int) -> None:
        await self._likes.delete_one({'film_id': film_id, 'user_id': user_id})

    # ---------- READ ----------

    async def find_by_id(self, film_id: int) -> Optional[Film]:
        doc = await self._films.find_one({'film_id': film_id}, {'_id': 0})
        if doc is None:
            return None
        films = await self._assemble([doc])
        return films[0]

    async def find_all(self) -> List[Film]:
        cur = self._films.find({}, {'_id': 0}).sort('film_id', 1)
        docs = [d async for d in cur]
        return await self._assemble(docs)

    # ---------- helpers ----------

    @staticmethod
    def _to_doc(film_id: int, film: Film) -> Dict[str, Any]:
        return {
            'film_id': film_id,
            'name': film.name,
            'description': film.description,
            # BSON не умеет date без времени, храним ISO-строку
            'release_date': film.release_date.isoformat(),
            'duration': film.duration,
            'mpa_id': film.mpa.id if film.mpa else None,
        }

    async def _save_genres(self, film_id: int, genres: List[Genre]) -> None:
        if not genres:
            return
        await self._genres.insert_many([
            {'film_id': film_id, 'genre_id': g.id, 'position': pos}
            for pos, g in enumerate(genres)
        ])

    async def _assemble(self, docs: List[dict]) -> List[Film]:
        """Attach mpa, genres and likes to film rows in bulk."""
        if not docs:
            return []
        film_ids = [d['film_id'] for d in docs]

        genre_rows: Dict[int, List[int]] = defaultdict(list)
        cur = (self._genres.find({'film_id': {'$in': film_ids}}, {'_id': 0})
               .sort([('film_id', 1), ('position', 1)]))
        async for row in cur:
            genre_rows[row['film_id']].append(row['genre_id'])

        likes: Dict[int, set] = defaultdict(set)
        cur = self._likes.find({'film_id': {'$in': film_ids}}, {'_id': 0})
        async for row in cur:
            likes[row['film_id']].add(row['user_id'])

        genre_names = await self._genre_names.find_names(
            gid for ids in genre_rows.values() for gid in ids)
        mpa_names = await self._mpa_names.find_names(
            d['mpa_id'] for d in docs if d.get('mpa_id') is not None)

        films = []
        for doc in docs:
            film_id = doc['film_id']
            mpa_id = doc.get('mpa_id')
            films.append(Film(
                id=film_id,
                name=doc['name'],
                description=doc.get('description'),
                release_date=date.fromisoformat(doc['release_date']),
                duration=doc['duration'],
                mpa=None if mpa_id is None
                else Mpa(id=mpa_id, name=mpa_names.get(mpa_id)),
                genres=[Genre(id=gid, name=genre_names.get(gid))
                        for gid in genre_rows[film_id]],
                likes=likes[film_id],
            ))
        return films
