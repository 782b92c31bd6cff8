"""Pick the storage backend once, at startup, from settings."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from motor.motor_asyncio import AsyncIOMotorDatabase

from filmorate_api.core.config import settings
from filmorate_api.db.mongo import close_client, get_mongo_db
from filmorate_api.models.references import GENRES, MPA_RATINGS, Genre, Mpa
from filmorate_api.services.repositories.base import (
    FilmStorage, ReferenceStorage, UserStorage,
)
from filmorate_api.services.repositories.films_repo import FilmsRepo
from filmorate_api.services.repositories.memory_repo import (
    InMemoryFilmsRepo, InMemoryReferenceRepo, InMemoryUsersRepo,
)
from filmorate_api.services.repositories.references_repo import (
    GenresRepo, MpaRepo,
)
from filmorate_api.services.repositories.users_repo import UsersRepo

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Storage:
    films: FilmStorage
    users: UserStorage
    genres: ReferenceStorage[Genre]
    mpa: ReferenceStorage[Mpa]


_storage: Storage | None = None


def memory_storage() -> Storage:
    return Storage(
        films=InMemoryFilmsRepo(),
        users=InMemoryUsersRepo(),
        genres=InMemoryReferenceRepo(GENRES),
        mpa=InMemoryReferenceRepo(MPA_RATINGS),
    )


async def mongo_storage(db: AsyncIOMotorDatabase) -> Storage:
    """Build Mongo repositories, ensure indexes and seed lookups."""
    films, users = FilmsRepo(db), UsersRepo(db)
    genres, mpa = GenresRepo(db), MpaRepo(db)
    await films.ensure_indexes()
    await users.ensure_indexes()
    await genres.ensure_seeded()
    await mpa.ensure_seeded()
    return Storage(films=films, users=users, genres=genres, mpa=mpa)


async def get_storage() -> Storage:
    global _storage
    if _storage is None:
        if settings.storage_backend == "mongo":
            _storage = await mongo_storage(await get_mongo_db())
        else:
            _storage = memory_storage()
        log.info("storage_ready",
                 extra={"backend": settings.storage_backend})
    return _storage


async def close_storage() -> None:
    """Drop the active backend; in-memory data does not survive this."""
    global _storage
    _storage = None
    await close_client()
