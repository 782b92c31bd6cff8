from fastapi import Depends

from filmorate_api.db.storage import Storage, get_storage
from filmorate_api.services.film_service import FilmService
from filmorate_api.services.user_service import UserService


async def get_storage_dep() -> Storage:
    # единая точка доступа к выбранному при старте бэкенду
    return await get_storage()


async def get_film_service(
        storage: Storage = Depends(get_storage_dep),
) -> FilmService:
    return FilmService(
        storage.films, storage.users, storage.genres, storage.mpa)


async def get_user_service(
        storage: Storage = Depends(get_storage_dep),
) -> UserService:
    return UserService(storage.users)
