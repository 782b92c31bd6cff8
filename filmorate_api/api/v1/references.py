from http import HTTPStatus
from typing import List

from fastapi import APIRouter, Depends

from filmorate_api.api.http_utils import not_found_if_none
from filmorate_api.db.storage import Storage
from filmorate_api.dependencies import get_storage_dep
from filmorate_api.models.references import Genre, Mpa

genres_router = APIRouter(prefix="/api/v1/genres", tags=["genres"])
mpa_router = APIRouter(prefix="/api/v1/mpa", tags=["mpa"])


@genres_router.get("", response_model=List[Genre], status_code=HTTPStatus.OK)
async def list_genres(storage: Storage = Depends(get_storage_dep)):
    return await storage.genres.find_all()


@genres_router.get("/{genre_id}",
                   response_model=Genre,
                   status_code=HTTPStatus.OK)
async def get_genre(
    genre_id: int,
    storage: Storage = Depends(get_storage_dep),
):
    return not_found_if_none(
        await storage.genres.find_by_id(genre_id),
        f"Genre with id = {genre_id} not found")


@mpa_router.get("", response_model=List[Mpa], status_code=HTTPStatus.OK)
async def list_mpa(storage: Storage = Depends(get_storage_dep)):
    return await storage.mpa.find_all()


@mpa_router.get("/{mpa_id}", response_model=Mpa, status_code=HTTPStatus.OK)
async def get_mpa(
    mpa_id: int,
    storage: Storage = Depends(get_storage_dep),
):
    return not_found_if_none(
        await storage.mpa.find_by_id(mpa_id),
        f"MPA rating with id = {mpa_id} not found")
