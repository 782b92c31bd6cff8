from http import HTTPStatus
from typing import List

from fastapi import APIRouter, Depends, Query

from filmorate_api.api.http_utils import handle_service_errors
from filmorate_api.dependencies import get_film_service
from filmorate_api.models.films import (
    Film, FilmCreateRequest, FilmUpdateRequest,
)
from filmorate_api.services.film_service import FilmService

router = APIRouter(prefix="/api/v1/films", tags=["films"])


@router.post("", response_model=Film, status_code=HTTPStatus.CREATED)
@handle_service_errors()
async def add_film(
    body: FilmCreateRequest,
    svc: FilmService = Depends(get_film_service),
):
    return await svc.add(body)


@router.put("", response_model=Film, status_code=HTTPStatus.OK)
@handle_service_errors()
async def update_film(
    body: FilmUpdateRequest,
    svc: FilmService = Depends(get_film_service),
):
    return await svc.update(body)


@router.get("", response_model=List[Film], status_code=HTTPStatus.OK)
async def list_films(svc: FilmService = Depends(get_film_service)):
    return await svc.find_all()


# /popular объявлен раньше /{film_id}, иначе роут его перехватит
@router.get("/popular", response_model=List[Film], status_code=HTTPStatus.OK)
@handle_service_errors()
async def popular_films(
    count: int = Query(10, ge=1),
    svc: FilmService = Depends(get_film_service),
):
    return await svc.get_popular_films(count)


@router.get("/{film_id}", response_model=Film, status_code=HTTPStatus.OK)
@handle_service_errors()
async def get_film(
    film_id: int,
    svc: FilmService = Depends(get_film_service),
):
    return await svc.find_by_id(film_id)


@router.put("/{film_id}/like/{user_id}",
            response_model=Film,
            status_code=HTTPStatus.OK)
@handle_service_errors()
async def like_film(
    film_id: int,
    user_id: int,
    svc: FilmService = Depends(get_film_service),
):
    return await svc.like(film_id, user_id)


@router.delete("/{film_id}/like/{user_id}",
               response_model=Film,
               status_code=HTTPStatus.OK)
@handle_service_errors()
async def delete_like(
    film_id: int,
    user_id: int,
    svc: FilmService = Depends(get_film_service),
):
    return await svc.delete_like(film_id, user_id)
