from datetime import date, timedelta
from typing import Any, Dict

from httpx import AsyncClient

from filmorate_api.models.films import FilmCreateRequest
from filmorate_api.models.users import UserCreateRequest

FILMS = "/api/v1/films"
USERS = "/api/v1/users"


def film_payload(**overrides: Any) -> Dict[str, Any]:
    body = {
        "name": "Test Film",
        "description": "Test Description",
        "releaseDate": "2020-01-01",
        "duration": 120,
        "mpa": {"id": 1},
        "genres": [],
    }
    body.update(overrides)
    return body


def user_payload(login: str = "testuser", **overrides: Any) -> Dict[str, Any]:
    body = {
        "email": f"{login}@test.com",
        "login": login,
        "name": "Test User",
        "birthday": "1990-01-01",
    }
    body.update(overrides)
    return body


def new_film(**overrides: Any) -> FilmCreateRequest:
    return FilmCreateRequest.model_validate(film_payload(**overrides))


def new_user(login: str = "testuser", **overrides: Any) -> UserCreateRequest:
    return UserCreateRequest.model_validate(user_payload(login, **overrides))


def tomorrow() -> str:
    return (date.today() + timedelta(days=1)).isoformat()


async def create_film(client: AsyncClient, **overrides: Any) -> dict:
    r = await client.post(FILMS, json=film_payload(**overrides))
    assert r.status_code == 201, r.text
    return r.json()


async def create_user(client: AsyncClient, login: str, **overrides) -> dict:
    r = await client.post(USERS, json=user_payload(login, **overrides))
    assert r.status_code == 201, r.text
    return r.json()
