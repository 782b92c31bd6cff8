import os

import pytest
from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from filmorate_api.core.config import settings
from filmorate_api.main import app
from filmorate_api.models.references import GENRES, MPA_RATINGS
from filmorate_api.services.film_service import FilmService
from filmorate_api.services.repositories.memory_repo import (
    InMemoryFilmsRepo, InMemoryReferenceRepo, InMemoryUsersRepo,
)
from filmorate_api.services.user_service import UserService


@pytest.fixture(scope="session", autouse=True)
def test_env():
    os.environ["STORAGE_BACKEND"] = "memory"
    os.environ["SENTRY_DSN"] = ""  # отключаем Sentry
    settings.storage_backend = "memory"
    settings.sentry_dsn = ""


@pytest.fixture
async def client():
    # lifespan на каждый тест: хранилище в памяти создаётся заново
    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport,
                               base_url="http://test") as ac:
            yield ac


@pytest.fixture
async def lenient_client():
    """Client that returns 500 responses instead of re-raising app errors."""
    async with LifespanManager(app):
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport,
                               base_url="http://test") as ac:
            yield ac


@pytest.fixture
def users_repo() -> InMemoryUsersRepo:
    return InMemoryUsersRepo()


@pytest.fixture
def film_service(users_repo) -> FilmService:
    return FilmService(
        InMemoryFilmsRepo(),
        users_repo,
        InMemoryReferenceRepo(GENRES),
        InMemoryReferenceRepo(MPA_RATINGS),
    )


@pytest.fixture
def user_service(users_repo) -> UserService:
    return UserService(users_repo)


@pytest.fixture
def mongo_db():
    """In-process Motor double; every test gets an empty database."""
    return AsyncMongoMockClient()["filmorate_test"]
