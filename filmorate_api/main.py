import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from filmorate_api.api.http_utils import (
    request_validation_handler, unhandled_error_handler,
)
from filmorate_api.api.v1.films import router as films_router
from filmorate_api.api.v1.references import genres_router, mpa_router
from filmorate_api.api.v1.users import router as users_router
from filmorate_api.core.config import settings
from filmorate_api.core.logger import setup_json_logging, shutdown_logging
from filmorate_api.core.middleware import RequestContextMiddleware
from filmorate_api.core.sentry import init_sentry
from filmorate_api.db.storage import close_storage, get_storage


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 1) логи до всего
    setup_json_logging(service=settings.app_name)
    init_sentry(settings.sentry_dsn, environment=settings.env)

    # 2) выбираем бэкенд; для mongo тут же индексы и справочники
    await get_storage()

    try:
        yield
    finally:
        await close_storage()
        shutdown_logging()


app = FastAPI(title="Filmorate", lifespan=lifespan)

app.add_middleware(RequestContextMiddleware)
app.add_exception_handler(RequestValidationError, request_validation_handler)
app.add_exception_handler(Exception, unhandled_error_handler)

# приглушим штатный uvicorn-access, чтобы не было дублей
logging.getLogger("uvicorn.access").setLevel("WARNING")


@app.get("/health")
def health():
    return {"status": "ok", "storage": settings.storage_backend}


app.include_router(films_router)
app.include_router(users_router)
app.include_router(genres_router)
app.include_router(mpa_router)
