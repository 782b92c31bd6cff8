import logging
from functools import wraps
from http import HTTPStatus

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from filmorate_api.core.exceptions import NotFoundError, ValidationError

log = logging.getLogger(__name__)

ERRMAP: dict[str, HTTPStatus] = {
    NotFoundError.code: HTTPStatus.NOT_FOUND,
    ValidationError.code: HTTPStatus.BAD_REQUEST,
}


def error_body(error: str, description: str) -> dict:
    return {"error": error, "description": description}


def handle_service_errors(mapping: dict[str, HTTPStatus] = ERRMAP):
    """
    Переводит RuntimeError сервисного слоя в HTTPException.
    Ключ ищется в атрибуте ``code`` исключения, иначе в тексте.
    """
    def decorator(fn):
        @wraps(fn)
        async def wrapper(*args, **kwargs):
            try:
                return await fn(*args, **kwargs)
            except RuntimeError as e:
                code = getattr(e, "code", None)
                msg = str(e)
                for key, status in mapping.items():
                    if key == code or key in msg:
                        log.warning(key, extra={"description": msg})
                        raise HTTPException(
                            status_code=status,
                            detail=error_body(key, msg))
                # нераспознанное отдаём как 500
                log.exception("internal_error")
                raise HTTPException(
                    status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
                    detail=error_body("internal_error", "Internal error"))
        return wrapper
    return decorator


def not_found_if_none(value, description: str = "Object not found"):
    """Если результат None, бросаем 404."""
    if value is None:
        raise HTTPException(
            status_code=HTTPStatus.NOT_FOUND,
            detail=error_body(NotFoundError.code, description))
    return value


async def request_validation_handler(
        request: Request,
        exc: RequestValidationError) -> JSONResponse:
    """Body/path/query constraint failures are reported as 400."""
    log.warning("request_validation_error",
                extra={"path": request.url.path})
    return JSONResponse(
        status_code=HTTPStatus.BAD_REQUEST,
        content={"detail": error_body(
            ValidationError.code,
            "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in exc.errors()))},
    )


async def unhandled_error_handler(
        request: Request,
        exc: Exception) -> JSONResponse:
    """Anything not translated above becomes a structured 500."""
    log.error("unhandled_error",
              exc_info=exc,
              extra={"path": request.url.path})
    return JSONResponse(
        status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
        content={"detail": error_body("internal_error", "Internal error")},
    )
