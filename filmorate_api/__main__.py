"""Run the API with uvicorn: ``python -m filmorate_api``."""

import uvicorn

from filmorate_api.core.config import settings


def main() -> None:
    uvicorn.run(
        "filmorate_api.main:app",
        host=settings.host,
        port=settings.port,
        # доступ пишет наш middleware, штатный лог uvicorn не нужен
        access_log=False,
    )


if __name__ == "__main__":
    main()
