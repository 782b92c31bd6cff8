# filmorate_api/core/config.py
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "filmorate"
    env: str = Field(default="local")
    host: str = "0.0.0.0"
    port: int = 8080

    # memory: словари в процессе, mongo: коллекции в MongoDB
    storage_backend: Literal["memory", "mongo"] = Field(
        default="memory",
        alias="STORAGE_BACKEND",
    )

    mongo_dsn: str = Field(
        default="mongodb://mongo:27017/filmorate",
        alias="MONGO_DSN"
    )
    mongo_db: str = "filmorate"

    sentry_dsn: str = Field(default="", alias="SENTRY_DSN")

    model_config = SettingsConfigDict(
        env_file="infra/.env",
        extra="ignore",
        populate_by_name=True,
    )


settings = Settings()
