"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key for signing JWT tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        description="Number of minutes before dashboard access tokens expire",
        gt=0,
    )
    subscriber_token_expire_minutes: int = Field(
        default=60 * 24 * 15,
        description="Number of minutes before widget subscriber tokens expire",
        gt=0,
    )
    widget_page_size: int = Field(
        default=10,
        description="Number of messages returned per feed page",
        gt=0,
    )
    app_timezone: str = Field(
        default="UTC",
        description="Timezone used when stamping seen/read dates",
    )
    log_level: str = Field(default="INFO", description="Root logger level")
    cors_origins: list[str] = Field(
        default_factory=list,
        description="Origins allowed to call the widget API from the browser",
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
