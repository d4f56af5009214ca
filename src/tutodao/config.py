"""Environment-based settings."""

from __future__ import annotations

from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATABASE_URL = "file:tutodao?mode=memory&cache=shared"


class DatabaseSettings(BaseSettings):
    """Connection provider settings (``TUTODAO_DB_*``).

    Values are handed to the driver as-is; ``isolation_level`` is a
    driver-specific name such as ``IMMEDIATE`` (sqlite) or ``REPEATABLE_READ``
    (postgresql).
    """

    url: str = Field(default=DEFAULT_DATABASE_URL)
    username: str | None = None
    password: SecretStr | None = None
    driver: Literal["sqlite", "postgresql"] = "sqlite"
    max_pool_size: int = Field(default=10, ge=1)
    auto_commit: bool = True
    isolation_level: str | None = None
    pool_timeout: float = Field(default=30.0, gt=0)

    model_config = SettingsConfigDict(
        env_prefix="TUTODAO_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )


class Settings(BaseSettings):
    """Application settings (``TUTODAO_*``)."""

    log_level: str = Field(default="WARNING")
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)

    model_config = SettingsConfigDict(
        env_prefix="TUTODAO_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )
