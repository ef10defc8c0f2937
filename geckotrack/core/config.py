from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment."""

    app_name: str = Field(default="GeckoTrack API", validation_alias="APP_NAME")
    environment: str = Field(default="local", validation_alias="APP_ENV")
    version: str = Field(default="0.1.0")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    database_url: str = Field(
        default="sqlite+aiosqlite:///./geckotrack.db",
        validation_alias="DATABASE_URL",
    )
    # Privileged sentinel login; resolves without a student record
    teacher_username: str = Field(default="admin", validation_alias="TEACHER_USERNAME")
    teacher_name: str = Field(default="Mr. Teacher", validation_alias="TEACHER_NAME")
    seed_roster: bool = Field(default=True, validation_alias="SEED_ROSTER")

    @property
    def async_database_url(self) -> str:
        """Convert database URL to an async driver URL."""
        url = self.database_url
        # Hosted Postgres hands out postgresql:// but the engine needs postgresql+asyncpg://
        if url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        elif url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql+asyncpg://", 1)
        return url

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow",
        populate_by_name=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""
    return Settings()
