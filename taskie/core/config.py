from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application-wide configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow",
    )

    app_env: Literal["development", "production", "test"] = Field(default="development", validation_alias="APP_ENV")
    app_port: int = Field(default=8000, validation_alias="APP_PORT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    database_url: str = Field(validation_alias="DATABASE_URL")

    work_start: str = Field(default="09:00", validation_alias="WORK_START")
    work_end: str = Field(default="18:00", validation_alias="WORK_END")
    days_to_schedule: int = Field(default=7, gt=0, validation_alias="DAYS_TO_SCHEDULE")
    snap_minutes: int = Field(default=15, gt=0, validation_alias="SNAP_MINUTES")
    scheduler_timezone: str = Field(default="UTC", validation_alias="SCHEDULER_TIMEZONE")


@lru_cache(1)
def get_settings() -> Settings:
    """Return cached settings instance to avoid reparsing env variables."""

    return Settings()  # type: ignore[call-arg]
