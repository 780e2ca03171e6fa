"""Environment-based application settings. Read-only; no business logic."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="text-filter-service", description="Service name")
    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Runtime environment"
    )
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Log level name")

    # Filtering (see config/filtering for per-run profiles)
    filter_profile: str = Field(default="active", description="Profile used when a request names none")
    max_worker_count: int = Field(default=32, ge=1, description="Largest worker_count accepted over HTTP")
    max_text_length: int = Field(
        default=10_000_000, ge=1, description="Largest inline text accepted by POST /filter (characters)"
    )
    data_dir: Path = Field(
        default=Path("data"), description="Root for POST /filter/file paths; nothing outside it is read or written"
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance. Use for app lifetime."""
    return Settings()
