"""Configuration management using Pydantic Settings."""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="KAMUSI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database. Unset means: resolve through the fallback chain in kamusi.db
    db_path: Path | None = None

    # Connection pool (SQLAlchemy QueuePool: size = idle, overflow = open - idle)
    max_open_connections: int = Field(default=25, ge=1)
    max_idle_connections: int = Field(default=5, ge=1)
    connection_max_lifetime: float = Field(default=300.0, gt=0)
    busy_timeout: float = Field(default=5.0, ge=0)
    acquire_timeout: float = Field(default=30.0, gt=0)

    # Batch lookups
    search_workers: int = Field(default=8, ge=1)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    log_format: Literal["json", "console"] = "console"


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
