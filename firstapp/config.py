"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Frozen so a Settings instance can be used directly as `Env.config`.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    app_name: str = Field(default="firstapp")
    environment: Literal["development", "test", "production"] = Field(default="development")

    # Database
    database_url: str = Field(default="sqlite:///firstapp.db")
    db_pool_mode: Literal["queue", "null"] = Field(default="queue")
    db_pool_size: int = Field(default=5)
    db_pool_max_overflow: int = Field(default=10)
    db_pool_timeout_seconds: int = Field(default=30)
    db_pool_recycle_seconds: int = Field(default=1800)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")
    log_format: Literal["json", "text"] = Field(default="json")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
