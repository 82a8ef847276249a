"""Typed settings configuration - single source of truth."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Durable preference slot
    preferences_backend: Literal["memory", "sql", "redis"] = "memory"
    preferences_key: str = "preferences"

    # Database (sql backend)
    database_url: str | None = None

    # Cache (redis backend)
    redis_url: str | None = None

    # Simulated upstream latency (milliseconds)
    fetch_delay_ms: int = 1000

    # Single-writer queue for preference mutations
    serialize_preference_writes: bool = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
