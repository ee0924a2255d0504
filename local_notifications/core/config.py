"""
Application configuration using Pydantic Settings.

Values are read from environment variables (and an optional .env file).
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===========================================
    # Environment
    # ===========================================
    ENVIRONMENT: Literal["local", "test"] = "local"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # ===========================================
    # Database (repeat interval side store)
    # ===========================================
    DATABASE_URL: str = "sqlite+aiosqlite:///./notifications.db"

    # Keep the user's repeat interval next to the scheduled trigger.
    # When disabled, the interval is guessed from the trigger kind on reload.
    PERSIST_REPEAT_INTERVALS: bool = True

    # ===========================================
    # Scheduling
    # ===========================================
    # Time zone used to break a fire date into calendar components
    CALENDAR_TIMEZONE: str = "UTC"

    # How long a surfaced error message stays visible
    ERROR_DISPLAY_SECONDS: float = 3.0

    # ===========================================
    # In-memory backend
    # ===========================================
    # Answer given the first time authorization is requested
    SIMULATED_AUTHORIZATION_RESPONSE: Literal[
        "authorized", "denied", "provisional", "ephemeral"
    ] = "authorized"

    # ===========================================
    # Server
    # ===========================================
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"]
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.
    """
    return Settings()
