"""Application configuration."""

import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from typing import Any, Literal

import structlog
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from deckpractice.domain.learning.value_objects import PracticeDirection


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Environment
    ENVIRONMENT: Literal["development", "production", "test"] = "development"

    # Logging; unset means DEBUG in development and INFO elsewhere
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None = None

    # Practice defaults, used when a session is started without options
    PRACTICE_DEFAULT_COUNT: int = 10
    PRACTICE_DEFAULT_RANDOM_ORDER: bool = True
    PRACTICE_DEFAULT_DIRECTION: PracticeDirection = PracticeDirection.FRONT_TO_BACK

    # Caches
    PAGINATION_COUNT_CACHE_TTL_SECONDS: float = 30
    PAGINATION_COUNT_CACHE_MAX_SIZE: int = 500
    KNOWN_CARDS_CACHE_TTL_SECONDS: float = 300

    @field_validator("PRACTICE_DEFAULT_COUNT", mode="after")
    @classmethod
    def clamp_default_count(cls, value: int) -> int:
        """A session always gets at least one card."""
        return max(1, value)

    @field_validator(
        "PAGINATION_COUNT_CACHE_TTL_SECONDS",
        "PAGINATION_COUNT_CACHE_MAX_SIZE",
        "KNOWN_CARDS_CACHE_TTL_SECONDS",
        mode="after",
    )
    @classmethod
    def require_positive(cls, value: float) -> float:
        """Cache sizes and TTLs must be positive."""
        if value <= 0:
            msg = f"must be positive, got {value}"
            raise ValueError(msg)
        return value


def configure_logging(settings: Settings) -> None:
    """
    Route structlog through stdlib logging for this process.

    Production emits one JSON object per line; every other environment uses
    the console renderer. Loggers are cached only in production so tests can
    still capture log output after the process was configured.
    """
    level = settings.LOG_LEVEL or ("DEBUG" if settings.ENVIRONMENT == "development" else "INFO")
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    renderer: Callable[..., Any] = (
        structlog.processors.JSONRenderer()
        if settings.ENVIRONMENT == "production"
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=settings.ENVIRONMENT == "production",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
