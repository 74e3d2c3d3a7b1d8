"""
MockView - Configuration Management.

Uses pydantic-settings for environment variable loading with validation.
"""

import logging
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # API Keys
    # -------------------------------------------------------------------------
    GEMINI_API_KEY: str = ""

    # -------------------------------------------------------------------------
    # Feedback Model Configuration
    # -------------------------------------------------------------------------
    GEMINI_MODEL: str = "gemini-2.5-flash-lite"
    FEEDBACK_TEMPERATURE: float = 0.7
    FEEDBACK_MAX_TOKENS: int = 500

    # -------------------------------------------------------------------------
    # Interview Configuration
    # -------------------------------------------------------------------------
    DEFAULT_QUESTION_COUNT: int = 5
    WEAK_CATEGORY_THRESHOLD: float = 6.0  # Category mean below this is "weak"
    SUCCESS_SCORE: int = 7  # Scores at or above this count as successful
    SESSION_TIMEOUT_HOURS: int = 2

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    DEBUG_MODE: bool = False

    # -------------------------------------------------------------------------
    # Paths
    # -------------------------------------------------------------------------
    ANSWER_STORE_DIR: str = "data/answers"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging() -> None:
    """Configure application logging based on settings."""
    settings = get_settings()

    log_format = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL),
        format=log_format,
        datefmt=date_format,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("google").setLevel(logging.WARNING)
