"""Configuration settings for ranklog.

Uses Pydantic Settings to load environment variables (and an optional
.env file) for the database, the summarization collaborator and logging.
A missing summarizer API key is not an error: champion summaries then
always use the deterministic fallback.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ranklog.db.session import DEFAULT_DATABASE_URL
from ranklog.summarizers.chat import DEFAULT_BASE_URL, DEFAULT_MODEL, DEFAULT_TIMEOUT_S


class Settings(BaseSettings):
    # Database
    database_url: str = Field(DEFAULT_DATABASE_URL, alias="RANKLOG_DATABASE_URL")

    # Summarization collaborator
    summarizer_api_key: str | None = Field(None, alias="OPENAI_API_KEY")
    summarizer_base_url: str = Field(DEFAULT_BASE_URL, alias="RANKLOG_SUMMARIZER_BASE_URL")
    summarizer_model: str = Field(DEFAULT_MODEL, alias="RANKLOG_SUMMARIZER_MODEL")
    summarizer_timeout_s: float = Field(
        DEFAULT_TIMEOUT_S, gt=0, alias="RANKLOG_SUMMARIZER_TIMEOUT_S"
    )

    # Stats
    leaderboard_size: int = Field(10, ge=8, le=10, alias="RANKLOG_LEADERBOARD_SIZE")

    # Application
    log_level: str = Field("INFO", alias="RANKLOG_LOG_LEVEL")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"],
        alias="RANKLOG_CORS_ORIGINS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once with a plain formatter."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


__all__ = ["Settings", "configure_logging", "get_settings"]
