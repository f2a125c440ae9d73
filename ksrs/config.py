"""
Configuration settings for ksrs.

Uses Pydantic Settings for environment variable management with .env file support.
All variables are prefixed with KSRS_ (e.g. KSRS_STORAGE_DIR=~/.ksrs).
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="KSRS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Storage
    # ========================================
    storage_dir: Path = Field(
        default=Path("./storage"),
        description="Directory holding the item and srs store files",
    )
    day_cutoff_hour: int = Field(
        default=4,
        ge=0,
        le=23,
        description="Local hour at which a new review day starts",
    )

    # ========================================
    # Study Session
    # ========================================
    new_count: int = Field(
        default=8,
        ge=0,
        description="New kanji introduced per session",
    )
    max_reviews: int = Field(
        default=20,
        ge=0,
        description="Maximum reviews per session (0 for all)",
    )

    # ========================================
    # Display
    # ========================================
    future_limit: int = Field(
        default=20,
        ge=0,
        description="Upcoming reviews shown by 'info'",
    )
    display_limit: int = Field(
        default=40,
        ge=1,
        description="Literals printed per line before truncating with '...'",
    )

    # ========================================
    # Lookup
    # ========================================
    lookup_url: str = Field(
        default="https://jotoba.de/search/{query}?t={search_type}",
        description="Dictionary search URL template",
    )
    kanji_search_type: int = Field(
        default=1,
        description="Search type parameter for kanji lookups",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging verbosity level",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (None for stderr only)",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
