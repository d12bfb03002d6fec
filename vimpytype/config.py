"""
Configuration settings for VimpyType.

Uses Pydantic Settings for environment variable management with .env file support.
Every field can be overridden with a VIMPYTYPE_ prefixed variable, e.g.
VIMPYTYPE_DIFFICULTY=medium or VIMPYTYPE_DRILL_MISS_PENALTY=5.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from vimpytype.core.difficulty import Difficulty


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="VIMPYTYPE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Training selection
    # ========================================
    difficulty: Difficulty = Field(
        default=Difficulty.EASY,
        description="Key set used by lessons and drills",
    )
    default_filename: str = Field(
        default="main.py",
        description="File label shown in the status line when none is given",
    )

    # ========================================
    # Timing windows (milliseconds)
    # ========================================
    partial_match_timeout_ms: int = Field(
        default=800,
        ge=1,
        description="Inactivity window before a partial key buffer is cleared (lesson, drill)",
    )
    prefix_timeout_ms: int = Field(
        default=1000,
        ge=1,
        description="Disambiguation window for a pending two-key motion prefix",
    )
    drill_confirm_delay_ms: int = Field(
        default=200,
        ge=0,
        description="Pause after a correct drill key before the next round",
    )
    challenge_advance_delay_ms: int = Field(
        default=1000,
        ge=0,
        description="Pause after a solved challenge before the next one loads",
    )

    # ========================================
    # Scoring
    # ========================================
    drill_hit_points: int = Field(default=10, ge=0)
    drill_miss_penalty: int = Field(default=10, ge=0)
    challenge_points: int = Field(default=100, ge=0)
    challenge_trim_slack: int = Field(
        default=2,
        ge=0,
        description="Extra keys a challenge buffer may grow past its longest sequence",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging level for the stderr sink",
    )
    log_file: str | None = Field(
        default=None,
        description="Optional log file path (rotated at 1 MB)",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
