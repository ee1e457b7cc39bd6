"""
Application settings and configuration management.

Uses Pydantic Settings for validation and environment variable support.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DrawSettings(BaseSettings):
    """Draw engine configuration."""

    default_weight: int = Field(
        default=50,
        ge=0,
        le=100,
        description="Weight given to entries whose weight is missing or not a number",
    )
    clean_results: bool = Field(
        default=False,
        description="Render dice results as the bare number, without the '(2d6+1)' notation",
    )
    match_mode: Literal["OR", "AND"] = Field(
        default="OR",
        description="Default tag match mode when filtering by several tags",
    )
    max_pool_depth: int = Field(
        default=8,
        ge=1,
        description="Maximum number of pool redirects followed in a single draw",
    )
    seed: int | None = Field(
        default=None,
        description="Seed for the random source. None means a fresh, unseeded source.",
    )

    model_config = SettingsConfigDict(env_prefix="DRAW_")


class Settings(BaseSettings):
    """Main application settings."""

    # Environment
    environment: Literal["development", "production"] = Field(
        default="development", description="Deployment environment"
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    log_file: Path | None = Field(default=None, description="Log file path")

    # Data
    tables_path: Path | None = Field(
        default=None,
        description="Default JSON table book used when --book is not given",
    )

    # Sub-configurations
    draw: DrawSettings = Field(default_factory=DrawSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",  # Ignore extra fields from .env (for future expansion)
    )


def load_settings(env_file: str | Path | None = None) -> Settings:
    """
    Load settings from file and environment.

    Args:
        env_file: Path to .env file (optional, defaults to .env in the
            working directory)

    Returns:
        Loaded settings instance
    """
    if env_file:
        return Settings(_env_file=env_file)
    return Settings()
