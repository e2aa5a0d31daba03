"""Configuration management for reasoning-structures.

This module provides the Settings class for managing configuration with
support for environment variables and .env files.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration settings.

    Settings can be configured via environment variables with the
    REASONING_STRUCTURES_ prefix, or via a .env file.

    Example:
        REASONING_STRUCTURES_LOG_LEVEL=DEBUG
        REASONING_STRUCTURES_MAX_SESSIONS=20
    """

    model_config = SettingsConfigDict(
        env_prefix="REASONING_STRUCTURES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format",
    )

    # Session settings
    session_timeout: int = Field(
        default=3600, ge=60, description="Session timeout in seconds (minimum 60)"
    )
    max_sessions: int = Field(
        default=100, ge=1, description="Maximum number of concurrent sessions"
    )

    # Reasoning settings
    default_problem: str = Field(
        default="Initial Problem",
        min_length=1,
        description="Problem statement used for a tree root when none is given",
    )
    reflection_recent_steps: int = Field(
        default=5, ge=1, description="Number of recent chain steps shown when reflecting"
    )


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance.

    Returns:
        The global Settings instance, created on first access.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def configure_settings(**overrides: Any) -> Settings:
    """Configure settings with overrides.

    Args:
        **overrides: Setting values to override.

    Returns:
        New Settings instance with overrides applied.
    """
    global _settings
    _settings = Settings(**overrides)
    return _settings


__all__ = [
    "Settings",
    "configure_settings",
    "get_settings",
]
