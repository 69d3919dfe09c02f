"""Configuration management using pydantic-settings."""

from .settings import (
    LoggingSettings,
    MechaSettings,
    ServerSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "LoggingSettings",
    "MechaSettings",
    "ServerSettings",
    "clear_settings_cache",
    "get_settings",
]
