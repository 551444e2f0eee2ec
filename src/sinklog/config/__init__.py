"""
sinklog Configuration Module.

Each sub-module owns one concern with its own environment variable prefix:

    SINKLOG_APP_*   application identity (AppSettings)
    SINKLOG_*       sink configuration (LoggingSettings)

Usage:
    from sinklog.config import settings

    settings.app.name
    settings.logging.rotation_size
"""

from functools import cached_property

from pydantic_settings import BaseSettings, SettingsConfigDict

from .app import AppSettings
from .logging import ColorMode, JsonEncoderMode, LoggingSettings


class Settings(BaseSettings):
    """Composite settings aggregating the configuration domains."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @cached_property
    def app(self) -> AppSettings:
        return AppSettings()

    @cached_property
    def logging(self) -> LoggingSettings:
        return LoggingSettings()


# Singleton instance
settings = Settings()

__all__ = [
    "Settings",
    "settings",
    "AppSettings",
    "LoggingSettings",
    "JsonEncoderMode",
    "ColorMode",
]
