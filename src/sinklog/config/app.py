"""
Application Configuration.
"""

import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _program_name() -> str:
    """Derive the application name from the running program."""
    argv0 = sys.argv[0] if sys.argv and sys.argv[0] else ""
    name = Path(argv0).name
    if not name or name in {"-c", "-m"}:
        return "python"
    return name


class AppSettings(BaseSettings):
    """Basic application metadata."""

    model_config = SettingsConfigDict(
        env_prefix="SINKLOG_APP_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    name: str = Field(default_factory=_program_name, description="Application name used in paths and records")
