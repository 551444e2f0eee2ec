"""
Logging Configuration.
"""

from enum import Enum
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class JsonEncoderMode(str, Enum):
    PRECISE = "precise"
    FALLBACK = "fallback"


class ColorMode(str, Enum):
    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


DEFAULT_ROTATION_SIZE = 5 * 1024 * 1024


class LoggingSettings(BaseSettings):
    """Sink configuration, read once at startup."""

    model_config = SettingsConfigDict(
        env_prefix="SINKLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    date_format: str = Field(default="%Y-%m-%d %H:%M:%S", description="Human timestamp format")
    file_path: Optional[str] = Field(
        default=None,
        description="Flat-file sink target; defaults to /tmp/<app>.log, empty string disables it",
    )
    json_enabled: bool = Field(default=False, description="Enable the JSON sink")
    json_path: Optional[str] = Field(
        default=None,
        description="JSON sink target; defaults to /tmp/<app>.log.json, '-' writes to stdout",
    )
    json_encoder: JsonEncoderMode = Field(default=JsonEncoderMode.PRECISE, description="JSON encoding strategy")
    syslog_enabled: bool = Field(default=False, description="Enable the syslog sink (wins over JSON)")
    syslog_tag: Optional[str] = Field(default=None, description="Syslog identifier; defaults to the app name")
    syslog_facility: str = Field(default="local0", description="Syslog facility")
    console_enabled: bool = Field(default=True, description="Enable the console sink")
    console_threshold: str = Field(default="INFO", description="Least severe level shown on the console")
    console_color: ColorMode = Field(default=ColorMode.AUTO, description="ANSI styling on the console")
    rotation_size: int = Field(default=DEFAULT_ROTATION_SIZE, ge=0, description="Rotate files larger than this")
    debug_level: int = Field(default=0, ge=0, description="0=off, 1=exception trap, >=2=execution trace")
