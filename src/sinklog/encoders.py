"""
JSON record encoders.

Two strategies produce the same structure:

- PreciseJsonEncoder: orjson, every string escaped for exact JSON validity.
- FallbackJsonEncoder: hand-built text where only double quotes in the message
  and metadata values are backslash-escaped. Output is valid JSON only for ASCII
  text without control characters or backslashes.

Key order is fixed: timestamp, timestamp_epoch, level, message, pid, application,
then ``data`` only when metadata is present.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import orjson

from .config.logging import JsonEncoderMode
from .events import LogEvent


class Encoder(ABC):
    """Turns one LogEvent into one line of JSON text (no trailing newline)."""

    mode: JsonEncoderMode

    @abstractmethod
    def encode(self, event: LogEvent) -> str: ...


def event_record(event: LogEvent) -> dict[str, Any]:
    """Build the ordered record mapping for an event."""
    record: dict[str, Any] = {
        "timestamp": event.timestamp,
        "timestamp_epoch": event.timestamp_epoch,
        "level": event.level,
        "message": event.message,
        "pid": event.pid,
        "application": event.application,
    }
    if event.data:
        record["data"] = {str(k): str(v) for k, v in event.data.items()}
    return record


class PreciseJsonEncoder(Encoder):
    mode = JsonEncoderMode.PRECISE

    def encode(self, event: LogEvent) -> str:
        return orjson.dumps(event_record(event)).decode()


class FallbackJsonEncoder(Encoder):
    mode = JsonEncoderMode.FALLBACK

    @staticmethod
    def _quote(text: str) -> str:
        return text.replace('"', '\\"')

    def encode(self, event: LogEvent) -> str:
        parts = [
            f'"timestamp":"{event.timestamp}"',
            f'"timestamp_epoch":{event.timestamp_epoch}',
            f'"level":"{event.level}"',
            f'"message":"{self._quote(event.message)}"',
            f'"pid":{event.pid}',
            f'"application":"{event.application}"',
        ]
        if event.data:
            pairs = ",".join(f'"{k}":"{self._quote(str(v))}"' for k, v in event.data.items())
            parts.append(f'"data":{{{pairs}}}')
        return "{" + ",".join(parts) + "}"


_ENCODERS: dict[JsonEncoderMode, type[Encoder]] = {
    JsonEncoderMode.PRECISE: PreciseJsonEncoder,
    JsonEncoderMode.FALLBACK: FallbackJsonEncoder,
}


def get_encoder(mode: JsonEncoderMode | str = JsonEncoderMode.PRECISE) -> Encoder:
    """Return the encoder for the configured mode."""
    return _ENCODERS[JsonEncoderMode(mode)]()


__all__ = ["Encoder", "PreciseJsonEncoder", "FallbackJsonEncoder", "event_record", "get_encoder"]
