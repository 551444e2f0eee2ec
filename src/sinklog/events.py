"""
Transient log event model.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, Mapping


def pair_metadata(tokens: Iterable[Any]) -> dict[str, str]:
    """Fold a flat ``key, value, key, value, ...`` sequence into an ordered mapping.

    A trailing key without a value is dropped silently.
    """
    items = list(tokens)
    data: dict[str, str] = {}
    for i in range(0, len(items) - 1, 2):
        data[str(items[i])] = str(items[i + 1])
    return data


@dataclass(frozen=True)
class LogEvent:
    """One log call, captured at dispatch time and never retained."""

    timestamp: str
    # Human-formatted timestamp (configured date format).

    timestamp_epoch: int
    # Same instant in whole epoch seconds.

    level: str
    # Canonical uppercase token as supplied by the caller (may be unknown).

    message: str

    pid: int

    application: str

    data: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def capture(
        cls,
        *,
        level: str,
        message: str,
        application: str,
        date_format: str,
        data: Mapping[str, str] | None = None,
        now: datetime | None = None,
    ) -> "LogEvent":
        moment = now or datetime.now()
        return cls(
            timestamp=moment.strftime(date_format),
            timestamp_epoch=int(moment.timestamp()),
            level=str(level).upper(),
            message=str(message),
            pid=os.getpid(),
            application=application,
            data=dict(data or {}),
        )


__all__ = ["LogEvent", "pair_metadata"]
