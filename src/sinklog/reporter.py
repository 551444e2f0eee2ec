"""
Console-only failure reporting.

Used whenever a sink write fails. It never touches the file, JSON or syslog sinks,
so a broken sink cannot recurse into itself, and it never raises.
"""

from __future__ import annotations

import sys
from datetime import datetime
from typing import Any, Optional

from .formatters import render, use_color_for


class ExceptionReporter:
    """Writes ``<timestamp> [EXCEPTION] <message>`` bold red to standard error."""

    LABEL = "EXCEPTION"

    def __init__(
        self,
        *,
        date_format: str = "%Y-%m-%d %H:%M:%S",
        color: str = "auto",
        stream: Optional[Any] = None,
    ) -> None:
        self._date_format = date_format
        self._color = color
        self._stream = stream

    def report(self, message: Any) -> None:
        try:
            stream = self._stream or sys.stderr
            line = f"{datetime.now().strftime(self._date_format)} [{self.LABEL}] {message}"
            if use_color_for(stream, self._color):
                line = render(line, "red", bold=True)
            stream.write(line + "\n")
            stream.flush()
        except Exception:
            pass


__all__ = ["ExceptionReporter"]
