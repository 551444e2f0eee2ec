"""
Log sink abstractions and concrete implementations.

Every sink writes one event per call with append-open-write-close semantics; no
file handle is held between calls. Failures surface as SinkWriteFailure and are
isolated by the dispatcher.
"""

from __future__ import annotations

import stat
import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Optional, Protocol

from .encoders import Encoder
from .events import LogEvent
from .exceptions import SinkWriteFailure
from .formatters import format_line, render, use_color_for
from .levels import ERROR_STREAM_LEVELS, SeverityLevel, color_of
from .rotation import rotate_if_needed

if TYPE_CHECKING:
    from .reporter import ExceptionReporter

Renderer = Callable[[str, str, bool], str]
RotationCallback = Callable[[Path], None]

STDOUT_TARGET = "-"


def _append(path: str | Path, payload: str, *, sink: str) -> None:
    try:
        with open(path, "a", encoding="utf-8") as handle:
            handle.write(payload)
    except OSError as exc:
        raise SinkWriteFailure(sink=sink, target=str(path), reason=str(exc)) from exc


# =============================================================================
# Sink Abstraction (Strategy Pattern)
# =============================================================================


class BaseSink(ABC):
    """Abstract base class for log sinks."""

    name: str = "sink"

    @abstractmethod
    def emit(self, event: LogEvent, severity: SeverityLevel) -> None:
        """Write one event. ``severity`` is the classified level (ERROR for unknown tokens)."""
        ...

    def close(self) -> None:
        """Release resources. Sinks hold none between calls by default."""


class ConsoleSink(BaseSink):
    """Styled console output, routed to stderr for ERROR and more severe levels.

    Args:
        color: "auto" (style only on a TTY), "always" or "never"
        renderer: ``render(text, color, bold) -> str`` styling capability
        stdout / stderr: explicit streams; default to the live ``sys`` streams
    """

    name = "console"

    def __init__(
        self,
        *,
        color: str = "auto",
        renderer: Renderer = render,
        stdout: Optional[Any] = None,
        stderr: Optional[Any] = None,
    ):
        self._color = color
        self._renderer = renderer
        self._stdout = stdout
        self._stderr = stderr

    def stream_for(self, severity: SeverityLevel) -> Any:
        if severity in ERROR_STREAM_LEVELS:
            return self._stderr or sys.stderr
        return self._stdout or sys.stdout

    def emit(self, event: LogEvent, severity: SeverityLevel) -> None:
        stream = self.stream_for(severity)
        line = format_line(event)
        if use_color_for(stream, self._color):
            line = self._renderer(line, color_of(event.level), True)
        stream.write(line + "\n")
        stream.flush()


class FileSink(BaseSink):
    """Flat-file sink: rotate, ensure the directory, append one line."""

    name = "file"

    def __init__(
        self,
        path: str | Path,
        *,
        max_bytes: int,
        reporter: "ExceptionReporter",
        on_rotated: Optional[RotationCallback] = None,
    ):
        self._path = Path(path)
        self._max_bytes = max_bytes
        self._reporter = reporter
        self._on_rotated = on_rotated

    @property
    def path(self) -> Path:
        return self._path

    def emit(self, event: LogEvent, severity: SeverityLevel) -> None:
        rotate_if_needed(self._path, self._max_bytes, reporter=self._reporter, on_rotated=self._on_rotated)
        _append(self._path, format_line(event) + "\n", sink=self.name)


class JsonSink(BaseSink):
    """Structured JSON lines, to a file (rotated) or to a live stream (never rotated)."""

    name = "json"

    def __init__(
        self,
        target: str | Path,
        *,
        encoder: Encoder,
        max_bytes: int,
        reporter: "ExceptionReporter",
        on_rotated: Optional[RotationCallback] = None,
    ):
        self._target = str(target)
        self._encoder = encoder
        self._max_bytes = max_bytes
        self._reporter = reporter
        self._on_rotated = on_rotated

    @property
    def encoder(self) -> Encoder:
        return self._encoder

    def is_stream(self) -> bool:
        """True for ``-`` or an existing non-regular file (tty, pipe, /dev/stdout)."""
        if self._target == STDOUT_TARGET:
            return True
        try:
            mode = Path(self._target).stat().st_mode
        except OSError:
            return False
        return not stat.S_ISREG(mode)

    def emit(self, event: LogEvent, severity: SeverityLevel) -> None:
        payload = self._encoder.encode(event) + "\n"

        if self._target == STDOUT_TARGET:
            sys.stdout.write(payload)
            sys.stdout.flush()
            return

        if not self.is_stream():
            rotate_if_needed(self._target, self._max_bytes, reporter=self._reporter, on_rotated=self._on_rotated)
        _append(self._target, payload, sink=self.name)


# =============================================================================
# Syslog
# =============================================================================


class SyslogTransport(Protocol):
    """System log transport: ``send(tag, "<facility>.<severity>", message, pid)``."""

    def send(self, tag: str, priority: str, message: str, pid: int) -> None: ...


class StdlibSyslogTransport:
    """Transport backed by the POSIX ``syslog`` module.

    ``LOG_PID`` stamps each record with the calling process id.
    """

    def send(self, tag: str, priority: str, message: str, pid: int) -> None:
        import syslog

        facility_name, _, severity = priority.partition(".")
        facility = getattr(syslog, f"LOG_{facility_name.upper()}", None)
        if facility is None or not severity.isdigit():
            raise ValueError(f"invalid syslog priority '{priority}'")

        syslog.openlog(ident=tag, logoption=syslog.LOG_PID, facility=facility)
        try:
            syslog.syslog(facility | int(severity), message)
        finally:
            syslog.closelog()


class SyslogSink(BaseSink):
    """Sends ``"<LEVEL>: <message>"`` to the system log."""

    name = "syslog"

    def __init__(self, *, tag: str, facility: str, transport: SyslogTransport):
        self._tag = tag
        self._facility = facility
        self._transport = transport

    def emit(self, event: LogEvent, severity: SeverityLevel) -> None:
        priority = f"{self._facility}.{int(severity)}"
        try:
            self._transport.send(self._tag, priority, f"{event.level}: {event.message}", event.pid)
        except Exception as exc:
            raise SinkWriteFailure(sink=self.name, target=f"{self._tag}@{priority}", reason=str(exc)) from exc


__all__ = [
    "BaseSink",
    "ConsoleSink",
    "FileSink",
    "JsonSink",
    "SyslogSink",
    "SyslogTransport",
    "StdlibSyslogTransport",
    "STDOUT_TARGET",
]
