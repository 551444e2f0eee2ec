"""
Event dispatch core.

A Dispatcher holds one immutable SinkConfig and the sinks built from it. Each log
call validates, normalizes, classifies and fans the event out in a fixed order:

    structured sink (syslog, else json) -> file -> console

Every sink is gated independently and every sink failure is reported through
the ExceptionReporter without affecting the remaining sinks.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

from .config import AppSettings, LoggingSettings
from .encoders import get_encoder
from .events import LogEvent, pair_metadata
from .exceptions import InvalidArguments, UnknownLevel
from .levels import SeverityLevel, resolve_level
from .reporter import ExceptionReporter
from .sinks import (
    BaseSink,
    ConsoleSink,
    FileSink,
    JsonSink,
    StdlibSyslogTransport,
    SyslogSink,
    SyslogTransport,
)

DebugHook = Callable[[LogEvent], int]


# =============================================================================
# Configuration
# =============================================================================


@dataclass(frozen=True)
class SinkConfig:
    """Effective sink configuration; replaced as a whole, never mutated."""

    application: str
    date_format: str = "%Y-%m-%d %H:%M:%S"
    console_enabled: bool = True
    console_threshold: str = "INFO"
    console_color: str = "auto"
    file_path: str = ""
    json_enabled: bool = False
    json_path: str = ""
    json_encoder: str = "precise"
    syslog_enabled: bool = False
    syslog_tag: str = ""
    syslog_facility: str = "local0"
    rotation_size: int = 5 * 1024 * 1024
    debug_level: int = 0

    @classmethod
    def from_settings(cls, logging: LoggingSettings, app: AppSettings) -> "SinkConfig":
        name = app.name
        return cls(
            application=name,
            date_format=logging.date_format,
            console_enabled=logging.console_enabled,
            console_threshold=logging.console_threshold,
            console_color=logging.console_color.value,
            file_path=f"/tmp/{name}.log" if logging.file_path is None else logging.file_path,
            json_enabled=logging.json_enabled,
            json_path=f"/tmp/{name}.log.json" if logging.json_path is None else logging.json_path,
            json_encoder=logging.json_encoder.value,
            syslog_enabled=logging.syslog_enabled,
            syslog_tag=logging.syslog_tag or name,
            syslog_facility=logging.syslog_facility,
            rotation_size=logging.rotation_size,
            debug_level=logging.debug_level,
        )

    @property
    def file_enabled(self) -> bool:
        return bool(self.file_path)

    @property
    def threshold_ordinal(self) -> int:
        return int(resolve_level(self.console_threshold)[0])

    @property
    def structured_sink(self) -> Optional[str]:
        """Which of the mutually exclusive structured sinks is active."""
        if self.syslog_enabled:
            return "syslog"
        if self.json_enabled:
            return "json"
        return None

    def with_destinations(
        self,
        *,
        console: Optional[bool] = None,
        json: Optional[bool] = None,
        syslog: Optional[bool] = None,
    ) -> "SinkConfig":
        changes: dict[str, bool] = {}
        if console is not None:
            changes["console_enabled"] = console
        if json is not None:
            changes["json_enabled"] = json
        if syslog is not None:
            changes["syslog_enabled"] = syslog
        return dataclasses.replace(self, **changes)


# =============================================================================
# Debug hook outcome
# =============================================================================


@dataclass(frozen=True)
class DebugOutcome:
    """Exit status of a debug hook invocation."""

    exit_code: int

    @property
    def should_abort(self) -> bool:
        return self.exit_code != 0


class DebuggerAbort(SystemExit):
    """Raised after fan-out when the debug hook asked the caller to abort."""

    def __init__(self, outcome: DebugOutcome):
        super().__init__(outcome.exit_code)
        self.outcome = outcome


# =============================================================================
# Dispatcher
# =============================================================================


class Dispatcher:
    """Fans log events out to the configured sinks."""

    def __init__(
        self,
        config: SinkConfig,
        *,
        syslog_transport: Optional[SyslogTransport] = None,
        debug_hook: Optional[DebugHook] = None,
        reporter: Optional[ExceptionReporter] = None,
        console: Optional[ConsoleSink] = None,
    ):
        self._syslog_transport = syslog_transport or StdlibSyslogTransport()
        self._debug_hook = debug_hook
        self._reporter_override = reporter
        self._console_override = console
        self.last_debug_outcome: Optional[DebugOutcome] = None
        self._apply(config)

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    @property
    def config(self) -> SinkConfig:
        return self._config

    @property
    def reporter(self) -> ExceptionReporter:
        return self._reporter

    def _apply(self, config: SinkConfig) -> None:
        self._config = config
        self._reporter = self._reporter_override or ExceptionReporter(
            date_format=config.date_format, color=config.console_color
        )
        self._console = self._console_override or ConsoleSink(color=config.console_color)
        self._file = FileSink(
            config.file_path,
            max_bytes=config.rotation_size,
            reporter=self._reporter,
            on_rotated=self._note_rotation,
        )
        self._json = JsonSink(
            config.json_path,
            encoder=get_encoder(config.json_encoder),
            max_bytes=config.rotation_size,
            reporter=self._reporter,
            on_rotated=self._note_rotation,
        )
        self._syslog = SyslogSink(
            tag=config.syslog_tag or config.application,
            facility=config.syslog_facility,
            transport=self._syslog_transport,
        )

    def reconfigure(self, config: SinkConfig) -> SinkConfig:
        """Swap in a new configuration and rebuild the sinks."""
        self._apply(config)
        return self._config

    def set_destinations(
        self,
        console: Optional[bool] = None,
        json: Optional[bool] = None,
        syslog: Optional[bool] = None,
    ) -> SinkConfig:
        """Toggle the console, JSON and syslog destinations; returns the new config."""
        self._config = self._config.with_destinations(console=console, json=json, syslog=syslog)
        return self._config

    def set_debug_hook(self, hook: Optional[DebugHook]) -> None:
        self._debug_hook = hook

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    def log(self, level: Optional[str | SeverityLevel] = None, message: Optional[Any] = None, *pairs: Any) -> bool:
        """Emit one event.

        Returns False (and writes nothing) without a level and a message, or when the
        arguments cannot be turned into text.
        """
        if level is None or message is None:
            received = sum(arg is not None for arg in (level, message)) + len(pairs)
            self._reporter.report(InvalidArguments(received=received))
            return False

        if isinstance(level, SeverityLevel):
            level = level.name

        config = self._config
        try:
            event = LogEvent.capture(
                level=str(level),
                message=str(message),
                application=config.application,
                date_format=config.date_format,
                data=pair_metadata(pairs),
            )
        except Exception as exc:
            self._reporter.report(f"Could not build log event: {exc}")
            return False

        severity, known = resolve_level(event.level)
        if not known:
            self._reporter.report(UnknownLevel(event.level))

        suppressed = config.debug_level == 0 and severity == SeverityLevel.DEBUG
        if not suppressed:
            structured = config.structured_sink
            if structured == "syslog":
                self._emit(self._syslog, event, severity)
            elif structured == "json":
                self._emit(self._json, event, severity)
            if config.file_enabled:
                self._emit(self._file, event, severity)

        outcome = self._console_write(config, event, severity)
        if outcome is not None and outcome.should_abort:
            raise DebuggerAbort(outcome)
        return True

    def _emit(self, sink: BaseSink, event: LogEvent, severity: SeverityLevel) -> bool:
        try:
            sink.emit(event, severity)
        except Exception as exc:
            self._reporter.report(exc)
            return False
        return True

    def console_accepts(self, config: SinkConfig, event: LogEvent, severity: SeverityLevel) -> bool:
        if not config.console_enabled:
            return False
        if int(severity) <= config.threshold_ordinal:
            return True
        return config.debug_level > 0 and event.level == SeverityLevel.DEBUG.name

    def _console_write(
        self, config: SinkConfig, event: LogEvent, severity: SeverityLevel
    ) -> Optional[DebugOutcome]:
        if not self.console_accepts(config, event, severity):
            return None
        if not self._emit(self._console, event, severity):
            return None
        if config.debug_level > 0 and event.level == SeverityLevel.ERROR.name and self._debug_hook:
            return self._run_debug_hook(event)
        return None

    def _run_debug_hook(self, event: LogEvent) -> Optional[DebugOutcome]:
        try:
            code = self._debug_hook(event) if self._debug_hook else 0
        except Exception as exc:
            self._reporter.report(f"Debug hook failed: {exc}")
            return None
        outcome = DebugOutcome(exit_code=int(code or 0))
        self.last_debug_outcome = outcome
        return outcome

    def _note_rotation(self, backup: Path) -> None:
        self.log(SeverityLevel.INFO.name, f"Log rotated, previous content moved to {backup}")

    # -------------------------------------------------------------------------
    # Convenience wrappers
    # -------------------------------------------------------------------------

    def debug(self, message: Any, *pairs: Any) -> bool:
        return self.log("DEBUG", message, *pairs)

    def info(self, message: Any, *pairs: Any) -> bool:
        return self.log("INFO", message, *pairs)

    def notice(self, message: Any, *pairs: Any) -> bool:
        return self.log("NOTICE", message, *pairs)

    def warn(self, message: Any, *pairs: Any) -> bool:
        return self.log("WARN", message, *pairs)

    def error(self, message: Any, *pairs: Any) -> bool:
        return self.log("ERROR", message, *pairs)

    def crit(self, message: Any, *pairs: Any) -> bool:
        return self.log("CRIT", message, *pairs)

    def alert(self, message: Any, *pairs: Any) -> bool:
        return self.log("ALERT", message, *pairs)

    def emerg(self, message: Any, *pairs: Any) -> bool:
        return self.log("EMERG", message, *pairs)


__all__ = ["SinkConfig", "Dispatcher", "DebugHook", "DebugOutcome", "DebuggerAbort"]
