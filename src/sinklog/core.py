"""
Process-wide logging front door.

Holds the default Dispatcher and wires structlog so that ``get_logger().info(...)``
ends up in the same fan-out as ``log("INFO", ...)``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Sequence

import structlog
from structlog.typing import EventDict, WrappedLogger

from .config import Settings
from .config import settings as default_settings
from .dispatcher import DebugHook, Dispatcher, SinkConfig
from .sinks import SyslogTransport

# =============================================================================
# Global State
# =============================================================================

_dispatcher: Optional[Dispatcher] = None
_uninstall_traps: Optional[Callable[[], None]] = None

# structlog method names that differ from our level tokens
_METHOD_LEVELS = {
    "warning": "WARN",
    "warn": "WARN",
    "exception": "ERROR",
    "err": "ERROR",
    "critical": "CRIT",
    "fatal": "CRIT",
}


def get_dispatcher() -> Dispatcher:
    """Return the process-wide dispatcher, configuring defaults on first use."""
    if _dispatcher is None:
        return configure_logging()
    return _dispatcher


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    if _dispatcher is None:
        configure_logging()
    return structlog.get_logger(_name=name or "root")


# =============================================================================
# Structlog Processors
# =============================================================================


def add_logger_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Carry a non-root logger name as ``logger`` metadata."""
    name = event_dict.pop("_name", "root")
    if name and name != "root":
        event_dict["logger"] = name
    return event_dict


def level_token(method_name: str, event_dict: EventDict) -> str:
    level = str(event_dict.get("level") or method_name).lower()
    return _METHOD_LEVELS.get(level, level.upper())


def dispatch_renderer(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
    """Forward the event into the dispatcher. Returns empty to suppress default output."""
    level = level_token(method_name, event_dict)
    event_dict.pop("level", None)
    message = event_dict.pop("event", "")

    pairs: list[str] = []
    for key, value in event_dict.items():
        pairs.extend((str(key), str(value)))

    get_dispatcher().log(level, message, *pairs)
    return ""


# =============================================================================
# Configuration Logic
# =============================================================================


class _NopFile:
    def write(self, s: str) -> None:
        pass

    def flush(self) -> None:
        pass


class SilentPrintLoggerFactory:
    """Logger factory that returns a logger writing to nowhere."""

    _NOP_FILE = _NopFile()

    def __call__(self, *args: Any) -> structlog.PrintLogger:
        return structlog.PrintLogger(file=self._NOP_FILE)


def _configure_structlog() -> None:
    """Configure structlog processors and factory."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            add_logger_name,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            dispatch_renderer,
        ],
        # Severity gating happens per sink inside the dispatcher.
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
        context_class=dict,
        logger_factory=SilentPrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def configure_logging(
    settings: Optional[Settings] = None,
    *,
    debug_hook: Optional[DebugHook] = None,
    syslog_transport: Optional[SyslogTransport] = None,
    install_debug_traps: bool = True,
    intercept_stdlib: bool = False,
    intercepted_loggers: Sequence[str] = (),
) -> Dispatcher:
    """
    Configure the process-wide logging facility.

    Args:
        settings: Composite settings; defaults to the ``sinklog.config.settings`` singleton
        debug_hook: Called after an ERROR console line when debug_level > 0
        syslog_transport: Replacement for the POSIX syslog transport
        install_debug_traps: Install the exception trap / tracer for debug_level >= 1
        intercept_stdlib: Route standard-library logging records into the dispatcher
        intercepted_loggers: Loggers whose own handlers are stripped so they propagate to root
    """
    global _dispatcher, _uninstall_traps

    # Import here to avoid circular imports
    from .debug import install_traps
    from .interceptors import RedirectStdLibHandler, intercept_loggers

    if settings is None:
        settings = default_settings
    config = SinkConfig.from_settings(settings.logging, settings.app)

    # 1. Build the dispatcher
    _dispatcher = Dispatcher(config, syslog_transport=syslog_transport, debug_hook=debug_hook)

    # 2. Configure structlog
    _configure_structlog()

    # 3. Debug traps
    if _uninstall_traps is not None:
        _uninstall_traps()
        _uninstall_traps = None
    if install_debug_traps and config.debug_level > 0:
        _uninstall_traps = install_traps(config.debug_level, _dispatcher.reporter)

    # 4. Stdlib logging (root)
    if intercept_stdlib:
        root_logger = logging.getLogger()
        root_logger.handlers = [h for h in root_logger.handlers if not isinstance(h, RedirectStdLibHandler)]
        root_logger.setLevel(logging.DEBUG)
        root_logger.addHandler(RedirectStdLibHandler())
        intercept_loggers(list(intercepted_loggers))

    return _dispatcher


def reset_logging() -> None:
    """Drop the process-wide dispatcher, restore debug hooks and detach the stdlib redirect."""
    global _dispatcher, _uninstall_traps
    from .interceptors import RedirectStdLibHandler

    root_logger = logging.getLogger()
    root_logger.handlers = [h for h in root_logger.handlers if not isinstance(h, RedirectStdLibHandler)]
    if _uninstall_traps is not None:
        _uninstall_traps()
    _uninstall_traps = None
    _dispatcher = None
    structlog.reset_defaults()


# =============================================================================
# Public operations
# =============================================================================


def log(level: Optional[str] = None, message: Optional[Any] = None, *pairs: Any) -> bool:
    return get_dispatcher().log(level, message, *pairs)


def log_debug(message: Any, *pairs: Any) -> bool:
    return get_dispatcher().debug(message, *pairs)


def log_info(message: Any, *pairs: Any) -> bool:
    return get_dispatcher().info(message, *pairs)


def log_notice(message: Any, *pairs: Any) -> bool:
    return get_dispatcher().notice(message, *pairs)


def log_warn(message: Any, *pairs: Any) -> bool:
    return get_dispatcher().warn(message, *pairs)


def log_error(message: Any, *pairs: Any) -> bool:
    return get_dispatcher().error(message, *pairs)


def log_crit(message: Any, *pairs: Any) -> bool:
    return get_dispatcher().crit(message, *pairs)


def log_alert(message: Any, *pairs: Any) -> bool:
    return get_dispatcher().alert(message, *pairs)


def log_emerg(message: Any, *pairs: Any) -> bool:
    return get_dispatcher().emerg(message, *pairs)


def set_destinations(
    console: Optional[bool] = None,
    json: Optional[bool] = None,
    syslog: Optional[bool] = None,
) -> SinkConfig:
    """Toggle destinations on the process-wide dispatcher."""
    return get_dispatcher().set_destinations(console=console, json=json, syslog=syslog)
