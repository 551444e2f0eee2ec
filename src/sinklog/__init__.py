"""
sinklog: structured logging with multi-sink fan-out.

Sinks:
- console: styled, severity-gated, stderr for ERROR and worse
- file: flat ``<timestamp> [<LEVEL>] <message>`` lines with size rotation
- json: one JSON record per line (orjson, or a manual fallback encoder)
- syslog: native facility/severity encoding (mutually exclusive with json)

Library: structlog front-end + orjson serialization + pydantic-settings configuration.
"""

from .core import (
    configure_logging,
    get_dispatcher,
    get_logger,
    log,
    log_alert,
    log_crit,
    log_debug,
    log_emerg,
    log_error,
    log_info,
    log_notice,
    log_warn,
    reset_logging,
    set_destinations,
)
from .dispatcher import DebuggerAbort, DebugOutcome, Dispatcher, SinkConfig
from .levels import SeverityLevel, color_of, severity_of

__all__ = [
    "configure_logging",
    "get_dispatcher",
    "get_logger",
    "reset_logging",
    "log",
    "log_debug",
    "log_info",
    "log_notice",
    "log_warn",
    "log_error",
    "log_crit",
    "log_alert",
    "log_emerg",
    "set_destinations",
    "Dispatcher",
    "SinkConfig",
    "DebugOutcome",
    "DebuggerAbort",
    "SeverityLevel",
    "severity_of",
    "color_of",
]
