"""
Severity table.

Syslog-compatible ordinals: lower number means more severe. The mapping from level
name to (ordinal, color) is total; unknown names resolve to ERROR with an
explicit "not recognized" flag.
"""

from __future__ import annotations

from enum import IntEnum


class SeverityLevel(IntEnum):
    EMERG = 0
    ALERT = 1
    CRIT = 2
    ERROR = 3
    WARN = 4
    NOTICE = 5
    INFO = 6
    DEBUG = 7


FALLBACK_LEVEL = SeverityLevel.ERROR
FALLBACK_COLOR = "black"

_LEVEL_COLORS = {
    SeverityLevel.DEBUG: "cyan",
    SeverityLevel.INFO: "green",
    SeverityLevel.NOTICE: "blue",
    SeverityLevel.WARN: "yellow",
    SeverityLevel.ERROR: "red",
    SeverityLevel.CRIT: "magenta",
    SeverityLevel.ALERT: "magenta",
    SeverityLevel.EMERG: "red",
}

# Levels whose console lines go to the error stream.
ERROR_STREAM_LEVELS = frozenset(
    {SeverityLevel.ERROR, SeverityLevel.CRIT, SeverityLevel.ALERT, SeverityLevel.EMERG}
)


def resolve_level(name: str) -> tuple[SeverityLevel, bool]:
    """Resolve a case-insensitive level name to its variant and a recognized flag."""
    try:
        return SeverityLevel[str(name).strip().upper()], True
    except KeyError:
        return FALLBACK_LEVEL, False


def severity_of(name: str) -> tuple[int, bool]:
    """Return ``(ordinal, is_known)`` for a level name."""
    level, known = resolve_level(name)
    return int(level), known


def color_of(name: str) -> str:
    """Return the console color for a level name. Never raises."""
    try:
        level = SeverityLevel[str(name).strip().upper()]
    except (KeyError, AttributeError):
        return FALLBACK_COLOR
    return _LEVEL_COLORS.get(level, FALLBACK_COLOR)


__all__ = [
    "SeverityLevel",
    "FALLBACK_LEVEL",
    "FALLBACK_COLOR",
    "ERROR_STREAM_LEVELS",
    "resolve_level",
    "severity_of",
    "color_of",
]
