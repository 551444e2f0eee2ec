"""
Console line formatting and ANSI color utilities.
"""

from __future__ import annotations

from typing import Any

from .events import LogEvent

# =============================================================================
# ANSI Color Codes
# =============================================================================

COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "black": "\033[30m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
    "magenta": "\033[35m",
    "cyan": "\033[36m",
    "white": "\033[37m",
}


def render(text: str, color: str, bold: bool = False) -> str:
    """Apply ANSI color (and optionally bold) to text."""
    prefix = COLORS["bold"] if bold else ""
    return f"{prefix}{COLORS.get(color, '')}{text}{COLORS['reset']}"


def use_color_for(stream: Any, mode: str) -> bool:
    """Decide whether to style output written to ``stream``."""
    if mode == "always":
        return True
    if mode == "never":
        return False
    return bool(getattr(stream, "isatty", lambda: False)())


# =============================================================================
# Line Formatter
# =============================================================================


def format_line(event: LogEvent) -> str:
    """Shared ``<timestamp> [<LEVEL>] <message>`` layout for console and flat file."""
    return f"{event.timestamp} [{event.level}] {event.message}"


__all__ = ["COLORS", "render", "use_color_for", "format_line"]
