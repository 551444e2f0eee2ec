"""
Debug-level support: exception trap, call tracer and an opt-in shell hook.

debug_level 1 reports uncaught exceptions through the ExceptionReporter.
debug_level >= 2 additionally traces every Python function call to stderr.
"""

from __future__ import annotations

import os
import subprocess
import sys
import traceback
from types import FrameType, TracebackType
from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence

if TYPE_CHECKING:
    from .events import LogEvent
    from .reporter import ExceptionReporter


def _origin(tb: Optional[TracebackType]) -> str:
    frames = traceback.extract_tb(tb) if tb is not None else []
    if not frames:
        return "<unknown>"
    last = frames[-1]
    return f"{last.filename}:{last.lineno}"


def make_excepthook(reporter: "ExceptionReporter", previous: Callable[..., Any]) -> Callable[..., None]:
    def hook(exc_type: type[BaseException], exc: BaseException, tb: Optional[TracebackType]) -> None:
        reporter.report(f"Uncaught {exc_type.__name__}: {exc} at {_origin(tb)}")
        previous(exc_type, exc, tb)

    return hook


def make_tracer(stream: Optional[Any] = None) -> Callable[..., None]:
    """``sys.settrace`` function writing ``+ file:line function`` per call."""

    def tracer(frame: FrameType, event: str, arg: Any) -> None:
        if event == "call":
            code = frame.f_code
            out = stream or sys.stderr
            out.write(f"+ {code.co_filename}:{frame.f_lineno} {code.co_name}\n")
        return None

    return tracer


def install_traps(
    debug_level: int,
    reporter: "ExceptionReporter",
    *,
    trace_stream: Optional[Any] = None,
) -> Callable[[], None]:
    """Install the hooks for ``debug_level``; returns a function restoring the previous ones."""
    previous_hook = sys.excepthook
    previous_trace = sys.gettrace()

    if debug_level >= 1:
        sys.excepthook = make_excepthook(reporter, previous_hook)
    if debug_level >= 2:
        sys.settrace(make_tracer(trace_stream))

    def uninstall() -> None:
        sys.excepthook = previous_hook
        if debug_level >= 2:
            sys.settrace(previous_trace)

    return uninstall


def shell_debug_hook(command: Optional[Sequence[str]] = None) -> Callable[["LogEvent"], int]:
    """Debug hook that drops into an interactive shell and returns its exit code.

    The parent blocks until the shell exits. A non-zero exit asks the caller to abort.
    """
    argv = list(command) if command else [os.environ.get("SHELL", "/bin/sh")]

    def hook(event: "LogEvent") -> int:
        sys.stderr.write(f"Entering debug shell after: [{event.level}] {event.message}\n")
        sys.stderr.flush()
        return subprocess.run(argv, check=False).returncode

    return hook


__all__ = ["install_traps", "make_excepthook", "make_tracer", "shell_debug_hook"]
