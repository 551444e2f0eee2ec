"""
sinklog exception hierarchy.

Every error kind raised inside the dispatch core derives from SinklogError so the
dispatcher can isolate a failing sink without catching unrelated exceptions by name.
Only InvalidArguments aborts a log call; the other kinds are reported and dropped.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class SinklogError(Exception):
    """Root of all sinklog errors.

    Carries a machine-readable ``code`` and structured ``details`` next to the
    human-readable message.
    """

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class InvalidArguments(SinklogError):
    """A log call was made without a level or without a message."""

    def __init__(self, *, received: int) -> None:
        super().__init__(
            f"log requires a level and a message (received {received} argument(s))",
            code="INVALID_ARGUMENTS",
            details={"received": received},
        )


class UnknownLevel(SinklogError):
    """The severity token is not one of the known levels."""

    def __init__(self, level: str) -> None:
        super().__init__(
            f"Unknown log level '{level}', treating as ERROR",
            code="UNKNOWN_LEVEL",
            details={"level": level},
        )


class SinkWriteFailure(SinklogError):
    """A file, JSON or syslog write (or a rotation rename) failed."""

    def __init__(self, *, sink: str, target: str, reason: str) -> None:
        super().__init__(
            f"{sink} sink failed writing to '{target}': {reason}",
            code="SINK_WRITE_FAILURE",
            details={"sink": sink, "target": target, "reason": reason},
        )


__all__ = [
    "SinklogError",
    "InvalidArguments",
    "UnknownLevel",
    "SinkWriteFailure",
]
