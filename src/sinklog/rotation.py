"""
Size-based log rotation.

The only rotation state is the file itself: when the active file grows strictly
beyond the threshold it is renamed to ``<path>.<YYYYMMDDHHMMSS>`` and the next
append recreates an empty active file.
"""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Optional

from .exceptions import SinkWriteFailure

if TYPE_CHECKING:
    from .reporter import ExceptionReporter

BACKUP_SUFFIX_FORMAT = "%Y%m%d%H%M%S"


def backup_path_for(path: str | Path, when: Optional[datetime] = None) -> Path:
    """Name of the backup a rotation at ``when`` would produce."""
    stamp = (when or datetime.now()).strftime(BACKUP_SUFFIX_FORMAT)
    return Path(f"{path}.{stamp}")


def ensure_parent(path: str | Path) -> None:
    """Best-effort creation of the parent directory of ``path``.

    Failures are swallowed; the write that follows surfaces the real problem as
    a SinkWriteFailure.
    """
    try:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        pass


def rotate_if_needed(
    path: str | Path,
    max_bytes: int,
    *,
    reporter: "ExceptionReporter",
    on_rotated: Optional[Callable[[Path], None]] = None,
    now: Optional[datetime] = None,
) -> Optional[Path]:
    """Rotate ``path`` aside when it is larger than ``max_bytes``.

    Returns the backup path when a rotation happened. A failed rename, or a backup
    name already taken within the same second, is reported and the caller's write
    goes ahead against ``path``.
    """
    target = Path(path)
    ensure_parent(target)

    try:
        size = target.stat().st_size
    except FileNotFoundError:
        return None
    except OSError as exc:
        reporter.report(SinkWriteFailure(sink="rotation", target=str(target), reason=str(exc)))
        return None

    if size <= max_bytes:
        return None

    backup = backup_path_for(target, now)
    if backup.exists():
        # Backup names have one-second resolution; never overwrite an earlier one.
        reporter.report(SinkWriteFailure(sink="rotation", target=str(backup), reason="backup already exists"))
        return None

    try:
        os.replace(target, backup)
    except OSError as exc:
        reporter.report(SinkWriteFailure(sink="rotation", target=str(backup), reason=str(exc)))
        return None

    if on_rotated is not None:
        on_rotated(backup)
    return backup


__all__ = ["BACKUP_SUFFIX_FORMAT", "backup_path_for", "ensure_parent", "rotate_if_needed"]
