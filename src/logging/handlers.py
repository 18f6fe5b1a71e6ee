# src/logging/handlers.py — v1
"""File rotation handler for log files shared across fork()."""

from __future__ import annotations

import logging
import os
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path


def _parse_size(size_str: str) -> int:
    """Parse size string like '10MB' into bytes.

    Supported suffixes: KB, MB, GB (case-insensitive).
    """
    match = re.match(r"^(\d+)\s*(KB|MB|GB)$", size_str.strip(), re.IGNORECASE)
    if not match:
        raise ValueError(f"Invalid size format: {size_str!r}. Use e.g. '10MB'.")
    value = int(match.group(1))
    unit = match.group(2).upper()
    multipliers = {"KB": 1024, "MB": 1024**2, "GB": 1024**3}
    return value * multipliers[unit]


class ForkSafeRotatingFileHandler(RotatingFileHandler):
    """RotatingFileHandler that only rotates in the process that opened it.

    Forked children inherit the handler and append to the same file
    (opened with O_APPEND), but never rename it: a rollover in a child
    would leave the parent writing into the renamed backup.
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.owner_pid = os.getpid()

    def shouldRollover(self, record: logging.LogRecord) -> bool:
        if os.getpid() != self.owner_pid:
            return False
        return bool(super().shouldRollover(record))


def create_rotating_handler(
    log_file: str | Path,
    rotation: str = "10MB",
    retention: int = 5,
) -> ForkSafeRotatingFileHandler:
    """Create a rotating file handler safe to share with forked children.

    Args:
        log_file: Path to log file.
        rotation: Max file size before rotation (e.g. "10MB").
        retention: Number of backup files to keep.
    """
    path = Path(log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)

    return ForkSafeRotatingFileHandler(
        filename=str(path),
        maxBytes=_parse_size(rotation),
        backupCount=retention,
        encoding="utf-8",
    )
