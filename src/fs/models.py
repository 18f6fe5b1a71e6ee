# src/fs/models.py — v1
"""Filesystem metadata models."""

from __future__ import annotations

import stat

from pydantic import BaseModel

# Owner, group or other execute bit; any one is enough.
ANY_EXECUTE = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


class FileEntry(BaseModel):
    """A regular file found directly under a listed directory."""

    path: str
    name: str
    mode: int
    size_bytes: int

    @property
    def is_executable(self) -> bool:
        """True when any of the owner / group / other execute bits is set."""
        return bool(self.mode & ANY_EXECUTE)
