# src/fs/base_filesystem.py — v1
"""Abstract filesystem interface used by the watcher and copier."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from forkwatch.fs.models import FileEntry


class BaseFileSystem(ABC):
    """Unified interface for directory listing, metadata, copy and delete."""

    name: str = "base"

    @abstractmethod
    def is_dir(self, path: Path) -> bool:
        """True if ``path`` exists and is a directory."""

    @abstractmethod
    def list_regular_files(self, directory: Path) -> list[FileEntry]:
        """List regular files directly under ``directory``, sorted by name.

        Subdirectories and other non-regular entries are skipped; there
        is no recursion.
        """

    @abstractmethod
    def make_dirs(self, path: Path, mode: int = 0o755) -> None:
        """Create ``path`` and any missing parents; no-op if it exists."""

    @abstractmethod
    def copy_file(self, source: Path, destination: Path) -> int:
        """Copy file contents byte-for-byte, overwriting ``destination``.

        Returns:
            Number of bytes copied.
        """

    @abstractmethod
    def remove(self, path: Path) -> None:
        """Delete a file. Raises OSError on failure."""
