# src/fs/fs_factory.py — v1
"""Factory for filesystem backend instantiation."""

from __future__ import annotations

from forkwatch.config.settings import Settings
from forkwatch.fs.base_filesystem import BaseFileSystem


class UnsupportedFileSystemError(ValueError):
    """Raised when the configured filesystem backend is unknown."""


def create_filesystem(settings: Settings | None = None) -> BaseFileSystem:
    """Instantiate the configured filesystem backend.

    Args:
        settings: Application settings. Defaults to the pathlib backend.
    """
    backend = "pathlib" if settings is None else settings.fs_backend

    if backend == "pathlib":
        from forkwatch.fs.pathlib_fs import PathlibFileSystem
        return PathlibFileSystem()

    if backend == "posix":
        from forkwatch.fs.posix_fs import PosixFileSystem
        return PosixFileSystem()

    raise UnsupportedFileSystemError(f"Unsupported filesystem backend: {backend!r}")
