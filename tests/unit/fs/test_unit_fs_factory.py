# tests/unit/fs/test_unit_fs_factory.py — v1
"""Tests for fs/fs_factory.py — backend selection."""

from __future__ import annotations

import pytest

from forkwatch.config.settings import Settings
from forkwatch.fs.fs_factory import UnsupportedFileSystemError, create_filesystem
from forkwatch.fs.pathlib_fs import PathlibFileSystem
from forkwatch.fs.posix_fs import PosixFileSystem


class TestCreateFileSystem:
    def test_default_is_pathlib(self):
        assert isinstance(create_filesystem(), PathlibFileSystem)

    def test_posix_backend(self):
        settings = Settings(_env_file=None, fs_backend="posix")
        assert isinstance(create_filesystem(settings), PosixFileSystem)

    def test_unknown_backend(self):
        settings = Settings.model_construct(fs_backend="ftp")
        with pytest.raises(UnsupportedFileSystemError, match="ftp"):
            create_filesystem(settings)
