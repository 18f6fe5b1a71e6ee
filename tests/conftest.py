# tests/conftest.py — v1
"""Shared test fixtures for unit tests.

Provides script and file factories on tmp_path, an in-memory filesystem
fake for listing logic, and a guard that fails a test leaving zombies.
"""

from __future__ import annotations

import os
import stat
from collections.abc import Callable
from pathlib import Path

import pytest

from forkwatch.config.settings import Settings
from forkwatch.fs.base_filesystem import BaseFileSystem
from forkwatch.fs.models import FileEntry


# === Fake filesystem ===


class MemoryFileSystem(BaseFileSystem):
    """In-memory filesystem: {directory: {name: (mode, content)}}."""

    name = "memory"

    def __init__(self) -> None:
        self.dirs: dict[Path, dict[str, tuple[int, bytes]]] = {}
        self.removed: list[Path] = []

    def add_dir(self, path: Path) -> None:
        self.dirs.setdefault(Path(path), {})

    def add_file(self, path: Path, content: bytes = b"", mode: int = 0o644) -> None:
        path = Path(path)
        self.add_dir(path.parent)
        self.dirs[path.parent][path.name] = (stat.S_IFREG | mode, content)

    def is_dir(self, path: Path) -> bool:
        return Path(path) in self.dirs

    def list_regular_files(self, directory: Path) -> list[FileEntry]:
        directory = Path(directory)
        if directory not in self.dirs:
            raise FileNotFoundError(directory)
        return [
            FileEntry(
                path=str(directory / name), name=name, mode=mode, size_bytes=len(content),
            )
            for name, (mode, content) in sorted(self.dirs[directory].items())
        ]

    def make_dirs(self, path: Path, mode: int = 0o755) -> None:
        self.add_dir(path)

    def copy_file(self, source: Path, destination: Path) -> int:
        source, destination = Path(source), Path(destination)
        mode, content = self.dirs[source.parent][source.name]
        self.dirs[destination.parent][destination.name] = (mode, content)
        return len(content)

    def remove(self, path: Path) -> None:
        path = Path(path)
        try:
            del self.dirs[path.parent][path.name]
        except KeyError:
            raise FileNotFoundError(path) from None
        self.removed.append(path)


@pytest.fixture
def memory_fs() -> MemoryFileSystem:
    return MemoryFileSystem()


# === Settings ===


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings isolated from the environment, tuned for fast tests."""
    home = tmp_path / "home"
    home.mkdir()
    return Settings(
        _env_file=None,
        home=home,
        user="",
        poll_interval_seconds=0.05,
        spawn_delay_seconds=0.0,
        demo_watch_seconds=0.3,
    )


# === On-disk factories ===


ScriptFactory = Callable[..., Path]


@pytest.fixture
def make_script(tmp_path: Path) -> ScriptFactory:
    """Write a shell script into a directory (default: tmp_path/watch)."""

    def _make(
        name: str,
        body: str = "exit 0\n",
        mode: int = 0o755,
        directory: Path | None = None,
    ) -> Path:
        target_dir = directory or tmp_path / "watch"
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / name
        path.write_text(f"#!/bin/sh\n{body}", encoding="utf-8")
        path.chmod(mode)
        return path

    return _make


@pytest.fixture
def watch_dir(tmp_path: Path) -> Path:
    d = tmp_path / "watch"
    d.mkdir(exist_ok=True)
    return d


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """Source directory with three files of different sizes and a subdir."""
    src = tmp_path / "source"
    src.mkdir()
    (src / "a.txt").write_bytes(b"alpha\n")
    (src / "b.bin").write_bytes(bytes(range(256)) * 300)
    (src / "empty.dat").write_bytes(b"")
    (src / "nested").mkdir()
    (src / "nested" / "inner.txt").write_bytes(b"not copied")
    return src


# === Zombie guard ===


@pytest.fixture(autouse=True)
def no_leftover_children():
    """Fail the test if it leaves unreaped children behind."""
    yield
    try:
        os.waitpid(-1, os.WNOHANG)
    except ChildProcessError:
        return
    pytest.fail("test left child processes behind")
