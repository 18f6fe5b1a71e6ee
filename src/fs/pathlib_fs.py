# src/fs/pathlib_fs.py — v1
"""High-level filesystem backend built on pathlib and shutil (default)."""

from __future__ import annotations

import shutil
import stat
from pathlib import Path

from forkwatch.fs.base_filesystem import BaseFileSystem
from forkwatch.fs.models import FileEntry


class PathlibFileSystem(BaseFileSystem):
    """Filesystem access through pathlib.Path and shutil."""

    name = "pathlib"

    def is_dir(self, path: Path) -> bool:
        return Path(path).is_dir()

    def list_regular_files(self, directory: Path) -> list[FileEntry]:
        entries: list[FileEntry] = []
        for path in sorted(Path(directory).iterdir()):
            try:
                st = path.stat()
            except FileNotFoundError:
                # dangling symlink or file removed mid-scan
                continue
            if not stat.S_ISREG(st.st_mode):
                continue
            entries.append(
                FileEntry(
                    path=str(path),
                    name=path.name,
                    mode=st.st_mode,
                    size_bytes=st.st_size,
                )
            )
        return entries

    def make_dirs(self, path: Path, mode: int = 0o755) -> None:
        Path(path).mkdir(mode=mode, parents=True, exist_ok=True)

    def copy_file(self, source: Path, destination: Path) -> int:
        shutil.copyfile(str(source), str(destination))
        return Path(destination).stat().st_size

    def remove(self, path: Path) -> None:
        Path(path).unlink()
