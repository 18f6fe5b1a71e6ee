# src/fs/posix_fs.py — v1
"""Low-level filesystem backend using raw os.* system calls.

Lists with os.scandir, checks modes with os.stat, and copies through
os.open / os.read / os.write on raw file descriptors.
"""

from __future__ import annotations

import errno
import os
import stat
from pathlib import Path

from forkwatch.fs.base_filesystem import BaseFileSystem
from forkwatch.fs.models import FileEntry

_CHUNK_SIZE = 64 * 1024


class PosixFileSystem(BaseFileSystem):
    """Filesystem access through os-level calls and file descriptors."""

    name = "posix"

    def __init__(self, chunk_size: int = _CHUNK_SIZE) -> None:
        self._chunk_size = chunk_size

    def is_dir(self, path: Path) -> bool:
        try:
            return stat.S_ISDIR(os.stat(path).st_mode)
        except OSError:
            return False

    def list_regular_files(self, directory: Path) -> list[FileEntry]:
        entries: list[FileEntry] = []
        with os.scandir(directory) as it:
            for dirent in it:
                try:
                    st = dirent.stat(follow_symlinks=True)
                except FileNotFoundError:
                    # dangling symlink or file removed mid-scan
                    continue
                if not stat.S_ISREG(st.st_mode):
                    continue
                entries.append(
                    FileEntry(
                        path=dirent.path,
                        name=dirent.name,
                        mode=st.st_mode,
                        size_bytes=st.st_size,
                    )
                )
        entries.sort(key=lambda e: e.name)
        return entries

    def make_dirs(self, path: Path, mode: int = 0o755) -> None:
        os.makedirs(path, mode=mode, exist_ok=True)

    def copy_file(self, source: Path, destination: Path) -> int:
        copied = 0
        src_fd = os.open(source, os.O_RDONLY)
        try:
            # O_TRUNC on the source itself would empty it before the first read
            if _same_file(os.fstat(src_fd), destination):
                raise OSError(
                    errno.EINVAL, "Source and destination are the same file", str(destination),
                )
            dst_fd = os.open(destination, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o644)
            try:
                while True:
                    chunk = os.read(src_fd, self._chunk_size)
                    if not chunk:
                        break
                    view = memoryview(chunk)
                    while view:
                        written = os.write(dst_fd, view)
                        view = view[written:]
                    copied += len(chunk)
            finally:
                os.close(dst_fd)
        finally:
            os.close(src_fd)
        return copied

    def remove(self, path: Path) -> None:
        os.unlink(path)


def _same_file(src_stat: os.stat_result, destination: Path) -> bool:
    try:
        dst_stat = os.stat(destination)
    except FileNotFoundError:
        return False
    return (src_stat.st_dev, src_stat.st_ino) == (dst_stat.st_dev, dst_stat.st_ino)
