# src/demo/seed.py — v1
"""Demo data: sample scripts for the watcher and files for the copier."""

from __future__ import annotations

import logging
from pathlib import Path

from forkwatch.demo.paths import DemoPaths

logger = logging.getLogger(__name__)

# name -> (body, executable)
SAMPLE_SCRIPTS: dict[str, tuple[str, bool]] = {
    "hello.sh": ('echo "hello from $0"\n', True),
    "sleepy.sh": ('echo "sleeping"\nsleep 1\necho "awake"\n', True),
    "failing.sh": ('echo "exiting with 3" >&2\nexit 3\n', True),
    "not_executable.sh": ('echo "should never run"\n', False),
}

SAMPLE_FILES: dict[str, bytes] = {
    "notes.txt": b"forkwatch demo notes\n",
    "data.csv": b"id,value\n1,alpha\n2,beta\n3,gamma\n",
    "blob.bin": bytes(range(256)) * 64,
    "empty.txt": b"",
}


def seed_demo(paths: DemoPaths) -> None:
    """Create the demo directories and populate them with sample data."""
    for directory in (paths.watch_dir, paths.source_dir):
        directory.mkdir(parents=True, exist_ok=True)

    for name, (body, executable) in SAMPLE_SCRIPTS.items():
        path = paths.watch_dir / name
        path.write_text(f"#!/bin/sh\n{body}", encoding="utf-8")
        path.chmod(0o755 if executable else 0o644)

    for name, content in SAMPLE_FILES.items():
        (paths.source_dir / name).write_bytes(content)

    logger.info(
        "Seeded %d scripts in %s and %d files in %s",
        len(SAMPLE_SCRIPTS), paths.watch_dir, len(SAMPLE_FILES), paths.source_dir,
    )


def format_listing(directory: Path) -> str:
    """Render a directory's entries with mode and size, like a short ls -l."""
    if not directory.is_dir():
        return f"{directory}: (missing)"
    lines = [f"{directory}:"]
    entries = sorted(directory.iterdir())
    if not entries:
        lines.append("  (empty)")
    for entry in entries:
        st = entry.stat()
        lines.append(f"  {st.st_mode & 0o777:04o} {st.st_size:>8d}  {entry.name}")
    return "\n".join(lines)
