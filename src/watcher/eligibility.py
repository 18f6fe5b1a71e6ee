# src/watcher/eligibility.py — v1
"""Eligibility rule for scripts picked up by the watcher."""

from __future__ import annotations

from pathlib import Path

from forkwatch.fs.models import FileEntry
from forkwatch.watcher.models import EligibleScript

DEFAULT_SCRIPT_SUFFIX = ".sh"


def is_eligible(entry: FileEntry, suffix: str = DEFAULT_SCRIPT_SUFFIX) -> bool:
    """A regular file whose extension is ``suffix`` with any execute bit set.

    A bare dotfile such as ``.sh`` has no extension and is not eligible.
    """
    return Path(entry.name).suffix == suffix and entry.is_executable


def select_scripts(
    entries: list[FileEntry], suffix: str = DEFAULT_SCRIPT_SUFFIX,
) -> list[EligibleScript]:
    """Filter a directory listing down to eligible scripts, keeping order."""
    return [
        EligibleScript(path=Path(e.path), name=e.name, mode=e.mode)
        for e in entries
        if is_eligible(e, suffix)
    ]
