# src/demo/paths.py — v1
"""Resolved demonstration directories."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel

from forkwatch.config.settings import Settings


class DemoPaths(BaseModel):
    """All paths the demo touches, resolved once from settings."""

    root: Path
    watch_dir: Path
    source_dir: Path
    dest_dir: Path

    @classmethod
    def from_settings(cls, settings: Settings) -> DemoPaths:
        """Place the demo tree under the configured home directory.

        Falls back to /home/<user> when HOME is not usable but USER is set.
        """
        home = settings.home.expanduser()
        if not home.is_dir() and settings.user:
            home = Path("/home") / settings.user
        root = home / settings.demo_dir_name
        return cls(
            root=root,
            watch_dir=root / "watch",
            source_dir=root / "source",
            dest_dir=root / "dest",
        )
