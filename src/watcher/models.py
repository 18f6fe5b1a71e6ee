# src/watcher/models.py — v1
"""Watcher domain models: WatchTarget, EligibleScript, DispatchResult, WatchReport."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from forkwatch.core.errors import StartupError
from forkwatch.fs.base_filesystem import BaseFileSystem
from forkwatch.process.models import ExitStatus

WatcherState = Literal["scan", "dispatch", "sleep", "stopped"]


class WatchTarget(BaseModel):
    """A directory validated once, when the watcher is built."""

    path: Path

    @classmethod
    def validate_path(cls, path: str | Path, fs: BaseFileSystem) -> WatchTarget:
        """Build a target, raising StartupError if ``path`` is not a directory."""
        p = Path(path)
        if not fs.is_dir(p):
            raise StartupError(p, "Watch path does not exist or is not a directory")
        return cls(path=p)


class EligibleScript(BaseModel):
    """A script selected during one scan; never carried across cycles."""

    path: Path
    name: str
    mode: int


class DispatchResult(BaseModel):
    """Outcome of one spawn → wait → delete sequence."""

    script: Path
    pid: int | None = None
    exit_status: ExitStatus | None = None
    spawn_failed: bool = False
    deleted: bool = False


class WatchReport(BaseModel):
    """Summary of a watcher run."""

    directory: str
    scans: int = 0
    dispatch_cycles: int = 0
    dispatched: int = 0
    deleted: int = 0
    nonzero_exits: int = 0
    spawn_failures: int = 0
    delete_failures: int = 0
    elapsed_seconds: float = 0.0
    final_state: WatcherState = "stopped"
    results: list[DispatchResult] = Field(default_factory=list)

    def record(self, result: DispatchResult) -> None:
        """Fold one dispatch result into the counters."""
        self.results.append(result)
        if result.spawn_failed:
            self.spawn_failures += 1
            return
        self.dispatched += 1
        if result.exit_status is not None and not result.exit_status.ok:
            self.nonzero_exits += 1
        if result.deleted:
            self.deleted += 1
        else:
            self.delete_failures += 1
