# src/copier/models.py — v1
"""Copier domain models: CopyJob, CopySession, CopyReport."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from forkwatch.process.models import ExitStatus, SpawnedProcess


class CopyJob(BaseModel):
    """One source → destination pair, owned by exactly one child."""

    source: Path
    destination: Path


class CopyJobResult(BaseModel):
    """Outcome of one copy job as seen by the parent."""

    job: CopyJob
    pid: int | None = None
    exit_status: ExitStatus | None = None
    spawn_failed: bool = False

    @property
    def succeeded(self) -> bool:
        return self.exit_status is not None and self.exit_status.ok


class CopySession(BaseModel):
    """Source, destination and the children not yet reaped."""

    source_dir: Path
    dest_dir: Path
    outstanding: dict[int, SpawnedProcess] = Field(default_factory=dict)
    jobs: dict[int, CopyJob] = Field(default_factory=dict)

    def track(self, handle: SpawnedProcess, job: CopyJob) -> None:
        self.outstanding[handle.pid] = handle
        self.jobs[handle.pid] = job

    def release(self, status: ExitStatus) -> CopyJob | None:
        """Drop a reaped child; returns its job, or None for a foreign pid."""
        handle = self.outstanding.pop(status.pid, None)
        if handle is None:
            return None
        handle.mark_reaped(status)
        return self.jobs[status.pid]


class CopyReport(BaseModel):
    """Summary of one copy_all pass."""

    source_dir: str
    dest_dir: str
    files_found: int = 0
    spawned: int = 0
    reaped: int = 0
    succeeded: int = 0
    failed: int = 0
    spawn_failures: int = 0
    foreign_reaped: int = 0
    duration_seconds: float = 0.0
    results: list[CopyJobResult] = Field(default_factory=list)
