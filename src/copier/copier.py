# src/copier/copier.py — v1
"""Parallel copier — fire-and-forget one child per file, then drain.

Workflow:
    1. Validate the source directory; create the destination if absent
    2. For each regular file directly under the source, fork a child
       that copies it to dest/<name> (no waiting between spawns)
    3. Reap children with wait() until none remain, in whatever order
       they finish
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from pathlib import Path

from forkwatch.config.settings import Settings
from forkwatch.copier.models import CopyJob, CopyJobResult, CopyReport, CopySession
from forkwatch.copier.worker import copy_one
from forkwatch.core.errors import SpawnError, StartupError
from forkwatch.fs.base_filesystem import BaseFileSystem
from forkwatch.logging.context import set_operation_context
from forkwatch.process.reaper import ProcessReaper
from forkwatch.process.spawner import ProcessSpawner

logger = logging.getLogger(__name__)


class ParallelCopier:
    """Copy every file of a directory, one process per file."""

    def __init__(
        self,
        fs: BaseFileSystem,
        spawner: ProcessSpawner | None = None,
        reaper: ProcessReaper | None = None,
        spawn_delay_seconds: float = 0.1,
        dest_dir_mode: int = 0o755,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._fs = fs
        self._spawner = spawner or ProcessSpawner()
        self._reaper = reaper or ProcessReaper()
        self._spawn_delay = spawn_delay_seconds
        self._dest_dir_mode = dest_dir_mode
        self._sleep = sleep

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        fs: BaseFileSystem | None = None,
        **kwargs: object,
    ) -> ParallelCopier:
        """Build a copier using the configured backend and pacing."""
        from forkwatch.fs.fs_factory import create_filesystem

        settings = settings or Settings()
        return cls(
            fs or create_filesystem(settings),
            spawn_delay_seconds=settings.spawn_delay_seconds,
            dest_dir_mode=settings.dest_dir_mode,
            **kwargs,  # type: ignore[arg-type]
        )

    def copy_all(self, source_dir: str | Path, dest_dir: str | Path) -> CopyReport:
        """Copy all regular files of ``source_dir`` into ``dest_dir``.

        Returns only after every spawned child has been reaped.

        Raises:
            StartupError: If the source is not a directory, cannot be
                listed, or the destination cannot be created. Nothing
                has been spawned when this is raised.
        """
        set_operation_context("copy")
        t0 = time.perf_counter()
        session = self._open_session(Path(source_dir), Path(dest_dir))

        try:
            entries = self._fs.list_regular_files(session.source_dir)
        except OSError as exc:
            raise StartupError(session.source_dir, f"Cannot list source directory ({exc})") from exc

        report = CopyReport(
            source_dir=str(session.source_dir),
            dest_dir=str(session.dest_dir),
            files_found=len(entries),
        )
        logger.info(
            "Copying %d files from %s to %s",
            len(entries), session.source_dir, session.dest_dir,
        )

        for index, entry in enumerate(entries):
            if index and self._spawn_delay:
                self._sleep(self._spawn_delay)
            job = CopyJob(source=Path(entry.path), destination=session.dest_dir / entry.name)
            try:
                handle = self._spawner.spawn_call(f"copy {entry.name}", copy_one, job, self._fs)
            except SpawnError as exc:
                logger.error("%s; skipping", exc)
                report.spawn_failures += 1
                report.results.append(CopyJobResult(job=job, spawn_failed=True))
                continue
            session.track(handle, job)
            report.spawned += 1
            logger.debug("Started pid %d for %s", handle.pid, job.source)

        logger.info("Waiting for %d copy processes", len(session.outstanding))
        self._drain(session, report)

        report.duration_seconds = round(time.perf_counter() - t0, 3)
        logger.info(
            "Copy finished: %d succeeded, %d failed, %d not spawned (%.2fs)",
            report.succeeded, report.failed, report.spawn_failures,
            report.duration_seconds,
        )
        return report

    def _open_session(self, source: Path, dest: Path) -> CopySession:
        if not self._fs.is_dir(source):
            raise StartupError(source, "Source path does not exist or is not a directory")
        try:
            self._fs.make_dirs(dest, mode=self._dest_dir_mode)
        except OSError as exc:
            raise StartupError(dest, f"Cannot create destination directory ({exc})") from exc
        if not self._fs.is_dir(dest):
            raise StartupError(dest, "Destination path is not a directory")
        return CopySession(source_dir=source, dest_dir=dest)

    def _drain(self, session: CopySession, report: CopyReport) -> None:
        for status in self._reaper.drain():
            report.reaped += 1
            job = session.release(status)
            if job is None:
                report.foreign_reaped += 1
                logger.warning("Reaped pid %d not started by this copy pass", status.pid)
                continue

            report.results.append(CopyJobResult(job=job, pid=status.pid, exit_status=status))
            if status.ok:
                report.succeeded += 1
                logger.debug("Copy pid %d for %s done", status.pid, job.source.name)
            else:
                report.failed += 1
                logger.warning(
                    "Copy pid %d for %s %s", status.pid, job.source, status.describe(),
                )

        if session.outstanding:
            logger.error(
                "Drain ended with %d children unaccounted for: %s",
                len(session.outstanding), sorted(session.outstanding),
            )
