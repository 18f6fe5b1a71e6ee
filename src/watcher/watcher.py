# src/watcher/watcher.py — v1
"""Directory watcher — poll for executable scripts, run each, delete it.

State machine:
    SCAN ──(no scripts)──> SLEEP ──> SCAN
    SCAN ──(scripts)─────> DISPATCH ──> SCAN
    SCAN ──(duration elapsed)──> STOPPED

Dispatch is sequential: each script runs in its own child process
(isolation, not throughput) and the watcher waits for it before
starting the next one. A script is deleted after it finishes whatever
its exit status.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from pathlib import Path

from forkwatch.config.settings import Settings
from forkwatch.core.errors import EXEC_FAILURE_STATUS, DeleteError, SpawnError
from forkwatch.fs.base_filesystem import BaseFileSystem
from forkwatch.logging.context import set_operation_context
from forkwatch.process.reaper import ProcessReaper
from forkwatch.process.spawner import ProcessSpawner
from forkwatch.watcher.eligibility import select_scripts
from forkwatch.watcher.models import (
    DispatchResult,
    EligibleScript,
    WatchReport,
    WatchTarget,
    WatcherState,
)

logger = logging.getLogger(__name__)


class DirectoryWatcher:
    """Poll a directory and run eligible scripts through an interpreter.

    Build with ``DirectoryWatcher.create`` to get path validation; the
    constructor trusts an already-validated WatchTarget.
    """

    def __init__(
        self,
        target: WatchTarget,
        fs: BaseFileSystem,
        spawner: ProcessSpawner | None = None,
        reaper: ProcessReaper | None = None,
        interpreter: Path = Path("/bin/sh"),
        script_suffix: str = ".sh",
        poll_interval_seconds: float = 5.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._target = target
        self._fs = fs
        self._spawner = spawner or ProcessSpawner()
        self._reaper = reaper or ProcessReaper()
        self._interpreter = interpreter
        self._suffix = script_suffix
        self._poll_interval = poll_interval_seconds
        self._clock = clock
        self._sleep = sleep
        self._state: WatcherState = "stopped"

    @classmethod
    def create(
        cls,
        directory: str | Path,
        settings: Settings | None = None,
        fs: BaseFileSystem | None = None,
        **kwargs: object,
    ) -> DirectoryWatcher:
        """Validate ``directory`` and build a watcher from settings.

        Raises:
            StartupError: If ``directory`` is missing or not a directory.
        """
        from forkwatch.fs.fs_factory import create_filesystem

        settings = settings or Settings()
        fs = fs or create_filesystem(settings)
        target = WatchTarget.validate_path(directory, fs)
        return cls(
            target,
            fs,
            interpreter=settings.interpreter,
            script_suffix=settings.script_suffix,
            poll_interval_seconds=settings.poll_interval_seconds,
            **kwargs,  # type: ignore[arg-type]
        )

    @property
    def target(self) -> WatchTarget:
        return self._target

    @property
    def state(self) -> WatcherState:
        return self._state

    def scan(self) -> list[EligibleScript]:
        """List eligible scripts in the watched directory.

        A listing error is logged and treated as an empty directory so
        the loop keeps polling.
        """
        try:
            entries = self._fs.list_regular_files(self._target.path)
        except OSError as exc:
            logger.error("Cannot list %s: %s", self._target.path, exc)
            return []
        scripts = select_scripts(entries, self._suffix)
        logger.debug(
            "Scanned %s: %d files, %d eligible scripts",
            self._target.path, len(entries), len(scripts),
        )
        return scripts

    def dispatch(self, script: EligibleScript) -> DispatchResult:
        """Run one script to completion, then delete it."""
        logger.info("Launching %s", script.path)
        try:
            handle = self._spawner.spawn(self._interpreter, [script.path])
        except SpawnError as exc:
            logger.error("%s; leaving script in place", exc)
            return DispatchResult(script=script.path, spawn_failed=True)

        status = self._reaper.wait_for(handle)
        if status.state == "exited" and status.code == EXEC_FAILURE_STATUS:
            # Deleted anyway; the interpreter may never have run the script
            logger.warning(
                "Script %s (pid %d) %s; interpreter %s may have failed to start",
                script.path, status.pid, status.describe(), self._interpreter,
            )
        elif status.ok:
            logger.info("Script %s (pid %d) %s", script.path, status.pid, status.describe())
        else:
            logger.warning("Script %s (pid %d) %s", script.path, status.pid, status.describe())

        result = DispatchResult(script=script.path, pid=handle.pid, exit_status=status)
        try:
            self._remove(script.path)
        except DeleteError as exc:
            logger.error("%s; it may be relaunched on the next scan", exc)
        else:
            result.deleted = True
            logger.info("Deleted %s", script.path)
        return result

    def run_cycle(self) -> list[DispatchResult]:
        """One SCAN followed by DISPATCH of everything found."""
        self._state = "scan"
        scripts = self.scan()
        if not scripts:
            return []
        self._state = "dispatch"
        return [self.dispatch(script) for script in scripts]

    def run(self, duration_seconds: float | None = None) -> WatchReport:
        """Poll until stopped.

        Args:
            duration_seconds: Stop at the first SCAN after this much
                wall-clock time. None runs until interrupted. A cycle
                already dispatching is always finished first.

        Returns:
            WatchReport with per-script results and counters.
        """
        set_operation_context("watch")
        report = WatchReport(directory=str(self._target.path))
        start = self._clock()
        if duration_seconds is None:
            logger.info("Watching %s (press Ctrl+C to stop)", self._target.path)
        else:
            logger.info("Watching %s for %.1fs", self._target.path, duration_seconds)

        try:
            while True:
                self._state = "scan"
                elapsed = self._clock() - start
                if duration_seconds is not None and elapsed >= duration_seconds:
                    break

                report.scans += 1
                results = self.run_cycle()
                if results:
                    report.dispatch_cycles += 1
                    for result in results:
                        report.record(result)
                    # back off like an idle scan when nothing could be spawned
                    if not all(r.spawn_failed for r in results):
                        continue

                self._state = "sleep"
                interval = self._poll_interval
                if duration_seconds is not None:
                    remaining = duration_seconds - (self._clock() - start)
                    interval = max(0.0, min(interval, remaining))
                self._sleep(interval)
        finally:
            self._state = "stopped"
            report.final_state = self._state
            report.elapsed_seconds = round(self._clock() - start, 3)

        logger.info(
            "Watcher stopped after %.1fs: %d scripts run, %d deleted",
            report.elapsed_seconds, report.dispatched, report.deleted,
        )
        return report

    def _remove(self, path: Path) -> None:
        try:
            self._fs.remove(path)
        except OSError as exc:
            raise DeleteError(path, exc) from exc
