# src/process/reaper.py — v1
"""Process reaper — block on child termination and classify it."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator

from forkwatch.process.models import ExitStatus, SpawnedProcess

logger = logging.getLogger(__name__)


class ProcessReaper:
    """Collect exit statuses of children of the current process.

    ``wait_for`` targets one handle; ``reap_any`` takes whichever child
    finishes first and returns None once the caller has no children left.
    """

    def __init__(self) -> None:
        self.reap_count = 0

    def wait_for(self, handle: SpawnedProcess) -> ExitStatus:
        """Block until ``handle`` terminates and release its table entry."""
        pid, status = os.waitpid(handle.pid, 0)
        exit_status = ExitStatus.from_wait_status(pid, status)
        handle.mark_reaped(exit_status)
        self.reap_count += 1
        logger.debug("Reaped pid %d: %s", pid, exit_status.describe())
        return exit_status

    def reap_any(self) -> ExitStatus | None:
        """Block until any child terminates.

        Returns:
            The child's status, or None when no children remain.
        """
        try:
            pid, status = os.wait()
        except ChildProcessError:
            return None
        exit_status = ExitStatus.from_wait_status(pid, status)
        self.reap_count += 1
        logger.debug("Reaped pid %d: %s", pid, exit_status.describe())
        return exit_status

    def drain(self) -> Iterator[ExitStatus]:
        """Yield every outstanding child's status in completion order."""
        while True:
            exit_status = self.reap_any()
            if exit_status is None:
                return
            yield exit_status
