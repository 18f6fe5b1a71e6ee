# src/process/spawner.py — v1
"""Process spawner — fork the caller and run a program or callable in the child.

The child branch never returns into the caller's code: it either
replaces its image with ``os.execv`` or runs a callable and leaves
through ``os._exit``. If the image replacement fails the child exits
with EXEC_FAILURE_STATUS.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

from forkwatch.core.errors import CHILD_FAILURE_STATUS, EXEC_FAILURE_STATUS, SpawnError
from forkwatch.logging.context import set_process_context
from forkwatch.logging.logger import flush_handlers
from forkwatch.process.models import SpawnedProcess

logger = logging.getLogger(__name__)


class ProcessSpawner:
    """Create child processes with fork + exec or fork + call."""

    def __init__(self, fork: Callable[[], int] = os.fork) -> None:
        self._fork = fork
        self.spawn_count = 0

    def spawn(self, program: str | Path, args: Sequence[str | Path] = ()) -> SpawnedProcess:
        """Fork and exec ``program`` with ``args`` in the child.

        Args:
            program: Absolute path of the executable to run.
            args: Positional arguments (argv[1:]).

        Returns:
            Handle for the running child (parent branch only).

        Raises:
            SpawnError: If fork failed; no process was created.
        """
        program = str(program)
        argv = [program, *(str(a) for a in args)]
        target = " ".join(argv)

        pid = self._do_fork(target)
        if pid == 0:
            self._exec_child(program, argv)

        logger.debug("Spawned pid %d: %s", pid, target)
        return SpawnedProcess(pid=pid, target=target)

    def spawn_call(
        self, target: str, func: Callable[..., int | None], *args: object,
    ) -> SpawnedProcess:
        """Fork and run ``func(*args)`` in the child.

        The child's exit status is the integer returned by ``func``
        (None means 0); an uncaught exception exits with
        CHILD_FAILURE_STATUS.

        Raises:
            SpawnError: If fork failed; no process was created.
        """
        pid = self._do_fork(target)
        if pid == 0:
            self._call_child(target, func, args)

        logger.debug("Spawned pid %d: %s", pid, target)
        return SpawnedProcess(pid=pid, target=target)

    def _do_fork(self, target: str) -> int:
        # child must start with empty stdio buffers
        _flush_all()
        try:
            pid = self._fork()
        except OSError as exc:
            raise SpawnError(target, exc) from exc
        if pid != 0:
            self.spawn_count += 1
        return pid

    @staticmethod
    def _exec_child(program: str, argv: list[str]) -> None:
        try:
            os.execv(program, argv)
        except Exception as exc:
            set_process_context(os.getpid(), program)
            logger.error("Failed to exec %s: %s", program, exc)
            flush_handlers()
        finally:
            os._exit(EXEC_FAILURE_STATUS)

    @staticmethod
    def _call_child(
        target: str, func: Callable[..., int | None], args: tuple[object, ...],
    ) -> None:
        status = CHILD_FAILURE_STATUS
        try:
            set_process_context(os.getpid(), target)
            result = func(*args)
            status = 0 if result is None else int(result)
        except BaseException:  # noqa: BLE001 - the child must never unwind into parent code
            logger.exception("Child for %s raised", target)
        finally:
            try:
                _flush_all()
            finally:
                os._exit(status)


def _flush_all() -> None:
    flush_handlers()
    for stream in (sys.stdout, sys.stderr):
        try:
            stream.flush()
        except (OSError, ValueError):
            pass
