# src/process/models.py — v1
"""Process lifecycle models: SpawnedProcess, ExitStatus."""

from __future__ import annotations

import os
import signal as _signal
from typing import Literal

from pydantic import BaseModel

ProcessState = Literal["running", "exited", "signaled"]


class ExitStatus(BaseModel):
    """Classified termination of a reaped child."""

    pid: int
    state: Literal["exited", "signaled"]
    code: int | None = None
    signal: int | None = None

    @classmethod
    def from_wait_status(cls, pid: int, status: int) -> ExitStatus:
        """Decode a raw status word returned by os.waitpid / os.wait."""
        if os.WIFSIGNALED(status):
            return cls(pid=pid, state="signaled", signal=os.WTERMSIG(status))
        return cls(pid=pid, state="exited", code=os.WEXITSTATUS(status))

    @property
    def ok(self) -> bool:
        """True for a normal exit with code 0."""
        return self.state == "exited" and self.code == 0

    def describe(self) -> str:
        """Short human-readable form used in log lines."""
        if self.state == "signaled":
            try:
                name = _signal.Signals(self.signal).name
            except ValueError:
                name = str(self.signal)
            return f"terminated by signal {name}"
        return f"exited with code {self.code}"


class SpawnedProcess(BaseModel):
    """Handle for a child process owned by the component that spawned it."""

    pid: int
    target: str
    state: ProcessState = "running"
    exit_status: ExitStatus | None = None

    def mark_reaped(self, status: ExitStatus) -> None:
        """Record the terminal status; the OS entry is gone after this."""
        self.exit_status = status
        self.state = status.state
