# src/core/errors.py — v1
"""Error taxonomy for the watcher and copier workflows.

Only StartupError is fatal: it is raised before any process is spawned
and the CLI turns it into exit status 1. Everything else is recovered
where it happens and surfaces as a log line.
"""

from __future__ import annotations

# Status a child exits with when its image replacement (execv) fails.
# 127 matches the shell convention for "command could not be executed".
EXEC_FAILURE_STATUS = 127

# Status a forked callable exits with when it raises.
CHILD_FAILURE_STATUS = 1


class ForkwatchError(Exception):
    """Base class for all forkwatch errors."""


class StartupError(ForkwatchError, ValueError):
    """Target or source path missing or not a directory."""

    def __init__(self, path: object, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{reason}: {path}")


class SpawnError(ForkwatchError):
    """The OS failed to create a new process (fork failed)."""

    def __init__(self, target: object, cause: OSError) -> None:
        self.target = target
        self.cause = cause
        super().__init__(f"Failed to spawn process for {target}: {cause}")


class CopyError(ForkwatchError):
    """A file copy failed inside a copy child."""

    def __init__(self, source: object, destination: object, cause: OSError) -> None:
        self.source = source
        self.destination = destination
        self.cause = cause
        super().__init__(f"Failed to copy {source} -> {destination}: {cause}")


class DeleteError(ForkwatchError):
    """A script could not be removed after it ran."""

    def __init__(self, path: object, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to delete {path}: {cause}")
