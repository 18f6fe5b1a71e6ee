# src/copier/worker.py — v1
"""Body of a copy child: copy one file, log the outcome, return an exit status."""

from __future__ import annotations

import logging
import os

from forkwatch.copier.models import CopyJob
from forkwatch.core.errors import CHILD_FAILURE_STATUS, CopyError
from forkwatch.fs.base_filesystem import BaseFileSystem

logger = logging.getLogger(__name__)


def copy_one(job: CopyJob, fs: BaseFileSystem) -> int:
    """Copy ``job.source`` to ``job.destination``, overwriting.

    Runs inside the child. Failures are logged here and reported to the
    parent only through the returned status.
    """
    try:
        size = fs.copy_file(job.source, job.destination)
    except OSError as exc:
        logger.error("%s (pid %d)", CopyError(job.source, job.destination, exc), os.getpid())
        return CHILD_FAILURE_STATUS

    logger.info(
        "Copied %s -> %s (%d bytes, pid %d)",
        job.source, job.destination, size, os.getpid(),
    )
    return 0
