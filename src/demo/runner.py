# src/demo/runner.py — v1
"""Demo orchestration: one copy pass, then one bounded watch pass."""

from __future__ import annotations

import logging

from forkwatch.config.settings import Settings
from forkwatch.copier.copier import ParallelCopier
from forkwatch.copier.models import CopyReport
from forkwatch.demo.paths import DemoPaths
from forkwatch.demo.seed import format_listing, seed_demo
from forkwatch.fs.fs_factory import create_filesystem
from forkwatch.logging.context import set_operation_context
from forkwatch.watcher.models import WatchReport
from forkwatch.watcher.watcher import DirectoryWatcher

logger = logging.getLogger(__name__)


def run_demo(settings: Settings, paths: DemoPaths) -> tuple[CopyReport, WatchReport]:
    """Seed demo data, copy source → dest, then watch the script dir for a while."""
    set_operation_context("demo")
    seed_demo(paths)
    fs = create_filesystem(settings)

    print("\n=== Before ===")
    for directory in (paths.source_dir, paths.dest_dir, paths.watch_dir):
        print(format_listing(directory))

    copier = ParallelCopier.from_settings(settings, fs=fs)
    copy_report = copier.copy_all(paths.source_dir, paths.dest_dir)

    watcher = DirectoryWatcher.create(paths.watch_dir, settings, fs=fs)
    watch_report = watcher.run(duration_seconds=settings.demo_watch_seconds)

    print("\n=== After ===")
    for directory in (paths.source_dir, paths.dest_dir, paths.watch_dir):
        print(format_listing(directory))

    return copy_report, watch_report
