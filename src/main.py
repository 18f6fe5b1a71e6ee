# src/main.py — v1
"""CLI entry point — monitor, copy, demo commands.

Usage:
    forkwatch monitor <directory> [--duration SECONDS] [--poll-interval SECONDS]
    forkwatch copy <source> <dest> [--spawn-delay SECONDS]
    forkwatch demo [--watch-seconds SECONDS]

Any other invocation prints usage and exits with status 1.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from forkwatch.config.settings import ConfigurationError, Settings, load_settings
from forkwatch.core.errors import StartupError
from forkwatch.version import __version__

logger = logging.getLogger(__name__)


class _UsageParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on bad usage."""

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_usage(sys.stderr)
        return 1

    try:
        settings = load_settings(**_settings_overrides(args))
    except (ConfigurationError, ValueError) as exc:
        _setup_logging(Settings.model_construct(), args.verbose)
        logger.error("Invalid configuration: %s", exc)
        return 1

    _setup_logging(settings, args.verbose)

    try:
        return args.func(args, settings)
    except StartupError as exc:
        logger.error("%s", exc)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = _UsageParser(
        prog="forkwatch",
        description=f"forkwatch v{__version__} — script watcher and parallel copier",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- monitor ---
    p_monitor = subparsers.add_parser(
        "monitor", help="Run and delete executable scripts dropped into a directory",
    )
    p_monitor.add_argument("directory", type=Path, help="Directory to watch")
    p_monitor.add_argument(
        "--duration", type=float, default=None,
        help="Stop after this many seconds (default: run until Ctrl+C)",
    )
    p_monitor.add_argument(
        "--poll-interval", type=float, default=None,
        help="Seconds to sleep when no scripts are found",
    )
    p_monitor.set_defaults(func=_cmd_monitor)

    # --- copy ---
    p_copy = subparsers.add_parser(
        "copy", help="Copy every file of a directory, one process per file",
    )
    p_copy.add_argument("source", type=Path, help="Source directory")
    p_copy.add_argument("dest", type=Path, help="Destination directory (created if missing)")
    p_copy.add_argument(
        "--spawn-delay", type=float, default=None,
        help="Seconds to pause between spawns",
    )
    p_copy.set_defaults(func=_cmd_copy)

    # --- demo ---
    p_demo = subparsers.add_parser(
        "demo", help="Seed a demo tree under $HOME, copy it, then watch it briefly",
    )
    p_demo.add_argument(
        "--watch-seconds", type=float, default=None,
        help="Duration of the bounded watch pass",
    )
    p_demo.set_defaults(func=_cmd_demo)

    return parser


def _settings_overrides(args: argparse.Namespace) -> dict[str, object]:
    """Map CLI flags that were given onto Settings fields."""
    mapping = {
        "poll_interval": "poll_interval_seconds",
        "spawn_delay": "spawn_delay_seconds",
        "watch_seconds": "demo_watch_seconds",
    }
    overrides: dict[str, object] = {}
    for arg_name, field_name in mapping.items():
        value = getattr(args, arg_name, None)
        if value is not None:
            overrides[field_name] = value
    return overrides


def _cmd_monitor(args: argparse.Namespace, settings: Settings) -> int:
    """Watch a directory until interrupted or the duration elapses."""
    from forkwatch.watcher.watcher import DirectoryWatcher

    watcher = DirectoryWatcher.create(args.directory, settings)
    report = watcher.run(duration_seconds=args.duration)

    print("\nWatch complete:")
    print(f"  Scripts run:     {report.dispatched}")
    print(f"  Deleted:         {report.deleted}")
    print(f"  Nonzero exits:   {report.nonzero_exits}")
    print(f"  Spawn failures:  {report.spawn_failures}")
    print(f"  Elapsed:         {report.elapsed_seconds:.1f}s")
    return 0


def _cmd_copy(args: argparse.Namespace, settings: Settings) -> int:
    """Run one parallel copy pass."""
    from forkwatch.copier.copier import ParallelCopier

    copier = ParallelCopier.from_settings(settings)
    report = copier.copy_all(args.source, args.dest)

    print("\nCopy complete:")
    print(f"  Files found:     {report.files_found}")
    print(f"  Processes:       {report.spawned} spawned, {report.reaped} reaped")
    print(f"  Succeeded:       {report.succeeded}")
    print(f"  Failed:          {report.failed}")
    print(f"  Duration:        {report.duration_seconds:.2f}s")
    return 0


def _cmd_demo(args: argparse.Namespace, settings: Settings) -> int:
    """Seed demo data, copy it, then run a bounded watch."""
    from forkwatch.demo.paths import DemoPaths
    from forkwatch.demo.runner import run_demo

    paths = DemoPaths.from_settings(settings)
    logger.info("Demo root: %s", paths.root)
    copy_report, watch_report = run_demo(settings, paths)

    print("\nDemo complete:")
    print(f"  Files copied:    {copy_report.succeeded}/{copy_report.files_found}")
    print(f"  Scripts run:     {watch_report.dispatched}")
    print(f"  Scripts deleted: {watch_report.deleted}")
    return 0


def _setup_logging(settings: Settings, verbose: bool) -> None:
    """Configure logging for CLI usage."""
    from forkwatch.logging.logger import setup_logging

    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


if __name__ == "__main__":
    sys.exit(main())
