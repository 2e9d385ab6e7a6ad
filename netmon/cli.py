"""Command line interface for the network monitor."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import signal
import threading
from pathlib import Path
from typing import Iterable, List

from .collectors import BaseCollector, SystemMetricsCollector
from .config import AppConfig, load_config
from .core.monitor import NetworkMonitor
from .rotation import RotatingWriter, RotationPolicy
from .rotation.policy import MEGABYTE

LOGGER = logging.getLogger(__name__)

SOURCE = "Main"


def apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    changes = {}
    if args.log_dir is not None:
        changes["directory"] = Path(args.log_dir)
    if args.log_file is not None:
        changes["file_name"] = args.log_file
    if args.max_size_mb is not None:
        changes["max_file_size_bytes"] = args.max_size_mb * MEGABYTE
    if args.max_backups is not None:
        changes["max_backup_files"] = args.max_backups
    rotation = dataclasses.replace(config.rotation, **changes) if changes else config.rotation

    config = dataclasses.replace(config, rotation=rotation)
    if args.initial_delay is not None:
        config.initial_delay_seconds = max(0.0, args.initial_delay)
    if args.interval is not None and args.interval > 0:
        config.interval_seconds = args.interval
    return config


def build_writer(policy: RotationPolicy) -> RotatingWriter:
    return RotatingWriter.initialize(policy)


def build_monitor(writer: RotatingWriter, collectors: Iterable[BaseCollector]) -> NetworkMonitor:
    return NetworkMonitor(writer, collectors)


def default_collectors() -> List[BaseCollector]:
    return [SystemMetricsCollector()]


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Periodic system monitor with rotating log files")
    parser.add_argument("--config", type=Path, help="JSON configuration file")
    parser.add_argument("--log-dir", help="Directory for the active log and its backups")
    parser.add_argument("--log-file", help="Active log file name")
    parser.add_argument("--max-size-mb", type=int, help="Rotate once the active file reaches this size")
    parser.add_argument("--max-backups", type=int, help="Number of rotated files to keep")
    parser.add_argument("--initial-delay", type=float, help="Seconds before the first collection")
    parser.add_argument("--interval", type=float, help="Seconds between collections")
    parser.add_argument(
        "--duration",
        type=float,
        help="Stop after this many seconds instead of waiting for a signal",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug diagnostics")
    return parser


def main(argv: List[str] | None = None) -> int:
    args = _parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    config = apply_overrides(load_config(args.config), args)
    LOGGER.debug("Effective configuration: %s", config.to_dict())
    writer = build_writer(config.rotation)
    shutdown = threading.Event()
    previous_handler = None
    if threading.current_thread() is threading.main_thread():
        previous_handler = signal.signal(signal.SIGTERM, lambda signum, frame: shutdown.set())

    try:
        writer.info("Application starting", SOURCE)
        monitor = build_monitor(writer, default_collectors())
        monitor.start(config.initial_delay_seconds, config.interval_seconds)
        try:
            shutdown.wait(args.duration)
        except KeyboardInterrupt:
            writer.warning("Interrupted. Shutting down...", SOURCE)
        monitor.stop()
        writer.info("Application shut down gracefully.", SOURCE)
    finally:
        if previous_handler is not None:
            signal.signal(signal.SIGTERM, previous_handler)
        writer.close()
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
