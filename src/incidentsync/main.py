#!/usr/bin/env python3

# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
import time
from dataclasses import replace
from logging import getLogger
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from incidentsync.adapters.sqlalchemy import startup
from incidentsync.app import import_feed
from incidentsync.config import ConfigurationError, configure_logging, get_reconcile_config
from incidentsync.domain.model import IncidentSyncError

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from types import FrameType

    from incidentsync.config import ReconcileConfig

log = getLogger(__name__)


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value}")
    return number


def _positive_float(value: str) -> float:
    number = float(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive number: {value}")
    return number


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="incidentsync",
        description="Reconcile an incident feed into the incident store",
    )
    parser.add_argument("source", help="Feed URL, feed file, or directory of feed files")
    parser.add_argument(
        "--interval",
        type=_positive_float,
        help="Repeat the import every INTERVAL seconds instead of running once",
    )
    parser.add_argument(
        "--workers",
        type=_positive_int,
        help="Transform worker threads (default: INCIDENTSYNC_WORKERS or 4)",
    )
    parser.add_argument(
        "--database-uri",
        help="SQLAlchemy database URL (default: DATABASE_URI or a local SQLite file)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level")
    return parser.parse_args(list(argv))


def run_once(source: str, *, config: ReconcileConfig) -> bool:
    """Import ``source`` once; return whether every snapshot succeeded."""

    try:
        result = import_feed(source, config=config)
    except IncidentSyncError as exc:
        log.error("Import of %s failed: %s", source, exc)
        return False
    return result.ok


def run_ticks(
    source: str,
    *,
    interval: float,
    config: ReconcileConfig,
    sleep: Callable[[float], None] = time.sleep,
    max_ticks: int | None = None,
) -> None:
    """Import ``source`` every ``interval`` seconds; failed ticks are retried next time."""

    tick = 0
    while max_ticks is None or tick < max_ticks:
        tick += 1
        if not run_once(source, config=config):
            log.warning("Tick %s failed; retrying in %ss", tick, interval)
        if max_ticks is not None and tick >= max_ticks:
            break
        sleep(interval)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    try:
        parsed_args = _parse_args(sys.argv[1:] if argv is None else argv)
        config = get_reconcile_config()
    except (ValueError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)

    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
    if parsed_args.workers is not None:
        config = replace(config, workers=parsed_args.workers)

    try:
        startup(database_uri=parsed_args.database_uri, force=True)
    except IncidentSyncError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    if parsed_args.interval is None:
        if not run_once(parsed_args.source, config=config):
            sys.exit(1)
        return

    run_ticks(parsed_args.source, interval=parsed_args.interval, config=config)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    print("\nClosed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
