"""Reissue CLI entry points.
This module exposes the catalog run and store inspection commands.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from core.config import ReissueConfig, parse_duration_unit
from core.constants import ENTITY_LOAD_ORDER, STATUS_FAILED, SUPPORTED_DURATION_UNITS
from core.errors import ReissueError
from core.types import RunOptions, RunReport, SourceLocations
from store.catalog_sdk import ReissueClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="reissue", description="Reissue catalog cleaning CLI")
    parser.add_argument("--database-url", help="Override REISSUE_DATABASE_URL for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_run_command(subparsers)
    _add_run_file_command(subparsers)
    _add_summary_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Reissue CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        client = _build_client(args.database_url)
        if args.command == "run":
            return _run_run_command(client, args)
        if args.command == "run-file":
            return _run_run_file_command(client, args)
        if args.command == "summary":
            return _run_summary_command(client)
    except ReissueError as error:
        print(f"status={STATUS_FAILED}\tstage={error.stage}\tcause={error}", file=sys.stderr)
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(database_url: str | None) -> ReissueClient:
    """Build SDK client with optional database override.

    Args:
        database_url: Optional override URL.

    Returns:
        Configured SDK client.
    """
    config = ReissueConfig.from_env()
    if database_url:
        config = replace(config, database_url=database_url)
    return ReissueClient(config)


def _run_run_command(client: ReissueClient, args: argparse.Namespace) -> int:
    """Handle run command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    config = client.config
    source_dir = config.source_dir
    if args.source_dir:
        source_dir = Path(args.source_dir).expanduser().resolve()
    paths = dict(SourceLocations.from_directory(source_dir).as_mapping())
    for entity in ENTITY_LOAD_ORDER:
        override = getattr(args, entity)
        if override:
            paths[entity] = Path(override).expanduser()
    duration_unit = (
        parse_duration_unit(args.duration_unit) if args.duration_unit else config.duration_unit
    )
    options = RunOptions(
        sources=SourceLocations(**paths),
        database_url=config.database_url,
        duration_unit=duration_unit,
    )
    _print_report(client.run(options))
    return 0


def _run_run_file_command(client: ReissueClient, args: argparse.Namespace) -> int:
    """Handle run-file command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    _print_report(client.run_file(args.run_file))
    return 0


def _run_summary_command(client: ReissueClient) -> int:
    """Print stored row counts per table."""
    for table_name, row_count in client.table_counts().items():
        print(f"{table_name}\t{row_count}")
    return 0


def _print_report(report: RunReport) -> None:
    """Print status and per-entity counts, one line each."""
    print(f"status={report.status}")
    for stats in report.entity_stats:
        print(
            f"{stats.entity}\t"
            f"read={stats.read_count}\t"
            f"accepted={stats.accepted_count}\t"
            f"loaded={stats.loaded_count}\t"
            f"rejected={stats.rejected_count}\t"
            f"duplicates={stats.duplicate_count}\t"
            f"unlinked={stats.unlinked_count}"
        )


def _add_run_command(subparsers: Any) -> None:
    """Register run subcommand."""
    parser = subparsers.add_parser("run", help="Rebuild the catalog store from raw CSV sources")
    parser.add_argument("--source-dir", help="Directory holding genres/artists/albums/tracks.csv")
    for entity in ENTITY_LOAD_ORDER:
        parser.add_argument(f"--{entity}", help=f"Override the {entity} CSV path")
    parser.add_argument(
        "--duration-unit",
        choices=SUPPORTED_DURATION_UNITS,
        help="Unit of raw track durations",
    )


def _add_run_file_command(subparsers: Any) -> None:
    """Register run-file subcommand."""
    parser = subparsers.add_parser("run-file", help="Run using a YAML run file")
    parser.add_argument("run_file", help="Path to YAML run file")


def _add_summary_command(subparsers: Any) -> None:
    """Register summary subcommand."""
    subparsers.add_parser("summary", help="Print row counts of the catalog store")
