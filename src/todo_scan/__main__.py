"""CLI entry-point for todo_scan.

Usage:
    python -m todo_scan scan <directory> [--quiet] [--all] [--user USER]
                                         [--priority LEVEL] [--due YYYY-MM-DD]
                                         [--json] [--workers N] [--verbose]
    python -m todo_scan validate <config.json>
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date, datetime
from pathlib import Path

import jsonschema
from rich.console import Console

from todo_scan import __version__
from todo_scan.api import scan_project
from todo_scan.contracts.load import validate_file
from todo_scan.core.config import CONFIG_SCHEMA, ConfigError, load_config
from todo_scan.reports.console import print_records, print_summary
from todo_scan.utils.exit_codes import ExitCode
from todo_scan.utils.json_norm import stable_json_dumps


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"invalid date {value!r} (expected YYYY-MM-DD)"
        ) from None


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="todoscan",
        description="CLI utility for maintaining TODOs in your code.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    sub = p.add_subparsers(dest="command")

    # ── scan subcommand ─────────────────────────────────────────────
    scan_p = sub.add_parser("scan", help="Scans a directory for TODOs.")
    scan_p.add_argument("directory", type=Path, help="The directory to scan.")
    scan_p.add_argument(
        "-q", "--quiet",
        action="store_true",
        default=False,
        help="Executes the scan without any miscellaneous information.",
    )
    scan_p.add_argument(
        "-a", "--all",
        dest="show_all",
        action="store_true",
        default=False,
        help="Lists all of the scan results.",
    )
    scan_p.add_argument(
        "-u", "--user",
        default=None,
        help="Only TODOs assigned to this user (@resp=...).",
    )
    scan_p.add_argument(
        "-p", "--priority",
        default=None,
        help="Only TODOs of this priority level (low, medium, high).",
    )
    scan_p.add_argument(
        "-d", "--due",
        type=_iso_date,
        default=None,
        help="Only TODOs due on or before this date (YYYY-MM-DD).",
    )
    scan_p.add_argument(
        "--json",
        dest="json_out",
        action="store_true",
        default=False,
        help="Print the scan result as JSON to stdout.",
    )
    scan_p.add_argument(
        "-j", "--workers",
        type=int,
        default=1,
        help="Number of threads used to scan files (default: 1).",
    )
    scan_p.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=False,
        help="Log debug information to stderr.",
    )

    # ── validate subcommand ─────────────────────────────────────────
    val_p = sub.add_parser(
        "validate",
        help="Validate a config file against the bundled schema.",
    )
    val_p.add_argument("instance", type=Path, help="Path to the config file.")

    return p


def _handle_scan(args: argparse.Namespace) -> int:
    root: Path = args.directory
    if not root.is_dir():
        print(f"error: directory not found: {root}", file=sys.stderr)
        return ExitCode.ERROR

    try:
        config = load_config(root)
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return ExitCode.ERROR

    result, summary, result_dict = scan_project(
        root,
        user=args.user,
        priority=args.priority,
        due=args.due,
        now=datetime.now(),
        config=config,
        workers=args.workers,
    )

    if args.json_out:
        sys.stdout.write(stable_json_dumps(result_dict))
        return ExitCode.SUCCESS

    console = Console()
    if args.show_all:
        print_records(console, result.records)
    if not args.quiet:
        print_summary(console, summary, time_warning=config.time_warning)
    return ExitCode.SUCCESS


def _handle_validate(args: argparse.Namespace) -> int:
    try:
        validate_file(args.instance, CONFIG_SCHEMA)
    except jsonschema.ValidationError as e:
        print(f"FAIL: {e.message}", file=sys.stderr)
        return ExitCode.INVALID_CONFIG
    except (OSError, json.JSONDecodeError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return ExitCode.ERROR
    print("OK")
    return ExitCode.SUCCESS


def main(argv: list[str] | None = None) -> int:
    """Entry-point — returns an exit code (see ``utils.exit_codes``)."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING,
        format="%(levelname)s - %(name)s - %(message)s",
        stream=sys.stderr,
    )

    if args.command == "scan":
        return _handle_scan(args)
    if args.command == "validate":
        return _handle_validate(args)

    parser.print_help(sys.stderr)
    return ExitCode.ERROR


if __name__ == "__main__":
    raise SystemExit(main())
