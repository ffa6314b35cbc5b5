"""Command-line parsing for the MedTrack application."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional, Tuple

from medtrack.headless import HeadlessOptions, HeadlessResult, execute_headless


def parse_arguments(argv: Optional[List[str]] = None) -> Tuple[argparse.Namespace, List[str]]:
    """Parse known CLI arguments and return ``(args, extras)``."""

    parser = argparse.ArgumentParser(description="MedTrack bed-management dashboard")
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run store operations without launching the GUI.",
    )
    parser.add_argument(
        "--store",
        dest="store_path",
        help="Path to the key/value store file (default: $MEDTRACK_STORE or app support).",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print the current occupancy summary (headless mode).",
    )
    parser.add_argument(
        "--export",
        dest="export_dir",
        nargs="?",
        const="",
        default=None,
        help="Export the registry JSON, optionally into DIR (headless mode).",
    )
    parser.add_argument(
        "--import",
        dest="import_file",
        help="Load beds, archive and stats from an exported registry file (headless mode).",
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Erase the store and restore the seed data (headless mode).",
    )
    parser.add_argument(
        "--seed-demo",
        action="store_true",
        help="Add the demo discharge records when the archive is empty (headless mode).",
    )
    parser.add_argument(
        "--report",
        dest="report_path",
        nargs="?",
        const="",
        default=None,
        help="Request an AI occupancy report and save it as TXT (headless mode).",
    )
    parser.add_argument(
        "--log-dir",
        dest="log_dir",
        default="debug",
        help="Directory for headless logs (default: debug).",
    )
    parser.add_argument(
        "--log-file",
        dest="log_file",
        help="Optional explicit log file path for headless runs.",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable debug logging (headless mode).",
    )

    args, extras = parser.parse_known_args(argv)
    return args, extras


def create_headless_options(args: argparse.Namespace) -> HeadlessOptions:
    """Return ``HeadlessOptions`` derived from parsed ``args``."""

    if not args.headless:
        raise ValueError("create_headless_options called without --headless flag")

    wants_export = args.export_dir is not None
    wants_report = args.report_path is not None
    if not any((args.summary, wants_export, args.import_file, args.reset, args.seed_demo, wants_report)):
        raise ValueError(
            "--headless needs at least one of --summary, --export, --import, --reset, --seed-demo, --report"
        )

    return HeadlessOptions(
        store_path=Path(args.store_path).expanduser() if args.store_path else None,
        summary=bool(args.summary),
        export=wants_export,
        export_dir=Path(args.export_dir).expanduser() if args.export_dir else None,
        import_file=Path(args.import_file).expanduser() if args.import_file else None,
        reset=bool(args.reset),
        seed_demo=bool(args.seed_demo),
        report=wants_report,
        report_path=Path(args.report_path).expanduser() if args.report_path else None,
        log_dir=Path(args.log_dir).expanduser(),
        log_file=Path(args.log_file).expanduser() if args.log_file else None,
        trace=bool(args.trace),
    )


def run_headless_from_args(args: argparse.Namespace) -> HeadlessResult:
    """Execute the headless run using ``args`` and return the result."""

    options = create_headless_options(args)
    return execute_headless(options)


__all__ = [
    "parse_arguments",
    "create_headless_options",
    "run_headless_from_args",
]
