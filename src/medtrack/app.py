"""Application bootstrap for the MedTrack desktop client."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

from medtrack._paths import app_support_dir, default_store_path
from medtrack.cli import parse_arguments, run_headless_from_args
from medtrack.headless import HeadlessResult
from medtrack.logs.rotating import get_logger


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for both GUI and headless execution."""

    raw_argv = list(argv if argv is not None else sys.argv[1:])
    args, extras = parse_arguments(raw_argv)

    if args.headless:
        try:
            result = run_headless_from_args(args)
        except (ValueError, FileNotFoundError) as exc:
            _emit_headless_miss(exc)
            return 2
        _print_headless_result(result, show_summary=bool(args.summary))
        return result.exit_code

    store_path = Path(args.store_path).expanduser() if args.store_path else default_store_path()
    sys.argv = [sys.argv[0]] + extras
    return _launch_gui(store_path)


def _launch_gui(store_path: Path) -> int:
    from PySide6.QtWidgets import QApplication

    from medtrack.headless import open_controller
    from medtrack.ui.main_window import MainWindow

    print("MedTrack: launching GUI", flush=True)
    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("MedTrack")
    app.setOrganizationName("MedTrack")

    logger = get_logger()
    print(f"MedTrack: using support dir {app_support_dir()}", flush=True)
    print(f"MedTrack: store {store_path}", flush=True)
    controller = open_controller(store_path)
    window = MainWindow(controller)
    window.show()
    logger.info("Main window shown store=%s", store_path)

    result = app.exec()
    print(f"MedTrack: event loop exited ({result})", flush=True)
    return result


def _print_headless_result(result: HeadlessResult, *, show_summary: bool) -> None:
    if show_summary:
        print(result.summary_line, flush=True)
    if result.export_path:
        print(f"EXPORT: {result.export_path}", flush=True)
    if result.report_path:
        print(f"REPORT: {result.report_path}", flush=True)
    for warning in result.warnings:
        print(f"Warning: {warning}", file=sys.stderr, flush=True)


def _emit_headless_miss(exc: Exception) -> None:
    reason = "input_missing" if isinstance(exc, FileNotFoundError) else "invalid_args"
    print(f"HEADLESS_MISS reason={reason}", flush=True)
    print(f"Headless error: {exc}", file=sys.stderr, flush=True)


if __name__ == "__main__":
    sys.exit(main())
