"""Headless runner for store maintenance and reports, used by the CLI."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from medtrack._paths import default_store_path
from medtrack.domain.seed import demo_discharge_history
from medtrack.engine.controller import DashboardController, snapshot_for
from medtrack.fs.exports import exports_dir, sanitize_filename
from medtrack.logs.rotating import get_logger, log_path
from medtrack.report.prompt import department_tally
from medtrack.report.requester import ReportRequester, ReportUnavailable
from medtrack.report.txt_writer import write_report
from medtrack.store.db import Database
from medtrack.store.kv import KeyValueStore

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class HeadlessOptions:
    """Configuration for a headless run."""

    store_path: Optional[Path] = None
    summary: bool = False
    export_dir: Optional[Path] = None
    export: bool = False
    import_file: Optional[Path] = None
    reset: bool = False
    seed_demo: bool = False
    report: bool = False
    report_path: Optional[Path] = None
    log_dir: Path = field(default_factory=lambda: Path("debug"))
    log_file: Optional[Path] = None
    trace: bool = False


@dataclass(slots=True)
class HeadlessResult:
    """Outcome of a headless run."""

    exit_code: int
    summary_line: str
    export_path: Optional[Path]
    report_path: Optional[Path]
    warnings: List[str]
    log_file: Path


def open_controller(store_path: Optional[Path] = None) -> DashboardController:
    path = Path(store_path).expanduser() if store_path else default_store_path()
    return DashboardController(Database(KeyValueStore(path)))


def execute_headless(
    options: HeadlessOptions,
    requester: Optional[ReportRequester] = None,
) -> HeadlessResult:
    """Apply the requested store operations in a fixed order and summarise."""

    if options.import_file is not None and not options.import_file.expanduser().exists():
        raise FileNotFoundError(f"Registry file not found: {options.import_file}")

    log_dir = options.log_dir.expanduser().resolve()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = (options.log_file or (log_dir / _default_log_name())).expanduser().resolve()
    _configure_logging(log_file, trace=options.trace)
    print(f"LOG_ROTATION_OK path={log_path()}", flush=True)

    controller = open_controller(options.store_path)
    LOGGER.info("Headless start store=%s", controller.db.store.path)
    warnings: List[str] = []

    if options.reset:
        controller.reset()
        LOGGER.info("Store reset to defaults")

    if options.import_file is not None:
        controller.import_registry(options.import_file.expanduser())

    if options.seed_demo:
        if controller.state.discharge_history:
            warnings.append("Archive not empty; demo records not added")
        else:
            controller.db.save_history(demo_discharge_history())
            controller.reload()

    export_path: Optional[Path] = None
    if options.export:
        export_path = controller.export_registry(options.export_dir)

    report_path: Optional[Path] = None
    exit_code = 0
    if options.report:
        report_requester = requester or ReportRequester()
        try:
            report = report_requester.request(controller.state.beds)
        except ReportUnavailable as exc:
            warnings.append(str(exc))
            exit_code = 1
        else:
            target = options.report_path or (exports_dir() / _default_report_name())
            report_path = write_report(
                report,
                Path(target).expanduser(),
                tally=department_tally(controller.state.beds),
            )

    summary_line = build_summary_line(controller)
    LOGGER.info("Headless run completed exit_code=%s", exit_code)
    return HeadlessResult(
        exit_code=exit_code,
        summary_line=summary_line,
        export_path=export_path,
        report_path=report_path,
        warnings=warnings,
        log_file=log_file,
    )


def build_summary_line(controller: DashboardController) -> str:
    snapshot = snapshot_for(controller.state.beds)
    return (
        f"Beds:{snapshot.total} Occupied:{snapshot.occupied} Available:{snapshot.available} "
        f"Cleaning:{snapshot.cleaning} Maintenance:{snapshot.maintenance} "
        f"Occupancy:{snapshot.occupancy_rate}% Archive:{len(controller.state.discharge_history)} "
        f"Revenue:{controller.state.session_revenue:.2f}"
    )


def _configure_logging(log_file: Path, *, trace: bool = False) -> logging.Logger:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    base_logger = get_logger()
    level = logging.DEBUG if trace else logging.INFO
    base_logger.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    if not any(isinstance(handler, logging.StreamHandler) for handler in root_logger.handlers):
        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(level)
        root_logger.addHandler(stream_handler)

    existing_paths = {
        getattr(handler, "baseFilename", None)
        for handler in base_logger.handlers
        if hasattr(handler, "baseFilename")
    }
    if str(log_file) not in existing_paths:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            "%Y-%m-%d %H:%M:%S",
        )
        file_handler.setFormatter(formatter)
        base_logger.addHandler(file_handler)

    return base_logger


def _default_log_name() -> str:
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"headless_{timestamp}.log"


def _default_report_name() -> str:
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return sanitize_filename(f"occupancy_report_{timestamp}.txt")


__all__ = [
    "HeadlessOptions",
    "HeadlessResult",
    "open_controller",
    "execute_headless",
    "build_summary_line",
]
