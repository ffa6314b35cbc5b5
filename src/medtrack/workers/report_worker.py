"""Background worker that fetches an occupancy report off the UI thread."""

from __future__ import annotations

import logging
from typing import List, Optional

from PySide6.QtCore import QObject, Signal, Slot

from medtrack.domain.model import Bed
from medtrack.report.requester import ReportRequester, ReportUnavailable

logger = logging.getLogger(__name__)


class ReportWorker(QObject):
    """Runs a single report request and reports back through signals."""

    started = Signal()
    succeeded = Signal(object)
    failed = Signal(str)
    finished = Signal()

    def __init__(self, beds: List[Bed], requester: Optional[ReportRequester] = None) -> None:
        super().__init__()
        self._beds = list(beds)
        self._requester = requester or ReportRequester()

    @Slot()
    def run(self) -> None:
        self.started.emit()
        try:
            report = self._requester.request(self._beds)
        except ReportUnavailable as exc:
            self.failed.emit(str(exc))
        else:
            self.succeeded.emit(report)
        finally:
            self.finished.emit()


__all__ = ["ReportWorker"]
