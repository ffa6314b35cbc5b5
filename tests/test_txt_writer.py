"""TXT writer tests."""

from __future__ import annotations

import unittest
from datetime import datetime
from pathlib import Path
from tempfile import TemporaryDirectory

from medtrack.report.model import OccupancyReport, ReportInsight
from medtrack.report.txt_writer import render_report, write_report


def _report() -> OccupancyReport:
    return OccupancyReport(
        title="Daily Census",
        summary="Four of ten beds are occupied.",
        insights=[
            ReportInsight(title="Spare capacity", content="Surgery has room.", priority="Low", recommendation="None."),
            ReportInsight(title="ICU strain", content="ICU is half down.", priority="High", recommendation="Repair ICU-202."),
            ReportInsight(title="Turnover", content="PED-401 cleaning.", priority="Medium", recommendation="Expedite."),
        ],
    )


class TxtWriterTests(unittest.TestCase):
    def test_render_orders_insights_by_priority(self) -> None:
        text = render_report(
            _report(),
            tally={"ICU": {"occupied": 1, "total": 2}},
            generated_at=datetime(2023, 10, 26, 9, 5),
        )
        lines = text.splitlines()

        self.assertEqual(lines[0], "Daily Census")
        self.assertIn("ICU: 1/2 occupied", lines)
        headers = [line for line in lines if line.startswith("[")]
        self.assertEqual(
            headers,
            ["[High] ICU strain", "[Medium] Turnover", "[Low] Spare capacity"],
        )
        self.assertIn("  Recommendation: Repair ICU-202.", lines)
        self.assertEqual(lines[-1], "Generated: 10/26/2023 09:05")

    def test_render_without_insights(self) -> None:
        text = render_report(OccupancyReport(title="", summary="Quiet day."))
        self.assertTrue(text.startswith("Occupancy Report"))
        self.assertIn("(none)", text)
        self.assertNotIn("Census", text)

    def test_write_report_creates_parent(self) -> None:
        with TemporaryDirectory() as tmpdir:
            out_path = Path(tmpdir) / "nested" / "report.txt"
            written = write_report(_report(), out_path)
            self.assertEqual(written, out_path)
            self.assertIn("[High] ICU strain", out_path.read_text(encoding="utf-8"))


if __name__ == "__main__":
    unittest.main()
