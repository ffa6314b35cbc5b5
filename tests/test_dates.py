"""Tests for calendar helpers and the developer date override."""

from __future__ import annotations

import os
import sys
import unittest
from datetime import date
from pathlib import Path
from unittest.mock import patch

ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from medtrack.dates import (  # noqa: E402
    dev_override_date,
    parse_iso_date,
    short_label,
    stay_duration,
    today,
    today_iso,
)


class StayDurationTests(unittest.TestCase):
    def test_two_day_stay(self) -> None:
        self.assertEqual(stay_duration("2023-10-22", "2023-10-24"), 2)

    def test_same_day_counts_as_one(self) -> None:
        self.assertEqual(stay_duration("2023-10-24", "2023-10-24"), 1)

    def test_reversed_dates_use_absolute_difference(self) -> None:
        self.assertEqual(stay_duration("2023-10-24", "2023-10-20"), 4)

    def test_month_boundary(self) -> None:
        self.assertEqual(stay_duration("2023-10-30", "2023-11-02"), 3)

    def test_bad_date_raises(self) -> None:
        with self.assertRaises(ValueError):
            stay_duration("2023-10-22", "24/10/2023")


class ParsingTests(unittest.TestCase):
    def test_parse_iso_ignores_time_suffix(self) -> None:
        self.assertEqual(parse_iso_date("2023-10-24T08:30:00Z"), date(2023, 10, 24))

    def test_parse_empty_raises(self) -> None:
        with self.assertRaises(ValueError):
            parse_iso_date("  ")

    def test_short_label(self) -> None:
        self.assertEqual(short_label(date(2023, 10, 24)), "Oct 24")
        self.assertEqual(short_label(date(2024, 3, 5)), "Mar 5")


class DevOverrideTests(unittest.TestCase):
    def test_override_sets_today(self) -> None:
        with patch.dict(os.environ, {"MEDTRACK_DEV_DATE": "2023-10-26"}):
            self.assertEqual(dev_override_date(), date(2023, 10, 26))
            self.assertEqual(today(), date(2023, 10, 26))
            self.assertEqual(today_iso(), "2023-10-26")

    def test_invalid_override_is_ignored(self) -> None:
        with patch.dict(os.environ, {"MEDTRACK_DEV_DATE": "not-a-date"}):
            self.assertIsNone(dev_override_date())
            self.assertEqual(today(), date.today())


if __name__ == "__main__":
    unittest.main()
