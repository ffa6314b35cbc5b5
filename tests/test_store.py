"""Persistence tests for the INI-backed store and its typed collections."""

from __future__ import annotations

import json
import os
import sys
import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication  # noqa: E402

ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from medtrack.domain.seed import (  # noqa: E402
    default_users,
    demo_discharge_history,
    initial_beds,
    mock_stats_history,
)
from medtrack.store.db import (  # noqa: E402
    BEDS_KEY,
    HISTORY_KEY,
    REVENUE_KEY,
    STATS_KEY,
    USERS_KEY,
    Database,
)
from medtrack.store.kv import KeyValueStore  # noqa: E402


class DatabaseTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls._app = QApplication.instance() or QApplication([])

    def setUp(self) -> None:
        self._tmp = TemporaryDirectory()
        self.store = KeyValueStore(Path(self._tmp.name) / "nested" / "store.ini")
        self.db = Database(self.store)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_missing_keys_yield_defaults(self) -> None:
        self.assertEqual(self.db.load_beds(), initial_beds())
        self.assertEqual(self.db.load_history(), [])
        self.assertEqual(self.db.load_users(), default_users())
        self.assertEqual(self.db.load_revenue(), 0.0)
        self.assertEqual(self.db.load_stats(), mock_stats_history())

    def test_unparseable_json_yields_defaults(self) -> None:
        for key in (BEDS_KEY, HISTORY_KEY, USERS_KEY, STATS_KEY):
            self.store.set(key, "{not json")
        self.store.set(REVENUE_KEY, "lots")
        with self.assertLogs("medtrack.store.db", level="WARNING"):
            self.assertEqual(self.db.load_beds(), initial_beds())
        self.assertEqual(self.db.load_history(), [])
        self.assertEqual(self.db.load_users(), default_users())
        self.assertEqual(self.db.load_stats(), mock_stats_history())
        self.assertEqual(self.db.load_revenue(), 0.0)

    def test_wrong_shape_yields_defaults(self) -> None:
        self.store.set(BEDS_KEY, json.dumps({"beds": []}))
        self.store.set(USERS_KEY, json.dumps([{"id": "1"}]))
        self.assertEqual(self.db.load_beds(), initial_beds())
        self.assertEqual(self.db.load_users(), default_users())

    def test_bed_breaking_invariant_yields_defaults(self) -> None:
        broken = [bed.to_dict() for bed in initial_beds()]
        broken[1]["status"] = "Occupied"
        self.store.set(BEDS_KEY, json.dumps(broken))
        self.assertEqual(self.db.load_beds(), initial_beds())

    def test_duplicate_bed_ids_yield_defaults(self) -> None:
        broken = [bed.to_dict() for bed in initial_beds()]
        broken[1]["id"] = broken[0]["id"]
        self.store.set(BEDS_KEY, json.dumps(broken))
        with self.assertLogs("medtrack.store.db", level="WARNING"):
            self.assertEqual(self.db.load_beds(), initial_beds())

    def test_collections_round_trip(self) -> None:
        beds = initial_beds()[:3]
        history = demo_discharge_history()
        self.db.save_beds(beds)
        self.db.save_history(history)
        self.db.save_stats(mock_stats_history()[-2:])

        reopened = Database(KeyValueStore(self.store.path))
        self.assertEqual(reopened.load_beds(), beds)
        self.assertEqual(reopened.load_history(), history)
        self.assertEqual(reopened.load_stats(), mock_stats_history()[-2:])

    def test_empty_list_is_kept(self) -> None:
        self.db.save_beds([])
        self.assertEqual(self.db.load_beds(), [])

    def test_revenue_is_stored_as_decimal_text(self) -> None:
        self.db.save_revenue(4500.0)
        self.assertEqual(self.store.get(REVENUE_KEY), "4500")
        self.db.save_revenue(1234.5)
        self.assertEqual(self.store.get(REVENUE_KEY), "1234.5")
        self.assertEqual(self.db.load_revenue(), 1234.5)

    def test_clear_all_restores_defaults(self) -> None:
        self.db.save_beds([])
        self.db.save_revenue(10.0)
        self.db.clear_all()
        self.assertIsNone(self.store.get(BEDS_KEY))
        self.assertEqual(self.db.load_beds(), initial_beds())
        self.assertEqual(self.db.load_revenue(), 0.0)


if __name__ == "__main__":
    unittest.main()
