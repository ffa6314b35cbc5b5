"""Registry export/import and filename helper tests."""

from __future__ import annotations

import errno
import json
import os
import sys
import unittest
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import patch

ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from medtrack.domain.seed import demo_discharge_history, initial_beds, mock_stats_history  # noqa: E402
from medtrack.fs.exports import (  # noqa: E402
    build_registry_payload,
    export_registry,
    exports_dir,
    read_registry,
    registry_filename,
    safe_write_text,
    sanitize_filename,
)


class FilenameTests(unittest.TestCase):
    def test_sanitize_filename(self) -> None:
        self.assertEqual(sanitize_filename("report: ICU/ER?.txt"), "report_ ICU_ER_.txt")
        self.assertEqual(sanitize_filename(""), "MedTrack")
        self.assertLessEqual(len(sanitize_filename("x" * 300 + ".json")), 120)

    def test_registry_filename(self) -> None:
        self.assertEqual(registry_filename(1698300000000), "medtrack_db_export_1698300000000.json")


class RegistryFileTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = TemporaryDirectory()
        self.tmp_path = Path(self._tmp.name)
        env = patch.dict(os.environ, {"MEDTRACK_HOME": str(self.tmp_path / "home")})
        env.start()
        self.addCleanup(env.stop)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_payload_sections(self) -> None:
        payload = build_registry_payload(initial_beds(), demo_discharge_history(), mock_stats_history())
        self.assertEqual(set(payload), {"inventory", "archive", "yield_logs", "export_timestamp"})
        self.assertEqual(len(payload["inventory"]), 10)
        self.assertEqual(payload["archive"][0]["id"], "P-8801")
        self.assertEqual(payload["yield_logs"][0]["timestamp"], "Oct 20")

    def test_export_defaults_to_exports_folder(self) -> None:
        path = export_registry(initial_beds(), [], mock_stats_history())
        self.assertEqual(path.parent, exports_dir())
        document = json.loads(path.read_text(encoding="utf-8"))
        self.assertEqual(document["archive"], [])
        self.assertIn("\n  ", path.read_text(encoding="utf-8"))

    def test_read_back_export(self) -> None:
        path = export_registry(
            initial_beds(), demo_discharge_history(), mock_stats_history(), self.tmp_path / "out"
        )
        beds, archive, stats = read_registry(path)
        self.assertEqual(beds, initial_beds())
        self.assertEqual(archive, demo_discharge_history())
        self.assertEqual(stats, mock_stats_history())

    def test_read_rejects_malformed_documents(self) -> None:
        cases = {
            "not_json.json": "{",
            "array.json": "[]",
            "missing.json": json.dumps({"inventory": [], "archive": []}),
            "bad_bed.json": json.dumps(
                {"inventory": [{"id": "1", "status": "Occupied"}], "archive": [], "yield_logs": []}
            ),
        }
        for name, text in cases.items():
            target = self.tmp_path / name
            target.write_text(text, encoding="utf-8")
            with self.subTest(name=name), self.assertRaises(ValueError):
                read_registry(target)

    def test_safe_write_falls_back_on_permission_error(self) -> None:
        target = self.tmp_path / "locked" / "note.txt"
        original = Path.write_text
        calls = []

        def flaky_write(path_self, *args, **kwargs):
            calls.append(path_self)
            if len(calls) == 1:
                raise PermissionError(errno.EACCES, "denied")
            return original(path_self, *args, **kwargs)

        with patch.object(Path, "write_text", flaky_write):
            written = safe_write_text(target, "hello")

        self.assertEqual(written, exports_dir() / "note.txt")
        self.assertEqual(written.read_text(encoding="utf-8"), "hello")


if __name__ == "__main__":
    unittest.main()
