"""Dashboard controller tests: bed lifecycle, discharge, stats, staff and registry."""

from __future__ import annotations

import json
import os
import sys
import unittest
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import patch

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication  # noqa: E402

ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from medtrack.domain.model import BedStatus, Department, OccupancyLog, UserRole  # noqa: E402
from medtrack.domain.seed import initial_beds  # noqa: E402
from medtrack.engine.controller import (  # noqa: E402
    NO_SUMMARY,
    DashboardController,
    DischargeForm,
    PatientForm,
    RuleViolation,
    ValidationError,
)
from medtrack.engine.rules import DAILY_LOG_LIMIT, StatusChange  # noqa: E402
from medtrack.fs.exports import build_registry_payload  # noqa: E402
from medtrack.store.db import Database  # noqa: E402
from medtrack.store.kv import KeyValueStore  # noqa: E402


class _ControllerCase(unittest.TestCase):
    today = "2023-10-26"

    @classmethod
    def setUpClass(cls) -> None:
        cls._app = QApplication.instance() or QApplication([])

    def setUp(self) -> None:
        self._tmp = TemporaryDirectory()
        self.tmp_path = Path(self._tmp.name)
        env = patch.dict(
            os.environ,
            {"MEDTRACK_HOME": str(self.tmp_path / "home"), "MEDTRACK_DEV_DATE": self.today},
        )
        env.start()
        self.addCleanup(env.stop)
        self.store_path = self.tmp_path / "store.ini"
        self.controller = self._open()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _open(self, path: Path | None = None) -> DashboardController:
        return DashboardController(Database(KeyValueStore(path or self.store_path)))

    def assertInvariant(self, controller: DashboardController) -> None:
        for bed in controller.state.beds:
            self.assertEqual(bed.status is BedStatus.OCCUPIED, bed.patient is not None, bed.number)


class StartupTests(_ControllerCase):
    def test_first_launch_uses_seed_data(self) -> None:
        state = self.controller.state
        self.assertEqual(len(state.beds), 10)
        self.assertEqual(state.discharge_history, [])
        self.assertEqual([user.username for user in state.users], ["admin"])
        self.assertEqual(state.session_revenue, 0.0)
        self.assertInvariant(self.controller)

    def test_snapshot_counts(self) -> None:
        snapshot = self.controller.stats()
        self.assertEqual(
            (snapshot.total, snapshot.occupied, snapshot.available, snapshot.cleaning, snapshot.maintenance),
            (10, 4, 4, 1, 1),
        )
        self.assertEqual(snapshot.occupancy_rate, 40)

    def test_today_entry_reflects_live_counts(self) -> None:
        history = self.controller.state.stats_history
        self.assertEqual(len(history), DAILY_LOG_LIMIT)
        latest = history[-1]
        self.assertEqual(latest.day, self.today)
        self.assertEqual((latest.occupied, latest.available, latest.total), (4, 4, 10))
        self.assertEqual(latest.revenue, 145000.0)

    def test_queries(self) -> None:
        self.assertEqual(len(self.controller.beds_in(Department.ICU)), 2)
        self.assertEqual(len(self.controller.beds_in()), 10)
        active = self.controller.active_patients()
        self.assertEqual([entry.patient.id for entry in active], ["P-1001", "P-1002", "P-1003", "P-1004"])
        self.assertEqual(active[1].bed_number, "ICU-201")
        with self.assertRaises(KeyError):
            self.controller.bed("missing")


class StatusChangeTests(_ControllerCase):
    def test_occupying_empty_bed_is_deferred(self) -> None:
        result = self.controller.request_status_change("2", BedStatus.OCCUPIED)
        self.assertIs(result, StatusChange.REQUIRES_ADMISSION)
        self.assertEqual(self.controller.bed("2").status, BedStatus.AVAILABLE)

    def test_vacating_occupied_bed_is_deferred(self) -> None:
        result = self.controller.request_status_change("1", BedStatus.CLEANING)
        self.assertIs(result, StatusChange.REQUIRES_DISCHARGE)
        self.assertEqual(self.controller.bed("1").status, BedStatus.OCCUPIED)
        self.assertIsNotNone(self.controller.bed("1").patient)

    def test_direct_change_applies_persists_and_notifies(self) -> None:
        calls = []
        self.controller.add_listener(lambda: calls.append(1))

        result = self.controller.request_status_change("2", BedStatus.CLEANING)

        self.assertIs(result, StatusChange.APPLIED)
        self.assertEqual(self.controller.bed("2").status, BedStatus.CLEANING)
        self.assertEqual(calls, [1])
        self.assertEqual(self.controller.state.stats_history[-1].available, 3)
        self.assertEqual(self._open().bed("2").status, BedStatus.CLEANING)
        self.assertInvariant(self.controller)


class AdmissionTests(_ControllerCase):
    def test_admit_with_defaults(self) -> None:
        patient = self.controller.save_patient(
            "2", PatientForm(name="Ann Lee", diagnosis="Influenza", medications="Oseltamivir, , Fluids")
        )
        bed = self.controller.bed("2")
        self.assertEqual(bed.status, BedStatus.OCCUPIED)
        self.assertIs(bed.patient, patient)
        self.assertTrue(patient.id.startswith("PAT-"))
        self.assertEqual(patient.medications, ["Oseltamivir", "Fluids"])
        self.assertEqual(patient.admission_date, self.today)
        self.assertEqual(patient.current_bill, 1200.0)
        self.assertEqual(self.controller.state.stats_history[-1].occupied, 5)
        self.assertInvariant(self.controller)

    def test_admission_requires_name_and_diagnosis(self) -> None:
        with self.assertRaises(ValidationError):
            self.controller.save_patient("2", PatientForm(name="Ann Lee"))
        self.assertEqual(self.controller.bed("2").status, BedStatus.AVAILABLE)

    def test_admission_date_must_be_iso(self) -> None:
        with self.assertRaises(ValidationError):
            self.controller.save_patient(
                "2", PatientForm(name="Ann", diagnosis="Flu", admission_date="24/10/2023")
            )

    def test_negative_bill_is_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            self.controller.save_patient("2", PatientForm(name="Ann", diagnosis="Flu", current_bill="-500"))
        self.assertEqual(self.controller.bed("2").status, BedStatus.AVAILABLE)
        with self.assertRaises(ValidationError):
            self.controller.save_patient("1", PatientForm(current_bill="-1"))
        self.assertEqual(self.controller.bed("1").patient.current_bill, 4500.0)

    def test_update_keeps_blank_fields(self) -> None:
        patient = self.controller.save_patient("1", PatientForm(current_bill="5,000"))
        self.assertEqual(patient.id, "P-1001")
        self.assertEqual(patient.name, "John Doe")
        self.assertEqual(patient.medications, ["Ceftriaxone", "Metronidazole", "Paracetamol"])
        self.assertEqual(patient.admission_date, "2023-10-24")
        self.assertEqual(patient.current_bill, 5000.0)

    def test_update_replaces_given_fields(self) -> None:
        patient = self.controller.save_patient(
            "1", PatientForm(diagnosis="Post-op", medications="Ibuprofen", current_bill="x")
        )
        self.assertEqual(patient.diagnosis, "Post-op")
        self.assertEqual(patient.medications, ["Ibuprofen"])
        self.assertEqual(patient.current_bill, 4500.0)


class DischargeTests(_ControllerCase):
    def test_discharge_effects(self) -> None:
        record = self.controller.finalize_discharge(
            "3", DischargeForm(discharge_date="2023-10-24", final_bill="16000", summary="")
        )

        self.assertEqual(record.id, "P-1002")
        self.assertEqual(record.stay_duration, 2)
        self.assertEqual(record.final_bill, 16000.0)
        self.assertEqual(record.discharge_summary, NO_SUMMARY)
        bed = self.controller.bed("3")
        self.assertEqual(bed.status, BedStatus.CLEANING)
        self.assertIsNone(bed.patient)
        self.assertEqual(bed.last_cleaned, self.today)
        self.assertIs(self.controller.state.discharge_history[0], record)
        self.assertEqual(self.controller.state.session_revenue, 16000.0)
        latest = self.controller.state.stats_history[-1]
        self.assertEqual(latest.revenue, 145000.0 + 16000.0)
        self.assertEqual(latest.occupied, 3)
        self.assertInvariant(self.controller)

        reopened = self._open()
        self.assertEqual(reopened.state.session_revenue, 16000.0)
        self.assertEqual(reopened.state.discharge_history, [record])
        self.assertEqual(reopened.bed("3").status, BedStatus.CLEANING)

    def test_newest_discharge_first(self) -> None:
        self.controller.finalize_discharge("1", DischargeForm(summary="first"))
        self.controller.finalize_discharge("6", DischargeForm(summary="second"))
        ids = [record.id for record in self.controller.state.discharge_history]
        self.assertEqual(ids, ["P-1003", "P-1001"])
        self.assertEqual(self.controller.state.session_revenue, 4500.0 + 2400.0)

    def test_negative_final_bill_is_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            self.controller.finalize_discharge("1", DischargeForm(final_bill="-500"))
        self.assertEqual(self.controller.bed("1").status, BedStatus.OCCUPIED)
        self.assertEqual(self.controller.state.discharge_history, [])
        self.assertEqual(self.controller.state.session_revenue, 0.0)

    def test_final_bill_fallbacks(self) -> None:
        zero = self.controller.finalize_discharge("1", DischargeForm(final_bill="0"))
        self.assertEqual(zero.final_bill, 0.0)
        fallback = self.controller.finalize_discharge("3", DischargeForm(final_bill="n/a"))
        self.assertEqual(fallback.final_bill, 15000.0)

    def test_default_discharge_date_is_today(self) -> None:
        record = self.controller.finalize_discharge("9", DischargeForm())
        self.assertEqual(record.discharge_date, self.today)
        self.assertEqual(record.stay_duration, 1)

    def test_discharge_requires_patient(self) -> None:
        with self.assertRaises(RuleViolation):
            self.controller.finalize_discharge("2", DischargeForm())

    def test_bad_discharge_date(self) -> None:
        with self.assertRaises(ValidationError):
            self.controller.finalize_discharge("1", DischargeForm(discharge_date="yesterday"))
        self.assertEqual(self.controller.bed("1").status, BedStatus.OCCUPIED)

    def test_archive_lookup(self) -> None:
        self.controller.finalize_discharge("1", DischargeForm())
        self.assertEqual(self.controller.find_archive_record("P-1001").name, "John Doe")
        self.assertIsNone(self.controller.find_archive_record("P-9999"))


class DailyLogWindowTests(_ControllerCase):
    today = "2023-11-05"

    def test_window_keeps_seven_unique_days(self) -> None:
        history = self.controller.state.stats_history
        self.assertEqual(len(history), DAILY_LOG_LIMIT)
        self.assertEqual(history[-1].day, self.today)
        self.assertEqual(history[-1].revenue, 0.0)

        self.controller.request_status_change("2", BedStatus.MAINTENANCE)
        self.controller.finalize_discharge("1", DischargeForm(final_bill="100"))

        history = self.controller.state.stats_history
        days = [entry.day for entry in history]
        self.assertEqual(len(days), DAILY_LOG_LIMIT)
        self.assertEqual(len(set(days)), len(days))
        self.assertEqual(history[-1].revenue, 100.0)
        self.assertEqual((history[-1].occupied, history[-1].available), (3, 3))


class UserTests(_ControllerCase):
    def test_login(self) -> None:
        self.assertIsNone(self.controller.login("admin", "wrong"))
        self.assertIsNone(self.controller.current_user)
        user = self.controller.login("admin", "1234")
        self.assertTrue(user.is_admin)
        self.assertIs(self.controller.current_user, user)
        self.controller.logout()
        self.assertIsNone(self.controller.current_user)

    def test_add_user_and_login(self) -> None:
        user = self.controller.add_user("nurse", "pw", "Nurse Joy")
        self.assertEqual(user.role, UserRole.STAFF)
        self.assertEqual(len(user.id), 9)
        self.assertIsNotNone(self._open().login("nurse", "pw"))

    def test_add_user_validation(self) -> None:
        with self.assertRaises(ValidationError):
            self.controller.add_user("nurse", "", "Nurse Joy")
        with self.assertRaises(RuleViolation):
            self.controller.add_user("admin", "pw", "Another Admin")
        self.assertEqual(len(self.controller.state.users), 1)

    def test_root_admin_cannot_be_removed(self) -> None:
        with self.assertRaises(RuleViolation):
            self.controller.remove_user("1", lambda _user: True)

    def test_cannot_remove_self(self) -> None:
        second = self.controller.add_user("chief", "pw", "Chief", UserRole.ADMIN)
        self.controller.login("chief", "pw")
        with self.assertRaises(RuleViolation):
            self.controller.remove_user(second.id, lambda _user: True)

    def test_remove_requires_confirmation(self) -> None:
        staff = self.controller.add_user("nurse", "pw", "Nurse Joy")
        self.controller.login("admin", "1234")
        seen = []

        self.assertFalse(self.controller.remove_user(staff.id, lambda user: seen.append(user) or False))
        self.assertEqual(seen, [staff])
        self.assertIn(staff, self.controller.state.users)

        self.assertTrue(self.controller.remove_user(staff.id, lambda _user: True))
        self.assertNotIn(staff, self.controller.state.users)
        self.assertIsNone(self._open().login("nurse", "pw"))

    def test_remove_unknown_user(self) -> None:
        with self.assertRaises(KeyError):
            self.controller.remove_user("nobody", lambda _user: True)


class RegistryTests(_ControllerCase):
    def test_export_then_import_into_fresh_store(self) -> None:
        self.controller.finalize_discharge("1", DischargeForm(final_bill="4200"))
        export_path = self.controller.export_registry(self.tmp_path / "out")
        self.assertTrue(export_path.name.startswith("medtrack_db_export_"))
        self.assertEqual(export_path.suffix, ".json")

        fresh = self._open(self.tmp_path / "fresh.ini")
        fresh.import_registry(export_path)

        self.assertEqual(fresh.state.beds, self.controller.state.beds)
        self.assertEqual(fresh.state.discharge_history, self.controller.state.discharge_history)
        self.assertEqual(fresh.state.stats_history, self.controller.state.stats_history)
        reopened = self._open(self.tmp_path / "fresh.ini")
        self.assertEqual(reopened.state.discharge_history, self.controller.state.discharge_history)

    def _write_registry(self, name: str, beds, stats) -> Path:
        target = self.tmp_path / name
        payload = build_registry_payload(beds, [], stats)
        target.write_text(json.dumps(payload), encoding="utf-8")
        return target

    def test_import_rejects_oversized_stats_series(self) -> None:
        stats = [
            OccupancyLog(day=f"2023-10-{day:02d}", occupied=1, available=1, total=2)
            for day in range(10, 20)
        ]
        stats.append(OccupancyLog(day="2023-10-19", occupied=2, available=0, total=2))
        before = list(self.controller.state.stats_history)
        path = self._write_registry("long_stats.json", initial_beds(), stats)

        with self.assertRaises(ValueError):
            self.controller.import_registry(path)

        self.assertEqual(self.controller.state.stats_history, before)
        self.assertEqual(self._open().state.stats_history, before)

    def test_import_rejects_repeated_stats_day(self) -> None:
        stats = [
            OccupancyLog(day="2023-10-20", occupied=1, available=1, total=2),
            OccupancyLog(day="2023-10-20", occupied=2, available=0, total=2),
        ]
        path = self._write_registry("repeat_day.json", initial_beds(), stats)
        with self.assertRaises(ValueError):
            self.controller.import_registry(path)
        self.assertLessEqual(len(self.controller.state.stats_history), DAILY_LOG_LIMIT)

    def test_import_rejects_duplicate_bed_ids(self) -> None:
        beds = initial_beds()
        beds[1].id = beds[0].id
        path = self._write_registry("dup_beds.json", beds, [])

        with self.assertRaises(ValueError):
            self.controller.import_registry(path)

        self.assertEqual([bed.id for bed in self._open().state.beds], [bed.id for bed in initial_beds()])

    def test_malformed_import_leaves_state(self) -> None:
        bad = self.tmp_path / "bad.json"
        bad.write_text('{"inventory": "nope"}', encoding="utf-8")
        with self.assertRaises(ValueError):
            self.controller.import_registry(bad)
        self.assertEqual(len(self.controller.state.beds), 10)

    def test_reset_restores_seed(self) -> None:
        self.controller.finalize_discharge("1", DischargeForm())
        self.controller.add_user("nurse", "pw", "Nurse Joy")
        self.controller.reset()
        self.assertEqual(self.controller.state.beds, initial_beds())
        self.assertEqual(self.controller.state.discharge_history, [])
        self.assertEqual(self.controller.state.session_revenue, 0.0)
        self.assertEqual([user.username for user in self.controller.state.users], ["admin"])


if __name__ == "__main__":
    unittest.main()
