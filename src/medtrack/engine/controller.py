"""In-memory dashboard state and the operations that mutate it.

The controller owns a single :class:`AppState`. Each mutating operation
changes the state and then writes every affected collection to the
:class:`~medtrack.store.db.Database` explicitly, in a fixed order. Listeners
are notified afterwards so views can redraw.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional

from medtrack.dates import parse_iso_date, stay_duration, today_iso
from medtrack.domain.model import (
    Bed,
    BedStatus,
    Department,
    DischargedPatient,
    OccupancyLog,
    Patient,
    User,
    UserRole,
)
from medtrack.domain.seed import ROOT_ADMIN_ID
from medtrack.fs.exports import export_registry, read_registry
from medtrack.store.db import Database

from .rules import (
    StatusChange,
    add_day_revenue,
    classify_status_change,
    generate_patient_id,
    generate_user_id,
    parse_amount,
    parse_medications,
    upsert_daily_log,
)

logger = logging.getLogger(__name__)

NO_SUMMARY = "No summary provided."


class ValidationError(ValueError):
    """Form input is missing or unusable."""


class RuleViolation(ValueError):
    """The operation is not allowed in the current state."""


@dataclass(slots=True)
class PatientForm:
    """Raw admission/update form input; blanks fall back to defaults."""

    name: str = ""
    diagnosis: str = ""
    medications: str = ""
    patient_id: str = ""
    admission_date: str = ""
    current_bill: str = ""


@dataclass(slots=True)
class DischargeForm:
    discharge_date: str = ""
    final_bill: str = ""
    summary: str = ""


@dataclass(slots=True)
class OccupancySnapshot:
    total: int
    occupied: int
    available: int
    cleaning: int
    maintenance: int

    @property
    def occupancy_rate(self) -> int:
        if self.total <= 0:
            return 0
        return round(self.occupied / self.total * 100)


@dataclass(slots=True)
class ActivePatient:
    patient: Patient
    bed_id: str
    bed_number: str
    department: Department


@dataclass(slots=True)
class AppState:
    beds: List[Bed] = field(default_factory=list)
    discharge_history: List[DischargedPatient] = field(default_factory=list)
    users: List[User] = field(default_factory=list)
    session_revenue: float = 0.0
    stats_history: List[OccupancyLog] = field(default_factory=list)
    current_user: Optional[User] = None


def _form_amount(raw: str, label: str) -> Optional[float]:
    amount = parse_amount(raw)
    if amount is not None and amount < 0:
        raise ValidationError(f"{label} cannot be negative.")
    return amount


def snapshot_for(beds: List[Bed]) -> OccupancySnapshot:
    counts = {status: 0 for status in BedStatus}
    for bed in beds:
        counts[bed.status] += 1
    return OccupancySnapshot(
        total=len(beds),
        occupied=counts[BedStatus.OCCUPIED],
        available=counts[BedStatus.AVAILABLE],
        cleaning=counts[BedStatus.CLEANING],
        maintenance=counts[BedStatus.MAINTENANCE],
    )


class DashboardController:
    """Single owner of the dashboard state."""

    def __init__(self, db: Database) -> None:
        self.db = db
        self.state = AppState()
        self._listeners: List[Callable[[], None]] = []
        self.reload()

    # --- lifecycle ------------------------------------------------------------------

    def add_listener(self, callback: Callable[[], None]) -> None:
        self._listeners.append(callback)

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback()

    def reload(self) -> None:
        """Replace the in-memory state with what the store holds."""

        current_user = self.state.current_user
        self.state = AppState(
            beds=self.db.load_beds(),
            discharge_history=self.db.load_history(),
            users=self.db.load_users(),
            session_revenue=self.db.load_revenue(),
            stats_history=self.db.load_stats(),
        )
        if current_user is not None:
            self.state.current_user = next(
                (user for user in self.state.users if user.id == current_user.id), None
            )
        logger.info(
            "State loaded beds=%d archive=%d users=%d revenue=%.2f",
            len(self.state.beds),
            len(self.state.discharge_history),
            len(self.state.users),
            self.state.session_revenue,
        )
        self.recompute_daily_log()

    def reset(self) -> None:
        """Erase the store and start over from the seed datasets."""

        self.db.clear_all()
        self.reload()
        self._notify()

    # --- authentication -------------------------------------------------------------

    def login(self, username: str, password: str) -> Optional[User]:
        for user in self.state.users:
            if user.username == username and user.password == password:
                self.state.current_user = user
                logger.info("Login ok user=%s role=%s", user.username, user.role.value)
                return user
        logger.info("Login rejected user=%s", username)
        return None

    def logout(self) -> None:
        self.state.current_user = None

    @property
    def current_user(self) -> Optional[User]:
        return self.state.current_user

    # --- queries --------------------------------------------------------------------

    def stats(self) -> OccupancySnapshot:
        return snapshot_for(self.state.beds)

    def bed(self, bed_id: str) -> Bed:
        for bed in self.state.beds:
            if bed.id == bed_id:
                return bed
        raise KeyError(bed_id)

    def beds_in(self, department: Optional[Department] = None) -> List[Bed]:
        if department is None:
            return list(self.state.beds)
        return [bed for bed in self.state.beds if bed.department is department]

    def active_patients(self) -> List[ActivePatient]:
        return [
            ActivePatient(
                patient=bed.patient,
                bed_id=bed.id,
                bed_number=bed.number,
                department=bed.department,
            )
            for bed in self.state.beds
            if bed.status is BedStatus.OCCUPIED and bed.patient is not None
        ]

    def find_archive_record(self, patient_id: str) -> Optional[DischargedPatient]:
        return next(
            (record for record in self.state.discharge_history if record.id == patient_id), None
        )

    # --- bed transitions ------------------------------------------------------------

    def _replace_bed(self, updated: Bed) -> None:
        updated.check_invariant()
        self.state.beds = [updated if bed.id == updated.id else bed for bed in self.state.beds]

    def request_status_change(self, bed_id: str, new_status: BedStatus) -> StatusChange:
        bed = self.bed(bed_id)
        outcome = classify_status_change(bed, new_status)
        if outcome is not StatusChange.APPLIED:
            logger.info("Status change %s -> %s deferred: %s", bed.number, new_status.value, outcome.value)
            return outcome

        patient = bed.patient if new_status is BedStatus.OCCUPIED else None
        self._replace_bed(bed.with_status(new_status, patient))
        self.db.save_beds(self.state.beds)
        self.recompute_daily_log()
        logger.info("Bed %s status %s -> %s", bed.number, bed.status.value, new_status.value)
        self._notify()
        return outcome

    def save_patient(self, bed_id: str, form: PatientForm) -> Patient:
        """Admit a patient to ``bed_id`` or update the one already there."""

        bed = self.bed(bed_id)
        existing = bed.patient
        name = form.name.strip()
        diagnosis = form.diagnosis.strip()
        admission_date = form.admission_date.strip()
        if admission_date:
            try:
                parse_iso_date(admission_date)
            except ValueError as exc:
                raise ValidationError(f"Admission date must be YYYY-MM-DD: {admission_date!r}") from exc

        if existing is not None:
            medications = parse_medications(form.medications)
            bill = _form_amount(form.current_bill, "Current bill")
            patient = Patient(
                id=existing.id,
                name=name or existing.name,
                diagnosis=diagnosis or existing.diagnosis,
                medications=medications if form.medications.strip() else list(existing.medications),
                admission_date=admission_date or existing.admission_date,
                current_bill=bill if bill is not None else existing.current_bill,
            )
        else:
            if not name or not diagnosis:
                raise ValidationError("Patient name and diagnosis are required.")
            bill = _form_amount(form.current_bill, "Current bill")
            patient = Patient(
                id=form.patient_id.strip() or generate_patient_id(),
                name=name,
                diagnosis=diagnosis,
                medications=parse_medications(form.medications),
                admission_date=admission_date or today_iso(),
                current_bill=bill if bill is not None else bed.daily_rate,
            )

        self._replace_bed(bed.with_status(BedStatus.OCCUPIED, patient))
        self.db.save_beds(self.state.beds)
        self.recompute_daily_log()
        logger.info(
            "%s patient %s in bed %s",
            "Updated" if existing is not None else "Admitted",
            patient.id,
            bed.number,
        )
        self._notify()
        return patient

    def finalize_discharge(self, bed_id: str, form: DischargeForm) -> DischargedPatient:
        """Archive the bed's patient and send the bed to Cleaning."""

        bed = self.bed(bed_id)
        patient = bed.patient
        if patient is None:
            raise RuleViolation(f"Bed {bed.number} has no patient to discharge.")

        discharge_date = form.discharge_date.strip() or today_iso()
        try:
            duration = stay_duration(patient.admission_date, discharge_date)
        except ValueError as exc:
            raise ValidationError(f"Discharge date must be YYYY-MM-DD: {discharge_date!r}") from exc
        parsed_bill = _form_amount(form.final_bill, "Final bill")
        final_bill = parsed_bill if parsed_bill is not None else patient.current_bill

        record = DischargedPatient.from_patient(
            patient,
            discharge_date=discharge_date,
            discharge_summary=form.summary.strip() or NO_SUMMARY,
            stay_duration=duration,
            final_bill=final_bill,
        )

        self.state.discharge_history = [record, *self.state.discharge_history]
        self.state.session_revenue += final_bill
        cleaned = bed.with_status(BedStatus.CLEANING, None)
        cleaned.last_cleaned = today_iso()
        self._replace_bed(cleaned)
        self.state.stats_history = self._upserted_daily_log()
        self.state.stats_history = add_day_revenue(self.state.stats_history, today_iso(), final_bill)

        self.db.save_beds(self.state.beds)
        self.db.save_history(self.state.discharge_history)
        self.db.save_revenue(self.state.session_revenue)
        self.db.save_stats(self.state.stats_history)
        logger.info(
            "Discharged patient %s from bed %s stay=%dd bill=%.2f",
            record.id,
            bed.number,
            record.stay_duration,
            final_bill,
        )
        self._notify()
        return record

    # --- daily stats ----------------------------------------------------------------

    def _upserted_daily_log(self) -> List[OccupancyLog]:
        snapshot = self.stats()
        return upsert_daily_log(
            self.state.stats_history,
            today_iso(),
            occupied=snapshot.occupied,
            available=snapshot.available,
            total=snapshot.total,
        )

    def recompute_daily_log(self) -> None:
        """Write today's bed counts into the stats series and persist it."""

        if not self.state.beds:
            return
        self.state.stats_history = self._upserted_daily_log()
        self.db.save_stats(self.state.stats_history)

    # --- staff accounts -------------------------------------------------------------

    def add_user(
        self,
        username: str,
        password: str,
        full_name: str,
        role: UserRole = UserRole.STAFF,
    ) -> User:
        username = (username or "").strip()
        full_name = (full_name or "").strip()
        if not username or not password or not full_name:
            raise ValidationError("Fill all fields.")
        if any(user.username == username for user in self.state.users):
            raise RuleViolation("Username already exists.")

        user = User(
            id=generate_user_id(),
            username=username,
            password=password,
            role=UserRole(role),
            full_name=full_name,
        )
        self.state.users = [*self.state.users, user]
        self.db.save_users(self.state.users)
        logger.info("Added user %s role=%s", user.username, user.role.value)
        self._notify()
        return user

    def remove_user(self, user_id: str, confirm: Callable[[User], bool]) -> bool:
        """Remove ``user_id`` after ``confirm`` approves; returns whether it was removed."""

        if user_id == ROOT_ADMIN_ID:
            raise RuleViolation("Cannot remove root admin.")
        current = self.state.current_user
        if current is not None and current.id == user_id:
            raise RuleViolation("Cannot remove yourself.")
        target = next((user for user in self.state.users if user.id == user_id), None)
        if target is None:
            raise KeyError(user_id)
        if not confirm(target):
            return False

        self.state.users = [user for user in self.state.users if user.id != user_id]
        self.db.save_users(self.state.users)
        logger.info("Removed user %s", target.username)
        self._notify()
        return True

    # --- registry -------------------------------------------------------------------

    def export_registry(self, target_dir: Optional[Path] = None) -> Path:
        return export_registry(
            self.state.beds,
            self.state.discharge_history,
            self.state.stats_history,
            target_dir,
        )

    def import_registry(self, path: Path) -> None:
        """Load beds, archive and stats from an exported registry file."""

        beds, archive, stats = read_registry(path)
        self.db.save_beds(beds)
        self.db.save_history(archive)
        self.db.save_stats(stats)
        logger.info("Registry imported from %s", path)
        self.state.beds = beds
        self.state.discharge_history = archive
        self.state.stats_history = stats
        self._notify()


__all__ = [
    "ValidationError",
    "RuleViolation",
    "PatientForm",
    "DischargeForm",
    "OccupancySnapshot",
    "ActivePatient",
    "AppState",
    "DashboardController",
    "snapshot_for",
]
