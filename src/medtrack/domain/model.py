"""Plain records for beds, patients, staff accounts and the daily stats series.

Every record round-trips through ``to_dict``/``from_dict`` using the camelCase
keys of the persisted JSON documents. ``from_dict`` raises ``ValueError`` for
anything it cannot map onto a valid record so the store can fall back to its
defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from medtrack.dates import parse_iso_date, short_label, stay_duration


class BedStatus(str, Enum):
    AVAILABLE = "Available"
    OCCUPIED = "Occupied"
    CLEANING = "Cleaning"
    MAINTENANCE = "Maintenance"


class Department(str, Enum):
    EMERGENCY = "Emergency"
    ICU = "ICU"
    GENERAL = "General Ward"
    PEDIATRICS = "Pediatrics"
    SURGERY = "Surgery"


class UserRole(str, Enum):
    ADMIN = "Admin"
    STAFF = "Staff"


def _require(data: Mapping[str, Any], key: str) -> Any:
    if not isinstance(data, Mapping):
        raise ValueError(f"Expected an object, got {type(data).__name__}")
    if key not in data or data[key] is None:
        raise ValueError(f"Missing field {key!r}")
    return data[key]


def _as_text(value: Any, key: str) -> str:
    if not isinstance(value, (str, int)) or isinstance(value, bool):
        raise ValueError(f"Field {key!r} must be text")
    return str(value)


def _as_amount(value: Any, key: str) -> float:
    if isinstance(value, bool):
        raise ValueError(f"Field {key!r} must be numeric")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError as exc:
            raise ValueError(f"Field {key!r} must be numeric") from exc
    raise ValueError(f"Field {key!r} must be numeric")


def _as_count(value: Any, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Field {key!r} must be an integer")
    return int(value)


def _as_enum(enum_cls, value: Any, key: str):
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise ValueError(f"Field {key!r} has unknown value {value!r}") from exc


def _as_date_text(value: Any, key: str) -> str:
    text = _as_text(value, key)
    parse_iso_date(text)
    return text


@dataclass(slots=True)
class Patient:
    """An admitted patient, owned by the bed it occupies."""

    id: str
    name: str
    diagnosis: str
    medications: List[str] = field(default_factory=list)
    admission_date: str = ""
    current_bill: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "diagnosis": self.diagnosis,
            "medications": list(self.medications),
            "admissionDate": self.admission_date,
            "currentBill": self.current_bill,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Patient":
        medications = data.get("medications", []) if isinstance(data, Mapping) else None
        if not isinstance(medications, list):
            raise ValueError("Field 'medications' must be a list")
        return cls(
            id=_as_text(_require(data, "id"), "id"),
            name=_as_text(_require(data, "name"), "name"),
            diagnosis=_as_text(_require(data, "diagnosis"), "diagnosis"),
            medications=[_as_text(item, "medications") for item in medications],
            admission_date=_as_date_text(_require(data, "admissionDate"), "admissionDate"),
            current_bill=_as_amount(_require(data, "currentBill"), "currentBill"),
        )


@dataclass(frozen=True, slots=True)
class DischargedPatient:
    """Archived snapshot of a patient taken at discharge time."""

    id: str
    name: str
    diagnosis: str
    medications: tuple[str, ...]
    admission_date: str
    discharge_date: str
    discharge_summary: str
    stay_duration: int
    current_bill: float

    @property
    def final_bill(self) -> float:
        return self.current_bill

    @classmethod
    def from_patient(
        cls,
        patient: Patient,
        *,
        discharge_date: str,
        discharge_summary: str,
        stay_duration: int,
        final_bill: float,
    ) -> "DischargedPatient":
        return cls(
            id=patient.id,
            name=patient.name,
            diagnosis=patient.diagnosis,
            medications=tuple(patient.medications),
            admission_date=patient.admission_date,
            discharge_date=discharge_date,
            discharge_summary=discharge_summary,
            stay_duration=stay_duration,
            current_bill=final_bill,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "diagnosis": self.diagnosis,
            "medications": list(self.medications),
            "admissionDate": self.admission_date,
            "currentBill": self.current_bill,
            "dischargeDate": self.discharge_date,
            "dischargeSummary": self.discharge_summary,
            "stayDuration": self.stay_duration,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DischargedPatient":
        patient = Patient.from_dict(data)
        discharge_date = _as_date_text(_require(data, "dischargeDate"), "dischargeDate")
        if data.get("stayDuration") is None:
            duration = stay_duration(patient.admission_date, discharge_date)
        else:
            duration = _as_count(data["stayDuration"], "stayDuration")
        return cls.from_patient(
            patient,
            discharge_date=discharge_date,
            discharge_summary=str(data.get("dischargeSummary") or ""),
            stay_duration=duration,
            final_bill=patient.current_bill,
        )


@dataclass(slots=True)
class Bed:
    """A physical unit of capacity; ``patient`` is set only while Occupied."""

    id: str
    number: str
    department: Department
    status: BedStatus
    daily_rate: float
    patient: Optional[Patient] = None
    last_cleaned: Optional[str] = None

    @property
    def is_occupied(self) -> bool:
        return self.status is BedStatus.OCCUPIED

    def check_invariant(self) -> None:
        if self.is_occupied != (self.patient is not None):
            raise ValueError(
                f"Bed {self.number} is {self.status.value} "
                f"{'with' if self.patient else 'without'} a patient"
            )

    def with_status(self, status: BedStatus, patient: Optional[Patient] = None) -> "Bed":
        return replace(self, status=status, patient=patient)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "number": self.number,
            "department": self.department.value,
            "status": self.status.value,
            "dailyRate": self.daily_rate,
        }
        if self.patient is not None:
            payload["patient"] = self.patient.to_dict()
        if self.last_cleaned:
            payload["lastCleaned"] = self.last_cleaned
        return payload

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Bed":
        raw_patient = data.get("patient") if isinstance(data, Mapping) else None
        bed = cls(
            id=_as_text(_require(data, "id"), "id"),
            number=_as_text(_require(data, "number"), "number"),
            department=_as_enum(Department, _require(data, "department"), "department"),
            status=_as_enum(BedStatus, _require(data, "status"), "status"),
            daily_rate=_as_amount(_require(data, "dailyRate"), "dailyRate"),
            patient=Patient.from_dict(raw_patient) if raw_patient is not None else None,
            last_cleaned=data.get("lastCleaned") or None,
        )
        bed.check_invariant()
        return bed


@dataclass(slots=True)
class OccupancyLog:
    """One day's bed counts and the revenue collected on that day."""

    day: str
    occupied: int
    available: int
    total: int
    revenue: float = 0.0

    @property
    def label(self) -> str:
        return short_label(parse_iso_date(self.day))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "day": self.day,
            "timestamp": self.label,
            "occupied": self.occupied,
            "available": self.available,
            "total": self.total,
            "revenue": self.revenue,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OccupancyLog":
        return cls(
            day=_as_date_text(_require(data, "day"), "day"),
            occupied=_as_count(_require(data, "occupied"), "occupied"),
            available=_as_count(_require(data, "available"), "available"),
            total=_as_count(_require(data, "total"), "total"),
            revenue=_as_amount(data.get("revenue", 0), "revenue"),
        )


@dataclass(slots=True)
class User:
    id: str
    username: str
    password: str
    role: UserRole
    full_name: str

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "password": self.password,
            "role": self.role.value,
            "fullName": self.full_name,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "User":
        return cls(
            id=_as_text(_require(data, "id"), "id"),
            username=_as_text(_require(data, "username"), "username"),
            password=_as_text(data.get("password") or "", "password"),
            role=_as_enum(UserRole, _require(data, "role"), "role"),
            full_name=_as_text(_require(data, "fullName"), "fullName"),
        )


__all__ = [
    "BedStatus",
    "Department",
    "UserRole",
    "Patient",
    "DischargedPatient",
    "Bed",
    "OccupancyLog",
    "User",
]
