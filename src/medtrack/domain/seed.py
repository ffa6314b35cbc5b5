"""Fixed datasets used when the store holds nothing usable for a key."""

from __future__ import annotations

from typing import List

from .model import (
    Bed,
    BedStatus,
    Department,
    DischargedPatient,
    OccupancyLog,
    Patient,
    User,
    UserRole,
)

ROOT_ADMIN_ID = "1"


def default_admin() -> User:
    return User(
        id=ROOT_ADMIN_ID,
        username="admin",
        password="1234",
        role=UserRole.ADMIN,
        full_name="System Administrator",
    )


def default_users() -> List[User]:
    return [default_admin()]


def initial_beds() -> List[Bed]:
    """Return a fresh copy of the ten-bed starting inventory."""

    return [
        Bed(
            id="1",
            number="ER-101",
            department=Department.EMERGENCY,
            status=BedStatus.OCCUPIED,
            daily_rate=1500.0,
            patient=Patient(
                id="P-1001",
                name="John Doe",
                diagnosis="Acute Appendicitis",
                medications=["Ceftriaxone", "Metronidazole", "Paracetamol"],
                admission_date="2023-10-24",
                current_bill=4500.0,
            ),
        ),
        Bed(id="2", number="ER-102", department=Department.EMERGENCY, status=BedStatus.AVAILABLE, daily_rate=1200.0),
        Bed(
            id="3",
            number="ICU-201",
            department=Department.ICU,
            status=BedStatus.OCCUPIED,
            daily_rate=5000.0,
            patient=Patient(
                id="P-1002",
                name="Jane Smith",
                diagnosis="Respiratory Distress",
                medications=["Albuterol", "Dexamethasone"],
                admission_date="2023-10-22",
                current_bill=15000.0,
            ),
        ),
        Bed(id="4", number="ICU-202", department=Department.ICU, status=BedStatus.MAINTENANCE, daily_rate=5000.0),
        Bed(id="5", number="GW-301", department=Department.GENERAL, status=BedStatus.AVAILABLE, daily_rate=800.0),
        Bed(
            id="6",
            number="GW-302",
            department=Department.GENERAL,
            status=BedStatus.OCCUPIED,
            daily_rate=800.0,
            patient=Patient(
                id="P-1003",
                name="Robert Brown",
                diagnosis="Fractured Femur",
                medications=["Morphine", "Enoxaparin"],
                admission_date="2023-10-23",
                current_bill=2400.0,
            ),
        ),
        Bed(id="7", number="PED-401", department=Department.PEDIATRICS, status=BedStatus.CLEANING, daily_rate=1000.0),
        Bed(id="8", number="PED-402", department=Department.PEDIATRICS, status=BedStatus.AVAILABLE, daily_rate=1000.0),
        Bed(
            id="9",
            number="SUR-501",
            department=Department.SURGERY,
            status=BedStatus.OCCUPIED,
            daily_rate=3500.0,
            patient=Patient(
                id="P-1004",
                name="Alice Wilson",
                diagnosis="Cholecystectomy",
                medications=["Ketorolac", "Ondansetron"],
                admission_date="2023-10-25",
                current_bill=3500.0,
            ),
        ),
        Bed(id="10", number="SUR-502", department=Department.SURGERY, status=BedStatus.AVAILABLE, daily_rate=3500.0),
    ]


def mock_stats_history() -> List[OccupancyLog]:
    return [
        OccupancyLog(day="2023-10-20", occupied=5, available=7, total=12, revenue=42000.0),
        OccupancyLog(day="2023-10-21", occupied=7, available=5, total=12, revenue=58000.0),
        OccupancyLog(day="2023-10-22", occupied=9, available=3, total=12, revenue=35000.0),
        OccupancyLog(day="2023-10-23", occupied=8, available=4, total=12, revenue=72000.0),
        OccupancyLog(day="2023-10-24", occupied=10, available=2, total=12, revenue=95000.0),
        OccupancyLog(day="2023-10-25", occupied=6, available=6, total=12, revenue=120000.0),
        OccupancyLog(day="2023-10-26", occupied=11, available=1, total=12, revenue=145000.0),
    ]


def demo_discharge_history() -> List[DischargedPatient]:
    """Two archived stays for demos; the real archive starts empty."""

    return [
        DischargedPatient(
            id="P-8801",
            name="Sarah Jenkins",
            diagnosis="Post-Op Recovery",
            medications=("Oxycodone", "Docusate"),
            admission_date="2023-10-18",
            discharge_date="2023-10-25",
            discharge_summary=(
                "Patient recovered well after abdominal surgery. "
                "No complications noted during the 7-day stay."
            ),
            stay_duration=7,
            current_bill=28500.0,
        ),
        DischargedPatient(
            id="P-8802",
            name="Michael Scott",
            diagnosis="Severe Burn",
            medications=("Silver Sulfadiazine", "Morphine"),
            admission_date="2023-10-15",
            discharge_date="2023-10-24",
            discharge_summary=(
                "Successfully treated for 2nd-degree burns. Skin grafts stable. "
                "Advised 2 weeks outpatient care."
            ),
            stay_duration=9,
            current_bill=52000.0,
        ),
    ]


__all__ = [
    "ROOT_ADMIN_ID",
    "default_admin",
    "default_users",
    "initial_beds",
    "mock_stats_history",
    "demo_discharge_history",
]
