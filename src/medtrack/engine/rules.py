"""Pure transition rules for beds, forms and the daily stats series."""

from __future__ import annotations

import logging
import random
import string
from dataclasses import replace
from enum import Enum
from typing import List, Optional

from medtrack.domain.model import Bed, BedStatus, OccupancyLog

logger = logging.getLogger(__name__)

DAILY_LOG_LIMIT = 7
_ID_ALPHABET = string.ascii_lowercase + string.digits


class StatusChange(str, Enum):
    """Outcome of a status-change request."""

    APPLIED = "applied"
    REQUIRES_ADMISSION = "requires-admission-details"
    REQUIRES_DISCHARGE = "requires-discharge-details"


def classify_status_change(bed: Bed, new_status: BedStatus) -> StatusChange:
    """Return whether ``new_status`` can be committed directly on ``bed``."""

    if bed.patient is not None and new_status is not BedStatus.OCCUPIED:
        return StatusChange.REQUIRES_DISCHARGE
    if new_status is BedStatus.OCCUPIED and bed.patient is None:
        return StatusChange.REQUIRES_ADMISSION
    return StatusChange.APPLIED


def parse_amount(raw: object) -> Optional[float]:
    """Return ``raw`` as a currency amount, or ``None`` when it is not numeric."""

    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return float(raw)
    text = str(raw).strip().replace(",", "")
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if value != value or value in (float("inf"), float("-inf")):
        return None
    return value


def parse_medications(raw: str) -> List[str]:
    """Split a comma-separated medication field, dropping blanks."""

    return [item.strip() for item in (raw or "").split(",") if item.strip()]


def generate_patient_id(rng: Optional[random.Random] = None) -> str:
    source = rng or random
    return f"PAT-{source.randrange(100000)}"


def generate_user_id(rng: Optional[random.Random] = None) -> str:
    source = rng or random
    return "".join(source.choice(_ID_ALPHABET) for _ in range(9))


def upsert_daily_log(
    history: List[OccupancyLog],
    day: str,
    *,
    occupied: int,
    available: int,
    total: int,
    limit: int = DAILY_LOG_LIMIT,
) -> List[OccupancyLog]:
    """Return ``history`` with ``day``'s counts written in place or appended.

    Revenue of an existing entry is preserved; a new entry starts at zero.
    The result keeps only the most recent ``limit`` entries, one per day.
    """

    by_day: dict[str, OccupancyLog] = {}
    for entry in history:
        by_day[entry.day] = entry
    current = by_day.get(day)
    if current is not None:
        by_day[day] = replace(current, occupied=occupied, available=available, total=total)
    else:
        by_day[day] = OccupancyLog(
            day=day, occupied=occupied, available=available, total=total, revenue=0.0
        )
    return list(by_day.values())[-limit:]


def check_unique_bed_ids(beds: List[Bed]) -> List[Bed]:
    """Return ``beds`` unchanged; raises ``ValueError`` if two share an id."""

    seen: set[str] = set()
    for bed in beds:
        if bed.id in seen:
            raise ValueError(f"Duplicate bed id {bed.id!r}")
        seen.add(bed.id)
    return beds


def check_daily_log(history: List[OccupancyLog], limit: int = DAILY_LOG_LIMIT) -> List[OccupancyLog]:
    """Return ``history`` unchanged; raises ``ValueError`` on a repeated day or too many entries."""

    if len(history) > limit:
        raise ValueError(f"Daily stats hold {len(history)} entries, limit is {limit}")
    days = [entry.day for entry in history]
    if len(set(days)) != len(days):
        raise ValueError("Daily stats repeat a day")
    return history


def add_day_revenue(history: List[OccupancyLog], day: str, amount: float) -> List[OccupancyLog]:
    """Return ``history`` with ``amount`` added to ``day``'s revenue, if present."""

    updated = list(history)
    for index, entry in enumerate(updated):
        if entry.day == day:
            updated[index] = replace(entry, revenue=entry.revenue + amount)
            return updated
    logger.warning("No daily stats entry for %s; revenue %.2f not attributed", day, amount)
    return updated


__all__ = [
    "DAILY_LOG_LIMIT",
    "StatusChange",
    "classify_status_change",
    "parse_amount",
    "parse_medications",
    "generate_patient_id",
    "generate_user_id",
    "upsert_daily_log",
    "check_unique_bed_ids",
    "check_daily_log",
    "add_day_revenue",
]
