"""Typed persistence for the five MedTrack collections.

Each collection is a JSON document under a fixed key. Reads never raise: a
missing key and unreadable content both yield the collection's default.
Writes replace the stored document and sync immediately.
"""

from __future__ import annotations

import json
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, List, TypeVar

from medtrack.domain.model import Bed, DischargedPatient, OccupancyLog, User
from medtrack.domain.seed import default_users, initial_beds, mock_stats_history
from medtrack.engine.rules import check_unique_bed_ids

from .kv import KeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

BEDS_KEY = "medtrack_beds"
HISTORY_KEY = "medtrack_history"
USERS_KEY = "medtrack_users"
REVENUE_KEY = "medtrack_session_revenue"
STATS_KEY = "medtrack_stats_history"


def _decode_list(factory: Callable[[Any], T]) -> Callable[[str], List[T]]:
    def decode(raw: str) -> List[T]:
        payload = json.loads(raw)
        if not isinstance(payload, list):
            raise ValueError(f"Expected a JSON array, got {type(payload).__name__}")
        return [factory(item) for item in payload]

    return decode


def _encode_list(items: List[Any]) -> str:
    return json.dumps([item.to_dict() for item in items])


def _decode_revenue(raw: str) -> float:
    try:
        value = Decimal(raw.strip())
    except InvalidOperation as exc:
        raise ValueError(f"Revenue is not a decimal: {raw!r}") from exc
    if not value.is_finite():
        raise ValueError(f"Revenue is not finite: {raw!r}")
    return float(value)


def _encode_revenue(value: float) -> str:
    return format(Decimal(str(value)).normalize(), "f")


class Database:
    """Load/save helpers over a :class:`KeyValueStore`."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def load(self, key: str, default_factory: Callable[[], T], decode: Callable[[str], T]) -> T:
        raw = self.store.get(key)
        if raw is None:
            return default_factory()
        try:
            return decode(raw)
        except (ValueError, TypeError, KeyError, AttributeError) as exc:
            logger.warning("Stored value under %s is unreadable (%s); using defaults", key, exc)
            return default_factory()

    def save(self, key: str, value: T, encode: Callable[[T], str]) -> None:
        self.store.set(key, encode(value))
        self.store.sync()
        logger.debug("Saved %s", key)

    # --- typed collections --------------------------------------------------------

    def load_beds(self) -> List[Bed]:
        decode = _decode_list(Bed.from_dict)
        return self.load(BEDS_KEY, initial_beds, lambda raw: check_unique_bed_ids(decode(raw)))

    def save_beds(self, beds: List[Bed]) -> None:
        self.save(BEDS_KEY, beds, _encode_list)

    def load_history(self) -> List[DischargedPatient]:
        return self.load(HISTORY_KEY, list, _decode_list(DischargedPatient.from_dict))

    def save_history(self, history: List[DischargedPatient]) -> None:
        self.save(HISTORY_KEY, history, _encode_list)

    def load_users(self) -> List[User]:
        return self.load(USERS_KEY, default_users, _decode_list(User.from_dict))

    def save_users(self, users: List[User]) -> None:
        self.save(USERS_KEY, users, _encode_list)

    def load_revenue(self) -> float:
        return self.load(REVENUE_KEY, float, _decode_revenue)

    def save_revenue(self, revenue: float) -> None:
        self.save(REVENUE_KEY, revenue, _encode_revenue)

    def load_stats(self) -> List[OccupancyLog]:
        return self.load(STATS_KEY, mock_stats_history, _decode_list(OccupancyLog.from_dict))

    def save_stats(self, stats: List[OccupancyLog]) -> None:
        self.save(STATS_KEY, stats, _encode_list)

    def clear_all(self) -> None:
        """Erase every stored key."""

        self.store.clear()
        self.store.sync()
        logger.info("Store cleared: %s", self.store.path)


__all__ = [
    "BEDS_KEY",
    "HISTORY_KEY",
    "USERS_KEY",
    "REVENUE_KEY",
    "STATS_KEY",
    "Database",
]
