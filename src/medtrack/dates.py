"""Calendar helpers for admissions, discharges and the daily stats series."""

from __future__ import annotations

import math
import os
from datetime import date, datetime

ISO_FORMAT = "%Y-%m-%d"


def dev_override_date() -> date | None:
    """Return a developer-specified "today" via MEDTRACK_DEV_DATE (YYYY-MM-DD)."""

    value = os.environ.get("MEDTRACK_DEV_DATE")
    if not value:
        return None
    try:
        return datetime.strptime(value, ISO_FORMAT).date()
    except ValueError:
        return None


def today() -> date:
    """Return the effective current date, honouring the developer override."""

    override = dev_override_date()
    if override is not None:
        return override
    return date.today()


def today_iso() -> str:
    return today().isoformat()


def parse_iso_date(raw: str) -> date:
    """Parse ``raw`` as ``YYYY-MM-DD``; a trailing time component is ignored."""

    text = (raw or "").strip()
    if not text:
        raise ValueError("Date value is empty")
    return datetime.strptime(text[:10], ISO_FORMAT).date()


def short_label(value: date) -> str:
    """Return the chart-style short label, e.g. ``Oct 24``."""

    return f"{value.strftime('%b')} {value.day}"


def stay_duration(admission: str, discharge: str) -> int:
    """Return whole days between ``admission`` and ``discharge``, minimum one."""

    start = datetime.combine(parse_iso_date(admission), datetime.min.time())
    end = datetime.combine(parse_iso_date(discharge), datetime.min.time())
    days = abs((end - start).total_seconds()) / 86400
    return max(1, math.ceil(days))


__all__ = [
    "ISO_FORMAT",
    "dev_override_date",
    "today",
    "today_iso",
    "parse_iso_date",
    "short_label",
    "stay_duration",
]
