"""Registry export/import and safe file writes into the Exports folder."""

from __future__ import annotations

import errno
import json
import logging
import os
import re
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Final, List, Optional

from medtrack._paths import app_support_dir
from medtrack.domain.model import Bed, DischargedPatient, OccupancyLog
from medtrack.engine.rules import check_daily_log, check_unique_bed_ids

_LOGGER = logging.getLogger(__name__)

_SAFE_CHAR_RE: Final[re.Pattern[str]] = re.compile(r"[^a-zA-Z0-9._\- ]+")
_SPACE_RE: Final[re.Pattern[str]] = re.compile(r"\s+")
_DOUBLE_DOT_RE: Final[re.Pattern[str]] = re.compile(r"\.{2,}")

_MAX_FILENAME_LEN: Final[int] = 120

INVENTORY_KEY: Final[str] = "inventory"
ARCHIVE_KEY: Final[str] = "archive"
YIELD_LOGS_KEY: Final[str] = "yield_logs"
TIMESTAMP_KEY: Final[str] = "export_timestamp"


def exports_dir() -> Path:
    """Return the default Exports directory, creating it if needed."""
    path = app_support_dir() / "Exports"
    path.mkdir(parents=True, exist_ok=True)
    return path


def sanitize_filename(base: str) -> str:
    """Sanitize ``base`` so it is safe for filesystem use."""
    base = (base or "").strip()
    name, ext = os.path.splitext(base)
    if not name:
        name = "MedTrack"
    if ext and not ext.startswith("."):
        ext = f".{ext}"

    sanitized_name = _SAFE_CHAR_RE.sub("_", name)
    sanitized_name = _SPACE_RE.sub(" ", sanitized_name)
    sanitized_name = _DOUBLE_DOT_RE.sub(".", sanitized_name)
    sanitized_name = sanitized_name.strip(" .") or "MedTrack"

    sanitized_ext = _SAFE_CHAR_RE.sub("", ext)
    sanitized_ext = _DOUBLE_DOT_RE.sub(".", sanitized_ext)

    candidate = f"{sanitized_name}{sanitized_ext}"
    if len(candidate) <= _MAX_FILENAME_LEN:
        return candidate

    trim_len = max(0, _MAX_FILENAME_LEN - len(sanitized_ext))
    trimmed_name = sanitized_name[:trim_len].rstrip(" .") or "MedTrack"
    return f"{trimmed_name}{sanitized_ext}"


def safe_write_text(path: Path, text: str) -> Path:
    """Persist ``text`` to ``path``, falling back to Exports on permission errors."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path
    except OSError as exc:
        if exc.errno not in (errno.EPERM, errno.EACCES):
            raise
        fallback_path = exports_dir() / path.name
        _LOGGER.warning(
            "safe_write_text fallback (errno=%s) original=%s fallback=%s",
            exc.errno,
            path,
            fallback_path,
        )
        fallback_path.write_text(text, encoding="utf-8")
        return fallback_path


def registry_filename(now_ms: Optional[int] = None) -> str:
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return sanitize_filename(f"medtrack_db_export_{stamp}.json")


def build_registry_payload(
    beds: List[Bed],
    archive: List[DischargedPatient],
    stats: List[OccupancyLog],
) -> Dict[str, Any]:
    return {
        INVENTORY_KEY: [bed.to_dict() for bed in beds],
        ARCHIVE_KEY: [record.to_dict() for record in archive],
        YIELD_LOGS_KEY: [entry.to_dict() for entry in stats],
        TIMESTAMP_KEY: datetime.now(timezone.utc).isoformat(),
    }


def export_registry(
    beds: List[Bed],
    archive: List[DischargedPatient],
    stats: List[OccupancyLog],
    target_dir: Optional[Path] = None,
) -> Path:
    """Write the registry snapshot as pretty JSON and return the written path."""

    payload = build_registry_payload(beds, archive, stats)
    directory = Path(target_dir).expanduser() if target_dir else exports_dir()
    path = directory / registry_filename()
    written = safe_write_text(path, json.dumps(payload, indent=2))
    _LOGGER.info(
        "Registry exported beds=%d archive=%d stats=%d path=%s",
        len(beds),
        len(archive),
        len(stats),
        written,
    )
    return written


def read_registry(
    path: Path,
) -> tuple[List[Bed], List[DischargedPatient], List[OccupancyLog]]:
    """Parse an exported registry; raises ``ValueError`` when it is malformed."""

    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Registry file is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise ValueError("Registry file must contain a JSON object")

    sections = {}
    for key in (INVENTORY_KEY, ARCHIVE_KEY, YIELD_LOGS_KEY):
        items = payload.get(key)
        if not isinstance(items, list):
            raise ValueError(f"Registry section {key!r} is missing or not a list")
        sections[key] = items

    beds = check_unique_bed_ids([Bed.from_dict(item) for item in sections[INVENTORY_KEY]])
    archive = [DischargedPatient.from_dict(item) for item in sections[ARCHIVE_KEY]]
    stats = check_daily_log([OccupancyLog.from_dict(item) for item in sections[YIELD_LOGS_KEY]])
    return beds, archive, stats


__all__ = [
    "exports_dir",
    "sanitize_filename",
    "safe_write_text",
    "registry_filename",
    "build_registry_payload",
    "export_registry",
    "read_registry",
]
