from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List

from medtrack.domain.model import Bed, BedStatus

REPORT_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "title": {"type": "STRING"},
        "summary": {"type": "STRING"},
        "insights": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "title": {"type": "STRING"},
                    "content": {"type": "STRING"},
                    "priority": {"type": "STRING", "enum": ["Low", "Medium", "High"]},
                    "recommendation": {"type": "STRING"},
                },
                "required": ["title", "content", "priority", "recommendation"],
            },
        },
    },
    "required": ["title", "summary", "insights"],
}


def department_tally(beds: Iterable[Bed]) -> Dict[str, Dict[str, int]]:
    tally: Dict[str, Dict[str, int]] = {}
    for bed in beds:
        entry = tally.setdefault(bed.department.value, {"occupied": 0, "total": 0})
        entry["total"] += 1
        if bed.status is BedStatus.OCCUPIED:
            entry["occupied"] += 1
    return tally


def build_prompt(beds: List[Bed]) -> str:
    occupied = sum(1 for bed in beds if bed.status is BedStatus.OCCUPIED)
    parts = [
        "Generate a professional hospital bed occupancy report based on the following data:",
        f"Total Beds: {len(beds)}",
        f"Current Occupancy: {occupied}",
        f"Departmental Breakdown: {json.dumps(department_tally(beds))}",
        "",
        "Please provide:",
        "1. A strategic summary of the current situation.",
        "2. Identification of any critical shortages or bottlenecks.",
        "3. Three actionable recommendations for the facility manager.",
        "4. A prediction for the next 24 hours based on standard medical occupancy patterns.",
    ]
    return "\n".join(parts)


__all__ = ["REPORT_SCHEMA", "department_tally", "build_prompt"]
