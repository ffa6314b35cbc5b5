"""Structured occupancy report returned by the text-generation service."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Mapping

Priority = Literal["Low", "Medium", "High"]
PRIORITIES: tuple[Priority, ...] = ("Low", "Medium", "High")


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ValueError(f"Report field {key!r} must be a string")
    return value


def normalize_priority(raw: Any) -> Priority:
    if isinstance(raw, str):
        for priority in PRIORITIES:
            if raw.strip().lower() == priority.lower():
                return priority
    raise ValueError(f"Unknown insight priority {raw!r}")


@dataclass(slots=True)
class ReportInsight:
    title: str
    content: str
    priority: Priority
    recommendation: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ReportInsight":
        if not isinstance(data, Mapping):
            raise ValueError("Insight must be an object")
        return cls(
            title=_text(data, "title"),
            content=_text(data, "content"),
            priority=normalize_priority(data.get("priority")),
            recommendation=_text(data, "recommendation"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "content": self.content,
            "priority": self.priority,
            "recommendation": self.recommendation,
        }


@dataclass(slots=True)
class OccupancyReport:
    title: str
    summary: str
    insights: List[ReportInsight] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OccupancyReport":
        if not isinstance(data, Mapping):
            raise ValueError("Report must be an object")
        insights = data.get("insights")
        if not isinstance(insights, list):
            raise ValueError("Report field 'insights' must be a list")
        return cls(
            title=_text(data, "title"),
            summary=_text(data, "summary"),
            insights=[ReportInsight.from_dict(item) for item in insights],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "summary": self.summary,
            "insights": [insight.to_dict() for insight in self.insights],
        }


__all__ = ["Priority", "PRIORITIES", "normalize_priority", "ReportInsight", "OccupancyReport"]
