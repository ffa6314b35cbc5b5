"""Plain-text rendering of an occupancy report for saving or printing."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .model import PRIORITIES, OccupancyReport, ReportInsight

_PRIORITY_ORDER = {priority: index for index, priority in enumerate(reversed(PRIORITIES))}


def render_report(
    report: OccupancyReport,
    tally: Optional[Dict[str, Dict[str, int]]] = None,
    generated_at: Optional[datetime] = None,
) -> str:
    """Return the report as text: header, census table, insights by priority."""

    lines: List[str] = [report.title.strip() or "Occupancy Report", ""]
    lines.append(report.summary.strip())

    if tally:
        lines.append("")
        lines.append("Census —")
        for department, counts in tally.items():
            lines.append(f"{department}: {counts.get('occupied', 0)}/{counts.get('total', 0)} occupied")

    lines.append("")
    lines.append("Insights —")
    insights = list(_iter_sorted(report.insights))
    if not insights:
        lines.append("(none)")
    for insight in insights:
        lines.append(f"[{insight.priority}] {insight.title}")
        lines.append(f"  {insight.content.strip()}")
        lines.append(f"  Recommendation: {insight.recommendation.strip()}")

    lines.append("")
    stamp = (generated_at or datetime.now()).strftime("%m/%d/%Y %H:%M")
    lines.append(f"Generated: {stamp}")
    return "\n".join(lines)


def write_report(
    report: OccupancyReport,
    out_path: Path,
    tally: Optional[Dict[str, Dict[str, int]]] = None,
) -> Path:
    """Write the rendered report to ``out_path`` and return the path."""
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(render_report(report, tally), encoding="utf-8")
    return out_path


def _iter_sorted(insights: Iterable[ReportInsight]) -> Iterable[ReportInsight]:
    return sorted(insights, key=lambda insight: _PRIORITY_ORDER.get(insight.priority, len(PRIORITIES)))


__all__ = ["render_report", "write_report"]
