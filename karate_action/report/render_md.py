from __future__ import annotations

"""karate_action.report.render_md

Markdown rendering for test summaries.

This module contains formatting logic only (no file I/O).
"""

import json
from typing import Any, Dict, List, Optional, Sequence

from .model import FeatureSummary, RenderedSummary

HEADING = "Test Results"

TABLE_HEADER: List[str] = [
    "Feature Name",
    "Scenario",
    "Duration (ms)",
    "Passed",
    "Failed",
    "Status",
    "Error",
]


def _cell(value: Any) -> str:
    # Pipes and newlines would break the table row.
    s = "" if value is None else str(value)
    s = s.replace("\r\n", "\n").replace("\r", "\n")
    s = s.replace("|", "\\|")
    return "<br>".join(part.strip() for part in s.split("\n") if part.strip())


def feature_rows(feature: FeatureSummary) -> List[List[str]]:
    """Table rows for one feature: one row, or one per failed scenario."""
    base = [
        feature.name,
        str(feature.duration_millis),
        str(feature.passed_count),
        str(feature.failed_count),
        feature.status_icon,
    ]
    if not feature.scenario_errors:
        return [[base[0], "", *base[1:], ""]]
    return [[base[0], se.name, *base[1:], se.error] for se in feature.scenario_errors]


def render_table(header: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    lines: List[str] = []
    lines.append("| " + " | ".join(header) + " |")
    lines.append("| " + " | ".join("---" for _ in header) + " |")
    for row in rows:
        lines.append("| " + " | ".join(_cell(c) for c in row) + " |")
    return "\n".join(lines)


def build_rendered_summary(
    features: List[FeatureSummary],
    *,
    raw: Optional[Dict[str, Any]] = None,
    include_raw_json: bool = False,
) -> RenderedSummary:
    """Render all features into one aggregated table."""
    rows: List[List[str]] = []
    for f in features:
        rows.extend(feature_rows(f))

    lines: List[str] = []
    lines.append(f"## {HEADING}")
    lines.append("")
    lines.append(render_table(TABLE_HEADER, rows))
    if include_raw_json and raw:
        lines.append("")
        lines.append("```json")
        lines.append(json.dumps(raw, indent=2))
        lines.append("```")

    return RenderedSummary(
        heading=HEADING,
        header=list(TABLE_HEADER),
        rows=rows,
        markdown="\n".join(lines) + "\n",
        features=list(features),
        raw=dict(raw or {}),
    )
