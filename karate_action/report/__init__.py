"""karate_action.report

Turn Karate's JSON summary into a results table.

Public entrypoint: :func:`render_summary`. It reads
``<base_dir>/target/karate-reports/karate-summary-json.txt``, enriches each
feature with failed-scenario details when available, renders one markdown
table and hands it to a :class:`SummarySink`.

Missing or malformed input never raises: it is logged and ``None`` is
returned. Unexpected errors are logged and re-raised; callers treat them as
non-fatal.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .loaders import (
    build_feature_summaries,
    load_scenario_errors,
    load_summary_document,
    qualified_name_for,
    reports_dir,
    summary_path,
)
from .model import FAIL_ICON, PASS_ICON, FeatureSummary, RenderedSummary, ScenarioError
from .render_md import build_rendered_summary, render_table
from .sinks import LogSink, StepSummarySink, SummarySink, select_sink

logger = logging.getLogger(__name__)


def render_summary(
    base_dir: Path,
    *,
    sink: Optional[SummarySink] = None,
    include_details: bool = True,
    include_raw_json: bool = False,
) -> Optional[RenderedSummary]:
    """Render the Karate summary found under *base_dir*.

    Returns the rendered summary, or None when there was nothing to render.
    """
    try:
        data = load_summary_document(Path(base_dir))
        if data is None:
            return None

        entries = data.get("featureSummary")
        if not isinstance(entries, list):
            logger.error("featureSummary is not an array or not found in the summary data.")
            return None

        detail_dir = reports_dir(Path(base_dir)) if include_details else None
        features = build_feature_summaries(entries, detail_dir)
        rendered = build_rendered_summary(features, raw=data, include_raw_json=include_raw_json)

        if sink is not None:
            sink.emit(rendered)
        return rendered
    except Exception:
        logger.exception("Error generating test summary")
        raise


__all__ = [
    "FAIL_ICON",
    "PASS_ICON",
    "FeatureSummary",
    "LogSink",
    "RenderedSummary",
    "ScenarioError",
    "StepSummarySink",
    "SummarySink",
    "build_feature_summaries",
    "build_rendered_summary",
    "load_scenario_errors",
    "load_summary_document",
    "qualified_name_for",
    "render_summary",
    "render_table",
    "reports_dir",
    "select_sink",
    "summary_path",
]
