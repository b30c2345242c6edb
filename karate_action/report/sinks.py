"""karate_action.report.sinks

Where a rendered summary goes.

Under GitHub Actions the runner exposes a markdown file through
``GITHUB_STEP_SUMMARY``; anything appended to it shows up on the job page.
Everywhere else the table is logged. The sink is chosen once at startup and
handed to the renderer.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Optional

from karate_action.io.fs import append_text

from .model import RenderedSummary
from .render_md import render_table

logger = logging.getLogger(__name__)


class SummarySink:
    """Interface: emit a rendered summary."""

    def emit(self, summary: RenderedSummary) -> None:
        raise NotImplementedError


class StepSummarySink(SummarySink):
    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def emit(self, summary: RenderedSummary) -> None:
        append_text(self.path, summary.markdown)
        logger.debug("Wrote test summary to %s", self.path)


class LogSink(SummarySink):
    def __init__(self, log: Optional[logging.Logger] = None) -> None:
        self.log = log or logger

    def emit(self, summary: RenderedSummary) -> None:
        table = render_table(summary.header, summary.rows)
        self.log.info("%s:\n%s", summary.heading, table)


def select_sink(environ: Mapping[str, str]) -> SummarySink:
    """StepSummarySink under GitHub Actions with a summary file, else LogSink."""
    summary_file = (environ.get("GITHUB_STEP_SUMMARY") or "").strip()
    if environ.get("GITHUB_ACTIONS") and summary_file:
        return StepSummarySink(Path(summary_file))
    return LogSink()
