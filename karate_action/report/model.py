from __future__ import annotations

"""karate_action.report.model

Dataclasses that flow between the report loaders, the markdown renderer and
the output sinks.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

PASS_ICON = "✅"
FAIL_ICON = "❌"


@dataclass(frozen=True)
class ScenarioError:
    name: str
    error: str


@dataclass(frozen=True)
class FeatureSummary:
    """One row of ``featureSummary`` in karate-summary-json.txt."""

    name: str
    relative_path: str
    qualified_name: str
    duration_millis: int
    passed_count: int
    failed_count: int
    scenario_errors: List[ScenarioError] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.failed_count == 0

    @property
    def status_icon(self) -> str:
        return FAIL_ICON if self.failed_count > 0 else PASS_ICON


@dataclass(frozen=True)
class RenderedSummary:
    heading: str
    header: List[str]
    rows: List[List[str]]
    markdown: str
    features: List[FeatureSummary]
    raw: Dict[str, Any] = field(default_factory=dict)
