"""karate_action.report.loaders

Read Karate's JSON report files into :mod:`karate_action.report.model` objects.

Karate writes (relative to the directory it ran in)::

    target/karate-reports/karate-summary-json.txt            one per run
    target/karate-reports/<qualified.name>.karate-json.txt   one per feature

Everything here is best-effort. A missing or malformed summary is logged and
reported as ``None``; a missing or malformed per-feature file only empties that
feature's scenario errors.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from karate_action.io.fs import read_text_if_exists

from .model import FeatureSummary, ScenarioError

logger = logging.getLogger(__name__)

REPORTS_DIR = Path("target") / "karate-reports"
SUMMARY_FILENAME = "karate-summary-json.txt"
DETAIL_SUFFIX = ".karate-json.txt"


def reports_dir(base_dir: Path) -> Path:
    return Path(base_dir) / REPORTS_DIR


def summary_path(base_dir: Path) -> Path:
    return reports_dir(base_dir) / SUMMARY_FILENAME


def _as_int(value: Any) -> int:
    try:
        # durationMillis is a float in real reports
        n = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0
    return n if n > 0 else 0


def qualified_name_for(entry: Dict[str, Any]) -> str:
    """Key of the per-feature detail file.

    Karate writes ``packageQualifiedName`` (``features.users.get``); older
    reports only carry ``relativePath`` (``features/users/get.feature``).
    """
    pqn = entry.get("packageQualifiedName")
    if pqn:
        return str(pqn)

    rel = str(entry.get("relativePath") or "")
    if rel.endswith(".feature"):
        rel = rel[: -len(".feature")]
    return rel.replace("\\", "/").strip("/").replace("/", ".")


def load_summary_document(base_dir: Path) -> Optional[Dict[str, Any]]:
    """Load karate-summary-json.txt, or return None (after logging why)."""
    path = summary_path(base_dir)

    try:
        text = read_text_if_exists(path)
    except (OSError, ValueError) as e:
        # UnicodeDecodeError is a ValueError
        logger.error("Could not read summary file %s: %s", path, e)
        return None
    if text is None:
        logger.error("Summary file %s does not exist.", path)
        return None

    if not text.strip():
        logger.error("No content found in summary file.")
        return None

    try:
        data = json.loads(text)
    except ValueError as e:
        logger.error("Summary file %s is not valid JSON: %s", path, e)
        return None

    if not isinstance(data, dict):
        logger.error("Summary file %s must contain a JSON object.", path)
        return None
    return data


def load_scenario_errors(detail_dir: Path, qualified_name: str) -> List[ScenarioError]:
    """Failed scenarios for one feature; empty on any read or parse problem."""
    if not qualified_name:
        return []

    path = Path(detail_dir) / f"{qualified_name}{DETAIL_SUFFIX}"
    try:
        text = read_text_if_exists(path)
        if text is None:
            logger.warning("Detail file %s does not exist.", path)
            return []
        data = json.loads(text)
    except (OSError, ValueError) as e:
        logger.warning("Could not read detail file %s: %s", path, e)
        return []

    results = data.get("scenarioResults") if isinstance(data, dict) else None
    if not isinstance(results, list):
        logger.warning("Detail file %s has no scenarioResults list.", path)
        return []

    errors: List[ScenarioError] = []
    for sr in results:
        if not isinstance(sr, dict) or not sr.get("failed"):
            continue
        message = sr.get("error") or sr.get("errorMessage") or ""
        errors.append(ScenarioError(name=str(sr.get("name") or ""), error=str(message)))
    return errors


def build_feature_summaries(
    entries: List[Any],
    detail_dir: Optional[Path] = None,
) -> List[FeatureSummary]:
    """Map ``featureSummary`` entries to FeatureSummary rows.

    When *detail_dir* is given, each feature is enriched with the failed
    scenarios from its detail file.
    """
    features: List[FeatureSummary] = []
    for idx, entry in enumerate(entries):
        if not isinstance(entry, dict):
            logger.warning("Skipping featureSummary[%d]: not an object.", idx)
            continue

        qname = qualified_name_for(entry)
        failed = _as_int(entry.get("failedCount"))
        errors: List[ScenarioError] = []
        if detail_dir is not None and failed > 0:
            errors = load_scenario_errors(detail_dir, qname)

        features.append(
            FeatureSummary(
                name=str(entry.get("name") or qname or entry.get("relativePath") or ""),
                relative_path=str(entry.get("relativePath") or ""),
                qualified_name=qname,
                duration_millis=_as_int(entry.get("durationMillis")),
                passed_count=_as_int(entry.get("passedCount")),
                failed_count=failed,
                scenario_errors=errors,
            )
        )
    return features
