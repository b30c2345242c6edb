"""karate_action.action

End-to-end action run: resolve the Karate archive, execute the features,
decide PASSED/FAILED, render the summary.

Failure policy:
  - input and archive problems are fatal (raised)
  - the verdict comes only from the Karate run
  - summary rendering is best-effort and never changes the verdict
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import requests

from karate_action.artifacts import ensure_canonical_archive
from karate_action.config import ActionInputs, validate_inputs
from karate_action.errors import DownloadError, VersionNotFoundError
from karate_action.execution import build_karate_command, find_java, run_karate, split_test_files
from karate_action.io.fs import append_text
from karate_action.report import RenderedSummary, StepSummarySink, SummarySink, render_summary

logger = logging.getLogger(__name__)

PASSED = "PASSED"
FAILED = "FAILED"

DOWNLOAD_ERROR_PREFIX = "Error downloading Karate JAR: "


@dataclass(frozen=True)
class ActionResult:
    status: str
    exit_code: int
    marker_found: bool
    summary: Optional[RenderedSummary] = None

    @property
    def passed(self) -> bool:
        return self.status == PASSED


def resolve_archive(inputs: ActionInputs, test_dir: Path, *, session: Optional[Any] = None) -> Path:
    """Make sure the canonical archive exists in *test_dir* and return its path."""
    try:
        ensure_canonical_archive(inputs.karate_version, test_dir, spec=inputs.archive, session=session)
    except VersionNotFoundError as e:
        raise VersionNotFoundError(e.version, f"{DOWNLOAD_ERROR_PREFIX}{e}") from e
    except (DownloadError, requests.RequestException, OSError) as e:
        raise DownloadError(f"{DOWNLOAD_ERROR_PREFIX}{e}") from e

    canonical = test_dir / inputs.archive.canonical_filename
    if not canonical.is_file():
        raise DownloadError(
            f"{DOWNLOAD_ERROR_PREFIX}no versioned archive matching "
            f"{inputs.archive.versioned_filename('X.Y.Z')} in {test_dir}"
        )
    return canonical


def run_action(
    inputs: ActionInputs,
    *,
    sink: Optional[SummarySink] = None,
    cwd: Optional[Path] = None,
    session: Optional[Any] = None,
) -> ActionResult:
    test_dir = validate_inputs(inputs, cwd=cwd)
    logger.info('Running Karate tests in "%s" using version "%s"', inputs.test_dir, inputs.karate_version)

    canonical = resolve_archive(inputs, test_dir, session=session)

    cmd = build_karate_command(
        java_bin=find_java(inputs.java_bin),
        jar_name=canonical.name,
        test_files=split_test_files(inputs.test_files),
        base_url=inputs.base_url,
        auth_token=inputs.auth_token,
    )
    res, verdict = run_karate(cmd, cwd=test_dir, timeout_seconds=inputs.timeout_seconds)

    summary: Optional[RenderedSummary] = None
    try:
        summary = render_summary(
            test_dir,
            sink=sink,
            include_raw_json=isinstance(sink, StepSummarySink),
        )
    except Exception as e:
        # Already logged with traceback by render_summary.
        logger.warning("Continuing without test summary: %s", e)

    return ActionResult(
        status=PASSED if verdict.passed else FAILED,
        exit_code=res.exit_code,
        marker_found=verdict.marker_found,
        summary=summary,
    )


def write_action_outputs(status: str, environ: Mapping[str, str]) -> Optional[Path]:
    """Append ``status=<STATUS>`` to the file named by GITHUB_OUTPUT, if any."""
    output_file = (environ.get("GITHUB_OUTPUT") or "").strip()
    if not output_file:
        return None
    p = Path(output_file)
    append_text(p, f"status={status}\n")
    return p
