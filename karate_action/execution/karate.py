"""karate_action.execution.karate

Karate-specific execution plumbing: command line and pass/fail verdict.

The Karate CLI exits non-zero on some failures but not all of them, so the
verdict also requires the textual marker ``failed:  0`` (two spaces, as Karate
prints it) in stdout.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

from .cmd import CmdResult, run_cmd

logger = logging.getLogger(__name__)

PASS_MARKER = "failed:  0"


@dataclass(frozen=True)
class RunVerdict:
    passed: bool
    exit_ok: bool
    marker_found: bool


def find_java(java_bin: str) -> str:
    """Absolute path of the Java executable Karate runs on."""
    found = shutil.which(java_bin)
    if not found:
        raise FileNotFoundError(
            f"Java executable '{java_bin}' not found. Karate needs a JRE on PATH "
            "(e.g. actions/setup-java) or an explicit --java-bin."
        )
    return found


def split_test_files(raw: str) -> List[str]:
    """Parse a comma-separated list of feature paths."""
    return [x.strip() for x in (raw or "").split(",") if x.strip()]


def build_karate_command(
    *,
    java_bin: str,
    jar_name: str,
    test_files: Sequence[str],
    base_url: str,
    auth_token: str = "",
) -> List[str]:
    return [
        java_bin,
        f"-DbaseUrl={base_url}",
        f"-DAuthorization={auth_token}",
        "-jar",
        jar_name,
        *test_files,
    ]


def evaluate_run(result: CmdResult) -> RunVerdict:
    """PASSED requires exit code 0 and the pass marker in stdout."""
    exit_ok = result.ok
    marker_found = PASS_MARKER in result.stdout

    if not marker_found:
        logger.error("Marking as failed due to missing pass confirmation")
    if not (exit_ok and marker_found):
        logger.info("Output received: %s", result.stdout)

    return RunVerdict(passed=exit_ok and marker_found, exit_ok=exit_ok, marker_found=marker_found)


def run_karate(
    cmd: List[str],
    *,
    cwd: Path,
    timeout_seconds: int = 0,
) -> tuple[CmdResult, RunVerdict]:
    res = run_cmd(cmd, cwd=cwd, timeout_seconds=timeout_seconds)
    logger.debug("Karate finished in %.1fs with exit code %d", res.elapsed_seconds, res.exit_code)
    return res, evaluate_run(res)
