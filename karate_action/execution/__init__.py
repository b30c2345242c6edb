"""karate_action.execution

Running the Karate test executable and judging its output.
"""

from __future__ import annotations

from .cmd import CmdResult, run_cmd
from .karate import (
    PASS_MARKER,
    RunVerdict,
    build_karate_command,
    evaluate_run,
    find_java,
    run_karate,
    split_test_files,
)

__all__ = [
    "PASS_MARKER",
    "CmdResult",
    "RunVerdict",
    "build_karate_command",
    "evaluate_run",
    "find_java",
    "run_cmd",
    "run_karate",
    "split_test_files",
]
