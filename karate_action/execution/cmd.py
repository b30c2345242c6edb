"""karate_action.execution.cmd

Subprocess wrapper for the Karate run.

Output is captured (never streamed) because the verdict is read from stdout.
A non-zero exit is reported in the log but never raised; only launch errors
(missing binary, timeout) propagate.
"""

from __future__ import annotations

import logging
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CmdResult:
    exit_code: int
    elapsed_seconds: float
    command_str: str
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


def run_cmd(
    cmd: List[str],
    *,
    cwd: Optional[Path] = None,
    timeout_seconds: int = 0,
) -> CmdResult:
    command_str = " ".join(cmd)
    logger.debug("Running: %s (cwd=%s)", command_str, cwd)

    started = time.monotonic()
    proc = subprocess.run(
        cmd,
        cwd=str(cwd) if cwd else None,
        capture_output=True,
        encoding="utf-8",
        errors="replace",
        timeout=timeout_seconds or None,
    )
    result = CmdResult(
        exit_code=proc.returncode,
        elapsed_seconds=time.monotonic() - started,
        command_str=command_str,
        stdout=proc.stdout or "",
        stderr=proc.stderr or "",
    )

    if not result.ok:
        logger.error("Error executing command: %s", command_str)
        logger.error("Stderr: %s", result.stderr)
    return result
