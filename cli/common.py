from __future__ import annotations

"""cli.common

Small shared helpers for CLI command modules.
"""

import subprocess
from typing import Mapping, Tuple, Type

import requests

from karate_action.action import write_action_outputs
from karate_action.errors import KarateActionError

# Failures that end a run with "Status: FAILED" instead of a traceback.
FATAL_ERRORS: Tuple[Type[BaseException], ...] = (
    KarateActionError,
    requests.RequestException,
    OSError,
    subprocess.TimeoutExpired,
)


def report_status(status: str, environ: Mapping[str, str]) -> None:
    """Print the final status line and publish it as an action output."""
    print(f"Status: {status}")
    out = write_action_outputs(status, environ)
    if out is not None:
        print(f"📝 Wrote status to {out}")
