"""karate_action.logs

Root logger setup for the CLI.

Under GitHub Actions, error records are also printed as ``::error::`` workflow
commands so they show up as annotations on the run.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Mapping, Optional

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


class GithubAnnotationFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        if record.levelno >= logging.ERROR:
            # Workflow commands are single-line; GitHub decodes %0A back to newlines.
            msg = record.getMessage().replace("%", "%25").replace("\r", "").replace("\n", "%0A")
            return f"::error::{msg}\n{text}"
        if record.levelno == logging.WARNING:
            msg = record.getMessage().replace("%", "%25").replace("\r", "").replace("\n", "%0A")
            return f"::warning::{msg}\n{text}"
        return text


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    environ: Optional[Mapping[str, str]] = None,
) -> None:
    environ = os.environ if environ is None else environ
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    if environ.get("GITHUB_ACTIONS"):
        handler.setFormatter(GithubAnnotationFormatter(LOG_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logging.basicConfig(level=level, handlers=[handler], force=True)
