from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

from cli.args.inputs import input_overrides
from cli.common import FATAL_ERRORS
from karate_action.config import load_inputs
from karate_action.report import StepSummarySink, render_summary, select_sink

logger = logging.getLogger(__name__)


def run_report(args, environ: Mapping[str, str]) -> int:
    """Render the summary of an earlier Karate run."""
    try:
        inputs = load_inputs(
            input_overrides(args),
            environ=environ,
            config_path=Path(args.config_path) if args.config_path else None,
        )
        sink = select_sink(environ)
        summary = render_summary(
            Path(inputs.test_dir).resolve(),
            sink=sink,
            include_raw_json=isinstance(sink, StepSummarySink),
        )
    except FATAL_ERRORS as e:
        logger.error("Caught Error: %s", e)
        return 1
    except Exception as e:
        # render_summary already logged the traceback
        logger.error("Could not render test summary: %s", e)
        return 1

    if summary is None:
        print("⚠️ No test summary rendered.")
        return 1

    print(f"✅ Rendered {len(summary.features)} feature(s).")
    return 0
