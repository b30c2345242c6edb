from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

from cli.args.inputs import input_overrides
from cli.common import FATAL_ERRORS, report_status
from karate_action.action import FAILED, run_action
from karate_action.config import load_inputs
from karate_action.report import select_sink

logger = logging.getLogger(__name__)


def run_tests(args, environ: Mapping[str, str]) -> int:
    try:
        inputs = load_inputs(
            input_overrides(args),
            environ=environ,
            config_path=Path(args.config_path) if args.config_path else None,
        )
        print("\n🚀 Running Karate")
        print(f"  Test dir : {inputs.test_dir}")
        print(f"  Features : {inputs.test_files}")
        print(f"  Version  : {inputs.karate_version}")

        result = run_action(inputs, sink=select_sink(environ))
    except FATAL_ERRORS as e:
        logger.error("Caught Error: %s", e)
        report_status(FAILED, environ)
        return 1

    report_status(result.status, environ)
    if not result.passed:
        logger.error("Tests failed")
        return 1

    print("\n✅ Tests passed.")
    return 0
