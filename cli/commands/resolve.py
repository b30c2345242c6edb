from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

from cli.args.inputs import input_overrides
from cli.common import FATAL_ERRORS
from karate_action.artifacts import ensure_canonical_archive
from karate_action.config import load_inputs

logger = logging.getLogger(__name__)


def run_resolve(args, environ: Mapping[str, str]) -> int:
    """Download (if needed) and promote karate.jar without running any tests."""
    try:
        inputs = load_inputs(
            input_overrides(args),
            environ=environ,
            config_path=Path(args.config_path) if args.config_path else None,
        )
        test_dir = Path(inputs.test_dir).resolve()
        canonical = ensure_canonical_archive(inputs.karate_version, test_dir, spec=inputs.archive)
    except FATAL_ERRORS as e:
        logger.error("Caught Error: %s", e)
        return 1

    if canonical is None:
        print(f"⚠️ No versioned archives in {test_dir}; {inputs.archive.canonical_filename} left untouched.")
        return 0

    print(f"✅ {canonical}")
    return 0
