from __future__ import annotations

import argparse
from pathlib import Path


def add_base_args(parser: argparse.ArgumentParser, *, root_dir: Path) -> None:
    """Register CLI flags that are shared across all modes.

    This includes:
    - mode selection
    - config file / .env location
    - logging verbosity
    """

    parser.add_argument(
        "--mode",
        choices=["run", "resolve", "report"],
        default="run",
        help=(
            "run = resolve karate.jar, execute the features and render the summary (default), "
            "resolve = only download/promote karate.jar, "
            "report = only render the summary of an earlier run"
        ),
    )
    parser.add_argument(
        "--config",
        dest="config_path",
        help="Optional YAML file with input defaults (keys: test_dir, test_files, karate_version, ...).",
    )
    parser.add_argument(
        "--env-file",
        default=str(root_dir / ".env"),
        help="KEY=VALUE file loaded into the environment when present (default: ./.env).",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--quiet", action="store_true", help="Only log warnings and errors")
