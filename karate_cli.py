#!/usr/bin/env python3
"""
CLI entrypoint for the Karate test action.

Modes:
  1) run     - resolve karate.jar, run the features, render the summary
  2) resolve - only download/promote karate.jar
  3) report  - only render the summary of an earlier run

Usage:
  python karate_cli.py --base-url https://api.example.com
  python karate_cli.py --test-dir sanityTests --test-files A.feature,B.feature --karate-version 1.4.1
  python karate_cli.py --mode resolve --karate-version latest
  python karate_cli.py --mode report --test-dir sanityTests

Inside GitHub Actions every flag can instead come from the action inputs
(INPUT_TESTDIR, INPUT_TESTFILEPATH, INPUT_KARATEVERSION, INPUT_BASEURL,
INPUT_AUTHTOKEN).
"""

from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import List, Optional

from cli.args.base import add_base_args
from cli.args.inputs import add_input_args
from cli.dispatch import dispatch
from karate_action.config import load_env_file
from karate_action.logs import configure_logging


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run Karate API tests and summarize the results.")
    add_base_args(parser, root_dir=Path.cwd())
    add_input_args(parser)
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    load_env_file(Path(args.env_file))
    configure_logging(verbose=args.verbose, quiet=args.quiet)

    return dispatch(args, os.environ)


if __name__ == "__main__":
    raise SystemExit(main())
