from __future__ import annotations

import argparse
from typing import Callable, Dict, Mapping

from cli.commands.report import run_report
from cli.commands.resolve import run_resolve
from cli.commands.run import run_tests

MODES: Dict[str, Callable[[argparse.Namespace, Mapping[str, str]], int]] = {
    "run": run_tests,
    "resolve": run_resolve,
    "report": run_report,
}


def dispatch(args: argparse.Namespace, environ: Mapping[str, str]) -> int:
    handler = MODES.get(args.mode)
    if handler is None:
        raise SystemExit(f"Unknown mode '{args.mode}'. Valid: {sorted(MODES)}")
    return int(handler(args, environ))
