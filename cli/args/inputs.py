from __future__ import annotations

import argparse


def add_input_args(parser: argparse.ArgumentParser) -> None:
    """Register flags mirroring the action inputs.

    Unset flags fall back to ``INPUT_*`` environment variables, then to the
    config file, then to defaults.
    """

    parser.add_argument("--test-dir", dest="test_dir", help="Directory holding the features (default: sanityTests)")
    parser.add_argument(
        "--test-files",
        dest="test_files",
        help="Comma-separated feature files, relative to --test-dir (default: SanityTest.feature)",
    )
    parser.add_argument(
        "--karate-version",
        dest="karate_version",
        help="Karate release to use, e.g. 1.4.1, or 'latest' (default)",
    )
    parser.add_argument("--base-url", dest="base_url", help="Passed to Karate as -DbaseUrl")
    parser.add_argument("--auth-token", dest="auth_token", help="Passed to Karate as -DAuthorization")
    parser.add_argument("--java-bin", dest="java_bin", help="Java executable (default: java)")
    parser.add_argument(
        "--timeout",
        dest="timeout_seconds",
        type=int,
        help="Kill Karate after this many seconds (default: no timeout)",
    )


def input_overrides(args: argparse.Namespace) -> dict:
    """CLI values that were actually given, keyed by ActionInputs field."""
    keys = ["test_dir", "test_files", "karate_version", "base_url", "auth_token", "java_bin", "timeout_seconds"]
    return {k: getattr(args, k, None) for k in keys if getattr(args, k, None) is not None}
