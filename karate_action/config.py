"""karate_action.config

Action inputs and where they come from.

Precedence (highest first):

1. explicit overrides (CLI flags)
2. GitHub action inputs (``INPUT_<NAME>`` environment variables)
3. an optional YAML config file
4. defaults
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, MutableMapping, Optional

from karate_action.artifacts.versions import ArchiveSpec
from karate_action.errors import ConfigError

DEFAULT_TEST_DIR = "sanityTests"
DEFAULT_TEST_FILE = "SanityTest.feature"
DEFAULT_KARATE_VERSION = "latest"
DEFAULT_JAVA_BIN = "java"

# field name -> GitHub action input name
ACTION_INPUTS: Dict[str, str] = {
    "test_dir": "testDir",
    "test_files": "testFilePath",
    "karate_version": "karateVersion",
    "base_url": "baseUrl",
    "auth_token": "authToken",
}

CONFIG_KEYS = set(ACTION_INPUTS) | {"java_bin", "timeout_seconds"}


@dataclass(frozen=True)
class ActionInputs:
    base_url: str
    test_dir: str = DEFAULT_TEST_DIR
    test_files: str = DEFAULT_TEST_FILE
    karate_version: str = DEFAULT_KARATE_VERSION
    auth_token: str = ""
    java_bin: str = DEFAULT_JAVA_BIN
    timeout_seconds: int = 0
    archive: ArchiveSpec = field(default_factory=ArchiveSpec)


def action_input_env_name(input_name: str) -> str:
    """GitHub exposes input ``testDir`` as ``INPUT_TESTDIR``."""
    return "INPUT_" + input_name.replace(" ", "_").upper()


def get_action_input(environ: Mapping[str, str], input_name: str) -> Optional[str]:
    """Whitespace-trimmed action input, or None when unset/empty."""
    raw = environ.get(action_input_env_name(input_name))
    if raw is None:
        return None
    raw = raw.strip()
    return raw or None


def load_config_file(path: Path) -> Dict[str, Any]:
    """Load a YAML config file with keys matching :class:`ActionInputs` fields."""
    import yaml

    p = Path(path).expanduser().resolve()
    if not p.exists():
        raise ConfigError(f"Config file not found: {p}")
    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Config file {p} is not valid YAML: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"Config YAML must be a mapping/object at top level: {p}")

    unknown = sorted(set(raw) - CONFIG_KEYS)
    if unknown:
        raise ConfigError(f"Unknown config keys in {p}: {unknown}. Valid: {sorted(CONFIG_KEYS)}")
    return raw


def load_inputs(
    overrides: Optional[Mapping[str, Any]] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
    config_path: Optional[Path] = None,
) -> ActionInputs:
    """Merge overrides, action inputs, config file and defaults."""
    environ = os.environ if environ is None else environ
    file_values = load_config_file(config_path) if config_path else {}

    merged: Dict[str, Any] = {}
    for key in CONFIG_KEYS:
        value = (overrides or {}).get(key)
        if value is None and key in ACTION_INPUTS:
            value = get_action_input(environ, ACTION_INPUTS[key])
        if value is None:
            value = file_values.get(key)
        if value is None:
            continue
        merged[key] = value

    if "timeout_seconds" in merged:
        try:
            merged["timeout_seconds"] = int(merged["timeout_seconds"])
        except (TypeError, ValueError) as e:
            raise ConfigError(f"timeout_seconds must be an integer: {merged['timeout_seconds']!r}") from e

    for key, value in list(merged.items()):
        if key != "timeout_seconds":
            merged[key] = str(value).strip()

    merged.setdefault("base_url", "")
    return ActionInputs(**merged)


def validate_inputs(inputs: ActionInputs, *, cwd: Optional[Path] = None) -> Path:
    """Check required inputs; return the absolute test directory."""
    if not inputs.test_dir:
        raise ConfigError('Invalid test directory: ""')
    test_dir = (Path(cwd) if cwd else Path.cwd()) / inputs.test_dir
    if not test_dir.is_dir():
        raise ConfigError(f'Invalid test directory: "{inputs.test_dir}"')

    if not inputs.test_files:
        raise ConfigError("Test file paths not provided")
    if not inputs.karate_version:
        raise ConfigError("Karate version not provided")
    if not inputs.base_url:
        raise ConfigError("Base URL not provided")
    return test_dir


_ENV_LINE_RE = re.compile(r"^(?:export\s+)?([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(.*)$")


def read_env_file(path: Path) -> Dict[str, str]:
    """Parse ``KEY=VALUE`` lines from a local env file (e.g. INPUT_BASEURL, INPUT_AUTHTOKEN).

    Quoted values are taken verbatim; unquoted values lose a trailing
    `` # comment``. Lines that are not assignments are skipped.
    """
    values: Dict[str, str] = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        m = _ENV_LINE_RE.match(line.strip())
        if not m:
            continue
        key, value = m.group(1), m.group(2).strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        else:
            value = value.split(" #", 1)[0].split("\t#", 1)[0].rstrip()
        values[key] = value
    return values


def load_env_file(path: Path, environ: Optional[MutableMapping[str, str]] = None) -> List[str]:
    """Export *path*'s variables for local runs; real environment values win.

    Returns the names that were set. A missing file is not an error.
    """
    if not path.is_file():
        return []
    target = os.environ if environ is None else environ
    added = []
    for key, value in read_env_file(path).items():
        if key not in target:
            target[key] = value
            added.append(key)
    return added
