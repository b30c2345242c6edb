"""karate_action.errors

Exception types raised by the action.

Only failures that must stop the run get a type here. Report rendering
problems (missing or malformed summary files) are logged, never raised.
"""

from __future__ import annotations

from typing import Optional


class KarateActionError(Exception):
    """Base class for action failures."""


class ConfigError(KarateActionError):
    """Action inputs are missing or invalid."""


class DownloadError(KarateActionError):
    """The Karate archive could not be fetched."""


class VersionNotFoundError(DownloadError):
    """The remote has no archive for the requested version (HTTP 404)."""

    def __init__(self, version: str, message: Optional[str] = None) -> None:
        super().__init__(message or f"Karate version v{version} not found.")
        self.version = version
