"""karate_action.artifacts.download

All HTTP calls for fetching Karate archives live here.

Design goals:
  - Keep network I/O separate from version selection and file promotion.
  - Translate "version does not exist" (HTTP 404) into a typed error; let every
    other transport fault propagate unchanged.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import requests

from karate_action.errors import DownloadError, VersionNotFoundError
from karate_action.io.fs import write_chunks_atomic

from .versions import ArchiveSpec

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024
DEFAULT_TIMEOUT_SECONDS = 60


def _http(session: Optional[Any]) -> Any:
    # requests.Session and the requests module expose the same get() signature.
    return session if session is not None else requests


def resolve_latest_version(
    spec: ArchiveSpec,
    *,
    session: Optional[Any] = None,
    timeout: int = DEFAULT_TIMEOUT_SECONDS,
) -> str:
    """Ask the GitHub releases API for the newest release and return its version."""
    resp = _http(session).get(
        spec.latest_release_url,
        headers={"Accept": "application/vnd.github+json"},
        timeout=timeout,
    )
    if resp.status_code == 404:
        raise VersionNotFoundError("latest")
    resp.raise_for_status()

    try:
        payload = resp.json()
    except ValueError as e:
        raise DownloadError(f"Could not decode latest release JSON: {e}") from e

    tag = (payload or {}).get("tag_name") if isinstance(payload, dict) else None
    if not tag:
        raise DownloadError("Latest release response has no tag_name.")
    version = str(tag).strip()
    version = version[1:] if version.startswith("v") else version
    logger.info("Resolved latest Karate release to %s", version)
    return version


def download_archive(
    version: str,
    dest: Path,
    spec: ArchiveSpec,
    *,
    session: Optional[Any] = None,
    timeout: int = DEFAULT_TIMEOUT_SECONDS,
) -> Path:
    """Stream the archive for *version* into *dest*.

    The body is written verbatim. *dest* only appears once the whole body has
    been received.
    """
    url = spec.download_url(version)
    logger.info("Downloading %s", url)

    resp = _http(session).get(url, stream=True, timeout=timeout)
    try:
        if resp.status_code == 404:
            logger.error("Karate version v%s not found.", version)
            raise VersionNotFoundError(version)
        resp.raise_for_status()

        dest = Path(dest)
        if not dest.parent.exists():
            logger.info("Directory %s not found. Creating...", dest.parent)
        logger.info("Saving archive to: %s", dest)
        size = write_chunks_atomic(dest, resp.iter_content(chunk_size=CHUNK_SIZE))
    finally:
        resp.close()

    logger.info("Download complete (%d bytes).", size)
    return dest
