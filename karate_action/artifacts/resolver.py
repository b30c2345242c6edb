"""karate_action.artifacts.resolver

Make sure ``<dir>/karate.jar`` is the newest Karate archive available.

Resolution runs in two phases, both driven by an explicit directory path:

1. enumerate and select (:func:`select_highest_version`)
2. replace and copy (:func:`promote_to_canonical`)

Downloads only happen when the requested versioned archive is missing, so
repeated calls are cheap and never re-fetch.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

from karate_action.io.fs import copy_file_atomic

from .download import download_archive, resolve_latest_version
from .versions import ArchiveSpec, VersionedArchive, select_highest_version

logger = logging.getLogger(__name__)

LATEST = "latest"


def promote_to_canonical(archive: VersionedArchive, directory: Path, spec: ArchiveSpec) -> Path:
    """Replace the canonical archive with a copy of *archive*."""
    canonical = Path(directory) / spec.canonical_filename
    if canonical.exists():
        logger.info("Replacing existing %s at %s", spec.canonical_filename, canonical)
    logger.info("Copying %s to %s", archive.path, canonical)
    copy_file_atomic(archive.path, canonical)
    return canonical


def promote_highest_version(directory: Path, spec: Optional[ArchiveSpec] = None) -> Optional[Path]:
    """Copy the highest versioned archive in *directory* to the canonical name.

    Returns the canonical path, or None when no versioned archive exists (the
    canonical file is then left untouched).
    """
    spec = spec or ArchiveSpec()
    logger.info("Copying the highest version archive to %s...", spec.canonical_filename)

    highest = select_highest_version(directory, spec)
    if highest is None:
        logger.info("No versioned %s files found in %s.", spec.ext, directory)
        return None

    logger.debug("Highest version found: %s (%s)", highest.version_str, highest.path.name)
    return promote_to_canonical(highest, directory, spec)


def ensure_canonical_archive(
    version: str,
    directory: Path,
    *,
    spec: Optional[ArchiveSpec] = None,
    session: Optional[Any] = None,
) -> Optional[Path]:
    """Fetch *version* if needed, then promote the highest local version.

    Raises :class:`karate_action.errors.VersionNotFoundError` when the remote
    has no such version. Other network and filesystem errors propagate as-is.
    """
    spec = spec or ArchiveSpec()
    directory = Path(directory)

    if version == LATEST:
        version = resolve_latest_version(spec, session=session)

    logger.info("Attempting to download Karate version: %s...", version)
    versioned = directory / spec.versioned_filename(version)

    if versioned.exists():
        logger.info(
            "Karate version %s already exists at %s. Skipping download.", version, versioned
        )
    else:
        download_archive(version, versioned, spec, session=session)

    return promote_highest_version(directory, spec)
