"""karate_action.artifacts

Karate archive resolution: download a versioned archive when missing and keep
the canonical ``karate.jar`` pointed at the highest version on disk.
"""

from __future__ import annotations

from .download import download_archive, resolve_latest_version
from .resolver import LATEST, ensure_canonical_archive, promote_highest_version, promote_to_canonical
from .versions import (
    ArchiveSpec,
    VersionedArchive,
    list_versioned_archives,
    parse_archive_version,
    select_highest_version,
)

__all__ = [
    "LATEST",
    "ArchiveSpec",
    "VersionedArchive",
    "download_archive",
    "ensure_canonical_archive",
    "list_versioned_archives",
    "parse_archive_version",
    "promote_highest_version",
    "promote_to_canonical",
    "resolve_latest_version",
    "select_highest_version",
]
