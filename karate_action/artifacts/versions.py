"""karate_action.artifacts.versions

Archive naming and version selection.

Versioned archives are named ``<name>-<major>.<minor>.<patch>.<ext>`` and are
kept next to the canonical ``<name>.<ext>``. Selection compares versions as
integer tuples, so ``1.10.0`` ranks above ``1.9.0``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

Version = Tuple[int, int, int]

DEFAULT_URL_TEMPLATE = (
    "https://github.com/karatelabs/karate/releases/download/v{version}/{name}-{version}.{ext}"
)
LATEST_RELEASE_URL = "https://api.github.com/repos/karatelabs/karate/releases/latest"


@dataclass(frozen=True)
class ArchiveSpec:
    """Where an archive comes from and what it is called on disk."""

    name: str = "karate"
    ext: str = "jar"
    url_template: str = DEFAULT_URL_TEMPLATE
    latest_release_url: str = LATEST_RELEASE_URL

    @property
    def canonical_filename(self) -> str:
        return f"{self.name}.{self.ext}"

    @property
    def filename_re(self) -> "re.Pattern[str]":
        return re.compile(
            rf"^{re.escape(self.name)}-(\d+)\.(\d+)\.(\d+)\.{re.escape(self.ext)}$"
        )

    def versioned_filename(self, version: str) -> str:
        return f"{self.name}-{version}.{self.ext}"

    def download_url(self, version: str) -> str:
        return self.url_template.format(name=self.name, version=version, ext=self.ext)


@dataclass(frozen=True)
class VersionedArchive:
    path: Path
    version: Version

    @property
    def version_str(self) -> str:
        return ".".join(str(n) for n in self.version)


def parse_archive_version(filename: str, spec: ArchiveSpec) -> Optional[Version]:
    """Return the version tuple encoded in *filename*, or None if it does not match."""
    m = spec.filename_re.match(filename)
    if not m:
        return None
    return int(m.group(1)), int(m.group(2)), int(m.group(3))


def list_versioned_archives(directory: Path, spec: ArchiveSpec) -> List[VersionedArchive]:
    """Enumerate versioned archives in *directory* (non-recursive, sorted by name)."""
    d = Path(directory)
    if not d.is_dir():
        return []

    out: List[VersionedArchive] = []
    for p in sorted(d.iterdir(), key=lambda x: x.name):
        if not p.is_file():
            continue
        version = parse_archive_version(p.name, spec)
        if version is None:
            continue
        out.append(VersionedArchive(path=p, version=version))
    return out


def select_highest_version(directory: Path, spec: ArchiveSpec) -> Optional[VersionedArchive]:
    """Pick the archive with the highest version.

    Ties (``karate-1.01.0.jar`` vs ``karate-1.1.0.jar``) go to the
    lexicographically greatest filename.
    """
    archives = list_versioned_archives(directory, spec)
    if not archives:
        return None
    return max(archives, key=lambda a: (a.version, a.path.name))
