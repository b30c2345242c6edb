"""karate_action.io.fs

Atomic filesystem writers.

A CI step can be cancelled at any point. Every file the action produces
(downloaded archives, the canonical ``karate.jar``, output files) is written to
a temp file in the destination directory and moved into place with
``os.replace``, so readers only ever see the previous file or the complete new
one.
"""

from __future__ import annotations

import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, BinaryIO, Callable, Iterable, Optional


def _atomic_write(
    path: Path,
    write_fn: Callable[[BinaryIO], None],
) -> None:
    """Write a file atomically by writing to a temp file and os.replace()."""

    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f"{p.name}.", suffix=".tmp", dir=str(p.parent))
    tmp_path = Path(tmp_name)

    try:
        with os.fdopen(fd, "wb") as f:
            write_fn(f)
            f.flush()
            os.fsync(f.fileno())

        os.replace(tmp_path, p)
    finally:
        # If os.replace fails, best-effort cleanup of the temp file.
        try:
            if tmp_path.exists():
                tmp_path.unlink()
        except OSError:
            pass


def write_text_atomic(path: Path, text: str, *, encoding: str = "utf-8") -> None:
    """Write text atomically."""

    def _write(f: BinaryIO) -> None:
        f.write(text.encode(encoding))

    _atomic_write(Path(path), _write)


def write_chunks_atomic(path: Path, chunks: Iterable[bytes]) -> int:
    """Stream *chunks* into *path* atomically and return the byte count."""

    written = 0

    def _write(f: BinaryIO) -> None:
        nonlocal written
        for chunk in chunks:
            if not chunk:
                continue
            f.write(chunk)
            written += len(chunk)

    _atomic_write(Path(path), _write)
    return written


def copy_file_atomic(src: Path, dst: Path) -> None:
    """Copy *src* over *dst* atomically (dst is replaced, never appended to)."""

    def _write(f: BinaryIO) -> None:
        with Path(src).open("rb") as r:
            shutil.copyfileobj(r, f)

    _atomic_write(Path(dst), _write)


def append_text(path: Path, text: str, *, encoding: str = "utf-8") -> None:
    """Append text to a file the CI runner owns (step summary, outputs)."""

    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("a", encoding=encoding) as f:
        f.write(text)


def read_json(path: Path, *, encoding: str = "utf-8") -> Any:
    """Read JSON from disk."""

    with Path(path).open("r", encoding=encoding) as f:
        return json.load(f)


def read_text_if_exists(path: Path, *, encoding: str = "utf-8") -> Optional[str]:
    """Return file text, or None when the file does not exist."""

    p = Path(path)
    if not p.is_file():
        return None
    return p.read_text(encoding=encoding)
