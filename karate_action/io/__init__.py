"""karate_action.io

Filesystem helpers shared by the resolver, the renderer and the action.
"""

from __future__ import annotations

from .fs import (
    append_text,
    copy_file_atomic,
    read_json,
    read_text_if_exists,
    write_chunks_atomic,
    write_text_atomic,
)

__all__ = [
    "append_text",
    "copy_file_atomic",
    "read_json",
    "read_text_if_exists",
    "write_chunks_atomic",
    "write_text_atomic",
]
