"""Content hashing and modification-time helpers."""

from __future__ import annotations

import hashlib
from pathlib import Path


def content_digest(text: str) -> str:
    """Return the MD5 hex digest of ``text`` encoded as UTF-8."""
    return hashlib.md5(text.encode("utf-8"), usedforsecurity=False).hexdigest()


def modified_time_ms(path: Path) -> int | None:
    """Return the file's mtime in whole milliseconds, or None when it does not exist."""
    try:
        return path.stat().st_mtime_ns // 1_000_000
    except FileNotFoundError:
        return None
