"""Persisted per-file compile status used to skip unchanged sources.

Entries are keyed by ``"<absolute source path>@<mode>"`` and hold the MD5 of
the last compiled source text plus the mtime (ms) of the output written for it.
An entry is valid only while the output still exists with that exact mtime, so
editing or deleting a compiled file forces a recompile.
"""

from __future__ import annotations

import logging
from pathlib import Path

from skiff.constants.cache import STATUS_KEY_SEPARATOR, STATUS_TEMP_PREFIX, STATUS_TEMP_SUFFIX
from skiff.io import content_digest, load_json_file, write_json_atomic
from skiff.types import OutputMode, StatusEntry, StatusPayload

logger = logging.getLogger(__name__)

REASON_NOT_CACHED = "not cached"
REASON_CHANGED = "changed"
REASON_NO_TARGET = "no target"
REASON_TARGET_MODIFIED = "target modified"


def status_key(path: Path, mode: OutputMode) -> str:
    """Return the persisted key for a (source path, mode) pair."""
    return f"{path}{STATUS_KEY_SEPARATOR}{mode}"


class StatusStore:
    """JSON-backed mapping of compile status, flushed after every mutation."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._entries: StatusPayload = {}

    @property
    def path(self) -> Path:
        return self._path

    @staticmethod
    def digest(text: str) -> str:
        return content_digest(text)

    def load(self) -> StatusStore:
        """Load the status file, starting clean (and rewriting it) when missing or corrupt."""
        try:
            payload = load_json_file(self._path)
        except (OSError, ValueError):
            payload = None

        if not isinstance(payload, dict):
            logger.info("Could not parse status cache at %s, making a clean one", self._path)
            self._entries = {}
            self.flush()
            return self

        self._entries = _normalize_entries(payload)
        return self

    def clear(self) -> None:
        """Drop every entry and persist the empty store."""
        logger.info("Cleaning status cache %s", self._path)
        self._entries = {}
        self.flush()

    def get(self, path: Path, mode: OutputMode) -> StatusEntry | None:
        return self._entries.get(status_key(path, mode))

    def entries(self) -> StatusPayload:
        return dict(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def invalid_reason(
        self,
        path: Path,
        mode: OutputMode,
        current_digest: str,
        current_target_mtime: int | None,
    ) -> str | None:
        """Return why ``path`` needs recompiling, or None on a cache hit."""
        entry = self.get(path, mode)
        if entry is None:
            return REASON_NOT_CACHED
        if entry["sourceMD5"] != current_digest:
            return REASON_CHANGED
        if current_target_mtime is None:
            return REASON_NO_TARGET
        if entry["targetMilliseconds"] != current_target_mtime:
            return REASON_TARGET_MODIFIED
        return None

    def is_valid(
        self,
        path: Path,
        mode: OutputMode,
        current_digest: str,
        current_target_mtime: int | None,
    ) -> bool:
        """``current_target_mtime`` is None when the compiled output does not exist."""
        return self.invalid_reason(path, mode, current_digest, current_target_mtime) is None

    def record(self, path: Path, mode: OutputMode, digest: str, target_mtime: int) -> None:
        self._entries[status_key(path, mode)] = {
            "sourceMD5": digest,
            "targetMilliseconds": target_mtime,
        }
        self.flush()

    def remove(self, path: Path, mode: OutputMode) -> bool:
        """Remove an entry; returns False when there was nothing to remove."""
        if self._entries.pop(status_key(path, mode), None) is None:
            return False
        self.flush()
        return True

    def flush(self) -> None:
        """Write the store to disk. Failures propagate."""
        write_json_atomic(
            path=self._path,
            payload=self._entries,
            temp_prefix=STATUS_TEMP_PREFIX,
            temp_suffix=STATUS_TEMP_SUFFIX,
        )


class InMemoryStatusStore(StatusStore):
    """Status store that never touches disk."""

    def __init__(self) -> None:
        super().__init__(Path("<memory>"))

    def load(self) -> StatusStore:
        return self

    def flush(self) -> None:
        return None


def _normalize_entries(payload: dict[object, object]) -> StatusPayload:
    entries: StatusPayload = {}
    for key, value in payload.items():
        if not isinstance(key, str) or not isinstance(value, dict):
            continue
        source_md5 = value.get("sourceMD5")
        target_ms = value.get("targetMilliseconds")
        if not isinstance(source_md5, str):
            continue
        if isinstance(target_ms, bool) or not isinstance(target_ms, int):
            continue
        entries[key] = {"sourceMD5": source_md5, "targetMilliseconds": target_ms}
    return entries
