"""Last-changed marker consumed by downstream caches (unit tests, API comparisons).

A downstream key is safe to skip only when its last success is strictly newer
than the latest change the watcher recorded. When nobody is watching the
marker is absent, so nothing is ever considered safe.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from pathlib import Path

from skiff.constants.cache import (
    CACHE_LAYER_SUCCESS_KEY,
    CACHE_LAYER_TEMP_PREFIX,
    CACHE_LAYER_TEMP_SUFFIX,
    LATEST_CHANGE_TIMESTAMP_KEY,
)
from skiff.io import load_json_file, write_json_atomic
from skiff.types import CacheLayerPayload

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class CacheLayer:
    """Reads and writes the ``cache-layer.json`` marker file."""

    def __init__(self, path: Path, *, clock: Callable[[], int] = _now_ms) -> None:
        self._path = path
        self._clock = clock

    @property
    def path(self) -> Path:
        return self._path

    def bump(self) -> int:
        """Record that something changed now; returns the timestamp written."""
        payload = self._read()
        now = self._clock()
        payload[LATEST_CHANGE_TIMESTAMP_KEY] = now
        self._write(payload)
        return now

    def clear(self) -> None:
        """Forget the last change so no key is considered safe until the next bump."""
        payload = self._read()
        payload.pop(LATEST_CHANGE_TIMESTAMP_KEY, None)
        self._write(payload)
        logger.debug("Cleared last-changed marker in %s", self._path)

    def on_success(self, key: str) -> None:
        payload = self._read()
        successes = payload.get(CACHE_LAYER_SUCCESS_KEY)
        if not isinstance(successes, dict):
            successes = {}
        successes[key] = self._clock()
        payload[CACHE_LAYER_SUCCESS_KEY] = successes
        self._write(payload)

    def last_changed(self) -> int | None:
        value = self._read().get(LATEST_CHANGE_TIMESTAMP_KEY)
        return value if _is_timestamp(value) else None

    def is_cache_safe(self, key: str) -> bool:
        payload = self._read()
        last_changed = payload.get(LATEST_CHANGE_TIMESTAMP_KEY)
        successes = payload.get(CACHE_LAYER_SUCCESS_KEY)
        succeeded_at = successes.get(key) if isinstance(successes, dict) else None
        if not _is_timestamp(last_changed) or not _is_timestamp(succeeded_at):
            return False
        return last_changed < succeeded_at

    def _read(self) -> CacheLayerPayload:
        try:
            payload = load_json_file(self._path)
        except (OSError, ValueError):
            return {}
        if not isinstance(payload, dict):
            return {}
        return payload  # type: ignore[return-value]

    def _write(self, payload: CacheLayerPayload) -> None:
        write_json_atomic(
            path=self._path,
            payload=payload,
            temp_prefix=CACHE_LAYER_TEMP_PREFIX,
            temp_suffix=CACHE_LAYER_TEMP_SUFFIX,
        )


def _is_timestamp(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
