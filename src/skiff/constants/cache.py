"""Constants used by the transpile status cache and the cache layer."""

from __future__ import annotations

from typing import Final

STATUS_FILENAME: str = "js-cache-status.json"
STATUS_TEMP_PREFIX: str = ".js-cache-status-"
STATUS_TEMP_SUFFIX: str = ".tmp"

CACHE_LAYER_FILENAME: str = "cache-layer.json"
CACHE_LAYER_TEMP_PREFIX: str = ".cache-layer-"
CACHE_LAYER_TEMP_SUFFIX: str = ".tmp"

# Top-level marker key; the per-key success map lives under ``cache``.
LATEST_CHANGE_TIMESTAMP_KEY: Final = "latestChangeTimestamp"
CACHE_LAYER_SUCCESS_KEY: Final = "cache"

STATUS_KEY_SEPARATOR: str = "@"
