"""Typed payload structures for persisted cache files."""

from __future__ import annotations

from typing import NotRequired, TypeAlias, TypedDict


class StatusEntry(TypedDict):
    """Cache metadata for one (source file, output mode) pair."""

    sourceMD5: str
    targetMilliseconds: int


StatusPayload: TypeAlias = dict[str, StatusEntry]


CacheLayerPayload = TypedDict(
    "CacheLayerPayload",
    {
        "latestChangeTimestamp": NotRequired[int],
        "cache": NotRequired[dict[str, int]],
    },
)
