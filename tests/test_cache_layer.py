"""Tests for the last-changed marker."""

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path

import pytest

from skiff.cache_layer import CacheLayer


class TickingClock:
    def __init__(self, start: int = 1_000) -> None:
        self._ticks: Iterator[int] = iter(range(start, start + 10_000))

    def __call__(self) -> int:
        return next(self._ticks)


@pytest.fixture()
def layer(tmp_path: Path) -> CacheLayer:
    return CacheLayer(tmp_path / "cache-layer.json", clock=TickingClock())


def test_success_after_bump_is_safe(layer: CacheLayer) -> None:
    layer.bump()
    layer.on_success("unit-tests")

    assert layer.is_cache_safe("unit-tests")
    assert not layer.is_cache_safe("api-compare")


def test_bump_after_success_invalidates(layer: CacheLayer) -> None:
    layer.bump()
    layer.on_success("unit-tests")
    layer.bump()

    assert not layer.is_cache_safe("unit-tests")


def test_clear_makes_every_key_unsafe_until_rebumped_and_resucceeded(layer: CacheLayer) -> None:
    layer.bump()
    layer.on_success("unit-tests")
    layer.on_success("api-compare")

    layer.clear()

    assert layer.last_changed() is None
    assert not layer.is_cache_safe("unit-tests")
    assert not layer.is_cache_safe("api-compare")

    layer.bump()
    assert not layer.is_cache_safe("unit-tests")
    layer.on_success("unit-tests")
    assert layer.is_cache_safe("unit-tests")


def test_equal_timestamps_are_not_safe(tmp_path: Path) -> None:
    layer = CacheLayer(tmp_path / "cache-layer.json", clock=lambda: 5)
    layer.bump()
    layer.on_success("k")

    assert not layer.is_cache_safe("k")


def test_missing_or_corrupt_file_is_never_safe(tmp_path: Path) -> None:
    path = tmp_path / "cache-layer.json"
    assert not CacheLayer(path).is_cache_safe("k")

    path.write_text("{oops", encoding="utf-8")
    layer = CacheLayer(path, clock=TickingClock())

    assert not layer.is_cache_safe("k")
    assert layer.bump() == 1_000
    assert json.loads(path.read_text(encoding="utf-8")) == {"latestChangeTimestamp": 1_000}


def test_file_format_keeps_successes_across_bumps(layer: CacheLayer) -> None:
    layer.bump()
    layer.on_success("unit-tests")
    layer.bump()

    payload = json.loads(layer.path.read_text(encoding="utf-8"))

    assert payload == {"cache": {"unit-tests": 1_001}, "latestChangeTimestamp": 1_002}
