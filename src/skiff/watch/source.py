"""Polling event source: diffs file snapshots into watch events."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from pathlib import Path
from typing import Protocol, TypeAlias

from skiff.transpile.classifier import is_ignored_path
from skiff.watch.events import WatchEvent

logger = logging.getLogger(__name__)

Snapshot: TypeAlias = dict[str, tuple[int, int]]


class EventSource(Protocol):
    def next_batch(self) -> list[WatchEvent]:
        """Block until the next batch of events is available (possibly empty)."""
        ...


class PollingEventSource:
    """Fingerprints every non-ignored file under the workspace as ``path -> (mtime_ns, size)``.

    Additions and modifications become ``change`` events, disappearances become
    ``rename`` events, mirroring what native recursive watchers report. Ignored
    directories and the dist directory are pruned with the same rule the
    classifier applies to events.
    """

    def __init__(
        self,
        root: Path,
        *,
        dist_dir: str,
        interval: float,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._root = root
        self._dist_dir = dist_dir
        self._interval = interval
        self._sleep = sleep
        self._last = self._snapshot()

    def next_batch(self) -> list[WatchEvent]:
        self._sleep(self._interval)
        current = self._snapshot()
        events = diff_snapshots(self._last, current)
        self._last = current
        if events:
            logger.debug("Detected %d filesystem change(s)", len(events))
        return events

    def _snapshot(self) -> Snapshot:
        state: Snapshot = {}
        for dirpath, dirnames, filenames in self._root.walk():
            prefix = dirpath.relative_to(self._root).as_posix()
            prefix = "" if prefix == "." else f"{prefix}/"
            dirnames[:] = sorted(
                name for name in dirnames if not is_ignored_path(f"{prefix}{name}", self._dist_dir)
            )
            for name in filenames:
                key = f"{prefix}{name}"
                if not is_ignored_path(key, self._dist_dir):
                    self._record(state, key, dirpath / name)
        return state

    @staticmethod
    def _record(state: Snapshot, key: str, path: Path) -> None:
        try:
            stat = path.stat()
        except OSError:
            return
        state[key] = (stat.st_mtime_ns, stat.st_size)


def diff_snapshots(previous: Snapshot, current: Snapshot) -> list[WatchEvent]:
    """Return events turning ``previous`` into ``current``, sorted by path."""
    events: list[WatchEvent] = []
    for path in sorted(previous.keys() | current.keys()):
        before = previous.get(path)
        after = current.get(path)
        if after is None:
            events.append(WatchEvent("rename", path))
        elif before != after:
            events.append(WatchEvent("change", path))
    return events
