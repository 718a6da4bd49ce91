"""Single-consumer watch loop driving the transpiler from filesystem events."""

from __future__ import annotations

import logging
import signal
import threading
from collections.abc import Iterable
from types import FrameType
from typing import Any

from skiff.cache_layer import CacheLayer
from skiff.transpile.classifier import normalize_relative
from skiff.transpile.repos import read_active_repos
from skiff.transpile.transpiler import Transpiler
from skiff.watch.events import PathState, WatchAction, WatchEvent, plan_event
from skiff.watch.source import EventSource

logger = logging.getLogger(__name__)

_SHUTDOWN_SIGNALS: tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM)


class WatchLoop:
    """Processes watch events one at a time, each to completion, until stopped.

    The marker is bumped on startup and on every non-ignored event, and cleared
    on shutdown so downstream caches stop trusting it once nobody is watching.
    """

    def __init__(
        self,
        *,
        transpiler: Transpiler,
        cache_layer: CacheLayer,
        dist_dir: str,
        active_repos_file: str,
        tracked_repos: Iterable[str],
    ) -> None:
        self._transpiler = transpiler
        self._cache_layer = cache_layer
        self._dist_dir = dist_dir
        self._active_repos_file = active_repos_file
        self._tracked = tuple(dict.fromkeys(tracked_repos))
        self._stop = threading.Event()
        self._shut_down = False

    @property
    def tracked_repos(self) -> tuple[str, ...]:
        return self._tracked

    def plan(self, event: WatchEvent) -> WatchAction:
        return plan_event(
            event,
            path_state=self._path_state(event.relative_path),
            dist_dir=self._dist_dir,
            active_repos_file=self._active_repos_file,
            tracked_repos=frozenset(self._tracked),
            layout=self._transpiler.layout,
        )

    def handle_event(self, event: WatchEvent) -> WatchAction:
        """Plan and apply one event. Malformed events are dropped without side effects."""
        action = self.plan(event)
        self.apply(action)
        return action

    def apply(self, action: WatchAction) -> None:
        if not action.bumps_marker or not self._bump():
            return

        root = self._transpiler.root
        if action.kind == "delete":
            self._transpiler.remove_outputs(root / action.relative_path)
        elif action.kind == "reload_repos":
            self._reload_repos()
        elif action.kind == "compile":
            source = root / action.relative_path
            for mode in self._transpiler.layout.modes_for(action.repo):
                self._transpiler.compile_if_needed(source, mode)

    def run(self, source: EventSource, *, install_signal_handlers: bool = True) -> None:
        """Watch until :meth:`stop` is called or a termination signal arrives."""
        previous_handlers = self._install_signal_handlers() if install_signal_handlers else {}
        self._bump()
        logger.info("Watching %d repositories...", len(self._tracked))
        try:
            while not self._stop.is_set():
                for event in source.next_batch():
                    if self._stop.is_set():
                        break
                    self.handle_event(event)
        finally:
            self.shutdown()
            for signum, handler in previous_handlers.items():
                if handler is not None:
                    signal.signal(signum, handler)

    def stop(self) -> None:
        self._stop.set()

    def shutdown(self) -> None:
        """Clear the marker once; repeated calls are no-ops."""
        if self._shut_down:
            return
        self._shut_down = True
        self._stop.set()
        self._cache_layer.clear()
        logger.info("Stopped watching; cache layer marker cleared")

    def _bump(self) -> bool:
        """Bump the marker unless shut down; returns False when the watcher has stopped."""
        if self._shut_down:
            return False
        self._cache_layer.bump()
        if self._shut_down:
            # A signal cleared the marker while the bump was in flight.
            self._cache_layer.clear()
            return False
        return True

    def _reload_repos(self) -> None:
        repos = read_active_repos(self._transpiler.root / self._active_repos_file)
        logger.info("Reloaded active repos")
        for repo in repos:
            if repo in self._tracked:
                continue
            logger.info("New repo detected in active-repos, transpiling: %s", repo)
            self._transpiler.transpile_repository_tree(repo)
        self._tracked = repos

    def _path_state(self, relative_path: str | None) -> PathState:
        if not isinstance(relative_path, str) or not relative_path:
            return "missing"
        path = self._transpiler.root / normalize_relative(relative_path)
        if path.is_dir():
            return "directory"
        if path.exists():
            return "file"
        return "missing"

    def _install_signal_handlers(self) -> dict[int, Any]:
        previous: dict[int, Any] = {}
        for signum in _SHUTDOWN_SIGNALS:
            previous[signum] = signal.getsignal(signum)
            signal.signal(signum, self._handle_signal)
        return previous

    def _handle_signal(self, signum: int, frame: FrameType | None) -> None:
        logger.info("Received signal %d, shutting down watcher...", signum)
        self.shutdown()
