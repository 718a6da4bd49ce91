"""File watching: event planning, polling source and the watch loop."""

from __future__ import annotations

from .events import WatchAction, WatchEvent, plan_event
from .loop import WatchLoop
from .source import EventSource, PollingEventSource, diff_snapshots

__all__ = [
    "EventSource",
    "PollingEventSource",
    "WatchAction",
    "WatchEvent",
    "WatchLoop",
    "diff_snapshots",
    "plan_event",
]
