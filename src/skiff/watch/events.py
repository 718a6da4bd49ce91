"""Watch events and the pure planning step that decides what each one means."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, TypeAlias

from skiff.transpile.classifier import is_eligible_extension, is_ignored_path, normalize_relative
from skiff.transpile.repos import RepoLayout
from skiff.types import WatchEventType

ActionKind: TypeAlias = Literal["ignore", "bump", "delete", "reload_repos", "compile"]
PathState: TypeAlias = Literal["missing", "file", "directory"]


@dataclass(frozen=True)
class WatchEvent:
    """A raw filesystem notification relative to the workspace root.

    ``relative_path`` may be None; some platforms report events without a name.
    """

    event_type: WatchEventType
    relative_path: str | None


@dataclass(frozen=True)
class WatchAction:
    """What the loop must do for one event."""

    kind: ActionKind
    relative_path: str = ""
    repo: str = ""

    @property
    def bumps_marker(self) -> bool:
        return self.kind != "ignore"


IGNORE = WatchAction("ignore")


def plan_event(
    event: WatchEvent,
    *,
    path_state: PathState,
    dist_dir: str,
    active_repos_file: str,
    tracked_repos: frozenset[str],
    layout: RepoLayout,
) -> WatchAction:
    """Map an event plus the current state of its path to a :class:`WatchAction`."""
    raw = event.relative_path
    if not isinstance(raw, str):
        return IGNORE
    relative = normalize_relative(raw)
    if not relative or is_ignored_path(relative, dist_dir) or path_state == "directory":
        return IGNORE

    if path_state == "missing":
        if is_eligible_extension(relative):
            return WatchAction("delete", relative)
        return WatchAction("bump", relative)

    if relative == normalize_relative(active_repos_file):
        return WatchAction("reload_repos", relative)

    repo = relative.split("/", 1)[0]
    if repo in tracked_repos and layout.is_watched(relative) and is_eligible_extension(relative):
        return WatchAction("compile", relative, repo)
    return WatchAction("bump", relative)
