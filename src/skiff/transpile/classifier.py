"""Eligibility gate shared by the full-tree scan and the watch loop."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from skiff.constants.cache import CACHE_LAYER_FILENAME, STATUS_FILENAME
from skiff.constants.discovery import (
    EDITOR_BACKUP_SUFFIX,
    ELIGIBLE_EXTENSIONS,
    ESLINT_CACHE_SUFFIX,
    IGNORED_SEGMENTS,
)


def normalize_relative(path: str) -> str:
    """Normalize separators and strip leading ``./`` or ``/`` from a root-relative path."""
    normalized = path.replace("\\", "/")
    while normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized.lstrip("/")


def is_ignored_path(relative_path: str, dist_dir: str) -> bool:
    """Return True when a root-relative path must never be transpiled or watched.

    Pure string check; directory detection lives in :meth:`PathClassifier.is_ignored`.
    """
    relative = normalize_relative(relative_path)
    if not relative:
        return True

    segments = relative.split("/")
    if any(segment in IGNORED_SEGMENTS for segment in segments):
        return True

    dist = normalize_relative(dist_dir).rstrip("/")
    if relative == dist or relative.startswith(f"{dist}/"):
        return True

    name = segments[-1]
    if name in (STATUS_FILENAME, CACHE_LAYER_FILENAME):
        return True
    return name.endswith(EDITOR_BACKUP_SUFFIX) or name.endswith(ESLINT_CACHE_SUFFIX)


def is_eligible_extension(path: str | Path) -> bool:
    """Return True for script, typed-script, typed-component, shader and module-script sources."""
    return PurePosixPath(str(path).replace("\\", "/")).suffix in ELIGIBLE_EXTENSIONS


@dataclass(frozen=True)
class PathClassifier:
    """Classifies filesystem paths under a workspace root."""

    root: Path
    dist_dir: str

    def relative(self, path: Path | str) -> str:
        """Return ``path`` as a root-relative posix string; paths outside the root are returned as-is."""
        candidate = Path(path)
        if not candidate.is_absolute():
            return normalize_relative(str(path))
        try:
            return candidate.relative_to(self.root).as_posix()
        except ValueError:
            return candidate.as_posix()

    def is_ignored(self, path: Path | str) -> bool:
        """Return True for ignored locations and for directories."""
        if is_ignored_path(self.relative(path), self.dist_dir):
            return True
        absolute = Path(path) if Path(path).is_absolute() else self.root / self.relative(path)
        return absolute.is_dir()

    def is_eligible_extension(self, path: Path | str) -> bool:
        return is_eligible_extension(path)

    def is_transpilable(self, path: Path | str) -> bool:
        """Combined gate: not ignored and an eligible source extension."""
        return self.is_eligible_extension(path) and not self.is_ignored(path)
