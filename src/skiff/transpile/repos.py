"""Repository list and per-repository layout tables."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from skiff.config.model import TranspileConfig
from skiff.constants.discovery import BRAND_REPO, DEFAULT_MODE
from skiff.types import OutputMode


def read_active_repos(path: Path) -> tuple[str, ...]:
    """Read repository names, one per line, dropping blanks and duplicates."""
    names: list[str] = []
    for line in path.read_text(encoding="utf-8").splitlines():
        name = line.strip()
        if name and name not in names:
            names.append(name)
    return tuple(names)


@dataclass(frozen=True)
class RepoLayout:
    """Which subdirectories, extra files and output modes belong to each repository."""

    subdirs: tuple[str, ...]
    extra_subdirs: dict[str, tuple[str, ...]] = field(default_factory=dict)
    extra_files: dict[str, tuple[str, ...]] = field(default_factory=dict)
    commonjs_repos: tuple[str, ...] = ()

    @classmethod
    def from_config(cls, config: TranspileConfig, *, brands: tuple[str, ...] = ()) -> RepoLayout:
        extra_subdirs = dict(config.repo_extra_subdirs)
        if brands:
            existing = extra_subdirs.get(BRAND_REPO, ())
            extra_subdirs[BRAND_REPO] = existing + tuple(brand for brand in brands if brand not in existing)
        return cls(
            subdirs=config.subdirs,
            extra_subdirs=extra_subdirs,
            extra_files=dict(config.repo_extra_files),
            commonjs_repos=config.commonjs_repos,
        )

    def subdirs_for(self, repo: str) -> tuple[str, ...]:
        return self.subdirs + self.extra_subdirs.get(repo, ())

    def extra_files_for(self, repo: str) -> tuple[str, ...]:
        return self.extra_files.get(repo, ())

    def modes_for(self, repo: str) -> tuple[OutputMode, ...]:
        if repo in self.commonjs_repos:
            return (DEFAULT_MODE, "commonjs")
        return (DEFAULT_MODE,)

    def is_watched(self, relative_path: str) -> bool:
        """Return True when ``<repo>/<subdir>/...`` falls in a transpiled location of its repository."""
        segments = relative_path.split("/")
        if len(segments) < 2:
            return False
        repo, rest = segments[0], "/".join(segments[1:])
        return segments[1] in self.subdirs_for(repo) or rest in self.extra_files_for(repo)

