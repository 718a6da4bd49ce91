"""Merge per-repository lint results into an overall verdict."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path

from skiff.constants.lint import CHIP_AWAY_SKIPPED_REPOS
from skiff.io import load_json_file
from skiff.lint.units import RepoLintResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LintSummary:
    ok: bool
    results: tuple[RepoLintResult, ...]

    @property
    def failed_repos(self) -> tuple[str, ...]:
        return tuple(result.repo for result in self.results if not result.ok)


def aggregate_results(results: Iterable[RepoLintResult]) -> LintSummary:
    """Sort results by repository name; ``ok`` only when every exit code is zero."""
    ordered = tuple(sorted(results, key=lambda result: result.repo))
    return LintSummary(ok=all(result.ok for result in ordered), results=ordered)


def load_responsible_devs(path: Path) -> dict[str, str]:
    """Map repository name to its responsible developers; unreadable files yield ``{}``."""
    try:
        payload = load_json_file(path)
    except (OSError, ValueError) as exc:
        logger.debug("No responsible devs from %s: %s", path, exc)
        return {}
    if not isinstance(payload, dict):
        return {}

    devs: dict[str, str] = {}
    for repo, entry in payload.items():
        names = entry.get("responsibleDevs") if isinstance(entry, dict) else entry
        if isinstance(names, str):
            devs[str(repo)] = names
        elif isinstance(names, list):
            devs[str(repo)] = ", ".join(str(name) for name in names)
    return devs


def chip_away_report(results: Iterable[RepoLintResult], responsible_devs: Mapping[str, str]) -> str:
    """Markdown checklist of repositories with problems (errors or warnings), for splitting cleanup work."""
    lines: list[str] = []
    for result in sorted(results, key=lambda item: item.repo):
        if result.repo in CHIP_AWAY_SKIPPED_REPOS:
            continue
        problem_files = [item for item in result.files if item.problem_count > 0]
        if not problem_files:
            continue
        devs = responsible_devs.get(result.repo, "")
        problems = sum(item.problem_count for item in problem_files)
        lines.append(f" - [ ] {result.repo}: {devs} {problems} errors in {len(problem_files)} files.")
    return "\n".join(lines)
