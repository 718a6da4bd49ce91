"""Parallel, cache-routed linting of workspace repositories."""

from __future__ import annotations

from .aggregate import LintSummary, aggregate_results, chip_away_report, load_responsible_devs
from .engine import EslintEngine, LintEngine, LintFileResult, parse_eslint_json
from .pool import lint_with_workers
from .router import LintCacheRouter
from .runner import filter_lintable_repos, lint_repos, lint_repos_async
from .units import InProcessLintUnit, LintUnit, RepoLintResult, SpawnedLintUnit

__all__ = [
    "EslintEngine",
    "InProcessLintUnit",
    "LintCacheRouter",
    "LintEngine",
    "LintFileResult",
    "LintSummary",
    "LintUnit",
    "RepoLintResult",
    "SpawnedLintUnit",
    "aggregate_results",
    "chip_away_report",
    "filter_lintable_repos",
    "lint_repos",
    "lint_repos_async",
    "lint_with_workers",
    "load_responsible_devs",
]
