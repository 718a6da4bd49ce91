"""Routes each repository to in-process or spawned linting based on its cache file."""

from __future__ import annotations

import logging
from contextlib import suppress
from pathlib import Path

from skiff.config.model import LintConfig, LintOptions
from skiff.constants.lint import LINT_CACHE_SUFFIX, ROUTE_CACHED, ROUTE_UNCACHED
from skiff.lint.engine import EslintEngine, LintEngine
from skiff.lint.units import InProcessLintUnit, LintUnit, RepoLintResult, SpawnedLintUnit
from skiff.types import LintRoute

logger = logging.getLogger(__name__)


class LintCacheRouter:
    """Sends repositories with a persisted lint cache to the in-process unit, others to a child process."""

    def __init__(
        self,
        *,
        root: Path,
        config: LintConfig,
        options: LintOptions,
        engine: LintEngine | None = None,
        in_process: LintUnit | None = None,
        spawned: LintUnit | None = None,
    ) -> None:
        self._root = root
        self._config = config
        self._options = options
        self._in_process = in_process or InProcessLintUnit(
            engine or EslintEngine(config.eslint_command, cwd=root),
            root=root,
            cache_location=self.cache_path_for,
            fix=options.fix,
        )
        self._spawned = spawned or SpawnedLintUnit(
            config.eslint_command,
            root=root,
            cache_location=self.cache_path_for,
            fix=options.fix,
        )

    def cache_path_for(self, repo: str) -> Path:
        return self._root / self._config.cache_dir / f"{repo}{LINT_CACHE_SUFFIX}"

    def route_for(self, repo: str) -> LintRoute:
        if self._options.cache and self.cache_path_for(repo).is_file():
            return ROUTE_CACHED
        return ROUTE_UNCACHED

    def discard_caches(self, repos: list[str]) -> None:
        """Delete persisted caches so this run rebuilds them from scratch."""
        for repo in repos:
            with suppress(FileNotFoundError):
                self.cache_path_for(repo).unlink()
                logger.debug("Discarded lint cache for %s", repo)

    async def run(self, repo: str) -> RepoLintResult:
        route = self.route_for(repo)
        logger.debug("Linting %s (%s)", repo, route)
        unit = self._in_process if route == ROUTE_CACHED else self._spawned
        return await unit.run(repo)
