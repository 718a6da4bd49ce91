"""Lint entry point: filter repositories, route and pool them, aggregate the outcome."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from pathlib import Path

from skiff.config.model import LintConfig, LintOptions
from skiff.lint.aggregate import LintSummary, aggregate_results
from skiff.lint.pool import ProgressCallback, lint_with_workers
from skiff.lint.router import LintCacheRouter

logger = logging.getLogger(__name__)


def filter_lintable_repos(repos: Iterable[str], *, root: Path, config: LintConfig) -> list[str]:
    """Drop duplicates, no-lint repositories and repositories that are not checked out."""
    skipped = set(config.no_lint_repos)
    lintable: list[str] = []
    for repo in dict.fromkeys(repos):
        if repo in skipped:
            logger.debug("Skipping %s (nothing to lint)", repo)
            continue
        if not (root / repo).is_dir():
            logger.debug("Skipping %s (not checked out)", repo)
            continue
        lintable.append(repo)
    return lintable


async def lint_repos_async(
    repos: Iterable[str],
    *,
    root: Path,
    config: LintConfig,
    options: LintOptions,
    router: LintCacheRouter | None = None,
    on_progress: ProgressCallback | None = None,
) -> LintSummary:
    lintable = filter_lintable_repos(repos, root=root, config=config)
    router = router or LintCacheRouter(root=root, config=config, options=options)
    if not options.cache:
        router.discard_caches(lintable)

    workers = options.workers if options.workers is not None else config.workers
    logger.debug("Linting %d repositories with %d workers", len(lintable), workers)
    results = await lint_with_workers(lintable, router.run, worker_count=workers, on_progress=on_progress)
    return aggregate_results(results)


def lint_repos(
    repos: Iterable[str],
    *,
    root: Path,
    config: LintConfig,
    options: LintOptions,
    router: LintCacheRouter | None = None,
    on_progress: ProgressCallback | None = None,
) -> LintSummary:
    return asyncio.run(
        lint_repos_async(
            repos,
            root=root,
            config=config,
            options=options,
            router=router,
            on_progress=on_progress,
        )
    )
