"""Pull-based worker pool draining a shared repository queue."""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from collections.abc import Awaitable, Callable, Iterable
from typing import TypeAlias

from skiff.constants.lint import EXIT_FAILED
from skiff.lint.units import RepoLintResult

logger = logging.getLogger(__name__)

RunUnit: TypeAlias = Callable[[str], Awaitable[RepoLintResult]]
ProgressCallback: TypeAlias = Callable[[int, int], None]


async def lint_with_workers(
    repos: Iterable[str],
    run_unit: RunUnit,
    *,
    worker_count: int,
    on_progress: ProgressCallback | None = None,
) -> list[RepoLintResult]:
    """Lint every repository exactly once with ``worker_count`` concurrent workers.

    Results come back in completion order. A unit that raises is recorded as a
    failing result for that repository only; sibling workers keep going.
    """
    if worker_count < 1:
        raise ValueError(f"worker_count must be at least 1, got {worker_count}")

    queue = deque(repos)
    total = len(queue)
    results: list[RepoLintResult] = []

    async def worker() -> None:
        while queue:
            # popleft runs before the next await, so no other worker sees this repo.
            repo = queue.popleft()
            results.append(await _run_contained(run_unit, repo))
            if on_progress is not None:
                on_progress(len(results), total)

    await asyncio.gather(*(worker() for _ in range(min(worker_count, total))))
    return results


async def _run_contained(run_unit: RunUnit, repo: str) -> RepoLintResult:
    try:
        return await run_unit(repo)
    except Exception as exc:
        logger.error("Linting %s failed: %s", repo, exc)
        return RepoLintResult(repo=repo, exit_code=EXIT_FAILED, output=str(exc))
