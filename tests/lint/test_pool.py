"""Tests for the lint worker pool."""

from __future__ import annotations

import asyncio
from collections import Counter

import pytest

from skiff.lint import RepoLintResult, aggregate_results, lint_with_workers


class RecordingUnit:
    """Async lint unit that tracks concurrency and fails selected repositories."""

    def __init__(self, failing: frozenset[str] = frozenset(), raising: frozenset[str] = frozenset()) -> None:
        self.failing = failing
        self.raising = raising
        self.started: list[str] = []
        self.active = 0
        self.max_active = 0

    async def __call__(self, repo: str) -> RepoLintResult:
        self.started.append(repo)
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            await asyncio.sleep(0)
            if repo in self.raising:
                raise RuntimeError(f"spawn failed for {repo}")
            return RepoLintResult(repo=repo, exit_code=1 if repo in self.failing else 0)
        finally:
            self.active -= 1


@pytest.mark.parametrize(
    ("count", "workers"),
    [
        pytest.param(0, 1, id="empty"),
        pytest.param(1, 8, id="fewer-repos-than-workers"),
        pytest.param(5, 2, id="five-repos-two-workers"),
        pytest.param(13, 8, id="default-workers"),
        pytest.param(4, 1, id="single-worker"),
    ],
)
def test_every_repo_linted_exactly_once(count: int, workers: int) -> None:
    repos = [f"r{index}" for index in range(count)]
    unit = RecordingUnit()

    results = asyncio.run(lint_with_workers(repos, unit, worker_count=workers))

    assert Counter(result.repo for result in results) == Counter(repos)
    assert Counter(unit.started) == Counter(repos)
    assert unit.max_active <= max(1, workers)
    assert aggregate_results(results).ok


def test_worker_count_bounds_concurrency() -> None:
    unit = RecordingUnit()

    asyncio.run(lint_with_workers([f"r{index}" for index in range(10)], unit, worker_count=3))

    assert unit.max_active == 3


def test_failures_do_not_short_circuit() -> None:
    unit = RecordingUnit(failing=frozenset({"r1"}), raising=frozenset({"r2"}))

    results = asyncio.run(lint_with_workers(["r1", "r2", "r3", "r4"], unit, worker_count=2))
    summary = aggregate_results(results)

    assert not summary.ok
    assert summary.failed_repos == ("r1", "r2")
    assert len(summary.results) == 4
    raised = next(result for result in summary.results if result.repo == "r2")
    assert raised.exit_code == 1
    assert "spawn failed" in raised.output


def test_progress_reports_every_completion() -> None:
    progress: list[tuple[int, int]] = []

    asyncio.run(
        lint_with_workers(
            ["a", "b", "c"],
            RecordingUnit(),
            worker_count=2,
            on_progress=lambda done, total: progress.append((done, total)),
        )
    )

    assert progress == [(1, 3), (2, 3), (3, 3)]


def test_rejects_non_positive_worker_count() -> None:
    with pytest.raises(ValueError, match="worker_count"):
        asyncio.run(lint_with_workers(["a"], RecordingUnit(), worker_count=0))
