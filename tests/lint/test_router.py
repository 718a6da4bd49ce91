"""Tests for lint cache routing and the two lint units."""

from __future__ import annotations

import asyncio
import sys
import threading
import time
from collections.abc import Sequence
from pathlib import Path

import pytest

from skiff.config import LintConfig, LintOptions
from skiff.exceptions import LintInvocationError
from skiff.lint import (
    InProcessLintUnit,
    LintCacheRouter,
    LintFileResult,
    RepoLintResult,
    SpawnedLintUnit,
    aggregate_results,
    lint_with_workers,
)

CACHE_DIR = "chipper/eslint/cache"


class FakeUnit:
    def __init__(self, route: str) -> None:
        self.route = route
        self.repos: list[str] = []

    async def run(self, repo: str) -> RepoLintResult:
        self.repos.append(repo)
        await asyncio.sleep(0)
        return RepoLintResult(repo=repo, exit_code=0, route=self.route)  # type: ignore[arg-type]


class SlowEngine:
    """Engine double that records how many calls overlap."""

    def __init__(self, errors: int = 0, fail: bool = False) -> None:
        self._errors = errors
        self._fail = fail
        self._guard = threading.Lock()
        self.active = 0
        self.max_active = 0
        self.calls: list[tuple[tuple[Path, ...], bool, Path | None]] = []

    def lint_files(self, paths: Sequence[Path], *, fix: bool, cache_location: Path | None) -> list[LintFileResult]:
        with self._guard:
            self.active += 1
            self.max_active = max(self.max_active, self.active)
            self.calls.append((tuple(paths), fix, cache_location))
        try:
            time.sleep(0.01)
            if self._fail:
                raise LintInvocationError("No ESLint configuration found")
            return [LintFileResult(file_path=str(paths[0] / "a.ts"), error_count=self._errors, warning_count=1)]
        finally:
            with self._guard:
                self.active -= 1


def _seed_cache(root: Path, repo: str) -> Path:
    path = root / CACHE_DIR / f"{repo}.eslintcache"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("{}", encoding="utf-8")
    return path


def _router(root: Path, options: LintOptions) -> tuple[LintCacheRouter, FakeUnit, FakeUnit]:
    in_process = FakeUnit("cached")
    spawned = FakeUnit("uncached")
    router = LintCacheRouter(
        root=root,
        config=LintConfig(cache_dir=CACHE_DIR),
        options=options,
        in_process=in_process,
        spawned=spawned,
    )
    return router, in_process, spawned


def test_routes_by_existing_cache_file_with_two_workers(tmp_path: Path) -> None:
    _seed_cache(tmp_path, "r1")
    _seed_cache(tmp_path, "r3")
    router, in_process, spawned = _router(tmp_path, LintOptions())
    repos = ["r1", "r2", "r3", "r4", "r5"]

    results = asyncio.run(lint_with_workers(repos, router.run, worker_count=2))

    assert sorted(in_process.repos) == ["r1", "r3"]
    assert sorted(spawned.repos) == ["r2", "r4", "r5"]
    summary = aggregate_results(results)
    assert [result.repo for result in summary.results] == repos
    assert summary.ok


def test_cache_disabled_routes_everything_to_spawned(tmp_path: Path) -> None:
    cache = _seed_cache(tmp_path, "r1")
    router, in_process, spawned = _router(tmp_path, LintOptions(cache=False))

    router.discard_caches(["r1", "r2"])
    asyncio.run(router.run("r1"))

    assert not cache.exists()
    assert in_process.repos == []
    assert spawned.repos == ["r1"]


def test_cache_path_for(tmp_path: Path) -> None:
    router, _, _ = _router(tmp_path, LintOptions())

    assert router.cache_path_for("scenery") == tmp_path / "chipper/eslint/cache/scenery.eslintcache"
    assert router.route_for("scenery") == "uncached"


def test_in_process_calls_never_overlap(tmp_path: Path) -> None:
    engine = SlowEngine()
    unit = InProcessLintUnit(engine, root=tmp_path, cache_location=lambda repo: tmp_path / f"{repo}.cache", fix=True)

    async def run_all() -> list[RepoLintResult]:
        return list(await asyncio.gather(*(unit.run(repo) for repo in ("a", "b", "c", "d"))))

    results = asyncio.run(run_all())

    assert engine.max_active == 1
    assert all(result.ok and result.route == "cached" for result in results)
    assert engine.calls[0] == ((tmp_path / "a",), True, tmp_path / "a.cache")


def test_in_process_errors_fail_the_repo(tmp_path: Path) -> None:
    unit = InProcessLintUnit(SlowEngine(errors=2), root=tmp_path, cache_location=lambda repo: tmp_path, fix=False)

    result = asyncio.run(unit.run("foo"))

    assert result.exit_code == 1
    assert result.error_count == 2
    assert result.warning_count == 1


def test_in_process_engine_exception_is_contained_by_pool(tmp_path: Path) -> None:
    unit = InProcessLintUnit(SlowEngine(fail=True), root=tmp_path, cache_location=lambda repo: tmp_path, fix=False)

    results = asyncio.run(lint_with_workers(["foo", "bar"], unit.run, worker_count=2))

    assert [result.exit_code for result in results] == [1, 1]
    assert all("No ESLint configuration" in result.output for result in results)


def _fake_eslint(tmp_path: Path, *, exit_code: int, stdout: str) -> tuple[str, ...]:
    script = tmp_path / "fake_eslint.py"
    script.write_text(f"import sys\nsys.stdout.write({stdout!r})\nsys.exit({exit_code})\n", encoding="utf-8")
    return (sys.executable, str(script))


@pytest.mark.parametrize(
    ("exit_code", "stdout", "expected_errors"),
    [
        pytest.param(0, "[]", 0, id="clean"),
        pytest.param(
            1,
            '[{"filePath": "a.ts", "errorCount": 3, "warningCount": 0, "messages": []}]',
            3,
            id="lint-errors",
        ),
    ],
)
def test_spawned_unit_reports_process_exit(
    tmp_path: Path,
    exit_code: int,
    stdout: str,
    expected_errors: int,
) -> None:
    command = _fake_eslint(tmp_path, exit_code=exit_code, stdout=stdout)
    unit = SpawnedLintUnit(command, root=tmp_path, cache_location=lambda repo: tmp_path / "c", fix=False)

    result = asyncio.run(unit.run("foo"))

    assert result.exit_code == exit_code
    assert result.route == "uncached"
    assert result.error_count == expected_errors


def test_spawned_unit_keeps_unparseable_output(tmp_path: Path) -> None:
    command = _fake_eslint(tmp_path, exit_code=2, stdout="Oops! Something went wrong!")
    unit = SpawnedLintUnit(command, root=tmp_path, cache_location=lambda repo: tmp_path / "c", fix=False)

    result = asyncio.run(unit.run("foo"))

    assert result.exit_code == 2
    assert result.files == ()
    assert "Something went wrong" in result.output
