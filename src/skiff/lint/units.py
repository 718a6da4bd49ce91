"""Lint units: the two ways one repository can be linted."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from skiff.constants.lint import EXIT_FAILED, EXIT_OK, ROUTE_CACHED, ROUTE_UNCACHED
from skiff.exceptions import LintInvocationError
from skiff.lint.engine import LintEngine, LintFileResult, build_eslint_args, parse_eslint_json
from skiff.types import LintRoute

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RepoLintResult:
    """Exit status and per-file counts for one repository."""

    repo: str
    exit_code: int
    route: LintRoute | None = None
    files: tuple[LintFileResult, ...] = ()
    output: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == EXIT_OK

    @property
    def error_count(self) -> int:
        return sum(result.error_count for result in self.files)

    @property
    def warning_count(self) -> int:
        return sum(result.warning_count for result in self.files)


class LintUnit(Protocol):
    async def run(self, repo: str) -> RepoLintResult: ...


class InProcessLintUnit:
    """Lints through a shared engine; calls are serialized so they never interleave."""

    def __init__(
        self,
        engine: LintEngine,
        *,
        root: Path,
        cache_location: Callable[[str], Path],
        fix: bool,
    ) -> None:
        self._engine = engine
        self._root = root
        self._cache_location = cache_location
        self._fix = fix
        self._lock = asyncio.Lock()

    async def run(self, repo: str) -> RepoLintResult:
        async with self._lock:
            files = await asyncio.to_thread(
                self._engine.lint_files,
                [self._root / repo],
                fix=self._fix,
                cache_location=self._cache_location(repo),
            )
        exit_code = EXIT_FAILED if any(result.error_count for result in files) else EXIT_OK
        return RepoLintResult(repo=repo, exit_code=exit_code, route=ROUTE_CACHED, files=tuple(files))


class SpawnedLintUnit:
    """Lints in a child process so a cold cache build stays out of this process."""

    def __init__(
        self,
        command: Sequence[str],
        *,
        root: Path,
        cache_location: Callable[[str], Path],
        fix: bool,
    ) -> None:
        self._command = tuple(command)
        self._root = root
        self._cache_location = cache_location
        self._fix = fix

    async def run(self, repo: str) -> RepoLintResult:
        args = build_eslint_args(
            self._command,
            [self._root / repo],
            fix=self._fix,
            cache_location=self._cache_location(repo),
        )
        logger.debug("Spawning %s", " ".join(args))
        process = await asyncio.create_subprocess_exec(
            *args,
            cwd=self._root,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout, stderr = await process.communicate()
        stdout_text = stdout.decode("utf-8", errors="replace")
        stderr_text = stderr.decode("utf-8", errors="replace").strip()

        try:
            files = tuple(parse_eslint_json(stdout_text))
            output = stderr_text
        except LintInvocationError:
            files = ()
            output = "\n".join(part for part in (stdout_text.strip(), stderr_text) if part)

        exit_code = process.returncode if process.returncode is not None else EXIT_FAILED
        return RepoLintResult(repo=repo, exit_code=exit_code, route=ROUTE_UNCACHED, files=files, output=output)
