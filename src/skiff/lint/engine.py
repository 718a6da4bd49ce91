"""ESLint engine collaborator and its JSON result parsing."""

from __future__ import annotations

import json
import logging
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from skiff.constants.lint import ESLINT_COMMON_ARGS, ESLINT_JSON_FORMAT_ARGS
from skiff.exceptions import LintInvocationError

logger = logging.getLogger(__name__)

# ESLint exits 2 for configuration errors and crashes, 1 for lint problems.
ESLINT_FATAL_EXIT_CODE = 2


@dataclass(frozen=True)
class LintFileResult:
    """Problem counts ESLint reported for a single file."""

    file_path: str
    error_count: int
    warning_count: int
    messages: tuple[str, ...] = ()

    @property
    def problem_count(self) -> int:
        return self.error_count + self.warning_count


class LintEngine(Protocol):
    """Lints paths and returns one result per file; raises on fatal configuration errors."""

    def lint_files(self, paths: Sequence[Path], *, fix: bool, cache_location: Path | None) -> list[LintFileResult]: ...


def build_eslint_args(
    command: Sequence[str],
    paths: Sequence[Path],
    *,
    fix: bool,
    cache_location: Path | None,
) -> list[str]:
    args = [*command, *ESLINT_JSON_FORMAT_ARGS, *ESLINT_COMMON_ARGS]
    if cache_location is not None:
        args.extend(["--cache", "--cache-location", str(cache_location)])
    if fix:
        args.append("--fix")
    args.extend(str(path) for path in paths)
    return args


def parse_eslint_json(text: str) -> list[LintFileResult]:
    """Parse ``eslint --format json`` output."""
    if not text.strip():
        return []
    try:
        payload = json.loads(text)
    except ValueError as exc:
        raise LintInvocationError(f"Unreadable ESLint output: {exc}") from exc
    if not isinstance(payload, list):
        raise LintInvocationError("ESLint JSON output must be a list of file results")

    results: list[LintFileResult] = []
    for item in payload:
        if not isinstance(item, dict):
            continue
        file_path = item.get("filePath")
        error_count = item.get("errorCount", 0)
        warning_count = item.get("warningCount", 0)
        if not isinstance(file_path, str) or not isinstance(error_count, int) or not isinstance(warning_count, int):
            continue
        results.append(
            LintFileResult(
                file_path=file_path,
                error_count=error_count,
                warning_count=warning_count,
                messages=_format_messages(item.get("messages")),
            )
        )
    return results


def _format_messages(raw: object) -> tuple[str, ...]:
    if not isinstance(raw, list):
        return ()
    formatted: list[str] = []
    for message in raw:
        if not isinstance(message, dict):
            continue
        line = message.get("line", 0)
        column = message.get("column", 0)
        text = message.get("message", "")
        rule = message.get("ruleId") or ""
        formatted.append(f"{line}:{column} {text} {rule}".rstrip())
    return tuple(formatted)


class EslintEngine:
    """Long-lived handle that runs the ESLint CLI synchronously and parses its JSON report."""

    def __init__(self, command: Sequence[str], *, cwd: Path) -> None:
        self._command = tuple(command)
        self._cwd = cwd

    def lint_files(self, paths: Sequence[Path], *, fix: bool, cache_location: Path | None) -> list[LintFileResult]:
        args = build_eslint_args(self._command, paths, fix=fix, cache_location=cache_location)
        logger.debug("Running %s", " ".join(args))
        try:
            completed = subprocess.run(args, capture_output=True, text=True, cwd=self._cwd, check=False)
        except OSError as exc:
            raise LintInvocationError(f"Could not run {args[0]}: {exc}") from exc

        if completed.returncode >= ESLINT_FATAL_EXIT_CODE:
            raise LintInvocationError(completed.stderr.strip() or f"ESLint exited with {completed.returncode}")
        return parse_eslint_json(completed.stdout)
