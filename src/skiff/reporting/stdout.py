"""Human-readable stdout report for lint runs."""

from __future__ import annotations

from skiff.constants.branding import ASCII_LOGO_LINES, LINT_SUMMARY_TITLE
from skiff.constants.reporting import (
    ANSI_DIM,
    ANSI_GREEN,
    ANSI_RED,
    ANSI_RESET,
    ANSI_YELLOW,
    STATUS_LABEL_FAIL,
    STATUS_LABEL_PASS,
)
from skiff.lint.aggregate import LintSummary
from skiff.lint.units import RepoLintResult


def _colorize(text: str, color: str) -> str:
    return f"{color}{text}{ANSI_RESET}"


class LintReporter:
    """Formats a lint summary as a per-repository report."""

    def __init__(self, summary: LintSummary, *, color: bool = True, verbose: bool = False) -> None:
        self._summary = summary
        self._color = color
        self._verbose = verbose

    def render(self) -> str:
        sections = [self._render_header(), *self._render_failures()]
        return "\n".join(section for section in sections if section)

    def _render_header(self) -> str:
        summary = self._summary
        sep = "  " + "─" * 38
        failed = len(summary.failed_repos)
        errors = sum(result.error_count for result in summary.results)
        warnings = sum(result.warning_count for result in summary.results)

        lines = [
            "",
            f"  {ASCII_LOGO_LINES[0]}",
            f"  {LINT_SUMMARY_TITLE}",
            sep,
            "",
            f"  Repos       {len(summary.results)} linted / {failed} failing",
            f"  Problems    {self._paint(str(errors), ANSI_RED if errors else ANSI_GREEN)} errors · "
            f"{self._paint(str(warnings), ANSI_YELLOW if warnings else ANSI_GREEN)} warnings",
            f"  Verdict     {self._verdict()}",
        ]
        if self._verbose:
            for result in summary.results:
                lines.append(f"    {result.repo:<30} {self._status(result)}  {result.route or '-'}")
        lines.append("")
        return "\n".join(lines)

    def _render_failures(self) -> list[str]:
        sections: list[str] = []
        for result in self._summary.results:
            if result.ok:
                continue
            lines = [f"  [{result.repo}]  {self._status(result)}  exit={result.exit_code}"]
            for file_result in result.files:
                if not file_result.problem_count:
                    continue
                lines.append(
                    f"    {file_result.file_path}  "
                    f"{file_result.error_count} errors, {file_result.warning_count} warnings"
                )
                lines.extend(f"      {self._paint(message, ANSI_DIM)}" for message in file_result.messages)
            if result.output:
                lines.extend(f"    {line}" for line in result.output.splitlines())
            lines.append("")
            sections.append("\n".join(lines))
        return sections

    def _verdict(self) -> str:
        if self._summary.ok:
            return self._paint(STATUS_LABEL_PASS, ANSI_GREEN)
        return self._paint(STATUS_LABEL_FAIL, ANSI_RED)

    def _status(self, result: RepoLintResult) -> str:
        if result.ok:
            return self._paint(STATUS_LABEL_PASS, ANSI_GREEN)
        return self._paint(STATUS_LABEL_FAIL, ANSI_RED)

    def _paint(self, text: str, color: str) -> str:
        return _colorize(text, color) if self._color else text
