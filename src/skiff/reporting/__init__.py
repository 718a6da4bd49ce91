"""Terminal reporting for Skiff runs."""

from __future__ import annotations

from .progress import ProgressPrinter, render_progress
from .stdout import LintReporter

__all__ = ["LintReporter", "ProgressPrinter", "render_progress"]
