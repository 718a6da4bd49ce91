"""Lint invocation exceptions."""

from __future__ import annotations

from skiff.exceptions.base import SkiffError


class LintInvocationError(SkiffError):
    """Raised when the lint engine cannot be invoked or its output cannot be read."""
