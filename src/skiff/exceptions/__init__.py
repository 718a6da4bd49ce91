"""Shared exception hierarchy for Skiff."""

from __future__ import annotations

from .base import SkiffError
from .compile import CompileError
from .config import ConfigError
from .lint import LintInvocationError

__all__ = ["CompileError", "ConfigError", "LintInvocationError", "SkiffError"]
