"""Configuration loading and runtime options for Skiff."""

from __future__ import annotations

from .loader import load_config
from .model import LintConfig, LintOptions, SkiffConfig, TranspileConfig, TranspileOptions

__all__ = [
    "LintConfig",
    "LintOptions",
    "SkiffConfig",
    "TranspileConfig",
    "TranspileOptions",
    "load_config",
]
