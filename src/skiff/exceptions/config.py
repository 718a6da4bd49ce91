"""Configuration-related exceptions."""

from __future__ import annotations

from skiff.exceptions.base import SkiffError


class ConfigError(SkiffError, ValueError):
    """Raised when build configuration is invalid."""
