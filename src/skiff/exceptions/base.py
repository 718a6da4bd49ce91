"""Base exception for Skiff."""

from __future__ import annotations


class SkiffError(Exception):
    """Root of all Skiff-specific errors."""
