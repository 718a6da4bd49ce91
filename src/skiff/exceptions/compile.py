"""Compilation-related exceptions."""

from __future__ import annotations

from pathlib import Path

from skiff.exceptions.base import SkiffError


class CompileError(SkiffError):
    """Raised when a source file cannot be transpiled."""

    def __init__(self, source_path: Path, message: str) -> None:
        super().__init__(f"{source_path}: {message}")
        self.source_path = source_path
