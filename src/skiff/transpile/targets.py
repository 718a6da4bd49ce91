"""Deterministic mapping between source files and their compiled outputs."""

from __future__ import annotations

from pathlib import Path

from skiff.constants.discovery import CANDIDATE_SOURCE_EXTENSIONS, OUTPUT_EXTENSION, RENAMED_EXTENSIONS
from skiff.types import OutputMode


def output_root(root: Path, dist_dir: str, mode: OutputMode) -> Path:
    """Return the directory holding all compiled files for ``mode``."""
    return root / dist_dir / mode


def target_path(root: Path, dist_dir: str, source: Path, mode: OutputMode) -> Path:
    """Return the compiled output path for ``source`` in ``mode``.

    The source's subpath below ``root`` is preserved; typed-script, module-script
    and shader suffixes are rewritten to ``.js``. Raises ``ValueError`` for a
    source outside ``root``.
    """
    relative = source.relative_to(root)
    target = output_root(root, dist_dir, mode) / relative
    if target.suffix in RENAMED_EXTENSIONS:
        target = target.with_suffix(OUTPUT_EXTENSION)
    return target


def candidate_sources(root: Path, dist_dir: str, output: Path, mode: OutputMode) -> tuple[Path, ...]:
    """Return every source path that could have produced ``output``."""
    relative = output.relative_to(output_root(root, dist_dir, mode))
    source = root / relative
    if source.suffix != OUTPUT_EXTENSION:
        return (source,)
    return tuple(source.with_suffix(extension) for extension in CANDIDATE_SOURCE_EXTENSIONS)


def output_owner(root: Path, dist_dir: str, output: Path, mode: OutputMode) -> Path | None:
    """Return the source that owns ``output``: its first candidate present on disk.

    ``Foo.js`` and ``Foo.ts`` side by side both map to ``Foo.js``; only the owner
    is compiled so the two never overwrite each other.
    """
    for candidate in candidate_sources(root, dist_dir, output, mode):
        if candidate.is_file():
            return candidate
    return None
