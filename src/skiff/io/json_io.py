"""JSON and text persistence with atomic temp-file-then-rename writes."""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Callable
from contextlib import suppress
from pathlib import Path
from typing import TextIO


def load_json_file(path: Path) -> object:
    """Load and parse JSON from disk."""
    return json.loads(path.read_text(encoding="utf-8"))


def write_json_atomic(
    *,
    path: Path,
    payload: object,
    temp_prefix: str,
    temp_suffix: str,
) -> None:
    """Persist JSON with two-space indentation and a trailing newline."""

    def _dump(handle: TextIO) -> None:
        json.dump(payload, handle, indent=2, sort_keys=True)
        handle.write("\n")

    _replace_atomic(path, _dump, temp_prefix=temp_prefix, temp_suffix=temp_suffix)


def write_text_atomic(
    *,
    path: Path,
    content: str,
    temp_prefix: str,
    temp_suffix: str,
) -> None:
    """Persist text so readers never observe a half-written file."""
    _replace_atomic(path, lambda handle: handle.write(content), temp_prefix=temp_prefix, temp_suffix=temp_suffix)


def _replace_atomic(
    path: Path,
    write: Callable[[TextIO], object],
    *,
    temp_prefix: str,
    temp_suffix: str,
) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)

    temp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            newline="",
            dir=path.parent,
            prefix=temp_prefix,
            suffix=temp_suffix,
            delete=False,
        ) as handle:
            temp_name = handle.name
            write(handle)
        os.replace(temp_name, path)
    except BaseException:
        if temp_name:
            with suppress(FileNotFoundError):
                Path(temp_name).unlink()
        raise
