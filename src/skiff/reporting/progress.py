"""Single-line terminal progress bar."""

from __future__ import annotations

import sys
from typing import TextIO

from skiff.constants.lint import PROGRESS_BAR_LENGTH


def render_progress(completed: int, total: int, *, length: int = PROGRESS_BAR_LENGTH) -> str:
    """Render ``\\r[....    ] 12.50%`` for ``completed`` of ``total``."""
    fraction = completed / total if total else 1.0
    filled = int(fraction * length)
    bar = "." * filled + " " * (length - filled)
    return f"\r[{bar}] {fraction * 100:.2f}%"


class ProgressPrinter:
    """Progress callback that redraws the bar in place and ends the line when done."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout

    def __call__(self, completed: int, total: int) -> None:
        self._stream.write(render_progress(completed, total))
        if completed >= total:
            self._stream.write("\n")
        self._stream.flush()
