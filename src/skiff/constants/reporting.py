"""Constants for stdout formatting."""

from __future__ import annotations

# ANSI escape codes for terminal colouring.
ANSI_RESET: str = "\033[0m"
ANSI_RED: str = "\033[31;1m"
ANSI_YELLOW: str = "\033[33;1m"
ANSI_GREEN: str = "\033[32;1m"
ANSI_DIM: str = "\033[2m"

STATUS_LABEL_PASS: str = "PASS"
STATUS_LABEL_FAIL: str = "FAIL"
