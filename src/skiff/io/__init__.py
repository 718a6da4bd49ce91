"""Shared file I/O helpers."""

from .files import content_digest, modified_time_ms
from .json_io import load_json_file, write_json_atomic, write_text_atomic

__all__ = [
    "content_digest",
    "load_json_file",
    "modified_time_ms",
    "write_json_atomic",
    "write_text_atomic",
]
