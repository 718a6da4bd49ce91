"""Shared type aliases for Skiff."""

from .cache import CacheLayerPayload, StatusEntry, StatusPayload
from .common import LintRoute, ModuleFormat, OutputMode, WatchEventType

__all__ = [
    "CacheLayerPayload",
    "LintRoute",
    "ModuleFormat",
    "OutputMode",
    "StatusEntry",
    "StatusPayload",
    "WatchEventType",
]
