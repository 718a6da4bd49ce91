"""Cross-module type aliases."""

from __future__ import annotations

from typing import Literal, TypeAlias

OutputMode: TypeAlias = Literal["js", "commonjs"]
ModuleFormat: TypeAlias = Literal["module", "commonjs"]
LintRoute: TypeAlias = Literal["cached", "uncached"]
WatchEventType: TypeAlias = Literal["change", "rename"]
