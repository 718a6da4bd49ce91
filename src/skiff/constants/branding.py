"""Branding constants for terminal output."""

from __future__ import annotations

BRAND_NAME: str = "SKIFF"
ASCII_LOGO_LINES: tuple[str, ...] = (
    ">_ SKIFF",
    "     // incremental transpile + lint for multi-repo workspaces",
)
LINT_SUMMARY_TITLE: str = "Lint summary"
CLI_DESCRIPTION: str = "\n".join((*ASCII_LOGO_LINES, "", f"{BRAND_NAME} build tooling"))
