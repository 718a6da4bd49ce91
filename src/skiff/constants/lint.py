"""Constants for lint routing, worker dispatch and reporting."""

from __future__ import annotations

DEFAULT_LINT_WORKERS: int = 8
DEFAULT_LINT_CACHE_DIR: str = "chipper/eslint/cache"
LINT_CACHE_SUFFIX: str = ".eslintcache"
DEFAULT_RESPONSIBLE_DEVS_FILE: str = "phet-info/sim-info/responsible_dev.json"

# Repositories with nothing to lint.
DEFAULT_NO_LINT_REPOS: tuple[str, ...] = (
    "babel",
    "eliot",
    "phet-android-app",
    "phet-info",
    "phet-io-wrapper-arithmetic",
    "phet-io-wrapper-hookes-law-energy",
    "phet-ios-app",
    "sherpa",
    "smithers",
    "tasks",
)

CHIP_AWAY_SKIPPED_REPOS: frozenset[str] = frozenset({"perennial-alias"})

DEFAULT_ESLINT_COMMAND: tuple[str, ...] = ("npx", "eslint")
ESLINT_JSON_FORMAT_ARGS: tuple[str, ...] = ("--format", "json")
ESLINT_COMMON_ARGS: tuple[str, ...] = ("--no-error-on-unmatched-pattern",)

ROUTE_CACHED: str = "cached"
ROUTE_UNCACHED: str = "uncached"

EXIT_OK: int = 0
EXIT_FAILED: int = 1

PROGRESS_BAR_LENGTH: int = 40
