"""Configuration defaults and filenames."""

from __future__ import annotations

CONFIG_FILENAME: str = "skiff.yaml"

ALLOWED_CONFIG_KEYS: frozenset[str] = frozenset({"transpile", "lint"})
ALLOWED_TRANSPILE_KEYS: frozenset[str] = frozenset(
    {
        "dist_dir",
        "active_repos_file",
        "subdirs",
        "repo_extra_subdirs",
        "repo_extra_files",
        "commonjs_repos",
        "compile_command",
        "commonjs_compile_command",
        "minify_wgsl",
        "poll_interval",
    }
)
ALLOWED_LINT_KEYS: frozenset[str] = frozenset(
    {
        "workers",
        "cache_dir",
        "no_lint_repos",
        "responsible_devs_file",
        "eslint_command",
    }
)

# ``{filename}`` is replaced with the absolute source path.
DEFAULT_COMPILE_COMMAND: tuple[str, ...] = (
    "npx",
    "babel",
    "--presets",
    "@babel/preset-typescript",
    "--source-maps",
    "inline",
    "--filename",
    "{filename}",
)
DEFAULT_COMMONJS_COMPILE_COMMAND: tuple[str, ...] = (
    "npx",
    "babel",
    "--presets",
    "@babel/preset-typescript",
    "--plugins",
    "@babel/plugin-transform-modules-commonjs",
    "--source-maps",
    "inline",
    "--filename",
    "{filename}",
)

DEFAULT_POLL_INTERVAL: float = 0.5
