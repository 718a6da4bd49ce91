"""Config loading and normalization for ``skiff.yaml``."""

from __future__ import annotations

import difflib
import logging
from pathlib import Path
from typing import Any

import yaml

from skiff.config.model import LintConfig, SkiffConfig, TranspileConfig
from skiff.constants.config import (
    ALLOWED_CONFIG_KEYS,
    ALLOWED_LINT_KEYS,
    ALLOWED_TRANSPILE_KEYS,
    CONFIG_FILENAME,
)
from skiff.exceptions import ConfigError

logger = logging.getLogger(__name__)


def load_config(root: Path, config_path: Path | None = None) -> SkiffConfig:
    """Load and validate workspace config from ``skiff.yaml`` or an explicit path."""
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        return SkiffConfig()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a YAML mapping")

    _reject_unknown_keys(raw, ALLOWED_CONFIG_KEYS, section="")
    transpile_raw = _ensure_mapping(raw.get("transpile"), "transpile")
    lint_raw = _ensure_mapping(raw.get("lint"), "lint")
    _reject_unknown_keys(transpile_raw, ALLOWED_TRANSPILE_KEYS, section="transpile")
    _reject_unknown_keys(lint_raw, ALLOWED_LINT_KEYS, section="lint")

    logger.debug("Loaded config from %s", path)
    return SkiffConfig(
        transpile=_build_transpile_config(transpile_raw),
        lint=_build_lint_config(lint_raw),
    )


def _build_transpile_config(raw: dict[str, Any]) -> TranspileConfig:
    defaults = TranspileConfig()

    minify_wgsl = raw.get("minify_wgsl", defaults.minify_wgsl)
    if not isinstance(minify_wgsl, bool):
        raise ConfigError("transpile.minify_wgsl must be a boolean")

    poll_interval = raw.get("poll_interval", defaults.poll_interval)
    if isinstance(poll_interval, bool) or not isinstance(poll_interval, (int, float)) or poll_interval <= 0:
        raise ConfigError("transpile.poll_interval must be a positive number")

    extra_subdirs = dict(defaults.repo_extra_subdirs)
    extra_subdirs.update(_ensure_repo_table(raw.get("repo_extra_subdirs"), "transpile.repo_extra_subdirs"))
    extra_files = dict(defaults.repo_extra_files)
    extra_files.update(_ensure_repo_table(raw.get("repo_extra_files"), "transpile.repo_extra_files"))

    return TranspileConfig(
        dist_dir=_ensure_relative_path(raw.get("dist_dir", defaults.dist_dir), "transpile.dist_dir"),
        active_repos_file=_ensure_relative_path(
            raw.get("active_repos_file", defaults.active_repos_file),
            "transpile.active_repos_file",
        ),
        subdirs=tuple(_ensure_string_list(raw.get("subdirs", list(defaults.subdirs)), "transpile.subdirs")),
        repo_extra_subdirs=extra_subdirs,
        repo_extra_files=extra_files,
        commonjs_repos=tuple(
            _ensure_string_list(raw.get("commonjs_repos", list(defaults.commonjs_repos)), "transpile.commonjs_repos")
        ),
        compile_command=_ensure_command(
            raw.get("compile_command", list(defaults.compile_command)),
            "transpile.compile_command",
        ),
        commonjs_compile_command=_ensure_command(
            raw.get("commonjs_compile_command", list(defaults.commonjs_compile_command)),
            "transpile.commonjs_compile_command",
        ),
        minify_wgsl=minify_wgsl,
        poll_interval=float(poll_interval),
    )


def _build_lint_config(raw: dict[str, Any]) -> LintConfig:
    defaults = LintConfig()

    workers = raw.get("workers", defaults.workers)
    if isinstance(workers, bool) or not isinstance(workers, int) or workers <= 0:
        raise ConfigError("lint.workers must be a positive integer")

    return LintConfig(
        workers=workers,
        cache_dir=_ensure_relative_path(raw.get("cache_dir", defaults.cache_dir), "lint.cache_dir"),
        no_lint_repos=tuple(
            _ensure_string_list(raw.get("no_lint_repos", list(defaults.no_lint_repos)), "lint.no_lint_repos")
        ),
        responsible_devs_file=_ensure_relative_path(
            raw.get("responsible_devs_file", defaults.responsible_devs_file),
            "lint.responsible_devs_file",
        ),
        eslint_command=_ensure_command(raw.get("eslint_command", list(defaults.eslint_command)), "lint.eslint_command"),
    )


def _reject_unknown_keys(raw: dict[str, Any], allowed: frozenset[str], *, section: str) -> None:
    for key in raw:
        if key in allowed:
            continue
        qualified = f"{section}.{key}" if section else str(key)
        suggestion = difflib.get_close_matches(str(key), sorted(allowed), n=1)
        hint = f" (did you mean '{suggestion[0]}'?)" if suggestion else ""
        raise ConfigError(f"Unknown config key '{qualified}'{hint}")


def _ensure_mapping(value: Any, key_name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{key_name} must be a mapping")
    return value


def _ensure_string_list(value: Any, key_name: str) -> list[str]:
    """Coerce a value to a list of strings, raising ConfigError on type mismatch."""
    if value is None:
        return []
    if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{key_name} must be a list of strings")
    return [item.strip() for item in value if item.strip()]


def _ensure_command(value: Any, key_name: str) -> tuple[str, ...]:
    command = _ensure_string_list(value, key_name)
    if not command:
        raise ConfigError(f"{key_name} must not be empty")
    return tuple(command)


def _ensure_relative_path(value: Any, key_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"{key_name} must be a non-empty string")
    normalized = value.strip().replace("\\", "/").strip("/")
    if Path(value.strip()).is_absolute() or ".." in normalized.split("/"):
        raise ConfigError(f"{key_name} must be a path relative to the workspace root")
    return normalized


def _ensure_repo_table(value: Any, key_name: str) -> dict[str, tuple[str, ...]]:
    table = _ensure_mapping(value, key_name)
    normalized: dict[str, tuple[str, ...]] = {}
    for repo, entries in table.items():
        if not isinstance(repo, str):
            raise ConfigError(f"{key_name} keys must be repository names")
        normalized[repo] = tuple(_ensure_string_list(entries, f"{key_name}.{repo}"))
    return normalized
