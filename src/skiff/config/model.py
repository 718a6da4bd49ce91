"""Config data model and runtime option structures."""

from __future__ import annotations

from dataclasses import dataclass, field

from skiff.constants.config import (
    DEFAULT_COMMONJS_COMPILE_COMMAND,
    DEFAULT_COMPILE_COMMAND,
    DEFAULT_POLL_INTERVAL,
)
from skiff.constants.discovery import (
    DEFAULT_ACTIVE_REPOS_FILE,
    DEFAULT_COMMONJS_REPOS,
    DEFAULT_DIST_DIR,
    DEFAULT_REPO_EXTRA_FILES,
    DEFAULT_REPO_EXTRA_SUBDIRS,
    DEFAULT_SUBDIRS,
)
from skiff.constants.lint import (
    DEFAULT_ESLINT_COMMAND,
    DEFAULT_LINT_CACHE_DIR,
    DEFAULT_LINT_WORKERS,
    DEFAULT_NO_LINT_REPOS,
    DEFAULT_RESPONSIBLE_DEVS_FILE,
)


@dataclass(frozen=True)
class TranspileConfig:
    """Resolved ``transpile`` section of ``skiff.yaml``."""

    dist_dir: str = DEFAULT_DIST_DIR
    active_repos_file: str = DEFAULT_ACTIVE_REPOS_FILE
    subdirs: tuple[str, ...] = DEFAULT_SUBDIRS
    repo_extra_subdirs: dict[str, tuple[str, ...]] = field(default_factory=lambda: dict(DEFAULT_REPO_EXTRA_SUBDIRS))
    repo_extra_files: dict[str, tuple[str, ...]] = field(default_factory=lambda: dict(DEFAULT_REPO_EXTRA_FILES))
    commonjs_repos: tuple[str, ...] = DEFAULT_COMMONJS_REPOS
    compile_command: tuple[str, ...] = DEFAULT_COMPILE_COMMAND
    commonjs_compile_command: tuple[str, ...] = DEFAULT_COMMONJS_COMPILE_COMMAND
    minify_wgsl: bool = True
    poll_interval: float = DEFAULT_POLL_INTERVAL


@dataclass(frozen=True)
class LintConfig:
    """Resolved ``lint`` section of ``skiff.yaml``."""

    workers: int = DEFAULT_LINT_WORKERS
    cache_dir: str = DEFAULT_LINT_CACHE_DIR
    no_lint_repos: tuple[str, ...] = DEFAULT_NO_LINT_REPOS
    responsible_devs_file: str = DEFAULT_RESPONSIBLE_DEVS_FILE
    eslint_command: tuple[str, ...] = DEFAULT_ESLINT_COMMAND


@dataclass(frozen=True)
class SkiffConfig:
    """Resolved workspace config."""

    transpile: TranspileConfig = field(default_factory=TranspileConfig)
    lint: LintConfig = field(default_factory=LintConfig)


@dataclass(frozen=True)
class TranspileOptions:
    """Per-invocation transpile switches, usually from the command line."""

    all: bool = False
    clean: bool = False
    watch: bool = False
    verbose: bool = False
    silent: bool = False
    repos: tuple[str, ...] = ()
    brands: tuple[str, ...] = ()
    skip_minify_wgsl: bool = False


@dataclass(frozen=True)
class LintOptions:
    """Per-invocation lint switches, usually from the command line."""

    cache: bool = True
    fix: bool = False
    chip_away: bool = False
    show_progress: bool = True
    workers: int | None = None
