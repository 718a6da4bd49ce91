"""Constants for source discovery, path classification and output layout."""

from __future__ import annotations

from typing import Final

DEFAULT_DIST_DIR: str = "chipper/dist"
DEFAULT_ACTIVE_REPOS_FILE: str = "perennial-alias/data/active-repos"

OUTPUT_MODES: tuple[str, ...] = ("js", "commonjs")
DEFAULT_MODE: Final = "js"

# Module format handed to the compiler for each output mode.
MODULE_FORMATS: dict[str, str] = {
    "js": "module",
    "commonjs": "commonjs",
}

ELIGIBLE_EXTENSIONS: frozenset[str] = frozenset({".js", ".ts", ".tsx", ".mts", ".mjs", ".wgsl"})
SHADER_EXTENSIONS: frozenset[str] = frozenset({".wgsl"})

# Source suffixes rewritten to ``.js`` in the output tree.
OUTPUT_EXTENSION: str = ".js"
RENAMED_EXTENSIONS: frozenset[str] = frozenset({".ts", ".tsx", ".mts", ".mjs", ".wgsl"})

# Order matters only for deterministic iteration in candidate lookups.
CANDIDATE_SOURCE_EXTENSIONS: tuple[str, ...] = (".js", ".ts", ".tsx", ".mts", ".mjs", ".wgsl")

IGNORED_SEGMENTS: frozenset[str] = frozenset({"node_modules", ".git", "build"})
EDITOR_BACKUP_SUFFIX: str = "~"
ESLINT_CACHE_SUFFIX: str = ".eslintcache"

DEFAULT_SUBDIRS: tuple[str, ...] = ("js", "images", "mipmaps", "sounds")

DEFAULT_REPO_EXTRA_SUBDIRS: dict[str, tuple[str, ...]] = {
    "phet-io-wrappers": ("common",),
    "phet-io-sim-specific": ("repos",),
    "my-solar-system": ("shaders",),
    "alpenglow": ("wgsl",),
    "brand": ("phet", "phet-io", "adapted-from-phet"),
}

# Third-party files loaded as modules rather than preloads.
DEFAULT_REPO_EXTRA_FILES: dict[str, tuple[str, ...]] = {
    "sherpa": ("lib/game-up-camera-1.0.0.js",),
}

BRAND_REPO: str = "brand"

DEFAULT_COMMONJS_REPOS: tuple[str, ...] = ("chipper", "perennial-alias", "phet-core")
