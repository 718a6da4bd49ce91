"""Tests for path classification."""

from __future__ import annotations

from pathlib import Path

import pytest

from skiff.transpile import PathClassifier, is_eligible_extension, is_ignored_path
from skiff.transpile.classifier import normalize_relative


@pytest.mark.parametrize(
    "relative",
    [
        pytest.param("foo/node_modules/lib/index.js", id="node-modules"),
        pytest.param("foo/.git/hooks/pre-commit.js", id="git"),
        pytest.param("foo/build/foo.js", id="build"),
        pytest.param("chipper/dist/js/foo/js/main.js", id="dist-dir"),
        pytest.param("chipper/dist", id="dist-root"),
        pytest.param("foo/js/main.ts~", id="editor-backup"),
        pytest.param("chipper/eslint/cache/foo.eslintcache", id="eslint-cache"),
        pytest.param("", id="empty"),
    ],
)
def test_is_ignored_path_true(relative: str) -> None:
    assert is_ignored_path(relative, "chipper/dist")


@pytest.mark.parametrize(
    "relative",
    [
        "foo/js/main.ts",
        "chipper/js/grunt/Gruntfile.js",
        "chipper/distance/js/x.js",
        "foo/js/builder.js",
    ],
)
def test_is_ignored_path_false(relative: str) -> None:
    assert not is_ignored_path(relative, "chipper/dist")


def test_is_ignored_path_normalizes_windows_separators() -> None:
    assert is_ignored_path("foo\\node_modules\\x.js", "chipper/dist")
    assert normalize_relative(".\\foo\\js\\a.ts") == "foo/js/a.ts"


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("a.js", True),
        ("a.ts", True),
        ("a.tsx", True),
        ("a.mts", True),
        ("a.mjs", True),
        ("a.wgsl", True),
        ("a.json", False),
        ("a.png", False),
        ("README.md", False),
        ("Makefile", False),
    ],
)
def test_is_eligible_extension(name: str, expected: bool) -> None:
    assert is_eligible_extension(f"foo/js/{name}") is expected


def test_classifier_treats_directories_as_ignored(tmp_path: Path) -> None:
    (tmp_path / "foo" / "js" / "dir.js").mkdir(parents=True)
    classifier = PathClassifier(tmp_path, "chipper/dist")

    assert classifier.is_ignored(tmp_path / "foo" / "js" / "dir.js")
    assert not classifier.is_transpilable(tmp_path / "foo" / "js" / "dir.js")


def test_classifier_accepts_relative_and_absolute_paths(tmp_path: Path) -> None:
    source = tmp_path / "foo" / "js" / "a.ts"
    source.parent.mkdir(parents=True)
    source.write_text("", encoding="utf-8")
    classifier = PathClassifier(tmp_path, "chipper/dist")

    assert classifier.relative(source) == "foo/js/a.ts"
    assert classifier.is_transpilable(source)
    assert classifier.is_transpilable("foo/js/a.ts")
