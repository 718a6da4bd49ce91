"""Tests for the active-repos list and per-repository layout."""

from __future__ import annotations

from pathlib import Path

import pytest

from skiff.config import TranspileConfig
from skiff.transpile import RepoLayout, read_active_repos


def test_read_active_repos_strips_blanks_and_duplicates(tmp_path: Path) -> None:
    path = tmp_path / "active-repos"
    path.write_text("axon\n\n  scenery \naxon\nsun\n", encoding="utf-8")

    assert read_active_repos(path) == ("axon", "scenery", "sun")


def test_layout_from_config_adds_brands() -> None:
    layout = RepoLayout.from_config(TranspileConfig(), brands=("phet", "acme"))

    assert layout.subdirs_for("brand") == ("js", "images", "mipmaps", "sounds", "phet", "phet-io", "adapted-from-phet", "acme")
    assert layout.subdirs_for("axon") == ("js", "images", "mipmaps", "sounds")


@pytest.mark.parametrize(
    ("repo", "modes"),
    [
        pytest.param("chipper", ("js", "commonjs"), id="commonjs-repo"),
        pytest.param("phet-core", ("js", "commonjs"), id="phet-core"),
        pytest.param("axon", ("js",), id="module-only"),
    ],
)
def test_modes_for(repo: str, modes: tuple[str, ...]) -> None:
    assert RepoLayout.from_config(TranspileConfig()).modes_for(repo) == modes


@pytest.mark.parametrize(
    ("relative", "expected"),
    [
        ("axon/js/Property.ts", True),
        ("axon/sounds/click.mp3", True),
        ("axon/doc/notes.js", False),
        ("axon", False),
        ("alpenglow/wgsl/blend.wgsl", True),
        ("sherpa/lib/game-up-camera-1.0.0.js", True),
        ("sherpa/lib/lodash.js", False),
    ],
)
def test_is_watched(relative: str, expected: bool) -> None:
    assert RepoLayout.from_config(TranspileConfig()).is_watched(relative) is expected
