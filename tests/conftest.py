"""Shared pytest fixtures for workspace trees and fake collaborators."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from skiff.config import TranspileConfig
from skiff.exceptions import CompileError
from skiff.transpile import RepoLayout, StatusStore, Transpiler
from skiff.types import ModuleFormat

DIST_DIR = "chipper/dist"
ACTIVE_REPOS_FILE = "perennial-alias/data/active-repos"
SYNTAX_ERROR_MARKER = "@@syntax-error@@"


class FakeCompiler:
    """Compiler double: records calls and fails on sources containing the syntax-error marker."""

    def __init__(self) -> None:
        self.calls: list[tuple[Path, ModuleFormat]] = []

    def __call__(self, source_text: str, source_path: Path, module_format: ModuleFormat) -> str:
        self.calls.append((source_path, module_format))
        if SYNTAX_ERROR_MARKER in source_text:
            raise CompileError(source_path, "Unexpected token")
        return f"// {module_format}\n{source_text}"


def write_file(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture()
def make_file() -> Callable[..., Path]:
    """Return a helper that writes a file, creating parent directories."""
    return write_file


@pytest.fixture()
def workspace(tmp_path: Path) -> Path:
    """Return a workspace root with ``foo`` and ``chipper`` checked out and an active-repos list."""
    write_file(tmp_path / "foo" / "js" / "main.ts", "export const main = 1;\n")
    write_file(tmp_path / "foo" / "js" / "util.js", "export const util = 2;\n")
    write_file(tmp_path / "chipper" / "js" / "grunt.ts", "export default {};\n")
    write_file(tmp_path / ACTIVE_REPOS_FILE, "chipper\nfoo\n")
    return tmp_path


@pytest.fixture()
def fake_compiler() -> FakeCompiler:
    return FakeCompiler()


@pytest.fixture()
def syntax_error_marker() -> str:
    return SYNTAX_ERROR_MARKER


@pytest.fixture()
def layout() -> RepoLayout:
    return RepoLayout.from_config(TranspileConfig(commonjs_repos=("chipper",)))


@pytest.fixture()
def status_store(workspace: Path) -> StatusStore:
    return StatusStore(workspace / DIST_DIR / "js-cache-status.json").load()


@pytest.fixture()
def transpiler(workspace: Path, layout: RepoLayout, status_store: StatusStore, fake_compiler: FakeCompiler) -> Transpiler:
    return Transpiler(
        root=workspace,
        dist_dir=DIST_DIR,
        layout=layout,
        status=status_store,
        compiler=fake_compiler,
    )
