"""Tests for compiler collaborators."""

from __future__ import annotations

import json
import subprocess
from pathlib import Path
from unittest import mock

import pytest

from skiff.config import TranspileConfig
from skiff.exceptions import CompileError
from skiff.transpile import CommandCompiler, ExtensionCompiler, ShaderCompiler, build_default_compiler
from skiff.transpile.compilers import minify_wgsl

SHADER = """
// blend two colors
fn blend(a: vec4f, b: vec4f) -> vec4f {
    /* premultiplied */
    return a + b * (1.0 - a.a);
}
"""


def test_minify_wgsl_strips_comments_and_blank_lines() -> None:
    assert minify_wgsl(SHADER) == "fn blend(a: vec4f, b: vec4f) -> vec4f {\nreturn a + b * (1.0 - a.a);\n}"


@pytest.mark.parametrize(
    ("module_format", "prefix"),
    [
        pytest.param("module", "export default ", id="module"),
        pytest.param("commonjs", "module.exports = ", id="commonjs"),
    ],
)
def test_shader_compiler_exports_string(module_format: str, prefix: str) -> None:
    output = ShaderCompiler(minify=False)("fn main() {}\n", Path("a.wgsl"), module_format)  # type: ignore[arg-type]

    assert output.startswith(prefix)
    assert json.loads(output[len(prefix) : -2]) == "fn main() {}\n"


def test_extension_compiler_routes_by_suffix() -> None:
    script = mock.Mock(return_value="script")
    shader = mock.Mock(return_value="shader")
    compiler = ExtensionCompiler(script, shader)

    assert compiler("x", Path("a.wgsl"), "module") == "shader"
    assert compiler("x", Path("a.ts"), "commonjs") == "script"
    script.assert_called_once_with("x", Path("a.ts"), "commonjs")


def test_command_compiler_pipes_source_and_substitutes_filename(tmp_path: Path) -> None:
    completed = subprocess.CompletedProcess(args=[], returncode=0, stdout="compiled", stderr="")
    compiler = CommandCompiler({"module": ("babel", "--filename", "{filename}")}, cwd=tmp_path)

    with mock.patch("skiff.transpile.compilers.subprocess.run", return_value=completed) as run:
        assert compiler("const a = 1;", tmp_path / "a.ts", "module") == "compiled"

    args, kwargs = run.call_args
    assert args[0] == ["babel", "--filename", str(tmp_path / "a.ts")]
    assert kwargs["input"] == "const a = 1;"
    assert kwargs["cwd"] == tmp_path


def test_command_compiler_raises_on_nonzero_exit(tmp_path: Path) -> None:
    completed = subprocess.CompletedProcess(args=[], returncode=1, stdout="", stderr="SyntaxError: Unexpected token")
    compiler = CommandCompiler({"module": ("babel",)})

    with mock.patch("skiff.transpile.compilers.subprocess.run", return_value=completed):
        with pytest.raises(CompileError, match="Unexpected token"):
            compiler("const = ;", tmp_path / "a.ts", "module")


def test_command_compiler_raises_when_command_missing(tmp_path: Path) -> None:
    compiler = CommandCompiler({"module": ("definitely-not-a-real-binary-skiff",)})

    with mock.patch("skiff.transpile.compilers.subprocess.run", side_effect=FileNotFoundError("nope")):
        with pytest.raises(CompileError, match="could not run"):
            compiler("x", tmp_path / "a.ts", "module")
    with pytest.raises(CompileError, match="no compile command"):
        compiler("x", tmp_path / "a.ts", "commonjs")


def test_build_default_compiler_honours_minify_override(tmp_path: Path) -> None:
    compiler = build_default_compiler(TranspileConfig(minify_wgsl=True), root=tmp_path, minify_wgsl=False)

    output = compiler("// keep\nfn a() {}\n", tmp_path / "a.wgsl", "module")

    assert "// keep" in json.loads(output[len("export default ") : -2])
