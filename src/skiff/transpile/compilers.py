"""Compiler collaborators: source text in, JavaScript text out."""

from __future__ import annotations

import json
import logging
import re
import subprocess
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol

from skiff.config.model import TranspileConfig
from skiff.constants.discovery import SHADER_EXTENSIONS
from skiff.exceptions import CompileError
from skiff.types import ModuleFormat

logger = logging.getLogger(__name__)

FILENAME_PLACEHOLDER = "{filename}"

_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_LINE_COMMENT_RE = re.compile(r"//[^\n]*")
_INNER_SPACE_RE = re.compile(r"[ \t]+")


class Compiler(Protocol):
    """Pure transform from source text to output text; may raise on syntax errors."""

    def __call__(self, source_text: str, source_path: Path, module_format: ModuleFormat) -> str: ...


class CommandCompiler:
    """Pipes source text through an external command and returns its stdout."""

    def __init__(self, commands: Mapping[ModuleFormat, tuple[str, ...]], *, cwd: Path | None = None) -> None:
        self._commands = dict(commands)
        self._cwd = cwd

    def __call__(self, source_text: str, source_path: Path, module_format: ModuleFormat) -> str:
        command = self._commands.get(module_format)
        if command is None:
            raise CompileError(source_path, f"no compile command configured for {module_format} output")

        args = [arg.replace(FILENAME_PLACEHOLDER, str(source_path)) for arg in command]
        try:
            completed = subprocess.run(
                args,
                input=source_text,
                capture_output=True,
                text=True,
                encoding="utf-8",
                cwd=self._cwd,
                check=False,
            )
        except OSError as exc:
            raise CompileError(source_path, f"could not run {args[0]}: {exc}") from exc

        if completed.returncode != 0:
            detail = completed.stderr.strip() or completed.stdout.strip() or f"exit code {completed.returncode}"
            raise CompileError(source_path, detail)
        return completed.stdout


class ShaderCompiler:
    """Wraps WGSL source as a JavaScript module exporting the shader string."""

    def __init__(self, *, minify: bool = True) -> None:
        self._minify = minify

    def __call__(self, source_text: str, source_path: Path, module_format: ModuleFormat) -> str:
        text = minify_wgsl(source_text) if self._minify else source_text
        literal = json.dumps(text)
        if module_format == "commonjs":
            return f"module.exports = {literal};\n"
        return f"export default {literal};\n"


class ExtensionCompiler:
    """Routes shaders to the shader compiler and everything else to the script compiler."""

    def __init__(self, script: Compiler, shader: Compiler) -> None:
        self._script = script
        self._shader = shader

    def __call__(self, source_text: str, source_path: Path, module_format: ModuleFormat) -> str:
        if source_path.suffix in SHADER_EXTENSIONS:
            return self._shader(source_text, source_path, module_format)
        return self._script(source_text, source_path, module_format)


def minify_wgsl(text: str) -> str:
    """Strip comments, trim lines and drop blank lines."""
    stripped = _LINE_COMMENT_RE.sub("", _BLOCK_COMMENT_RE.sub("", text))
    lines = (_INNER_SPACE_RE.sub(" ", line).strip() for line in stripped.splitlines())
    return "\n".join(line for line in lines if line)


def build_default_compiler(config: TranspileConfig, *, root: Path, minify_wgsl: bool | None = None) -> Compiler:
    """Build the compiler used by the CLI from the ``transpile`` config section."""
    minify = config.minify_wgsl if minify_wgsl is None else minify_wgsl
    script = CommandCompiler(
        {
            "module": config.compile_command,
            "commonjs": config.commonjs_compile_command,
        },
        cwd=root,
    )
    logger.debug("Script compiler: %s", " ".join(config.compile_command))
    return ExtensionCompiler(script, ShaderCompiler(minify=minify))
