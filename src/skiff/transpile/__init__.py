"""Incremental transpilation: path classification, status cache and the transpiler."""

from __future__ import annotations

from .classifier import PathClassifier, is_eligible_extension, is_ignored_path
from .compilers import CommandCompiler, Compiler, ExtensionCompiler, ShaderCompiler, build_default_compiler
from .repos import RepoLayout, read_active_repos
from .status import InMemoryStatusStore, StatusStore
from .targets import candidate_sources, output_owner, output_root, target_path
from .transpiler import TranspileReport, Transpiler

__all__ = [
    "CommandCompiler",
    "Compiler",
    "ExtensionCompiler",
    "InMemoryStatusStore",
    "PathClassifier",
    "RepoLayout",
    "ShaderCompiler",
    "StatusStore",
    "TranspileReport",
    "Transpiler",
    "build_default_compiler",
    "candidate_sources",
    "is_eligible_extension",
    "is_ignored_path",
    "output_owner",
    "output_root",
    "read_active_repos",
    "target_path",
]
