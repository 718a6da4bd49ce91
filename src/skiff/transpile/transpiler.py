"""Cache-aware transpilation of repository trees into the dist output tree."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from skiff.constants.discovery import IGNORED_SEGMENTS, MODULE_FORMATS, OUTPUT_MODES
from skiff.io import modified_time_ms, write_text_atomic
from skiff.transpile.classifier import PathClassifier
from skiff.transpile.compilers import Compiler
from skiff.transpile.repos import RepoLayout
from skiff.transpile.status import StatusStore
from skiff.transpile.targets import candidate_sources, output_owner, output_root, target_path
from skiff.types import OutputMode

logger = logging.getLogger(__name__)

OUTPUT_TEMP_PREFIX = ".skiff-"
OUTPUT_TEMP_SUFFIX = ".tmp"


@dataclass
class TranspileReport:
    """Outcome of one transpile pass."""

    compiled: list[Path] = field(default_factory=list)
    failed: list[Path] = field(default_factory=list)
    pruned: list[Path] = field(default_factory=list)

    def extend(self, other: TranspileReport) -> None:
        self.compiled.extend(other.compiled)
        self.failed.extend(other.failed)
        self.pruned.extend(other.pruned)


class Transpiler:
    """Compiles source files into per-mode output trees, skipping unchanged work.

    One bad file never aborts a pass: compiler errors are logged, the file is
    reported as failed and left unrecorded so the next pass retries it. Failures
    writing outputs or the status file propagate.
    """

    def __init__(
        self,
        *,
        root: Path,
        dist_dir: str,
        layout: RepoLayout,
        status: StatusStore,
        compiler: Compiler,
        verbose: bool = False,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self._root = root
        self._dist_dir = dist_dir
        self._layout = layout
        self._status = status
        self._compiler = compiler
        self._verbose = verbose
        self._clock = clock
        self.classifier = PathClassifier(root, dist_dir)

    @property
    def root(self) -> Path:
        return self._root

    @property
    def layout(self) -> RepoLayout:
        return self._layout

    def target_path(self, source: Path, mode: OutputMode) -> Path:
        return target_path(self._root, self._dist_dir, source, mode)

    def compile_if_needed(self, path: Path, mode: OutputMode, report: TranspileReport | None = None) -> bool:
        """Compile ``path`` for ``mode`` unless its cache entry is still valid.

        Returns True when an output file was written.
        """
        source = self._absolute(path)
        if not self.classifier.is_transpilable(source):
            return False

        target = self.target_path(source, mode)
        owner = output_owner(self._root, self._dist_dir, target, mode)
        if owner is not None and owner != source:
            logger.debug("Skipping %s: output is owned by %s", self._display(source), self._display(owner))
            return False

        started = self._clock()
        try:
            text = source.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Cannot read %s: %s", self._display(source), exc)
            if report is not None:
                report.failed.append(source)
            return False

        digest = self._status.digest(text)
        reason = self._status.invalid_reason(source, mode, digest, modified_time_ms(target))
        if reason is None:
            return False

        try:
            output = self._compiler(text, source, MODULE_FORMATS[mode])
        except Exception as exc:
            logger.error("ERROR transpiling %s (%s): %s", self._display(source), mode, exc)
            if report is not None:
                report.failed.append(source)
            return False

        write_text_atomic(
            path=target,
            content=output,
            temp_prefix=OUTPUT_TEMP_PREFIX,
            temp_suffix=OUTPUT_TEMP_SUFFIX,
        )
        written_ms = modified_time_ms(target)
        assert written_ms is not None
        self._status.record(source, mode, digest, written_ms)

        elapsed_ms = int((self._clock() - started) * 1000)
        suffix = f" ({reason})" if self._verbose else ""
        logger.info("%d ms: %s%s", elapsed_ms, self._display(source), suffix)
        if report is not None:
            report.compiled.append(source)
        return True

    def remove_outputs(self, path: Path) -> list[Path]:
        """Delete every mode's output for a vanished source and forget its status entries.

        An output still claimed by a sibling source (``Foo.ts`` next to a deleted
        ``Foo.js``) is kept and recompiled from that sibling instead.
        """
        source = self._absolute(path)
        removed: list[Path] = []
        for mode in OUTPUT_MODES:
            target = self.target_path(source, mode)
            survivor = output_owner(self._root, self._dist_dir, target, mode)
            if survivor is not None and survivor != source:
                self._status.remove(source, mode)
                if target.is_file():
                    self.compile_if_needed(survivor, mode)
                continue
            if target.is_file():
                target.unlink()
                removed.append(target)
                logger.info("%s (deleted, %s)", self._display(source), mode)
            self._status.remove(source, mode)
        return removed

    def prune_stale_outputs(self, mode: OutputMode) -> list[Path]:
        """Delete outputs whose every candidate source is gone."""
        started = self._clock()
        pruned: list[Path] = []
        out_root = output_root(self._root, self._dist_dir, mode)
        for output in _walk_files(out_root):
            candidates = candidate_sources(self._root, self._dist_dir, output, mode)
            if any(candidate.is_file() for candidate in candidates):
                continue
            output.unlink()
            pruned.append(output)
            for candidate in candidates:
                self._status.remove(candidate, mode)
            logger.debug("Pruned stale output %s", output)

        elapsed_ms = int((self._clock() - started) * 1000)
        logger.info("Clean stale %s files finished in %dms (%d removed)", mode, elapsed_ms, len(pruned))
        return pruned

    def transpile_repository_tree(self, repo: str, modes: Iterable[OutputMode] | None = None) -> TranspileReport:
        """Visit the known subdirectories and extra files of ``repo`` for each applicable mode."""
        report = TranspileReport()
        selected_modes = tuple(modes) if modes is not None else self._layout.modes_for(repo)
        repo_root = self._root / repo

        sources: list[Path] = []
        for subdir in self._layout.subdirs_for(repo):
            sources.extend(_walk_files(repo_root / subdir))
        sources.extend(repo_root / extra for extra in self._layout.extra_files_for(repo))

        for source in sources:
            for mode in selected_modes:
                self.compile_if_needed(source, mode, report)
        return report

    def transpile_repos(self, repos: Iterable[str]) -> TranspileReport:
        report = TranspileReport()
        for repo in dict.fromkeys(repos):
            report.extend(self.transpile_repository_tree(repo))
        return report

    def transpile_all(self, repos: Iterable[str]) -> TranspileReport:
        """Prune every mode's output tree, then transpile ``repos``."""
        report = TranspileReport()
        for mode in OUTPUT_MODES:
            report.pruned.extend(self.prune_stale_outputs(mode))
        report.extend(self.transpile_repos(repos))
        return report

    def _absolute(self, path: Path) -> Path:
        return path if path.is_absolute() else self._root / path

    def _display(self, path: Path) -> str:
        return self.classifier.relative(path)


def _walk_files(directory: Path) -> list[Path]:
    """Return files below ``directory``, skipping ignored directory names."""
    if not directory.is_dir():
        return []
    files: list[Path] = []
    for dirpath, dirnames, filenames in directory.walk():
        dirnames[:] = sorted(name for name in dirnames if name not in IGNORED_SEGMENTS)
        files.extend(dirpath / name for name in sorted(filenames))
    return files
