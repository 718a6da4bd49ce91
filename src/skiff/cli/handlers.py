"""CLI subcommand handlers."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from skiff.cache_layer import CacheLayer
from skiff.config import LintOptions, SkiffConfig, TranspileOptions, load_config
from skiff.constants.cache import CACHE_LAYER_FILENAME, STATUS_FILENAME
from skiff.exceptions import ConfigError
from skiff.lint import chip_away_report, lint_repos, load_responsible_devs
from skiff.reporting import LintReporter, ProgressPrinter
from skiff.transpile import RepoLayout, StatusStore, Transpiler, build_default_compiler, read_active_repos
from skiff.watch import PollingEventSource, WatchLoop

logger = logging.getLogger(__name__)


def handle_transpile(args: argparse.Namespace) -> int:
    """Run one transpile pass, then optionally keep watching."""
    root = args.root.resolve()
    config = load_config(root, args.config)
    options = TranspileOptions(
        all=args.all,
        clean=args.clean,
        watch=args.watch,
        verbose=args.verbose,
        silent=args.silent,
        repos=tuple(args.repos),
        brands=tuple(args.brands),
        skip_minify_wgsl=args.skip_minify_wgsl,
    )
    if not options.all and not options.repos and not options.watch:
        raise ConfigError("Specify --repos, --all or --watch")

    transpile_config = config.transpile
    dist_root = root / transpile_config.dist_dir
    status = StatusStore(dist_root / STATUS_FILENAME).load()
    if options.clean:
        status.clear()

    transpiler = Transpiler(
        root=root,
        dist_dir=transpile_config.dist_dir,
        layout=RepoLayout.from_config(transpile_config, brands=options.brands),
        status=status,
        compiler=build_default_compiler(
            transpile_config,
            root=root,
            minify_wgsl=False if options.skip_minify_wgsl else None,
        ),
        verbose=options.verbose,
    )

    repos = _active_repos(root, config) if options.all or (options.watch and not options.repos) else options.repos
    report = transpiler.transpile_all(repos)
    logger.info(
        "Transpiled %d files (%d failed, %d stale outputs removed)",
        len(report.compiled),
        len(report.failed),
        len(report.pruned),
    )

    if options.watch:
        loop = WatchLoop(
            transpiler=transpiler,
            cache_layer=CacheLayer(dist_root / CACHE_LAYER_FILENAME),
            dist_dir=transpile_config.dist_dir,
            active_repos_file=transpile_config.active_repos_file,
            tracked_repos=repos,
        )
        source = PollingEventSource(
            root, dist_dir=transpile_config.dist_dir, interval=transpile_config.poll_interval
        )
        loop.run(source)
    return 0


def handle_lint(args: argparse.Namespace) -> int:
    """Lint repositories and print the report; 0 when every repository is clean."""
    root = args.root.resolve()
    config = load_config(root, args.config)
    options = LintOptions(
        cache=not args.disable_eslint_cache,
        fix=args.fix,
        chip_away=args.chip_away,
        show_progress=not args.no_progress,
        workers=args.workers,
    )

    repos = [*args.repo, *args.repos] or list(_active_repos(root, config))
    summary = lint_repos(
        repos,
        root=root,
        config=config.lint,
        options=options,
        on_progress=ProgressPrinter() if options.show_progress else None,
    )

    use_color = not args.no_color and sys.stdout.isatty()
    print(LintReporter(summary, color=use_color, verbose=args.verbose).render())

    if options.chip_away:
        devs = load_responsible_devs(root / config.lint.responsible_devs_file)
        print(chip_away_report(summary.results, devs))

    return 0 if summary.ok else 1


def handle_cache(args: argparse.Namespace) -> int:
    """``check`` exits 0 when the key is safe to skip; ``success`` records a success now."""
    root = args.root.resolve()
    config = load_config(root, args.config)
    layer = CacheLayer(root / config.transpile.dist_dir / CACHE_LAYER_FILENAME)

    if args.action == "success":
        layer.on_success(args.key)
        return 0
    safe = layer.is_cache_safe(args.key)
    logger.debug("Cache key %s is %s", args.key, "safe" if safe else "not safe")
    return 0 if safe else 1


def _active_repos(root: Path, config: SkiffConfig) -> tuple[str, ...]:
    path = root / config.transpile.active_repos_file
    try:
        return read_active_repos(path)
    except OSError as exc:
        raise ConfigError(f"Cannot read active repositories from {path}: {exc}") from exc
