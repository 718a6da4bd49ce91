"""CLI entrypoint for Skiff."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from skiff import __version__
from skiff.cli.handlers import handle_cache, handle_lint, handle_transpile
from skiff.constants.branding import CLI_DESCRIPTION
from skiff.exceptions import ConfigError, SkiffError


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from exc
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {number}")
    return number


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-r", "--root", type=Path, default=Path.cwd(), help="Workspace root (default: cwd)")
    parser.add_argument("-c", "--config", type=Path, help="Explicit config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose diagnostics")


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="skiff",
        description=CLI_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    transpile = subparsers.add_parser("transpile", help="Transpile repositories into the dist tree")
    _add_common_arguments(transpile)
    targets = transpile.add_mutually_exclusive_group()
    targets.add_argument("--all", action="store_true", help="Transpile every active repository")
    targets.add_argument(
        "--repos",
        type=_split_csv,
        default=[],
        help="Comma-separated repositories to transpile",
    )
    transpile.add_argument("--watch", action="store_true", help="Keep watching for changes after the first pass")
    transpile.add_argument("--clean", action="store_true", help="Discard the compile status cache first")
    transpile.add_argument(
        "--brands",
        type=_split_csv,
        default=[],
        help="Comma-separated extra brand folders to transpile",
    )
    transpile.add_argument("--skip-minify-wgsl", action="store_true", help="Emit WGSL shaders unminified")
    transpile.add_argument("--silent", action="store_true", help="Only log warnings and errors")

    lint = subparsers.add_parser("lint", help="Lint repositories in parallel")
    _add_common_arguments(lint)
    lint.add_argument("repo", nargs="*", help="Repositories to lint (default: all active repositories)")
    lint.add_argument("--repos", type=_split_csv, default=[], help="Comma-separated repositories to lint")
    lint.add_argument(
        "--disable-eslint-cache",
        action="store_true",
        help="Discard persisted lint caches and lint every repository from scratch",
    )
    lint.add_argument("--fix", action="store_true", help="Apply automatic fixes")
    lint.add_argument("--chip-away", action="store_true", help="Print a checklist of repositories with errors")
    lint.add_argument("--workers", type=_positive_int, default=None, help="Concurrent lint workers")
    lint.add_argument("--no-progress", action="store_true", help="Hide the progress bar")
    lint.add_argument("--no-color", action="store_true", help="Disable colored output")

    cache = subparsers.add_parser("cache", help="Query or update the last-changed marker")
    _add_common_arguments(cache)
    cache.add_argument("action", choices=["check", "success"], help="check: exit 0 when KEY is safe to skip")
    cache.add_argument("key", help="Downstream cache key")

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif getattr(args, "silent", False):
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(message)s")

    handlers = {
        "transpile": handle_transpile,
        "lint": handle_lint,
        "cache": handle_cache,
    }
    handler = handlers.get(args.command)
    if handler is None:
        parser.error(f"Unsupported command: {args.command}")

    try:
        return handler(args)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    except SkiffError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
