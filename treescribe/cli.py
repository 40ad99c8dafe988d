# treescribe/cli.py

"""
Command line interface.

Commands::

    treescribe tree [PATH] [options]   render a tree (the default command)
    treescribe init [--global]         write a default .treescriberc
    treescribe config                  print the resolved configuration

Option defaults are taken from the merged configuration files, see
:mod:`treescribe.config`.
"""

from __future__ import annotations

import argparse
import contextlib
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Sequence

from rich.console import Console
from rich.logging import RichHandler

from treescribe import __version__
from treescribe.config import CONFIG_FILENAME, create_default_config, load_config, to_options
from treescribe.errors import TreescribeError
from treescribe.options import OutputFormat, SortStrategy
from treescribe.render import EXPORT_FORMATS, render, write_output
from treescribe.tree import build_tree

logger = logging.getLogger(__name__)

COMMANDS = ("tree", "init", "config")
SCAN_MESSAGE = "Analyzing directory structure..."


def configure_logging(verbose: bool = False) -> None:
    package_logger = logging.getLogger("treescribe")
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        package_logger.addHandler(
            RichHandler(console=Console(stderr=True), show_time=False, show_path=False)
        )
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def build_parser(config: dict[str, Any]) -> argparse.ArgumentParser:
    display = config.get("display", {})

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    parser = argparse.ArgumentParser(
        prog="treescribe",
        description="A flexible directory tree generator",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")

    tree = sub.add_parser("tree", parents=[common], help="Generate a directory tree")
    tree.add_argument("path", nargs="?", default=".", help="Root directory (default: current directory)")
    tree.add_argument(
        "-f", "--format",
        choices=[f.value for f in OutputFormat],
        default=OutputFormat.CONSOLE.value,
        help="Output format when printing to the console",
    )
    tree.add_argument(
        "-d", "--max-depth",
        type=int,
        default=None,
        metavar="N",
        help="Maximum depth to traverse (0 = only the root's entries)",
    )
    tree.add_argument("-s", "--show-size", action="store_true", default=display.get("showSize", False),
                      help="Show file sizes")
    tree.add_argument("-p", "--full-path", action="store_true", default=display.get("fullPath", False),
                      help="Show full paths")
    tree.add_argument("-r", "--show-root", action="store_true", default=display.get("showRoot", False),
                      help="Show the root directory")
    tree.add_argument("--stats", action="store_true", default=display.get("showStats", False),
                      help="Show a directory summary")
    tree.add_argument("-i", "--icons", action="store_true", default=display.get("useIcons", False),
                      help="Show file type icons")
    tree.add_argument("--plain", action="store_true", help="Use ASCII branch characters")
    tree.add_argument("--no-color", action="store_true", help="Disable colours")
    tree.add_argument(
        "--sort",
        choices=[s.value for s in SortStrategy],
        default=None,
        help="Sort entries by name, directory-first, type, size or extension",
    )
    tree.add_argument(
        "-x", "--exclude",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Exclude entries by name; wrap in slashes for a regex (/\\.pyc$/). Repeatable.",
    )
    tree.add_argument(
        "-e", "--export",
        choices=list(EXPORT_FORMATS),
        help="Write the tree to a file instead of printing it",
    )
    tree.add_argument("-o", "--output", metavar="BASE", help="Export file name without extension")

    init = sub.add_parser("init", parents=[common], help=f"Create a new {CONFIG_FILENAME} file")
    init.add_argument("-g", "--global", dest="global_", action="store_true",
                      help="Create in the home directory")

    sub.add_parser("config", parents=[common], help="Show the current configuration")
    return parser


def scan_status(console: Console):
    """Spinner shown on an interactive stderr while the tree is scanned."""
    if console.is_terminal:
        return console.status(SCAN_MESSAGE)
    return contextlib.nullcontext()


def _normalize_argv(argv: Sequence[str]) -> list[str]:
    argv = list(argv)
    if not argv or (argv[0] not in COMMANDS and argv[0] not in ("-h", "--help", "--version")):
        return ["tree", *argv]
    return argv


def run_tree(args: argparse.Namespace, config: dict[str, Any]) -> int:
    fmt = EXPORT_FORMATS[args.export][0] if args.export else OutputFormat(args.format)
    use_colors = (
        config.get("display", {}).get("useColors", False)
        and not args.no_color
        and sys.stdout.isatty()
    )
    exclude = tuple(config.get("filtering", {}).get("exclude", ())) + tuple(args.exclude)

    options = to_options(
        config,
        format=fmt,
        max_depth=args.max_depth,
        show_size=args.show_size,
        full_path=args.full_path,
        show_root=args.show_root,
        show_stats=args.stats,
        use_icons=args.icons,
        sort_by=args.sort,
        fancy=False if args.plain else None,
        use_colors=use_colors,
        exclude=exclude,
    )

    with scan_status(Console(stderr=True)):
        result = build_tree(args.path, options)
    output = render(result.body, options, result.stats, nodes=result.root)

    if args.export:
        base = args.output
        if base is None:
            stamp = datetime.now().strftime("%Y-%m-%dT%H-%M-%S")
            out_dir = Path(config.get("export", {}).get("outputDir", "./"))
            base = out_dir / f"tree-{stamp}"
        target = write_output(base, output, args.export)
        print(f"Tree exported to {target}")
    elif isinstance(output, dict):
        print(json.dumps(output, indent=2, ensure_ascii=False))
    elif output:
        print(output, end="" if output.endswith("\n") else "\n")
    return 0


def run_init(args: argparse.Namespace) -> int:
    base = Path.home() if args.global_ else Path.cwd()
    path = base / CONFIG_FILENAME
    create_default_config(path)
    print(f"Created configuration file at {path}")
    return 0


def run_config(config: dict[str, Any]) -> int:
    print("Current configuration:")
    print(json.dumps(config, indent=2))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return the process exit code."""
    argv = _normalize_argv(sys.argv[1:] if argv is None else argv)
    configure_logging("-v" in argv or "--verbose" in argv)

    config = load_config()
    parser = build_parser(config)
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        if args.command == "init":
            return run_init(args)
        if args.command == "config":
            return run_config(config)
        return run_tree(args, config)
    except (TreescribeError, OSError) as exc:
        logger.error("Error: %s", exc)
        return 1
