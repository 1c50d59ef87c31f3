#!/usr/bin/env python3
"""
resource-selector: Find and parse resource files (JSON, XML, YAML, properties,
protobuf, HCL) in a project tree

Common usage:
  resource-selector .
  resource-selector --list-files .
  resource-selector --exclude '**/secrets.yaml' --size-threshold-mb 10 .
  resource-selector --subproject services/api --base-dir . src/

Build-output directories (target, build, out, .gradle, node_modules, .metadata)
are always skipped. Settings may also come from `.resource-selector.toml` or
`[tool.resource-selector]` in `pyproject.toml`.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from resource_selector.config import (
    ConfigError,
    find_config_file,
    load_config,
    merge_cli_with_config,
)
from resource_selector.formats import ParseContext
from resource_selector.selection import (
    SKIP_DIRECTORY_NAMES,
    ExclusionPatternError,
    ResourceSelector,
    SelectorConfig,
)


@dataclass
class Options:
    """Command-line options for the resource-selector tool."""

    search_dir: str
    base_dir: str | None
    exclusions: list[str]
    subprojects: list[str]
    size_threshold_mb: int
    skip_directories: list[str] | None
    list_files: bool
    version: bool
    quiet: bool
    verbose: bool


def _parse_args(args: list[str] | None = None) -> tuple[Options, set[str]]:
    """
    Parse command-line arguments.

    Returns a tuple of (options, explicit_flags) where `explicit_flags` tracks
    which flags the user explicitly passed (for config merge precedence).
    """
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])

    parser = argparse.ArgumentParser(
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "search_dir",
        nargs="?",
        type=str,
        default=".",
        help="Directory to search for resource files (default: %(default)s)",
    )
    parser.add_argument(
        "--base-dir",
        type=str,
        default=None,
        dest="base_dir",
        metavar="DIR",
        help="Base directory that exclusion patterns and reported paths are relative to "
        "(default: the search directory)",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        dest="exclusions",
        metavar="PATTERN",
        help="Glob pattern, relative to the base directory, of files to skip "
        "(e.g., '**/secrets.yaml'). Can be repeated",
    )
    parser.add_argument(
        "--subproject",
        action="append",
        default=[],
        dest="subprojects",
        metavar="DIR",
        help="Nested project directory, relative to the base directory, whose files are "
        "never selected. Can be repeated",
    )
    parser.add_argument(
        "--size-threshold-mb",
        type=int,
        default=0,
        dest="size_threshold_mb",
        metavar="MB",
        help="Skip files larger than this many megabytes (0 or less = no limit, "
        "default: %(default)s)",
    )
    parser.add_argument(
        "--list-files",
        action="store_true",
        dest="list_files",
        help="Print the files that would be parsed, without parsing them",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Only report warnings and errors"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Report per-format selection details"
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information and exit",
    )
    opts = parser.parse_args(args)

    # Re-parse with sentinel defaults to detect which flags were actually supplied.
    # append actions use None as sentinel (argparse creates a list when the flag is used).
    _SENTINEL = object()
    sentinel_parser = argparse.ArgumentParser(add_help=False)
    sentinel_parser.add_argument("--exclude", dest="exclusions", action="append", default=None)
    sentinel_parser.add_argument(
        "--subproject", dest="subprojects", action="append", default=None
    )
    sentinel_parser.add_argument(
        "--size-threshold-mb", type=int, dest="size_threshold_mb", default=_SENTINEL
    )
    sentinel_opts, _ = sentinel_parser.parse_known_args(args if args is not None else sys.argv[1:])

    explicit_flags: set[str] = set()
    for dest_name in ("exclusions", "subprojects"):
        if getattr(sentinel_opts, dest_name) is not None:
            explicit_flags.add(dest_name)
    if sentinel_opts.size_threshold_mb is not _SENTINEL:
        explicit_flags.add("size_threshold_mb")

    return (
        Options(
            search_dir=opts.search_dir,
            base_dir=opts.base_dir,
            exclusions=opts.exclusions,
            subprojects=opts.subprojects,
            size_threshold_mb=opts.size_threshold_mb,
            skip_directories=None,
            list_files=opts.list_files,
            version=opts.version,
            quiet=opts.quiet,
            verbose=opts.verbose,
        ),
        explicit_flags,
    )


def _configure_logging(options: Options) -> None:
    level = logging.INFO
    if options.quiet:
        level = logging.WARNING
    elif options.verbose:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(message)s", stream=sys.stderr)


def _build_selector(options: Options, base_dir: Path) -> ResourceSelector:
    skip_directories = (
        frozenset(options.skip_directories)
        if options.skip_directories is not None
        else SKIP_DIRECTORY_NAMES
    )
    config = SelectorConfig(
        project_dir=base_dir,
        subprojects=[Path(p) for p in options.subprojects],
        exclusions=list(options.exclusions),
        size_threshold_mb=options.size_threshold_mb,
        skip_directories=skip_directories,
    )
    return ResourceSelector(config)


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the resource-selector CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, 1 for configuration errors, 2 for I/O or parse errors)
    """
    options, explicit_flags = _parse_args(args)

    if options.version:
        try:
            version = importlib.metadata.version("resource-selector")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    _configure_logging(options)

    # Load and merge config file settings
    config_path = find_config_file(Path.cwd())
    if config_path:
        try:
            config = load_config(config_path)
        except ConfigError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        merge_cli_with_config(options, config, explicit_flags)

    search_dir = Path(options.search_dir)
    if not search_dir.exists():
        print(f"Error: Path not found: {options.search_dir}", file=sys.stderr)
        return 1
    base_dir = Path(options.base_dir) if options.base_dir is not None else search_dir

    selector = _build_selector(options, base_dir)

    try:
        if options.list_files:
            for path in selector.enumerate(base_dir, search_dir):
                print(path)
            return 0

        claimed: set[Path] = set()
        documents = selector.select_and_parse(base_dir, search_dir, claimed, ParseContext())
    except ExclusionPatternError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        # Walk failures and parser errors are fatal for the whole run.
        print(f"Error: {e}", file=sys.stderr)
        return 2

    for doc in documents:
        print(f"{doc.format}\t{doc.source_path.as_posix()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
