"""Main CLI entry point for aicr - AI code review gate."""

import argparse
import sys
from pathlib import Path

import yaml
from rich.console import Console

from ..config import get_target_branch, setup_logging
from ..patterns import FileFilter
from ..review_config import ReviewConfig
from ..status import get_thread_status, has_comment


def _read_text(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def run_init(output: Path, console: Console) -> int:
    if output.exists():
        console.print(f"[yellow]{output} already exists, not overwriting[/]")
        return 1
    output.write_text(ReviewConfig.default().to_yaml())
    console.print(f"[green]Wrote {output}[/]")
    return 0


def _load_config(args: argparse.Namespace) -> ReviewConfig:
    """Pipeline task inputs with --from-env, otherwise aicr.yaml."""
    if args.from_env:
        return ReviewConfig.from_env()
    return ReviewConfig.load(args.config)


def run_filter(args: argparse.Namespace) -> int:
    config = _load_config(args)
    include = args.include if args.include is not None else config.include_patterns
    exclude = args.exclude if args.exclude is not None else config.exclude_patterns
    skip_binary = config.skip_binary_files and not args.keep_binary

    paths = args.paths or [line.strip() for line in sys.stdin if line.strip()]
    file_filter = FileFilter.from_strings(include, exclude, skip_binary=skip_binary)

    for path in file_filter.apply(paths):
        print(path)
    return 0


def run_status(args: argparse.Namespace) -> int:
    response = _read_text(args.review)

    if not has_comment(response):
        print("no comment")
        return 0

    whole_diff = args.whole_diff
    if whole_diff is None:
        whole_diff = _load_config(args).review_whole_diff_at_once

    print(get_thread_status(response, whole_diff=whole_diff).value)
    return 0


def run_target_branch() -> int:
    print(get_target_branch())
    return 0


def main():
    """Main CLI entry point for aicr."""
    parser = argparse.ArgumentParser(
        prog="aicr",
        description="Decide which files an AI review covers and whether its threads stay open",
        epilog="Run 'aicr <command> --help' for more information on a command.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # init command - generate config
    init_parser = subparsers.add_parser(
        "init",
        help="Generate a default aicr.yaml",
        description="Write a default review config to the current directory.",
    )
    init_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=Path("aicr.yaml"),
        help="Output file path (default: aicr.yaml)",
    )

    # filter command - select reviewable files
    filter_parser = subparsers.add_parser(
        "filter",
        help="Print the changed files eligible for review",
        description="Apply include/exclude patterns to file paths given as arguments or on stdin.",
    )
    filter_parser.add_argument(
        "paths",
        nargs="*",
        help="File paths (default: read one per line from stdin)",
    )
    filter_parser.add_argument(
        "--include",
        "-i",
        type=str,
        default=None,
        help="Comma-separated include patterns/extensions (overrides aicr.yaml)",
    )
    filter_parser.add_argument(
        "--exclude",
        "-e",
        type=str,
        default=None,
        help="Comma-separated exclude patterns (overrides aicr.yaml)",
    )
    filter_parser.add_argument(
        "--keep-binary",
        action="store_true",
        help="Do not drop binary files",
    )
    filter_parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Config file (default: aicr.yaml in current directory)",
    )
    filter_parser.add_argument(
        "--from-env",
        action="store_true",
        help="Read patterns from the pipeline task inputs (INPUT_FILEEXTENSIONS, INPUT_FILEEXCLUDES)",
    )

    # status command - thread status of a review
    status_parser = subparsers.add_parser(
        "status",
        help="Print the thread status (active/resolved) of a review",
        description="Classify a generated review and print whether its thread should be resolved.",
    )
    status_parser.add_argument(
        "review",
        nargs="?",
        default="-",
        help="File containing the review text (default: stdin)",
    )
    status_parser.add_argument(
        "--whole-diff",
        "-w",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Review covers the whole diff (status table) or a single file (status line); overrides the config",
    )
    status_parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Config file (default: aicr.yaml in current directory)",
    )
    status_parser.add_argument(
        "--from-env",
        action="store_true",
        help="Read the review mode from the pipeline task inputs (INPUT_REVIEWWHOLEDIFFATONCE)",
    )

    # target-branch command - diff base for the pull request
    subparsers.add_parser(
        "target-branch",
        help="Print the remote ref of the pull request target branch",
        description="Resolve the target branch from the pipeline pull request variables.",
    )

    args = parser.parse_args()
    setup_logging(verbose=args.verbose)
    console = Console(stderr=True)

    try:
        if args.command == "init":
            sys.exit(run_init(args.output, console))

        elif args.command == "filter":
            sys.exit(run_filter(args))

        elif args.command == "status":
            sys.exit(run_status(args))

        elif args.command == "target-branch":
            sys.exit(run_target_branch())

        elif args.command is None:
            parser.print_help()
            sys.exit(0)

        else:
            print(f"Unknown command: {args.command}")
            parser.print_help()
            sys.exit(1)

    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
