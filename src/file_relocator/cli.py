"""
Command-line interface for the file relocator.

Usage:
    file-relocator [--source PATH] [--target PATH] [--ext EXT ...]
                   [--ignore-case] [--dry-run] [--report PATH]
                   [-v] [--log-file PATH]

Exit codes:
    0  every matching file was moved (or would be, in dry-run mode)
    1  at least one file failed to move
    2  configuration error (nothing was touched)
    3  fatal filesystem error (e.g., target directory cannot be created)
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .config import DEFAULT_EXTENSIONS, build_config
from .errors import ConfigError
from .relocator import Relocator
from .report import format_result, format_summary, format_warning, write_report

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_CONFIG_ERROR = 2
EXIT_IO_ERROR = 3

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="file-relocator",
        description=(
            "Move files with a given extension from a source tree "
            "(default: $HOME/Downloads) into a flat target directory "
            "(default: $HOME/Documents/PDFs)."
        ),
    )
    parser.add_argument(
        "--source",
        help="Source directory to sweep (default: $HOME/Downloads)",
    )
    parser.add_argument(
        "--target",
        help="Target directory for matched files (default: $HOME/Documents/PDFs)",
    )
    parser.add_argument(
        "--ext",
        action="append",
        dest="extensions",
        metavar="EXT",
        help=(
            "Extension to match, without or with a leading dot; repeatable "
            f"(default: {', '.join(DEFAULT_EXTENSIONS)})"
        ),
    )
    parser.add_argument(
        "--ignore-case",
        action="store_true",
        help="Match extensions case-insensitively (PDF matches pdf)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would move without changing anything",
    )
    parser.add_argument(
        "--report",
        metavar="PATH",
        help="Write a run report (.xlsx for Excel, otherwise CSV)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug)",
    )
    parser.add_argument(
        "--log-file",
        metavar="PATH",
        help="Also write a detailed debug log to this file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def setup_logging(verbose: int = 0, log_file: Optional[str] = None) -> None:
    """
    Configure the root logger.

    Console logs go to stderr so they never mix with the per-file lines
    on stdout.

    Args:
        verbose: 0 for warnings, 1 for info, 2+ for debug
        log_file: Optional path for a debug-level log file
    """
    # Replace handlers from an earlier call only
    teardown_logging()

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    if verbose >= 2:
        console_level = logging.DEBUG
    elif verbose == 1:
        console_level = logging.INFO
    else:
        console_level = logging.WARNING

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    console._relocator_handler = True
    root.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        file_handler._relocator_handler = True
        root.addHandler(file_handler)


def teardown_logging() -> None:
    """Remove and close the handlers installed by setup_logging."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_relocator_handler", False):
            root.removeHandler(handler)
            handler.close()


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the relocator from the command line.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Process exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        setup_logging(args.verbose, args.log_file)
    except OSError as e:
        teardown_logging()
        print(f"Error: cannot open log file: {e}", file=sys.stderr)
        return EXIT_IO_ERROR

    try:
        return run(args)
    finally:
        teardown_logging()


def run(args: argparse.Namespace) -> int:
    """Build the configuration from parsed arguments and perform one run."""
    try:
        config = build_config(
            source=args.source,
            target=args.target,
            extensions=args.extensions,
            case_sensitive=not args.ignore_case,
            dry_run=args.dry_run,
        )
    except ConfigError as e:
        logger.debug("Configuration failed", exc_info=True)
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    relocator = Relocator(config)

    def show(result):
        print(format_result(result), flush=True)

    try:
        report = relocator.run(progress_callback=show)
    except OSError as e:
        logger.debug("Relocation aborted", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_IO_ERROR

    for warning in report.warnings:
        print(format_warning(warning))

    print(format_summary(report))

    if args.report:
        try:
            path = write_report(report, args.report)
        except OSError as e:
            print(f"Error: failed to write report {args.report}: {e}", file=sys.stderr)
            return EXIT_IO_ERROR
        print(f"Report written to: {path}")

    return EXIT_FAILURES if report.has_failures else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
