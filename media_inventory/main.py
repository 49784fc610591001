#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Main CLI entry point for the Media Inventory Tool.
"""

import argparse
import sys
import logging
from pathlib import Path

from .config import (
    DEFAULT_EXT_OUTPUT, DEFAULT_FILE_TIMEOUT, DEFAULT_OUTPUT, DEFAULT_QUEUE_SIZE,
    DEFAULT_WORKERS, NO_TAG_EXT, SUPPORTED_EXT, ScanConfig,
)
from .commands.scan import ScanCommand
from .commands.copy import cmd_copy
from .commands.mkdirs import cmd_mkdirs
from .commands.extensions import cmd_extensions
from .jsonio import enable_json_logging, error_from_exception


def setup_logging(verbose: bool):
    """Configure logging for the CLI tool."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)]
    )
    logging.debug("Verbose logging enabled (DEBUG level).")


def create_parser():
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        description="Media Inventory Tool - hash, checksum and catalogue a music collection",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""Examples:
  # Inventory several collections into files.csv
  %(prog)s scan /music/music1 /music/music2 --out files.csv --workers 8

  # Which extensions are present at all?
  %(prog)s extensions /music/music1 /music/music2 --out ext.csv

  # Rebuild a clean collection from reviewed CSV exports
  %(prog)s mkdirs dirs.csv
  %(prog)s copy cpy.csv
        """
    )

    # Global options
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable verbose (DEBUG) output")
    parser.add_argument("--json", action="store_true",
                        help="Output results as JSON instead of human-readable text")

    subparsers = parser.add_subparsers(dest="command", required=True, help="Available commands")

    _add_scan_parser(subparsers)
    _add_extensions_parser(subparsers)
    _add_copy_parsers(subparsers)

    return parser


def _add_json_flag(sub):
    # SUPPRESS keeps a global --json from being reset by the subcommand default
    sub.add_argument("--json", action="store_true", default=argparse.SUPPRESS,
                     help="Output as JSON")


def _add_scan_parser(subparsers):
    """Add scan command parser."""
    scan_parser = subparsers.add_parser("scan", help="Inventory media files under one or more roots")
    scan_parser.add_argument("roots", nargs="+",
                             help="Root directories to scan (one scanner thread each)")
    scan_parser.add_argument("--out", default=DEFAULT_OUTPUT,
                             help=f"Output CSV path (default: {DEFAULT_OUTPUT})")
    scan_parser.add_argument("--workers", type=int, default=DEFAULT_WORKERS,
                             help=f"Number of extractor threads (default: {DEFAULT_WORKERS})")
    scan_parser.add_argument("--ext", action="append", metavar="EXT",
                             help="Extension to include, repeatable "
                                  f"(default: {' '.join(sorted(SUPPORTED_EXT))})")
    scan_parser.add_argument("--no-tag-ext", action="append", metavar="EXT",
                             help="Extension to skip tag parsing for, repeatable, case-insensitive "
                                  f"(default: {' '.join(sorted(NO_TAG_EXT))})")
    scan_parser.add_argument("--queue-size", type=int, default=DEFAULT_QUEUE_SIZE,
                             help=f"Capacity of each pipeline queue (default: {DEFAULT_QUEUE_SIZE})")
    scan_parser.add_argument("--file-timeout", type=float, default=DEFAULT_FILE_TIMEOUT,
                             help="Seconds allowed per hashing/tag step, 0 disables (default: 0)")
    scan_parser.add_argument("--no-header", action="store_true",
                             help="Do not write a header row")
    scan_parser.add_argument("--progress", action="store_true",
                             help="Show a progress bar while writing")
    _add_json_flag(scan_parser)


def _add_extensions_parser(subparsers):
    """Add extensions command parser."""
    ext_parser = subparsers.add_parser("extensions", help="Count files per extension")
    ext_parser.add_argument("roots", nargs="+", help="Root directories to walk")
    ext_parser.add_argument("--out", default=DEFAULT_EXT_OUTPUT,
                            help=f"Output CSV path (default: {DEFAULT_EXT_OUTPUT})")
    _add_json_flag(ext_parser)


def _add_copy_parsers(subparsers):
    """Add CSV-driven copy and mkdirs parsers."""
    copy_parser = subparsers.add_parser("copy", help="Copy files listed in a source,destination CSV")
    copy_parser.add_argument("csv", help="CSV file with two columns: source, destination")
    _add_json_flag(copy_parser)

    mkdirs_parser = subparsers.add_parser("mkdirs", help="Create directories listed in a CSV")
    mkdirs_parser.add_argument("csv", help="CSV file whose first column is a directory path")
    _add_json_flag(mkdirs_parser)


def build_scan_config(args) -> ScanConfig:
    """Translate parsed scan arguments into the run's immutable config."""
    return ScanConfig.build(
        extensions=args.ext,
        no_tag_extensions=args.no_tag_ext,
        workers=args.workers,
        scan_queue_size=args.queue_size,
        record_queue_size=args.queue_size,
        file_timeout=args.file_timeout,
        write_header=not args.no_header,
        show_progress=args.progress,
    )


def main(argv=None):
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    as_json = getattr(args, 'json', False)

    if as_json:
        enable_json_logging()
    else:
        setup_logging(args.verbose)

    logging.debug("Parsed arguments: %s", args)

    try:
        if args.command == "scan":
            logging.info("Starting scan command.")
            config = build_scan_config(args)
            result = ScanCommand(Path(args.out), config).execute(
                [Path(r) for r in args.roots], as_json=as_json)
            logging.info("Scan completed.")
            return result if as_json else 0

        elif args.command == "extensions":
            logging.info("Counting extensions under %d roots", len(args.roots))
            result = cmd_extensions([Path(r) for r in args.roots], Path(args.out), as_json)
            return result if as_json else 0

        elif args.command == "copy":
            logging.info("Copying files listed in %s", args.csv)
            result = cmd_copy(Path(args.csv), as_json)
            return result if as_json else 0

        elif args.command == "mkdirs":
            logging.info("Creating directories listed in %s", args.csv)
            result = cmd_mkdirs(Path(args.csv), as_json)
            return result if as_json else 0

    except KeyboardInterrupt:
        if as_json:
            from .jsonio import error
            return error(args.command, "Operation interrupted by user", code=130)
        logging.warning("Operation interrupted by user.")
        return 130
    except Exception as e:
        if as_json:
            return error_from_exception(args.command, e, verbose=args.verbose)
        logging.error("Error occurred: %s", e, exc_info=args.verbose)
        return 1


if __name__ == "__main__":
    sys.exit(main())
