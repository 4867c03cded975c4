"""
Command line front end for logscan.

Builds a ScanRequest per path from command line options layered over the
YAML configuration, streams the records to stdout and sends diagnostics to
stderr through logging.
"""

import argparse
import json
import logging
import sys
from typing import Iterable, Iterator, List, Optional, TextIO

from pydantic import ValidationError

from .config import ConfigurationError, create_config_template, load_config
from .models.config import OutputFormat, ScannerConfig
from .models.file_record import FileRecord
from .models.scan_request import ScanRequest
from .tools.log_scanner import FatalScanError, LogFileScanner


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_SCAN_FAILED = 1
EXIT_USAGE = 2


def _non_negative_int(value: str) -> int:
    try:
        days = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid day count: {value!r}")
    if days < 0:
        raise argparse.ArgumentTypeError(f"day count must be >= 0, got {days}")
    return days


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="logscan",
        description="List files under a directory, filtered by name pattern and age.",
    )

    parser.add_argument(
        "paths",
        nargs="*",
        metavar="PATH",
        help="Root directory to search. Use '-' to read paths from stdin, one per line.",
    )
    parser.add_argument(
        "-r", "--recurse",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Search subdirectories recursively.",
    )
    parser.add_argument(
        "--older-than",
        type=_non_negative_int,
        default=None,
        metavar="DAYS",
        help="Only list files at least this many days old.",
    )
    parser.add_argument(
        "--younger-than",
        type=_non_negative_int,
        default=None,
        metavar="DAYS",
        help="Only list files at most this many days old.",
    )
    parser.add_argument(
        "--use-creation-date",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Use file creation date for age comparison instead of last modified date.",
    )
    parser.add_argument(
        "-p", "--pattern",
        default=None,
        help="File name pattern to match (e.g., *.log). Defaults to all files.",
    )
    parser.add_argument(
        "-f", "--format",
        choices=[fmt.value for fmt in OutputFormat],
        default=None,
        help="Output format for matching files.",
    )
    parser.add_argument(
        "-c", "--config",
        default=None,
        help="Path to a YAML configuration file.",
    )
    parser.add_argument(
        "--write-config-template",
        default=None,
        metavar="FILE",
        help="Write a commented configuration template to FILE and exit.",
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug diagnostics, including per-directory summaries.",
    )
    verbosity.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only show errors.",
    )

    return parser


def configure_logging(config: ScannerConfig, verbose: bool = False, quiet: bool = False) -> None:
    """Install the stderr handler for diagnostics and set the package log level."""
    level = config.logging.get_level()
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR

    logging.basicConfig(format=config.logging.format, stream=sys.stderr)
    logging.getLogger("logscan").setLevel(level)


def iter_paths(paths: Iterable[str], stdin: TextIO) -> Iterator[str]:
    """Expand '-' into the non-blank lines read from stdin."""
    for path in paths:
        if path == "-":
            for line in stdin:
                line = line.rstrip("\r\n")
                if line.strip():
                    yield line
        else:
            yield path


def build_request(path: str, args: argparse.Namespace, config: ScannerConfig) -> ScanRequest:
    """Layer command line options over configured defaults."""
    defaults = config.scan

    def pick(value, default):
        return default if value is None else value

    return ScanRequest(
        root=path,
        recurse=pick(args.recurse, defaults.recurse),
        older_than_days=pick(args.older_than, defaults.older_than_days),
        younger_than_days=pick(args.younger_than, defaults.younger_than_days),
        use_creation_date=pick(args.use_creation_date, defaults.use_creation_date),
        pattern=pick(args.pattern, defaults.pattern),
    )


def format_record(record: FileRecord, output_format: OutputFormat) -> str:
    if output_format is OutputFormat.JSON:
        return json.dumps(record.to_dict())
    if output_format is OutputFormat.PATH:
        return record.path
    return (
        f"{record.reference_date:%Y-%m-%d %H:%M}  "
        f"{record.size:>12}  "
        f"{record.age_days:>9.2f}d  "
        f"{record.path}"
    )


def run_scan(scanner: LogFileScanner, request: ScanRequest,
             output_format: OutputFormat, out: TextIO) -> bool:
    """
    Scan one root and write its records.

    Returns:
        True if the scan completed, False if it ended with a fatal error
    """
    try:
        for record in scanner.scan(request):
            print(format_record(record, output_format), file=out)
    except FatalScanError as e:
        logger.error(f"[{e.error_id}] {e}")
        return False
    return True


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.write_config_template:
        try:
            create_config_template(args.write_config_template)
        except ConfigurationError as e:
            print(f"logscan: {e}", file=sys.stderr)
            return EXIT_USAGE
        return EXIT_OK

    if not args.paths:
        parser.error("at least one PATH is required")

    try:
        result = load_config(args.config)
    except ConfigurationError as e:
        print(f"logscan: {e}", file=sys.stderr)
        return EXIT_USAGE

    config = result.config
    configure_logging(config, verbose=args.verbose, quiet=args.quiet)
    if not result.is_default:
        for warning in result.warnings:
            logger.warning(warning)

    output_format = OutputFormat(args.format) if args.format else config.output.format
    scanner = LogFileScanner()
    exit_code = EXIT_OK

    for path in iter_paths(args.paths, sys.stdin):
        try:
            request = build_request(path, args, config)
        except ValidationError as e:
            logger.error(f"Invalid scan parameters for {path!r}: {e}")
            exit_code = EXIT_SCAN_FAILED
            continue

        if not run_scan(scanner, request, output_format, sys.stdout):
            exit_code = EXIT_SCAN_FAILED

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
