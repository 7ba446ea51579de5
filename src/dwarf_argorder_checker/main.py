"""Main entry point for the DWARF argument-order checker."""

import argparse
import sys
from pathlib import Path

from .application import ArgOrderChecker, save_summary, write_summary
from .core import BinaryInfo
from .domain.repositories.cache import SourceFileCache
from .infrastructure.config import Config, get_config
from .infrastructure.logging import LoggerSetup, get_logger


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        description="For a binary, report whether the order of function arguments "
        "described in DWARF at each function's prologue end matches the order "
        "in the source declaration",
        epilog="""
Output:
  A CSV header followed by one line:
  nFunctions,argumentError,tooManyPieces,missingSource,wrongOrder,missingDwarf,duplicated,1-totalErrors/nFunctions

Examples:
  # Summary only
  python main.py ./myprog

  # Show every mismatch
  python main.py ./myprog -e

  # Full per-function trace, summary also saved to a file
  python main.py ./myprog -v -o results/myprog.csv
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "binary",
        type=Path,
        nargs="?",
        help="Path to the binary to analyze",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Say more about what is found",
    )
    parser.add_argument(
        "-e",
        "--errors",
        action="store_true",
        help="Report more detail for errors",
    )
    parser.add_argument(
        "-o",
        "--output-csv",
        type=Path,
        metavar="FILE",
        help="Also write the summary CSV to FILE",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        help="Directory for the debug log file (default: ./logs)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Run the checker and print the CSV summary to stdout."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.binary is None:
        parser.print_help(sys.stderr)
        print("\nNo input file was provided.", file=sys.stderr)
        return

    try:
        config = Config.from_args(
            binary_path=args.binary,
            verbose=args.verbose,
            errors=args.errors,
            log_dir=args.log_dir,
            output_csv=args.output_csv,
        )
        config.validate()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    settings = get_config()
    log_dir = config.log_dir if settings["LOG_TO_FILE"] else None
    LoggerSetup.initialize(log_dir, verbose=config.verbose, errors=config.errors)
    logger = get_logger(__name__)
    logger.debug(f"Binary: {config.binary_path}")
    if (log_file := LoggerSetup.get_log_file_path()) is not None:
        logger.debug(f"Debug log: {log_file}")

    assert config.binary_path is not None
    try:
        with BinaryInfo(config.binary_path) as binary:
            checker = ArgOrderChecker(binary, SourceFileCache(), settings=settings)
            counters = checker.run()
    except Exception as e:
        logger.error(f"Fatal error during analysis: {e}")
        if config.verbose:
            import traceback

            traceback.print_exc()
        sys.exit(1)

    write_summary(counters, sys.stdout)
    if config.output_csv is not None:
        save_summary(counters, config.output_csv)
        logger.debug(f"Summary written to {config.output_csv}")


if __name__ == "__main__":
    main()
