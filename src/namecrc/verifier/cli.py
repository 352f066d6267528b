"""CLI command for verifying file checksums."""

import logging
import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence, TextIO

import toml
from pydantic import ValidationError

from .config import NameCrcConfig
from .discovery import build_jobs
from .dispatcher import dispatch
from .errors import DispatchError
from .reporter import ResultReporter
from namecrc.common import setup_logging, ConfigLoader
from namecrc.common.config_utils import expand_path_variables

# Application name derived from package name
_package = __package__ or "namecrc.verifier"
APP_NAME = _package.replace('_', '-').replace('.', '-')

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG_ERROR = 2


def verify_command(
    config: 'NameCrcConfig',
    paths: Sequence[str],
    stream: Optional[TextIO] = None,
    recursive_override: Optional[bool] = None,
    worker_threads_override: Optional[int] = None,
) -> int:
    """Hash the given paths and report each against its embedded checksum.

    Args:
        config: Configuration object
        paths: Paths as given on the command line; empty means standard input
        stream: Where report lines go (default: stdout)
        recursive_override: Optional override for directory expansion
        worker_threads_override: Optional override for pool size

    Returns:
        Exit code: 0 if every file hashed and matched (or carried no
        token), 1 otherwise
    """
    # Use __package__ to avoid __main__ when run as module
    logger_name = __package__ or __name__
    logger = logging.getLogger(logger_name)

    stream = stream if stream is not None else sys.stdout
    recursive = recursive_override if recursive_override is not None else config.verifier.recursive
    worker_threads = worker_threads_override if worker_threads_override is not None else config.verifier.worker_threads

    jobs = build_jobs(paths, recursive=recursive)
    logger.info(f"Configuration: {{'jobs': {len(jobs)}, 'worker_threads': {worker_threads}, 'recursive': {recursive}}}")

    if not jobs:
        logger.warning("No files found to verify")
        return EXIT_OK

    reporter = ResultReporter(stream, show_path=len(jobs) > 1)

    try:
        for result in dispatch(
            jobs,
            worker_threads=worker_threads,
            queue_maxsize=config.verifier.queue_maxsize,
        ):
            reporter.report(result)
    except DispatchError as e:
        logger.exception(f"Verification aborted: {e}")
        return EXIT_FAILED

    reporter.log_summary()
    return EXIT_OK if reporter.summary.all_passed else EXIT_FAILED


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the namecrc command."""
    parser = argparse.ArgumentParser(
        description=(
            "Compute CRC32 checksums of files and compare them with a checksum "
            "embedded in the file name (e.g. video_1A2B3C4D.mkv). "
            "Reads standard input when no paths are given."
        )
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help="Files to verify (default: standard input)"
    )
    parser.add_argument(
        "-r", "--recursive",
        action="store_true",
        help="Verify every file beneath directory arguments (overrides config)"
    )
    parser.add_argument(
        "--workers",
        type=int,
        required=False,
        help="Number of hashing worker threads (overrides config)"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Log level (overrides config)"
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config file (TOML)"
    )

    args = parser.parse_args(argv)

    if args.workers is not None and args.workers < 1:
        parser.error("--workers must be at least 1")

    loader = ConfigLoader(
        app_name=APP_NAME,
        config_class=NameCrcConfig
    )

    try:
        config = loader.load(defaults_path=args.config)
    except (ValidationError, toml.TomlDecodeError, OSError) as e:
        setup_logging()
        logging.getLogger(__package__ or __name__).error(f"Invalid configuration: {e}")
        return EXIT_CONFIG_ERROR

    log_file = Path(expand_path_variables(config.logging.file)) if config.logging.file else None
    setup_logging(
        level=args.log_level or config.logging.level,
        format=config.logging.format,
        log_file=log_file,
    )

    return verify_command(
        config=config,
        paths=args.paths,
        recursive_override=True if args.recursive else None,
        worker_threads_override=args.workers,
    )


if __name__ == "__main__":
    sys.exit(main())
