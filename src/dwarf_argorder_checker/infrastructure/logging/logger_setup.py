#!/usr/bin/env python3

"""Root logger configuration driven by the -v/-e flags."""

import logging
import sys
from datetime import datetime
from pathlib import Path

CONSOLE_FORMAT = "%(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class LoggerSetup:
    """Installs the console handler and the optional debug log file.

    Per-function traces are DEBUG, failure diagnostics INFO and skipped
    sources WARNING, so the console level alone selects what a run shows.
    The log file, when enabled, always records everything.
    """

    _initialized = False
    _log_file_path: Path | None = None

    @staticmethod
    def console_level(verbose: bool = False, errors: bool = False) -> int:
        """Map the -v/-e flags to a console log level."""
        if verbose:
            return logging.DEBUG
        if errors:
            return logging.INFO
        return logging.WARNING

    @staticmethod
    def _console_handler(level: int) -> logging.Handler:
        # shares stdout with the CSV summary, which is printed last
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        return handler

    @staticmethod
    def _file_handler(path: Path) -> logging.Handler:
        handler = logging.FileHandler(path, encoding="utf-8")
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        return handler

    @classmethod
    def initialize(
        cls, log_dir: Path | None, verbose: bool = False, errors: bool = False
    ) -> None:
        """
        Configure the root logger once per process.

        Args:
            log_dir: Directory for ``argorder_check_<timestamp>.log``, or None
                for console output only
            verbose: Show per-function traces on the console
            errors: Show failure diagnostics on the console
        """
        if cls._initialized:
            return

        root = logging.getLogger()
        root.setLevel(logging.DEBUG)
        root.handlers.clear()
        root.addHandler(cls._console_handler(cls.console_level(verbose, errors)))

        if log_dir is not None:
            log_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            cls._log_file_path = log_dir / f"argorder_check_{stamp}.log"
            root.addHandler(cls._file_handler(cls._log_file_path))

        cls._initialized = True
        logging.getLogger(__name__).debug(
            f"Logging ready (verbose={verbose}, errors={errors}, file={cls._log_file_path})"
        )

    @classmethod
    def reset(cls) -> None:
        """Forget the previous initialization so ``initialize`` runs again."""
        cls._initialized = False
        cls._log_file_path = None

    @classmethod
    def get_log_file_path(cls) -> Path | None:
        return cls._log_file_path

    @classmethod
    def is_initialized(cls) -> bool:
        return cls._initialized
