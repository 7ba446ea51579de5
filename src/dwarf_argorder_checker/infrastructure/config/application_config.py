"""Run configuration for the argument-order checker."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


def _env_flag(name: str) -> bool:
    return os.getenv(name, "false").lower() in ("true", "1", "yes")


@dataclass
class Config:
    """Configuration for one checker run."""

    binary_path: Path | None = None
    verbose: bool = False
    errors: bool = False
    log_dir: Path | None = Path("logs")
    output_csv: Path | None = None

    @classmethod
    def from_env(cls, env_path: Optional[Path] = None) -> "Config":
        """
        Load configuration from environment variables or .env file.

        Args:
            env_path: Optional path to .env file (defaults to .env in current directory)

        Returns:
            Config object
        """
        if env_path is None:
            env_path = Path.cwd() / ".env"

        if env_path.exists():
            load_dotenv(env_path)

        binary_path_str = os.getenv("BINARY_PATH")
        log_dir_str = os.getenv("LOG_DIR", "logs")
        output_csv_str = os.getenv("OUTPUT_CSV")

        return cls(
            binary_path=Path(binary_path_str) if binary_path_str else None,
            verbose=_env_flag("VERBOSE"),
            errors=_env_flag("ERRORS"),
            # an empty LOG_DIR disables the log file
            log_dir=Path(log_dir_str) if log_dir_str else None,
            output_csv=Path(output_csv_str) if output_csv_str else None,
        )

    @classmethod
    def from_args(
        cls,
        binary_path: Optional[Path] = None,
        verbose: Optional[bool] = None,
        errors: Optional[bool] = None,
        log_dir: Optional[Path] = None,
        output_csv: Optional[Path] = None,
    ) -> "Config":
        """
        Create configuration from explicit arguments, falling back to environment.

        Flags only override the environment when set, so ``-v`` can turn
        verbose mode on but never off.

        Returns:
            Config object
        """
        config = cls.from_env()

        if binary_path is not None:
            config.binary_path = binary_path
        if verbose:
            config.verbose = True
        if errors:
            config.errors = True
        if log_dir is not None:
            config.log_dir = log_dir
        if output_csv is not None:
            config.output_csv = output_csv

        return config

    def validate(self) -> None:
        """
        Validate the configuration.

        Raises:
            ValueError: If configuration is invalid
        """
        if self.binary_path is None:
            raise ValueError("No input file was provided")

        if not self.binary_path.exists():
            raise ValueError(f"Binary not found: {self.binary_path}")

        if not self.binary_path.is_file():
            raise ValueError(f"Not a file: {self.binary_path}")

