"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path
from typing import Generator

import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from dwarf_argorder_checker.core import BinaryInfo
from dwarf_argorder_checker.domain.models import DwarfRegisters
from dwarf_argorder_checker.infrastructure.config import Config


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Config:
    """Load configuration from a clean environment."""
    for name in ("BINARY_PATH", "VERBOSE", "ERRORS", "LOG_DIR", "OUTPUT_CSV"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return Config.from_env()


@pytest.fixture
def registers() -> DwarfRegisters:
    """Synthetic register context with the default base."""
    return DwarfRegisters.synthetic(0x1000)


@pytest.fixture(scope="session")
def binary_path() -> Path:
    """
    Return path to a Go binary with DWARF info, skipping if not configured.

    Set BINARY_PATH to run the integration tests.
    """
    import os

    path_str = os.getenv("BINARY_PATH")
    if not path_str or not Path(path_str).is_file():
        pytest.skip("BINARY_PATH not set to an existing binary")
    return Path(path_str)


@pytest.fixture
def binary(binary_path: Path) -> Generator[BinaryInfo, None, None]:
    """Open the integration binary for the duration of one test."""
    with BinaryInfo(binary_path) as info:
        yield info
