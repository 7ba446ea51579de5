"""Tests for logging setup, timing and progress tracking."""

import logging
from collections.abc import Iterator
from pathlib import Path
from types import SimpleNamespace

import pytest

from dwarf_argorder_checker.infrastructure.logging import (
    LoggerSetup,
    ProgressTracker,
    log_timing,
)


@pytest.fixture
def fresh_logging() -> Iterator[None]:
    """Reset LoggerSetup and restore the root logger afterwards."""
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    LoggerSetup.reset()
    yield
    for handler in root.handlers:
        if handler not in saved_handlers:
            handler.close()
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)
    LoggerSetup.reset()


class TestLoggerSetup:
    """Tests for LoggerSetup."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "verbose,errors,level",
        [
            (False, False, logging.WARNING),
            (False, True, logging.INFO),
            (True, False, logging.DEBUG),
            (True, True, logging.DEBUG),
        ],
    )
    def test_console_level(self, verbose: bool, errors: bool, level: int) -> None:
        assert LoggerSetup.console_level(verbose, errors) == level

    @pytest.mark.unit
    def test_console_only(self, fresh_logging: None) -> None:
        LoggerSetup.initialize(None, errors=True)

        handlers = logging.getLogger().handlers
        assert LoggerSetup.is_initialized()
        assert LoggerSetup.get_log_file_path() is None
        assert len(handlers) == 1
        assert handlers[0].level == logging.INFO

    @pytest.mark.unit
    def test_file_handler(self, fresh_logging: None, tmp_path: Path) -> None:
        """Test that the log file is created and always receives DEBUG."""
        log_dir = tmp_path / "logs"
        LoggerSetup.initialize(log_dir)

        path = LoggerSetup.get_log_file_path()
        assert path is not None
        assert path.parent == log_dir
        assert path.name.startswith("argorder_check_")

        logging.getLogger("dwarf_argorder_checker.test").debug("trace line")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "trace line" in path.read_text(encoding="utf-8")

    @pytest.mark.unit
    def test_initialize_once(self, fresh_logging: None) -> None:
        LoggerSetup.initialize(None)
        LoggerSetup.initialize(None, verbose=True)
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert handlers[0].level == logging.WARNING


class TestLogTiming:
    """Tests for the log_timing decorator."""

    @pytest.mark.unit
    def test_returns_result(self, caplog: pytest.LogCaptureFixture) -> None:
        @log_timing
        def add(a: int, b: int) -> int:
            return a + b

        with caplog.at_level(logging.DEBUG):
            assert add(2, 3) == 5
        assert "Completed" in caplog.text

    @pytest.mark.unit
    def test_reraises(self, caplog: pytest.LogCaptureFixture) -> None:
        @log_timing
        def fail() -> None:
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            fail()
        assert "Failed" in caplog.text


class TestProgressTracker:
    """Tests for ProgressTracker."""

    @pytest.mark.unit
    def test_counts_and_summary(self, caplog: pytest.LogCaptureFixture) -> None:
        tracker = ProgressTracker(logging.getLogger("progress"))

        with caplog.at_level(logging.DEBUG):
            with tracker.track_operation("enumerate functions"):
                tracker.count_cu(SimpleNamespace(cu_offset=0x2A))
                tracker.count_function(0x401000)
                tracker.count_function(0)
                assert tracker.phase == "enumerate functions"
            tracker.report_summary()

        assert tracker.phase is None
        assert tracker.cu_count == 1
        assert tracker.function_count == 2
        assert tracker.abstract_count == 1
        assert "enumerate functions took" in caplog.text
        assert "1 CUs, 2 functions (1 without entry)" in caplog.text

    @pytest.mark.unit
    def test_heartbeat(self, caplog: pytest.LogCaptureFixture) -> None:
        tracker = ProgressTracker(logging.getLogger("progress"), report_every=2)

        with caplog.at_level(logging.DEBUG):
            tracker.count_cu(SimpleNamespace(cu_offset=0x10))
            tracker.count_cu(SimpleNamespace(cu_offset=0x2A))

        assert "scan: 2 CUs" in caplog.text
        assert "at CU 0x2a" in caplog.text

    @pytest.mark.unit
    def test_failed_operation_reraises(self, caplog: pytest.LogCaptureFixture) -> None:
        tracker = ProgressTracker(logging.getLogger("progress"))
        with pytest.raises(ValueError):
            with tracker.track_operation("scan"):
                raise ValueError("bad unit")
        assert tracker.phase is None
        assert "scan failed" in caplog.text
