#!/usr/bin/env python3

"""Progress reporting for the subprogram scan."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from time import time
from typing import Any


class ProgressTracker:
    """
    Count what a DWARF scan visits and report it at DEBUG level.

    Large Go binaries hold thousands of compilation units, so a heartbeat
    line is logged every ``report_every`` units.
    """

    def __init__(self, logger: logging.Logger, report_every: int = 500):
        """
        Args:
            logger: Logger receiving the progress lines
            report_every: Number of compilation units between heartbeats
        """
        self.logger = logger
        self.report_every = report_every
        self.started = time()
        self.cu_count = 0
        self.function_count = 0
        self.abstract_count = 0
        self.phase: str | None = None

    @contextmanager
    def track_operation(self, phase: str) -> Iterator[None]:
        """Time one phase of the scan; failures are logged and re-raised."""
        self.phase = phase
        phase_start = time()
        try:
            yield
        except Exception as e:
            self.logger.error(f"{phase} failed after {time() - phase_start:.3f}s: {e}")
            raise
        else:
            self.logger.debug(f"{phase} took {time() - phase_start:.3f}s")
        finally:
            self.phase = None

    def count_cu(self, cu: Any) -> None:
        """Record a compilation unit; logs a heartbeat every ``report_every`` units."""
        self.cu_count += 1
        if self.cu_count % self.report_every == 0:
            offset = getattr(cu, "cu_offset", 0)
            self.logger.debug(
                f"{self.phase or 'scan'}: {self.cu_count} CUs, "
                f"{self.function_count} functions (at CU 0x{offset:x})"
            )

    def count_function(self, entry: int = 1) -> None:
        """Record a subprogram; an entry of 0 marks an inlined-only (abstract) one."""
        self.function_count += 1
        if entry == 0:
            self.abstract_count += 1

    def report_summary(self) -> None:
        elapsed = time() - self.started
        self.logger.debug(
            f"Scanned {self.cu_count} CUs, {self.function_count} functions "
            f"({self.abstract_count} without entry) in {elapsed:.2f}s"
        )
