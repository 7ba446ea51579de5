#!/usr/bin/env python3

"""Argument-order checker orchestrator (Application Layer).

Scans every function of a binary one at a time:
- filters out functions that cannot be checked (inlined, autogenerated,
  source unavailable, declaration not on a single line)
- extracts the declared order from the source line
- orders the debug-info parameters by address after the prologue
- classifies the comparison and accumulates the counters
"""

from typing import TYPE_CHECKING, Any

from ..domain.exceptions import ParameterResolutionError, UnparsableDeclarationError
from ..domain.models import AggregateCounters, DwarfRegisters, FunctionRecord, Outcome
from ..domain.repositories.cache import SourceFileCache
from ..domain.services import ArgumentClassifier, DebugArgumentOrderer, extract_source_arguments
from ..infrastructure.config import get_config
from ..infrastructure.logging import get_logger, log_timing

if TYPE_CHECKING:
    from ..core.binary_info import BinaryInfo

logger = get_logger(__name__)

_MISMATCH_MESSAGES = {
    Outcome.MISSING_SOURCE: "MISSING SOURCE ARGS",
    Outcome.MISSING_DWARF: "MISSING DWARF ARGS",
    Outcome.WRONG_ORDER: "ARGUMENT ORDER MISMATCH",
}


class ArgOrderChecker:
    """Checks debug-info argument order against source declarations."""

    def __init__(
        self,
        binary: "BinaryInfo",
        source_cache: SourceFileCache | None = None,
        orderer: DebugArgumentOrderer | None = None,
        settings: dict[str, Any] | None = None,
    ):
        """
        Args:
            binary: Entered BinaryInfo (or any object with ``functions``,
                ``prologue_end_pc`` and ``location_evaluator``)
            source_cache: Source line provider, defaults to a fresh cache
            orderer: Debug argument orderer, defaults to one built on the
                binary's location evaluator and a synthetic register context
            settings: Tunables from ``get_config()``
        """
        self.binary = binary
        self.source_cache = source_cache if source_cache is not None else SourceFileCache()
        self.settings = settings if settings is not None else get_config()

        if orderer is None:
            registers = DwarfRegisters.synthetic(self.settings["SYNTHETIC_CFA"])
            orderer = DebugArgumentOrderer(binary.location_evaluator, registers)
        self.orderer = orderer

        self.counters = AggregateCounters()
        self.classifier = ArgumentClassifier(self.counters)
        self.count = 0
        self.count_with_sortable_args = 0
        self.total_functions = 0

    @log_timing
    def run(self) -> AggregateCounters:
        """Check every function of the binary and return the counters."""
        functions = self.binary.functions
        self.total_functions = len(functions)

        for fn in functions:
            self.check_function(fn)

        logger.debug(f"non-inlined non-autogenerated: {self.count} / {self.total_functions}")
        logger.debug(f"with sortable args: {self.count_with_sortable_args} / {self.total_functions}")
        logger.debug(f"Source cache: {self.source_cache.stats()}")
        return self.counters

    def declaration_line(self, fn: FunctionRecord) -> str | None:
        """Return the stripped declaration line of an eligible function.

        Returns None for functions that are not checked: no entry address,
        unknown or autogenerated file, no line, unreadable source, line out
        of range, or a line without the function marker.
        """
        if fn.entry == 0:
            return None
        if not fn.file or fn.file == self.settings["AUTOGENERATED_FILE"]:
            return None
        if fn.line <= 0:
            return None

        lines = self.source_cache.get_lines(fn.file)
        if not lines:
            logger.warning(f"SOURCE FILE NOT FOUND ({fn.name} in {fn.file})")
            return None
        if fn.line >= len(lines):
            logger.warning(
                f"LINE {fn.line} EXCEEDS RANGE {len(lines) - 1} ({fn.name} in {fn.file})"
            )
            return None

        line = lines[fn.line - 1].strip()
        if self.settings["FUNC_MARKER"] not in line:
            return None
        return line

    def check_function(self, fn: FunctionRecord) -> Outcome | None:
        """Check one function.

        Returns:
            The outcome, or None if the function was not eligible
        """
        line = self.declaration_line(fn)
        if line is None:
            return None

        logger.debug(f"function: {fn.name}")
        logger.debug(f"\tDeclaration: {line}")
        self.counters.n_functions += 1
        self.count += 1

        try:
            source_args = extract_source_arguments(line)
        except UnparsableDeclarationError as e:
            logger.warning(f"COULD NOT PARSE ({fn.name} in {fn.file}, err = {e})")
            return e.outcome

        pc = self.binary.prologue_end_pc(fn)
        logger.debug(f"\tprologue ends at {pc:#x} (entry: {fn.entry:#x})")

        try:
            debug_args = self.orderer.order(fn.die, pc)
        except ParameterResolutionError as e:
            self.classifier.record_failure(e.outcome)
            logger.info(f"\t{e}")
            logger.info(f"ARGS FAILED ({fn.name} in {fn.file})")
            return e.outcome

        logger.debug(f"\tDWARF arguments:\t{debug_args}")
        logger.debug(f"\tSource arguments:\t{source_args}")
        self.count_with_sortable_args += 1

        outcome = self.classifier.classify(debug_args, source_args)
        message = _MISMATCH_MESSAGES.get(outcome)
        if message is not None:
            logger.info(
                f"{message} ({fn.name} in {fn.file}, "
                f"dwarfArgs={debug_args}, sourceArgs={source_args})"
            )
        return outcome
