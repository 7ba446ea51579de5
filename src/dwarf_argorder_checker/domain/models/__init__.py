#!/usr/bin/env python3

"""Domain models for argument-order checking."""

from .function_record import FunctionRecord
from .location import DebugParameter, DwarfRegisters, LocationFragment, LocationResult
from .outcome import CSV_HEADER, FAILURE_OUTCOMES, AggregateCounters, Outcome

__all__ = [
    "AggregateCounters",
    "CSV_HEADER",
    "DebugParameter",
    "DwarfRegisters",
    "FAILURE_OUTCOMES",
    "FunctionRecord",
    "LocationFragment",
    "LocationResult",
    "Outcome",
]
