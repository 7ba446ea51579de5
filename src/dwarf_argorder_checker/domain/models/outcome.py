#!/usr/bin/env python3

"""Classification outcomes and the aggregate counters they feed."""

from dataclasses import dataclass, fields
from enum import Enum


class Outcome(Enum):
    """Result of checking one function's argument order."""

    SUCCESS = "success"
    ARGUMENT_ERROR = "argumentError"
    TOO_MANY_PIECES = "tooManyPieces"
    DUPLICATED = "duplicated"
    MISSING_SOURCE = "missingSource"
    MISSING_DWARF = "missingDwarf"
    WRONG_ORDER = "wrongOrder"
    UNPARSABLE_DECLARATION = "unparsableDeclaration"

    def __str__(self) -> str:
        return self.value

    @property
    def is_failure(self) -> bool:
        """True for outcomes that count against the success ratio."""
        return self in FAILURE_OUTCOMES


FAILURE_OUTCOMES = frozenset(
    {
        Outcome.ARGUMENT_ERROR,
        Outcome.TOO_MANY_PIECES,
        Outcome.DUPLICATED,
        Outcome.MISSING_SOURCE,
        Outcome.MISSING_DWARF,
        Outcome.WRONG_ORDER,
    }
)

# Column order of the summary CSV
CSV_HEADER = [
    "nFunctions",
    "argumentError",
    "tooManyPieces",
    "missingSource",
    "wrongOrder",
    "missingDwarf",
    "duplicated",
    "1-totalErrors/nFunctions",
]

_COUNTER_FIELDS = {
    Outcome.ARGUMENT_ERROR: "argument_error",
    Outcome.TOO_MANY_PIECES: "too_many_pieces",
    Outcome.DUPLICATED: "duplicated",
    Outcome.MISSING_SOURCE: "missing_source",
    Outcome.MISSING_DWARF: "missing_dwarf",
    Outcome.WRONG_ORDER: "wrong_order",
}


@dataclass
class AggregateCounters:
    """Run-wide statistics, mutated by a single analysis pass."""

    n_functions: int = 0
    argument_error: int = 0
    too_many_pieces: int = 0
    missing_source: int = 0
    wrong_order: int = 0
    missing_dwarf: int = 0
    duplicated: int = 0

    def record(self, outcome: Outcome) -> None:
        """Increment the counter matching a failure outcome.

        SUCCESS and UNPARSABLE_DECLARATION have no counter of their own.
        """
        name = _COUNTER_FIELDS.get(outcome)
        if name is not None:
            setattr(self, name, getattr(self, name) + 1)

    @property
    def total_errors(self) -> int:
        return (
            self.argument_error
            + self.too_many_pieces
            + self.missing_source
            + self.wrong_order
            + self.missing_dwarf
            + self.duplicated
        )

    @property
    def success_ratio(self) -> float:
        """1 - totalErrors/nFunctions; NaN when no function was counted."""
        if self.n_functions == 0:
            return float("nan")
        return 1.0 - self.total_errors / self.n_functions

    def csv_row(self) -> list[str]:
        """Values in CSV_HEADER order."""
        return [
            str(self.n_functions),
            str(self.argument_error),
            str(self.too_many_pieces),
            str(self.missing_source),
            str(self.wrong_order),
            str(self.missing_dwarf),
            str(self.duplicated),
            f"{self.success_ratio:f}",
        ]

    def as_dict(self) -> dict[str, int]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
