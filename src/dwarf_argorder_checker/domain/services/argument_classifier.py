#!/usr/bin/env python3

"""Compare debug-info and source argument orders."""

from ..models import AggregateCounters, Outcome


def classify_arguments(debug_args: list[str], source_args: list[str]) -> Outcome:
    """Classify two ordered name lists; the first matching rule wins.

    More debug names than source names is MISSING_SOURCE, fewer is
    MISSING_DWARF. With equal lengths the lists are compared position by
    position and the first difference yields WRONG_ORDER.
    """
    if len(debug_args) > len(source_args):
        return Outcome.MISSING_SOURCE
    if len(debug_args) < len(source_args):
        return Outcome.MISSING_DWARF

    for debug_name, source_name in zip(debug_args, source_args):
        if debug_name != source_name:
            return Outcome.WRONG_ORDER

    return Outcome.SUCCESS


class ArgumentClassifier:
    """Classifies functions and accumulates the outcomes into counters."""

    def __init__(self, counters: AggregateCounters | None = None):
        self.counters = counters if counters is not None else AggregateCounters()

    def classify(self, debug_args: list[str], source_args: list[str]) -> Outcome:
        """Classify one function and record the outcome."""
        outcome = classify_arguments(debug_args, source_args)
        self.counters.record(outcome)
        return outcome

    def record_failure(self, outcome: Outcome) -> None:
        """Record a failure detected before comparison (resolution errors)."""
        self.counters.record(outcome)
