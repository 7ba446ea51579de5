#!/usr/bin/env python3

"""Per-function failures raised while checking argument order.

These are recoverable: the checker records them and moves on to the next
function. Errors coming from pyelftools itself are not wrapped and abort
the run.
"""

from .models.outcome import Outcome


class ArgOrderError(Exception):
    """Base class for recoverable per-function failures."""


class ParameterResolutionError(ArgOrderError):
    """A formal parameter could not be reduced to a single address."""

    outcome = Outcome.ARGUMENT_ERROR

    def __init__(self, message: str, parameter: str | None = None):
        super().__init__(message)
        self.parameter = parameter


class LocationEvaluationError(ParameterResolutionError):
    """The location expression could not be evaluated at the given PC."""

    outcome = Outcome.ARGUMENT_ERROR


class TooManyPiecesError(ParameterResolutionError):
    """The location reconciles to more than one disjoint fragment."""

    outcome = Outcome.TOO_MANY_PIECES


class DuplicatedPiecesError(ParameterResolutionError):
    """The fragment list contained exact duplicates."""

    outcome = Outcome.DUPLICATED


class UnparsableDeclarationError(ArgOrderError):
    """The captured declaration line does not parse."""

    outcome = Outcome.UNPARSABLE_DECLARATION
