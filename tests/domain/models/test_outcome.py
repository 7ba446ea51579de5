#!/usr/bin/env python3

"""Unit tests for outcomes and aggregate counters."""

import math

import pytest

from dwarf_argorder_checker.domain.models import (
    CSV_HEADER,
    FAILURE_OUTCOMES,
    AggregateCounters,
    Outcome,
)


class TestOutcome:
    """Tests for the Outcome enum."""

    @pytest.mark.unit
    def test_string_representation(self) -> None:
        assert str(Outcome.WRONG_ORDER) == "wrongOrder"

    @pytest.mark.unit
    def test_failure_membership(self) -> None:
        """Test which outcomes count against the ratio."""
        assert len(FAILURE_OUTCOMES) == 6
        assert not Outcome.SUCCESS.is_failure
        assert not Outcome.UNPARSABLE_DECLARATION.is_failure
        assert Outcome.MISSING_DWARF.is_failure


class TestAggregateCounters:
    """Tests for AggregateCounters."""

    @pytest.mark.unit
    def test_starts_at_zero(self) -> None:
        assert all(value == 0 for value in AggregateCounters().as_dict().values())

    @pytest.mark.unit
    def test_record_each_failure(self) -> None:
        """Test that every failure outcome maps to its own counter."""
        counters = AggregateCounters()
        for outcome in FAILURE_OUTCOMES:
            counters.record(outcome)
        assert counters.total_errors == 6
        assert counters.as_dict()["n_functions"] == 0

    @pytest.mark.unit
    def test_success_and_unparsable_not_counted(self) -> None:
        counters = AggregateCounters()
        counters.record(Outcome.SUCCESS)
        counters.record(Outcome.UNPARSABLE_DECLARATION)
        assert counters.total_errors == 0

    @pytest.mark.unit
    def test_success_ratio(self) -> None:
        counters = AggregateCounters(n_functions=4, wrong_order=1)
        assert counters.success_ratio == pytest.approx(0.75)

    @pytest.mark.unit
    def test_success_ratio_without_functions_is_nan(self) -> None:
        """Test the documented division-by-zero edge case."""
        assert math.isnan(AggregateCounters().success_ratio)

    @pytest.mark.unit
    def test_csv_row_order(self) -> None:
        """Test that values follow the header columns."""
        counters = AggregateCounters(
            n_functions=10,
            argument_error=1,
            too_many_pieces=2,
            missing_source=3,
            wrong_order=1,
            missing_dwarf=1,
            duplicated=0,
        )
        assert CSV_HEADER[0] == "nFunctions"
        assert counters.csv_row() == ["10", "1", "2", "3", "1", "1", "0", "0.200000"]
