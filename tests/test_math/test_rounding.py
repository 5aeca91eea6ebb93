"""Tests for round_to_increment and clamp."""

from __future__ import annotations

import math

import pytest

from autoregulation_engine.math.rounding import clamp, round_to_increment


class TestRoundToIncrement:
    def test_rounds_to_nearest_multiple(self) -> None:
        assert round_to_increment(101.0, 5.0) == 100.0
        assert round_to_increment(103.0, 5.0) == 105.0

    def test_fractional_increment(self) -> None:
        assert round_to_increment(92.0, 2.5) == pytest.approx(92.5)
        assert round_to_increment(60.9, 2.5) == pytest.approx(60.0)

    def test_exact_multiple_unchanged(self) -> None:
        assert round_to_increment(90.0, 5.0) == 90.0

    @pytest.mark.parametrize("increment", [0.0, -1.0, -2.5])
    def test_non_positive_increment_is_identity(self, increment: float) -> None:
        assert round_to_increment(97.3, increment) == 97.3
        assert round_to_increment(-4.2, increment) == -4.2

    def test_tie_result_is_a_multiple(self) -> None:
        result = round_to_increment(102.5, 5.0)
        assert result % 5.0 == 0.0

    def test_negative_values_round_symmetrically(self) -> None:
        assert round_to_increment(-103.0, 5.0) == -105.0

    def test_non_finite_value_returned_unchanged(self) -> None:
        assert math.isinf(round_to_increment(math.inf, 5.0))
        assert math.isnan(round_to_increment(math.nan, 5.0))


class TestClamp:
    def test_within_bounds(self) -> None:
        assert clamp(42.0, 0.0, 100.0) == 42.0

    def test_below_lower(self) -> None:
        assert clamp(-5.0, 0.0, 100.0) == 0.0

    def test_above_upper(self) -> None:
        assert clamp(140.0, 0.0, 100.0) == 100.0
