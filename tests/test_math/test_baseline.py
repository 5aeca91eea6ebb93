"""Tests for day normalization, trailing baselines and component scores."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from autoregulation_engine.math.baseline import (
    component_score,
    compute_baseline,
    day_start,
    index_biometrics,
    index_external_scores,
    metric_delta,
    trailing_window,
)
from autoregulation_engine.models.biometrics import BiometricDay, ExternalReadinessDay

DAY = date(2026, 3, 16)


class TestDayStart:
    def test_date_passes_through(self) -> None:
        assert day_start(DAY) == DAY

    def test_datetime_floors_to_date(self) -> None:
        assert day_start(datetime(2026, 3, 16, 23, 59)) == DAY

    def test_aware_datetime_converted_to_tz(self) -> None:
        utc_evening = datetime(2026, 3, 16, 23, 30, tzinfo=timezone.utc)
        plus_two = timezone(timedelta(hours=2))
        assert day_start(utc_evening, plus_two) == date(2026, 3, 17)

    def test_aware_datetime_without_tz_uses_own_date(self) -> None:
        utc_evening = datetime(2026, 3, 16, 23, 30, tzinfo=timezone.utc)
        assert day_start(utc_evening) == DAY


class TestIndexing:
    def test_mapping_keys_are_floored(self) -> None:
        entry = BiometricDay(day=DAY, sleep_hours=7.0)
        indexed = index_biometrics({datetime(2026, 3, 16, 6, 0): entry})
        assert indexed == {DAY: entry}

    def test_iterable_uses_entry_day(self) -> None:
        entry = BiometricDay(day=datetime(2026, 3, 16, 7, 15), hrv=55.0)
        assert index_biometrics([entry]) == {DAY: entry}

    def test_external_none_is_empty(self) -> None:
        assert index_external_scores(None) == {}

    def test_external_accepts_floats_and_entries(self) -> None:
        scores = index_external_scores(
            {
                DAY: 80.0,
                DAY - timedelta(days=1): ExternalReadinessDay(day=DAY, score=60.0),
                DAY - timedelta(days=2): None,
            }
        )
        assert scores == {DAY: 80.0, DAY - timedelta(days=1): 60.0}

    def test_external_iterable_drops_missing_scores(self) -> None:
        scores = index_external_scores(
            [
                ExternalReadinessDay(day=DAY, score=None),
                ExternalReadinessDay(day=DAY - timedelta(days=3), score=91.0),
            ]
        )
        assert scores == {DAY - timedelta(days=3): 91.0}


class TestTrailingWindow:
    def _days(self, offsets: list[int]) -> dict[date, BiometricDay]:
        return {
            DAY + timedelta(days=o): BiometricDay(day=DAY + timedelta(days=o), hrv=float(o))
            for o in offsets
        }

    def test_excludes_today(self) -> None:
        window = trailing_window(self._days([0, -1]), DAY)
        assert [e.hrv for e in window] == [-1.0]

    def test_includes_fourteen_days_back(self) -> None:
        window = trailing_window(self._days([-14, -15]), DAY)
        assert [e.hrv for e in window] == [-14.0]

    def test_excludes_future(self) -> None:
        assert trailing_window(self._days([1, 5]), DAY) == []

    def test_custom_lookback(self) -> None:
        window = trailing_window(self._days([-1, -3, -7]), DAY, lookback_days=3)
        assert [e.hrv for e in window] == [-3.0, -1.0]


class TestComputeBaseline:
    def test_empty_window_has_no_baselines(self) -> None:
        baseline = compute_baseline([])
        assert baseline.sleep_hours is None
        assert baseline.resting_heart_rate is None
        assert baseline.hrv is None
        assert baseline.sample_days == 0

    def test_each_metric_averaged_over_reporting_days(self) -> None:
        entries = [
            BiometricDay(day=DAY, sleep_hours=7.0, hrv=50.0),
            BiometricDay(day=DAY, sleep_hours=8.0),
            BiometricDay(day=DAY, sleep_hours=6.0, hrv=70.0),
        ]
        baseline = compute_baseline(entries)
        assert baseline.sleep_hours == pytest.approx(7.0)
        assert baseline.hrv == pytest.approx(60.0)
        assert baseline.resting_heart_rate is None
        assert baseline.sample_days == 3


class TestComponentScore:
    def test_at_baseline_scores_fifty(self) -> None:
        assert component_score(7.5, 7.5, slope=15.0) == pytest.approx(50.0)

    def test_one_unit_above_baseline(self) -> None:
        assert component_score(8.5, 7.5, slope=15.0) == pytest.approx(65.0)

    def test_inverted_metric(self) -> None:
        # Resting HR 3 bpm above baseline is worse
        assert component_score(58.0, 55.0, slope=10.0, invert=True) == pytest.approx(20.0)

    def test_clamped_to_bounds(self) -> None:
        assert component_score(80.0, 40.0, slope=4.0) == 100.0
        assert component_score(10.0, 60.0, slope=4.0) == 0.0

    def test_missing_inputs_give_none(self) -> None:
        assert component_score(None, 7.5, slope=15.0) is None
        assert component_score(7.5, None, slope=15.0) is None
        assert component_score(float("nan"), 7.5, slope=15.0) is None

    def test_delta_is_raw_difference(self) -> None:
        assert metric_delta(58.0, 55.0) == pytest.approx(3.0)
        assert metric_delta(None, 55.0) is None
