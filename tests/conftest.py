"""Shared test fixtures: progression rules, planned targets, biometric histories."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Callable

import pytest

from autoregulation_engine.models.biometrics import BiometricDay
from autoregulation_engine.models.progression import PlannedExerciseTarget, ProgressionRule

TODAY = date(2026, 3, 16)

HistoryFactory = Callable[..., dict[date, BiometricDay]]


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def default_rule() -> ProgressionRule:
    """Stock rule: 2.5 increment, 2 misses, 5% deload, 0.92/1.00/1.03."""
    return ProgressionRule.default()


@pytest.fixture
def five_pound_rule() -> ProgressionRule:
    """5 lb steps, deload 10% after 3 misses, 0.9/1.0/1.1 multipliers."""
    return ProgressionRule(
        weight_increment=5.0,
        miss_threshold=3,
        deload_percent=0.1,
        low_multiplier=0.9,
        neutral_multiplier=1.0,
        high_multiplier=1.1,
    )


@pytest.fixture
def squat_target() -> PlannedExerciseTarget:
    """Back squat at 100 for 8-10 reps, no misses so far."""
    return PlannedExerciseTarget(
        target_weight=100.0,
        rep_range_lower=8,
        rep_range_upper=10,
        exercise_name="Back Squat",
    )


@pytest.fixture
def pullup_target() -> PlannedExerciseTarget:
    """Bodyweight pull-ups: no target weight."""
    return PlannedExerciseTarget(
        target_weight=None,
        rep_range_lower=6,
        rep_range_upper=10,
        exercise_name="Pull-up",
    )


@pytest.fixture
def stable_history() -> dict[date, BiometricDay]:
    """14 days before TODAY with sleep 7.5 h, resting HR 55, HRV 60."""
    history: dict[date, BiometricDay] = {}
    for offset in range(1, 15):
        day = TODAY - timedelta(days=offset)
        history[day] = BiometricDay(
            day=day, sleep_hours=7.5, resting_heart_rate=55.0, hrv=60.0
        )
    return history


@pytest.fixture
def history_with_today(
    stable_history: dict[date, BiometricDay],
) -> HistoryFactory:
    """Factory: the stable history plus a reading for TODAY."""

    def factory(
        sleep_hours: float | None = None,
        resting_heart_rate: float | None = None,
        hrv: float | None = None,
    ) -> dict[date, BiometricDay]:
        history = dict(stable_history)
        history[TODAY] = BiometricDay(
            day=TODAY,
            sleep_hours=sleep_hours,
            resting_heart_rate=resting_heart_rate,
            hrv=hrv,
        )
        return history

    return factory
