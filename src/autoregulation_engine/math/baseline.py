"""Day normalization, trailing biometric baselines and component scoring.

The baseline for a metric is the arithmetic mean of that metric over the
half-open window [day - lookback, day). Each metric is averaged over the
entries that actually report it, so a night without an HRV reading does not
drag the HRV baseline toward zero.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo

import numpy as np
import pandas as pd

from autoregulation_engine.math.rounding import clamp
from autoregulation_engine.models.biometrics import BiometricDay, ExternalReadinessDay
from autoregulation_engine.models.enums import (
    BASELINE_LOOKBACK_DAYS,
    READINESS_SCORE_MAX,
    READINESS_SCORE_MIN,
)

METRIC_FIELDS = ("sleep_hours", "resting_heart_rate", "hrv")


@dataclass(frozen=True)
class MetricBaseline:
    """Trailing means per metric; None where no entry supplied the metric."""

    sleep_hours: float | None = None
    resting_heart_rate: float | None = None
    hrv: float | None = None
    sample_days: int = 0


def day_start(value: date | datetime, tz: tzinfo | None = None) -> date:
    """Floor a date or datetime to its calendar day.

    Aware datetimes are first converted to ``tz`` when one is given, so a
    late-evening UTC timestamp lands on the user's local day.
    """
    if isinstance(value, datetime):
        if tz is not None and value.tzinfo is not None:
            value = value.astimezone(tz)
        return value.date()
    return value


def present(value: float | None) -> bool:
    """True for a usable reading (not None, not NaN)."""
    return value is not None and not math.isnan(value)


def index_biometrics(
    history: Mapping[date | datetime, BiometricDay] | Iterable[BiometricDay],
    tz: tzinfo | None = None,
) -> dict[date, BiometricDay]:
    """Key biometric entries by calendar day.

    Accepts either a mapping keyed by day-start timestamps or a plain
    iterable of entries (keyed by their own ``day``).
    """
    if isinstance(history, Mapping):
        return {day_start(key, tz): entry for key, entry in history.items()}
    return {day_start(entry.day, tz): entry for entry in history}


def index_external_scores(
    external: Mapping[date | datetime, float | ExternalReadinessDay | None]
    | Iterable[ExternalReadinessDay]
    | None,
    tz: tzinfo | None = None,
) -> dict[date, float]:
    """Key third-party readiness scores by calendar day, dropping empty days."""
    if external is None:
        return {}
    if isinstance(external, Mapping):
        pairs = external.items()
    else:
        pairs = ((entry.day, entry) for entry in external)

    scores: dict[date, float] = {}
    for key, value in pairs:
        score = value.score if isinstance(value, ExternalReadinessDay) else value
        if present(score):
            scores[day_start(key, tz)] = float(score)  # type: ignore[arg-type]
    return scores


def trailing_window(
    days: Mapping[date, BiometricDay],
    day: date,
    lookback_days: int = BASELINE_LOOKBACK_DAYS,
) -> list[BiometricDay]:
    """Entries strictly before ``day`` and no more than ``lookback_days`` prior."""
    window_start = day - timedelta(days=lookback_days)
    return [
        entry
        for key, entry in sorted(days.items())
        if window_start <= key < day
    ]


def compute_baseline(entries: Iterable[BiometricDay]) -> MetricBaseline:
    """Mean of each metric over the entries that report it."""
    rows = [
        tuple(_as_float(getattr(entry, name)) for name in METRIC_FIELDS)
        for entry in entries
    ]
    frame = pd.DataFrame(rows, columns=list(METRIC_FIELDS), dtype=np.float64)
    means = frame.mean(skipna=True)

    return MetricBaseline(
        sleep_hours=_nan_to_none(means["sleep_hours"]),
        resting_heart_rate=_nan_to_none(means["resting_heart_rate"]),
        hrv=_nan_to_none(means["hrv"]),
        sample_days=len(rows),
    )


def metric_delta(current: float | None, baseline: float | None) -> float | None:
    """Raw current - baseline, or None when either side is missing."""
    if not present(current) or baseline is None:
        return None
    return current - baseline  # type: ignore[operator]


def component_score(
    current: float | None,
    baseline: float | None,
    slope: float,
    invert: bool = False,
) -> float | None:
    """Score one metric as 50 + slope * deviation, clamped to [0, 100].

    Args:
        current: Today's reading.
        baseline: Trailing mean for the same metric.
        slope: Points per unit of deviation.
        invert: True for lower-is-better metrics (resting heart rate).

    Returns:
        The component score, or None if either input is missing.
    """
    delta = metric_delta(current, baseline)
    if delta is None:
        return None
    if invert:
        delta = -delta
    return clamp(50.0 + slope * delta, READINESS_SCORE_MIN, READINESS_SCORE_MAX)


def _as_float(value: float | None) -> float:
    return float(value) if value is not None else np.nan


def _nan_to_none(value: float) -> float | None:
    return None if pd.isna(value) else float(value)
