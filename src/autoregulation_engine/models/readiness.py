"""Readiness snapshot — the estimator's output for a single day."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from autoregulation_engine.models.enums import ReadinessBand, ReadinessSource


@dataclass(frozen=True)
class ReadinessSnapshot:
    """Immutable readiness result for one calendar day.

    Created fresh per query. The optional fields carry the inputs behind a
    biometric-model score so presentation code can explain it without
    re-deriving anything; they are always None for third-party scores.
    """

    day: date
    score: float  # 0-100
    band: ReadinessBand
    multiplier: float
    source: ReadinessSource

    sleep_hours: float | None = None
    resting_hr_delta: float | None = None  # current - baseline, bpm
    hrv_delta: float | None = None  # current - baseline, ms
