"""Daily biometric and third-party readiness inputs.

Both are supplied by external collaborators (health-platform sync, readiness
service sync) and are read, never mutated, by the engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class BiometricDay:
    """One calendar day's observed biometrics. Any metric may be missing."""

    day: date | datetime
    sleep_hours: float | None = None
    resting_heart_rate: float | None = None
    hrv: float | None = None  # Heart-rate variability, ms


@dataclass(frozen=True)
class ExternalReadinessDay:
    """Third-party readiness score for one day, nominally in [0, 100]."""

    day: date | datetime
    score: float | None = None
