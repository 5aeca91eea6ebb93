"""ReadinessEstimator — daily readiness score, band and load multiplier.

A third-party readiness score for the day always wins. Without one, the
score is derived from how today's sleep, resting heart rate and HRV deviate
from their trailing 14-day baselines. Each available metric yields a
component score centered on 50; the composite is their mean.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime, tzinfo

from autoregulation_engine.math.baseline import (
    MetricBaseline,
    component_score,
    compute_baseline,
    day_start,
    index_biometrics,
    index_external_scores,
    metric_delta,
    present,
    trailing_window,
)
from autoregulation_engine.math.rounding import clamp
from autoregulation_engine.models.biometrics import BiometricDay, ExternalReadinessDay
from autoregulation_engine.models.enums import (
    BASELINE_LOOKBACK_DAYS,
    BIOMETRIC_HIGH_THRESHOLD,
    BIOMETRIC_LOW_THRESHOLD,
    HRV_SLOPE,
    NEUTRAL_READINESS_SCORE,
    READINESS_SCORE_MAX,
    READINESS_SCORE_MIN,
    RESTING_HR_SLOPE,
    SLEEP_SLOPE,
    THIRD_PARTY_HIGH_THRESHOLD,
    THIRD_PARTY_LOW_THRESHOLD,
    ReadinessBand,
    ReadinessSource,
)
from autoregulation_engine.models.progression import ProgressionRule
from autoregulation_engine.models.readiness import ReadinessSnapshot

logger = logging.getLogger(__name__)

BiometricHistory = Mapping[date | datetime, BiometricDay] | Iterable[BiometricDay]
ExternalReadiness = (
    Mapping[date | datetime, float | ExternalReadinessDay | None]
    | Iterable[ExternalReadinessDay]
)


@dataclass(frozen=True)
class ReadinessComponent:
    """One biometric contributing to the composite score."""

    metric: str  # BiometricDay / MetricBaseline field name
    slope: float
    invert: bool = False  # lower-is-better metric


DEFAULT_COMPONENTS: tuple[ReadinessComponent, ...] = (
    ReadinessComponent("sleep_hours", SLEEP_SLOPE),
    ReadinessComponent("resting_heart_rate", RESTING_HR_SLOPE, invert=True),
    ReadinessComponent("hrv", HRV_SLOPE),
)


def third_party_band(score: float) -> ReadinessBand:
    """Band for a third-party score: <70 LOW, >=85 HIGH."""
    if score < THIRD_PARTY_LOW_THRESHOLD:
        return ReadinessBand.LOW
    if score >= THIRD_PARTY_HIGH_THRESHOLD:
        return ReadinessBand.HIGH
    return ReadinessBand.NEUTRAL


def biometric_band(score: float) -> ReadinessBand:
    """Band for a biometric-model score: <35 LOW, >70 HIGH.

    Biometric scores are centered on 50 by construction, so these
    thresholds sit lower than the third-party ones.
    """
    if score < BIOMETRIC_LOW_THRESHOLD:
        return ReadinessBand.LOW
    if score > BIOMETRIC_HIGH_THRESHOLD:
        return ReadinessBand.HIGH
    return ReadinessBand.NEUTRAL


class ReadinessEstimator:
    """Produces a ReadinessSnapshot for a day. Never raises.

    Usage:
        estimator = ReadinessEstimator()
        snapshot = estimator.snapshot(history, external, day, rule)
    """

    def __init__(
        self,
        components: tuple[ReadinessComponent, ...] = DEFAULT_COMPONENTS,
        lookback_days: int = BASELINE_LOOKBACK_DAYS,
    ) -> None:
        self.components = components
        self.lookback_days = lookback_days

    def snapshot(
        self,
        history: BiometricHistory,
        external: ExternalReadiness | None,
        day: date | datetime,
        rule: ProgressionRule,
        tz: tzinfo | None = None,
    ) -> ReadinessSnapshot:
        """Compute readiness for ``day``.

        Args:
            history: Biometric entries keyed by day-start (or an iterable of
                entries). Entries on or after ``day`` other than ``day``
                itself are ignored.
            external: Optional third-party scores keyed by day-start.
            day: The day to score; floored to its calendar day.
            rule: Supplies the band → multiplier lookup.
            tz: Timezone used to floor aware datetimes to local days.

        Returns:
            A fresh ReadinessSnapshot. With no usable data the score is 50.0
            and the band NEUTRAL.
        """
        today = day_start(day, tz)

        external_score = index_external_scores(external, tz).get(today)
        if external_score is not None:
            return self._third_party_snapshot(today, external_score, rule)

        days = index_biometrics(history, tz)
        baseline = compute_baseline(trailing_window(days, today, self.lookback_days))
        return self._biometric_snapshot(today, days.get(today), baseline, rule)

    def _third_party_snapshot(
        self, today: date, raw_score: float, rule: ProgressionRule
    ) -> ReadinessSnapshot:
        score = clamp(raw_score, READINESS_SCORE_MIN, READINESS_SCORE_MAX)
        band = third_party_band(score)
        logger.debug(
            "Readiness %s from third-party score %.1f → %s", today, score, band.name
        )
        return ReadinessSnapshot(
            day=today,
            score=score,
            band=band,
            multiplier=rule.multiplier(band),
            source=ReadinessSource.THIRD_PARTY,
        )

    def _biometric_snapshot(
        self,
        today: date,
        current: BiometricDay | None,
        baseline: MetricBaseline,
        rule: ProgressionRule,
    ) -> ReadinessSnapshot:
        scores: list[float] = []
        for component in self.components:
            value = self._reading(current, component.metric)
            reference = getattr(baseline, component.metric)
            result = component_score(value, reference, component.slope, component.invert)
            if result is not None:
                scores.append(result)

        if scores:
            score = clamp(
                sum(scores) / len(scores), READINESS_SCORE_MIN, READINESS_SCORE_MAX
            )
        else:
            score = NEUTRAL_READINESS_SCORE
        band = biometric_band(score)

        logger.debug(
            "Readiness %s from %d biometric component(s) over %d baseline day(s): "
            "%.1f → %s",
            today,
            len(scores),
            baseline.sample_days,
            score,
            band.name,
        )

        sleep_hours = self._reading(current, "sleep_hours")
        return ReadinessSnapshot(
            day=today,
            score=score,
            band=band,
            multiplier=rule.multiplier(band),
            source=ReadinessSource.BIOMETRIC_MODEL,
            sleep_hours=sleep_hours if present(sleep_hours) else None,
            resting_hr_delta=metric_delta(
                self._reading(current, "resting_heart_rate"),
                baseline.resting_heart_rate,
            ),
            hrv_delta=metric_delta(self._reading(current, "hrv"), baseline.hrv),
        )

    @staticmethod
    def _reading(current: BiometricDay | None, metric: str) -> float | None:
        if current is None:
            return None
        return getattr(current, metric, None)
