"""Progression models — rules, planned targets, logged sets and evaluations."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from autoregulation_engine.exceptions import InvalidProgressionRule
from autoregulation_engine.models.enums import (
    DEFAULT_DELOAD_PERCENT,
    DEFAULT_HIGH_MULTIPLIER,
    DEFAULT_LOW_MULTIPLIER,
    DEFAULT_MISS_THRESHOLD,
    DEFAULT_NEUTRAL_MULTIPLIER,
    DEFAULT_SET_COUNT,
    DEFAULT_WEIGHT_INCREMENT,
    ReadinessBand,
)
from autoregulation_engine.models.readiness import ReadinessSnapshot


def normalize_exercise_name(name: str) -> str:
    """Key used to match planned exercises to logged ones."""
    return name.strip().casefold()


@dataclass(frozen=True)
class ProgressionRule:
    """Caller-owned progression configuration.

    Governs readiness multipliers, deload size, miss tolerance and the
    weight step. The engine reads it but never validates it; callers that
    want guarantees run validate() first.
    """

    weight_increment: float = DEFAULT_WEIGHT_INCREMENT
    miss_threshold: int = DEFAULT_MISS_THRESHOLD
    deload_percent: float = DEFAULT_DELOAD_PERCENT
    low_multiplier: float = DEFAULT_LOW_MULTIPLIER
    neutral_multiplier: float = DEFAULT_NEUTRAL_MULTIPLIER
    high_multiplier: float = DEFAULT_HIGH_MULTIPLIER

    @classmethod
    def default(cls) -> ProgressionRule:
        return cls()

    def multiplier(self, band: ReadinessBand) -> float:
        """Load multiplier for a readiness band."""
        if band == ReadinessBand.LOW:
            return self.low_multiplier
        if band == ReadinessBand.HIGH:
            return self.high_multiplier
        return self.neutral_multiplier

    def validate(self) -> ProgressionRule:
        """Check every field is in its legal range.

        Returns:
            self, so construction and validation can be chained.

        Raises:
            InvalidProgressionRule: naming the first offending field.
        """
        if self.miss_threshold < 1:
            raise InvalidProgressionRule(
                "miss_threshold", f"must be >= 1, got {self.miss_threshold}"
            )
        if not 0.0 <= self.deload_percent < 1.0:
            raise InvalidProgressionRule(
                "deload_percent", f"must be in [0, 1), got {self.deload_percent}"
            )
        if not math.isfinite(self.weight_increment) or self.weight_increment < 0:
            raise InvalidProgressionRule(
                "weight_increment",
                f"must be a finite value >= 0, got {self.weight_increment}",
            )
        for name in ("low_multiplier", "neutral_multiplier", "high_multiplier"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise InvalidProgressionRule(name, f"must be positive, got {value}")
        return self


@dataclass(frozen=True)
class PlannedExerciseTarget:
    """Planned weight and rep range for one exercise occurrence.

    ``target_weight=None`` marks a bodyweight or cardio exercise that is
    exempt from weight-based adjustment. ``failure_streak`` belongs to the
    caller's program state; the engine only returns updated copies.
    """

    target_weight: float | None
    rep_range_lower: int
    rep_range_upper: int
    failure_streak: int = 0
    exercise_name: str = ""
    set_count: int = DEFAULT_SET_COUNT

    @property
    def rep_range(self) -> tuple[int, int]:
        """(lo, hi) with inverted bounds swapped."""
        return (
            min(self.rep_range_lower, self.rep_range_upper),
            max(self.rep_range_lower, self.rep_range_upper),
        )

    @property
    def default_reps(self) -> int:
        lo, hi = self.rep_range
        return (lo + hi) // 2

    @property
    def is_weighted(self) -> bool:
        return self.target_weight is not None and self.target_weight > 0


@dataclass(frozen=True)
class LoggedSet:
    """One completed set."""

    weight: float
    reps: int


@dataclass(frozen=True)
class ExerciseProgressEvaluation:
    """Next planned target for an exercise plus whether this occurrence succeeded."""

    next_target: PlannedExerciseTarget
    was_successful: bool


@dataclass(frozen=True)
class SessionEvaluation:
    """Per-exercise evaluations for one completed program day.

    ``readiness`` is the snapshot the day was trained under, when the caller
    supplied one; it is kept with the result for completion records.
    """

    evaluations: tuple[ExerciseProgressEvaluation, ...] = field(default_factory=tuple)
    readiness: ReadinessSnapshot | None = None

    @property
    def successful_count(self) -> int:
        return sum(1 for e in self.evaluations if e.was_successful)

    @property
    def total_count(self) -> int:
        return len(self.evaluations)

    @property
    def adherence_ratio(self) -> float:
        """Fraction of exercises that succeeded (0.0 for an empty day)."""
        return self.successful_count / max(self.total_count, 1)

    @property
    def next_targets_by_name(self) -> dict[str, PlannedExerciseTarget]:
        """Next targets keyed by normalized exercise name; later entries win."""
        return {
            normalize_exercise_name(e.next_target.exercise_name): e.next_target
            for e in self.evaluations
        }


@dataclass(frozen=True)
class DayPlan:
    """A program day's targets after readiness adjustment."""

    readiness: ReadinessSnapshot
    adjusted_targets: tuple[PlannedExerciseTarget, ...] = field(default_factory=tuple)
