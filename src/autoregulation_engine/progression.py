"""ProgressionEvaluator — advance, hold or deload the next planned target.

Evaluated once per exercise occurrence against the heaviest completed set
(the "top set"):

    success  top set within 1.5% of target weight and at the top of the
             rep range → add one weight increment, reset the streak.
    miss     top set below the rep range, or more than 3% under weight,
             or nothing logged → streak + 1; deload once the streak reaches
             the rule's miss threshold, then reset the streak.
    hold     anything else (full weight, reps inside the range but short of
             the top) → target and streak unchanged.

The hold state has no exit other than eventually hitting the top of the
rep range, so a lifter stuck mid-range never accrues strikes toward a
deload. That is kept as-is.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Mapping, Sequence

from autoregulation_engine.math.baseline import present
from autoregulation_engine.math.rounding import round_to_increment
from autoregulation_engine.models.enums import (
    HIT_WEIGHT_TOLERANCE,
    UNDERLOADED_TOLERANCE,
)
from autoregulation_engine.models.progression import (
    ExerciseProgressEvaluation,
    LoggedSet,
    PlannedExerciseTarget,
    ProgressionRule,
    SessionEvaluation,
    normalize_exercise_name,
)
from autoregulation_engine.models.readiness import ReadinessSnapshot

logger = logging.getLogger(__name__)


def select_top_set(completed_sets: Iterable[LoggedSet]) -> LoggedSet | None:
    """Heaviest set, ties broken by more reps. None when nothing was logged.

    Sets without a usable weight (NaN) are ignored.
    """
    return max(
        (s for s in completed_sets if present(s.weight)),
        key=lambda s: (s.weight, s.reps),
        default=None,
    )


class ProgressionEvaluator:
    """Decides the next planned target for an exercise. Never raises."""

    def evaluate(
        self,
        planned: PlannedExerciseTarget,
        completed_sets: Sequence[LoggedSet],
        rule: ProgressionRule,
    ) -> ExerciseProgressEvaluation:
        """Evaluate one exercise occurrence.

        Args:
            planned: The target the lifter trained against.
            completed_sets: Sets actually logged for this occurrence.
            rule: Supplies the weight increment, miss threshold and deload.

        Returns:
            The next target and whether this occurrence was a success.
            Bodyweight/cardio targets are returned unchanged as successes.
        """
        if not planned.is_weighted:
            return ExerciseProgressEvaluation(next_target=planned, was_successful=True)

        weight: float = planned.target_weight  # type: ignore[assignment]
        top_set = select_top_set(completed_sets)
        if top_set is None:
            return ExerciseProgressEvaluation(
                next_target=self._record_miss(planned, weight, rule),
                was_successful=False,
            )

        lo, hi = planned.rep_range
        hit_weight = top_set.weight >= weight * HIT_WEIGHT_TOLERANCE
        hit_reps = top_set.reps >= hi
        failed_reps = top_set.reps < lo
        under_loaded = top_set.weight < weight * UNDERLOADED_TOLERANCE

        if hit_weight and hit_reps:
            next_weight = round_to_increment(
                weight + rule.weight_increment, rule.weight_increment
            )
            logger.debug(
                "%s: top set %s x %d met target, advancing %s → %s",
                planned.exercise_name or "exercise",
                top_set.weight,
                top_set.reps,
                weight,
                next_weight,
            )
            return ExerciseProgressEvaluation(
                next_target=dataclasses.replace(
                    planned, target_weight=next_weight, failure_streak=0
                ),
                was_successful=True,
            )

        if failed_reps or under_loaded:
            return ExerciseProgressEvaluation(
                next_target=self._record_miss(planned, weight, rule),
                was_successful=False,
            )

        # Hold: inside the rep range at (near) full weight.
        return ExerciseProgressEvaluation(next_target=planned, was_successful=False)

    def evaluate_session(
        self,
        targets: Iterable[PlannedExerciseTarget],
        session_log: Mapping[str, Sequence[LoggedSet]],
        rule: ProgressionRule,
        readiness: ReadinessSnapshot | None = None,
    ) -> SessionEvaluation:
        """Evaluate every planned exercise of a completed program day.

        Logged exercises are matched to targets by normalized name. Entries
        whose names normalize to the same key are pooled, so the top set is
        chosen from all logged work. A target with nothing logged is
        evaluated against an empty set list.
        """
        logged: dict[str, list[LoggedSet]] = {}
        for name, sets in session_log.items():
            logged.setdefault(normalize_exercise_name(name), []).extend(sets)
        evaluations = tuple(
            self.evaluate(
                target,
                logged.get(normalize_exercise_name(target.exercise_name), ()),
                rule,
            )
            for target in targets
        )
        return SessionEvaluation(evaluations=evaluations, readiness=readiness)

    @staticmethod
    def _record_miss(
        planned: PlannedExerciseTarget, weight: float, rule: ProgressionRule
    ) -> PlannedExerciseTarget:
        streak = planned.failure_streak + 1
        if streak < rule.miss_threshold:
            return dataclasses.replace(planned, failure_streak=streak)

        deloaded = round_to_increment(
            weight * (1 - rule.deload_percent), rule.weight_increment
        )
        logger.info(
            "%s: %d consecutive miss(es), deloading %s → %s",
            planned.exercise_name or "exercise",
            streak,
            weight,
            deloaded,
        )
        return dataclasses.replace(planned, target_weight=deloaded, failure_streak=0)
