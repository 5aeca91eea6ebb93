"""AutoregulationEngine — runs readiness, adjustment and progression in order."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import date, datetime, tzinfo

from autoregulation_engine.adjuster import AutoregulationAdjuster
from autoregulation_engine.models.progression import (
    DayPlan,
    LoggedSet,
    PlannedExerciseTarget,
    ProgressionRule,
    SessionEvaluation,
)
from autoregulation_engine.models.readiness import ReadinessSnapshot
from autoregulation_engine.progression import ProgressionEvaluator
from autoregulation_engine.readiness import (
    BiometricHistory,
    ExternalReadiness,
    ReadinessEstimator,
)

logger = logging.getLogger(__name__)


class AutoregulationEngine:
    """Plans a program day from readiness and evaluates it once trained.

    Holds only its configuration; every call works on the values passed in
    and returns new values. The caller persists whatever it keeps.

    Usage:
        engine = AutoregulationEngine(rule)
        plan = engine.plan_day(targets, history, external, today)
        result = engine.complete_session(targets, session_log, plan.readiness)
    """

    def __init__(
        self,
        rule: ProgressionRule | None = None,
        tz: tzinfo | None = None,
        estimator: ReadinessEstimator | None = None,
        adjuster: AutoregulationAdjuster | None = None,
        evaluator: ProgressionEvaluator | None = None,
    ) -> None:
        self.rule = rule or ProgressionRule.default()
        self.tz = tz
        self.estimator = estimator or ReadinessEstimator()
        self.adjuster = adjuster or AutoregulationAdjuster()
        self.evaluator = evaluator or ProgressionEvaluator()

    def readiness(
        self,
        history: BiometricHistory,
        external: ExternalReadiness | None,
        day: date | datetime,
    ) -> ReadinessSnapshot:
        return self.estimator.snapshot(history, external, day, self.rule, self.tz)

    def plan_day(
        self,
        targets: Iterable[PlannedExerciseTarget],
        history: BiometricHistory,
        external: ExternalReadiness | None,
        day: date | datetime,
    ) -> DayPlan:
        """Score readiness for ``day`` and scale its targets accordingly.

        Adjusted weights are rounded to the rule's weight increment.
        """
        snapshot = self.readiness(history, external, day)
        adjusted = self.adjuster.adjust(targets, snapshot, self.rule.weight_increment)
        logger.debug(
            "Planned %d exercise(s) for %s at %s readiness (x%.2f)",
            len(adjusted),
            snapshot.day,
            snapshot.band.name,
            snapshot.multiplier,
        )
        return DayPlan(readiness=snapshot, adjusted_targets=tuple(adjusted))

    def complete_session(
        self,
        targets: Iterable[PlannedExerciseTarget],
        session_log: Mapping[str, Sequence[LoggedSet]],
        readiness: ReadinessSnapshot | None = None,
    ) -> SessionEvaluation:
        """Evaluate a trained day against the targets it was planned with.

        Pass the day's readiness snapshot to keep it with the result.
        """
        result = self.evaluator.evaluate_session(
            targets, session_log, self.rule, readiness
        )
        logger.debug(
            "Session evaluated: %d/%d exercise(s) successful",
            result.successful_count,
            result.total_count,
        )
        return result
