"""AutoregulationAdjuster — scale a day's planned weights by readiness."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable

from autoregulation_engine.math.rounding import round_to_increment
from autoregulation_engine.models.progression import PlannedExerciseTarget
from autoregulation_engine.models.readiness import ReadinessSnapshot


class AutoregulationAdjuster:
    """Applies a readiness multiplier to planned targets.

    Bodyweight and cardio targets (no weight, or weight <= 0) pass through
    unchanged. Only ``target_weight`` is ever modified.
    """

    def adjust(
        self,
        targets: Iterable[PlannedExerciseTarget],
        readiness: ReadinessSnapshot,
        rounding_increment: float,
    ) -> list[PlannedExerciseTarget]:
        return [
            self.adjust_target(target, readiness.multiplier, rounding_increment)
            for target in targets
        ]

    @staticmethod
    def adjust_target(
        target: PlannedExerciseTarget,
        multiplier: float,
        rounding_increment: float,
    ) -> PlannedExerciseTarget:
        if not target.is_weighted:
            return target
        scaled = target.target_weight * multiplier  # type: ignore[operator]
        return dataclasses.replace(
            target, target_weight=round_to_increment(scaled, rounding_increment)
        )
