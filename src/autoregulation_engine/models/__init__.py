"""Data models for the autoregulation engine."""

from autoregulation_engine.models.biometrics import BiometricDay, ExternalReadinessDay
from autoregulation_engine.models.enums import ReadinessBand, ReadinessSource
from autoregulation_engine.models.progression import (
    DayPlan,
    ExerciseProgressEvaluation,
    LoggedSet,
    PlannedExerciseTarget,
    ProgressionRule,
    SessionEvaluation,
    normalize_exercise_name,
)
from autoregulation_engine.models.readiness import ReadinessSnapshot

__all__ = [
    "BiometricDay",
    "DayPlan",
    "ExerciseProgressEvaluation",
    "ExternalReadinessDay",
    "LoggedSet",
    "PlannedExerciseTarget",
    "ProgressionRule",
    "ReadinessBand",
    "ReadinessSnapshot",
    "ReadinessSource",
    "SessionEvaluation",
    "normalize_exercise_name",
]
