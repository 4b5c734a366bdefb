"""
Live object graph of a workout aggregate.

Entities hold non-owning back-references to their parents and persist
themselves through an AggregateStore.
"""

from domain.entities.exercise import PLACEHOLDER_NAME, Exercise
from domain.entities.exercise_set import ExerciseSet
from domain.entities.metrics import (
    WorkoutMetric,
    comma_number,
    format_duration,
    metric_label,
    stringify_metric,
    total_for,
)
from domain.entities.workout import Workout

__all__ = [
    "Workout",
    "Exercise",
    "ExerciseSet",
    "PLACEHOLDER_NAME",
    "WorkoutMetric",
    "comma_number",
    "format_duration",
    "metric_label",
    "stringify_metric",
    "total_for",
]
