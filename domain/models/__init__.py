"""
Row and wire models for the workout aggregate.

These models describe data as it crosses a boundary:
- WorkoutRecord / ExerciseRecord / SetRecord: rows of `workouts` and `sets`
- SetUpdate: a partial edit of one set
- TranscribedWorkout: what the vision transcription returns
- Energy: an energy amount with its unit

Usage:
    >>> from domain.models import SetRecord, to_kilograms
    >>> SetRecord(reps=5, weight=100, unit="lbs").weight
    100.0
    >>> round(to_kilograms(100, "lbs"), 4)
    45.3592
"""

from domain.models.load import KILOGRAMS, LB_TO_KG, Energy, to_kilograms
from domain.models.records import ExerciseRecord, SetRecord, SetUpdate, WorkoutRecord
from domain.models.transcription import (
    PartialDate,
    TranscribedExercise,
    TranscribedSet,
    TranscribedWorkout,
)

__all__ = [
    # Rows
    "WorkoutRecord",
    "ExerciseRecord",
    "SetRecord",
    "SetUpdate",
    # Transcription
    "TranscribedWorkout",
    "TranscribedExercise",
    "TranscribedSet",
    "PartialDate",
    # Units
    "Energy",
    "KILOGRAMS",
    "LB_TO_KG",
    "to_kilograms",
]
