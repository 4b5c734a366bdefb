"""
Domain layer for the workout sync service.

This package contains the workout aggregate (Workout -> Exercise -> Set)
and the row models it is persisted as. Nothing here talks to a concrete
database; persistence goes through the ports in application.ports.
"""

from domain.models import (
    Energy,
    ExerciseRecord,
    SetRecord,
    SetUpdate,
    TranscribedWorkout,
    WorkoutRecord,
)

__all__ = [
    "Energy",
    "ExerciseRecord",
    "SetRecord",
    "SetUpdate",
    "TranscribedWorkout",
    "WorkoutRecord",
]
