"""Request and response models for the HTTP API."""

from api.schemas.exercises import ExerciseListResponse, ExerciseStatsResponse
from api.schemas.workouts import (
    ExerciseSummary,
    TranscriptionRequest,
    TranscriptionResponse,
    WorkoutListResponse,
    WorkoutSummary,
)

__all__ = [
    "TranscriptionRequest",
    "TranscriptionResponse",
    "ExerciseSummary",
    "WorkoutSummary",
    "WorkoutListResponse",
    "ExerciseStatsResponse",
    "ExerciseListResponse",
]
