"""
Use cases for the workout sync service.

Each use case coordinates domain entities and ports for one application
operation:
- LoadWorkoutUseCase: rebuild live aggregates from storage
- IngestTranscriptionUseCase: store a workout transcribed from a handwritten log
- ExerciseStatsUseCase: personal bests and set counts per exercise definition
"""

from application.use_cases.exercise_stats import ExerciseSort, ExerciseStats, ExerciseStatsUseCase
from application.use_cases.ingest_transcription import (
    IngestTranscriptionResult,
    IngestTranscriptionUseCase,
)
from application.use_cases.load_workout import LoadWorkoutUseCase, Timeframe, timeframe_start

__all__ = [
    "LoadWorkoutUseCase",
    "Timeframe",
    "timeframe_start",
    "IngestTranscriptionUseCase",
    "IngestTranscriptionResult",
    "ExerciseStatsUseCase",
    "ExerciseStats",
    "ExerciseSort",
]
