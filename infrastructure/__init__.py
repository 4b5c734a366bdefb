"""
Infrastructure Layer for the workout sync service.

This package contains concrete implementations of the application ports:
- db/: Supabase row collections for workouts, sets and exercise definitions
- transcription/: OpenAI vision transcription of handwritten logs
"""

# Re-export implementations for convenient access
from infrastructure.db import (
    SupabaseExerciseDefinitionRepository,
    SupabaseSetRepository,
    SupabaseWorkoutRepository,
)
from infrastructure.transcription import OpenAITranscriptionService

__all__ = [
    "SupabaseWorkoutRepository",
    "SupabaseSetRepository",
    "SupabaseExerciseDefinitionRepository",
    "OpenAITranscriptionService",
]
