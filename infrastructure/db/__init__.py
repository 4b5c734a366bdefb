"""
Infrastructure Database Layer.

This package provides Supabase-backed implementations of the repository interfaces
defined in application.ports. These implementations can be injected into services
and routers for clean separation of concerns and testability.

Usage:
    from supabase import acreate_client
    from application.ports import AggregateStore
    from infrastructure.db import (
        SupabaseWorkoutRepository,
        SupabaseSetRepository,
        SupabaseExerciseDefinitionRepository,
    )

    client = await acreate_client(SUPABASE_URL, SUPABASE_KEY)

    store = AggregateStore(
        workouts=SupabaseWorkoutRepository(client),
        exercises=SupabaseExerciseDefinitionRepository(client),
        sets=SupabaseSetRepository(client),
    )
"""

from infrastructure.db.exercise_definition_repository import SupabaseExerciseDefinitionRepository
from infrastructure.db.set_repository import SupabaseSetRepository
from infrastructure.db.workout_repository import SupabaseWorkoutRepository

__all__ = [
    "SupabaseWorkoutRepository",
    "SupabaseSetRepository",
    "SupabaseExerciseDefinitionRepository",
]
