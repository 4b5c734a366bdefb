"""
Repository Interfaces (Ports) for the workout sync service.

This package defines abstract interfaces that decouple the workout aggregate
from infrastructure (database, vision model). Implementations are provided
in the infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the domain needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import AggregateStore

    store = AggregateStore(
        workouts=workout_repo,
        exercises=exercise_definition_repo,
        sets=set_repo,
    )
    workout = await Workout.create(record, store)
"""

from application.ports.workout_repository import WorkoutRepository
from application.ports.set_repository import SetRepository
from application.ports.exercise_definition_repository import ExerciseDefinitionRepository
from application.ports.aggregate_store import AggregateStore
from application.ports.transcription_service import TranscriptionService

__all__ = [
    # Row collections
    "WorkoutRepository",
    "SetRepository",
    "ExerciseDefinitionRepository",
    # Bundle handed to entities
    "AggregateStore",
    # Vision model
    "TranscriptionService",
]
