"""
Fake Repository Implementations for Testing.

This package provides in-memory fake implementations of the application
ports for fast, isolated testing. No database or external dependencies
required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Failure injection and call recording for persistence assertions

Usage:
    from tests.fakes import create_store

    store = create_store()
    store.exercises.seed("Bench Press")
    workout = await Workout.create(record, store)
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from application.ports import AggregateStore
from domain.entities.workout import Workout
from domain.models.records import WorkoutRecord

from tests.fakes.exercise_definition_repository import FakeExerciseDefinitionRepository
from tests.fakes.set_repository import FakeSetRepository
from tests.fakes.transcription_service import FakeTranscriptionService
from tests.fakes.workout_repository import FakeWorkoutRepository


def create_store(attach_timeout_seconds: float = 1.0) -> AggregateStore:
    """Create an AggregateStore backed by fresh in-memory fakes."""
    sets = FakeSetRepository()
    return AggregateStore(
        workouts=FakeWorkoutRepository(),
        exercises=FakeExerciseDefinitionRepository(sets=sets),
        sets=sets,
        attach_timeout_seconds=attach_timeout_seconds,
    )


async def build_workout(
    store: AggregateStore,
    exercises: Optional[List[Dict[str, Any]]] = None,
    *,
    workout_id: str = "w1",
    title: str = "Test Workout",
    start_time: datetime = datetime(2024, 6, 15, 10, 0, tzinfo=timezone.utc),
    end_time: datetime = datetime(2024, 6, 15, 11, 0, tzinfo=timezone.utc),
    **fields: Any,
) -> Workout:
    """Seed a workout row and load it as a live aggregate."""
    record = WorkoutRecord(
        workout_id=workout_id,
        title=title,
        start_time=start_time,
        end_time=end_time,
        created_at=start_time,
        exercises_full=exercises or [],
        **fields,
    )
    store.workouts.seed([record.model_dump(mode="json")])
    return await Workout.create(record, store)


__all__ = [
    "build_workout",
    "FakeWorkoutRepository",
    "FakeSetRepository",
    "FakeExerciseDefinitionRepository",
    "FakeTranscriptionService",
    "create_store",
]
