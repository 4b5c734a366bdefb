"""
Bundle of the row collections one workout aggregate is persisted across.

Entities receive a single AggregateStore instead of three repositories so
that a Set created deep inside an Exercise can reach the `sets` collection
without asking its parents.
"""
import asyncio
from dataclasses import dataclass, field

from application.ports.exercise_definition_repository import ExerciseDefinitionRepository
from application.ports.set_repository import SetRepository
from application.ports.workout_repository import WorkoutRepository


@dataclass
class AggregateStore:
    """
    Repositories plus persistence tuning for the workout aggregate.

    Attributes:
        workouts: `workouts` row collection
        exercises: shared exercise definitions (`exercises`, `exercise_aliases`)
        sets: `sets` row collection
        attach_timeout_seconds: How long a set waits to be attached to an
            exercise before id creation gives up
        definition_lock: Serializes shared exercise-definition lookups so
            concurrent inserts never create the same definition twice
    """

    workouts: WorkoutRepository
    exercises: ExerciseDefinitionRepository
    sets: SetRepository
    attach_timeout_seconds: float = 5.0
    definition_lock: asyncio.Lock = field(default_factory=asyncio.Lock)
