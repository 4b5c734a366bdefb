"""
Workout entity: the aggregate root.

Owns the ordered exercise list and the debounced persistence of the
`workouts` row. Any change anywhere in the aggregate ends in `change_made()`;
the workout coalesces those notifications so that at most one write of its
row is in flight, and a change made during a write is always picked up by a
later write.
"""
import asyncio
import logging
import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

from domain.entities.background import spawn
from domain.entities.exercise import PLACEHOLDER_NAME, Exercise
from domain.entities.metrics import WorkoutMetric, comma_number, format_duration
from domain.exceptions import IndexOutOfBoundsError, StorageError, UnknownMetricError
from domain.models.records import WorkoutRecord

if TYPE_CHECKING:
    from application.ports import AggregateStore

logger = logging.getLogger(__name__)

DURATION_UNAVAILABLE = "unavailable"


class Workout:
    """
    A logged workout and its exercises.

    Mutators are synchronous but schedule the debounced save on the running
    event loop, so they must be called from inside one; outside a loop they
    raise RuntimeError.
    """

    def __init__(
        self,
        record: WorkoutRecord,
        store: "AggregateStore",
        exercises: Optional[List[Exercise]] = None,
    ):
        self._id = record.workout_id
        self._title = record.title
        self._start_time = record.start_time
        self._end_time = record.end_time
        self._created_at = record.created_at
        self._notes = record.notes
        self._energy = record.energy
        self._heart_rate = record.heart_rate
        self._exercises: List[Exercise] = list(exercises or [])
        self._store = store

        self._unsaved_changes = 0
        self._saving = False
        self._save_task: Optional["asyncio.Future"] = None
        self._deleted = False

    @classmethod
    async def create(
        cls,
        record: Union[WorkoutRecord, Dict[str, Any]],
        store: "AggregateStore",
    ) -> "Workout":
        """
        Build the aggregate from a `workouts` row, leaf to root.

        Exercises (and their sets) are built concurrently; the workout is
        constructed last and the exercises are then attached to it, which
        lets any set without a row schedule its insert.
        """
        record = record if isinstance(record, WorkoutRecord) else WorkoutRecord.model_validate(record)
        exercises = await asyncio.gather(
            *(Exercise.create(ex, None, store) for ex in record.exercises_full)
        )
        workout = cls(record, store, list(exercises))
        for exercise in workout._exercises:
            exercise.attach_workout(workout)
        return workout

    @classmethod
    async def start_new(
        cls,
        store: "AggregateStore",
        title: str = "",
        now: Optional[datetime] = None,
    ) -> "Workout":
        """Insert an empty workout row starting now and return its entity."""
        now = now or datetime.now(timezone.utc)
        record = WorkoutRecord(
            workout_id=str(uuid.uuid4()),
            title=title,
            start_time=now,
            end_time=now,
            created_at=now,
        )
        workout = cls(record, store)
        await store.workouts.insert(workout.deserialize().to_row())
        logger.info(f"Started workout {workout.id}")
        return workout

    # -------------------------------------------------------------------------
    # Debounced persistence
    # -------------------------------------------------------------------------

    @property
    def unsaved_changes(self) -> int:
        return self._unsaved_changes

    @property
    def saving(self) -> bool:
        return self._saving

    def change_made(self) -> None:
        """
        Record one change and make sure a save will reflect it.

        If a write is in flight, its completion notices the pending count
        and writes again.
        """
        if self._deleted:
            return
        self._unsaved_changes += 1
        if not self._saving:
            self._start_save()

    def save_changes(self) -> "asyncio.Future":
        """
        Start a save cycle unless one is already running.

        Returns:
            The task of the running save chain
        """
        if not self._saving:
            self._start_save()
        return self._save_task

    def _start_save(self) -> None:
        # Flag, count and snapshot are taken synchronously so that changes
        # arriving while the write is awaited belong to the next cycle.
        asyncio.get_running_loop()  # raises outside a loop
        self._saving = True
        pending = self._unsaved_changes
        data = self.deserialize().to_row()
        self._save_task = spawn(
            self._write(pending, data),
            description=f"save of workout {self._id}",
            level=logging.ERROR,
        )

    async def _write(self, pending: int, data: Dict[str, Any]) -> None:
        try:
            await self._store.workouts.update(self._id, data)
            logger.debug(f"Saved workout {self._id} ({pending} change(s))")
        except StorageError as e:
            logger.error(f"Failed to save workout {self._id}: {e}")
        except Exception as e:
            logger.exception(f"Failed to save workout {self._id}: {e}")
        finally:
            self._unsaved_changes -= pending
            if self._unsaved_changes <= 0 or self._deleted:
                self._unsaved_changes = 0
                self._saving = False
            else:
                self._start_save()

    async def wait_until_saved(self) -> None:
        """Wait until the current save chain, including re-saves, has finished."""
        # A re-save replaces _save_task before the previous task completes.
        while self._save_task is not None and not self._save_task.done():
            await self._save_task

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def deserialize(self) -> WorkoutRecord:
        """Full persisted representation of the aggregate."""
        exercises_full = [exercise.deserialize() for exercise in self._exercises]
        exercise_ids = [ex.id for ex in self._exercises if ex.id]
        set_ids = [s.id for ex in self._exercises for s in ex.sets if s.id]
        return WorkoutRecord(
            title=self._title,
            workout_id=self._id,
            start_time=self._start_time,
            end_time=self._end_time,
            created_at=self._created_at,
            exercises=[ex.name for ex in self._exercises],
            exercises_full=exercises_full,
            notes=self._notes,
            energy=self._energy,
            heart_rate=self._heart_rate,
            volume=self.get_volume(),
            set_count=self.count_sets(),
            exercise_ids=list(dict.fromkeys(exercise_ids)),
            set_ids=list(dict.fromkeys(set_ids)),
        )

    # -------------------------------------------------------------------------
    # Exercises
    # -------------------------------------------------------------------------

    @property
    def exercises(self) -> List[Exercise]:
        return list(self._exercises)

    def add_empty_exercise(self) -> Exercise:
        exercise = Exercise(PLACEHOLDER_NAME, self._store)
        self._exercises.append(exercise)
        exercise.attach_workout(self)
        self.change_made()
        return exercise

    def remove_exercise(self, index: int) -> None:
        """
        Remove the exercise at `index`, deleting its set rows.

        Raises:
            IndexOutOfBoundsError: If `index` is outside the exercise list
        """
        if index < 0 or index >= len(self._exercises):
            raise IndexOutOfBoundsError(index, len(self._exercises))
        self._exercises[index].remove_all_sets()
        self._exercises.pop(index)
        self.change_made()

    def set_exercises(self, exercises: List[Exercise]) -> None:
        self._exercises = list(exercises)
        for exercise in self._exercises:
            if exercise.workout is not self:
                exercise.attach_workout(self)
        self.change_made()

    # -------------------------------------------------------------------------
    # Scalar fields
    # -------------------------------------------------------------------------

    @property
    def id(self) -> str:
        return self._id

    @property
    def title(self) -> str:
        return self._title

    @property
    def notes(self) -> str:
        return self._notes

    @property
    def start_time(self) -> datetime:
        return self._start_time

    @property
    def end_time(self) -> datetime:
        return self._end_time

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def energy(self) -> Optional[float]:
        """Energy in kilojoules."""
        return self._energy

    @property
    def heart_rate(self) -> Optional[float]:
        return self._heart_rate

    def set_heart_rate(self, heart_rate: Optional[float]) -> None:
        self._heart_rate = heart_rate
        self.change_made()

    def set_energy(self, energy: Optional[float]) -> None:
        self._energy = energy
        self.change_made()

    def set_title(self, title: str) -> None:
        self._title = title
        self.change_made()

    def set_start_date(self, start_time: datetime) -> None:
        self._start_time = start_time
        self.change_made()

    def set_end_date(self, end_time: datetime) -> None:
        self._end_time = end_time
        self.change_made()

    def set_notes(self, notes: str) -> None:
        self._notes = notes
        self.change_made()

    async def delete_workout(self) -> None:
        """
        Delete the workout row and every set row it owns.

        Both deletions are best-effort: failures are logged and the in-memory
        exercises are still emptied. No save is issued afterwards.
        """
        self._deleted = True
        try:
            await self._store.workouts.delete(self._id)
            logger.info(f"Deleted workout {self._id}")
        except StorageError as e:
            logger.warning(f"Could not delete workout {self._id}: {e}")
        for exercise in self._exercises:
            exercise.remove_all_sets()

    # -------------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------------

    def get_volume(self) -> float:
        return sum(exercise.get_volume() for exercise in self._exercises)

    def count_sets(self) -> int:
        return sum(exercise.count_sets() for exercise in self._exercises)

    def count_exercises(self) -> int:
        return len(self._exercises)

    def get_duration(self) -> float:
        """Seconds between start and end; may be negative for bad data."""
        return (self._end_time - self._start_time).total_seconds()

    def get_duration_string(self) -> str:
        return format_duration(self.get_duration()) or DURATION_UNAVAILABLE

    def get_item(self, metric: Union[WorkoutMetric, str]) -> Optional[float]:
        """
        Value of one reporting metric for this workout.

        Raises:
            UnknownMetricError: If `metric` is not a WorkoutMetric value
        """
        try:
            metric = WorkoutMetric(metric)
        except ValueError:
            raise UnknownMetricError(metric) from None
        values = {
            WorkoutMetric.WORKOUTS: 1,
            WorkoutMetric.TIME: self.get_duration(),
            WorkoutMetric.ENERGY: self._energy,
            WorkoutMetric.VOLUME: self.get_volume(),
        }
        return values[metric]

    def get_energy_string(self) -> Optional[str]:
        if self._energy is None:
            return None
        return f"{comma_number(self._energy)} kj"

    def get_heart_rate_string(self) -> Optional[str]:
        if self._heart_rate is None:
            return None
        return f"{comma_number(self._heart_rate)} bpm"

    def get_volume_string(self) -> Optional[str]:
        volume = self.get_volume()
        if volume == 0:
            return None
        return f"{comma_number(volume)} kg"

    def count_sets_string(self) -> Optional[str]:
        count = self.count_sets()
        if count == 0:
            return None
        return f"{count} set" if count == 1 else f"{count} sets"

    def get_date_string(self) -> str:
        start = self._start_time
        return f"{start:%a, %b} {start.day} {start.year}"

    def __repr__(self) -> str:
        return f"Workout(id={self._id!r}, title={self._title!r}, exercises={len(self._exercises)})"
