"""
Set entity: one performed unit of an exercise, backed by a `sets` row.

A set is built before its exercise exists (leaf-to-root construction) and
attached afterwards. Once attached to an exercise that belongs to a
workout, a set without an id schedules its own row insert, so every set
converges to a durable id without the caller asking.
"""
import asyncio
import logging
import weakref
from typing import TYPE_CHECKING, Any, Dict, Optional, Union

from domain.entities.background import spawn
from domain.exceptions import AttachmentTimeoutError, BrokenReferenceError, StorageError
from domain.models.load import KILOGRAMS, to_kilograms
from domain.models.records import SetRecord

if TYPE_CHECKING:
    from application.ports import AggregateStore
    from domain.entities.exercise import Exercise
    from domain.entities.workout import Workout

logger = logging.getLogger(__name__)


class ExerciseSet:
    """
    A set of an exercise: reps, weight (kilograms) and notes.

    Field mutators only change memory; call `update_db()` to persist, so
    that several field changes cost one write.
    """

    def __init__(
        self,
        record: SetRecord,
        store: "AggregateStore",
        exercise: Optional["Exercise"] = None,
    ):
        self._store = store
        self._reps = record.reps
        self._weight = to_kilograms(record.weight, record.unit)
        self._notes = record.notes
        self._id: Optional[str] = record.id
        self._workout_id: Optional[str] = record.workout_id
        self._exercise_ref: Optional["weakref.ref[Exercise]"] = None
        self._attached = asyncio.Event()
        self._id_task: Optional["asyncio.Future"] = None
        self._is_weight_pb = False

        if exercise is not None:
            self.attach(exercise)

    @classmethod
    async def create(
        cls,
        initial: Union[SetRecord, Dict[str, Any]],
        exercise: Optional["Exercise"],
        store: "AggregateStore",
    ) -> "ExerciseSet":
        """
        Build a set from caller data, preferring storage for persisted sets.

        Args:
            initial: Set data; may carry an id, a workout_id, or neither
            exercise: Owning exercise, if already constructed
            store: Persistence gateway

        Returns:
            The set. A known id is re-read from `sets` and the stored values
            win over the supplied ones.
        """
        record = initial if isinstance(initial, SetRecord) else SetRecord.model_validate(initial)

        if record.id:
            row = await store.sets.get(record.id)
            if row is not None:
                return cls(SetRecord.model_validate(row), store, exercise)
            logger.warning(f"Set {record.id} not found in storage, treating it as new")
            record = record.model_copy(update={"id": None})

        if record.workout_id:
            return cls(record, store, exercise)

        workout_id = exercise.workout_id if exercise is not None else None
        return cls(record.model_copy(update={"workout_id": workout_id}), store, exercise)

    # -------------------------------------------------------------------------
    # Ownership
    # -------------------------------------------------------------------------

    @property
    def exercise(self) -> Optional["Exercise"]:
        return self._exercise_ref() if self._exercise_ref is not None else None

    @property
    def workout(self) -> Optional["Workout"]:
        exercise = self.exercise
        return exercise.workout if exercise is not None else None

    def attach(self, exercise: "Exercise") -> None:
        """
        Attach this set to its owning exercise.

        Ownership is reassignable. If the exercise already belongs to a
        workout, the set adopts the workout id and, when it has no row yet,
        schedules its own insert.
        """
        self._exercise_ref = weakref.ref(exercise)
        workout = exercise.workout
        if workout is not None:
            self._workout_id = workout.id
            if self._id is None:
                self._schedule_id_creation(workout)
        self._attached.set()

    def _schedule_id_creation(self, workout: "Workout") -> None:
        if self._id_task is not None and not self._id_task.done():
            return
        self._id_task = spawn(
            self._create_row_for(workout),
            description="set row creation",
            level=logging.ERROR,
        )

    async def _create_row_for(self, workout: "Workout") -> str:
        """
        Insert the row, then have the workout rewrite its nested copy.

        The task holds `workout` strongly, so an aggregate that is dropped
        right after loading stays alive until its rows exist and the
        workout row references them by id.
        """
        set_id = await self.create_new_id()
        (self.workout or workout).change_made()
        return set_id

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    async def ensure_id(self) -> str:
        """
        Return the persisted id, creating the row if needed.

        Concurrent callers share one insert.
        """
        if self._id is not None:
            return self._id
        if self._id_task is None or self._id_task.done():
            self._id_task = spawn(
                self.create_new_id(),
                description="set row creation",
                level=logging.ERROR,
            )
        await self._id_task
        return self._id

    async def create_new_id(self) -> str:
        """
        Insert a row for this set and remember its id.

        Waits for the set to be attached to an exercise, bounded by the
        store's attach timeout.

        Raises:
            AttachmentTimeoutError: If no exercise is attached in time
            StorageError: If the insert fails
        """
        try:
            await asyncio.wait_for(
                self._attached.wait(),
                timeout=self._store.attach_timeout_seconds,
            )
        except asyncio.TimeoutError:
            raise AttachmentTimeoutError(
                f"Set was not attached to an exercise within "
                f"{self._store.attach_timeout_seconds}s"
            ) from None

        exercise = self.exercise
        if exercise is None:
            raise BrokenReferenceError("Cannot create a set row without its exercise")

        exercise_id = await exercise.get_id()
        workout_id = exercise.workout_id
        row = await self._store.sets.insert({
            "exercise_id": exercise_id,
            "workout_id": workout_id,
            "reps": self._reps,
            "weight": self._weight,
            "notes": self._notes,
        })
        self._id = row["id"]
        self._workout_id = workout_id
        logger.debug(f"Created set {self._id} for exercise {exercise_id}")
        return self._id

    async def update_db(self) -> None:
        """
        Persist the current field values and notify the owning workout.

        A set without a row is inserted instead of updated.
        """
        if self._id is None:
            await self.ensure_id()
        else:
            data: Dict[str, Any] = {
                "reps": self._reps,
                "weight": self._weight,
                "notes": self._notes,
            }
            exercise = self.exercise
            if exercise is not None:
                data["exercise_id"] = await exercise.get_id()
            await self._store.sets.update(self._id, data)

        workout = self.workout
        if workout is not None:
            workout.change_made()

    async def delete_from_db(self) -> None:
        """Delete the backing row; no-op if the set was never persisted."""
        if self._id is None and self._id_task is not None and not self._id_task.done():
            # An insert is in flight; let it land so its row can be removed.
            try:
                await self._id_task
            except (StorageError, AttachmentTimeoutError, BrokenReferenceError):
                return
        if self._id is None:
            return
        await self._store.sets.delete(self._id)
        logger.debug(f"Deleted set {self._id}")

    def deserialize(self) -> SetRecord:
        """
        Representation nested inside the workout row.

        Persisted sets are reduced to their id; their fields live in `sets`.
        """
        if self._id is not None:
            return SetRecord(id=self._id)
        return SetRecord(
            id=None,
            reps=self._reps,
            weight=self._weight,
            unit=KILOGRAMS,
            notes=self._notes,
        )

    # -------------------------------------------------------------------------
    # Getters and setters
    # -------------------------------------------------------------------------

    @property
    def id(self) -> Optional[str]:
        return self._id

    @property
    def workout_id(self) -> Optional[str]:
        return self._workout_id

    @workout_id.setter
    def workout_id(self, value: Optional[str]) -> None:
        self._workout_id = value

    @property
    def reps(self) -> int:
        return self._reps

    @property
    def weight(self) -> float:
        """Weight in kilograms."""
        return self._weight

    @property
    def unit(self) -> str:
        return KILOGRAMS

    @property
    def notes(self) -> str:
        return self._notes

    def set_reps(self, reps: int) -> None:
        if reps < 0:
            raise ValueError(f"reps must be non-negative, got {reps}")
        self._reps = reps

    def set_weight(self, weight: float, unit: str = KILOGRAMS) -> None:
        """Set the weight, converting from `unit` to kilograms."""
        if weight < 0:
            raise ValueError(f"weight must be non-negative, got {weight}")
        self._weight = to_kilograms(weight, unit)
        self._is_weight_pb = False

    def set_notes(self, notes: str) -> None:
        self._notes = notes

    @property
    def is_weight_pb(self) -> bool:
        return self._is_weight_pb

    def mark_weight_pb(self) -> None:
        """Flag this set as matching the heaviest weight logged for its exercise."""
        self._is_weight_pb = True

    def get_volume(self) -> float:
        return self._reps * self._weight

    def __repr__(self) -> str:
        return f"ExerciseSet(id={self._id!r}, reps={self._reps}, weight={self._weight})"
