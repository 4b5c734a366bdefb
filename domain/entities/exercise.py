"""
Exercise entity: a named movement with an ordered list of sets inside one
workout.

The exercise's id points into the shared exercise-definition table, not at
a per-workout row; every workout that logs "Bench Press" references the
same definition.
"""
import asyncio
import logging
import weakref
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

from domain.entities.background import spawn
from domain.entities.exercise_set import ExerciseSet
from domain.exceptions import BrokenReferenceError, IndexOutOfBoundsError
from domain.models.load import KILOGRAMS
from domain.models.records import ExerciseRecord, SetRecord, SetUpdate

if TYPE_CHECKING:
    from application.ports import AggregateStore
    from domain.entities.workout import Workout

logger = logging.getLogger(__name__)

PLACEHOLDER_NAME = "New Exercise"


class Exercise:
    """
    An exercise performed in a workout.

    Every structural change (adding, removing or editing a set, renaming,
    reordering) notifies the owning workout, which coalesces the
    notifications into debounced writes of the workout row.
    """

    def __init__(
        self,
        name: str,
        store: "AggregateStore",
        *,
        notes: str = "",
        exercise_id: Optional[str] = None,
        sets: Optional[List[ExerciseSet]] = None,
    ):
        self._name = name
        self._notes = notes
        self._id = exercise_id
        # Name the current id was resolved for; a rename invalidates it.
        self._resolved_name: Optional[str] = name if exercise_id else None
        self._sets: List[ExerciseSet] = list(sets or [])
        self._store = store
        self._workout_ref: Optional["weakref.ref[Workout]"] = None

    @classmethod
    async def create(
        cls,
        json_exercise: Union[ExerciseRecord, Dict[str, Any]],
        workout: Optional["Workout"],
        store: "AggregateStore",
    ) -> "Exercise":
        """
        Build an exercise and its sets, leaf first.

        Sets are created concurrently; their order in the list is fixed
        before any of them starts, so completion order does not matter.

        Args:
            json_exercise: Exercise data as stored in `exercises_full`
            workout: Owning workout, if already constructed
            store: Persistence gateway

        Returns:
            The exercise with every set attached to it
        """
        record = (
            json_exercise
            if isinstance(json_exercise, ExerciseRecord)
            else ExerciseRecord.model_validate(json_exercise)
        )
        sets = await asyncio.gather(
            *(ExerciseSet.create(set_record, None, store) for set_record in record.sets)
        )
        exercise = cls(
            record.exercise,
            store,
            notes=record.notes,
            exercise_id=record.id,
            sets=list(sets),
        )
        for exercise_set in exercise._sets:
            exercise_set.attach(exercise)
        if workout is not None:
            exercise.attach_workout(workout)
        return exercise

    # -------------------------------------------------------------------------
    # Ownership
    # -------------------------------------------------------------------------

    @property
    def workout(self) -> Optional["Workout"]:
        return self._workout_ref() if self._workout_ref is not None else None

    @property
    def workout_id(self) -> Optional[str]:
        workout = self.workout
        return workout.id if workout is not None else None

    def attach_workout(self, workout: "Workout") -> None:
        """Attach to the owning workout and re-attach sets so they pick up its id."""
        self._workout_ref = weakref.ref(workout)
        for exercise_set in self._sets:
            exercise_set.attach(self)

    def _notify(self) -> None:
        workout = self.workout
        if workout is not None:
            workout.change_made()

    # -------------------------------------------------------------------------
    # Shared definition
    # -------------------------------------------------------------------------

    async def get_id(self) -> str:
        """
        Resolve the shared exercise-definition id for the current name.

        Looks the lower-cased name up in the alias table; if found, adopts
        the stored canonical name and id, otherwise inserts a new definition
        plus its alias. Resolution is serialized store-wide so concurrent set
        inserts cannot create duplicate definitions.

        Returns:
            Definition id

        Raises:
            StorageError: If the lookup or insert fails
        """
        async with self._store.definition_lock:
            if self._id is not None and self._resolved_name == self._name:
                return self._id

            alias = self._name.strip().lower()
            definition = await self._store.exercises.find_by_alias(alias)
            if definition is None:
                definition = await self._store.exercises.insert(self._name.strip())
                await self._store.exercises.add_alias(alias, definition["id"])
                logger.info(f"Created exercise definition {definition['id']} for '{alias}'")
            else:
                self._name = definition.get("name") or self._name

            self._id = definition["id"]
            self._resolved_name = self._name
            return self._id

    async def set_name(self, new_name: str) -> None:
        """Rename, re-resolve the definition id and re-point every set at it."""
        self._name = new_name
        await self.get_id()
        await asyncio.gather(*(exercise_set.update_db() for exercise_set in self._sets))
        self._notify()

    def set_notes(self, notes: str) -> None:
        self._notes = notes
        self._notify()

    # -------------------------------------------------------------------------
    # Sets
    # -------------------------------------------------------------------------

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= len(self._sets):
            raise IndexOutOfBoundsError(index, len(self._sets))

    async def add_new_set(self) -> ExerciseSet:
        """
        Append a set copied from the last one (or zero-valued if none).

        The new set's row exists before this returns.
        """
        if self._sets:
            last = self._sets[-1]
            record = SetRecord(reps=last.reps, weight=last.weight, unit=KILOGRAMS, notes=last.notes)
        else:
            record = SetRecord(reps=0, weight=0, unit=KILOGRAMS, notes="")

        new_set = ExerciseSet(record, self._store)
        self._sets.append(new_set)
        new_set.attach(self)
        await new_set.ensure_id()
        self._notify()
        return new_set

    def remove_set(self, index: int) -> None:
        """
        Remove the set at `index` and delete its row in the background.

        Raises:
            IndexOutOfBoundsError: If `index` is outside the set list
        """
        self._check_index(index)
        removed = self._sets.pop(index)
        spawn(removed.delete_from_db(), description=f"deletion of set {removed.id}")
        self._notify()

    def remove_all_sets(self) -> None:
        while self._sets:
            self.remove_set(0)

    async def update_set(self, index: int, fields: Union[SetUpdate, Dict[str, Any]]) -> None:
        """
        Apply field changes to the set at `index` in place and persist them.

        The set object (and so its id) is kept; only its values change.

        Raises:
            IndexOutOfBoundsError: If `index` is outside the set list
        """
        self._check_index(index)
        update = fields if isinstance(fields, SetUpdate) else SetUpdate.model_validate(fields)
        target = self._sets[index]
        if update.reps is not None:
            target.set_reps(update.reps)
        if update.weight is not None:
            target.set_weight(update.weight, update.unit or KILOGRAMS)
        if update.notes is not None:
            target.set_notes(update.notes)
        await target.update_db()

    async def flag_weight_pbs(self) -> List[ExerciseSet]:
        """
        Mark the sets that match the heaviest weight logged for this exercise.

        The best weight is read across every workout sharing the definition;
        a set in memory that beats it is flagged as well.

        Returns:
            The flagged sets, in list order
        """
        best = await self._store.exercises.get_weight_pb(await self.get_id())
        best = max([best or 0] + [s.weight for s in self._sets])
        if best <= 0:
            return []
        flagged = [s for s in self._sets if s.weight >= best]
        for exercise_set in flagged:
            exercise_set.mark_weight_pb()
        return flagged

    async def ensure_set_ids(self) -> List[str]:
        """Create rows for every unpersisted set, concurrently."""
        return list(await asyncio.gather(*(s.ensure_id() for s in self._sets)))

    # -------------------------------------------------------------------------
    # Position within the workout
    # -------------------------------------------------------------------------

    def _index_in_workout(self) -> int:
        workout = self.workout
        if workout is None:
            raise BrokenReferenceError(f"Exercise '{self._name}' is not attached to a workout")
        for index, exercise in enumerate(workout.exercises):
            if exercise is self:
                return index
        raise BrokenReferenceError(f"Exercise '{self._name}' not found in its workout")

    def remove_from_workout(self) -> None:
        index = self._index_in_workout()
        self.workout.remove_exercise(index)

    def reorder_up(self) -> None:
        """Swap with the previous exercise; no-op (and no save) if already first."""
        index = self._index_in_workout()
        if index == 0:
            return
        exercises = list(self.workout.exercises)
        exercises[index - 1], exercises[index] = exercises[index], exercises[index - 1]
        self.workout.set_exercises(exercises)

    def reorder_down(self) -> None:
        """Swap with the next exercise; no-op (and no save) if already last."""
        index = self._index_in_workout()
        exercises = list(self.workout.exercises)
        if index == len(exercises) - 1:
            return
        exercises[index + 1], exercises[index] = exercises[index], exercises[index + 1]
        self.workout.set_exercises(exercises)

    # -------------------------------------------------------------------------
    # Getters
    # -------------------------------------------------------------------------

    @property
    def id(self) -> Optional[str]:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def notes(self) -> str:
        return self._notes

    @property
    def sets(self) -> List[ExerciseSet]:
        return list(self._sets)

    def count_sets(self) -> int:
        return len(self._sets)

    def get_volume(self) -> float:
        """Sum of reps x weight (kilograms) over all sets."""
        return sum(exercise_set.get_volume() for exercise_set in self._sets)

    def deserialize(self) -> ExerciseRecord:
        return ExerciseRecord(
            exercise=self._name,
            notes=self._notes,
            id=self._id,
            sets=[exercise_set.deserialize() for exercise_set in self._sets],
        )

    def __repr__(self) -> str:
        return f"Exercise(name={self._name!r}, id={self._id!r}, sets={len(self._sets)})"
