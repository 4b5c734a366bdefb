"""
Tests for the ExerciseSet entity.
"""
import asyncio

import pytest

from domain.entities import ExerciseSet
from domain.entities.background import wait_for_background_tasks
from domain.entities.exercise import Exercise
from domain.exceptions import AttachmentTimeoutError
from domain.models import SetRecord
from tests.fakes import build_workout, create_store

pytestmark = pytest.mark.unit


@pytest.fixture
def store():
    return create_store()


class TestUnitNormalization:
    """Weights are stored in kilograms from the moment a set is built."""

    def test_pounds_converted_to_kilograms(self, store):
        exercise_set = ExerciseSet(SetRecord(reps=5, weight=100, unit="lbs"), store)
        assert exercise_set.weight == pytest.approx(45.3592)
        assert exercise_set.unit == "kg"

    def test_kilograms_unchanged(self, store):
        exercise_set = ExerciseSet(SetRecord(reps=5, weight=100, unit="kg"), store)
        assert exercise_set.weight == 100

    def test_missing_unit_is_kilograms(self, store):
        exercise_set = ExerciseSet(SetRecord(reps=5, weight=100), store)
        assert exercise_set.weight == 100

    def test_volume_uses_kilograms(self, store):
        exercise_set = ExerciseSet(SetRecord(reps=5, weight=50, unit="lbs"), store)
        assert exercise_set.get_volume() == pytest.approx(5 * 50 * 0.453592)

    def test_set_weight_converts_unit(self, store):
        exercise_set = ExerciseSet(SetRecord(), store)
        exercise_set.set_weight(100, "lbs")
        assert exercise_set.weight == pytest.approx(45.3592)


class TestMutators:

    def test_mutators_change_memory_only(self, store):
        exercise_set = ExerciseSet(SetRecord(id="s1", reps=1, weight=1), store)
        exercise_set.set_reps(8)
        exercise_set.set_weight(60)
        exercise_set.set_notes("easy")

        assert (exercise_set.reps, exercise_set.weight, exercise_set.notes) == (8, 60, "easy")
        assert store.sets.updates == []

    def test_negative_reps_rejected(self, store):
        exercise_set = ExerciseSet(SetRecord(reps=3), store)
        with pytest.raises(ValueError):
            exercise_set.set_reps(-1)
        assert exercise_set.reps == 3

    def test_negative_weight_rejected(self, store):
        exercise_set = ExerciseSet(SetRecord(weight=20), store)
        with pytest.raises(ValueError):
            exercise_set.set_weight(-5)
        assert exercise_set.weight == 20


class TestCreate:

    @pytest.mark.asyncio
    async def test_stored_row_wins_over_supplied_values(self, store):
        store.sets.seed([{"id": "s1", "reps": 12, "weight": 80, "notes": "stored", "workout_id": "w1"}])

        exercise_set = await ExerciseSet.create({"id": "s1", "reps": 1, "weight": 1}, None, store)

        assert exercise_set.id == "s1"
        assert exercise_set.reps == 12
        assert exercise_set.weight == 80
        assert exercise_set.notes == "stored"
        assert exercise_set.workout_id == "w1"

    @pytest.mark.asyncio
    async def test_missing_row_is_treated_as_new(self, store, caplog):
        exercise_set = await ExerciseSet.create({"id": "gone", "reps": 4, "weight": 40}, None, store)

        assert exercise_set.id is None
        assert exercise_set.reps == 4
        assert "not found" in caplog.text

    @pytest.mark.asyncio
    async def test_known_workout_id_is_kept(self, store):
        exercise_set = await ExerciseSet.create({"workout_id": "w9", "reps": 2}, None, store)
        assert exercise_set.workout_id == "w9"
        assert store.sets.insert_calls == 0

    @pytest.mark.asyncio
    async def test_workout_id_inferred_from_owner(self, store):
        workout = await build_workout(store)
        exercise = workout.add_empty_exercise()

        exercise_set = await ExerciseSet.create({"reps": 2}, exercise, store)
        await wait_for_background_tasks()

        assert exercise_set.workout_id == "w1"
        await workout.wait_until_saved()


class TestPersistence:

    @pytest.mark.asyncio
    async def test_attaching_to_workout_exercise_creates_row(self, store):
        workout = await build_workout(store, [
            {"exercise": "Squat", "sets": [{"reps": 5, "weight": 100, "unit": "kg"}]},
        ])
        await wait_for_background_tasks()

        exercise_set = workout.exercises[0].sets[0]
        assert exercise_set.id == "set-1"
        row = store.sets.row("set-1")
        assert row["workout_id"] == "w1"
        assert row["exercise_id"] == workout.exercises[0].id
        assert row["reps"] == 5
        assert row["weight"] == 100

    @pytest.mark.asyncio
    async def test_unattached_set_times_out(self):
        store = create_store(attach_timeout_seconds=0.01)
        exercise_set = ExerciseSet(SetRecord(reps=1), store)

        with pytest.raises(AttachmentTimeoutError):
            await exercise_set.create_new_id()
        assert store.sets.insert_calls == 0

    @pytest.mark.asyncio
    async def test_concurrent_ensure_id_inserts_once(self, store):
        exercise = Exercise("Row", store)
        exercise_set = ExerciseSet(SetRecord(reps=1), store, exercise)

        ids = await asyncio.gather(exercise_set.ensure_id(), exercise_set.ensure_id())

        assert ids == ["set-1", "set-1"]
        assert store.sets.insert_calls == 1

    @pytest.mark.asyncio
    async def test_update_db_writes_row_and_notifies_workout(self, store):
        workout = await build_workout(store, [
            {"exercise": "Squat", "sets": [{"reps": 5, "weight": 100}]},
        ])
        await wait_for_background_tasks()
        store.workouts.updates.clear()
        exercise_set = workout.exercises[0].sets[0]

        exercise_set.set_reps(6)
        await exercise_set.update_db()
        await workout.wait_until_saved()

        set_id, data = store.sets.updates[-1]
        assert set_id == exercise_set.id
        assert data["reps"] == 6
        assert data["exercise_id"] == workout.exercises[0].id
        assert len(store.workouts.updates) == 1

    @pytest.mark.asyncio
    async def test_delete_without_row_is_noop(self, store):
        exercise_set = ExerciseSet(SetRecord(reps=1), store)
        await exercise_set.delete_from_db()
        assert store.sets.deleted == []

    @pytest.mark.asyncio
    async def test_delete_removes_row(self, store):
        store.sets.seed([{"id": "s1", "reps": 1, "weight": 1}])
        exercise_set = await ExerciseSet.create({"id": "s1"}, None, store)

        await exercise_set.delete_from_db()

        assert store.sets.deleted == ["s1"]


class TestDeserialize:

    def test_persisted_set_reduced_to_id(self, store):
        exercise_set = ExerciseSet(SetRecord(id="s1", reps=5, weight=50), store)
        assert exercise_set.deserialize().model_dump(exclude_unset=True) == {"id": "s1"}

    def test_unpersisted_set_keeps_fields(self, store):
        exercise_set = ExerciseSet(SetRecord(reps=5, weight=100, unit="lbs"), store)
        data = exercise_set.deserialize().model_dump(exclude_unset=True)
        assert data["reps"] == 5
        assert data["weight"] == pytest.approx(45.3592)
        assert data["unit"] == "kg"


class TestWeightPersonalBestFlag:

    def test_changing_weight_clears_flag(self, store):
        exercise_set = ExerciseSet(SetRecord(reps=1, weight=100), store)
        exercise_set.mark_weight_pb()
        assert exercise_set.is_weight_pb is True

        exercise_set.set_weight(90)

        assert exercise_set.is_weight_pb is False
