"""
Unit tests for IngestTranscriptionUseCase.

Covers the insert order (set rows first, workout row second, foreign key
backfill last) and the error kinds reported to the API layer.
"""
from datetime import datetime, timezone

import pytest

from application.use_cases import IngestTranscriptionUseCase
from domain.models.transcription import TranscribedWorkout
from tests.fakes import FakeTranscriptionService, create_store

pytestmark = pytest.mark.unit

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


def _transcription(**overrides):
    data = {
        "title": "Leg day",
        "notes": "gym A",
        "exercises_full": [
            {"exercise": "Squat", "sets": [
                {"reps": 5, "weight": 100, "unit": "kg"},
                {"reps": 5, "weight": 225, "unit": "lbs"},
            ]},
            {"exercise": "Leg Press", "sets": [{"reps": 12, "weight": 200, "unit": "kg"}]},
        ],
        "startTime": {"day": 14, "month": 6, "year": 2024, "hour": 18, "minute": 0},
        "endTime": {"day": 14, "month": 6, "year": 2024, "hour": 19, "minute": 15},
        "energy": {"amount": 500, "unit": "kcal"},
        "heart_rate": 128,
    }
    data.update(overrides)
    return TranscribedWorkout.model_validate(data)


@pytest.fixture
def store():
    return create_store()


class TestIngest:

    @pytest.mark.asyncio
    async def test_stores_workout_and_sets(self, store):
        use_case = IngestTranscriptionUseCase(store)

        result = await use_case.ingest(_transcription(), now=NOW)

        assert result.success is True
        assert result.exercise_count == 2
        assert result.set_count == 3

        row = store.workouts.get_all()[0]
        assert row["workout_id"] == result.workout_id
        assert row["title"] == "Leg day"
        assert row["exercises"] == ["Squat", "Leg Press"]
        assert row["start_time"].startswith("2024-06-14T18:00:00")
        assert row["end_time"].startswith("2024-06-14T19:15:00")
        assert row["energy"] == pytest.approx(500 * 4.184)
        assert row["heart_rate"] == 128
        assert sorted(row["set_ids"]) == ["set-1", "set-2", "set-3"]
        assert all(s.keys() == {"id"} for e in row["exercises_full"] for s in e["sets"])

    @pytest.mark.asyncio
    async def test_sets_are_inserted_before_workout_then_backfilled(self, store):
        use_case = IngestTranscriptionUseCase(store)

        result = await use_case.ingest(_transcription(), now=NOW)

        rows = store.sets.get_all()
        assert store.sets.insert_calls == 3
        assert store.sets.assignments == [(
            [s["id"] for s in store.workouts.get_all()[0]["exercises_full"][0]["sets"]]
            + [s["id"] for s in store.workouts.get_all()[0]["exercises_full"][1]["sets"]],
            result.workout_id,
        )]
        assert {row["workout_id"] for row in rows} == {result.workout_id}

    @pytest.mark.asyncio
    async def test_weights_are_stored_in_kilograms(self, store):
        use_case = IngestTranscriptionUseCase(store)

        await use_case.ingest(_transcription(), now=NOW)

        weights = sorted(row["weight"] for row in store.sets.get_all())
        assert weights == pytest.approx(sorted([100, 225 * 0.453592, 200]))

    @pytest.mark.asyncio
    async def test_exercise_definitions_are_shared(self, store):
        existing = store.exercises.seed("Squat")
        use_case = IngestTranscriptionUseCase(store)

        await use_case.ingest(_transcription(), now=NOW)

        row = store.workouts.get_all()[0]
        assert row["exercise_ids"][0] == existing
        assert store.exercises.insert_calls == 1  # Leg Press only

    @pytest.mark.asyncio
    async def test_missing_dates_default_to_now(self, store):
        use_case = IngestTranscriptionUseCase(store)

        await use_case.ingest(_transcription(startTime=None, endTime={}), now=NOW)

        row = store.workouts.get_all()[0]
        assert row["start_time"].startswith("2024-06-15T12:00:00")
        assert row["end_time"].startswith("2024-06-15T12:00:00")

    @pytest.mark.asyncio
    async def test_set_insert_failure_is_storage_error(self, store):
        store.sets.fail_inserts = True
        use_case = IngestTranscriptionUseCase(store)

        result = await use_case.ingest(_transcription(), now=NOW)

        assert result.success is False
        assert result.error_kind == "storage"
        assert store.workouts.get_all() == []


class TestExecute:

    @pytest.mark.asyncio
    async def test_transcribes_then_stores(self, store):
        transcriber = FakeTranscriptionService(result=_transcription())
        use_case = IngestTranscriptionUseCase(store, transcriber)

        result = await use_case.execute(["aGVsbG8="])

        assert result.success is True
        assert transcriber.calls == [["aGVsbG8="]]
        assert len(store.workouts.get_all()) == 1

    @pytest.mark.asyncio
    async def test_empty_images_is_validation_error(self, store):
        transcriber = FakeTranscriptionService()
        use_case = IngestTranscriptionUseCase(store, transcriber)

        result = await use_case.execute([])

        assert result.success is False
        assert result.error_kind == "validation"
        assert transcriber.calls == []

    @pytest.mark.asyncio
    async def test_transcription_failure(self, store):
        use_case = IngestTranscriptionUseCase(store, FakeTranscriptionService(error="no content"))

        result = await use_case.execute(["aGVsbG8="])

        assert result.success is False
        assert result.error_kind == "transcription"
        assert result.error == "no content"
        assert store.workouts.get_all() == []

    @pytest.mark.asyncio
    async def test_execute_requires_transcriber(self, store):
        with pytest.raises(RuntimeError):
            await IngestTranscriptionUseCase(store).execute(["aGVsbG8="])
