"""
Tests for the Supabase repository implementations.

The async Supabase client is replaced with a chainable mock: every query
builder method returns the same builder and `execute()` is an AsyncMock,
so tests can assert on the exact calls a repository makes.
"""
import pytest
from typing import Any, List, Optional
from unittest.mock import AsyncMock, MagicMock

from domain.exceptions import StorageError
from infrastructure.db import (
    SupabaseExerciseDefinitionRepository,
    SupabaseSetRepository,
    SupabaseWorkoutRepository,
)

# All tests in this module are pure logic tests with mocks - mark as unit
pytestmark = pytest.mark.unit

_BUILDER_METHODS = ["select", "insert", "update", "delete", "eq", "in_", "gte", "lte", "order", "limit"]


def _mock_client(data: Optional[List[Any]] = None, error: Optional[Exception] = None) -> MagicMock:
    """Create a mock AsyncClient whose queries return `data` (or raise `error`)."""
    query = MagicMock()
    for method in _BUILDER_METHODS:
        getattr(query, method).return_value = query
    if error is not None:
        query.execute = AsyncMock(side_effect=error)
    else:
        query.execute = AsyncMock(return_value=MagicMock(data=data if data is not None else []))

    client = MagicMock()
    client.table.return_value = query
    client.query = query
    return client


# ============================================================================
# SupabaseWorkoutRepository
# ============================================================================


class TestSupabaseWorkoutRepository:

    @pytest.mark.asyncio
    async def test_get_returns_first_row(self):
        client = _mock_client([{"workout_id": "w1", "title": "Push"}])
        repo = SupabaseWorkoutRepository(client)

        row = await repo.get("w1")

        assert row == {"workout_id": "w1", "title": "Push"}
        client.table.assert_called_with("workouts")
        client.query.eq.assert_called_with("workout_id", "w1")

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self):
        repo = SupabaseWorkoutRepository(_mock_client([]))
        assert await repo.get("nope") is None

    @pytest.mark.asyncio
    async def test_list_applies_window_and_order(self):
        from datetime import datetime, timezone

        client = _mock_client([{"workout_id": "w1"}])
        repo = SupabaseWorkoutRepository(client)
        start = datetime(2024, 6, 10, tzinfo=timezone.utc)
        end = datetime(2024, 6, 15, 12, tzinfo=timezone.utc)

        rows = await repo.list(start_after=start, end_before=end)

        assert rows == [{"workout_id": "w1"}]
        client.query.gte.assert_called_once_with("start_time", start.isoformat())
        client.query.lte.assert_called_once_with("end_time", end.isoformat())
        client.query.order.assert_called_once_with("start_time", desc=True)

    @pytest.mark.asyncio
    async def test_list_without_window(self):
        client = _mock_client([])
        repo = SupabaseWorkoutRepository(client)

        assert await repo.list() == []
        client.query.gte.assert_not_called()
        client.query.lte.assert_not_called()

    @pytest.mark.asyncio
    async def test_insert(self):
        client = _mock_client([{"workout_id": "w1"}])
        repo = SupabaseWorkoutRepository(client)

        row = await repo.insert({"workout_id": "w1"})

        assert row == {"workout_id": "w1"}
        client.query.insert.assert_called_once_with({"workout_id": "w1"})

    @pytest.mark.asyncio
    async def test_update_filters_by_id(self):
        client = _mock_client([])
        repo = SupabaseWorkoutRepository(client)

        await repo.update("w1", {"title": "New"})

        client.query.update.assert_called_once_with({"title": "New"})
        client.query.eq.assert_called_once_with("workout_id", "w1")

    @pytest.mark.asyncio
    async def test_update_retries_transient_errors(self):
        client = _mock_client([])
        client.query.execute = AsyncMock(
            side_effect=[ConnectionError("connection reset"), MagicMock(data=[])]
        )
        repo = SupabaseWorkoutRepository(client, max_attempts=3, min_wait_seconds=0.01, max_wait_seconds=0.01)

        await repo.update("w1", {"title": "New"})

        assert client.query.execute.await_count == 2

    @pytest.mark.asyncio
    async def test_update_gives_up_after_max_attempts(self):
        client = _mock_client(error=ConnectionError("connection refused"))
        repo = SupabaseWorkoutRepository(client, max_attempts=2, min_wait_seconds=0.01, max_wait_seconds=0.01)

        with pytest.raises(StorageError) as exc_info:
            await repo.update("w1", {"title": "New"})

        assert exc_info.value.table == "workouts"
        assert exc_info.value.operation == "update"
        assert client.query.execute.await_count == 2

    @pytest.mark.asyncio
    async def test_permission_error_is_not_retried(self, caplog):
        client = _mock_client(error=Exception("new row violates row-level security policy"))
        repo = SupabaseWorkoutRepository(client, max_attempts=3, min_wait_seconds=0.01, max_wait_seconds=0.01)

        with pytest.raises(StorageError):
            await repo.update("w1", {"title": "New"})

        assert client.query.execute.await_count == 1
        assert "SUPABASE_SERVICE_ROLE_KEY" in caplog.text

    @pytest.mark.asyncio
    async def test_errors_become_storage_errors(self):
        repo = SupabaseWorkoutRepository(_mock_client(error=Exception("boom")))

        with pytest.raises(StorageError, match="select"):
            await repo.get("w1")
        with pytest.raises(StorageError, match="delete"):
            await repo.delete("w1")


# ============================================================================
# SupabaseSetRepository
# ============================================================================


class TestSupabaseSetRepository:

    @pytest.mark.asyncio
    async def test_insert_returns_row_with_id(self):
        client = _mock_client([{"id": "s1", "reps": 5}])
        repo = SupabaseSetRepository(client)

        row = await repo.insert({"reps": 5})

        assert row["id"] == "s1"
        client.table.assert_called_with("sets")

    @pytest.mark.asyncio
    async def test_insert_without_returned_row_fails(self):
        repo = SupabaseSetRepository(_mock_client([]))

        with pytest.raises(StorageError):
            await repo.insert({"reps": 5})

    @pytest.mark.asyncio
    async def test_assign_workout_uses_one_filtered_update(self):
        client = _mock_client([])
        repo = SupabaseSetRepository(client)

        await repo.assign_workout(["s1", "s2"], "w1")

        client.query.update.assert_called_once_with({"workout_id": "w1"})
        client.query.in_.assert_called_once_with("id", ["s1", "s2"])
        assert client.query.execute.await_count == 1

    @pytest.mark.asyncio
    async def test_assign_workout_with_no_sets_is_noop(self):
        client = _mock_client([])
        repo = SupabaseSetRepository(client)

        await repo.assign_workout([], "w1")

        client.table.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_error(self):
        repo = SupabaseSetRepository(_mock_client(error=Exception("boom")))

        with pytest.raises(StorageError) as exc_info:
            await repo.delete("s1")
        assert exc_info.value.row_id == "s1"


# ============================================================================
# SupabaseExerciseDefinitionRepository
# ============================================================================


class TestSupabaseExerciseDefinitionRepository:

    @pytest.mark.asyncio
    async def test_find_by_alias_resolves_definition(self):
        client = _mock_client()
        client.query.execute = AsyncMock(side_effect=[
            MagicMock(data=[{"exercise_id": "ex-1"}]),
            MagicMock(data=[{"id": "ex-1", "name": "Bench Press"}]),
        ])
        repo = SupabaseExerciseDefinitionRepository(client)

        definition = await repo.find_by_alias("bench press")

        assert definition == {"id": "ex-1", "name": "Bench Press"}
        assert [c.args[0] for c in client.table.call_args_list] == ["exercise_aliases", "exercises"]

    @pytest.mark.asyncio
    async def test_unknown_alias(self):
        repo = SupabaseExerciseDefinitionRepository(_mock_client([]))
        assert await repo.find_by_alias("zercher squat") is None

    @pytest.mark.asyncio
    async def test_dangling_alias(self, caplog):
        client = _mock_client()
        client.query.execute = AsyncMock(side_effect=[
            MagicMock(data=[{"exercise_id": "ex-9"}]),
            MagicMock(data=[]),
        ])
        repo = SupabaseExerciseDefinitionRepository(client)

        assert await repo.find_by_alias("ghost") is None
        assert "missing exercise ex-9" in caplog.text

    @pytest.mark.asyncio
    async def test_insert_and_alias(self):
        client = _mock_client([{"id": "ex-2", "name": "Deadlift"}])
        repo = SupabaseExerciseDefinitionRepository(client)

        definition = await repo.insert("Deadlift")
        await repo.add_alias("deadlift", definition["id"])

        assert client.query.insert.call_args_list[0].args[0] == {"name": "Deadlift"}
        assert client.query.insert.call_args_list[1].args[0] == {"alias": "deadlift", "exercise_id": "ex-2"}

    @pytest.mark.asyncio
    async def test_weight_pb_orders_sets_by_weight(self):
        client = _mock_client([{"weight": 140}])
        repo = SupabaseExerciseDefinitionRepository(client)

        assert await repo.get_weight_pb("ex-1") == 140
        client.table.assert_called_with("sets")
        client.query.eq.assert_called_with("exercise_id", "ex-1")
        client.query.order.assert_called_with("weight", desc=True)
        client.query.limit.assert_called_with(1)

    @pytest.mark.asyncio
    async def test_weight_pb_without_history(self):
        repo = SupabaseExerciseDefinitionRepository(_mock_client([]))
        assert await repo.get_weight_pb("ex-1") is None

    @pytest.mark.asyncio
    async def test_volume_pb_calls_database_function(self):
        client = _mock_client([{"volume": 2400}])
        client.rpc.return_value = client.query
        repo = SupabaseExerciseDefinitionRepository(client)

        assert await repo.get_volume_pb("ex-1") == 2400
        client.rpc.assert_called_once_with("get_volume_pb", {"exercise_id": "ex-1"})

    @pytest.mark.asyncio
    async def test_count_sets_uses_exact_count(self):
        client = _mock_client()
        client.query.execute = AsyncMock(return_value=MagicMock(data=[], count=7))
        repo = SupabaseExerciseDefinitionRepository(client)

        assert await repo.count_sets("ex-1") == 7
        client.query.select.assert_called_with("id", count="exact")

    @pytest.mark.asyncio
    async def test_delete_removes_aliases_first(self):
        client = _mock_client()
        repo = SupabaseExerciseDefinitionRepository(client)

        await repo.delete("ex-1")

        assert [c.args[0] for c in client.table.call_args_list] == ["exercise_aliases", "exercises"]
        assert client.query.eq.call_args_list[0].args == ("exercise_id", "ex-1")
        assert client.query.eq.call_args_list[1].args == ("id", "ex-1")

    @pytest.mark.asyncio
    async def test_history_errors_become_storage_errors(self):
        repo = SupabaseExerciseDefinitionRepository(_mock_client(error=RuntimeError("timeout")))

        with pytest.raises(StorageError) as exc_info:
            await repo.get_weight_pb("ex-1")
        assert exc_info.value.table == "sets"
