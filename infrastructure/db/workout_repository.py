"""
Supabase implementation of WorkoutRepository.

A workout row holds the whole serialized aggregate. Updates are the
debounced saves issued by the Workout entity and are retried with backoff
on transient errors; everything else fails on the first error.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from supabase import AsyncClient

from backend.retry import retry_async_call
from domain.exceptions import StorageError

logger = logging.getLogger(__name__)

TABLE = "workouts"


def _log_permission_hint(error_msg: str) -> None:
    lowered = error_msg.lower()
    if "PGRST" in error_msg or "permission" in lowered or "row-level security" in lowered:
        logger.error(
            "RLS/Permissions error: Consider using SUPABASE_SERVICE_ROLE_KEY "
            "instead of SUPABASE_ANON_KEY for backend API"
        )


class SupabaseWorkoutRepository:
    """
    Supabase implementation of WorkoutRepository protocol.

    All Supabase query logic for workouts is encapsulated here.
    The client is injected via constructor for testability.
    """

    def __init__(
        self,
        client: AsyncClient,
        *,
        max_attempts: int = 3,
        min_wait_seconds: float = 0.5,
        max_wait_seconds: float = 5.0,
    ):
        """
        Initialize with Supabase client.

        Args:
            client: Async Supabase client instance (injected, not global)
            max_attempts: Attempts per update, including the first (1 = no retry)
            min_wait_seconds: First backoff delay between update attempts
            max_wait_seconds: Backoff ceiling between update attempts
        """
        self._client = client
        self._max_attempts = max_attempts
        self._min_wait_seconds = min_wait_seconds
        self._max_wait_seconds = max_wait_seconds

    async def get(self, workout_id: str) -> Optional[Dict[str, Any]]:
        """Get a single workout by ID."""
        try:
            result = await self._client.table(TABLE).select("*").eq("workout_id", workout_id).limit(1).execute()
        except Exception as e:
            logger.error(f"Failed to get workout {workout_id}: {e}")
            raise StorageError(TABLE, "select", workout_id, str(e)) from e
        return result.data[0] if result.data else None

    async def list(
        self,
        *,
        start_after: Optional[datetime] = None,
        end_before: Optional[datetime] = None,
    ) -> List[Dict[str, Any]]:
        """List workouts, newest first, optionally within a time window."""
        try:
            query = self._client.table(TABLE).select("*")
            if start_after is not None:
                query = query.gte("start_time", start_after.isoformat())
            if end_before is not None:
                query = query.lte("end_time", end_before.isoformat())
            result = await query.order("start_time", desc=True).execute()
        except Exception as e:
            logger.error(f"Failed to list workouts: {e}")
            raise StorageError(TABLE, "select", None, str(e)) from e
        return result.data or []

    async def insert(self, data: Dict[str, Any]) -> Dict[str, Any]:
        workout_id = data.get("workout_id")
        try:
            result = await self._client.table(TABLE).insert(data).execute()
        except Exception as e:
            logger.error(f"Failed to insert workout {workout_id}: {e}")
            _log_permission_hint(str(e))
            raise StorageError(TABLE, "insert", workout_id, str(e)) from e
        logger.info(f"Workout {workout_id} inserted")
        return result.data[0] if result.data else data

    async def update(self, workout_id: str, data: Dict[str, Any]) -> None:
        """Overwrite the workout row, retrying transient failures."""
        try:
            await retry_async_call(
                self._update_once,
                workout_id,
                data,
                max_attempts=self._max_attempts,
                min_wait_seconds=self._min_wait_seconds,
                max_wait_seconds=self._max_wait_seconds,
            )
        except Exception as e:
            logger.error(f"Failed to update workout {workout_id}: {e}")
            _log_permission_hint(str(e))
            raise StorageError(TABLE, "update", workout_id, str(e)) from e

    async def _update_once(self, workout_id: str, data: Dict[str, Any]) -> None:
        await self._client.table(TABLE).update(data).eq("workout_id", workout_id).execute()

    async def delete(self, workout_id: str) -> None:
        try:
            await self._client.table(TABLE).delete().eq("workout_id", workout_id).execute()
        except Exception as e:
            logger.error(f"Failed to delete workout {workout_id}: {e}")
            raise StorageError(TABLE, "delete", workout_id, str(e)) from e
