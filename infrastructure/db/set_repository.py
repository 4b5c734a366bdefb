"""
Supabase implementation of SetRepository.

Every set is its own row in `sets`; the workout row only references it by id.
"""
import logging
from typing import Any, Dict, List, Optional

from supabase import AsyncClient

from domain.exceptions import StorageError

logger = logging.getLogger(__name__)

TABLE = "sets"


class SupabaseSetRepository:
    """
    Supabase implementation of SetRepository protocol.

    The client is injected via constructor for testability.
    """

    def __init__(self, client: AsyncClient):
        """
        Initialize with Supabase client.

        Args:
            client: Async Supabase client instance (injected, not global)
        """
        self._client = client

    async def get(self, set_id: str) -> Optional[Dict[str, Any]]:
        """Get a set row by ID."""
        try:
            result = await self._client.table(TABLE).select("*").eq("id", set_id).limit(1).execute()
        except Exception as e:
            logger.error(f"Failed to get set {set_id}: {e}")
            raise StorageError(TABLE, "select", set_id, str(e)) from e
        return result.data[0] if result.data else None

    async def insert(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a set row and return it with its generated id."""
        try:
            result = await self._client.table(TABLE).insert(data).execute()
        except Exception as e:
            logger.error(f"Failed to insert set for exercise {data.get('exercise_id')}: {e}")
            raise StorageError(TABLE, "insert", None, str(e)) from e
        if not result.data:
            logger.error("Set insert returned no row")
            raise StorageError(TABLE, "insert", None, "no row returned")
        return result.data[0]

    async def update(self, set_id: str, data: Dict[str, Any]) -> None:
        try:
            await self._client.table(TABLE).update(data).eq("id", set_id).execute()
        except Exception as e:
            logger.error(f"Failed to update set {set_id}: {e}")
            raise StorageError(TABLE, "update", set_id, str(e)) from e

    async def delete(self, set_id: str) -> None:
        try:
            await self._client.table(TABLE).delete().eq("id", set_id).execute()
        except Exception as e:
            logger.error(f"Failed to delete set {set_id}: {e}")
            raise StorageError(TABLE, "delete", set_id, str(e)) from e

    async def assign_workout(self, set_ids: List[str], workout_id: str) -> None:
        """Backfill `workout_id` on many sets with one filtered update."""
        if not set_ids:
            return
        try:
            await self._client.table(TABLE).update({"workout_id": workout_id}).in_("id", set_ids).execute()
            logger.info(f"Assigned {len(set_ids)} sets to workout {workout_id}")
        except Exception as e:
            logger.error(f"Failed to assign {len(set_ids)} sets to workout {workout_id}: {e}")
            raise StorageError(TABLE, "update", workout_id, str(e)) from e
