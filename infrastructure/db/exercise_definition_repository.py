"""
Supabase implementation of ExerciseDefinitionRepository.

Shared exercise definitions live in `exercises`; `exercise_aliases` maps
lower-cased names to them so lookups are case-insensitive.
"""
import logging
from typing import Any, Dict, List, Optional

from supabase import AsyncClient

from domain.exceptions import StorageError

logger = logging.getLogger(__name__)


class SupabaseExerciseDefinitionRepository:
    """
    Supabase implementation of ExerciseDefinitionRepository protocol.

    Provides methods to:
    - Resolve an alias to its shared definition
    - Create a definition
    - Register an alias for a definition
    - Read, list and delete definitions
    - Query per-definition history (weight and volume PBs, set count)
    """

    def __init__(self, client: AsyncClient):
        """
        Initialize with Supabase client.

        Args:
            client: Async Supabase client instance (injected, not global)
        """
        self._client = client

    async def find_by_alias(self, alias: str) -> Optional[Dict[str, Any]]:
        """
        Look up a definition through its alias.

        Args:
            alias: Lower-cased exercise name

        Returns:
            Definition row (id, name) or None if the alias is unknown
        """
        try:
            alias_result = await (
                self._client.table("exercise_aliases")
                .select("exercise_id")
                .eq("alias", alias)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to look up exercise alias '{alias}': {e}")
            raise StorageError("exercise_aliases", "select", alias, str(e)) from e

        if not alias_result.data:
            return None

        exercise_id = alias_result.data[0]["exercise_id"]
        try:
            result = await self._client.table("exercises").select("*").eq("id", exercise_id).limit(1).execute()
        except Exception as e:
            logger.error(f"Failed to get exercise {exercise_id}: {e}")
            raise StorageError("exercises", "select", exercise_id, str(e)) from e

        if not result.data:
            logger.warning(f"Alias '{alias}' points at missing exercise {exercise_id}")
            return None
        return result.data[0]

    async def insert(self, name: str) -> Dict[str, Any]:
        """Insert a new definition and return its row."""
        try:
            result = await self._client.table("exercises").insert({"name": name}).execute()
        except Exception as e:
            logger.error(f"Failed to insert exercise '{name}': {e}")
            raise StorageError("exercises", "insert", None, str(e)) from e
        if not result.data:
            raise StorageError("exercises", "insert", None, "no row returned")
        return result.data[0]

    async def add_alias(self, alias: str, exercise_id: str) -> None:
        try:
            await self._client.table("exercise_aliases").insert(
                {"alias": alias, "exercise_id": exercise_id}
            ).execute()
        except Exception as e:
            logger.error(f"Failed to add alias '{alias}' for exercise {exercise_id}: {e}")
            raise StorageError("exercise_aliases", "insert", exercise_id, str(e)) from e

    async def get(self, exercise_id: str) -> Optional[Dict[str, Any]]:
        """Get a definition row by ID."""
        try:
            result = await self._client.table("exercises").select("*").eq("id", exercise_id).limit(1).execute()
        except Exception as e:
            logger.error(f"Failed to get exercise {exercise_id}: {e}")
            raise StorageError("exercises", "select", exercise_id, str(e)) from e
        return result.data[0] if result.data else None

    async def list_all(self) -> List[Dict[str, Any]]:
        try:
            result = await self._client.table("exercises").select("*").execute()
        except Exception as e:
            logger.error(f"Failed to list exercises: {e}")
            raise StorageError("exercises", "select", None, str(e)) from e
        return result.data or []

    async def delete(self, exercise_id: str) -> None:
        """Delete the aliases of a definition, then the definition itself."""
        try:
            await self._client.table("exercise_aliases").delete().eq("exercise_id", exercise_id).execute()
            await self._client.table("exercises").delete().eq("id", exercise_id).execute()
            logger.info(f"Deleted exercise {exercise_id}")
        except Exception as e:
            logger.error(f"Failed to delete exercise {exercise_id}: {e}")
            raise StorageError("exercises", "delete", exercise_id, str(e)) from e

    # =========================================================================
    # History queries
    # =========================================================================

    async def get_weight_pb(self, exercise_id: str) -> Optional[float]:
        """Heaviest `sets.weight` logged against the definition."""
        try:
            result = await (
                self._client.table("sets")
                .select("weight")
                .eq("exercise_id", exercise_id)
                .order("weight", desc=True)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to get weight PB for exercise {exercise_id}: {e}")
            raise StorageError("sets", "select", exercise_id, str(e)) from e
        if not result.data:
            return None
        return result.data[0]["weight"]

    async def get_volume_pb(self, exercise_id: str) -> Optional[float]:
        """
        Best single-workout volume, computed by the `get_volume_pb` database
        function.
        """
        try:
            result = await self._client.rpc("get_volume_pb", {"exercise_id": exercise_id}).execute()
        except Exception as e:
            logger.error(f"Failed to get volume PB for exercise {exercise_id}: {e}")
            raise StorageError("sets", "rpc", exercise_id, str(e)) from e
        if not result.data:
            return None
        return result.data[0]["volume"]

    async def count_sets(self, exercise_id: str) -> int:
        try:
            result = await (
                self._client.table("sets")
                .select("id", count="exact")
                .eq("exercise_id", exercise_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to count sets for exercise {exercise_id}: {e}")
            raise StorageError("sets", "select", exercise_id, str(e)) from e
        return result.count or 0
