"""
Set Repository Interface (Port).

This module defines the abstract interface for the `sets` row collection.
Implementations may use Supabase, in-memory storage, or other backends.
"""
from typing import Any, Dict, List, Optional, Protocol


class SetRepository(Protocol):
    """
    Abstract interface for set persistence.

    Every method raises StorageError when the backend rejects the operation;
    callers never have to inspect an error payload.
    """

    async def get(self, set_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a set row by ID.

        Args:
            set_id: Set row identifier

        Returns:
            Set row dictionary, or None if no such row exists
        """
        ...

    async def insert(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert a new set row.

        Args:
            data: Column values (exercise_id, workout_id, reps, weight, notes)

        Returns:
            The inserted row, including its generated id
        """
        ...

    async def update(self, set_id: str, data: Dict[str, Any]) -> None:
        """
        Update an existing set row.

        Args:
            set_id: Set row identifier
            data: Column values to overwrite
        """
        ...

    async def delete(self, set_id: str) -> None:
        """
        Delete a set row. Deleting a missing row is not an error.

        Args:
            set_id: Set row identifier
        """
        ...

    async def assign_workout(self, set_ids: List[str], workout_id: str) -> None:
        """
        Backfill the workout foreign key on many sets in one request.

        Args:
            set_ids: Rows to update
            workout_id: Workout the sets belong to
        """
        ...
