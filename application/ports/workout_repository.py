"""
Workout Repository Interface (Port).

This module defines the abstract interface for the `workouts` row collection.
A workout row holds the whole aggregate: scalar fields, the nested
exercise/set structure and denormalized metrics.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol


class WorkoutRepository(Protocol):
    """
    Abstract interface for workout persistence operations.

    Rows are keyed by `workout_id`. Every method raises StorageError when the
    backend rejects the operation.
    """

    async def get(self, workout_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a single workout row.

        Args:
            workout_id: Workout identifier

        Returns:
            Workout row or None if not found
        """
        ...

    async def list(
        self,
        *,
        start_after: Optional[datetime] = None,
        end_before: Optional[datetime] = None,
    ) -> List[Dict[str, Any]]:
        """
        List workout rows, optionally restricted to a time window.

        Args:
            start_after: Only rows with start_time >= this instant
            end_before: Only rows with end_time <= this instant

        Returns:
            Workout rows in backend order
        """
        ...

    async def insert(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert a workout row.

        Args:
            data: Serialized workout (see WorkoutRecord)

        Returns:
            The inserted row
        """
        ...

    async def update(self, workout_id: str, data: Dict[str, Any]) -> None:
        """
        Overwrite a workout row with a fresh serialization.

        Args:
            workout_id: Workout identifier
            data: Serialized workout (see WorkoutRecord)
        """
        ...

    async def delete(self, workout_id: str) -> None:
        """
        Delete a workout row.

        Args:
            workout_id: Workout identifier
        """
        ...
