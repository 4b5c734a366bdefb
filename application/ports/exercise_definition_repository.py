"""
Exercise Definition Repository Interface (Port).

This module defines the abstract interface for the shared, name-keyed exercise
dictionary (`exercises` plus its lower-cased `exercise_aliases`) and the
per-definition history queries (personal bests, set counts). Many
workouts reference the same definition row by id.
"""
from typing import Any, Dict, List, Optional, Protocol


class ExerciseDefinitionRepository(Protocol):
    """
    Abstract interface for shared exercise definitions.

    Lookups are by lower-cased alias so that "Bench Press" and "bench press"
    resolve to the same definition.
    """

    async def find_by_alias(self, alias: str) -> Optional[Dict[str, Any]]:
        """
        Find the definition registered under an alias.

        Args:
            alias: Lower-cased exercise name

        Returns:
            Definition row ({"id", "name", ...}) or None if not registered
        """
        ...

    async def insert(self, name: str) -> Dict[str, Any]:
        """
        Create a new shared definition.

        Args:
            name: Display name to store as canonical

        Returns:
            The inserted row, including its generated id
        """
        ...

    async def add_alias(self, alias: str, exercise_id: str) -> None:
        """
        Register an alias for a definition.

        Args:
            alias: Lower-cased exercise name
            exercise_id: Definition the alias points at
        """
        ...

    async def get(self, exercise_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a definition row by ID.

        Returns:
            Definition row ({"id", "name", "description"}) or None
        """
        ...

    async def list_all(self) -> List[Dict[str, Any]]:
        """List every shared definition row."""
        ...

    async def delete(self, exercise_id: str) -> None:
        """
        Delete a definition and the aliases pointing at it.

        Args:
            exercise_id: Definition to remove
        """
        ...

    async def get_weight_pb(self, exercise_id: str) -> Optional[float]:
        """
        Heaviest weight ever logged for a definition.

        Args:
            exercise_id: Definition the sets reference

        Returns:
            Weight in kilograms, or None if no set references the definition
        """
        ...

    async def get_volume_pb(self, exercise_id: str) -> Optional[float]:
        """
        Best single-workout volume (sum of reps x weight) for a definition.

        Args:
            exercise_id: Definition the sets reference

        Returns:
            Volume in kilograms, or None if no set references the definition
        """
        ...

    async def count_sets(self, exercise_id: str) -> int:
        """Number of set rows, across all workouts, that reference a definition."""
        ...
