"""
Exercise Stats Use Case.

Per-definition history for the shared exercise dictionary: heaviest weight,
best single-workout volume and how many sets have been logged, plus
listing and deleting definitions.
"""
import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from application.ports import AggregateStore
from domain.exceptions import DefinitionInUseError

logger = logging.getLogger(__name__)


class ExerciseSort(str, Enum):
    """Orderings for the exercise list."""

    NAME = "name"
    SETS = "sets"


@dataclass
class ExerciseStats:
    """History of one shared exercise definition."""

    exercise_id: str
    name: str
    description: str = ""
    weight_pb: Optional[float] = None
    volume_pb: Optional[float] = None
    set_count: int = 0


class ExerciseStatsUseCase:
    """
    Use case for reading and managing shared exercise definitions.

    Storage errors propagate as StorageError.
    """

    def __init__(self, store: AggregateStore):
        """
        Initialize with required dependencies.

        Args:
            store: Repositories; only `exercises` is used
        """
        self._store = store

    async def _stats_for(self, definition: Dict[str, Any]) -> ExerciseStats:
        exercise_id = definition["id"]
        weight_pb, volume_pb, set_count = await asyncio.gather(
            self._store.exercises.get_weight_pb(exercise_id),
            self._store.exercises.get_volume_pb(exercise_id),
            self._store.exercises.count_sets(exercise_id),
        )
        return ExerciseStats(
            exercise_id=exercise_id,
            name=definition.get("name") or "",
            description=definition.get("description") or "",
            weight_pb=weight_pb,
            volume_pb=volume_pb,
            set_count=set_count,
        )

    async def execute(self, exercise_id: str) -> Optional[ExerciseStats]:
        """
        Get the history of one definition.

        Args:
            exercise_id: Definition to look up

        Returns:
            ExerciseStats, or None if no such definition exists
        """
        definition = await self._store.exercises.get(exercise_id)
        if definition is None:
            logger.info(f"Exercise {exercise_id} not found")
            return None
        return await self._stats_for(definition)

    async def list_exercises(
        self,
        sort_by: Union[ExerciseSort, str] = ExerciseSort.NAME,
        ascending: bool = True,
    ) -> List[ExerciseStats]:
        """
        List every definition with its history.

        Names compare case-insensitively; ties keep storage order.

        Raises:
            ValueError: If `sort_by` is not an ExerciseSort value
        """
        sort_by = ExerciseSort(sort_by)
        definitions = await self._store.exercises.list_all()
        stats = await asyncio.gather(*(self._stats_for(d) for d in definitions))

        if sort_by is ExerciseSort.SETS:
            return sorted(stats, key=lambda s: s.set_count, reverse=not ascending)
        return sorted(stats, key=lambda s: s.name.lower(), reverse=not ascending)

    async def delete(self, exercise_id: str) -> bool:
        """
        Delete a definition that no logged set references.

        Returns:
            True if deleted, False if no such definition exists

        Raises:
            DefinitionInUseError: If sets still point at the definition
        """
        if await self._store.exercises.get(exercise_id) is None:
            return False
        set_count = await self._store.exercises.count_sets(exercise_id)
        if set_count > 0:
            raise DefinitionInUseError(exercise_id, set_count)
        await self._store.exercises.delete(exercise_id)
        logger.info(f"Deleted exercise definition {exercise_id}")
        return True
