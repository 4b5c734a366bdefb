"""
Load Workout Use Case.

Rebuilds live workout aggregates from the `workouts` table. Each aggregate
is built leaf to root: sets, then exercises, then the workout, with
back-references attached afterwards.
"""
import asyncio
import logging
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import List, Optional, Union

from application.ports import AggregateStore
from domain.entities.workout import Workout

logger = logging.getLogger(__name__)


class Timeframe(str, Enum):
    """Calendar windows workouts can be listed for."""

    ALL = "all"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


def timeframe_start(timeframe: Union[Timeframe, str], now: datetime) -> Optional[datetime]:
    """
    Start of the calendar window containing `now`.

    Weeks start on Monday. Returns None for Timeframe.ALL.

    Raises:
        ValueError: If `timeframe` is not a Timeframe value

    Examples:
        >>> timeframe_start("week", datetime(2024, 6, 15, 9, 30)).isoformat()
        '2024-06-10T00:00:00'
        >>> timeframe_start("year", datetime(2024, 6, 15, 9, 30)).isoformat()
        '2024-01-01T00:00:00'
    """
    timeframe = Timeframe(timeframe)
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    if timeframe is Timeframe.WEEK:
        return midnight - timedelta(days=midnight.weekday())
    if timeframe is Timeframe.MONTH:
        return midnight.replace(day=1)
    if timeframe is Timeframe.YEAR:
        return midnight.replace(month=1, day=1)
    return None


class LoadWorkoutUseCase:
    """
    Use case for materializing workout aggregates.

    Storage errors propagate as StorageError; the caller decides how to
    report them.
    """

    def __init__(self, store: AggregateStore):
        """
        Initialize with required dependencies.

        Args:
            store: Repositories the aggregate is persisted across
        """
        self._store = store

    async def execute(self, workout_id: str) -> Optional[Workout]:
        """
        Load one workout aggregate.

        Args:
            workout_id: ID of the workout to load

        Returns:
            The live Workout, or None if no such row exists
        """
        row = await self._store.workouts.get(workout_id)
        if row is None:
            logger.info(f"Workout {workout_id} not found")
            return None
        return await Workout.create(row, self._store)

    async def list_workouts(
        self,
        timeframe: Union[Timeframe, str] = Timeframe.ALL,
        now: Optional[datetime] = None,
    ) -> List[Workout]:
        """
        Load every workout in a calendar window, newest first.

        Args:
            timeframe: all, week, month or year
            now: Reference time (defaults to UTC now)

        Returns:
            Workouts sorted by start time, descending
        """
        now = now or datetime.now(timezone.utc)
        start = timeframe_start(timeframe, now)
        if start is None:
            rows = await self._store.workouts.list()
        else:
            rows = await self._store.workouts.list(start_after=start, end_before=now)

        workouts = await asyncio.gather(*(Workout.create(row, self._store) for row in rows))
        logger.debug(f"Loaded {len(workouts)} workout(s) for timeframe {Timeframe(timeframe).value}")
        return sorted(workouts, key=lambda w: w.start_time, reverse=True)
