"""
Workouts router for reading and deleting stored workouts.

This router contains endpoints for:
- /workouts - List workouts in a calendar window, with totals
- /workouts/{workout_id}/summary - Display-ready summary of one workout
- /workouts/{workout_id} - Delete a workout and its set rows

Storage failures are reported as a generic 502; the underlying error text
only goes to the log.
"""

import asyncio
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.deps import get_load_workout_use_case
from api.schemas import ExerciseSummary, WorkoutListResponse, WorkoutSummary
from application.use_cases import LoadWorkoutUseCase, Timeframe
from domain.entities import Workout, WorkoutMetric, stringify_metric, total_for
from domain.exceptions import StorageError

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Workouts"],
)


def summarize(workout: Workout, weight_pb_sets: Optional[List[int]] = None) -> WorkoutSummary:
    """
    Build the display summary of a live workout.

    Args:
        workout: Loaded aggregate
        weight_pb_sets: Per-exercise count of weight-PB sets, when computed
    """
    if weight_pb_sets is None:
        weight_pb_sets = [None] * workout.count_exercises()
    return WorkoutSummary(
        workout_id=workout.id,
        title=workout.title,
        date=workout.get_date_string(),
        start_time=workout.start_time,
        end_time=workout.end_time,
        duration=workout.get_duration_string(),
        volume=workout.get_volume(),
        volume_display=workout.get_volume_string(),
        set_count=workout.count_sets(),
        set_count_display=workout.count_sets_string(),
        energy=workout.get_energy_string(),
        heart_rate=workout.get_heart_rate_string(),
        exercises=[
            ExerciseSummary(
                name=ex.name,
                set_count=ex.count_sets(),
                volume=ex.get_volume(),
                weight_pb_sets=pb_count,
            )
            for ex, pb_count in zip(workout.exercises, weight_pb_sets)
        ],
    )


@router.get("/workouts", response_model=WorkoutListResponse)
async def list_workouts_endpoint(
    timeframe: Timeframe = Query(Timeframe.ALL),
    use_case: LoadWorkoutUseCase = Depends(get_load_workout_use_case),
):
    """List workouts in a calendar window, newest first, with totals."""
    try:
        workouts = await use_case.list_workouts(timeframe)
    except StorageError as e:
        logger.error(f"Failed to list workouts for {timeframe.value}: {e}")
        raise HTTPException(status_code=502, detail="Failed to load workouts")

    return WorkoutListResponse(
        timeframe=timeframe.value,
        count=len(workouts),
        total_volume=total_for(workouts, WorkoutMetric.VOLUME),
        total_energy=total_for(workouts, WorkoutMetric.ENERGY),
        total_time=stringify_metric(total_for(workouts, WorkoutMetric.TIME), WorkoutMetric.TIME),
        workouts=[summarize(w) for w in workouts],
    )


@router.get("/workouts/{workout_id}/summary", response_model=WorkoutSummary)
async def get_workout_summary_endpoint(
    workout_id: str,
    use_case: LoadWorkoutUseCase = Depends(get_load_workout_use_case),
):
    """Get the display summary of one workout, with weight-PB sets flagged."""
    try:
        workout = await use_case.execute(workout_id)
        flagged = []
        if workout is not None:
            flagged = await asyncio.gather(*(ex.flag_weight_pbs() for ex in workout.exercises))
    except StorageError as e:
        logger.error(f"Failed to load workout {workout_id}: {e}")
        raise HTTPException(status_code=502, detail="Failed to load workout")

    if workout is None:
        raise HTTPException(status_code=404, detail="Workout not found")
    return summarize(workout, [len(sets) for sets in flagged])


@router.delete("/workouts/{workout_id}")
async def delete_workout_endpoint(
    workout_id: str,
    use_case: LoadWorkoutUseCase = Depends(get_load_workout_use_case),
):
    """Delete a workout. Its set rows are removed in the background."""
    try:
        workout = await use_case.execute(workout_id)
    except StorageError as e:
        logger.error(f"Failed to load workout {workout_id} for deletion: {e}")
        raise HTTPException(status_code=502, detail="Failed to delete workout")

    if workout is None:
        raise HTTPException(status_code=404, detail="Workout not found")

    await workout.delete_workout()
    return {
        "success": True,
        "message": "Workout deleted successfully"
    }
