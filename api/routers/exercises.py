"""
Exercises router for the shared exercise dictionary.

This router contains endpoints for:
- /exercises - List definitions with their personal bests and set counts
- /exercises/{exercise_id} - History of one definition, or delete it
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from api.deps import get_exercise_stats_use_case
from api.schemas import ExerciseListResponse, ExerciseStatsResponse
from application.use_cases import ExerciseSort, ExerciseStats, ExerciseStatsUseCase
from domain.exceptions import DefinitionInUseError, StorageError

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Exercises"],
)


def _to_response(stats: ExerciseStats) -> ExerciseStatsResponse:
    return ExerciseStatsResponse(
        exercise_id=stats.exercise_id,
        name=stats.name,
        description=stats.description,
        weight_pb=stats.weight_pb,
        volume_pb=stats.volume_pb,
        set_count=stats.set_count,
    )


@router.get("/exercises", response_model=ExerciseListResponse)
async def list_exercises_endpoint(
    sort_by: ExerciseSort = Query(ExerciseSort.NAME),
    ascending: bool = Query(True),
    use_case: ExerciseStatsUseCase = Depends(get_exercise_stats_use_case),
):
    """List exercise definitions with their history."""
    try:
        exercises = await use_case.list_exercises(sort_by, ascending)
    except StorageError as e:
        logger.error(f"Failed to list exercises: {e}")
        raise HTTPException(status_code=502, detail="Failed to load exercises")

    return ExerciseListResponse(
        sort_by=sort_by.value,
        ascending=ascending,
        count=len(exercises),
        exercises=[_to_response(s) for s in exercises],
    )


@router.get("/exercises/{exercise_id}", response_model=ExerciseStatsResponse)
async def get_exercise_endpoint(
    exercise_id: str,
    use_case: ExerciseStatsUseCase = Depends(get_exercise_stats_use_case),
):
    try:
        stats = await use_case.execute(exercise_id)
    except StorageError as e:
        logger.error(f"Failed to load exercise {exercise_id}: {e}")
        raise HTTPException(status_code=502, detail="Failed to load exercise")

    if stats is None:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return _to_response(stats)


@router.delete("/exercises/{exercise_id}")
async def delete_exercise_endpoint(
    exercise_id: str,
    use_case: ExerciseStatsUseCase = Depends(get_exercise_stats_use_case),
):
    """Delete an exercise definition that no logged set uses."""
    try:
        deleted = await use_case.delete(exercise_id)
    except DefinitionInUseError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StorageError as e:
        logger.error(f"Failed to delete exercise {exercise_id}: {e}")
        raise HTTPException(status_code=502, detail="Failed to delete exercise")

    if not deleted:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return {
        "success": True,
        "message": "Exercise deleted successfully"
    }
