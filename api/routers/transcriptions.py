"""
Transcriptions router for handwritten workout logs.

This router contains endpoints for:
- /transcriptions - Transcribe photographed log pages and store the workout
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from api.deps import get_ingest_transcription_use_case
from api.schemas import TranscriptionRequest, TranscriptionResponse
from application.use_cases import IngestTranscriptionUseCase

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Transcriptions"],
)

_ERROR_STATUS = {
    "validation": (400, None),
    "transcription": (502, "Failed to generate workout"),
    "storage": (502, "Failed to save workout"),
}


@router.post("/transcriptions", response_model=TranscriptionResponse)
async def create_transcription_endpoint(
    request: TranscriptionRequest,
    use_case: IngestTranscriptionUseCase = Depends(get_ingest_transcription_use_case),
):
    """Transcribe log pages into a new stored workout."""
    result = await use_case.execute(request.image_data)

    if not result.success:
        status_code, detail = _ERROR_STATUS.get(result.error_kind, (500, "Failed to generate workout"))
        raise HTTPException(status_code=status_code, detail=detail or result.error)

    return TranscriptionResponse(
        workout_id=result.workout_id,
        exercise_count=result.exercise_count,
        set_count=result.set_count,
    )
