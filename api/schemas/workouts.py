"""
Pydantic models for the workout and transcription API.

Request and response bodies only; the aggregate itself is never exposed.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TranscriptionRequest(BaseModel):
    """Photographed log pages to transcribe."""
    model_config = ConfigDict(populate_by_name=True)

    image_data: List[str] = Field(
        ...,
        alias="imageData",
        description="Base64 images (or data URLs) of the log pages",
    )


class TranscriptionResponse(BaseModel):
    workout_id: str
    exercise_count: int = 0
    set_count: int = 0


class ExerciseSummary(BaseModel):
    name: str
    set_count: int
    volume: float = Field(..., description="Kilograms")
    weight_pb_sets: Optional[int] = Field(
        default=None,
        description="Sets matching the heaviest weight ever logged for the exercise",
    )


class WorkoutSummary(BaseModel):
    """Display-ready summary of one workout."""
    workout_id: str
    title: str
    date: str
    start_time: datetime
    end_time: datetime
    duration: str
    volume: float = Field(..., description="Kilograms")
    volume_display: Optional[str] = None
    set_count: int
    set_count_display: Optional[str] = None
    energy: Optional[str] = None
    heart_rate: Optional[str] = None
    exercises: List[ExerciseSummary] = Field(default_factory=list)


class WorkoutListResponse(BaseModel):
    timeframe: str
    count: int
    total_volume: float = Field(..., description="Kilograms")
    total_energy: float = Field(..., description="Kilojoules")
    total_time: str
    workouts: List[WorkoutSummary] = Field(default_factory=list)
