"""Pydantic models for the exercise-definition API."""

from typing import List, Optional

from pydantic import BaseModel, Field


class ExerciseStatsResponse(BaseModel):
    """History of one shared exercise definition."""
    exercise_id: str
    name: str
    description: str = ""
    weight_pb: Optional[float] = Field(default=None, description="Kilograms")
    volume_pb: Optional[float] = Field(default=None, description="Kilograms")
    set_count: int = 0


class ExerciseListResponse(BaseModel):
    sort_by: str
    ascending: bool
    count: int
    exercises: List[ExerciseStatsResponse] = Field(default_factory=list)
