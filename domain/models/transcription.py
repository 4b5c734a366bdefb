"""
Shape of a workout transcribed from a handwritten log by the vision model.

Field names follow the model's JSON schema (`startTime`, `exercises_full`),
so validation happens directly on the model output.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain.models.load import Energy


class PartialDate(BaseModel):
    """Date/time components read from a log; any of them may be missing or wrong."""

    model_config = ConfigDict(extra="ignore")

    day: Optional[int] = None
    month: Optional[int] = None
    year: Optional[int] = None
    hour: Optional[int] = None
    minute: Optional[int] = None


class TranscribedSet(BaseModel):
    model_config = ConfigDict(extra="ignore")

    reps: int = Field(default=0, ge=0)
    weight: float = Field(default=0, ge=0)
    unit: Optional[str] = None
    rest: Optional[int] = Field(default=None, description="Rest in seconds")
    notes: str = ""

    @field_validator("reps", "weight", mode="before")
    @classmethod
    def none_as_zero(cls, v):
        return 0 if v is None else v

    @field_validator("notes", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return "" if v is None else v


class TranscribedExercise(BaseModel):
    model_config = ConfigDict(extra="ignore")

    exercise: str = Field(..., min_length=1)
    notes: str = ""
    sets: List[TranscribedSet] = Field(default_factory=list)

    @field_validator("notes", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return "" if v is None else v

    @field_validator("sets", mode="before")
    @classmethod
    def none_as_empty_list(cls, v):
        return [] if v is None else v


class TranscribedWorkout(BaseModel):
    """
    Workout produced by the transcription service.

    Examples:
        >>> workout = TranscribedWorkout.model_validate({
        ...     "title": "Morning push",
        ...     "exercises_full": [
        ...         {"exercise": "Bench Press",
        ...          "sets": [{"reps": 5, "weight": 100, "unit": "kg"}]}
        ...     ],
        ...     "startTime": {"day": 3, "month": 2, "year": 2024, "hour": 7, "minute": 30},
        ... })
        >>> workout.start_time.month
        2
        >>> workout.end_time.month is None
        True
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    title: str = ""
    notes: str = ""
    exercises_full: List[TranscribedExercise] = Field(default_factory=list)
    start_time: PartialDate = Field(default_factory=PartialDate, alias="startTime")
    end_time: PartialDate = Field(default_factory=PartialDate, alias="endTime")
    energy: Optional[Energy] = None
    heart_rate: Optional[float] = None

    @field_validator("title", "notes", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return "" if v is None else v

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def none_as_blank_date(cls, v):
        return {} if v is None else v
