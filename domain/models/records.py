"""
Persisted row shapes for the workout aggregate.

These are the wire/storage representations exchanged with the persistence
gateway. The live object graph lives in domain.entities; these models only
validate what comes back from storage and describe what is written to it.
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SetRecord(BaseModel):
    """
    One set as stored in the `sets` table or nested in a workout row.

    Once a set has been persisted, the copy nested inside a workout row is
    reduced to `{"id": ...}`; the mutable fields live in the set's own row.
    """

    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    reps: int = Field(default=0, ge=0)
    weight: float = Field(default=0, ge=0)
    unit: Optional[str] = None
    notes: str = ""
    workout_id: Optional[str] = None
    exercise_id: Optional[str] = None

    @field_validator("reps", "weight", mode="before")
    @classmethod
    def none_as_zero(cls, v):
        return 0 if v is None else v

    @field_validator("notes", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return "" if v is None else v


class SetUpdate(BaseModel):
    """Fields to change on an existing set; omitted fields keep their value."""

    reps: Optional[int] = Field(default=None, ge=0)
    weight: Optional[float] = Field(default=None, ge=0)
    unit: Optional[str] = Field(default="kg", description="Unit of `weight`")
    notes: Optional[str] = None


class ExerciseRecord(BaseModel):
    """One entry of a workout's `exercises_full` column."""

    model_config = ConfigDict(extra="ignore")

    exercise: str = Field(..., description="Exercise display name")
    notes: str = ""
    id: Optional[str] = Field(default=None, description="Shared exercise-definition id")
    sets: List[SetRecord] = Field(default_factory=list)

    @field_validator("notes", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return "" if v is None else v


class WorkoutRecord(BaseModel):
    """
    A row of the `workouts` table.

    `exercises`, `volume`, `set_count`, `exercise_ids` and `set_ids` are
    denormalized from `exercises_full` at serialization time for fast
    listing and bulk existence checks.
    """

    model_config = ConfigDict(extra="ignore")

    title: str = ""
    workout_id: str
    start_time: datetime = Field(default_factory=_utcnow)
    end_time: datetime = Field(default_factory=_utcnow)
    created_at: datetime = Field(default_factory=_utcnow)
    exercises: List[str] = Field(default_factory=list)
    exercises_full: List[ExerciseRecord] = Field(default_factory=list)
    notes: str = ""
    energy: Optional[float] = Field(default=None, description="Kilojoules")
    heart_rate: Optional[float] = Field(default=None, description="Beats per minute")
    volume: Optional[float] = Field(default=None, description="Kilograms")
    set_count: Optional[int] = None
    exercise_ids: List[str] = Field(default_factory=list)
    set_ids: List[str] = Field(default_factory=list)

    @field_validator("title", "notes", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return "" if v is None else v

    @field_validator("exercises", "exercises_full", "exercise_ids", "set_ids", mode="before")
    @classmethod
    def none_as_empty_list(cls, v):
        return [] if v is None else v

    def to_row(self) -> dict:
        """
        Dump to a JSON-compatible dict with ISO-8601 timestamps.

        Only explicitly set fields are written, so a persisted set nested in
        `exercises_full` stays reduced to `{"id": ...}`.
        """
        return self.model_dump(mode="json", exclude_unset=True)
