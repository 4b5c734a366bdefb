"""
Converter: transcribed workout (vision model output) to row models.

Weights are normalized to kilograms and energy to kilojoules here, at the
point of entry, so nothing downstream ever sees another unit.
"""

from datetime import datetime, timezone
from typing import List, Optional

from domain.converters.partial_dates import resolve_partial_date
from domain.models.load import KILOGRAMS, to_kilograms
from domain.models.records import ExerciseRecord, SetRecord, WorkoutRecord
from domain.models.transcription import TranscribedExercise, TranscribedSet, TranscribedWorkout


def _set_to_record(transcribed: TranscribedSet) -> SetRecord:
    return SetRecord(
        reps=transcribed.reps,
        weight=to_kilograms(transcribed.weight, transcribed.unit or KILOGRAMS),
        unit=KILOGRAMS,
        notes=transcribed.notes,
    )


def _exercise_to_record(transcribed: TranscribedExercise) -> ExerciseRecord:
    return ExerciseRecord(
        exercise=transcribed.exercise.strip(),
        notes=transcribed.notes,
        sets=[_set_to_record(s) for s in transcribed.sets],
    )


def transcription_to_exercise_records(transcribed: TranscribedWorkout) -> List[ExerciseRecord]:
    """
    Convert transcribed exercises to exercise records, preserving order.

    Examples:
        >>> workout = TranscribedWorkout.model_validate({
        ...     "exercises_full": [{"exercise": " Squat ",
        ...                         "sets": [{"reps": 5, "weight": 100, "unit": "lbs"}]}],
        ... })
        >>> records = transcription_to_exercise_records(workout)
        >>> records[0].exercise, round(records[0].sets[0].weight, 4)
        ('Squat', 45.3592)
    """
    return [_exercise_to_record(e) for e in transcribed.exercises_full]


def transcription_to_workout_record(
    transcribed: TranscribedWorkout,
    workout_id: str,
    now: Optional[datetime] = None,
) -> WorkoutRecord:
    """
    Scalar fields of the workout row for a transcribed log.

    `exercises_full` is left empty; the caller fills it from the live
    aggregate once set rows exist.

    Args:
        transcribed: Validated model output
        workout_id: Identifier for the new row
        now: Reference time for missing date components (defaults to UTC now)
    """
    now = now or datetime.now(timezone.utc)
    start_time = resolve_partial_date(transcribed.start_time, now)
    end_time = resolve_partial_date(transcribed.end_time, now)
    energy = transcribed.energy.to_kilojoules() if transcribed.energy is not None else None
    return WorkoutRecord(
        workout_id=workout_id,
        title=transcribed.title,
        notes=transcribed.notes,
        start_time=start_time,
        end_time=end_time,
        created_at=now,
        energy=energy,
        heart_rate=transcribed.heart_rate,
    )
