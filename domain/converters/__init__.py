"""
Domain converters for data entering the workout aggregate.

- resolve_partial_date: loose date components -> concrete timestamp
- transcription_to_exercise_records: vision model output -> exercise rows
- transcription_to_workout_record: vision model output -> workout row scalars

All converters are pure functions with no side effects.
"""

from domain.converters.partial_dates import resolve_partial_date
from domain.converters.transcription_to_records import (
    transcription_to_exercise_records,
    transcription_to_workout_record,
)

__all__ = [
    "resolve_partial_date",
    "transcription_to_exercise_records",
    "transcription_to_workout_record",
]
