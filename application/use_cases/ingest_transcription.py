"""
Ingest Transcription Use Case.

Turns photographed pages of a handwritten log into a stored workout:
transcribe, create the set rows, insert the workout row, then backfill the
workout foreign key on all of its sets.
"""
import asyncio
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from application.ports import AggregateStore, TranscriptionService
from domain.converters import transcription_to_exercise_records, transcription_to_workout_record
from domain.entities.exercise import Exercise
from domain.entities.workout import Workout
from domain.exceptions import AttachmentTimeoutError, StorageError, TranscriptionError
from domain.models.transcription import TranscribedWorkout

logger = logging.getLogger(__name__)


@dataclass
class IngestTranscriptionResult:
    """Result of ingesting a transcribed log."""
    success: bool
    workout_id: Optional[str] = None
    exercise_count: int = 0
    set_count: int = 0
    error: Optional[str] = None
    error_kind: Optional[str] = None


class IngestTranscriptionUseCase:
    """
    Use case for storing a transcribed workout log.

    Set rows are created before the workout row exists (foreign key order),
    so they start with a null workout_id that is filled in one bulk update
    once the workout row is in place.
    """

    def __init__(
        self,
        store: AggregateStore,
        transcriber: Optional[TranscriptionService] = None,
    ):
        """
        Initialize with required dependencies.

        Args:
            store: Repositories the aggregate is persisted across
            transcriber: Vision transcription service (only needed by execute)
        """
        self._store = store
        self._transcriber = transcriber

    async def execute(self, images: List[str]) -> IngestTranscriptionResult:
        """
        Transcribe log pages and store the resulting workout.

        Args:
            images: Base64 images (or data URLs) of the log pages

        Returns:
            IngestTranscriptionResult with the new workout id or an error
        """
        if self._transcriber is None:
            raise RuntimeError("IngestTranscriptionUseCase.execute requires a transcriber")
        if not images:
            return IngestTranscriptionResult(
                success=False, error="imageData must not be empty", error_kind="validation"
            )

        try:
            transcribed = await self._transcriber.transcribe(images)
        except TranscriptionError as e:
            logger.error(f"Transcription failed: {e}")
            return IngestTranscriptionResult(success=False, error=str(e), error_kind="transcription")

        return await self.ingest(transcribed)

    async def ingest(
        self,
        transcribed: TranscribedWorkout,
        now: Optional[datetime] = None,
    ) -> IngestTranscriptionResult:
        """
        Store an already transcribed workout.

        Args:
            transcribed: Validated transcription
            now: Reference time for missing date components

        Returns:
            IngestTranscriptionResult with the new workout id or an error
        """
        try:
            workout = await self._store_workout(transcribed, now)
        except (StorageError, AttachmentTimeoutError) as e:
            logger.error(f"Failed to store transcribed workout: {e}")
            return IngestTranscriptionResult(success=False, error=str(e), error_kind="storage")

        return IngestTranscriptionResult(
            success=True,
            workout_id=workout.id,
            exercise_count=workout.count_exercises(),
            set_count=workout.count_sets(),
        )

    async def _store_workout(
        self,
        transcribed: TranscribedWorkout,
        now: Optional[datetime],
    ) -> Workout:
        record = transcription_to_workout_record(transcribed, str(uuid.uuid4()), now)

        # Standalone exercises: their sets are inserted with a null workout_id.
        exercises = await asyncio.gather(
            *(
                Exercise.create(exercise_record, None, self._store)
                for exercise_record in transcription_to_exercise_records(transcribed)
            )
        )
        await asyncio.gather(*(exercise.ensure_set_ids() for exercise in exercises))

        workout = Workout(record, self._store, list(exercises))
        for exercise in exercises:
            exercise.attach_workout(workout)

        await self._store.workouts.insert(workout.deserialize().to_row())

        set_ids = [s.id for exercise in exercises for s in exercise.sets]
        await self._store.sets.assign_workout(set_ids, workout.id)
        for exercise in exercises:
            for exercise_set in exercise.sets:
                exercise_set.workout_id = workout.id

        logger.info(
            f"Stored transcribed workout {workout.id} with "
            f"{workout.count_exercises()} exercise(s) and {len(set_ids)} set(s)"
        )
        return workout
