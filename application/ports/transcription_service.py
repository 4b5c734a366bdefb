"""
Transcription Service Interface (Port).

Reads photos of handwritten workout logs and returns structured workouts.
"""
from typing import List, Protocol

from domain.models.transcription import TranscribedWorkout


class TranscriptionService(Protocol):
    """Abstract interface for the vision-model transcription collaborator."""

    async def transcribe(self, images: List[str]) -> TranscribedWorkout:
        """
        Transcribe one workout spread over one or more images.

        Args:
            images: Base64-encoded images (raw or as data URLs)

        Returns:
            The transcribed workout

        Raises:
            TranscriptionError: If the model returns nothing usable
        """
        ...
