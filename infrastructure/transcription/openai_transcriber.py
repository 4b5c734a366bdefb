"""
OpenAI implementation of TranscriptionService.

Sends photographed log pages to a vision-capable chat model and validates
the structured answer into a TranscribedWorkout.
"""
import json
import logging
from typing import Any, Dict, List

from openai import AsyncOpenAI, OpenAIError
from pydantic import ValidationError

from domain.exceptions import TranscriptionError
from domain.models.transcription import TranscribedWorkout
from infrastructure.transcription.prompt import SYSTEM_PROMPT, USER_PROMPT, WORKOUT_SCHEMA

logger = logging.getLogger(__name__)

MAX_COMPLETION_TOKENS = 4096


def _image_url(image: str) -> str:
    """Accept data URLs, remote URLs, or bare base64 (assumed JPEG)."""
    if image.startswith(("data:", "http://", "https://")):
        return image
    return f"data:image/jpeg;base64,{image}"


def build_user_content(images: List[str]) -> List[Dict[str, Any]]:
    """
    Build the multi-part user message: instructions first, then one part per page.

    Examples:
        >>> parts = build_user_content(["abc"])
        >>> parts[0]["type"], parts[1]["image_url"]["url"]
        ('text', 'data:image/jpeg;base64,abc')
    """
    content: List[Dict[str, Any]] = [{"type": "text", "text": USER_PROMPT}]
    content.extend({"type": "image_url", "image_url": {"url": _image_url(image)}} for image in images)
    return content


class OpenAITranscriptionService:
    """
    OpenAI implementation of TranscriptionService protocol.

    The client is injected via constructor for testability.
    """

    def __init__(self, client: AsyncOpenAI, model: str):
        self._client = client
        self._model = model

    async def transcribe(self, images: List[str]) -> TranscribedWorkout:
        """
        Transcribe log pages into a workout.

        Raises:
            TranscriptionError: If the API call fails or the answer does not
                match the workout schema
        """
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                response_format={"type": "json_schema", "json_schema": WORKOUT_SCHEMA},
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_user_content(images)},
                ],
                max_completion_tokens=MAX_COMPLETION_TOKENS,
            )
        except OpenAIError as e:
            logger.error(f"Transcription request failed: {e}")
            raise TranscriptionError(f"Transcription request failed: {e}") from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise TranscriptionError("Transcription returned no content")

        try:
            workout = TranscribedWorkout.model_validate(json.loads(content))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.error(f"Transcription did not match the workout schema: {e}")
            raise TranscriptionError("Transcription did not match the workout schema") from e

        logger.info(
            f"Transcribed {len(images)} page(s) into {len(workout.exercises_full)} exercise(s)"
        )
        return workout
