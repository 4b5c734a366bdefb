"""Vision-model transcription of handwritten workout logs."""

from infrastructure.transcription.openai_transcriber import OpenAITranscriptionService

__all__ = ["OpenAITranscriptionService"]
