"""AI client factory for the transcription service."""
from __future__ import annotations

import logging

import httpx
from openai import AsyncOpenAI

from backend.settings import Settings, get_settings


logger = logging.getLogger(__name__)

# Default client timeout; vision requests with several images are slow
DEFAULT_TIMEOUT = 120.0


def _create_httpx_client(timeout: float = DEFAULT_TIMEOUT) -> httpx.AsyncClient:
    """
    Create the async httpx client used under the OpenAI SDK.

    Debug logging is not enabled on it, so request headers (and the API
    key they carry) never reach the logs.
    """
    return httpx.AsyncClient(
        timeout=timeout,
        limits=httpx.Limits(max_keepalive_connections=20, max_connections=100),
    )


class AIClientFactory:
    """Factory for creating AI clients from settings."""

    @staticmethod
    def create_openai_client(
        settings: Settings | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> AsyncOpenAI:
        """
        Create an async OpenAI client.

        Args:
            settings: Settings to read the API key from (defaults to get_settings())
            timeout: Client timeout in seconds

        Returns:
            AsyncOpenAI client instance

        Raises:
            ValueError: If the API key is not configured
        """
        settings = settings or get_settings()
        api_key = settings.openai_api_key
        if not api_key:
            raise ValueError("OpenAI API key not configured. Set OPENAI_API_KEY environment variable.")

        logger.debug("Creating OpenAI client (direct)")
        return AsyncOpenAI(
            api_key=api_key,
            timeout=timeout,
            http_client=_create_httpx_client(timeout),
        )
