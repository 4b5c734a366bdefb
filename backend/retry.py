"""Retry utilities for storage calls with exponential backoff."""
import logging
from typing import Any, Awaitable, Callable, TypeVar

from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)


logger = logging.getLogger(__name__)

T = TypeVar("T")

# Default retry configuration
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_MIN_WAIT_SECONDS = 0.5
DEFAULT_MAX_WAIT_SECONDS = 5.0


def is_retryable_error(exception: BaseException) -> bool:
    """
    Determine if an exception is worth retrying.

    The Supabase client surfaces most failures as generic exceptions, so
    classification falls back to matching the error text.

    Retryable errors include:
    - Rate limit errors (429)
    - Server errors (5xx)
    - Timeout errors
    - Connection errors

    Non-retryable errors include:
    - Authentication / permission errors (401, 403, row-level security)
    - Bad request and constraint errors (400, 404, 409)
    - Anything unrecognized
    """
    if isinstance(exception, (TimeoutError, ConnectionError)):
        return True

    error_str = str(exception).lower()
    exception_type_str = type(exception).__name__.lower()

    # Check for non-retryable errors first
    if any(code in error_str for code in ["400", "401", "403", "404", "409"]):
        return False
    if "permission" in error_str or "row-level security" in error_str:
        return False

    if "rate" in error_str and "limit" in error_str:
        return True
    if "429" in error_str:
        return True
    if any(code in error_str for code in ["500", "502", "503", "504"]):
        return True
    if "timeout" in error_str or "timed out" in error_str or "timeout" in exception_type_str:
        return True
    if "connection" in error_str or "connect" in exception_type_str:
        return True
    if "temporary failure in name resolution" in error_str:
        return True

    # Default: don't retry unknown errors
    return False


def _validate_retry_params(
    max_attempts: int,
    min_wait_seconds: float,
    max_wait_seconds: float,
) -> None:
    """
    Validate retry parameters.

    Raises:
        ValueError: If any parameter is invalid
    """
    if max_attempts < 1:
        raise ValueError(
            f"max_attempts must be >= 1, got {max_attempts}. "
            "If max_attempts <= 0, the retry loop will never execute."
        )
    if min_wait_seconds <= 0:
        raise ValueError(
            f"min_wait_seconds must be positive, got {min_wait_seconds}"
        )
    if max_wait_seconds <= 0:
        raise ValueError(
            f"max_wait_seconds must be positive, got {max_wait_seconds}"
        )
    if min_wait_seconds > max_wait_seconds:
        raise ValueError(
            f"min_wait_seconds ({min_wait_seconds}) cannot exceed "
            f"max_wait_seconds ({max_wait_seconds})"
        )


async def retry_async_call(
    func: Callable[..., Awaitable[T]],
    *args: Any,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    min_wait_seconds: float = DEFAULT_MIN_WAIT_SECONDS,
    max_wait_seconds: float = DEFAULT_MAX_WAIT_SECONDS,
    **kwargs: Any,
) -> T:
    """
    Execute an async function, retrying transient failures.

    Non-retryable errors are raised on the first attempt. After the last
    attempt the final exception is re-raised unchanged.

    Args:
        func: Async function to execute
        *args: Positional arguments for the function
        max_attempts: Maximum number of attempts (1 disables retrying)
        min_wait_seconds: Minimum wait time between retries
        max_wait_seconds: Maximum wait time between retries
        **kwargs: Keyword arguments for the function

    Returns:
        Result of the function call

    Raises:
        ValueError: If parameters are invalid
    """
    _validate_retry_params(max_attempts, min_wait_seconds, max_wait_seconds)

    async for attempt in AsyncRetrying(
        retry=retry_if_exception(is_retryable_error),
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(
            multiplier=min_wait_seconds,
            min=min_wait_seconds,
            max=max_wait_seconds,
        ),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    ):
        with attempt:
            return await func(*args, **kwargs)
    raise RuntimeError("Unexpected state: no result and no exception")
