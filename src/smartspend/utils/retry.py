"""Retry decorator utility for async service calls."""
import asyncio
import functools
import socket
import ssl

from google.genai import errors as genai_errors

from .exceptions import RetryableError
from .logger import get_logger

logger = get_logger()

# Define exceptions that are safe to retry
RETRYABLE_ERRORS = (
    ConnectionError,
    TimeoutError,
    socket.timeout,
    ssl.SSLError,
    genai_errors.APIError,
    RetryableError,
)


def _is_retryable(error: Exception) -> bool:
    """Don't retry 4xx API errors (except 429)."""
    if isinstance(error, genai_errors.APIError):
        code = getattr(error, "code", None) or 0
        return code >= 500 or code == 429
    return True


def retry_with_backoff(max_retries=3, initial_delay=1, backoff_factor=2, retryable_exceptions=RETRYABLE_ERRORS):
    """Decorator for exponential backoff retries of a coroutine function."""
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            last_exception = None

            for attempt in range(max_retries + 1):
                try:
                    return await func(*args, **kwargs)
                except retryable_exceptions as e:
                    last_exception = e

                    if not _is_retryable(e) or attempt == max_retries:
                        break

                    wait_time = initial_delay * (backoff_factor ** attempt)

                    if "SSL" in str(e):
                        logger.warning(f"SSL issue in {func.__name__} (Attempt {attempt+1}): {e}. Retrying...")
                    else:
                        logger.warning(f"Transient error in {func.__name__} (Attempt {attempt+1}): {e}. Retrying in {wait_time}s...")

                    await asyncio.sleep(wait_time)

            logger.error(f"Permanently failed {func.__name__} after {attempt+1} attempts.")
            raise last_exception
        return wrapper
    return decorator
