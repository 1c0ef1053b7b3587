"""
Retry handling for downloads from the results provider.

Connection problems, timeouts and server-side HTTP errors are retried
with exponential backoff; client errors such as 404 fail immediately.
"""

import asyncio
from functools import wraps
from typing import Any, Callable, Type

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from config.logging_config import get_logger

logger = get_logger(__name__)


RETRIABLE_EXCEPTIONS: tuple[Type[Exception], ...] = (
    ConnectionError,
    TimeoutError,
    asyncio.TimeoutError,
    httpx.TransportError,
)

# 429 plus anything the server blames on itself
RETRIABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


def is_retriable(exc: BaseException) -> bool:
    """True for transient network failures and retriable HTTP statuses."""
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code in RETRIABLE_STATUS_CODES
    return isinstance(exc, RETRIABLE_EXCEPTIONS)


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "Retrying download",
        func=retry_state.fn.__name__ if retry_state.fn else None,
        attempt=retry_state.attempt_number,
        error=str(exc),
    )


def with_async_retry(
    max_attempts: int = 3,
    wait_seconds: float = 1.0,
    max_wait_seconds: float = 10.0,
    retry_on: Callable[[BaseException], bool] = is_retriable,
):
    """
    Decorator retrying an async callable with exponential backoff.

    The last exception is re-raised once attempts run out.

    Usage:
        @with_async_retry(max_attempts=3)
        async def download(url):
            ...
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs) -> Any:
            retrying = AsyncRetrying(
                stop=stop_after_attempt(max_attempts),
                wait=wait_exponential(multiplier=wait_seconds, max=max_wait_seconds),
                retry=retry_if_exception(retry_on),
                before_sleep=_log_retry,
                reraise=True,
            )
            return await retrying(func, *args, **kwargs)
        return wrapper
    return decorator
