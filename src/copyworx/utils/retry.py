"""Retry with exponential backoff for async operations."""

import asyncio
from typing import Awaitable, Callable, Optional, TypeVar

from .logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


async def retry_with_backoff(
    fn: Callable[[], Awaitable[T]],
    *,
    max_retries: int = 3,
    base_delay: float = 0.1,
    backoff: float = 2,
    max_delay: float = 60,
    retry_on: Optional[Callable[[BaseException], bool]] = None,
    operation: str = "operation",
) -> T:
    """
    Call ``fn`` until it succeeds or ``max_retries`` retries are used up.

    Args:
        fn: Zero-argument coroutine function to call
        max_retries: Retries after the first attempt; 0 means a single attempt
        base_delay: Delay before the first retry, in seconds
        backoff: Multiplier applied to the delay after each retry
        max_delay: Upper bound for a single delay
        retry_on: Predicate deciding whether an exception is worth retrying.
            Exceptions it rejects are raised immediately.
        operation: Name used in log events

    Returns:
        The first successful result of ``fn``

    Raises:
        The last exception raised by ``fn``
    """
    attempt = 0
    while True:
        try:
            return await fn()
        except Exception as e:
            if retry_on is not None and not retry_on(e):
                raise
            if attempt >= max_retries:
                logger.error(
                    "Operation failed after all retries",
                    operation=operation,
                    attempts=attempt + 1,
                    error_type=type(e).__name__,
                )
                raise
            delay = min(max_delay, base_delay * (backoff ** attempt))
            attempt += 1
            logger.warning(
                "Retrying operation",
                operation=operation,
                attempt=attempt,
                max_retries=max_retries,
                wait_time=delay,
                error_type=type(e).__name__,
            )
            await asyncio.sleep(delay)
