"""Retry helper for remote model calls."""

import logging
import time
from typing import Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LLMCallError(Exception):
    """Raised when a model call keeps failing after all retries."""


def call_with_retry(
    fn: Callable[[], T],
    max_retries: int = 3,
    retry_delay: float = 1.0,
    on_retry: Callable[[int, Exception], None] | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Call ``fn`` until it returns a non-empty result.

    Exceptions and empty results are both retried, waiting
    ``retry_delay * 2**attempt`` seconds between attempts.

    Args:
        fn: Zero-argument callable performing one attempt.
        max_retries: Retries after the first attempt.
        retry_delay: Base delay in seconds.
        on_retry: Optional callback receiving (attempt_num, error).
        sleep: Sleep function, replaceable in tests.

    Raises:
        LLMCallError: If every attempt failed.
    """
    last_error: Exception | None = None

    for attempt in range(max_retries + 1):
        try:
            result = fn()
            if not result:
                raise ValueError("Empty model reply")
            return result
        except Exception as e:  # noqa: BLE001
            last_error = e
            logger.warning("Model call failed (attempt %d/%d): %s", attempt + 1, max_retries + 1, e)

            if on_retry:
                on_retry(attempt + 1, e)

            if attempt < max_retries:
                sleep(retry_delay * (2**attempt))

    raise LLMCallError(f"Model call failed after {max_retries + 1} attempts: {last_error}") from last_error
