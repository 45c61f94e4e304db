"""Bounded retry for operations that fail transiently."""
from __future__ import annotations

import logging
import time
from typing import Callable, Tuple, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def with_retry(
    operation: Callable[[], T],
    *,
    attempts: int,
    delay: float,
    retry_on: Tuple[Type[BaseException], ...] = (OSError,),
    sleep: Callable[[float], None] = time.sleep,
    description: str = "operation",
) -> T:
    """Run ``operation`` up to ``attempts`` times, sleeping ``delay`` seconds after each failure.

    When every attempt has failed the operation is run one final time and
    whatever it raises propagates to the caller. Exceptions outside
    ``retry_on`` are never retried.
    """
    for attempt in range(1, max(attempts, 0) + 1):
        try:
            return operation()
        except retry_on as exc:
            logger.debug("%s failed (attempt %s/%s): %s", description, attempt, attempts, exc)
            sleep(delay)

    logger.warning("%s still failing after %s attempts; final try", description, attempts)
    return operation()
