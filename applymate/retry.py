"""Exponential-backoff retries for outbound calls (job boards, Gemini)."""
from __future__ import annotations

import functools
import logging
import random
import time
from typing import Any, Callable, Tuple, Type

logger = logging.getLogger(__name__)

# Patched out in tests
_sleep = time.sleep


def backoff_delay(
    attempt: int,
    base_delay: float,
    max_delay: float,
    backoff_factor: float,
    jitter: bool,
) -> float:
    """Seconds to wait after failed *attempt* (1-based)."""
    delay = min(base_delay * backoff_factor ** (attempt - 1), max_delay)
    return delay * (0.5 + random.random()) if jitter else delay


def retry(
    *,
    max_attempts: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 30.0,
    backoff_factor: float = 2.0,
    jitter: bool = True,
    retryable: Tuple[Type[BaseException], ...] = (Exception,),
    giveup: Callable[[BaseException], bool] | None = None,
) -> Callable:
    """Call the wrapped function up to *max_attempts* times.

    Only *retryable* exceptions trigger another attempt. *giveup* marks
    errors that waiting will not fix (bad credentials); they are re-raised
    at once. After the last attempt the final error propagates.
    """

    def decorator(fn: Callable) -> Callable:
        name = getattr(fn, "__qualname__", repr(fn))

        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            attempt = 1
            while True:
                try:
                    return fn(*args, **kwargs)
                except retryable as exc:
                    if giveup is not None and giveup(exc):
                        logger.debug("%s: not retrying %s", name, type(exc).__name__)
                        raise
                    if attempt >= max_attempts:
                        logger.warning("%s failed after %d attempt(s): %s", name, attempt, exc)
                        raise
                    delay = backoff_delay(attempt, base_delay, max_delay, backoff_factor, jitter)
                    logger.info(
                        "%s attempt %d/%d failed (%s), retrying in %.1fs",
                        name, attempt, max_attempts, exc, delay,
                    )
                    _sleep(delay)
                    attempt += 1

        return wrapper

    return decorator
