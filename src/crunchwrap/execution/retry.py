"""Retry for image-service calls that fail transiently.

Timeouts, dropped connections and rate-limit/server HTTP statuses are
retried with capped exponential backoff and full jitter. Any other
exception, including a denied request, is re-raised at once.
"""

from __future__ import annotations

import asyncio
import random
from collections.abc import Awaitable, Callable
from typing import Any

TRANSIENT_EXCEPTIONS: tuple[type[Exception], ...] = (TimeoutError, ConnectionError)

TRANSIENT_STATUS_CODES: frozenset[int] = frozenset({429, 500, 502, 503, 504})

# google-genai sets `code`; httpx-style errors use `status_code`
_STATUS_ATTRS = ("status_code", "code", "status")


def _is_transient(exc: Exception) -> bool:
    if isinstance(exc, TRANSIENT_EXCEPTIONS):
        return True
    statuses = (getattr(exc, attr, None) for attr in _STATUS_ATTRS)
    return any(isinstance(s, int) and s in TRANSIENT_STATUS_CODES for s in statuses)


def _backoff(attempt: int, base_delay: float, max_delay: float) -> float:
    return random.uniform(0, min(base_delay * 2**attempt, max_delay))  # noqa: S311


async def retry_with_backoff(
    coro_factory: Callable[[], Awaitable[Any]],
    max_retries: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 30.0,
) -> tuple[Any, int]:
    """Await coro_factory(), retrying transient failures.

    Args:
        coro_factory: Returns a fresh awaitable per attempt.
        max_retries: Retries after the first attempt.
        base_delay: Backoff for the first retry, doubled each time.
        max_delay: Upper bound for a single backoff.

    Returns:
        (result, number of retries used).
    """
    attempt = 0
    while True:
        try:
            return await coro_factory(), attempt
        except Exception as exc:
            if attempt >= max_retries or not _is_transient(exc):
                raise
        await asyncio.sleep(_backoff(attempt, base_delay, max_delay))
        attempt += 1
