"""Retry decisions and backoff delays for the Vaiz transport.

Two pure functions:

* :func:`should_retry` decides whether another attempt is allowed;
* :func:`compute_backoff` gives the delay before it.

The service signals throttling both as HTTP 429 and as a
``RateLimitExceeded`` error envelope, so a retry can be triggered by a
status code, an envelope code or a network exception.
"""

from __future__ import annotations

import random

import httpx

RETRYABLE_STATUSES: frozenset[int] = frozenset({429, 500, 502, 503, 504})

RETRYABLE_API_CODES: frozenset[str] = frozenset({"RateLimitExceeded"})

RETRYABLE_EXCEPTIONS: tuple[type[Exception], ...] = (
    httpx.TimeoutException,
    httpx.NetworkError,
)


def should_retry(
    attempt: int,
    max_attempts: int,
    *,
    status_code: int | None = None,
    api_code: str | None = None,
    exception: Exception | None = None,
) -> bool:
    """Return ``True`` if the failed attempt *attempt* (0-indexed) may be retried.

    Parameters
    ----------
    attempt:
        Index of the attempt that just failed.
    max_attempts:
        Total attempts allowed, the first one included.
    status_code:
        HTTP status of the response, if one arrived.
    api_code:
        ``error.code`` of the response envelope, if any.
    exception:
        Transport exception raised instead of a response.
    """
    if attempt + 1 >= max_attempts:
        return False
    if exception is not None:
        return isinstance(exception, RETRYABLE_EXCEPTIONS)
    if api_code is not None:
        return api_code in RETRYABLE_API_CODES
    return status_code in RETRYABLE_STATUSES


def compute_backoff(
    attempt: int,
    base: float = 1.0,
    maximum: float = 30.0,
    jitter: bool = True,
    retry_after: float | None = None,
) -> float:
    """Seconds to wait before retrying after attempt *attempt*.

    A server ``Retry-After`` wins when present; otherwise the delay is
    ``base * 2**attempt`` capped at *maximum*.  Jitter scales the result
    to a random point between 50% and 100% of itself.
    """
    delay = retry_after if retry_after is not None else min(base * (2 ** attempt), maximum)
    if jitter:
        delay *= 0.5 + random.random() * 0.5
    return delay
