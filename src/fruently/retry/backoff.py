"""Exponential backoff formula for resending records.

The wait before retry attempt ``n`` (1-based) is::

    exp(multiplier + n) / 1000.0 / 60.0 / 60.0

The raw exponential is treated as milliseconds and converted to hours.
With the default ``multiplier`` of 5:

* attempt 10: ``e ** 15 / 3_600_000`` = 0.908060381242253, about 0.9 hour
* attempt 11: ``e ** 16 / 3_600_000`` = 2.4683640334744092, about 2.5 hours
* attempt 12: ``e ** 17 / 3_600_000`` = 6.709709098215361, about 6.7 hours

Nothing here sleeps or schedules; the sending loop applies these values.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import timedelta
from typing import Iterator


MILLISECONDS_PER_SECOND = 1000.0
SECONDS_PER_HOUR = 60.0 * 60.0
# Divisor turning the raw exponential into hours.
MILLISECONDS_PER_HOUR = MILLISECONDS_PER_SECOND * SECONDS_PER_HOUR


def retry_interval(multiplier: float, retry_count: int) -> float:
    """Return the backoff interval in hours for a retry attempt.

    The result is not clamped. Exponents past the float range yield
    ``math.inf`` so callers can detect them the same way as any other
    unbounded wait.

    Args:
        multiplier: Exponent offset from the retry policy.
        retry_count: 1-based number of the attempt being scheduled.

    Returns:
        Interval in hours.
    """
    try:
        raw = math.exp(multiplier + retry_count)
    except OverflowError:
        return math.inf
    return raw / MILLISECONDS_PER_SECOND / 60.0 / 60.0


def retry_interval_seconds(multiplier: float, retry_count: int) -> float:
    """Return the backoff interval converted to seconds."""
    return retry_interval(multiplier, retry_count) * SECONDS_PER_HOUR


def retry_interval_timedelta(multiplier: float, retry_count: int) -> timedelta:
    """Return the backoff interval as a timedelta.

    Raises:
        OverflowError: If the interval exceeds what timedelta can hold.
    """
    hours = retry_interval(multiplier, retry_count)
    if math.isinf(hours) or math.isnan(hours):
        raise OverflowError(
            f"retry interval for attempt {retry_count} is not finite"
        )
    return timedelta(hours=hours)


@dataclass(frozen=True)
class BackoffStep:
    """One row of a backoff schedule.

    Attributes:
        attempt: 1-based retry attempt.
        interval_hours: Wait before this attempt.
        elapsed_hours: Total wait up to and including this attempt.
    """

    attempt: int
    interval_hours: float
    elapsed_hours: float


def iter_schedule(max_retries: int, multiplier: float) -> Iterator[BackoffStep]:
    """Yield the backoff step for every attempt from 1 to ``max_retries``.

    A ``max_retries`` of 0 yields nothing.
    """
    elapsed = 0.0
    for attempt in range(1, max_retries + 1):
        interval = retry_interval(multiplier, attempt)
        elapsed += interval
        yield BackoffStep(
            attempt=attempt,
            interval_hours=interval,
            elapsed_hours=elapsed,
        )
