from .backoff import (
    MILLISECONDS_PER_HOUR,
    BackoffStep,
    iter_schedule,
    retry_interval,
    retry_interval_seconds,
    retry_interval_timedelta,
)
from .policy import DEFAULT_MAX_RETRIES, DEFAULT_MULTIPLIER, RetryPolicy

__all__ = [
    "RetryPolicy",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_MULTIPLIER",
    "MILLISECONDS_PER_HOUR",
    "BackoffStep",
    "iter_schedule",
    "retry_interval",
    "retry_interval_seconds",
    "retry_interval_timedelta",
]
