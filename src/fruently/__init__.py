"""
fruently - Fluent forward client retry configuration

Backoff policy and store file handling for records that fail to reach
a Fluentd/Fluent Bit collector.
"""

from fruently.retry import RetryPolicy, retry_interval
from fruently.store import RecordStore, maybe_store

__version__ = "0.1.0"

__all__ = [
    "RetryPolicy",
    "retry_interval",
    "RecordStore",
    "maybe_store",
]
