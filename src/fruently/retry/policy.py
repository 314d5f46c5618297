"""Retry configuration for sending records.

A RetryPolicy is a frozen value: builder methods return a new policy
and leave the original untouched, so a single instance can be shared
between senders.

Usage:
    from fruently.retry import RetryPolicy

    policy = RetryPolicy().max(5).store_file("/tmp/fruently.log")
    max_retries, multiplier = policy.parameters()
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple, Union

from fruently.retry.backoff import BackoffStep, iter_schedule, retry_interval

if TYPE_CHECKING:
    from fruently.core.config import RetryConfig


DEFAULT_MAX_RETRIES = 10
DEFAULT_MULTIPLIER = 5.0


@dataclass(frozen=True)
class RetryPolicy:
    """Retry bounds and store location for undelivered records.

    Inputs are accepted as-is. A ``max_retries`` of 0 means "no retries"
    and is left for the sender to special-case; the store path is not
    checked for existence or writability.

    Attributes:
        max_retries: Upper bound on retry attempts.
        multiplier: Exponent offset used by the backoff formula.
        store_file_path: Where records are stored after the last failed
            retry. ``None`` drops them instead.
    """

    max_retries: int = DEFAULT_MAX_RETRIES
    multiplier: float = DEFAULT_MULTIPLIER
    store_file_path: Optional[Path] = None

    # -------------------------------------------------------------------------
    # Builder
    # -------------------------------------------------------------------------

    def max(self, max_retries: int) -> RetryPolicy:
        """Return a copy with ``max_retries`` replaced."""
        return replace(self, max_retries=max_retries)

    with_max_retries = max

    def with_multiplier(self, multiplier: float) -> RetryPolicy:
        """Return a copy with ``multiplier`` replaced."""
        return replace(self, multiplier=multiplier)

    def store_file(self, path: Union[str, "os.PathLike[str]"]) -> RetryPolicy:
        """Return a copy that stores failed records at ``path``."""
        return replace(self, store_file_path=Path(path))

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def needs_storage(self) -> bool:
        """True if failed records should be written to a store file."""
        return self.store_file_path is not None

    def storage_path(self) -> Optional[Path]:
        return self.store_file_path

    def parameters(self) -> Tuple[int, float]:
        """Return ``(max_retries, multiplier)`` for the backoff formula."""
        return self.max_retries, self.multiplier

    def interval(self, retry_count: int) -> float:
        """Backoff interval in hours before attempt ``retry_count``."""
        return retry_interval(self.multiplier, retry_count)

    def schedule(self) -> List[BackoffStep]:
        """Backoff steps for every attempt this policy allows."""
        return list(iter_schedule(self.max_retries, self.multiplier))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "max_retries": self.max_retries,
            "multiplier": self.multiplier,
            "store_file_path": (
                str(self.store_file_path) if self.store_file_path is not None else None
            ),
        }

    @classmethod
    def from_config(cls, config: RetryConfig) -> RetryPolicy:
        """Build a policy from the ``retry`` settings section."""
        policy = cls(max_retries=config.max_retries, multiplier=config.multiplier)
        if config.store_file_path:
            policy = policy.store_file(Path(config.store_file_path).expanduser())
        return policy
