"""Store file for records that exhausted their retries.

Records are appended one per line so the file can be replayed later
(see ``Record.to_line``). Whether anything is stored is decided by the
retry policy: without a store path, failed records are dropped and the
delivery error propagates to the sender.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Dict, Iterable, List, Union

import structlog

from fruently.core.exceptions import StoreError
from fruently.core.models import Record
from fruently.retry.policy import RetryPolicy

log = structlog.get_logger()

# One lock per store file, shared by every RecordStore writing to it.
_path_locks: Dict[Path, threading.Lock] = {}
_path_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    """Return the append lock for ``path``, keyed by its resolved location."""
    key = path.expanduser().resolve()
    with _path_locks_guard:
        lock = _path_locks.get(key)
        if lock is None:
            lock = _path_locks[key] = threading.Lock()
        return lock


class RecordStore:
    """Append-only store file for undelivered records."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self._lock = _lock_for(self.path)

    def write(self, records: Iterable[Record]) -> int:
        """Append records to the store file.

        Parent directories are created if missing.

        Returns:
            Number of records written.

        Raises:
            StoreError: If a record cannot be serialized, or the file
                cannot be opened or written.
        """
        try:
            lines = [record.to_line() for record in records]
        except (TypeError, ValueError, OverflowError, OSError) as e:
            raise StoreError(
                path=str(self.path),
                reason=f"unserializable record: {e}",
            ) from e
        if not lines:
            return 0

        with self._lock:
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                with open(self.path, "a", encoding="utf-8") as f:
                    f.writelines(lines)
            except OSError as e:
                raise StoreError(path=str(self.path), reason=str(e)) from e

        log.debug("store_write", path=str(self.path), count=len(lines))
        return len(lines)

    def read(self) -> List[Record]:
        """Load every stored record for replay.

        A missing store file means nothing was stored.

        Raises:
            StoreError: If the file cannot be read or holds a malformed line.
        """
        if not self.path.exists():
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return [Record.from_line(line) for line in f if line.strip()]
        except OSError as e:
            raise StoreError(path=str(self.path), reason=str(e)) from e
        except ValueError as e:
            raise StoreError(
                path=str(self.path),
                reason=f"malformed record: {e}",
            ) from e


def maybe_store(
    policy: RetryPolicy,
    records: Iterable[Record],
    error: BaseException,
) -> int:
    """Persist records after the final retry failed, if the policy asks to.

    Args:
        policy: Retry policy of the sender.
        records: Records that could not be delivered.
        error: The delivery failure from the last attempt.

    Returns:
        Number of records stored.

    Raises:
        The given ``error`` when the policy has no store path.
        StoreError: If storing fails; chained to ``error``.
    """
    path = policy.storage_path()
    if path is None:
        raise error

    try:
        count = RecordStore(path).write(records)
    except StoreError as store_error:
        log.error(
            "records_store_failed",
            path=str(path),
            reason=store_error.reason,
            error=str(error),
        )
        raise store_error from error

    log.warning(
        "records_stored",
        path=str(path),
        count=count,
        error=str(error),
    )
    return count
