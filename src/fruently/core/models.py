"""Core Data Models for fruently.

Models:
    Record: One unit of log data sent to a Fluent forward server.

Store lines follow the Fluentd ``out_file`` layout, tab separated::

    2025-01-01T00:00:00+00:00<TAB>app.access<TAB>{"status": 200}

Usage:
    from fruently.core.models import Record

    record = Record(tag="app.access", time=1735689600, record={"status": 200})
    line = record.to_line()
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Union


FIELD_SEPARATOR = "\t"


def _format_time(epoch: float) -> str:
    """Render epoch seconds as an ISO 8601 UTC timestamp."""
    return datetime.fromtimestamp(epoch, tz=timezone.utc).isoformat()


def _parse_time(value: str) -> float:
    """Parse an ISO 8601 timestamp back to epoch seconds."""
    try:
        ts = value.replace("Z", "+00:00")
        parsed = datetime.fromisoformat(ts)
    except ValueError:
        raise ValueError(f"Invalid ISO 8601 timestamp in store line: '{value}'")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()


@dataclass
class Record:
    """A tagged log record.

    Attributes:
        tag: Fluent routing tag (e.g. "app.access").
        time: Event time as epoch seconds.
        record: JSON-serializable payload.
    """

    tag: str
    time: Union[int, float]
    record: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate fields after initialization."""
        if not self.tag or not self.tag.strip():
            raise ValueError("Field 'tag' cannot be empty")
        if FIELD_SEPARATOR in self.tag or "\n" in self.tag:
            raise ValueError("Field 'tag' cannot contain tabs or newlines")

    def to_json(self) -> str:
        """Serialize to JSON string."""
        return json.dumps(asdict(self))

    @classmethod
    def from_json(cls, data: Union[str, dict]) -> Record:
        """Deserialize from JSON string or dict."""
        if isinstance(data, str):
            data = json.loads(data)
        return cls(**data)

    def to_line(self) -> str:
        """Render as a single store-file line, newline terminated.

        The time is written as an ISO 8601 timestamp, which keeps
        microsecond precision; finer fractions of a second are lost
        when the line is read back.
        """
        payload = json.dumps(self.record, ensure_ascii=False, sort_keys=True)
        return FIELD_SEPARATOR.join((_format_time(self.time), self.tag, payload)) + "\n"

    @classmethod
    def from_line(cls, line: str) -> Record:
        """Parse a line produced by ``to_line``."""
        parts = line.rstrip("\n").split(FIELD_SEPARATOR, 2)
        if len(parts) != 3:
            raise ValueError(f"Malformed store line: {line!r}")
        time_str, tag, payload = parts
        return cls(tag=tag, time=_parse_time(time_str), record=json.loads(payload))
