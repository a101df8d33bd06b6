"""
Event records for the simulation log.

The log is line oriented, one record per line:

    ADD <request_id> <priority> <step_added>
    REMOVE <request_id> <priority> <step_removed>
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from priosim.exceptions import EventFormatError
from priosim.simulation.request import Request, ServedRequest


class EventType(Enum):
    """Types of queue events."""
    ADD = "ADD"
    REMOVE = "REMOVE"


@dataclass(frozen=True)
class QueueEvent:
    """
    A single ADD or REMOVE record.

    Attributes:
        event_type: Which kind of record this is.
        request_id: The request the event is about.
        priority: The request's priority.
        step: Step added for ADD, step removed for REMOVE.
    """

    event_type: EventType
    request_id: int
    priority: int
    step: int

    @classmethod
    def added(cls, request: Request) -> QueueEvent:
        """Create the record for a request entering the queue."""
        return cls(EventType.ADD, request.request_id, request.priority, request.step_added)

    @classmethod
    def removed(cls, served: ServedRequest) -> QueueEvent:
        """Create the record for a request leaving the queue."""
        return cls(EventType.REMOVE, served.request_id, served.priority, served.step_removed)

    def to_line(self) -> str:
        """Render the record without a trailing newline."""
        return f"{self.event_type.value} {self.request_id} {self.priority} {self.step}"

    @classmethod
    def from_line(cls, line: str, line_number: int | None = None) -> QueueEvent:
        """
        Parse one record.

        Args:
            line: The record text; surrounding whitespace is ignored.
            line_number: Position in the source, used in error messages.

        Raises:
            EventFormatError: If the record is malformed.
        """
        text = line.strip()
        fields = text.split()
        if len(fields) != 4:
            raise EventFormatError(
                text, f"expected 4 fields, found {len(fields)}", line_number
            )

        kind, *numbers = fields
        try:
            event_type = EventType(kind)
        except ValueError:
            raise EventFormatError(text, f"unknown event kind {kind!r}", line_number) from None

        try:
            request_id, priority, step = (int(n) for n in numbers)
        except ValueError:
            raise EventFormatError(text, "fields must be integers", line_number) from None

        return cls(event_type, request_id, priority, step)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "event_type": self.event_type.value,
            "request_id": self.request_id,
            "priority": self.priority,
            "step": self.step,
        }


def read_event_log(path: str | Path) -> Iterator[QueueEvent]:
    """
    Read events back from a log file, skipping blank lines.

    Raises:
        EventFormatError: On the first malformed record.
    """
    with open(path, encoding="utf-8") as f:
        for line_number, line in enumerate(f, start=1):
            if not line.strip():
                continue
            yield QueueEvent.from_line(line, line_number)
