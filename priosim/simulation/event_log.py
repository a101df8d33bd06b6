"""
Event log writers for the simulation.

This module provides the EventLogger class, which writes ADD/REMOVE
records to a plain text file, and an in-memory variant for tests and
runs that need no file output.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from priosim.simulation.events import QueueEvent
from priosim.simulation.request import Request, ServedRequest

logger = logging.getLogger(__name__)

DEFAULT_LOG_PATH = "log.txt"


@dataclass
class EventLogConfig:
    """
    Configuration for the event log.

    Attributes:
        log_path: Path to the log file.
        append: If True, keep existing records; otherwise truncate on open.
        sync_writes: If True, flush after each write.
    """
    log_path: Path
    append: bool = False
    sync_writes: bool = True

    @classmethod
    def default(cls, log_path: str | Path = DEFAULT_LOG_PATH) -> EventLogConfig:
        """Create default configuration."""
        return cls(log_path=Path(log_path))


class EventLogger:
    """
    Writes queue events to a line-oriented text file.

    The file is opened on the first write, so constructing a logger
    never touches the filesystem beyond creating the parent directory.

    Example:
        >>> with EventLogger(EventLogConfig.default("./out/log.txt")) as log:
        ...     _ = log.log_add(Request(priority=3, request_id=1, step_added=1))
    """

    def __init__(self, config: EventLogConfig) -> None:
        """
        Initialize the event logger.

        Args:
            config: Logger configuration.
        """
        self.config = config
        self._file: TextIO | None = None
        self._events_written = 0

        config.log_path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def events_written(self) -> int:
        """Number of records written by this logger."""
        return self._events_written

    def log(self, event: QueueEvent) -> QueueEvent:
        """
        Write one event record.

        Args:
            event: The event to write.

        Returns:
            The written event.
        """
        f = self._ensure_file_open()
        f.write(event.to_line() + "\n")
        if self.config.sync_writes:
            f.flush()
        self._events_written += 1
        return event

    def log_add(self, request: Request) -> QueueEvent:
        """Write the ADD record for a request."""
        return self.log(QueueEvent.added(request))

    def log_remove(self, served: ServedRequest) -> QueueEvent:
        """Write the REMOVE record for a served request."""
        return self.log(QueueEvent.removed(served))

    def flush(self) -> None:
        """Flush buffered writes to disk."""
        if self._file:
            self._file.flush()
            os.fsync(self._file.fileno())

    def close(self) -> None:
        """Close the log file."""
        if self._file:
            self._file.close()
            self._file = None
            logger.debug(
                f"Closed event log {self.config.log_path} "
                f"after {self._events_written} records"
            )

    def size_bytes(self) -> int:
        """Current size of the log file, 0 if it does not exist yet."""
        if self._file:
            self._file.flush()
        try:
            return self.config.log_path.stat().st_size
        except FileNotFoundError:
            return 0

    def _ensure_file_open(self) -> TextIO:
        """Ensure the log file is open."""
        if self._file is None:
            mode = "a" if self.config.append else "w"
            self._file = open(self.config.log_path, mode, encoding="utf-8")
            logger.debug(f"Opened event log {self.config.log_path} (mode={mode})")
        return self._file

    def __enter__(self) -> EventLogger:
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit."""
        self.close()


class InMemoryEventLogger:
    """
    In-memory event logger for testing and development.

    Example:
        >>> log = InMemoryEventLogger()
        >>> _ = log.log_add(Request(priority=3, request_id=1, step_added=1))
        >>> log.lines()
        ['ADD 1 3 1']
    """

    def __init__(self) -> None:
        """Initialize the in-memory logger."""
        self._events: list[QueueEvent] = []

    @property
    def events(self) -> list[QueueEvent]:
        """Get all logged events."""
        return list(self._events)

    @property
    def events_written(self) -> int:
        return len(self._events)

    def log(self, event: QueueEvent) -> QueueEvent:
        self._events.append(event)
        return event

    def log_add(self, request: Request) -> QueueEvent:
        return self.log(QueueEvent.added(request))

    def log_remove(self, served: ServedRequest) -> QueueEvent:
        return self.log(QueueEvent.removed(served))

    def lines(self) -> list[str]:
        """Render every event as it would appear in a log file."""
        return [event.to_line() for event in self._events]

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass

    def size_bytes(self) -> int:
        return sum(len(line) + 1 for line in self.lines())

    def clear(self) -> None:
        """Clear all logged events."""
        self._events.clear()

    def __enter__(self) -> InMemoryEventLogger:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
