"""
Custom exceptions for priosim.

This module defines the exception hierarchy for the package. Expected
absence (an empty queue in a processing loop, a value that is not
present) is never an error: those paths return ``None`` or ``False``.
The exceptions below are reserved for misuse and misconfiguration.
"""

from __future__ import annotations

from typing import Any


class PriosimError(Exception):
    """
    Base exception for all priosim errors.

    Attributes:
        message: Human-readable error description.
        details: Additional context about the error.

    Example:
        >>> try:
        ...     queue.element()
        ... except PriosimError as e:
        ...     logger.error(f"Queue error: {e}")
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class InvalidArgumentError(PriosimError, ValueError):
    """
    Raised when an operation receives an argument outside its domain.

    The only producer in the package is queue construction with a
    non-positive initial capacity; the queue is not created.

    Attributes:
        argument: Name of the offending argument.
        received: The value that was rejected.
    """

    def __init__(self, argument: str, received: Any, reason: str) -> None:
        self.argument = argument
        self.received = received
        message = f"Invalid value for '{argument}': {reason}, got {received!r}"
        super().__init__(message, {"argument": argument, "received": repr(received)})


class EmptyQueueError(PriosimError):
    """
    Raised by the strict accessor when the queue holds no element.

    Callers that treat emptiness as a normal condition should use
    ``peek()``/``poll()`` and check for ``None`` instead.
    """

    def __init__(self, operation: str = "element") -> None:
        self.operation = operation
        super().__init__(
            f"Cannot call '{operation}()' on an empty queue",
            {"operation": operation},
        )


class ConfigurationError(PriosimError):
    """
    Raised when a component is configured in a way it cannot work with.

    Attributes:
        config_key: The configuration key that has an issue.
        expected: What was expected for this configuration.
        received: What was actually provided.

    Example:
        >>> raise ConfigurationError(
        ...     config_key="steps",
        ...     expected="a positive integer",
        ...     received=0,
        ... )
    """

    def __init__(
        self,
        config_key: str,
        expected: str | None = None,
        received: Any = None,
    ) -> None:
        self.config_key = config_key
        self.expected = expected
        self.received = received

        message = f"Configuration error for '{config_key}'"
        if expected:
            message += f": expected {expected}"
        if received is not None:
            message += f", got {received!r}"

        details = {
            "config_key": config_key,
            "expected": expected,
            "received": str(received) if received is not None else None,
        }
        super().__init__(message, details)


class EventFormatError(PriosimError):
    """
    Raised when an event log record cannot be parsed.

    Attributes:
        line: The offending record, without its trailing newline.
        reason: Why the record was rejected.
        line_number: 1-based position in the log, when read from a file.
    """

    def __init__(self, line: str, reason: str, line_number: int | None = None) -> None:
        self.line = line
        self.reason = reason
        self.line_number = line_number

        location = f" at line {line_number}" if line_number is not None else ""
        super().__init__(
            f"Malformed event record{location}: {reason}",
            {"line": line, "line_number": line_number},
        )
