"""
Request values flowing through the simulation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from priosim.ordering import natural_order


@dataclass(frozen=True)
class Request:
    """
    A request admitted to the queue.

    Attributes:
        priority: Ordering key. Larger values are served first under
            ``higher_priority_first``.
        request_id: Sequential identifier assigned at creation.
        step_added: Simulation step at which the request arrived.
    """

    priority: int
    request_id: int
    step_added: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "request_id": self.request_id,
            "priority": self.priority,
            "step_added": self.step_added,
        }


@dataclass(frozen=True)
class ServedRequest:
    """
    Removal record produced when a request is polled from the queue.

    Attributes:
        request: The request that was served.
        step_removed: Simulation step at which it left the queue.
    """

    request: Request
    step_removed: int

    @property
    def request_id(self) -> int:
        return self.request.request_id

    @property
    def priority(self) -> int:
        return self.request.priority

    @property
    def step_added(self) -> int:
        return self.request.step_added

    @property
    def wait_time(self) -> int:
        """Steps spent in the queue."""
        return self.step_removed - self.request.step_added

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            **self.request.to_dict(),
            "step_removed": self.step_removed,
            "wait_time": self.wait_time,
        }


def higher_priority_first(a: Request, b: Request) -> int:
    """Order requests so that the larger priority value sorts as smaller."""
    return natural_order(b.priority, a.priority)
