"""
priosim: binary-heap priority queue and request service simulation.

priosim provides a growable binary min-heap with an injected ordering
function, plus a discrete-step simulation that admits random requests
and serves them highest priority first.

Basic Usage:
    >>> from priosim import PriorityQueue, reverse_order
    >>>
    >>> queue = PriorityQueue(comparer=reverse_order())
    >>> queue.add_all([3, 1, 4, 1, 5])
    >>> queue.poll()
    5
    >>> queue.element()
    4
"""

__version__ = "0.1.0"

# Exceptions - always available
from priosim.exceptions import (
    ConfigurationError,
    EmptyQueueError,
    EventFormatError,
    InvalidArgumentError,
    PriosimError,
)
from priosim.heap import PriorityQueue
from priosim.ordering import (
    Comparer,
    comparing,
    natural_order,
    reverse_order,
)

__all__ = [
    # Version
    "__version__",
    # Queue
    "PriorityQueue",
    # Ordering
    "Comparer",
    "natural_order",
    "reverse_order",
    "comparing",
    # Exceptions
    "PriosimError",
    "InvalidArgumentError",
    "EmptyQueueError",
    "ConfigurationError",
    "EventFormatError",
]
