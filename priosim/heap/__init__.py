"""
Heap-backed priority queue for priosim.

Example:
    >>> from priosim.heap import PriorityQueue
    >>> from priosim.ordering import comparing
    >>>
    >>> queue = PriorityQueue(comparer=comparing(len))
    >>> queue.add_all(["ccc", "a", "bb"])
    >>> queue.poll()
    'a'
"""

from priosim.heap.priority_queue import (
    DEFAULT_INITIAL_CAPACITY,
    PriorityQueue,
)

__all__ = [
    "DEFAULT_INITIAL_CAPACITY",
    "PriorityQueue",
]
