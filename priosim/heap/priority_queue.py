"""
Array-backed binary heap priority queue.

Provides a growable min-heap whose ordering is supplied as a comparer
function. The element at the root is always a minimal element under
that comparer.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Any, Generic, TypeVar

from priosim.exceptions import EmptyQueueError, InvalidArgumentError
from priosim.ordering import Comparer, natural_order

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_INITIAL_CAPACITY = 11

# Below this capacity storage doubles; at or above it grows by half.
_DOUBLING_LIMIT = 64


def _is_hashable(value: Any) -> bool:
    try:
        hash(value)
    except TypeError:
        return False
    return True


class PriorityQueue(Generic[T]):
    """
    Binary min-heap over elements of type T with an injected ordering.

    Elements live in a contiguous list; the children of slot ``i`` are
    ``2i+1`` and ``2i+2``. Slots past ``size()`` are unused capacity.
    Duplicates are allowed.

    The queue is meant for single-threaded use. It does no locking;
    wrap every call in a lock if it must be shared between threads.

    Attributes:
        comparer: The ordering function. Negative means "sorts first".

    Example:
        >>> queue = PriorityQueue[int]()
        >>> queue.add_all([5, 1, 4])
        >>> queue.poll()
        1
        >>> queue.peek()
        4
        >>>
        >>> # Max-first by reversing the comparer, not the heap
        >>> from priosim.ordering import reverse_order
        >>> queue = PriorityQueue.from_iterable([5, 1, 4], reverse_order())
        >>> queue.poll()
        5
    """

    def __init__(
        self,
        initial_capacity: int = DEFAULT_INITIAL_CAPACITY,
        comparer: Comparer[T] | None = None,
    ) -> None:
        """
        Initialize an empty queue.

        Args:
            initial_capacity: Number of slots allocated up front.
            comparer: Ordering function; defaults to the natural order.

        Raises:
            InvalidArgumentError: If initial_capacity is less than 1.
        """
        if isinstance(initial_capacity, bool) or not isinstance(initial_capacity, int):
            raise InvalidArgumentError(
                "initial_capacity", initial_capacity, "must be an integer"
            )
        if initial_capacity < 1:
            raise InvalidArgumentError(
                "initial_capacity", initial_capacity, "must be at least 1"
            )

        self.comparer: Comparer[T] = comparer if comparer is not None else natural_order
        self._queue: list[T | None] = [None] * initial_capacity
        self._size = 0

        # Statistics
        self._total_added = 0
        self._total_polled = 0
        self._total_removed = 0
        self._resize_count = 0

    @classmethod
    def from_iterable(
        cls,
        items: Iterable[T],
        comparer: Comparer[T] | None = None,
    ) -> PriorityQueue[T]:
        """
        Build a queue from existing elements in linear time.

        The elements are copied into storage as-is and heap order is
        then restored bottom-up, rather than inserting them one by one.

        Args:
            items: Initial elements, in any order.
            comparer: Ordering function; defaults to the natural order.
        """
        elements = list(items)
        queue = cls(max(len(elements), 1), comparer)
        queue._queue[: len(elements)] = elements
        queue._size = len(elements)
        queue._total_added = len(elements)
        queue._heapify()
        return queue

    def copy(self) -> PriorityQueue[T]:
        """
        Return an independent queue with the same comparer and elements.

        Statistics are carried over, so the clone reports the same history.
        """
        clone: PriorityQueue[T] = PriorityQueue(max(self._size, 1), self.comparer)
        clone._queue[: self._size] = self._queue[: self._size]
        clone._size = self._size
        clone._total_added = self._total_added
        clone._total_polled = self._total_polled
        clone._total_removed = self._total_removed
        clone._resize_count = self._resize_count
        return clone

    @property
    def capacity(self) -> int:
        """Number of allocated slots."""
        return len(self._queue)

    def add(self, element: T) -> None:
        """
        Insert an element.

        Args:
            element: The element to insert.
        """
        if self._size == len(self._queue):
            self._grow()
        self._queue[self._size] = element
        self._sift_up(self._size)
        self._size += 1
        self._total_added += 1

    def offer(self, element: T) -> bool:
        """
        Insert an element.

        The queue has no upper bound, so this always succeeds.

        Returns:
            Always True.
        """
        self.add(element)
        return True

    def poll(self) -> T | None:
        """
        Remove and return a minimal element.

        Returns:
            The root element, or None if the queue is empty.
        """
        if self._size == 0:
            return None

        result = self._queue[0]
        self._size -= 1
        last = self._queue[self._size]
        self._queue[self._size] = None
        if self._size > 0:
            self._queue[0] = last
            self._sift_down(0)

        self._total_polled += 1
        return result

    def peek(self) -> T | None:
        """
        View a minimal element without removing it.

        Returns:
            The root element, or None if the queue is empty.
        """
        if self._size == 0:
            return None
        return self._queue[0]

    def element(self) -> T:
        """
        View a minimal element, requiring the queue to be non-empty.

        Raises:
            EmptyQueueError: If the queue is empty.
        """
        if self._size == 0:
            raise EmptyQueueError("element")
        return self._queue[0]  # type: ignore[return-value]

    def remove(self, value: Any) -> bool:
        """
        Remove one element equal to ``value``.

        Equality is ``==``, independent of the comparer. The scan is
        linear; the heap has no index.

        Args:
            value: The value to remove.

        Returns:
            True if an element was removed, False if none matched.
        """
        index = self._index_of(value)
        if index < 0:
            return False

        self._remove_at(index)
        self._total_removed += 1
        return True

    def contains(self, value: Any) -> bool:
        """Check whether an element equal to ``value`` is queued."""
        return self._index_of(value) >= 0

    def contains_all(self, items: Iterable[Any]) -> bool:
        """Check whether every item in ``items`` is queued."""
        return all(self.contains(item) for item in items)

    def size(self) -> int:
        """Get the number of queued elements."""
        return self._size

    def is_empty(self) -> bool:
        """Check if the queue is empty."""
        return self._size == 0

    def clear(self) -> None:
        """Remove every element, keeping the allocated capacity."""
        for i in range(self._size):
            self._queue[i] = None
        self._size = 0

    def to_array(self, dest: list[Any] | None = None) -> list[T]:
        """
        Copy the queued elements in storage (heap) order, not sorted order.

        Args:
            dest: Optional list to copy into. Used only if it has room for
                every element; otherwise a new list is returned.

        Returns:
            ``dest`` with its first ``size()`` slots overwritten, or a new
            list holding exactly the queued elements.
        """
        if dest is None or len(dest) < self._size:
            return list(self._queue[: self._size])  # type: ignore[arg-type]
        dest[: self._size] = self._queue[: self._size]
        return dest

    def add_all(self, items: Iterable[T]) -> None:
        """Insert each item in iteration order."""
        for item in items:
            self.add(item)

    def remove_all(self, items: Iterable[Any]) -> bool:
        """
        Remove one matching element per item, in iteration order.

        A value listed twice removes up to two equal elements.

        Returns:
            True if at least one element was removed.
        """
        changed = False
        for item in items:
            if self.remove(item):
                changed = True
        return changed

    def retain_all(self, items: Iterable[Any]) -> bool:
        """
        Keep only the elements whose value appears in ``items``.

        Survivors are compacted to the front of storage and heap order
        is rebuilt in one pass.

        Returns:
            True if any element was dropped.
        """
        values = list(items)
        keep: set[Any] | None
        try:
            keep = set(values)
        except TypeError:
            # unhashable values
            keep = None

        survivors = [
            element
            for element in self._queue[: self._size]
            if (
                element in keep
                if keep is not None and _is_hashable(element)
                else element in values
            )
        ]
        dropped = self._size - len(survivors)
        if dropped == 0:
            return False

        old_size = self._size
        self._queue[: len(survivors)] = survivors
        for i in range(len(survivors), old_size):
            self._queue[i] = None
        self._size = len(survivors)
        self._total_removed += dropped
        self._heapify()

        logger.debug(f"retain_all dropped {dropped} of {old_size} elements")
        return True

    def get_stats(self) -> dict[str, Any]:
        """
        Get queue statistics.

        Returns:
            Dictionary with queue statistics.
        """
        return {
            "size": self._size,
            "capacity": len(self._queue),
            "total_added": self._total_added,
            "total_polled": self._total_polled,
            "total_removed": self._total_removed,
            "resize_count": self._resize_count,
        }

    def _grow(self) -> None:
        """Extend storage according to the growth policy."""
        old_capacity = len(self._queue)
        if old_capacity < _DOUBLING_LIMIT:
            new_capacity = old_capacity * 2
        else:
            new_capacity = int(old_capacity * 1.5)

        self._queue.extend([None] * (new_capacity - old_capacity))
        self._resize_count += 1
        logger.debug(f"Grew queue storage from {old_capacity} to {new_capacity}")

    def _index_of(self, value: Any) -> int:
        for i in range(self._size):
            if self._queue[i] == value:
                return i
        return -1

    def _remove_at(self, index: int) -> None:
        """Remove the element at ``index`` and restore heap order."""
        self._size -= 1
        last = self._queue[self._size]
        self._queue[self._size] = None
        if index == self._size:
            return

        self._queue[index] = last
        # The moved element came from another subtree and may be smaller
        # than the new parent.
        if self._sift_down(index) == index:
            self._sift_up(index)

    def _sift_up(self, index: int) -> None:
        queue = self._queue
        element = queue[index]
        while index > 0:
            parent = (index - 1) // 2
            if self.comparer(element, queue[parent]) >= 0:
                break
            queue[index] = queue[parent]
            index = parent
        queue[index] = element

    def _sift_down(self, index: int) -> int:
        """Move the element at ``index`` down; return where it settled."""
        queue = self._queue
        size = self._size
        element = queue[index]
        while True:
            left = 2 * index + 1
            if left >= size:
                break
            smallest = left
            right = left + 1
            if right < size and self.comparer(queue[right], queue[left]) < 0:
                smallest = right
            if self.comparer(queue[smallest], element) >= 0:
                break
            queue[index] = queue[smallest]
            index = smallest
        queue[index] = element
        return index

    def _heapify(self) -> None:
        """Restore heap order over all active slots in linear time."""
        for i in range(self._size // 2 - 1, -1, -1):
            self._sift_down(i)

    def __len__(self) -> int:
        """Get queue size."""
        return self._size

    def __contains__(self, value: Any) -> bool:
        """Check if an element equal to ``value`` is queued."""
        return self.contains(value)

    def __iter__(self) -> Iterator[T]:
        """Iterate over a storage-order snapshot of the elements."""
        return iter(self.to_array())

    def __repr__(self) -> str:
        return f"PriorityQueue(size={self._size}, capacity={len(self._queue)})"
