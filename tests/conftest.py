"""
Pytest fixtures for priosim tests.

Provides common fixtures used across all test modules.
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest

from priosim.heap import PriorityQueue
from priosim.simulation import (
    EventLogConfig,
    EventLogger,
    InMemoryEventLogger,
    Request,
    SimulationConfig,
    higher_priority_first,
)


# ============================================================================
# Queue Fixtures
# ============================================================================


@pytest.fixture
def int_queue() -> PriorityQueue[int]:
    """Create an empty natural-order queue of ints."""
    return PriorityQueue()


@pytest.fixture
def request_queue() -> PriorityQueue[Request]:
    """Create an empty queue serving the highest priority first."""
    return PriorityQueue(comparer=higher_priority_first)


@pytest.fixture
def assert_heap_valid() -> Callable[[PriorityQueue[Any]], None]:
    """Return a checker for the heap property over a queue's storage order."""

    def check(queue: PriorityQueue[Any]) -> None:
        items = queue.to_array()
        assert len(items) == queue.size()
        for i in range(1, len(items)):
            parent = (i - 1) // 2
            assert queue.comparer(items[i], items[parent]) >= 0, (
                f"heap order violated at index {i}: {items!r}"
            )

    return check


# ============================================================================
# Simulation Fixtures
# ============================================================================


@pytest.fixture
def sample_requests() -> list[Request]:
    """Requests with priorities [3, 1, 4, 1, 5] and ids 1..5."""
    return [
        Request(priority=p, request_id=i, step_added=1)
        for i, p in enumerate([3, 1, 4, 1, 5], start=1)
    ]


@pytest.fixture
def small_config() -> SimulationConfig:
    """Create a short, seeded simulation configuration."""
    return SimulationConfig(steps=5, seed=1234)


@pytest.fixture
def memory_log() -> InMemoryEventLogger:
    """Create an in-memory event log."""
    return InMemoryEventLogger()


@pytest.fixture
def temp_log_dir(tmp_path: Path) -> Path:
    """Create a temporary directory for event logs."""
    log_dir = tmp_path / "logs"
    log_dir.mkdir()
    return log_dir


@pytest.fixture
def file_log(temp_log_dir: Path) -> Generator[EventLogger, None, None]:
    """Create a file event logger in a temporary directory."""
    logger = EventLogger(EventLogConfig.default(temp_log_dir / "log.txt"))
    yield logger
    logger.close()
