"""
Request admission and service simulation for priosim.

This module drives randomly generated requests through a priority
queue that serves the highest priority first, recording every
admission and service in a line-oriented event log.

Example:
    >>> from priosim.simulation import (
    ...     EventLogConfig, EventLogger, RequestSimulation, SimulationConfig,
    ... )
    >>>
    >>> config = SimulationConfig(steps=25, seed=1)
    >>> with EventLogger(EventLogConfig.default("log.txt")) as log:
    ...     result = RequestSimulation(config, event_log=log).run()
    >>>
    >>> result.max_wait.wait_time >= 0
    True
"""

from priosim.simulation.driver import (
    RequestSimulation,
    SimulationConfig,
    SimulationResult,
)
from priosim.simulation.event_log import (
    EventLogConfig,
    EventLogger,
    InMemoryEventLogger,
)
from priosim.simulation.events import (
    EventType,
    QueueEvent,
    read_event_log,
)
from priosim.simulation.request import (
    Request,
    ServedRequest,
    higher_priority_first,
)

__all__ = [
    # Requests
    "Request",
    "ServedRequest",
    "higher_priority_first",
    # Events
    "EventType",
    "QueueEvent",
    "read_event_log",
    # Event log
    "EventLogConfig",
    "EventLogger",
    "InMemoryEventLogger",
    # Driver
    "RequestSimulation",
    "SimulationConfig",
    "SimulationResult",
]
