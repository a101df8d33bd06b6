"""
Discrete-step request admission and service simulation.

Each generation step admits a random batch of requests with random
priorities and then serves one request from the queue. After the last
generation step the queue is drained one request per step.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any

from priosim.exceptions import ConfigurationError
from priosim.heap import DEFAULT_INITIAL_CAPACITY, PriorityQueue
from priosim.simulation.event_log import EventLogger, InMemoryEventLogger
from priosim.simulation.request import Request, ServedRequest, higher_priority_first

logger = logging.getLogger(__name__)


@dataclass
class SimulationConfig:
    """
    Configuration for a simulation run.

    Attributes:
        steps: Number of generation steps.
        min_arrivals: Fewest requests admitted per generation step.
        max_arrivals: Most requests admitted per generation step.
        min_priority: Lowest priority drawn for a request.
        max_priority: Highest priority drawn for a request.
        initial_capacity: Initial storage capacity of the queue.
        seed: Seed for the random generator; None for nondeterministic runs.

    Example:
        >>> config = SimulationConfig(steps=20, seed=42)
        >>> config.validate()
    """

    steps: int
    min_arrivals: int = 1
    max_arrivals: int = 10
    min_priority: int = 1
    max_priority: int = 5
    initial_capacity: int = DEFAULT_INITIAL_CAPACITY
    seed: int | None = None

    def validate(self) -> None:
        """
        Check the configuration for values the simulation cannot run with.

        Raises:
            ConfigurationError: On the first invalid setting.
        """
        if self.steps < 1:
            raise ConfigurationError("steps", "a positive integer", self.steps)
        if self.min_arrivals < 0:
            raise ConfigurationError(
                "min_arrivals", "a non-negative integer", self.min_arrivals
            )
        if self.max_arrivals < self.min_arrivals:
            raise ConfigurationError(
                "max_arrivals",
                f"at least min_arrivals ({self.min_arrivals})",
                self.max_arrivals,
            )
        if self.max_priority < self.min_priority:
            raise ConfigurationError(
                "max_priority",
                f"at least min_priority ({self.min_priority})",
                self.max_priority,
            )
        if self.initial_capacity < 1:
            raise ConfigurationError(
                "initial_capacity", "a positive integer", self.initial_capacity
            )


@dataclass
class SimulationResult:
    """
    Outcome of a simulation run.

    Attributes:
        total_created: Requests admitted over all generation steps.
        served: Every served request, in service order.
        removed_during_generation: Requests served during generation steps.
        removed_during_drain: Requests served after generation stopped.
        last_step: The final step executed.
        max_wait: The first served request with the longest wait, if any.
    """

    total_created: int = 0
    served: list[ServedRequest] = field(default_factory=list)
    removed_during_generation: int = 0
    removed_during_drain: int = 0
    last_step: int = 0
    max_wait: ServedRequest | None = None

    @property
    def average_wait(self) -> float:
        """Mean wait over all served requests, 0.0 if none were served."""
        if not self.served:
            return 0.0
        return sum(s.wait_time for s in self.served) / len(self.served)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "total_created": self.total_created,
            "total_served": len(self.served),
            "removed_during_generation": self.removed_during_generation,
            "removed_during_drain": self.removed_during_drain,
            "last_step": self.last_step,
            "average_wait": self.average_wait,
            "max_wait": self.max_wait.to_dict() if self.max_wait else None,
        }


class RequestSimulation:
    """
    Drives requests through a priority queue step by step.

    Requests are served highest priority first. Every admission and
    every service is recorded in the event log.

    Example:
        >>> config = SimulationConfig(steps=10, seed=7)
        >>> simulation = RequestSimulation(config)
        >>> result = simulation.run()
        >>> result.total_created == len(result.served)
        True
    """

    def __init__(
        self,
        config: SimulationConfig,
        event_log: EventLogger | InMemoryEventLogger | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """
        Initialize the simulation.

        Args:
            config: Simulation configuration.
            event_log: Where ADD/REMOVE records go; kept in memory if None.
            rng: Random generator; seeded from config.seed if None.

        Raises:
            ConfigurationError: If the configuration is invalid.
        """
        config.validate()
        self.config = config
        self.event_log = event_log if event_log is not None else InMemoryEventLogger()
        self._rng = rng or random.Random(config.seed)
        self._queue: PriorityQueue[Request] = PriorityQueue(
            config.initial_capacity, higher_priority_first
        )
        self._next_id = 1
        self._result = SimulationResult()
        self._finished = False

    @property
    def queue(self) -> PriorityQueue[Request]:
        """The queue holding waiting requests."""
        return self._queue

    def run(self) -> SimulationResult:
        """
        Run the generation phase, then drain the queue.

        Returns:
            The run's results.

        Raises:
            ConfigurationError: If this simulation already ran.
        """
        if self._finished:
            raise ConfigurationError(
                "run", "a fresh RequestSimulation per run", "already finished"
            )

        logger.info(f"Starting simulation with {self.config.steps} steps")
        for step in range(1, self.config.steps + 1):
            self.generation_step(step)

        logger.info(
            f"Generation finished after {self.config.steps} steps, "
            f"draining {self._queue.size()} remaining requests"
        )
        step = self.config.steps + 1
        while not self._queue.is_empty():
            self.drain_step(step)
            step += 1

        self._finished = True
        self.event_log.flush()
        logger.info(
            f"Simulation finished: {self._result.total_created} created, "
            f"{self._result.removed_during_drain} served while draining"
        )
        return self._result

    def generation_step(self, step: int) -> ServedRequest | None:
        """
        Admit a random batch of requests, then serve one.

        Args:
            step: The current step number.

        Returns:
            The served request, or None if the queue was empty.
        """
        arrivals = self._rng.randint(self.config.min_arrivals, self.config.max_arrivals)
        logger.info(f"Step {step}: adding {arrivals} requests")

        for _ in range(arrivals):
            request = Request(
                priority=self._rng.randint(
                    self.config.min_priority, self.config.max_priority
                ),
                request_id=self._next_id,
                step_added=step,
            )
            self._next_id += 1
            self._queue.add(request)
            self.event_log.log_add(request)
            self._result.total_created += 1
            logger.debug(f"  #{request.request_id} priority={request.priority}")

        logger.info(f"Step {step}: {self._queue.size()} requests queued")

        served = self._serve(step)
        if served is None:
            logger.info(f"Step {step}: queue is empty, nothing to serve")
        else:
            self._result.removed_during_generation += 1
        return served

    def drain_step(self, step: int) -> ServedRequest | None:
        """
        Serve one request without admitting new ones.

        Args:
            step: The current step number.

        Returns:
            The served request, or None if the queue was empty.
        """
        served = self._serve(step)
        if served is not None:
            self._result.removed_during_drain += 1
            logger.info(f"Step {step}: {self._queue.size()} requests left")
        return served

    def _serve(self, step: int) -> ServedRequest | None:
        """Poll one request and record its service at ``step``."""
        request = self._queue.poll()
        self._result.last_step = step
        if request is None:
            return None

        served = ServedRequest(request, step_removed=step)
        self.event_log.log_remove(served)
        self._result.served.append(served)
        logger.info(
            f"Step {step}: served #{served.request_id} "
            f"(priority {served.priority}, waited {served.wait_time} steps)"
        )

        current = self._result.max_wait
        if current is None or served.wait_time > current.wait_time:
            self._result.max_wait = served
            logger.info(f"New maximum wait time: {served.wait_time} steps")
        return served
