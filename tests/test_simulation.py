"""
Tests for the request simulation driver.
"""

import logging

import pytest

from priosim import ConfigurationError
from priosim.simulation import (
    EventType,
    InMemoryEventLogger,
    RequestSimulation,
    SimulationConfig,
)


class ScriptedRandom:
    """Random stand-in returning scripted randint values in order."""

    def __init__(self, values):
        self._values = list(values)

    def randint(self, a, b):
        value = self._values.pop(0)
        assert a <= value <= b
        return value


class TestSimulationConfig:
    """Tests for SimulationConfig validation."""

    def test_defaults(self):
        """Test default ranges."""
        config = SimulationConfig(steps=3)
        config.validate()
        assert (config.min_arrivals, config.max_arrivals) == (1, 10)
        assert (config.min_priority, config.max_priority) == (1, 5)

    @pytest.mark.parametrize(
        ("overrides", "key"),
        [
            ({"steps": 0}, "steps"),
            ({"steps": -4}, "steps"),
            ({"min_arrivals": -1}, "min_arrivals"),
            ({"min_arrivals": 5, "max_arrivals": 4}, "max_arrivals"),
            ({"min_priority": 3, "max_priority": 2}, "max_priority"),
            ({"initial_capacity": 0}, "initial_capacity"),
        ],
    )
    def test_invalid_settings(self, overrides, key):
        """Test invalid settings are rejected."""
        config = SimulationConfig(**{"steps": 3, **overrides})
        with pytest.raises(ConfigurationError) as exc_info:
            config.validate()
        assert exc_info.value.config_key == key

    def test_simulation_validates_config(self):
        """Test the driver refuses an invalid configuration."""
        with pytest.raises(ConfigurationError):
            RequestSimulation(SimulationConfig(steps=0))


class TestRequestSimulation:
    """Tests for RequestSimulation."""

    def test_scripted_run(self, memory_log):
        """Test admission, service order and the event log for a known script."""
        config = SimulationConfig(steps=2)
        # step 1: 3 arrivals with priorities 1, 5, 3; step 2: 1 arrival, priority 4
        rng = ScriptedRandom([3, 1, 5, 3, 1, 4])
        simulation = RequestSimulation(config, event_log=memory_log, rng=rng)

        result = simulation.run()

        assert memory_log.lines() == [
            "ADD 1 1 1",
            "ADD 2 5 1",
            "ADD 3 3 1",
            "REMOVE 2 5 1",
            "ADD 4 4 2",
            "REMOVE 4 4 2",
            "REMOVE 3 3 3",
            "REMOVE 1 1 4",
        ]
        assert result.total_created == 4
        assert result.removed_during_generation == 2
        assert result.removed_during_drain == 2
        assert result.last_step == 4
        assert [s.request_id for s in result.served] == [2, 4, 3, 1]
        assert result.max_wait.request_id == 1
        assert result.max_wait.wait_time == 3
        assert result.average_wait == pytest.approx((0 + 0 + 2 + 3) / 4)

    def test_every_request_served(self, small_config, memory_log):
        """Test the drain phase empties the queue."""
        simulation = RequestSimulation(small_config, event_log=memory_log)
        result = simulation.run()

        assert simulation.queue.is_empty()
        assert len(result.served) == result.total_created
        assert (
            result.removed_during_generation + result.removed_during_drain
            == result.total_created
        )
        assert result.removed_during_generation == small_config.steps
        assert result.last_step == small_config.steps + result.removed_during_drain

        kinds = [e.event_type for e in memory_log.events]
        assert kinds.count(EventType.ADD) == result.total_created
        assert kinds.count(EventType.REMOVE) == result.total_created

    def test_ids_are_sequential(self, small_config, memory_log):
        """Test request ids count up from 1 in admission order."""
        RequestSimulation(small_config, event_log=memory_log).run()
        added = [e.request_id for e in memory_log.events if e.event_type == EventType.ADD]
        assert added == list(range(1, len(added) + 1))

    def test_arrivals_and_priorities_in_range(self, memory_log):
        """Test generated values respect the configured ranges."""
        config = SimulationConfig(
            steps=20, min_arrivals=2, max_arrivals=4, min_priority=7, max_priority=9, seed=3
        )
        RequestSimulation(config, event_log=memory_log).run()

        added = [e for e in memory_log.events if e.event_type == EventType.ADD]
        assert all(7 <= e.priority <= 9 for e in added)
        per_step = {}
        for e in added:
            per_step[e.step] = per_step.get(e.step, 0) + 1
        assert all(2 <= n <= 4 for n in per_step.values())

    def test_max_wait_is_first_longest(self, small_config):
        """Test the tracked request has the longest wait, earliest on ties."""
        result = RequestSimulation(small_config).run()

        longest = max(s.wait_time for s in result.served)
        first = next(s for s in result.served if s.wait_time == longest)
        assert result.max_wait is first

    def test_served_by_priority_at_each_step(self, memory_log):
        """Test nothing waiting outranks the request served."""
        config = SimulationConfig(steps=15, seed=99)
        RequestSimulation(config, event_log=memory_log).run()

        waiting = {}
        for event in memory_log.events:
            if event.event_type == EventType.ADD:
                waiting[event.request_id] = event.priority
            else:
                assert event.priority == max(waiting.values())
                del waiting[event.request_id]
        assert waiting == {}

    def test_same_seed_same_log(self):
        """Test seeded runs are reproducible."""
        logs = []
        for _ in range(2):
            log = InMemoryEventLogger()
            RequestSimulation(SimulationConfig(steps=8, seed=11), event_log=log).run()
            logs.append(log.lines())
        assert logs[0] == logs[1]

    def test_no_arrivals(self, memory_log):
        """Test a run where nothing ever arrives."""
        config = SimulationConfig(steps=3, min_arrivals=0, max_arrivals=0)
        result = RequestSimulation(config, event_log=memory_log).run()

        assert result.total_created == 0
        assert result.max_wait is None
        assert result.average_wait == 0.0
        assert result.last_step == 3
        assert memory_log.events == []

    def test_runs_only_once(self, small_config):
        """Test a finished simulation cannot be rerun."""
        simulation = RequestSimulation(small_config)
        simulation.run()
        with pytest.raises(ConfigurationError):
            simulation.run()

    def test_result_to_dict(self, small_config):
        """Test dictionary conversion."""
        result = RequestSimulation(small_config).run()
        d = result.to_dict()
        assert d["total_served"] == d["total_created"]
        assert d["max_wait"]["wait_time"] == result.max_wait.wait_time

    def test_narration_logged(self, small_config, caplog):
        """Test step narration goes through logging."""
        with caplog.at_level(logging.INFO, logger="priosim.simulation.driver"):
            RequestSimulation(small_config).run()

        assert "Starting simulation with 5 steps" in caplog.text
        assert "Step 1: adding" in caplog.text
        assert "Simulation finished" in caplog.text
