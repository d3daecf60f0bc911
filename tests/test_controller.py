"""Tests for the snapshot adapter, action registry and agent controller."""

import pytest

from cave_monster_htn.behaviours import build_cave_monster_network
from cave_monster_htn.controller import AgentController
from cave_monster_htn.htn import (
    ActionRegistry,
    Fact,
    ForwardPlanner,
    PlannerConfig,
    SelectionPolicy,
    UnknownActionError,
)
from cave_monster_htn.sensors import (
    SensorError,
    SensorFactProvider,
    StaticFactProvider,
    capture_world_state,
)


class FakeSensors:
    """Game-side queries with call counting."""

    def __init__(self, **values):
        self.values = values
        self.calls = []

    def _read(self, name):
        self.calls.append(name)
        return self.values.get(name, False)

    def is_player_entered_area(self):
        return self._read("entered")

    def is_player_near_cave(self):
        return self._read("near_cave")

    def is_monster_near_rock(self):
        return self._read("near_rock")

    def is_monster_near_crate(self):
        return self._read("near_crate")

    def is_monster_near_player(self):
        return self._read("near_player")

    def is_monster_holding_crate(self):
        return self._read("holding_crate")

    def is_monster_holding_rock(self):
        return self._read("holding_rock")

    def is_monster_just_threw_obstacle(self):
        return self._read("just_threw")


@pytest.fixture(scope="module")
def network():
    return build_cave_monster_network()


@pytest.fixture
def planner(network):
    return ForwardPlanner(network, PlannerConfig(selection=SelectionPolicy.PRIORITY))


@pytest.fixture
def full_registry(network):
    registry = ActionRegistry()
    executed = []
    for name in network.action_names:
        registry.register(name, lambda controller, name=name: executed.append(name))
    registry.executed = executed
    return registry


class TestCaptureWorldState:
    def test_reads_every_sensor_once(self):
        sensors = FakeSensors(entered=True, near_rock=True)
        state = capture_world_state(SensorFactProvider(sensors))
        assert len(sensors.calls) == len(Fact)
        assert len(set(sensors.calls)) == len(Fact)
        assert state.true_facts() == [Fact.PLAYER_ENTERED_AREA, Fact.MONSTER_NEAR_ROCK]

    def test_static_provider_defaults_to_false(self):
        state = capture_world_state(StaticFactProvider({"justThrew": True}))
        assert state.true_facts() == [Fact.MONSTER_JUST_THREW_OBSTACLE]

    def test_non_bool_sensor_value(self):
        sensors = FakeSensors(near_player="yes")
        with pytest.raises(SensorError, match="Monster near player"):
            capture_world_state(SensorFactProvider(sensors))


class TestActionRegistry:
    def test_decorator_registers_handler(self):
        registry = ActionRegistry()

        @registry.action("Pause")
        def pause(controller):
            return "paused"

        assert "Pause" in registry
        assert registry.get("Pause")(None) == "paused"
        assert registry.names() == ["Pause"]

    def test_duplicate_registration(self):
        registry = ActionRegistry()
        registry.register("Pause", lambda controller: None)
        with pytest.raises(ValueError):
            registry.register("Pause", lambda controller: None)

    def test_unknown_action(self):
        with pytest.raises(UnknownActionError):
            ActionRegistry().get("Dance")

    def test_validate_reports_missing_actions(self, network):
        registry = ActionRegistry()
        registry.register("Pause", lambda controller: None)
        with pytest.raises(UnknownActionError, match="Throw rock"):
            registry.validate(network)


class TestAgentController:
    def test_requests_plan_only_when_queue_is_empty(self, planner):
        provider = StaticFactProvider({"entered": True, "nearRock": True})
        controller = AgentController(planner, provider)

        assert controller.tick() == "Spin head horizontally"
        assert controller.pending == ["Pick up a rock", "Throw rock"]
        assert controller.tick() == "Pick up a rock"
        assert controller.tick() == "Throw rock"
        assert controller.plans_requested == 1

        controller.tick()
        assert controller.plans_requested == 2

    def test_facts_change_between_cycles(self, planner):
        provider = StaticFactProvider()
        controller = AgentController(planner, provider)
        assert controller.tick() == "Inactive"

        provider.set("entered", True)
        provider.set("nearRock", True)
        provider.set("nearPlayer", True)
        actions = [controller.tick() for _ in range(4)]
        assert actions == ["Spin head horizontally", "Pick up a rock", "Move to cave", "Throw rock"]

    def test_empty_plan_is_tolerated(self, planner):
        provider = StaticFactProvider({"entered": True, "holdingRock": True})
        controller = AgentController(planner, provider)
        assert controller.tick() is None
        assert controller.tick() is None
        assert controller.plans_requested == 2
        assert controller.last_result.plan == ()

    def test_dispatches_to_registry(self, planner, full_registry):
        provider = StaticFactProvider()
        controller = AgentController(planner, provider, registry=full_registry)
        controller.tick()
        assert full_registry.executed == ["Inactive"]

    def test_registry_must_cover_network(self, planner):
        registry = ActionRegistry()
        registry.register("Inactive", lambda controller: None)
        with pytest.raises(UnknownActionError):
            AgentController(planner, StaticFactProvider(), registry=registry)

    def test_clear_forces_replan(self, planner):
        provider = StaticFactProvider({"entered": True, "nearRock": True})
        controller = AgentController(planner, provider)
        controller.tick()
        controller.clear()
        assert controller.pending == []
        controller.tick()
        assert controller.plans_requested == 2

    def test_handler_receives_controller(self, planner, network):
        registry = ActionRegistry()
        seen = []
        for name in network.action_names:
            registry.register(name, lambda controller: seen.append(controller.current_action))
        controller = AgentController(planner, StaticFactProvider(), registry=registry)
        controller.tick()
        assert seen == ["Inactive"]

    def test_replan_replaces_pending_actions(self, planner):
        provider = StaticFactProvider({"entered": True, "nearRock": True})
        controller = AgentController(planner, provider)
        controller.tick()
        assert controller.pending == ["Pick up a rock", "Throw rock"]

        provider.set("nearRock", False)
        provider.set("nearCrate", True)
        result = controller.replan()
        assert controller.pending == result.actions
        assert controller.pending == ["Spin head vertically", "Pick up a crate", "Throw crate"]
