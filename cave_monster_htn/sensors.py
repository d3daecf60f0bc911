"""Snapshot adapter: read every fact from the game once per planning cycle."""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Protocol, Union

from .htn.facts import Fact
from .htn.state import WorldState

logger = logging.getLogger(__name__)


class SensorError(RuntimeError):
    """A fact provider returned something other than a bool."""


class FactProvider(Protocol):
    """Answers boolean queries about the live game."""

    def read_fact(self, fact: Fact) -> bool:
        ...


class CaveMonsterSensors(Protocol):
    """The named queries the game exposes about the player and the monster."""

    def is_player_entered_area(self) -> bool: ...
    def is_player_near_cave(self) -> bool: ...
    def is_monster_near_rock(self) -> bool: ...
    def is_monster_near_crate(self) -> bool: ...
    def is_monster_near_player(self) -> bool: ...
    def is_monster_holding_crate(self) -> bool: ...
    def is_monster_holding_rock(self) -> bool: ...
    def is_monster_just_threw_obstacle(self) -> bool: ...


_SENSOR_QUERIES: dict[Fact, str] = {
    Fact.PLAYER_ENTERED_AREA: "is_player_entered_area",
    Fact.PLAYER_NEAR_CAVE: "is_player_near_cave",
    Fact.MONSTER_NEAR_ROCK: "is_monster_near_rock",
    Fact.MONSTER_NEAR_CRATE: "is_monster_near_crate",
    Fact.MONSTER_NEAR_PLAYER: "is_monster_near_player",
    Fact.MONSTER_HOLDING_CRATE: "is_monster_holding_crate",
    Fact.MONSTER_HOLDING_ROCK: "is_monster_holding_rock",
    Fact.MONSTER_JUST_THREW_OBSTACLE: "is_monster_just_threw_obstacle",
}


class SensorFactProvider:
    """Adapts a CaveMonsterSensors object to FactProvider."""

    def __init__(self, sensors: CaveMonsterSensors) -> None:
        self.sensors = sensors

    def read_fact(self, fact: Fact) -> bool:
        return getattr(self.sensors, _SENSOR_QUERIES[fact])()


class StaticFactProvider:
    """Provider backed by a plain mapping; facts not given read as False."""

    def __init__(self, values: Optional[Mapping[Union[Fact, str], bool]] = None) -> None:
        self.values: dict[Fact, bool] = {
            Fact.lookup(key): value for key, value in (values or {}).items()
        }

    def set(self, fact: Union[Fact, str], value: bool) -> None:
        self.values[Fact.lookup(fact)] = value

    def read_fact(self, fact: Fact) -> bool:
        return self.values.get(fact, False)


def capture_world_state(provider: FactProvider) -> WorldState:
    """
    Read each fact exactly once, in schema order, into a fresh snapshot.

    Call once per planning cycle, before planning starts; the planner
    never goes back to the provider mid-search.
    """
    values: dict[Fact, bool] = {}
    for fact in Fact:
        value = provider.read_fact(fact)
        if not isinstance(value, bool):
            raise SensorError(f"Sensor for {fact.label!r} returned {value!r}, expected a bool")
        values[fact] = value
    snapshot = WorldState(values)
    logger.debug("Captured %r", snapshot)
    return snapshot
