"""The closed set of facts every world state and condition set is keyed by."""

from __future__ import annotations

from enum import Enum


class UnknownFactError(KeyError):
    """Raised when a name does not identify any fact in the schema."""


class Fact(Enum):
    """
    A named boolean proposition about the cave monster's world.

    The value is the human-readable label used by the game; ``alias`` is
    the short camel-case key used in JSON/YAML snapshots.
    """

    PLAYER_ENTERED_AREA = "Player entered area"
    PLAYER_NEAR_CAVE = "Player near cave"
    MONSTER_NEAR_ROCK = "Monster near rock"
    MONSTER_NEAR_CRATE = "Monster near crate"
    MONSTER_NEAR_PLAYER = "Monster near player"
    MONSTER_HOLDING_CRATE = "Monster holding crate"
    MONSTER_HOLDING_ROCK = "Monster holding rock"
    MONSTER_JUST_THREW_OBSTACLE = "Monster just threw obstacle"

    @property
    def label(self) -> str:
        return self.value

    @property
    def alias(self) -> str:
        return _ALIASES[self]

    @classmethod
    def lookup(cls, name: "str | Fact") -> Fact:
        """
        Resolve a fact from its member name, label or alias.

        Matching ignores case, spaces, dashes and underscores, so
        ``"nearRock"``, ``"near_rock"`` and ``"MONSTER_NEAR_ROCK"`` all work.
        """
        if isinstance(name, Fact):
            return name
        key = _normalize(str(name))
        try:
            return _LOOKUP[key]
        except KeyError:
            raise UnknownFactError(f"Unknown fact: {name!r}") from None


_ALIASES: dict[Fact, str] = {
    Fact.PLAYER_ENTERED_AREA: "entered",
    Fact.PLAYER_NEAR_CAVE: "nearCave",
    Fact.MONSTER_NEAR_ROCK: "nearRock",
    Fact.MONSTER_NEAR_CRATE: "nearCrate",
    Fact.MONSTER_NEAR_PLAYER: "nearPlayer",
    Fact.MONSTER_HOLDING_CRATE: "holdingCrate",
    Fact.MONSTER_HOLDING_ROCK: "holdingRock",
    Fact.MONSTER_JUST_THREW_OBSTACLE: "justThrew",
}


def _normalize(name: str) -> str:
    return "".join(ch for ch in name.lower() if ch.isalnum())


_LOOKUP: dict[str, Fact] = {}
for _fact in Fact:
    _LOOKUP[_normalize(_fact.name)] = _fact
    _LOOKUP[_normalize(_fact.value)] = _fact
    _LOOKUP[_normalize(_ALIASES[_fact])] = _fact
del _fact
