"""World state snapshots and per-fact condition sets."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterator, Optional, Union

from .conditions import Condition, apply_condition, is_satisfied
from .facts import Fact

FactKey = Union[Fact, str]


class WorldState(Mapping):
    """
    Immutable assignment of a boolean value to every fact.

    One snapshot is captured per planning cycle; the planner derives new
    snapshots from it and never changes it.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[FactKey, bool]) -> None:
        resolved = {Fact.lookup(key): value for key, value in values.items()}
        missing = [fact.alias for fact in Fact if fact not in resolved]
        if missing:
            raise ValueError(f"World state is missing facts: {', '.join(missing)}")
        for fact, value in resolved.items():
            if not isinstance(value, bool):
                raise TypeError(f"Fact {fact.alias} must be a bool, got {value!r}")
        object.__setattr__(self, "_values", tuple(resolved[fact] for fact in Fact))

    @classmethod
    def from_partial(
        cls, values: Optional[Mapping[FactKey, bool]] = None, default: bool = False
    ) -> WorldState:
        """Build a snapshot, filling unlisted facts with ``default``."""
        full: dict[Fact, bool] = {fact: default for fact in Fact}
        for key, value in (values or {}).items():
            full[Fact.lookup(key)] = value
        return cls(full)

    @classmethod
    def all_false(cls) -> WorldState:
        return cls.from_partial()

    def __getitem__(self, key: FactKey) -> bool:
        fact = Fact.lookup(key)
        return self._values[_INDEX[fact]]

    def __iter__(self) -> Iterator[Fact]:
        return iter(Fact)

    def __len__(self) -> int:
        return len(self._values)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("WorldState is immutable")

    def __hash__(self) -> int:
        return hash(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, WorldState):
            return self._values == other._values
        return super().__eq__(other)

    def with_updates(self, updates: Mapping[FactKey, bool]) -> WorldState:
        """Return a new snapshot with ``updates`` applied."""
        merged: dict[Fact, bool] = dict(self.items())
        for key, value in updates.items():
            merged[Fact.lookup(key)] = value
        return WorldState(merged)

    def true_facts(self) -> list[Fact]:
        return [fact for fact in Fact if self[fact]]

    def to_dict(self) -> dict[str, bool]:
        """Alias-keyed dict, for JSON output."""
        return {fact.alias: self[fact] for fact in Fact}

    def __repr__(self) -> str:
        true_facts = ", ".join(fact.alias for fact in self.true_facts()) or "-"
        return f"WorldState(true=[{true_facts}])"


class ConditionSet(Mapping):
    """
    A constraint for every fact; facts not given are ``CAN_BE_EITHER``.

    Used both as preconditions (``is_satisfied_by``) and as postconditions
    (``apply_to``).
    """

    __slots__ = ("_conditions",)

    def __init__(
        self,
        conditions: Optional[Mapping[FactKey, Union[Condition, str, bool, None]]] = None,
        **kwargs: Union[Condition, str, bool, None],
    ) -> None:
        resolved = {fact: Condition.CAN_BE_EITHER for fact in Fact}
        for key, value in {**(conditions or {}), **kwargs}.items():
            resolved[Fact.lookup(key)] = Condition.parse(value)
        object.__setattr__(self, "_conditions", tuple(resolved[fact] for fact in Fact))

    def __getitem__(self, key: FactKey) -> Condition:
        return self._conditions[_INDEX[Fact.lookup(key)]]

    def __iter__(self) -> Iterator[Fact]:
        return iter(Fact)

    def __len__(self) -> int:
        return len(self._conditions)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("ConditionSet is immutable")

    def __hash__(self) -> int:
        return hash(self._conditions)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ConditionSet):
            return self._conditions == other._conditions
        return super().__eq__(other)

    def constrained(self) -> dict[Fact, Condition]:
        """Facts with an actual constraint, in schema order."""
        return {
            fact: condition
            for fact, condition in self.items()
            if condition is not Condition.CAN_BE_EITHER
        }

    def is_satisfied_by(self, state: WorldState) -> bool:
        return all(is_satisfied(state[fact], condition) for fact, condition in self.items())

    def unsatisfied_by(self, state: WorldState) -> list[Fact]:
        """Facts whose constraint ``state`` violates."""
        return [
            fact for fact, condition in self.items() if not is_satisfied(state[fact], condition)
        ]

    def apply_to(self, state: WorldState) -> WorldState:
        """Rewrite the constrained facts of ``state``; the rest stay as they are."""
        changes = {
            fact: apply_condition(state[fact], condition)
            for fact, condition in self.constrained().items()
        }
        if not changes:
            return state
        return state.with_updates(changes)

    def to_dict(self) -> dict[str, str]:
        return {fact.alias: condition.name for fact, condition in self.constrained().items()}

    def __repr__(self) -> str:
        body = ", ".join(f"{fact.alias}={cond.name}" for fact, cond in self.constrained().items())
        return f"ConditionSet({body})"


_INDEX: dict[Fact, int] = {fact: index for index, fact in enumerate(Fact)}
