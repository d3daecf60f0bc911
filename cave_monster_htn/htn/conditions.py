"""Condition model: how a single fact is constrained or rewritten."""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Union

logger = logging.getLogger(__name__)


class Condition(Enum):
    """What the value of one fact must be, or will become."""

    CAN_BE_EITHER = auto()
    MUST_BE_TRUE = auto()
    MUST_BE_FALSE = auto()
    # Neither value is acceptable; never authored on purpose
    IMPOSSIBLE = auto()

    @classmethod
    def parse(cls, value: Union["Condition", str, bool, None]) -> Condition:
        """
        Coerce authored input into a Condition.

        Accepts members, member names (any case) and booleans, where
        ``True``/``False`` mean ``MUST_BE_TRUE``/``MUST_BE_FALSE`` and
        ``None`` means unconstrained.
        """
        if isinstance(value, Condition):
            return value
        if value is None:
            return cls.CAN_BE_EITHER
        if isinstance(value, bool):
            return cls.MUST_BE_TRUE if value else cls.MUST_BE_FALSE
        key = str(value).strip().upper().replace("-", "_").replace(" ", "_")
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown condition: {value!r}") from None


def is_satisfied(value: bool, condition: Condition) -> bool:
    """Return True if ``value`` meets ``condition``."""
    if condition is Condition.IMPOSSIBLE:
        return False
    if condition is Condition.MUST_BE_FALSE:
        return not value
    if condition is Condition.MUST_BE_TRUE:
        return value
    return True


def apply_condition(value: bool, condition: Condition) -> bool:
    """Return the value a fact takes after a postcondition is applied."""
    if condition is Condition.CAN_BE_EITHER:
        return value
    if condition is Condition.MUST_BE_TRUE:
        return True
    if condition is Condition.MUST_BE_FALSE:
        return False
    logger.warning("IMPOSSIBLE used as a postcondition; fact forced to False")
    return False
