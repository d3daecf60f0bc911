"""Planner budget configuration and status."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class BudgetStatus(Enum):
    """Status of budget checks."""

    OK = auto()
    STEP_LIMIT = auto()
    BACKTRACK_LIMIT = auto()


@dataclass
class PlannerBudgets:
    """
    Hard limits for one planning call.

    The authored networks are shallow and backtracking excludes methods
    already tried, so these only trip on runaway or hostile networks.
    A search may take up to ``max_steps`` steps and ``max_backtracks``
    backtracks; going past either stops it with no plan.
    """

    max_steps: int = 10000
    max_backtracks: int = 1000

    def check(self, steps: int, backtracks: int) -> BudgetStatus:
        if steps >= self.max_steps:
            return BudgetStatus.STEP_LIMIT
        if backtracks > self.max_backtracks:
            return BudgetStatus.BACKTRACK_LIMIT
        return BudgetStatus.OK
