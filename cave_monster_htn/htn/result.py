"""Planner result types."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from .network import PrimitiveTask
    from .state import WorldState
    from .trace import TraceEvent


class PlanStatus(Enum):
    """How a planning call ended."""

    COMPLETE = "complete"  # Work queue drained
    UNSATISFIABLE = "unsatisfiable"  # Backtracking stack ran dry
    SEARCH_EXHAUSTED = "search_exhausted"  # Budget stopped the search


@dataclass
class PlannerStats:
    """Statistics from one planning call."""

    steps: int = 0
    backtracks: int = 0
    methods_selected: int = 0
    elapsed_ms: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "steps": self.steps,
            "backtracks": self.backtracks,
            "methods_selected": self.methods_selected,
            "elapsed_ms": round(self.elapsed_ms, 3),
        }


@dataclass
class PlannerResult:
    """Final result from the forward planner."""

    status: PlanStatus = PlanStatus.COMPLETE
    plan: tuple["PrimitiveTask", ...] = ()
    initial_state: Optional["WorldState"] = None
    final_state: Optional["WorldState"] = None
    trace: list["TraceEvent"] = field(default_factory=list)
    stats: PlannerStats = field(default_factory=PlannerStats)

    @property
    def actions(self) -> list[str]:
        """Action names, in execution order."""
        return [task.name for task in self.plan]

    @property
    def success(self) -> bool:
        return self.status is PlanStatus.COMPLETE and len(self.plan) > 0
