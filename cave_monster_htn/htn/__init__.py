"""HTN (Hierarchical Task Network) representation and forward planner."""

from .facts import Fact, UnknownFactError
from .conditions import Condition, is_satisfied, apply_condition
from .state import WorldState, ConditionSet
from .network import (
    PrimitiveTask,
    CompoundTask,
    Method,
    TaskNetwork,
    NetworkError,
    MalformedNetworkError,
    NetworkFrozenError,
)
from .budgets import PlannerBudgets, BudgetStatus
from .trace import TraceEvent, TraceRecorder
from .result import PlannerResult, PlannerStats, PlanStatus
from .planner import ForwardPlanner, PlannerConfig, SelectionPolicy
from .registry import ActionRegistry, UnknownActionError
from .loader import load_network, network_from_dict, network_to_dict

__all__ = [
    "Fact",
    "UnknownFactError",
    "Condition",
    "is_satisfied",
    "apply_condition",
    "WorldState",
    "ConditionSet",
    "PrimitiveTask",
    "CompoundTask",
    "Method",
    "TaskNetwork",
    "NetworkError",
    "MalformedNetworkError",
    "NetworkFrozenError",
    "PlannerBudgets",
    "BudgetStatus",
    "TraceEvent",
    "TraceRecorder",
    "PlannerResult",
    "PlannerStats",
    "PlanStatus",
    "ForwardPlanner",
    "PlannerConfig",
    "SelectionPolicy",
    "ActionRegistry",
    "UnknownActionError",
    "load_network",
    "network_from_dict",
    "network_to_dict",
]
