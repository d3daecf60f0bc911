"""Cave monster HTN planner package."""

__version__ = "0.1.0"

from .htn import (
    Condition,
    ConditionSet,
    Fact,
    ForwardPlanner,
    PlannerConfig,
    PlannerResult,
    PlanStatus,
    TaskNetwork,
    WorldState,
)
from .behaviours import build_cave_monster_network
from .sensors import capture_world_state, FactProvider, StaticFactProvider
from .controller import AgentController

__all__ = [
    "Condition",
    "ConditionSet",
    "Fact",
    "ForwardPlanner",
    "PlannerConfig",
    "PlannerResult",
    "PlanStatus",
    "TaskNetwork",
    "WorldState",
    "build_cave_monster_network",
    "capture_world_state",
    "FactProvider",
    "StaticFactProvider",
    "AgentController",
]
