"""Forward planner - depth-first HTN search with explicit backtracking."""

from __future__ import annotations

import logging
import random
import time
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional, Protocol, Sequence

from .budgets import BudgetStatus, PlannerBudgets
from .network import CompoundTask, Method, PrimitiveTask, TaskNetwork, TaskNode
from .result import PlannerResult, PlannerStats, PlanStatus
from .state import WorldState
from .trace import TraceRecorder

if TYPE_CHECKING:
    from ..utils.config import ConfigManager

logger = logging.getLogger(__name__)


class SelectionPolicy(Enum):
    """How a compound task picks among its feasible methods."""

    RANDOM = "random"
    PRIORITY = "priority"


class Chooser(Protocol):
    """Anything with ``random.Random.choice`` semantics."""

    def choice(self, seq: Sequence[Any]) -> Any:
        ...


@dataclass
class PlannerConfig:
    """Configuration for the forward planner."""

    budgets: PlannerBudgets = field(default_factory=PlannerBudgets)
    selection: SelectionPolicy = SelectionPolicy.RANDOM
    seed: Optional[int] = None
    include_trace: bool = True

    @classmethod
    def from_manager(cls, config: "ConfigManager") -> PlannerConfig:
        """Build from the ``planner.*`` and ``budgets.*`` config keys."""
        defaults = cls()
        return cls(
            budgets=PlannerBudgets(
                max_steps=int(config.get("budgets.max_steps", defaults.budgets.max_steps)),
                max_backtracks=int(
                    config.get("budgets.max_backtracks", defaults.budgets.max_backtracks)
                ),
            ),
            selection=SelectionPolicy(config.get("planner.selection", defaults.selection.value)),
            seed=config.get("planner.seed"),
            include_trace=bool(config.get("planner.include_trace", defaults.include_trace)),
        )


@dataclass(frozen=True)
class _Pending:
    """A task waiting in the work queue, with the methods it may not reuse."""

    task: TaskNode
    excluded: tuple[Method, ...] = ()
    depth: int = 0


@dataclass(frozen=True)
class Checkpoint:
    """Search state saved right after a compound task chose a method."""

    pending: _Pending
    method: Method
    plan: tuple[PrimitiveTask, ...]
    state: WorldState
    queue: tuple[_Pending, ...]


class ForwardPlanner:
    """
    Depth-first forward planner over a task network.

    The network is shared and never modified; every call to ``plan`` owns
    its own work queue, plan, simulated state and checkpoint stack. When
    a branch fails the most recent checkpoint is restored and its task is
    retried without the method that led to the failure, so the search
    always terminates on a finite network.
    """

    def __init__(
        self,
        network: TaskNetwork,
        config: Optional[PlannerConfig] = None,
        rng: Optional[Chooser] = None,
    ) -> None:
        self.network = network
        self.config = config or PlannerConfig()
        self.budgets = self.config.budgets
        self.rng: Chooser = rng if rng is not None else random.Random(self.config.seed)

    def request_plan(self, state: WorldState) -> list[str]:
        """Plan from ``state`` and return only the action names."""
        return self.plan(state).actions

    def plan(self, state: WorldState) -> PlannerResult:
        """
        Search the network from its root against ``state``.

        Never raises for lack of a plan: an unsatisfiable root or an
        exhausted budget come back as a status with an empty plan.
        """
        start = time.perf_counter()
        trace = TraceRecorder(enabled=self.config.include_trace)
        stats = PlannerStats()

        queue: deque[_Pending] = deque([_Pending(self.network.root)])
        stack: list[Checkpoint] = []
        plan: list[PrimitiveTask] = []
        current = state
        status = PlanStatus.COMPLETE

        while queue:
            budget_status = self.budgets.check(stats.steps, stats.backtracks)
            if budget_status is not BudgetStatus.OK:
                trace.log(
                    "BUDGET_EXCEEDED",
                    {"reason": budget_status.name, "steps": stats.steps,
                     "backtracks": stats.backtracks},
                )
                logger.warning(
                    "Planning stopped by %s after %d steps and %d backtracks",
                    budget_status.name, stats.steps, stats.backtracks,
                )
                status = PlanStatus.SEARCH_EXHAUSTED
                plan = []
                current = state
                break

            stats.steps += 1
            pending = queue.popleft()
            task = pending.task

            if isinstance(task, CompoundTask):
                method = self._select_method(task, current, pending.excluded)
                if method is not None:
                    stats.methods_selected += 1
                    stack.append(Checkpoint(pending, method, tuple(plan), current, tuple(queue)))
                    trace.log(
                        "METHOD_SELECTED",
                        {"subtasks": [child.name for child in method.tasks],
                         "excluded": [m.name for m in pending.excluded]},
                        task_name=task.name,
                        method_name=method.name,
                        depth=pending.depth,
                    )
                    # Insert at front, keeping the method's order
                    for child in reversed(method.tasks):
                        queue.appendleft(_Pending(child, depth=pending.depth + 1))
                    continue

                trace.log(
                    "NO_METHOD",
                    {"excluded": [m.name for m in pending.excluded]},
                    task_name=task.name,
                    depth=pending.depth,
                )
            else:
                if task.satisfies(current):
                    plan.append(task)
                    current = task.apply(current)
                    trace.log("TASK_ACCEPTED", {}, task_name=task.name, depth=pending.depth)
                    continue

                trace.log(
                    "PRECONDITION_FAILED",
                    {"facts": [f.alias for f in task.preconditions.unsatisfied_by(current)]},
                    task_name=task.name,
                    depth=pending.depth,
                )

            # Backtrack
            if not stack:
                trace.log("DEAD_END", {}, task_name=task.name, depth=pending.depth)
                logger.info("No plan: %r cannot be satisfied from %r", task.name, state)
                status = PlanStatus.UNSATISFIABLE
                break

            stats.backtracks += 1
            checkpoint = stack.pop()
            plan = list(checkpoint.plan)
            current = checkpoint.state
            queue = deque(checkpoint.queue)
            retry = _Pending(
                checkpoint.pending.task,
                checkpoint.pending.excluded + (checkpoint.method,),
                checkpoint.pending.depth,
            )
            queue.appendleft(retry)
            trace.log(
                "BACKTRACK",
                {"failed_at": task.name, "plan_length": len(plan)},
                task_name=retry.task.name,
                method_name=checkpoint.method.name,
                depth=retry.depth,
            )

        stats.elapsed_ms = (time.perf_counter() - start) * 1000
        result = PlannerResult(
            status=status,
            plan=tuple(plan),
            initial_state=state,
            final_state=current,
            trace=trace.events,
            stats=stats,
        )
        logger.debug(
            "Plan %s (%s) in %d steps, %d backtracks",
            result.actions, status.value, stats.steps, stats.backtracks,
        )
        return result

    def _select_method(
        self, task: CompoundTask, state: WorldState, excluded: Sequence[Method]
    ) -> Optional[Method]:
        """Pick one feasible, not yet tried method according to the policy."""
        feasible = task.feasible_methods(state, exclude=excluded)
        if not feasible:
            return None
        if self.config.selection is SelectionPolicy.PRIORITY:
            return feasible[0]
        return self.rng.choice(feasible)
