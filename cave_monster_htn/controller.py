"""Agent controller: consumes plans one action per tick."""

from __future__ import annotations

import logging
from collections import deque
from typing import Optional

from .htn.planner import ForwardPlanner
from .htn.registry import ActionRegistry
from .htn.result import PlannerResult
from .sensors import FactProvider, capture_world_state

logger = logging.getLogger(__name__)


class AgentController:
    """
    Drives one agent from its planner.

    A new plan is requested only when the queue of pending actions is
    empty. Each ``tick`` then hands out the next action, dispatching it to
    the registry's handler, called with this controller, when a registry
    is attached. An empty plan is not an error: the tick does nothing and
    the next one plans again.
    """

    def __init__(
        self,
        planner: ForwardPlanner,
        provider: FactProvider,
        registry: Optional[ActionRegistry] = None,
    ) -> None:
        self.planner = planner
        self.provider = provider
        self.registry = registry
        if registry is not None:
            registry.validate(planner.network)

        self._queue: deque[str] = deque()
        self.current_action: Optional[str] = None
        self.plans_requested = 0
        self.last_result: Optional[PlannerResult] = None

    @property
    def pending(self) -> list[str]:
        """Actions still waiting in the queue."""
        return list(self._queue)

    def replan(self) -> PlannerResult:
        """Capture a fresh snapshot and replace the queue with the resulting plan."""
        snapshot = capture_world_state(self.provider)
        result = self.planner.plan(snapshot)
        self.plans_requested += 1
        self.last_result = result
        self._queue.clear()
        self._queue.extend(result.actions)
        if not result.plan:
            logger.info("Empty plan (%s); will retry next tick", result.status.value)
        return result

    def tick(self) -> Optional[str]:
        """Advance by one action; returns its name, or None when idle."""
        if not self._queue:
            self.replan()
        if not self._queue:
            self.current_action = None
            return None

        action = self._queue.popleft()
        self.current_action = action
        if self.registry is not None:
            self.registry.get(action)(self)
        logger.debug("Dispatched %r (%d left)", action, len(self._queue))
        return action

    def clear(self) -> None:
        """Drop the remaining actions so the next tick replans."""
        self._queue.clear()
        self.current_action = None
