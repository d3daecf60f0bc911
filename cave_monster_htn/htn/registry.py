"""Action registration and lookup for plan consumers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Iterable

if TYPE_CHECKING:
    from .network import TaskNetwork

ActionHandler = Callable[..., Any]


class UnknownActionError(LookupError):
    """An action name has no handler; the network and the agent disagree."""


class ActionRegistry:
    """
    Maps action names produced by the planner to the code that runs them.

    Usage:
        actions = ActionRegistry()

        @actions.action("Throw rock")
        def throw_rock(controller): ...
    """

    def __init__(self) -> None:
        self._handlers: dict[str, ActionHandler] = {}

    def action(self, name: str) -> Callable[[ActionHandler], ActionHandler]:
        """Decorator for handler registration."""

        def decorator(func: ActionHandler) -> ActionHandler:
            self.register(name, func)
            return func

        return decorator

    def register(self, name: str, handler: ActionHandler) -> None:
        if name in self._handlers:
            raise ValueError(f"Action {name!r} is already registered")
        self._handlers[name] = handler

    def get(self, name: str) -> ActionHandler:
        try:
            return self._handlers[name]
        except KeyError:
            raise UnknownActionError(f"No handler registered for action {name!r}") from None

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    def names(self) -> list[str]:
        """List all registered action names."""
        return list(self._handlers)

    def missing(self, names: Iterable[str]) -> list[str]:
        return [name for name in names if name not in self._handlers]

    def validate(self, network: "TaskNetwork") -> None:
        """Raise if the network can produce an action this registry cannot run."""
        missing = self.missing(network.action_names)
        if missing:
            raise UnknownActionError(f"No handlers for actions: {', '.join(missing)}")
