"""Task network nodes: primitive tasks, compound tasks and methods."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional, Sequence, Union

from .state import ConditionSet, WorldState


class NetworkError(Exception):
    """Base class for task network authoring errors."""


class MalformedNetworkError(NetworkError):
    """The authored network violates a structural rule."""


class NetworkFrozenError(NetworkError):
    """A compound task was modified after its network was built."""


@dataclass(frozen=True, eq=False)
class PrimitiveTask:
    """An indivisible action with pre- and postconditions."""

    name: str
    preconditions: ConditionSet = field(default_factory=ConditionSet)
    postconditions: ConditionSet = field(default_factory=ConditionSet)
    description: str = ""

    def satisfies(self, state: WorldState) -> bool:
        return self.preconditions.is_satisfied_by(state)

    def apply(self, state: WorldState) -> WorldState:
        return self.postconditions.apply_to(state)

    def simulate(self, state: WorldState) -> tuple[bool, WorldState]:
        if not self.satisfies(state):
            return False, state
        return True, self.apply(state)

    def __repr__(self) -> str:
        return f"PrimitiveTask({self.name!r})"


@dataclass(frozen=True, eq=False)
class Method:
    """One ordered decomposition of a compound task."""

    name: str
    tasks: tuple["TaskNode", ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "tasks", tuple(self.tasks))

    def simulate(self, state: WorldState) -> tuple[bool, WorldState]:
        """
        Walk the children left to right against an evolving state.

        Primitive children must hold and advance the state through their
        postconditions. Compound children only need one feasible method;
        which one will be chosen is not known yet, so they leave the
        folded state as it is.
        """
        current = state
        for child in self.tasks:
            if isinstance(child, PrimitiveTask):
                ok, current = child.simulate(current)
            else:
                ok = child.satisfies(current)
            if not ok:
                return False, state
        return True, current

    def satisfies(self, state: WorldState) -> bool:
        return self.simulate(state)[0]

    def __repr__(self) -> str:
        return f"Method({self.name!r}, tasks={[t.name for t in self.tasks]})"


class CompoundTask:
    """A goal achievable through any one of its methods."""

    def __init__(self, name: str, methods: Iterable[Method] = (), description: str = "") -> None:
        self.name = name
        self.description = description
        self._methods: list[Method] = list(methods)
        self._frozen = False

    @property
    def methods(self) -> tuple[Method, ...]:
        return tuple(self._methods)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def add_method(self, name: str, tasks: Sequence["TaskNode"]) -> Method:
        """Append a method; authored order is the priority order."""
        if self._frozen:
            raise NetworkFrozenError(f"Cannot add method {name!r} to frozen task {self.name!r}")
        method = Method(name, tuple(tasks))
        self._methods.append(method)
        return method

    def freeze(self) -> None:
        self._frozen = True

    def satisfies(self, state: WorldState) -> bool:
        return any(method.satisfies(state) for method in self._methods)

    def feasible_methods(
        self, state: WorldState, exclude: Iterable[Method] = ()
    ) -> list[Method]:
        """Methods not in ``exclude`` whose whole chain holds, in authored order."""
        excluded = {id(m) for m in exclude}
        return [
            method
            for method in self._methods
            if id(method) not in excluded and method.satisfies(state)
        ]

    def __repr__(self) -> str:
        return f"CompoundTask({self.name!r}, methods={[m.name for m in self._methods]})"


TaskNode = Union[PrimitiveTask, CompoundTask]


class TaskNetwork:
    """
    A validated, read-only task tree rooted at one compound task.

    Built once and shared by reference between planners and planning
    cycles.
    """

    def __init__(self, root: CompoundTask) -> None:
        if not isinstance(root, CompoundTask):
            raise MalformedNetworkError(
                f"Network root must be a compound task, got {type(root).__name__}"
            )
        self.root = root
        self._primitives: list[PrimitiveTask] = []
        self._compounds: list[CompoundTask] = []
        self._by_name: dict[str, TaskNode] = {}
        self._visit(root, path=())
        for compound in self._compounds:
            compound.freeze()

    def _visit(self, node: TaskNode, path: tuple[int, ...]) -> None:
        if id(node) in path:
            chain = " -> ".join(n.name for n in self._path_nodes(path)) + f" -> {node.name}"
            raise MalformedNetworkError(f"Cycle in task network: {chain}")

        existing = self._by_name.get(node.name)
        if existing is not None and existing is not node:
            raise MalformedNetworkError(f"Two different tasks are named {node.name!r}")
        first_visit = existing is None
        if first_visit:
            self._by_name[node.name] = node

        if isinstance(node, PrimitiveTask):
            if first_visit:
                self._primitives.append(node)
            return

        if not isinstance(node, CompoundTask):
            raise MalformedNetworkError(f"Unsupported task node: {node!r}")
        if first_visit:
            self._compounds.append(node)
        if not node.methods:
            raise MalformedNetworkError(f"Compound task {node.name!r} has no methods")
        for method in node.methods:
            if not method.tasks:
                raise MalformedNetworkError(
                    f"Method {method.name!r} of {node.name!r} has no tasks"
                )
            for child in method.tasks:
                self._visit(child, path + (id(node),))

    def _path_nodes(self, path: tuple[int, ...]) -> list[CompoundTask]:
        by_id = {id(c): c for c in self._compounds}
        return [by_id[i] for i in path if i in by_id]

    @property
    def primitives(self) -> tuple[PrimitiveTask, ...]:
        return tuple(self._primitives)

    @property
    def compounds(self) -> tuple[CompoundTask, ...]:
        return tuple(self._compounds)

    @property
    def methods(self) -> tuple[Method, ...]:
        return tuple(m for compound in self._compounds for m in compound.methods)

    @property
    def action_names(self) -> tuple[str, ...]:
        """Every action name a plan can contain."""
        return tuple(p.name for p in self._primitives)

    def find(self, name: str) -> Optional[TaskNode]:
        return self._by_name.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[TaskNode]:
        return iter(self._by_name.values())

    def depth(self) -> int:
        """Number of task levels on the longest root-to-leaf path."""

        def _depth(node: TaskNode) -> int:
            if isinstance(node, PrimitiveTask):
                return 1
            return 1 + max(_depth(child) for m in node.methods for child in m.tasks)

        return _depth(self.root)

    def describe(self) -> str:
        """Indented text rendering of the tree."""
        lines: list[str] = []

        def _walk(node: TaskNode, indent: int) -> None:
            pad = "  " * indent
            if isinstance(node, PrimitiveTask):
                pre = node.preconditions.to_dict()
                post = node.postconditions.to_dict()
                lines.append(f"{pad}- {node.name}  pre={pre} post={post}")
                return
            lines.append(f"{pad}+ {node.name}")
            for method in node.methods:
                lines.append(f"{pad}  * {method.name}")
                for child in method.tasks:
                    _walk(child, indent + 2)

        _walk(self.root, 0)
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"TaskNetwork(root={self.root.name!r}, primitives={len(self._primitives)}, "
            f"compounds={len(self._compounds)})"
        )
