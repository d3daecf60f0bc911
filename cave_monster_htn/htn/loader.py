"""Author task networks from plain data or YAML files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Union

import yaml

from .facts import UnknownFactError
from .network import CompoundTask, MalformedNetworkError, PrimitiveTask, TaskNetwork, TaskNode
from .state import ConditionSet

logger = logging.getLogger(__name__)


def _conditions(owner: str, kind: str, raw: Any) -> ConditionSet:
    if raw is None:
        return ConditionSet()
    if not isinstance(raw, Mapping):
        raise MalformedNetworkError(f"{kind} of {owner!r} must be a mapping of fact to condition")
    try:
        return ConditionSet(raw)
    except UnknownFactError as e:
        raise MalformedNetworkError(f"{kind} of {owner!r}: {e.args[0]}") from e
    except ValueError as e:
        raise MalformedNetworkError(f"{kind} of {owner!r}: {e}") from e


def network_from_dict(data: Mapping[str, Any]) -> TaskNetwork:
    """
    Build a network from a mapping shaped like:

        root: Be a monster
        primitives:
          Pause:
            preconditions: {entered: MUST_BE_TRUE}
            postconditions: {justThrew: false}
        compounds:
          Be a monster:
            - name: Be idle
              tasks: [Walk around, Pause]

    Condition values may be Condition names or booleans. Every error is
    reported as MalformedNetworkError.
    """
    if not isinstance(data, Mapping):
        raise MalformedNetworkError("Network definition must be a mapping")

    primitives_raw = data.get("primitives") or {}
    compounds_raw = data.get("compounds") or {}
    root_name = data.get("root")
    if not root_name:
        raise MalformedNetworkError("Network definition has no root")

    nodes: dict[str, TaskNode] = {}
    for name, spec in primitives_raw.items():
        spec = spec or {}
        if not isinstance(spec, Mapping):
            raise MalformedNetworkError(f"Primitive task {name!r} must be a mapping")
        nodes[name] = PrimitiveTask(
            name=name,
            preconditions=_conditions(name, "preconditions", spec.get("preconditions")),
            postconditions=_conditions(name, "postconditions", spec.get("postconditions")),
            description=spec.get("description", ""),
        )
    for name in compounds_raw:
        if name in nodes:
            raise MalformedNetworkError(f"{name!r} is both a primitive and a compound task")
        nodes[name] = CompoundTask(name)

    for name, methods in compounds_raw.items():
        compound = nodes[name]
        for index, method in enumerate(methods or []):
            if not isinstance(method, Mapping):
                raise MalformedNetworkError(f"Methods of {name!r} must be mappings")
            method_name = method.get("name") or f"{name} #{index + 1}"
            children = []
            for child_name in method.get("tasks") or []:
                if child_name not in nodes:
                    raise MalformedNetworkError(
                        f"Method {method_name!r} references undefined task {child_name!r}"
                    )
                children.append(nodes[child_name])
            compound.add_method(method_name, children)

    root = nodes.get(root_name)
    if root is None:
        raise MalformedNetworkError(f"Root task {root_name!r} is not defined")
    network = TaskNetwork(root)

    unused = sorted(set(nodes) - {node.name for node in network})
    if unused:
        logger.warning("Tasks not reachable from %r: %s", root_name, ", ".join(unused))
    return network


def load_network(path: Union[str, Path]) -> TaskNetwork:
    """Load a network definition from a YAML file."""
    path = Path(path)
    with open(path, "r") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise MalformedNetworkError(f"Cannot parse network file {path}: {e}") from e
    logger.info("Loaded task network from %s", path)
    return network_from_dict(data)


def network_to_dict(network: TaskNetwork) -> dict[str, Any]:
    """Inverse of network_from_dict; conditions are written by name."""
    return {
        "root": network.root.name,
        "primitives": {
            task.name: {
                "preconditions": task.preconditions.to_dict(),
                "postconditions": task.postconditions.to_dict(),
                **({"description": task.description} if task.description else {}),
            }
            for task in network.primitives
        },
        "compounds": {
            compound.name: [
                {"name": method.name, "tasks": [child.name for child in method.tasks]}
                for method in compound.methods
            ]
            for compound in network.compounds
        },
    }
