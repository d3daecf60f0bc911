"""Command line entry-point: plan the cave monster's next actions."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional, TextIO

import click
import yaml

from .behaviours import build_cave_monster_network
from .htn import (
    ForwardPlanner,
    MalformedNetworkError,
    PlannerConfig,
    PlannerResult,
    SelectionPolicy,
    UnknownFactError,
    WorldState,
    load_network,
)
from .htn.facts import Fact
from .utils.config import ConfigError, ConfigManager
from .utils.logging import setup_logging

logger = logging.getLogger("cave_monster_htn.cli")

_TRUE = {"true", "t", "yes", "y", "on", "1"}
_FALSE = {"false", "f", "no", "n", "off", "0"}


def _parse_bool(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"not a boolean: {raw!r}")


def _parse_fact_options(facts: tuple[str, ...]) -> dict[Fact, bool]:
    """Parse repeated NAME=BOOL options; a bare NAME means True."""
    values: dict[Fact, bool] = {}
    for item in facts:
        name, sep, raw = item.partition("=")
        try:
            values[Fact.lookup(name.strip())] = _parse_bool(raw) if sep else True
        except (UnknownFactError, ValueError) as e:
            message = e.args[0] if isinstance(e, UnknownFactError) else str(e)
            raise click.BadParameter(message, param_hint="--fact") from e
    return values


def _read_state_file(stream: TextIO) -> dict[Fact, bool]:
    try:
        data = yaml.safe_load(stream) or {}
    except yaml.YAMLError as e:
        raise click.BadParameter(f"cannot parse state file: {e}", param_hint="--state") from e
    if not isinstance(data, dict):
        raise click.BadParameter("state file must hold a mapping of fact to bool",
                                 param_hint="--state")
    values: dict[Fact, bool] = {}
    for name, raw in data.items():
        try:
            values[Fact.lookup(name)] = _parse_bool(raw)
        except (UnknownFactError, ValueError) as e:
            message = e.args[0] if isinstance(e, UnknownFactError) else str(e)
            raise click.BadParameter(message, param_hint="--state") from e
    return values


def _format_output(result: PlannerResult, include_trace: bool) -> dict:
    """Format planner result for JSON output."""
    output = {
        "plan": result.actions,
        "status": result.status.value,
        "state": result.initial_state.to_dict() if result.initial_state else None,
        "final_state": result.final_state.to_dict() if result.final_state else None,
        "stats": result.stats.to_dict(),
    }
    if include_trace:
        output["trace"] = [event.to_dict() for event in result.trace]
    return output


@click.command()
@click.option("--fact", "-f", "facts", multiple=True, metavar="NAME=BOOL",
              help="Set a fact, e.g. -f entered=true (repeatable; unset facts are false)")
@click.option("--state", "-s", "state_file", type=click.File("r"), default=None,
              help="JSON or YAML file mapping fact names to booleans")
@click.option("--network", "-n", "network_path", type=click.Path(exists=True, dir_okay=False),
              default=None, help="YAML task network (defaults to the built-in cave monster)")
@click.option("--config", "-c", "config_path", type=click.Path(dir_okay=False), default=None,
              help="YAML configuration file")
@click.option("--seed", type=int, default=None, help="Seed for random method selection")
@click.option("--policy", type=click.Choice([p.value for p in SelectionPolicy]), default=None,
              help="Method selection policy")
@click.option("--trace", "show_trace", is_flag=True, help="Include the search trace in the output")
@click.option("--describe", is_flag=True, help="Print the task network and exit")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def main(
    facts: tuple[str, ...],
    state_file: Optional[TextIO],
    network_path: Optional[str],
    config_path: Optional[str],
    seed: Optional[int],
    policy: Optional[str],
    show_trace: bool,
    describe: bool,
    verbose: bool,
) -> None:
    """Plan the cave monster's next actions for a given world state."""

    try:
        config = ConfigManager(config_path)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    try:
        setup_logging(level=config.get("logging.level"), verbose=verbose)
    except ValueError as e:
        raise click.ClickException(f"Invalid logging configuration: {e}") from e

    if seed is not None:
        config.set("planner.seed", seed)
    if policy is not None:
        config.set("planner.selection", policy)
    if show_trace:
        config.set("planner.include_trace", True)

    try:
        network = load_network(network_path) if network_path else build_cave_monster_network()
    except MalformedNetworkError as e:
        raise click.ClickException(f"Invalid task network: {e}") from e

    if describe:
        click.echo(network.describe())
        return

    values: dict[Fact, bool] = {}
    if state_file is not None:
        values.update(_read_state_file(state_file))
    values.update(_parse_fact_options(facts))
    state = WorldState.from_partial(values)

    try:
        planner_config = PlannerConfig.from_manager(config)
    except (TypeError, ValueError) as e:
        raise click.ClickException(f"Invalid planner configuration: {e}") from e

    planner = ForwardPlanner(network, planner_config)
    result = planner.plan(state)

    if verbose:
        logger.info(f"Planned {len(result.plan)} actions ({result.status.value})")

    click.echo(json.dumps(_format_output(result, show_trace), indent=2))


if __name__ == "__main__":  # pragma: no cover
    main()
