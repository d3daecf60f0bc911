"""The cave monster's hand-authored behaviour network."""

from __future__ import annotations

from ..htn.conditions import Condition
from ..htn.network import CompoundTask, PrimitiveTask, TaskNetwork
from ..htn.state import ConditionSet

T = Condition.MUST_BE_TRUE
F = Condition.MUST_BE_FALSE

ROOT_TASK = "Be a monster"


def _primitive(name: str, description: str, pre: dict, post: dict) -> PrimitiveTask:
    return PrimitiveTask(
        name=name,
        preconditions=ConditionSet(pre),
        postconditions=ConditionSet(post),
        description=description,
    )


def build_cave_monster_network() -> TaskNetwork:
    """
    Author the cave monster network.

    Root "Be a monster" picks between a rock attack, a crate attack,
    idling and staying inactive. Each attack has a fast variant (player
    out of reach) and a slow one that first retreats to the cave.
    """
    inactive = _primitive(
        "Inactive",
        "Do nothing until the player shows up",
        pre={"entered": F},
        post={"justThrew": F},
    )
    pause = _primitive(
        "Pause",
        "Stand still for a moment",
        pre={"entered": T, "holdingCrate": F, "holdingRock": F},
        post={"justThrew": F},
    )
    walk_around = _primitive(
        "Walk around",
        "Wander to random reachable points",
        pre={"entered": T, "holdingCrate": F, "holdingRock": F},
        post={"justThrew": F},
    )
    move_to_cave = _primitive(
        "Move to cave",
        "Retreat towards the cave to put distance between monster and player",
        pre={"entered": T, "nearCave": F, "nearPlayer": T},
        post={"nearPlayer": F},
    )
    spin_head_horizontally = _primitive(
        "Spin head horizontally",
        "Warn the player a rock is coming",
        pre={"entered": T, "holdingCrate": F, "holdingRock": F},
        post={},
    )
    spin_head_vertically = _primitive(
        "Spin head vertically",
        "Warn the player a crate is coming",
        pre={"entered": T, "holdingCrate": F, "holdingRock": F},
        post={},
    )
    pick_up_rock = _primitive(
        "Pick up a rock",
        "Lift the nearest rock",
        pre={"entered": T, "holdingCrate": F, "holdingRock": F, "nearRock": T, "justThrew": F},
        post={"holdingRock": T, "holdingCrate": F},
    )
    pick_up_crate = _primitive(
        "Pick up a crate",
        "Lift the nearest crate",
        pre={"entered": T, "holdingCrate": F, "holdingRock": F, "nearCrate": T, "justThrew": F},
        post={"holdingRock": F, "holdingCrate": T},
    )
    throw_rock = _primitive(
        "Throw rock",
        "Throw the held rock at the player",
        pre={"entered": T, "holdingRock": T, "holdingCrate": F, "justThrew": F, "nearPlayer": F},
        post={"holdingRock": F, "holdingCrate": F},
    )
    throw_crate = _primitive(
        "Throw crate",
        "Throw the held crate at the player",
        pre={"entered": T, "holdingCrate": T, "holdingRock": F, "justThrew": F, "nearPlayer": F},
        post={"holdingCrate": F, "holdingRock": F},
    )

    be_a_monster = CompoundTask(ROOT_TASK, description="Everything the monster does")
    rock_attack = CompoundTask("Rock attack")
    crate_attack = CompoundTask("Crate attack")

    be_a_monster.add_method("Do a rock attack", [spin_head_horizontally, rock_attack])
    be_a_monster.add_method("Do a crate attack", [spin_head_vertically, crate_attack])
    be_a_monster.add_method("Be idle", [walk_around, pause])
    be_a_monster.add_method("Be inactive", [inactive])

    # Fast: player out of reach. Slow: back off to the cave first.
    rock_attack.add_method("Do a fast rock attack", [pick_up_rock, throw_rock])
    rock_attack.add_method("Do a slow rock attack", [pick_up_rock, move_to_cave, throw_rock])

    crate_attack.add_method("Do a fast crate attack", [pick_up_crate, throw_crate])
    crate_attack.add_method("Do a slow crate attack", [pick_up_crate, move_to_cave, throw_crate])

    return TaskNetwork(be_a_monster)
