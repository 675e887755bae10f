#!/usr/bin/env python3
"""List the joint actions available in a small block-pushing game.

Two agents share a row of blocks. Each may wait, move in a direction, or push
a light block onto another block. The script prints every applicable
grounding per agent and then the joint actions built from them.

Usage:
    python scripts/list_joint_actions.py
    python scripts/list_joint_actions.py --blocks 4 --heavy b2 --limit 20
    STOCHGAME_LOG_LEVEL=debug python scripts/list_joint_actions.py
"""

import argparse
import sys
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from stochgame.config import configure_logging
from stochgame.models import (
    ObjectParamActionDefinition,
    ObjectParameter,
    ObjectState,
    SimpleActionDefinition,
    ValueParamActionDefinition,
    ValueParameter,
    enumerate_joint_actions,
)


def build_state(blocks: int, heavy: list[str]) -> ObjectState:
    objects = {"A": "agent", "B": "agent"}
    attributes = {}
    for i in range(1, blocks + 1):
        name = f"b{i}"
        objects[name] = "block"
        attributes[name] = {"heavy": name in heavy}
    return ObjectState(objects=objects, attributes=attributes)


def build_actions() -> list:
    wait = SimpleActionDefinition(name="wait", description="Do nothing this step.")
    move = ValueParamActionDefinition(
        name="move",
        description="Step one cell in a compass direction.",
        parameters=(ValueParameter(name="direction", choices=("north", "south", "east", "west")),),
    )
    push = ObjectParamActionDefinition(
        name="push",
        description="Push a light block onto another block.",
        parameters=(
            ObjectParameter(name="target", object_class="block"),
            ObjectParameter(name="dest", object_class="block"),
        ),
        precondition=lambda state, g: not state.get(g.params[0], "heavy", False),
    )
    return [wait, move, push]


def main():
    parser = argparse.ArgumentParser(description="List joint actions for a block-pushing game")
    parser.add_argument("--blocks", type=int, default=3, help="Number of blocks (default: 3)")
    parser.add_argument("--heavy", nargs="*", default=[], help="Names of blocks that cannot be pushed")
    parser.add_argument("--limit", type=int, default=None, help="Maximum joint actions to print")
    args = parser.parse_args()

    configure_logging()

    state = build_state(args.blocks, args.heavy)
    actions = build_actions()
    definitions_by_agent = {agent: actions for agent in state.objects_of_class("agent")}

    for agent, definitions in definitions_by_agent.items():
        print(f"{agent}:")
        for definition in definitions:
            for grounding in definition.enumerate_groundings(state, agent):
                print(f"  {grounding.just_action_string()}")

    print("\nJoint actions:")
    count = 0
    for joint in enumerate_joint_actions(state, definitions_by_agent, limit=args.limit):
        print(f"  {joint}")
        count += 1
    print(f"\n{count} joint actions")


if __name__ == "__main__":
    main()
