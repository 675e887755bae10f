"""Joint actions: one grounded action per agent for a simultaneous step.

Joint actions inherit the identity rule of their members: two joint actions
are equal when they map the same agents to groundings of the same action
names, whatever the parameter values.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from stochgame.config import get_max_joint_actions
from stochgame.models.definitions import ActionDefinition
from stochgame.models.grounded import GroundedAction

logger = logging.getLogger(__name__)


class JointAction:
    """Mapping from agent name to the grounded action it takes this step.

    Agents keep the order in which their actions were added.
    """

    def __init__(self, actions: Iterable[GroundedAction] = ()):
        self._actions: dict[str, GroundedAction] = {}
        for action in actions:
            self.add(action)

    def add(self, action: GroundedAction) -> None:
        """Set the action for its acting agent, replacing any previous one."""
        self._actions[action.acting_agent] = action

    def action(self, agent_id: str) -> GroundedAction | None:
        return self._actions.get(agent_id)

    def agents(self) -> list[str]:
        return list(self._actions)

    def actions(self) -> list[GroundedAction]:
        return list(self._actions.values())

    def copy(self) -> JointAction:
        """Return a joint action holding copies of every member action."""
        return JointAction(a.copy() for a in self._actions.values())

    def action_name(self) -> str:
        return ";".join(str(a) for a in self._actions.values())

    def __iter__(self) -> Iterator[GroundedAction]:
        return iter(self._actions.values())

    def __len__(self) -> int:
        return len(self._actions)

    def __contains__(self, agent_id: object) -> bool:
        return agent_id in self._actions

    def __str__(self) -> str:
        return self.action_name()

    def __repr__(self) -> str:
        return f"JointAction({self.action_name()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JointAction):
            return NotImplemented
        return self._actions == other._actions

    def __hash__(self) -> int:
        return hash(frozenset(self._actions.items()))


def enumerate_joint_actions(
    state: Any,
    definitions_by_agent: Mapping[str, Iterable[ActionDefinition]],
    limit: int | None = None,
) -> Iterator[JointAction]:
    """Lazily yield every combination of one applicable grounding per agent.

    Args:
        state: State passed to each definition's enumeration
        definitions_by_agent: Agent name -> action definitions available to it
        limit: Maximum number of joint actions to yield. If None, uses
            environment config.

    Yields:
        JointAction instances, each owning copies of its member actions.
        Nothing is yielded when definitions_by_agent is empty.
    """
    if not definitions_by_agent:
        return
    if limit is None:
        limit = get_max_joint_actions()

    agents = list(definitions_by_agent)
    per_agent = [
        [g for d in definitions_by_agent[agent] for g in d.enumerate_groundings(state, agent)]
        for agent in agents
    ]
    total = 1
    for options in per_agent:
        total *= len(options)
    logger.debug(f"Enumerating {total} joint actions for agents {agents}")

    for produced, combination in enumerate(itertools.product(*per_agent)):
        if produced >= limit:
            logger.warning(f"Joint action enumeration truncated at {limit} of {total} combinations")
            return
        yield JointAction(g.copy() for g in combination)
