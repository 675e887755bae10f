"""Grounded agent actions.

A grounded action binds an ActionDefinition to the agent performing it and to
concrete parameter values. Simulators check it for legality, execute it, log
it, and use it as a key in joint-action and policy bookkeeping.

Identity contract (read this before using groundings as dict keys):
    Two groundings are equal when their acting agents match and their
    definitions have the same *name*. Parameter values are NOT compared and
    do not contribute to the hash. ``move(north)`` and ``move(south)`` for
    agent ``A`` are the same key. Lookup tables indexed by agent and action
    name rely on this, so compare ``get_parameters_as_string()`` explicitly
    when parameter values matter.

Lifecycle:
    Construct, initialize parameters once, then treat as read-only. Anything
    that needs a parameter-distinct variant (another rollout, another step,
    another thread) must call copy() first.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from stochgame.errors import ParseError

if TYPE_CHECKING:
    from stochgame.models.definitions import (
        ActionDefinition,
        ObjectParamActionDefinition,
        ValueParamActionDefinition,
    )

_WHITESPACE = re.compile(r"\s")


@runtime_checkable
class ParameterCodec(Protocol):
    """Capability every grounded-action variant provides for its parameters."""

    def copy(self) -> ParameterCodec:
        """Return an equal instance with independent parameter storage."""
        ...

    def init_params_with_string_rep(self, tokens: Sequence[str]) -> None:
        """Replace the parameter assignment with one parsed from tokens."""
        ...

    def get_parameters_as_string(self) -> list[str]:
        """Serialize the parameter assignment, one token per slot."""
        ...


class GroundedAction(ABC):
    """An action definition bound to an acting agent and parameter values.

    Subclasses own the parameter assignment and implement the three codec
    operations (copy, init_params_with_string_rep, get_parameters_as_string).
    See the module docstring for the equality contract.
    """

    def __init__(self, acting_agent: str, action: ActionDefinition):
        if not acting_agent:
            raise ValueError("acting_agent must be a non-empty string")
        if action is None:
            raise ValueError("action definition must not be None")
        self._acting_agent = acting_agent
        self._action = action

    @property
    def acting_agent(self) -> str:
        """Name of the agent performing the action."""
        return self._acting_agent

    @property
    def action(self) -> ActionDefinition:
        """The shared definition this grounding instantiates."""
        return self._action

    def action_name(self) -> str:
        return self._action.name

    def is_parameterized(self) -> bool:
        return self._action.is_parameterized()

    def applicable_in_state(self, state: Any) -> bool:
        """Check whether this grounding satisfies its preconditions in state.

        The definition's predicate receives this grounding so it can inspect
        the acting agent and parameter values.
        """
        return self._action.check_precondition(state, self)

    # =========================================================================
    # Parameter codec
    # =========================================================================

    @abstractmethod
    def copy(self) -> GroundedAction:
        """Return a new grounding of the same class with copied parameters.

        The acting agent and definition are shared; the parameter assignment
        is independent storage.
        """

    @abstractmethod
    def init_params_with_string_rep(self, tokens: Sequence[str]) -> None:
        """Parse tokens into this grounding's parameter assignment.

        All tokens are validated before anything is assigned, so a failed
        call leaves the previous assignment in place.

        Raises:
            ParseError: If the token count, an object reference, or a token's
                type does not match the definition's parameters.
        """

    @abstractmethod
    def get_parameters_as_string(self) -> list[str]:
        """Return the parameter assignment as tokens (empty if none)."""

    # =========================================================================
    # Text rendering
    # =========================================================================

    def _parameter_suffix(self) -> str:
        tokens = self.get_parameters_as_string()
        if not tokens:
            return ""
        return " " + " ".join(tokens)

    def just_action_string(self) -> str:
        """Return the action name and parameters without the agent prefix."""
        return self.action_name() + self._parameter_suffix()

    def __str__(self) -> str:
        return f"{self._acting_agent}:{self._action.name}{self._parameter_suffix()}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._acting_agent!r}, {self._action.name!r}, {self.get_parameters_as_string()!r})"

    # =========================================================================
    # Identity
    # =========================================================================

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, GroundedAction):
            return NotImplemented
        return self._acting_agent == other._acting_agent and self._action.name == other._action.name

    def __hash__(self) -> int:
        return hash(f"{self._acting_agent}::{self.action_name()}")


# =============================================================================
# Concrete variants
# =============================================================================


class SimpleGroundedAction(GroundedAction):
    """Grounding of an action that takes no parameters."""

    def copy(self) -> SimpleGroundedAction:
        return SimpleGroundedAction(self.acting_agent, self.action)

    def init_params_with_string_rep(self, tokens: Sequence[str]) -> None:
        if len(tokens) != 0:
            raise ParseError(self.action_name(), tokens, f"expected 0 parameters, got {len(tokens)}")

    def get_parameters_as_string(self) -> list[str]:
        return []


class ObjectParamGroundedAction(GroundedAction):
    """Grounding whose parameters are names of objects in the game state.

    Attributes:
        params: Bound object names, one per parameter slot (empty until set)
    """

    def __init__(
        self,
        acting_agent: str,
        action: ObjectParamActionDefinition,
        params: Sequence[str] | None = None,
    ):
        super().__init__(acting_agent, action)
        self._params: list[str] = []
        if params is not None:
            self.init_params_with_string_rep(params)

    @property
    def params(self) -> tuple[str, ...]:
        return tuple(self._params)

    def copy(self) -> ObjectParamGroundedAction:
        duplicate = ObjectParamGroundedAction(self.acting_agent, self.action)
        duplicate._params = list(self._params)
        return duplicate

    def init_params_with_string_rep(self, tokens: Sequence[str]) -> None:
        slots = self.action.parameters
        if len(tokens) != len(slots):
            raise ParseError(
                self.action_name(), tokens, f"expected {len(slots)} parameters, got {len(tokens)}"
            )
        for slot, token in zip(slots, tokens):
            if not isinstance(token, str) or not token or _WHITESPACE.search(token):
                raise ParseError(
                    self.action_name(), tokens, f"'{token}' is not a valid object reference for '{slot.name}'"
                )
        self._params = list(tokens)

    def get_parameters_as_string(self) -> list[str]:
        return list(self._params)


class ValueParamGroundedAction(GroundedAction):
    """Grounding whose parameters are typed scalar values.

    Attributes:
        values: Parsed parameter values, one per slot (empty until set)
    """

    def __init__(
        self,
        acting_agent: str,
        action: ValueParamActionDefinition,
        values: Sequence[Any] | None = None,
    ):
        super().__init__(acting_agent, action)
        self._values: list[Any] = []
        if values is not None:
            shown = [str(v) for v in values]
            if len(values) != len(action.parameters):
                raise ParseError(
                    self.action_name(), shown, f"expected {len(action.parameters)} values, got {len(values)}"
                )
            try:
                coerced = [slot.coerce_value(v) for slot, v in zip(action.parameters, values)]
            except ValueError as e:
                raise ParseError(self.action_name(), shown, str(e)) from e
            self._values = coerced

    @property
    def values(self) -> tuple[Any, ...]:
        return tuple(self._values)

    def copy(self) -> ValueParamGroundedAction:
        duplicate = ValueParamGroundedAction(self.acting_agent, self.action)
        duplicate._values = list(self._values)
        return duplicate

    def init_params_with_string_rep(self, tokens: Sequence[str]) -> None:
        slots = self.action.parameters
        if len(tokens) != len(slots):
            raise ParseError(
                self.action_name(), tokens, f"expected {len(slots)} parameters, got {len(tokens)}"
            )
        parsed = []
        for slot, token in zip(slots, tokens):
            try:
                parsed.append(slot.parse(token))
            except ValueError as e:
                raise ParseError(self.action_name(), tokens, str(e)) from e
        self._values = parsed

    def get_parameters_as_string(self) -> list[str]:
        return [slot.render(v) for slot, v in zip(self.action.parameters, self._values)]
