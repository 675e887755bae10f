"""Action definitions for multi-agent stochastic games.

An action definition is the immutable, game-level schema of an action: its
name, its ordered parameter slots, and the precondition deciding when a
grounding of it is legal. Definitions are shared read-only by every grounding
that references them, so they are frozen pydantic models.

Three kinds are provided, matching the grounded-action variants:
- SimpleActionDefinition: no parameters
- ObjectParamActionDefinition: parameters bind objects present in the state
- ValueParamActionDefinition: parameters bind typed scalar values
"""

import itertools
import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Iterator
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator, model_validator

from stochgame.models.grounded import (
    GroundedAction,
    ObjectParamGroundedAction,
    SimpleGroundedAction,
    ValueParamGroundedAction,
)
from stochgame.models.state import StateView

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s")

Precondition = Callable[[Any, GroundedAction], bool]


# =============================================================================
# Parameter slots
# =============================================================================

ValueType = Literal["str", "int", "float", "bool"]

_ADAPTERS: dict[str, TypeAdapter] = {
    "str": TypeAdapter(str),
    "int": TypeAdapter(int),
    "float": TypeAdapter(float),
    "bool": TypeAdapter(bool),
}


class ObjectParameter(BaseModel):
    """A parameter slot bound to the name of a state object.

    Attributes:
        name: Slot name, unique within its definition
        object_class: Class of object the slot accepts
        order_group: Slots sharing a group are interchangeable, so enumeration
            yields one ordering per set of bound objects. Defaults to the slot
            name (every slot in its own group).
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    object_class: str = Field(..., min_length=1)
    order_group: str | None = Field(default=None)

    @property
    def group(self) -> str:
        return self.order_group if self.order_group is not None else self.name


class ValueParameter(BaseModel):
    """A parameter slot bound to a scalar value.

    Tokens are parsed with pydantic's lax coercion for the declared type.
    Booleans render as ``true``/``false`` and floats with ``repr`` so that
    rendering and parsing are inverse.

    Attributes:
        name: Slot name, unique within its definition
        value_type: One of "str", "int", "float", "bool"
        choices: Allowed tokens; empty means any token of the right type
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    value_type: ValueType = Field(default="str")
    choices: tuple[str, ...] = Field(default=())

    @model_validator(mode="after")
    def validate_choices(self) -> "ValueParameter":
        rendered = [self.render(self._coerce(choice)) for choice in self.choices]
        if len(set(rendered)) != len(rendered):
            raise ValueError(f"Duplicate choices for parameter '{self.name}': {self.choices}")
        return self

    def _coerce(self, token: str) -> Any:
        if not isinstance(token, str) or not token or _WHITESPACE.search(token):
            raise ValueError(f"'{token}' is not a single token for parameter '{self.name}'")
        try:
            return _ADAPTERS[self.value_type].validate_python(token)
        except ValidationError:
            raise ValueError(f"'{token}' is not a valid {self.value_type} for parameter '{self.name}'") from None

    def parse(self, token: str) -> Any:
        """Parse a token into a value of this slot's type.

        Raises:
            ValueError: If the token is not a single word, does not coerce to
                the declared type, or is not one of the allowed choices.
        """
        value = self._coerce(token)
        if self.choices and self.render(value) not in {self.render(self._coerce(c)) for c in self.choices}:
            raise ValueError(f"'{token}' is not one of {list(self.choices)} for parameter '{self.name}'")
        return value

    def coerce_value(self, value: Any) -> Any:
        """Coerce a Python value (or token string) to this slot's type.

        Raises:
            ValueError: If the value does not coerce to the declared type or
                is not one of the allowed choices.
        """
        if isinstance(value, str):
            return self.parse(value)
        try:
            value = _ADAPTERS[self.value_type].validate_python(value)
        except ValidationError:
            raise ValueError(f"{value!r} is not a valid {self.value_type} for parameter '{self.name}'") from None
        return self.parse(self.render(value))

    def render(self, value: Any) -> str:
        if self.value_type == "bool":
            return "true" if value else "false"
        if self.value_type == "float":
            return repr(float(value))
        return str(value)

    def domain(self) -> list[Any]:
        """Return every value this slot can take.

        Raises:
            ValueError: If the slot has no finite domain (no choices and not bool).
        """
        if self.choices:
            return [self._coerce(c) for c in self.choices]
        if self.value_type == "bool":
            return [False, True]
        raise ValueError(f"Parameter '{self.name}' has no finite domain to enumerate")


def _check_unique_names(parameters: Iterable[ObjectParameter | ValueParameter]) -> None:
    names = [p.name for p in parameters]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise ValueError(f"Duplicate parameter names: {duplicates}")


# =============================================================================
# Definitions
# =============================================================================


class ActionDefinition(BaseModel, ABC):
    """Immutable schema of an action agents can take.

    Attributes:
        name: Action name, unique within a game's action set. Must be a single
            token since it appears in space-separated renderings.
        description: Human-readable description
        precondition: Predicate over (state, grounding). None means the
            action is always applicable.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    description: str = Field(default="")
    precondition: Precondition | None = Field(default=None, exclude=True)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if _WHITESPACE.search(v):
            raise ValueError(f"Action name cannot contain whitespace: {v!r}")
        return v

    @abstractmethod
    def is_parameterized(self) -> bool:
        """Whether groundings of this action carry parameters."""

    def parameters_are_objects(self) -> bool:
        """Whether the parameters of this action bind state objects."""
        return False

    def check_precondition(self, state: Any, grounding: GroundedAction) -> bool:
        """Evaluate the precondition for a grounding of this action."""
        if self.precondition is None:
            return True
        return bool(self.precondition(state, grounding))

    @abstractmethod
    def associated_grounding(self, agent_id: str) -> GroundedAction:
        """Return a new grounding for agent_id with no parameters assigned."""

    def ground(self, agent_id: str, *tokens: str) -> GroundedAction:
        """Return a grounding for agent_id with parameters parsed from tokens.

        Raises:
            ParseError: If tokens do not fit this action's parameters.
        """
        grounding = self.associated_grounding(agent_id)
        grounding.init_params_with_string_rep(tokens)
        return grounding

    @abstractmethod
    def enumerate_groundings(self, state: Any, agent_id: str) -> Iterator[GroundedAction]:
        """Lazily yield every applicable grounding of this action for agent_id.

        Each call returns a fresh iterator; each yielded grounding is a new,
        independently owned instance.
        """

    def _applicable(self, state: Any, groundings: Iterable[GroundedAction]) -> Iterator[GroundedAction]:
        count = 0
        for grounding in groundings:
            if self.check_precondition(state, grounding):
                count += 1
                yield grounding
        logger.debug(f"Enumerated {count} applicable groundings of '{self.name}'")


class SimpleActionDefinition(ActionDefinition):
    """Definition of an action without parameters."""

    def is_parameterized(self) -> bool:
        return False

    def associated_grounding(self, agent_id: str) -> SimpleGroundedAction:
        return SimpleGroundedAction(agent_id, self)

    def enumerate_groundings(self, state: Any, agent_id: str) -> Iterator[GroundedAction]:
        return self._applicable(state, [SimpleGroundedAction(agent_id, self)])


class ObjectParamActionDefinition(ActionDefinition):
    """Definition of an action whose parameters are state objects.

    Attributes:
        parameters: Ordered object parameter slots
    """

    parameters: tuple[ObjectParameter, ...] = Field(default=())

    @model_validator(mode="after")
    def validate_parameters(self) -> "ObjectParamActionDefinition":
        _check_unique_names(self.parameters)
        return self

    def is_parameterized(self) -> bool:
        return len(self.parameters) > 0

    def parameters_are_objects(self) -> bool:
        return True

    def associated_grounding(self, agent_id: str) -> ObjectParamGroundedAction:
        return ObjectParamGroundedAction(agent_id, self)

    def enumerate_groundings(self, state: StateView, agent_id: str) -> Iterator[GroundedAction]:
        """Yield applicable bindings of distinct objects to the slots.

        Within an order group only the ascending-by-name binding of each set
        of objects is produced.
        """
        candidates = [state.objects_of_class(p.object_class) for p in self.parameters]
        bindings = (
            binding
            for binding in itertools.product(*candidates)
            if len(set(binding)) == len(binding) and self._is_canonical(binding)
        )
        return self._applicable(state, (ObjectParamGroundedAction(agent_id, self, b) for b in bindings))

    def _is_canonical(self, binding: tuple[str, ...]) -> bool:
        last_in_group: dict[str, str] = {}
        for slot, obj in zip(self.parameters, binding):
            previous = last_in_group.get(slot.group)
            if previous is not None and obj < previous:
                return False
            last_in_group[slot.group] = obj
        return True


class ValueParamActionDefinition(ActionDefinition):
    """Definition of an action whose parameters are scalar values.

    Attributes:
        parameters: Ordered value parameter slots
    """

    parameters: tuple[ValueParameter, ...] = Field(default=())

    @model_validator(mode="after")
    def validate_parameters(self) -> "ValueParamActionDefinition":
        _check_unique_names(self.parameters)
        return self

    def is_parameterized(self) -> bool:
        return len(self.parameters) > 0

    def associated_grounding(self, agent_id: str) -> ValueParamGroundedAction:
        return ValueParamGroundedAction(agent_id, self)

    def enumerate_groundings(self, state: Any, agent_id: str) -> Iterator[GroundedAction]:
        """Yield applicable groundings over the product of every slot's domain.

        Raises:
            ValueError: If a slot has no finite domain.
        """
        domains = [p.domain() for p in self.parameters]
        return self._applicable(
            state,
            (ValueParamGroundedAction(agent_id, self, values) for values in itertools.product(*domains)),
        )
