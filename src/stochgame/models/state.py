"""State views consumed by action definitions.

Game state belongs to the simulator. Definitions that bind object parameters
only need to list the objects of a class, so they depend on the StateView
protocol. ObjectState is a small concrete state for scripted games and tests.
"""

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, Field, model_validator


@runtime_checkable
class StateView(Protocol):
    """Read-only view of the objects present in a game state."""

    def objects_of_class(self, object_class: str) -> Sequence[str]:
        """Return the names of all objects of the given class, in a stable order."""
        ...


class ObjectState(BaseModel):
    """Game state made of named, classed objects with free-form attributes.

    Attributes:
        objects: Object name -> object class name
        attributes: Object name -> attribute name -> value
    """

    objects: dict[str, str] = Field(default_factory=dict)
    attributes: dict[str, dict[str, Any]] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_attribute_owners(self) -> "ObjectState":
        unknown = set(self.attributes) - set(self.objects)
        if unknown:
            raise ValueError(f"Attributes given for unknown objects: {sorted(unknown)}")
        return self

    def objects_of_class(self, object_class: str) -> list[str]:
        return sorted(name for name, cls in self.objects.items() if cls == object_class)

    def get(self, object_name: str, attribute: str, default: Any = None) -> Any:
        """Look up an attribute of an object, returning default if unset."""
        return self.attributes.get(object_name, {}).get(attribute, default)
