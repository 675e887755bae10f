"""stochgame models.

This module exports action definitions, grounded actions, joint actions and
the state views definitions enumerate over.
"""

from .definitions import (
    ActionDefinition,
    ObjectParamActionDefinition,
    ObjectParameter,
    SimpleActionDefinition,
    ValueParamActionDefinition,
    ValueParameter,
)
from .grounded import (
    GroundedAction,
    ObjectParamGroundedAction,
    ParameterCodec,
    SimpleGroundedAction,
    ValueParamGroundedAction,
)
from .joint import JointAction, enumerate_joint_actions
from .state import ObjectState, StateView

__all__ = [
    # Definitions
    "ActionDefinition",
    "SimpleActionDefinition",
    "ObjectParamActionDefinition",
    "ValueParamActionDefinition",
    "ObjectParameter",
    "ValueParameter",
    # Grounded actions
    "GroundedAction",
    "ParameterCodec",
    "SimpleGroundedAction",
    "ObjectParamGroundedAction",
    "ValueParamGroundedAction",
    # Joint actions
    "JointAction",
    "enumerate_joint_actions",
    # State
    "ObjectState",
    "StateView",
]
