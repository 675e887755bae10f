"""Grounded agent actions for multi-agent stochastic games."""

from stochgame.errors import GroundingError, ParseError
from stochgame.models import (
    ActionDefinition,
    GroundedAction,
    JointAction,
    ObjectParamActionDefinition,
    ObjectParameter,
    ObjectParamGroundedAction,
    ObjectState,
    ParameterCodec,
    SimpleActionDefinition,
    SimpleGroundedAction,
    StateView,
    ValueParamActionDefinition,
    ValueParameter,
    ValueParamGroundedAction,
    enumerate_joint_actions,
)

__all__ = [
    "ActionDefinition",
    "GroundedAction",
    "GroundingError",
    "JointAction",
    "ObjectParamActionDefinition",
    "ObjectParameter",
    "ObjectParamGroundedAction",
    "ObjectState",
    "ParameterCodec",
    "ParseError",
    "SimpleActionDefinition",
    "SimpleGroundedAction",
    "StateView",
    "ValueParamActionDefinition",
    "ValueParameter",
    "ValueParamGroundedAction",
    "enumerate_joint_actions",
]
