"""Shared pytest fixtures and markers for all tests."""

import pytest


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture
def move_action():
    """Provide a 'move' definition with one direction parameter."""
    from stochgame.models.definitions import ValueParamActionDefinition, ValueParameter
    return ValueParamActionDefinition(
        name="move",
        parameters=(ValueParameter(name="direction", choices=("north", "south", "east", "west")),),
    )


@pytest.fixture
def noop_action():
    """Provide an unparameterized 'noop' definition."""
    from stochgame.models.definitions import SimpleActionDefinition
    return SimpleActionDefinition(name="noop")


@pytest.fixture
def sample_object_state():
    """Provide a state with two agents and three blocks."""
    from stochgame.models.state import ObjectState
    return ObjectState(
        objects={
            "A": "agent",
            "B": "agent",
            "b1": "block",
            "b2": "block",
            "b3": "block",
        },
        attributes={
            "b1": {"heavy": False},
            "b2": {"heavy": True},
            "b3": {"heavy": False},
        },
    )
