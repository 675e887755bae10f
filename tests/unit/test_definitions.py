"""Tests for stochgame.models.definitions and stochgame.models.state."""

import pytest
from pydantic import ValidationError

from stochgame.errors import ParseError
from stochgame.models.definitions import (
    ObjectParamActionDefinition,
    ObjectParameter,
    SimpleActionDefinition,
    ValueParamActionDefinition,
    ValueParameter,
)
from stochgame.models.grounded import (
    ObjectParamGroundedAction,
    SimpleGroundedAction,
    ValueParamGroundedAction,
)
from stochgame.models.state import ObjectState, StateView


def _target_not_heavy(state, grounding):
    return not state.get(grounding.params[0], "heavy", False)


# =============================================================================
# Schema Validation
# =============================================================================


class TestDefinitionValidation:
    """Tests for validation of definitions and parameter slots."""

    def test_name_required_and_single_token(self):
        with pytest.raises(ValidationError):
            SimpleActionDefinition(name="")
        with pytest.raises(ValidationError):
            SimpleActionDefinition(name="hold position")

    def test_duplicate_parameter_names(self):
        with pytest.raises(ValidationError):
            ValueParamActionDefinition(
                name="move",
                parameters=(ValueParameter(name="d"), ValueParameter(name="d")),
            )
        with pytest.raises(ValidationError):
            ObjectParamActionDefinition(
                name="push",
                parameters=(
                    ObjectParameter(name="x", object_class="block"),
                    ObjectParameter(name="x", object_class="block"),
                ),
            )

    def test_choices_must_match_type(self):
        with pytest.raises(ValidationError):
            ValueParameter(name="n", value_type="int", choices=("one",))
        with pytest.raises(ValidationError):
            ValueParameter(name="d", choices=("north", "north"))
        # Distinct tokens that coerce to the same value are duplicates too
        with pytest.raises(ValidationError):
            ValueParameter(name="n", value_type="int", choices=("1", "01"))
        with pytest.raises(ValidationError):
            ValueParameter(name="flag", value_type="bool", choices=("true", "yes"))

    def test_definitions_are_frozen(self, move_action):
        with pytest.raises(ValidationError):
            move_action.name = "jump"

    def test_abstract_definition_cannot_be_instantiated(self):
        from stochgame.models.definitions import ActionDefinition

        with pytest.raises(TypeError):
            ActionDefinition(name="abstract")


# =============================================================================
# Flags and Grounding Helpers
# =============================================================================


class TestDefinitionFlags:
    """Tests for is_parameterized() and parameters_are_objects()."""

    def test_flags(self, noop_action, move_action):
        push = ObjectParamActionDefinition(
            name="push", parameters=(ObjectParameter(name="target", object_class="block"),)
        )
        assert not noop_action.is_parameterized()
        assert move_action.is_parameterized()
        assert push.is_parameterized()
        assert push.parameters_are_objects()
        assert not move_action.parameters_are_objects()
        assert not ValueParamActionDefinition(name="rest").is_parameterized()


class TestGround:
    """Tests for associated_grounding() and ground()."""

    def test_associated_grounding_variants(self, noop_action, move_action):
        push = ObjectParamActionDefinition(name="push")
        assert type(noop_action.associated_grounding("A")) is SimpleGroundedAction
        assert type(move_action.associated_grounding("A")) is ValueParamGroundedAction
        assert type(push.associated_grounding("A")) is ObjectParamGroundedAction
        assert move_action.associated_grounding("A").get_parameters_as_string() == []

    def test_ground_parses_tokens(self, noop_action, move_action):
        assert str(move_action.ground("A", "north")) == "A:move north"
        assert str(noop_action.ground("B")) == "B:noop"

    def test_ground_rejects_bad_tokens(self, move_action):
        with pytest.raises(ParseError):
            move_action.ground("A", "up")


# =============================================================================
# Enumeration
# =============================================================================


class TestSimpleEnumeration:
    """Tests for SimpleActionDefinition.enumerate_groundings."""

    def test_yields_single_grounding(self, noop_action):
        groundings = list(noop_action.enumerate_groundings(None, "A"))
        assert [str(g) for g in groundings] == ["A:noop"]

    def test_yields_nothing_when_not_applicable(self):
        never = SimpleActionDefinition(name="never", precondition=lambda s, g: False)
        assert list(never.enumerate_groundings(None, "A")) == []


class TestObjectEnumeration:
    """Tests for ObjectParamActionDefinition.enumerate_groundings."""

    def test_binds_distinct_objects(self, sample_object_state):
        push = ObjectParamActionDefinition(
            name="push",
            parameters=(
                ObjectParameter(name="target", object_class="block"),
                ObjectParameter(name="dest", object_class="block"),
            ),
        )
        tokens = [g.get_parameters_as_string() for g in push.enumerate_groundings(sample_object_state, "A")]
        assert len(tokens) == 6
        assert all(t[0] != t[1] for t in tokens)

    def test_order_group_yields_one_ordering(self, sample_object_state):
        stack = ObjectParamActionDefinition(
            name="pair",
            parameters=(
                ObjectParameter(name="first", object_class="block", order_group="blocks"),
                ObjectParameter(name="second", object_class="block", order_group="blocks"),
            ),
        )
        tokens = [g.get_parameters_as_string() for g in stack.enumerate_groundings(sample_object_state, "A")]
        assert tokens == [["b1", "b2"], ["b1", "b3"], ["b2", "b3"]]

    def test_filters_by_precondition(self, sample_object_state):
        push = ObjectParamActionDefinition(
            name="push",
            parameters=(
                ObjectParameter(name="target", object_class="block"),
                ObjectParameter(name="dest", object_class="block"),
            ),
            precondition=_target_not_heavy,
        )
        targets = {g.params[0] for g in push.enumerate_groundings(sample_object_state, "A")}
        assert targets == {"b1", "b3"}

    def test_missing_class_yields_nothing(self, sample_object_state):
        lift = ObjectParamActionDefinition(
            name="lift", parameters=(ObjectParameter(name="crate", object_class="crate"),)
        )
        assert list(lift.enumerate_groundings(sample_object_state, "A")) == []

    def test_mixed_classes(self, sample_object_state):
        tag = ObjectParamActionDefinition(
            name="tag",
            parameters=(
                ObjectParameter(name="other", object_class="agent"),
                ObjectParameter(name="block", object_class="block"),
            ),
        )
        groundings = list(tag.enumerate_groundings(sample_object_state, "A"))
        assert len(groundings) == 6
        assert str(groundings[0]) == "A:tag A b1"


class TestValueEnumeration:
    """Tests for ValueParamActionDefinition.enumerate_groundings."""

    def test_product_of_choices(self, move_action):
        tokens = [g.get_parameters_as_string() for g in move_action.enumerate_groundings(None, "A")]
        assert tokens == [["north"], ["south"], ["east"], ["west"]]

    def test_bool_domain_defaults(self):
        signal = ValueParamActionDefinition(
            name="signal",
            parameters=(
                ValueParameter(name="loud", value_type="bool"),
                ValueParameter(name="level", value_type="int", choices=("1", "2")),
            ),
        )
        tokens = [g.just_action_string() for g in signal.enumerate_groundings(None, "B")]
        assert tokens == ["signal false 1", "signal false 2", "signal true 1", "signal true 2"]

    def test_each_binding_enumerated_once(self):
        level = ValueParamActionDefinition(
            name="level",
            parameters=(ValueParameter(name="n", value_type="int", choices=("1", "2")),),
        )
        assert [g.just_action_string() for g in level.enumerate_groundings(None, "A")] == ["level 1", "level 2"]

    def test_unbounded_slot_cannot_enumerate(self):
        bid = ValueParamActionDefinition(
            name="bid", parameters=(ValueParameter(name="amount", value_type="int"),)
        )
        with pytest.raises(ValueError):
            bid.enumerate_groundings(None, "A")

    def test_each_call_is_fresh(self, move_action):
        first = list(move_action.enumerate_groundings(None, "A"))
        second = list(move_action.enumerate_groundings(None, "A"))
        assert first == second
        assert all(a is not b for a, b in zip(first, second))

    def test_groundings_are_independent(self, move_action):
        groundings = list(move_action.enumerate_groundings(None, "A"))
        groundings[0].init_params_with_string_rep(["west"])
        assert groundings[1].get_parameters_as_string() == ["south"]


# =============================================================================
# State
# =============================================================================


class TestObjectState:
    """Tests for the ObjectState state view."""

    def test_objects_of_class_sorted(self, sample_object_state):
        assert isinstance(sample_object_state, StateView)
        assert sample_object_state.objects_of_class("block") == ["b1", "b2", "b3"]
        assert sample_object_state.objects_of_class("agent") == ["A", "B"]

    def test_attribute_lookup(self, sample_object_state):
        assert sample_object_state.get("b2", "heavy") is True
        assert sample_object_state.get("A", "heavy", "unset") == "unset"

    def test_attributes_must_belong_to_objects(self):
        with pytest.raises(ValidationError):
            ObjectState(objects={"b1": "block"}, attributes={"ghost": {"heavy": True}})
