"""Exceptions raised by stochgame."""

from collections.abc import Sequence


class GroundingError(Exception):
    """Base class for errors raised while grounding actions."""


class ParseError(GroundingError, ValueError):
    """Raised when a parameter token sequence does not fit an action's schema.

    The grounding that raised it keeps its previous parameter assignment, so
    callers may correct the tokens and retry.

    Attributes:
        action_name: Name of the action whose parameters failed to parse
        tokens: The rejected token sequence
        reason: Short description of what was wrong
    """

    def __init__(self, action_name: str, tokens: Sequence[str], reason: str):
        self.action_name = action_name
        self.tokens = list(tokens)
        self.reason = reason
        super().__init__(f"Cannot parse parameters {self.tokens!r} for action '{action_name}': {reason}")
