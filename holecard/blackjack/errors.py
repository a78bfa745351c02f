"""
Errors raised by the blackjack table.

A rejected transition raises a `TransitionError` carrying the state it was
given, unchanged, so the caller can report the problem and ask again.
"""

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from holecard.blackjack.state import GameState


class BetErrorReason(Enum):
    BET_TOO_LOW = "Bet too low"
    BET_TOO_HIGH = "Bet too high"
    CANT_AFFORD = "Can't afford bet"


class DoubleErrorReason(Enum):
    NOT_TWO_CARDS = "Not two cards"
    CANT_AFFORD = "Can't afford double down"
    DOUBLE_AFTER_SPLIT_NOT_ALLOWED = "Double after split not allowed"


class SplitErrorReason(Enum):
    NOT_PAIR = "Not a pair"
    CANT_AFFORD = "Can't afford split"
    MAX_SPLITS_REACHED = "Max splits reached"
    SPLIT_ACES_NOT_ALLOWED = "Split aces not allowed"


class SurrenderErrorReason(Enum):
    NOT_TWO_CARDS = "Not two cards"
    LATE_SURRENDER_NOT_ALLOWED = "Late surrender not allowed"


class ConfigurationError(ValueError):
    """Raised when a table cannot be built from the given configuration."""


class TransitionError(Exception):
    """Base class for rejected transitions. ``state`` is the unchanged state."""

    def __init__(self, state: "GameState", message: str):
        super().__init__(message)
        self.state = state


class WrongInputError(TransitionError):
    """The input is missing or is not the kind the state expects."""

    def __init__(self, state: "GameState"):
        super().__init__(state, "Wrong input")


class _ReasonedError(TransitionError):
    def __init__(self, state: "GameState", reason: Enum):
        super().__init__(state, reason.value)
        self.reason = reason


class BetError(_ReasonedError):
    """A bet or insurance bet was rejected."""


class DoubleError(_ReasonedError):
    """A double down was rejected."""


class SplitError(_ReasonedError):
    """A split was rejected."""


class SurrenderError(_ReasonedError):
    """A late surrender was rejected."""
