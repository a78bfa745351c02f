"""Defines the Action enum for the possible actions a player can take on a blackjack hand."""
from enum import Enum


class Action(Enum):
    """Enum for the possible actions a player can take on a blackjack hand."""

    STAND = "stand"
    HIT = "hit"
    DOUBLE = "double"
    SPLIT = "split"
    SURRENDER = "surrender"

    @property
    def shortcut(self) -> str:
        """Single-letter console shortcut for the action."""
        return _SHORTCUTS[self]

    @classmethod
    def parse(cls, text: str) -> "Action":
        """
        Parse an action from its name or console shortcut.

        Raises:
            ValueError: If the text names no action.
        """
        text = text.strip().lower()
        for action in cls:
            if text in (action.value, action.shortcut):
                return action
        raise ValueError(f"Unknown action: {text!r}")

    def __str__(self) -> str:
        return f"{self.value.capitalize()} ({self.shortcut})"


_SHORTCUTS = {
    Action.STAND: "s",
    Action.HIT: "h",
    Action.DOUBLE: "d",
    Action.SPLIT: "p",
    Action.SURRENDER: "u",
}
