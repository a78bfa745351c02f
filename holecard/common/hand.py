"""
Card holders shared by the games.

`AbstractHand` keeps cards in the order they were dealt; `Hand` adds
comparison and display. Game-specific hands subclass `Hand`.
"""
from abc import ABC
from typing import Iterable, List, Optional

from holecard.common.card import Card


class AbstractHand(ABC):
    """Cards held by one participant, in deal order."""

    def __init__(self, cards: Optional[Iterable[Card]] = None):
        self._cards: List[Card] = list(cards) if cards is not None else []

    @property
    def cards(self) -> List[Card]:
        return self._cards

    @property
    def size(self) -> int:
        return len(self._cards)

    def add_card(self, card: Card) -> None:
        self._cards.append(card)

    def remove_card(self, card: Card) -> None:
        """
        Take ``card`` out of the hand.

        Raises:
            ValueError: If the hand does not hold the card.
        """
        if card not in self._cards:
            raise ValueError(f"Card {card} not found in hand.")
        self._cards.remove(card)


class Hand(AbstractHand):
    def __eq__(self, other):
        if type(other) is type(self):
            return self.cards == other.cards
        return NotImplemented

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.cards!r})"

    def __str__(self) -> str:
        """Cards joined by commas, e.g. "A of ♠, 9 of ♥"."""
        return ", ".join(str(card) for card in self.cards)
