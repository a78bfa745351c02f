"""
A standard 52-card deck. Shoes are filled from one or more of these.

>>> Deck().size
52
"""

import random
from typing import List, Optional

from holecard.common.card import Card, Rank, Suit

FULL_DECK = tuple(Card(suit, rank) for suit in Suit for rank in Rank)


class Deck:
    """Cards in a list; dealing takes from the end."""

    def __init__(self, cards: Optional[List[Card]] = None):
        """
        :param cards: the cards to start with, copied. Defaults to a full
                      deck in suit order.
        """
        self.cards: List[Card] = list(FULL_DECK if cards is None else cards)

    def shuffle(self, rng: Optional[random.Random] = None) -> "Deck":
        """Shuffle in place with ``rng`` (the module-level generator if omitted)."""
        (rng or random).shuffle(self.cards)
        return self

    def deal(self) -> Card:
        return self.cards.pop()

    @property
    def size(self) -> int:
        return len(self.cards)

    def is_empty(self) -> bool:
        return not self.cards

    def reset(self):
        """Put every card back, unshuffled."""
        self.cards = list(FULL_DECK)

    def __repr__(self) -> str:
        return f"Deck({self.cards!r})"

    def __str__(self) -> str:
        return f"Deck of {self.size} cards"
