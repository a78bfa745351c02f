import logging
import random
from typing import Callable, List, Optional

from holecard.common.card import Card
from holecard.common.deck import Deck

logger = logging.getLogger(__name__)

MAX_DECKS = 255


class Shoe:
    def __init__(
        self,
        num_decks: int = 1,
        penetration: float = 0.0,
        rng: Optional[random.Random] = None,
        deck_factory: Optional[Callable[[], List[Card]]] = None,
    ):
        """
        Initialize a Shoe instance.

        :param num_decks: Number of decks to use in the shoe (1 to 255)
        :param penetration: Fraction of the shoe, between 0 and 1, that decides when the
                            shoe is due for a reshuffle (see ``needs_shuffle``)
        :param rng: Random source used for every shuffle. Pass a seeded
                    ``random.Random`` for replayable games.
        :param deck_factory: Optional callable that returns the cards of one deck
        """
        if not 1 <= num_decks <= MAX_DECKS:
            raise ValueError(f"Number of decks must be between 1 and {MAX_DECKS}")
        if not 0.0 <= penetration <= 1.0:
            raise ValueError("Penetration must be between 0 and 1")

        self.num_decks = num_decks
        self.penetration = penetration
        self.rng = rng or random.Random()
        self.deck_factory = deck_factory or (lambda: Deck().cards)
        self.cards: List[Card] = []
        self.next_card_index = 0

        self.initialize_shoe()

    @classmethod
    def stacked(
        cls,
        cards: List[Card],
        penetration: float = 0.0,
        rng: Optional[random.Random] = None,
    ) -> "Shoe":
        """
        Build a shoe that deals ``cards`` in the given order.

        The first card of the list is dealt first. Reshuffling a stacked shoe
        shuffles the same cards.
        """
        if not cards:
            raise ValueError("A stacked shoe needs at least one card")
        stacked_cards = list(cards)
        shoe = cls(1, penetration, rng, deck_factory=lambda: list(stacked_cards))
        shoe.cards = list(stacked_cards)
        shoe.next_card_index = 0
        return shoe

    def initialize_shoe(self):
        """Initialize the shoe with the specified number of decks and shuffle."""
        self.cards = []
        for _ in range(self.num_decks):
            self.cards.extend(self.deck_factory())
        self.shuffle()

    @property
    def total_cards(self) -> int:
        return len(self.cards)

    @property
    def reshuffle_point(self) -> float:
        return self.total_cards * (1 - self.penetration)

    def shuffle(self):
        """Shuffle all cards in the shoe and reset the next card index."""
        self.rng.shuffle(self.cards)
        self.next_card_index = 0
        logger.debug("Shuffled %s", self)

    def draw_card(self) -> Card:
        """
        Deal the next card from the shoe.

        The table reshuffles between rounds, so the shoe only runs dry in a
        round when it is too small for the penetration it was given. In that
        case the shoe is reshuffled before dealing.
        """
        if self.next_card_index >= self.total_cards:
            logger.warning(
                "Shoe ran out of cards mid-round (penetration=%s); reshuffling",
                self.penetration,
            )
            self.shuffle()

        card = self.cards[self.next_card_index]
        self.next_card_index += 1
        return card

    def needs_shuffle(self) -> bool:
        """
        Return whether the cursor has crossed the penetration threshold.

        A freshly shuffled shoe never needs another shuffle.
        """
        return self.next_card_index > 0 and self.next_card_index >= self.reshuffle_point

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining in the shoe."""
        return self.total_cards - self.next_card_index

    def get_penetration_percentage(self) -> float:
        """Return how far through the shoe we are, as a fraction."""
        return self.next_card_index / self.total_cards

    def __str__(self) -> str:
        return f"Shoe with {self.cards_remaining} cards remaining"

    def __repr__(self) -> str:
        return f"Shoe(num_decks={self.num_decks}, penetration={self.penetration})"
