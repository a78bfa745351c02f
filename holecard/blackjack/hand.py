"""
Blackjack hands: value evaluation, per-hand status and settlement.
"""

from enum import Enum, auto
from typing import Iterable, NamedTuple

from holecard.blackjack.constants import (
    BLACKJACK,
    DEALER_STAND_TOTAL,
    SOFT_ACE_BONUS,
    get_blackjack_value,
)
from holecard.blackjack.rules import BlackjackPayout
from holecard.common.card import Card, Rank
from holecard.common.hand import Hand


class HandValue(NamedTuple):
    """Total of a hand and whether an ace is still counted as 11."""

    total: int
    soft: bool

    @property
    def is_bust(self) -> bool:
        return self.total > BLACKJACK

    def __str__(self) -> str:
        return f"soft {self.total}" if self.soft else str(self.total)


def evaluate(cards: Iterable[Card]) -> HandValue:
    """
    Calculate the value of a sequence of cards.

    Aces count as 11 and are softened to 1, one at a time, only while the
    total would otherwise bust, so A, A, 9 is a soft 21.
    """
    total = 0
    soft_aces = 0
    for card in cards:
        total += get_blackjack_value(card.rank)
        if card.rank == Rank.ACE:
            soft_aces += 1

    while total > BLACKJACK and soft_aces:
        total -= SOFT_ACE_BONUS
        soft_aces -= 1

    return HandValue(total, soft_aces > 0)


class Status(Enum):
    """Lifecycle of a hand within a round."""

    IN_PLAY = auto()
    STOOD = auto()
    BUSTED = auto()
    BLACKJACK = auto()
    SURRENDERED = auto()
    DOUBLED = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


class PlayerHand(Hand):
    """
    A player's hand and the bet riding on it.

    ``splits`` is the depth of the split lineage: 0 for the dealt hand, and
    one more than the parent for each hand produced by splitting.
    """

    def __init__(self, card: Card, bet: int, splits: int = 0):
        super().__init__([card])
        self.bet = bet
        self.splits = splits
        self.status = Status.IN_PLAY
        self.doubled = False
        self.winnings = 0

    @property
    def value(self) -> HandValue:
        return evaluate(self.cards)

    @property
    def is_finished(self) -> bool:
        return self.status != Status.IN_PLAY

    def add_card(self, card: Card) -> None:
        """Add a card and update the hand's status."""
        super().add_card(card)
        value = self.value
        if value.is_bust:
            self.status = Status.BUSTED
        elif value.total == BLACKJACK and self.size == 2 and self.splits == 0:
            self.status = Status.BLACKJACK

    def is_pair(self) -> bool:
        """Two cards of the same blackjack value, so a King and a Queen pair up."""
        return self.size == 2 and get_blackjack_value(
            self.cards[0].rank
        ) == get_blackjack_value(self.cards[1].rank)

    def is_ace_pair(self) -> bool:
        return self.is_pair() and self.cards[0].rank == Rank.ACE

    def split(self) -> "PlayerHand":
        """
        Split the pair, keeping the first card in this hand.

        Returns:
            A new hand holding the second card, with the same bet.
        """
        if not self.is_pair():
            raise ValueError(f"Cannot split {self}: not a pair")
        card = self._cards.pop()
        self.splits += 1
        self.status = Status.IN_PLAY
        return PlayerHand(card, self.bet, self.splits)

    def double(self, card: Card) -> None:
        """Double the bet, take exactly one more card and finish the hand."""
        if self.size != 2:
            raise ValueError(f"Cannot double {self}: not two cards")
        self.bet *= 2
        self.doubled = True
        self.add_card(card)
        if self.status != Status.BUSTED:
            self.status = Status.DOUBLED

    def stand(self) -> None:
        self.status = Status.STOOD

    def surrender(self) -> None:
        self.status = Status.SURRENDERED

    def calculate_winnings(
        self, dealer_hand: "DealerHand", payout: BlackjackPayout
    ) -> int:
        """
        Chips returned to the player for this hand, stake included.

        A lost hand returns nothing, a push returns the bet and an even-money
        win returns twice the bet.
        """
        if self.status == Status.SURRENDERED:
            return self.bet // 2
        if self.status == Status.BUSTED:
            return 0
        if dealer_hand.status == Status.BUSTED:
            return self.bet * 2

        player_blackjack = self.status == Status.BLACKJACK
        dealer_blackjack = dealer_hand.status == Status.BLACKJACK
        if player_blackjack and dealer_blackjack:
            return self.bet
        if player_blackjack:
            return self.bet + payout.pay(self.bet)
        if dealer_blackjack:
            return 0

        player_total = self.value.total
        dealer_total = dealer_hand.value.total
        if player_total > dealer_total:
            return self.bet * 2
        if player_total == dealer_total:
            return self.bet
        return 0

    def __eq__(self, other):
        if isinstance(other, PlayerHand):
            return (
                self.cards == other.cards
                and self.bet == other.bet
                and self.splits == other.splits
                and self.status == other.status
                and self.winnings == other.winnings
            )
        return NotImplemented

    def __repr__(self) -> str:
        return (
            f"PlayerHand({self.cards!r}, bet={self.bet}, splits={self.splits}, "
            f"status={self.status.name})"
        )

    def __str__(self) -> str:
        return f"{super().__str__()} ({self.value})"


class DealerHand(Hand):
    """The dealer's hand. The first card is the up-card; the second is the hole card."""

    def __init__(self, card: Card, hit_soft_17: bool = False):
        super().__init__([card])
        self.hit_soft_17 = hit_soft_17
        self.status = Status.IN_PLAY

    @property
    def value(self) -> HandValue:
        return evaluate(self.cards)

    def showing(self) -> int:
        """Blackjack value of the up-card, 2 through 11."""
        return get_blackjack_value(self.cards[0].rank)

    def add_card(self, card: Card) -> None:
        """Add a card and apply the dealer's drawing rule."""
        super().add_card(card)
        value = self.value
        if value.is_bust:
            self.status = Status.BUSTED
        elif value.total == BLACKJACK and self.size == 2:
            self.status = Status.BLACKJACK
        elif value.total < DEALER_STAND_TOTAL or (
            value.total == DEALER_STAND_TOTAL and value.soft and self.hit_soft_17
        ):
            self.status = Status.IN_PLAY
        else:
            self.status = Status.STOOD

    def __eq__(self, other):
        if isinstance(other, DealerHand):
            return (
                self.cards == other.cards
                and self.status == other.status
                and self.hit_soft_17 == other.hit_soft_17
            )
        return NotImplemented

    def __repr__(self) -> str:
        return f"DealerHand({self.cards!r}, status={self.status.name})"

    def __str__(self) -> str:
        return f"{super().__str__()} ({self.value})"
