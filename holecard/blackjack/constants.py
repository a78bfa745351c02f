"""Blackjack-specific constants and value mappings."""

from holecard.common.card import Rank

BLACKJACK = 21
DEALER_STAND_TOTAL = 17
SOFT_ACE_BONUS = 10

BLACKJACK_VALUES = {
    Rank.TWO: 2,
    Rank.THREE: 3,
    Rank.FOUR: 4,
    Rank.FIVE: 5,
    Rank.SIX: 6,
    Rank.SEVEN: 7,
    Rank.EIGHT: 8,
    Rank.NINE: 9,
    Rank.TEN: 10,
    Rank.JACK: 10,
    Rank.QUEEN: 10,
    Rank.KING: 10,
    Rank.ACE: 11,  # Default ace value in blackjack
}


def get_blackjack_value(rank: Rank) -> int:
    """Get the blackjack value for a given rank, counting the ace as 11."""
    return BLACKJACK_VALUES[rank]
