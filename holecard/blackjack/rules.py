from dataclasses import asdict, dataclass
from enum import Enum
from typing import Optional


class BlackjackPayout(Enum):
    """Ratio paid on a natural blackjack, as (numerator, denominator)."""

    THREE_TO_TWO = (3, 2)
    SIX_TO_FIVE = (6, 5)

    def pay(self, bet: int) -> int:
        """Profit won on ``bet`` at this ratio, rounded down to whole chips."""
        numerator, denominator = self.value
        return bet * numerator // denominator

    def __str__(self) -> str:
        return "{}:{}".format(*self.value)


@dataclass(frozen=True)
class Rules:
    """
    Table rules, fixed for the lifetime of a table.

    Attributes:
        min_bet: Smallest accepted bet. ``None`` means one chip.
        max_bet: Largest accepted bet. ``None`` means no limit.
        blackjack_payout: Ratio paid on a natural blackjack.
        dealer_hit_soft_17: Whether the dealer hits a soft 17.
        offer_early_surrender: Whether surrender is offered before the hole-card check.
        offer_late_surrender: Whether surrender is allowed during the player's turn.
        offer_insurance: Whether insurance is offered against a dealer ace.
        split_aces: Whether a pair of aces may be split.
        double_after_split: Whether a hand produced by a split may be doubled.
        max_splits: Cap on the split lineage of a hand. ``None`` means no cap.
    """

    min_bet: Optional[int] = None
    max_bet: Optional[int] = None
    blackjack_payout: BlackjackPayout = BlackjackPayout.THREE_TO_TWO
    dealer_hit_soft_17: bool = False
    offer_early_surrender: bool = False
    offer_late_surrender: bool = False
    offer_insurance: bool = False
    split_aces: bool = True
    double_after_split: bool = True
    max_splits: Optional[int] = None

    @property
    def minimum_bet(self) -> int:
        """The smallest bet the table accepts."""
        return self.min_bet if self.min_bet is not None else 1

    def can_keep_playing(self, chips: int) -> bool:
        """Whether a bankroll of ``chips`` can still place a legal bet."""
        if self.min_bet is None:
            return chips > 0
        return chips >= self.min_bet

    def to_dict(self) -> dict:
        """Convert rules to a dictionary for serialization."""
        rules = asdict(self)
        rules["blackjack_payout"] = str(self.blackjack_payout)
        return rules
