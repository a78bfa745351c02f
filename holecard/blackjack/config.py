"""
Table configuration, as given on the command line.

`TableConfig.validate` rejects configurations a table cannot be built from:
a bankroll too small for the minimum bet, a maximum bet below the minimum,
or a deck count or penetration out of range.
"""

import random
from dataclasses import asdict, dataclass
from typing import Optional

from holecard.blackjack.errors import ConfigurationError
from holecard.blackjack.rules import BlackjackPayout, Rules
from holecard.blackjack.table import Table
from holecard.common.shoe import MAX_DECKS, Shoe


@dataclass
class TableConfig:
    decks: int = 1
    penetration: float = 0.0
    soft_17_hit: bool = False
    six_to_five: bool = False
    early_surrender: bool = False
    late_surrender: bool = False
    split_aces: bool = True
    double_after_split: bool = True
    max_splits: Optional[int] = None
    insurance: bool = False
    chips: int = 1000
    max_bet: Optional[int] = None
    min_bet: Optional[int] = None
    simulate: Optional[int] = None
    seed: Optional[int] = None

    def validate(self) -> "TableConfig":
        if not 1 <= self.decks <= MAX_DECKS:
            raise ConfigurationError(
                f"Number of decks must be between 1 and {MAX_DECKS}, got {self.decks}"
            )
        if not 0.0 <= self.penetration <= 1.0:
            raise ConfigurationError(
                f"{self.penetration} is not a valid penetration between 0 and 1"
            )
        if self.max_splits is not None and self.max_splits < 0:
            raise ConfigurationError("Max splits cannot be negative!")
        if self.chips < (self.min_bet if self.min_bet is not None else 1):
            raise ConfigurationError("You don't have enough chips to play!")
        if (
            self.max_bet is not None
            and self.min_bet is not None
            and self.max_bet < self.min_bet
        ):
            raise ConfigurationError("Max bet cannot be less than min bet!")
        if self.simulate is not None and self.simulate < 0:
            raise ConfigurationError("The number of simulated rounds cannot be negative!")
        return self

    @property
    def is_simulation(self) -> bool:
        return self.simulate is not None

    def to_rules(self) -> Rules:
        return Rules(
            min_bet=self.min_bet,
            max_bet=self.max_bet,
            blackjack_payout=(
                BlackjackPayout.SIX_TO_FIVE
                if self.six_to_five
                else BlackjackPayout.THREE_TO_TWO
            ),
            dealer_hit_soft_17=self.soft_17_hit,
            offer_early_surrender=self.early_surrender,
            offer_late_surrender=self.late_surrender,
            offer_insurance=self.insurance,
            split_aces=self.split_aces,
            double_after_split=self.double_after_split,
            max_splits=self.max_splits,
        )

    def build_table(self) -> Table:
        """Validate the configuration and build a table from it."""
        self.validate()
        shoe = Shoe(self.decks, self.penetration, random.Random(self.seed))
        return Table(self.chips, shoe, self.to_rules(), simulation=self.is_simulation)

    def to_dict(self) -> dict:
        return asdict(self)
