"""
Logging of the reasoning behind play: chart lookups, chosen actions, rule
checks and round results, all on the "blackjack.decisions" logger.

Set ``BLACKJACK_DISABLE_LOGGING=1`` to silence it, e.g. for long simulations.
"""

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from .action import Action
from .hand import DealerHand, PlayerHand

LOGGER_NAME = "blackjack.decisions"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _disabled_by_environment() -> bool:
    return os.environ.get("BLACKJACK_DISABLE_LOGGING", "").lower() in ("1", "true", "yes")


@dataclass
class DecisionContext:
    """Snapshot of a hand at the moment an action was picked."""

    timestamp: datetime
    cards: List[str]
    total: int
    soft: bool
    pair: bool
    split_hand: bool
    dealer_up: str
    valid_actions: List[Action]
    chosen_action: Optional[Action] = None
    reason: Optional[str] = None

    @classmethod
    def from_hands(
        cls,
        hand: PlayerHand,
        dealer_hand: DealerHand,
        valid_actions: List[Action],
        chosen_action: Optional[Action] = None,
        strategy_reason: Optional[str] = None,
    ) -> "DecisionContext":
        value = hand.value
        return cls(
            timestamp=datetime.now(),
            cards=[str(card) for card in hand.cards],
            total=value.total,
            soft=value.soft,
            pair=hand.is_pair(),
            split_hand=hand.splits > 0,
            dealer_up=str(dealer_hand.cards[0]),
            valid_actions=list(valid_actions),
            chosen_action=chosen_action,
            reason=strategy_reason,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "cards": self.cards,
            "value": self.total,
            "soft": self.soft,
            "pair": self.pair,
            "split_hand": self.split_hand,
            "dealer_up": self.dealer_up,
            "valid_actions": [action.value for action in self.valid_actions],
            "chosen": self.chosen_action.value if self.chosen_action else None,
            "reason": self.reason,
        }


class DecisionLogger:
    """
    Writes decisions to its own logger, which prints to stderr unless the
    application configured a handler for it.

    At DEBUG level every decision is also kept in ``decision_history``.
    """

    def __init__(self, log_level: Optional[int] = None):
        self.logger = logging.getLogger(LOGGER_NAME)
        if _disabled_by_environment():
            self.logger.setLevel(logging.ERROR)
        elif log_level is not None:
            self.logger.setLevel(log_level)

        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            self.logger.addHandler(handler)
            self.logger.propagate = False

        self.decision_history: List[DecisionContext] = []

    def set_level(self, level):
        self.logger.setLevel(level)

    def log_decision_point(self, context: DecisionContext):
        if self.logger.isEnabledFor(logging.DEBUG):
            self.decision_history.append(context)
            self.logger.debug(
                "Decision: %s (%s%d) vs dealer %s, allowed: %s",
                context.cards,
                "soft " if context.soft else "",
                context.total,
                context.dealer_up,
                ", ".join(action.value for action in context.valid_actions),
            )
        if context.chosen_action is not None:
            self.logger.info(
                "Chose %s (%s)",
                context.chosen_action.value,
                context.reason or "no reason given",
            )

    def log_rule_evaluation(self, rule_name: str, result: bool, reason: str = ""):
        self.logger.debug(
            "Rule %r %s %s",
            rule_name,
            "allows" if result else "forbids",
            reason,
        )

    def log_strategy_lookup(
        self, hand_type: str, dealer_card: str, action: str, fallback_used: bool = False
    ):
        """Record a chart lookup; ``fallback_used`` marks a row missing from the chart."""
        self.logger.debug(
            "Chart %s vs %s -> %s%s",
            hand_type,
            dealer_card,
            action,
            " (fallback)" if fallback_used else "",
        )

    def log_round_result(self, total_bet: int, winnings: int, chips: int):
        self.logger.info(
            "Round settled: bet %d, returned %d, net %+d, chips %d",
            total_bet,
            winnings,
            winnings - total_bet,
            chips,
        )

    def clear(self):
        self.decision_history = []


decision_logger = DecisionLogger()
