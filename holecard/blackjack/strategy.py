"""
Players: the collaborators that supply input whenever the table waits for it.

`Strategy.decide` maps an input-bearing `GameState` to the `Input` the state
expects. `ConsoleStrategy` asks a person through an IO interface;
`BasicStrategy` plays a fixed number of rounds by the basic strategy chart.
"""

import csv
import os
from abc import ABC, abstractmethod
from typing import List, Optional

from holecard.blackjack.action import Action
from holecard.blackjack.constants import get_blackjack_value
from holecard.blackjack.decision_logger import DecisionContext, decision_logger
from holecard.blackjack.hand import DealerHand, PlayerHand
from holecard.blackjack.state import (
    Bet,
    BettingState,
    Choice,
    GameState,
    Input,
    OfferEarlySurrenderState,
    OfferInsuranceState,
    Play,
    PlayPlayerTurnState,
)
from holecard.blackjack.table import Table
from holecard.common.card import Rank
from holecard.common.io_interface import MAX_ATTEMPTS, IOInterface


def legal_actions(table: Table, hand: PlayerHand) -> List[Action]:
    """The actions the table accepts on ``hand`` right now."""
    actions = [Action.HIT, Action.STAND]
    if table.check_double_allowed(hand) is None:
        actions.append(Action.DOUBLE)
    if table.check_split_allowed(hand) is None:
        actions.append(Action.SPLIT)
    if table.check_surrender_allowed(hand) is None:
        actions.append(Action.SURRENDER)
    return actions


class Strategy(ABC):
    def decide(self, state: GameState, table: Table) -> Optional[Input]:
        """
        Produce the input ``state`` waits for.

        Returns:
            The input, or None when the player wants to stop at the betting state.
        """
        match state:
            case BettingState():
                bet = self.get_bet_amount(table)
                return Bet(bet) if bet is not None else None
            case OfferEarlySurrenderState(player_hand, dealer_hand):
                return Choice(
                    self.decide_early_surrender(player_hand, dealer_hand, table)
                )
            case OfferInsuranceState(player_hand, dealer_hand):
                return Bet(self.decide_insurance(player_hand, dealer_hand, table))
            case PlayPlayerTurnState(turn, dealer_hand, _):
                return Play(self.decide_action(turn.current_hand, dealer_hand, table))
        raise ValueError(f"{state} does not wait for input")

    @abstractmethod
    def get_bet_amount(self, table: Table) -> Optional[int]:
        """Bet for the next round, or None to stop playing."""
        pass

    @abstractmethod
    def decide_early_surrender(
        self, player_hand: PlayerHand, dealer_hand: DealerHand, table: Table
    ) -> bool:
        pass

    @abstractmethod
    def decide_insurance(
        self, player_hand: PlayerHand, dealer_hand: DealerHand, table: Table
    ) -> int:
        """Insurance bet to place; 0 declines."""
        pass

    @abstractmethod
    def decide_action(
        self, hand: PlayerHand, dealer_hand: DealerHand, table: Table
    ) -> Action:
        pass


class ConsoleStrategy(Strategy):
    """Asks a person for every decision through an IO interface."""

    def __init__(self, io_interface: IOInterface):
        self.io_interface = io_interface

    def get_bet_amount(self, table: Table) -> Optional[int]:
        prompt = (
            f"You have {table.chips} chips. How many chips would you like to bet? "
            'Type "stop" to quit.\n'
        )
        for _ in range(MAX_ATTEMPTS):
            response = self.io_interface.input(prompt).strip()
            if response == "stop":
                return None
            try:
                return int(response)
            except ValueError:
                self.io_interface.output("Please enter a number!")
        raise RuntimeError("Too many invalid responses. Operation aborted.")

    def decide_early_surrender(
        self, player_hand: PlayerHand, dealer_hand: DealerHand, table: Table
    ) -> bool:
        return self.io_interface.confirm(
            "Would you like to surrender before the dealer checks for blackjack?"
        )

    def decide_insurance(
        self, player_hand: PlayerHand, dealer_hand: DealerHand, table: Table
    ) -> int:
        return self.io_interface.check_numeric_response(
            f"Would you like to place an insurance bet of up to {player_hand.bet // 2} "
            "chips? Enter your bet or 0 to decline.\n"
        )

    def decide_action(
        self, hand: PlayerHand, dealer_hand: DealerHand, table: Table
    ) -> Action:
        valid_actions = legal_actions(table, hand)
        action = self.io_interface.get_player_action(valid_actions)
        decision_logger.log_decision_point(
            DecisionContext.from_hands(
                hand, dealer_hand, valid_actions, action, "player choice"
            )
        )
        return action


class BasicStrategy(Strategy):
    """
    Plays ``rounds`` rounds at a flat ``bet`` by the basic strategy chart.

    Only legal actions are ever submitted, so it can drive a table in
    simulation mode. Insurance and early surrender are always declined.
    """

    def __init__(self, rounds: int, bet: int, strategy_file=None):
        if strategy_file is None:
            strategy_file = os.path.join(
                os.path.dirname(__file__), "basic_strategy.csv"
            )
        self.strategy = self._load_strategy(strategy_file)
        self.dealer_indexes = {
            "2": 0,
            "3": 1,
            "4": 2,
            "5": 3,
            "6": 4,
            "7": 5,
            "8": 6,
            "9": 7,
            "10": 8,
            "A": 9,
        }
        self.rounds_left = rounds
        self.bet = bet

    def _load_strategy(self, strategy_file):
        strategy = {}
        with open(strategy_file, "r", encoding="utf-8") as f:
            reader = csv.reader(f)
            _ = next(reader)  # Skip header row
            for row in reader:
                hand_type = row[0]
                actions = [action.strip() for action in row[1:]]  # Strip whitespace
                strategy[hand_type] = actions
        return strategy

    def _get_pair_type(self, hand: PlayerHand) -> str:
        rank = hand.cards[0].rank
        if rank == Rank.ACE:
            return "PairA"
        return f"Pair{get_blackjack_value(rank)}"

    def _get_hand_type(self, hand: PlayerHand) -> str:
        value = hand.value
        if value.soft:
            return f"Soft{value.total}"
        return f"Hard{value.total}"

    def _get_dealer_card(self, dealer_hand: DealerHand) -> str:
        rank = dealer_hand.cards[0].rank
        if rank == Rank.ACE:
            return "A"
        return str(get_blackjack_value(rank))

    def _get_action_from_strategy(self, hand_type: str, dealer_card: str) -> str:
        actions = self.strategy.get(hand_type)
        if not actions:
            decision_logger.log_strategy_lookup(hand_type, dealer_card, "H", True)
            return "H"  # Default to Hit if hand type not found
        action = actions[self.dealer_indexes[dealer_card]]
        decision_logger.log_strategy_lookup(hand_type, dealer_card, action)
        return action

    def _get_valid_action(self, symbol: str, valid_actions: List[Action]) -> Action:
        if symbol == "S":
            return Action.STAND
        if symbol in ("D", "DS"):
            if Action.DOUBLE in valid_actions:
                return Action.DOUBLE
            return Action.STAND if symbol == "DS" else Action.HIT
        if symbol == "P" and Action.SPLIT in valid_actions:
            return Action.SPLIT
        if symbol == "R" and Action.SURRENDER in valid_actions:
            return Action.SURRENDER
        return Action.HIT

    def get_bet_amount(self, table: Table) -> Optional[int]:
        if self.rounds_left <= 0:
            return None
        self.rounds_left -= 1
        bet = max(self.bet, table.rules.minimum_bet)
        if table.rules.max_bet is not None:
            bet = min(bet, table.rules.max_bet)
        return min(bet, table.chips)

    def decide_early_surrender(
        self, player_hand: PlayerHand, dealer_hand: DealerHand, table: Table
    ) -> bool:
        return False

    def decide_insurance(
        self, player_hand: PlayerHand, dealer_hand: DealerHand, table: Table
    ) -> int:
        """Basic strategy does not recommend taking insurance."""
        return 0

    def decide_action(
        self, hand: PlayerHand, dealer_hand: DealerHand, table: Table
    ) -> Action:
        valid_actions = legal_actions(table, hand)
        dealer_card = self._get_dealer_card(dealer_hand)

        symbol = None
        if Action.SPLIT in valid_actions:
            pair_symbol = self._get_action_from_strategy(
                self._get_pair_type(hand), dealer_card
            )
            if pair_symbol == "P":
                symbol = pair_symbol
        if symbol is None:
            hand_type = self._get_hand_type(hand)
            symbol = self._get_action_from_strategy(hand_type, dealer_card)

        action = self._get_valid_action(symbol, valid_actions)
        decision_logger.log_decision_point(
            DecisionContext.from_hands(
                hand, dealer_hand, valid_actions, action, f"chart says {symbol}"
            )
        )
        return action
