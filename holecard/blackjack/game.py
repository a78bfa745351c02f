"""
The driver loop: moves a table from state to state, asking the strategy for
input whenever the table waits for it and reporting progress through an IO
interface.
"""

import logging
from typing import Optional

from holecard.blackjack.errors import TransitionError
from holecard.blackjack.state import (
    BettingState,
    CheckDealerHoleCardState,
    DealFirstSplitCardState,
    DealHoleCardState,
    DealSecondPlayerCardState,
    DealSecondSplitCardState,
    DoubleState,
    GameOverState,
    GameState,
    HitState,
    OfferEarlySurrenderState,
    OfferInsuranceState,
    PayoutState,
    PlayDealerTurnState,
    PlayPlayerTurnState,
    RevealHoleCardState,
    RoundOverState,
    ShuffleState,
    SplitState,
    StandState,
    SurrenderState,
)
from holecard.blackjack.strategy import Strategy
from holecard.blackjack.table import Table
from holecard.common.io_interface import DummyIOInterface, IOInterface

logger = logging.getLogger(__name__)


def describe(state: GameState) -> Optional[str]:
    """A line for the player about the state the table just reached."""
    match state:
        case DealSecondPlayerCardState(player_hand, dealer_hand):
            return f"Dealer shows {dealer_hand.cards[0]}."
        case DealHoleCardState(player_hand, _):
            return f"Your hand: {player_hand}"
        case OfferEarlySurrenderState(_, dealer_hand) | OfferInsuranceState(
            _, dealer_hand
        ):
            return f"Dealer shows {dealer_hand.cards[0]}."
        case CheckDealerHoleCardState():
            return "Dealer checks the hole card for blackjack."
        case PlayPlayerTurnState(turn, dealer_hand, _):
            return (
                f"Your hand: {turn.current_hand} "
                f"(bet {turn.current_hand.bet}) vs dealer {dealer_hand.cards[0]}"
            )
        case StandState():
            return "You stand."
        case HitState():
            return "You hit."
        case DoubleState():
            return "You double down."
        case SplitState():
            return "You split your hand."
        case DealFirstSplitCardState() | DealSecondSplitCardState():
            return None
        case SurrenderState():
            return "You surrender."
        case RevealHoleCardState(_, dealer_hand, _):
            return f"Dealer reveals: {dealer_hand}"
        case PlayDealerTurnState(_, dealer_hand, _):
            return f"Dealer has {dealer_hand}"
        case RoundOverState(player_hands, dealer_hand, _):
            hands = "; ".join(f"{hand} [{hand.status}]" for hand in player_hands)
            return f"Round over. Dealer: {dealer_hand} [{dealer_hand.status}]. You: {hands}"
        case PayoutState(total_bet, winnings):
            return f"You bet {total_bet} chips and get {winnings} chips back."
        case ShuffleState():
            return "The dealer shuffles the shoe."
        case GameOverState():
            return "You don't have enough chips left. Game over!"
    return None


class BlackjackGame:
    """
    Plays a table until the game is over or the strategy stops betting.

    Args:
        table: The table to play at.
        strategy: Supplies the input for states that wait for it.
        io_interface: Receives a message for each state reached.
        graph: Optional object with ``update(round_number, chips)``, called
            after each settled round.
    """

    def __init__(
        self,
        table: Table,
        strategy: Strategy,
        io_interface: Optional[IOInterface] = None,
        graph=None,
    ):
        self.table = table
        self.strategy = strategy
        self.io_interface = io_interface or DummyIOInterface()
        self.graph = graph
        self.state: GameState = BettingState()
        self._rounds_reported = 0

    def step(self) -> bool:
        """
        Advance the game by one transition.

        Returns:
            False once the game cannot go on: the game is over or the
            strategy declined to bet.
        """
        if isinstance(self.state, GameOverState):
            return False

        user_input = None
        if self.state.requires_input:
            user_input = self.strategy.decide(self.state, self.table)
            if user_input is None:
                logger.info("Player stopped after %d rounds", self.rounds_played)
                return False

        try:
            next_state = self.table.play(self.state, user_input)
        except TransitionError as exc:
            self.io_interface.output(str(exc))
            self.state = exc.state
            return True

        message = describe(next_state)
        if message:
            self.io_interface.output(message)
        self.state = next_state
        if (
            isinstance(next_state, (BettingState, GameOverState))
            and self.rounds_played > self._rounds_reported
        ):
            self.round_finished()
        return not isinstance(next_state, GameOverState)

    @property
    def rounds_played(self) -> int:
        return self.table.statistics.rounds_played

    def round_finished(self) -> None:
        self._rounds_reported = self.rounds_played
        if self.graph is not None:
            self.graph.update(self.rounds_played, self.table.chips)

    def play(self) -> GameState:
        """Play until the game is over or the strategy stops. Returns the final state."""
        while self.step():
            pass
        return self.state
