"""
The states of a blackjack round and the inputs that drive it.

Each state carries exactly what is needed to resume the round from that
point. A round runs:

BettingState -> DealFirstPlayerCardState -> DealFirstDealerCardState ->
DealSecondPlayerCardState -> DealHoleCardState ->
[OfferEarlySurrenderState] -> [OfferInsuranceState] -> [CheckDealerHoleCardState] ->
PlayPlayerTurnState <-> StandState / HitState / DoubleState / SplitState
(DealFirstSplitCardState, DealSecondSplitCardState) / SurrenderState ->
RevealHoleCardState -> [PlayDealerTurnState ...] -> RoundOverState ->
PayoutState -> [ShuffleState] -> BettingState, or GameOverState.

Only BettingState, OfferEarlySurrenderState, OfferInsuranceState and
PlayPlayerTurnState wait for input; the table advances every other state on
its own.
"""

from dataclasses import dataclass
from typing import ClassVar, List

from holecard.blackjack.action import Action
from holecard.blackjack.hand import DealerHand, PlayerHand
from holecard.blackjack.turn import PlayerTurn


@dataclass(frozen=True)
class Bet:
    """A bet, or an insurance bet (0 declines insurance)."""

    amount: int


@dataclass(frozen=True)
class Choice:
    """A yes/no answer, used for the early surrender offer."""

    accept: bool


@dataclass(frozen=True)
class Play:
    """An action on the current hand."""

    action: Action


Input = Bet | Choice | Play


class GameState:
    """
    Base class for game states.
    """

    requires_input: ClassVar[bool] = False

    def __str__(self) -> str:
        return self.__class__.__name__


@dataclass
class BettingState(GameState):
    requires_input: ClassVar[bool] = True


@dataclass
class DealFirstPlayerCardState(GameState):
    bet: int


@dataclass
class DealFirstDealerCardState(GameState):
    player_hand: PlayerHand


@dataclass
class DealSecondPlayerCardState(GameState):
    player_hand: PlayerHand
    dealer_hand: DealerHand


@dataclass
class DealHoleCardState(GameState):
    player_hand: PlayerHand
    dealer_hand: DealerHand


@dataclass
class OfferEarlySurrenderState(GameState):
    player_hand: PlayerHand
    dealer_hand: DealerHand
    requires_input: ClassVar[bool] = True


@dataclass
class OfferInsuranceState(GameState):
    player_hand: PlayerHand
    dealer_hand: DealerHand
    requires_input: ClassVar[bool] = True

    @property
    def max_insurance(self) -> int:
        return self.player_hand.bet // 2


@dataclass
class CheckDealerHoleCardState(GameState):
    player_hand: PlayerHand
    dealer_hand: DealerHand
    insurance_bet: int


@dataclass
class _TurnState(GameState):
    turn: PlayerTurn
    dealer_hand: DealerHand
    insurance_bet: int


@dataclass
class PlayPlayerTurnState(_TurnState):
    requires_input: ClassVar[bool] = True


@dataclass
class StandState(_TurnState):
    pass


@dataclass
class HitState(_TurnState):
    pass


@dataclass
class DoubleState(_TurnState):
    pass


@dataclass
class SplitState(_TurnState):
    pass


@dataclass
class SurrenderState(_TurnState):
    pass


@dataclass
class DealFirstSplitCardState(GameState):
    turn: PlayerTurn
    new_hand: PlayerHand
    dealer_hand: DealerHand
    insurance_bet: int


@dataclass
class DealSecondSplitCardState(GameState):
    turn: PlayerTurn
    new_hand: PlayerHand
    dealer_hand: DealerHand
    insurance_bet: int


@dataclass
class _FinishedHandsState(GameState):
    player_hands: List[PlayerHand]
    dealer_hand: DealerHand
    insurance_bet: int


@dataclass
class RevealHoleCardState(_FinishedHandsState):
    pass


@dataclass
class PlayDealerTurnState(_FinishedHandsState):
    pass


@dataclass
class RoundOverState(_FinishedHandsState):
    pass


@dataclass
class PayoutState(GameState):
    total_bet: int
    winnings: int


@dataclass
class ShuffleState(GameState):
    pass


@dataclass
class GameOverState(GameState):
    pass
