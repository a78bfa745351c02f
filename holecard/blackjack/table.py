"""
The blackjack table: chips, shoe, rules and the round state machine.

`Table.play` is the single entry point. It takes the current `GameState`
and, for the states waiting on the player, an input, and returns the next
state. Invalid input raises a `TransitionError` holding the unchanged state.

In simulation mode the table trusts its input, skips validation and runs
through every state that needs no input, so each call returns the next
decision point (or `GameOverState`).
"""

import logging
from typing import List, Optional

from holecard.blackjack.action import Action
from holecard.blackjack.decision_logger import decision_logger
from holecard.blackjack.errors import (
    BetError,
    BetErrorReason,
    DoubleError,
    DoubleErrorReason,
    SplitError,
    SplitErrorReason,
    SurrenderError,
    SurrenderErrorReason,
    WrongInputError,
)
from holecard.blackjack.hand import DealerHand, PlayerHand, Status
from holecard.blackjack.rules import Rules
from holecard.blackjack.state import (
    Bet,
    BettingState,
    CheckDealerHoleCardState,
    Choice,
    DealFirstDealerCardState,
    DealFirstPlayerCardState,
    DealFirstSplitCardState,
    DealHoleCardState,
    DealSecondPlayerCardState,
    DealSecondSplitCardState,
    DoubleState,
    GameOverState,
    GameState,
    HitState,
    Input,
    OfferEarlySurrenderState,
    OfferInsuranceState,
    PayoutState,
    Play,
    PlayDealerTurnState,
    PlayPlayerTurnState,
    RevealHoleCardState,
    RoundOverState,
    ShuffleState,
    SplitState,
    StandState,
    SurrenderState,
)
from holecard.blackjack.stats import Statistics
from holecard.blackjack.turn import PlayerTurn
from holecard.common.shoe import Shoe

logger = logging.getLogger(__name__)

TEN_VALUE = 10
ACE_VALUE = 11


class Table:
    """
    The game table. Holds the player's chips, the shoe, the rules and the
    statistics of the rounds played.
    """

    def __init__(
        self,
        chips: int,
        shoe: Shoe,
        rules: Optional[Rules] = None,
        simulation: bool = False,
    ):
        self.chips = chips
        self.shoe = shoe
        self.rules = rules or Rules()
        self.statistics = Statistics()
        self.simulation = simulation

    def play(self, state: GameState, input: Optional[Input] = None) -> GameState:
        """
        Play the game from the given state and input.

        Returns:
            The next state of the game.

        Raises:
            TransitionError: If the game cannot progress with this input. The
                error's ``state`` is the state that was passed in.
        """
        next_state = self._advance(self._step(state, input))
        logger.debug("%s -> %s (chips=%d)", state, next_state, self.chips)
        return next_state

    def _advance(self, state: GameState) -> GameState:
        while (
            self.simulation
            and not state.requires_input
            and not isinstance(state, GameOverState)
        ):
            state = self._step(state, None)
        return state

    def _step(self, state: GameState, input: Optional[Input]) -> GameState:
        match state:
            case BettingState():
                if not isinstance(input, Bet):
                    raise WrongInputError(state)
                return self.bet(state, input.amount)
            case DealFirstPlayerCardState(bet):
                return self.deal_first_player_card(bet)
            case DealFirstDealerCardState(player_hand):
                return self.deal_first_dealer_card(player_hand)
            case DealSecondPlayerCardState(player_hand, dealer_hand):
                return self.deal_second_player_card(player_hand, dealer_hand)
            case DealHoleCardState(player_hand, dealer_hand):
                return self.deal_hole_card(player_hand, dealer_hand)
            case OfferEarlySurrenderState(player_hand, dealer_hand):
                if not isinstance(input, Choice):
                    raise WrongInputError(state)
                return self.choose_early_surrender(
                    player_hand, dealer_hand, input.accept
                )
            case OfferInsuranceState():
                if not isinstance(input, Bet):
                    raise WrongInputError(state)
                return self.bet_insurance(state, input.amount)
            case CheckDealerHoleCardState(player_hand, dealer_hand, insurance_bet):
                return self.check_dealer_hole_card(
                    player_hand, dealer_hand, insurance_bet
                )
            case PlayPlayerTurnState():
                if not isinstance(input, Play):
                    raise WrongInputError(state)
                return self.play_player_turn(state, input.action)
            case StandState(turn, dealer_hand, insurance_bet):
                return self.stand(turn, dealer_hand, insurance_bet)
            case HitState(turn, dealer_hand, insurance_bet):
                return self.hit(turn, dealer_hand, insurance_bet)
            case DoubleState(turn, dealer_hand, insurance_bet):
                return self.double(turn, dealer_hand, insurance_bet)
            case SplitState(turn, dealer_hand, insurance_bet):
                return self.split(turn, dealer_hand, insurance_bet)
            case DealFirstSplitCardState(turn, new_hand, dealer_hand, insurance_bet):
                return self.deal_first_split_card(
                    turn, new_hand, dealer_hand, insurance_bet
                )
            case DealSecondSplitCardState(turn, new_hand, dealer_hand, insurance_bet):
                return self.deal_second_split_card(
                    turn, new_hand, dealer_hand, insurance_bet
                )
            case SurrenderState(turn, dealer_hand, insurance_bet):
                return self.late_surrender(turn, dealer_hand, insurance_bet)
            case RevealHoleCardState(player_hands, dealer_hand, insurance_bet):
                return self.play_dealer_turn_or_end_round(
                    player_hands, dealer_hand, insurance_bet
                )
            case PlayDealerTurnState(player_hands, dealer_hand, insurance_bet):
                return self.play_dealer_turn(player_hands, dealer_hand, insurance_bet)
            case RoundOverState(player_hands, dealer_hand, insurance_bet):
                return self.end_round(player_hands, dealer_hand, insurance_bet)
            case PayoutState(total_bet, winnings):
                return self.pay_out_winnings(total_bet, winnings)
            case ShuffleState():
                return self.shuffle_shoe()
            case GameOverState():
                raise WrongInputError(state)
        raise TypeError(f"Unknown game state: {state!r}")

    def check_double_allowed(self, hand: PlayerHand) -> Optional[DoubleErrorReason]:
        """
        Return why the player may not double down on ``hand``, or None if they may.

        The hand must hold two cards, the player must be able to match the bet,
        and a split hand may only be doubled if the rules allow it.
        """
        if hand.size != 2:
            reason = DoubleErrorReason.NOT_TWO_CARDS
        elif hand.bet > self.chips:
            reason = DoubleErrorReason.CANT_AFFORD
        elif hand.splits > 0 and not self.rules.double_after_split:
            reason = DoubleErrorReason.DOUBLE_AFTER_SPLIT_NOT_ALLOWED
        else:
            reason = None
        decision_logger.log_rule_evaluation("double", reason is None, _why(reason))
        return reason

    def check_split_allowed(self, hand: PlayerHand) -> Optional[SplitErrorReason]:
        """
        Return why the player may not split ``hand``, or None if they may.

        The hand must be a pair, the player must be able to match the bet, and
        the max-splits and split-aces rules must not prevent it.
        """
        max_splits = self.rules.max_splits
        if not hand.is_pair():
            reason = SplitErrorReason.NOT_PAIR
        elif hand.bet > self.chips:
            reason = SplitErrorReason.CANT_AFFORD
        elif max_splits is not None and hand.splits >= max_splits:
            reason = SplitErrorReason.MAX_SPLITS_REACHED
        elif hand.is_ace_pair() and not self.rules.split_aces:
            reason = SplitErrorReason.SPLIT_ACES_NOT_ALLOWED
        else:
            reason = None
        decision_logger.log_rule_evaluation("split", reason is None, _why(reason))
        return reason

    def check_surrender_allowed(
        self, hand: PlayerHand
    ) -> Optional[SurrenderErrorReason]:
        """
        Return why the player may not surrender ``hand``, or None if they may.

        Late surrender needs a two-card hand and must be offered by the table.
        """
        if hand.size != 2:
            reason = SurrenderErrorReason.NOT_TWO_CARDS
        elif not self.rules.offer_late_surrender:
            reason = SurrenderErrorReason.LATE_SURRENDER_NOT_ALLOWED
        else:
            reason = None
        decision_logger.log_rule_evaluation("surrender", reason is None, _why(reason))
        return reason

    def bet(self, state: BettingState, bet: int) -> GameState:
        """
        The player places a bet to start the round.
        The bet must be within the table limits and the player must have enough chips.
        """
        if not self.simulation:
            if bet < 0 or bet < self.rules.minimum_bet:
                raise BetError(state, BetErrorReason.BET_TOO_LOW)
            if self.rules.max_bet is not None and bet > self.rules.max_bet:
                raise BetError(state, BetErrorReason.BET_TOO_HIGH)
            if bet > self.chips:
                raise BetError(state, BetErrorReason.CANT_AFFORD)
        self.chips -= bet
        return DealFirstPlayerCardState(bet)

    def deal_first_player_card(self, bet: int) -> GameState:
        player_hand = PlayerHand(self.shoe.draw_card(), bet)
        return DealFirstDealerCardState(player_hand)

    def deal_first_dealer_card(self, player_hand: PlayerHand) -> GameState:
        dealer_hand = DealerHand(self.shoe.draw_card(), self.rules.dealer_hit_soft_17)
        return DealSecondPlayerCardState(player_hand, dealer_hand)

    def deal_second_player_card(
        self, player_hand: PlayerHand, dealer_hand: DealerHand
    ) -> GameState:
        player_hand.add_card(self.shoe.draw_card())
        return DealHoleCardState(player_hand, dealer_hand)

    def deal_hole_card(
        self, player_hand: PlayerHand, dealer_hand: DealerHand
    ) -> GameState:
        """
        The dealer deals the hole card to themselves.

        The dealer only checks the hole card when showing a ten or an ace and
        the player does not hold blackjack. Early surrender and insurance are
        offered before that check.
        """
        dealer_hand.add_card(self.shoe.draw_card())
        showing = dealer_hand.showing()
        if showing < TEN_VALUE or player_hand.status == Status.BLACKJACK:
            return self.play_player_turn_or_go_to_dealer_turn(
                PlayerTurn(player_hand), dealer_hand, 0
            )
        if self.rules.offer_early_surrender:
            return OfferEarlySurrenderState(player_hand, dealer_hand)
        if self.rules.offer_insurance and showing == ACE_VALUE:
            return OfferInsuranceState(player_hand, dealer_hand)
        return CheckDealerHoleCardState(player_hand, dealer_hand, 0)

    def choose_early_surrender(
        self, player_hand: PlayerHand, dealer_hand: DealerHand, surrender: bool
    ) -> GameState:
        if surrender:
            return SurrenderState(PlayerTurn(player_hand), dealer_hand, 0)
        if self.rules.offer_insurance and dealer_hand.showing() == ACE_VALUE:
            return OfferInsuranceState(player_hand, dealer_hand)
        return CheckDealerHoleCardState(player_hand, dealer_hand, 0)

    def bet_insurance(self, state: OfferInsuranceState, insurance_bet: int) -> GameState:
        """
        The player places an insurance bet of at most half the original bet.
        A bet of 0 declines insurance.
        """
        if not self.simulation:
            if insurance_bet < 0:
                raise BetError(state, BetErrorReason.BET_TOO_LOW)
            if insurance_bet > state.max_insurance:
                raise BetError(state, BetErrorReason.BET_TOO_HIGH)
            if insurance_bet > self.chips:
                raise BetError(state, BetErrorReason.CANT_AFFORD)
        self.chips -= insurance_bet
        return CheckDealerHoleCardState(
            state.player_hand, state.dealer_hand, insurance_bet
        )

    def check_dealer_hole_card(
        self, player_hand: PlayerHand, dealer_hand: DealerHand, insurance_bet: int
    ) -> GameState:
        if dealer_hand.status == Status.BLACKJACK:
            return RoundOverState([player_hand], dealer_hand, insurance_bet)
        return self.play_player_turn_or_go_to_dealer_turn(
            PlayerTurn(player_hand), dealer_hand, insurance_bet
        )

    def play_player_turn(self, state: PlayPlayerTurnState, action: Action) -> GameState:
        """
        Apply the player's action to the current hand.

        Doubling and splitting take the extra bet from the player's chips
        before the card is dealt.
        """
        turn, dealer_hand, insurance_bet = (
            state.turn,
            state.dealer_hand,
            state.insurance_bet,
        )
        hand = turn.current_hand
        match action:
            case Action.STAND:
                return StandState(turn, dealer_hand, insurance_bet)
            case Action.HIT:
                return HitState(turn, dealer_hand, insurance_bet)
            case Action.DOUBLE:
                if not self.simulation:
                    reason = self.check_double_allowed(hand)
                    if reason is not None:
                        raise DoubleError(state, reason)
                self.chips -= hand.bet
                return DoubleState(turn, dealer_hand, insurance_bet)
            case Action.SPLIT:
                if not self.simulation:
                    reason = self.check_split_allowed(hand)
                    if reason is not None:
                        raise SplitError(state, reason)
                self.chips -= hand.bet
                return SplitState(turn, dealer_hand, insurance_bet)
            case Action.SURRENDER:
                if not self.simulation:
                    reason = self.check_surrender_allowed(hand)
                    if reason is not None:
                        raise SurrenderError(state, reason)
                return SurrenderState(turn, dealer_hand, insurance_bet)
        raise WrongInputError(state)

    def hit(
        self, turn: PlayerTurn, dealer_hand: DealerHand, insurance_bet: int
    ) -> GameState:
        turn.current_hand.add_card(self.shoe.draw_card())
        return self.play_player_turn_or_go_to_dealer_turn(
            turn, dealer_hand, insurance_bet
        )

    def stand(
        self, turn: PlayerTurn, dealer_hand: DealerHand, insurance_bet: int
    ) -> GameState:
        turn.current_hand.stand()
        return self.play_player_turn_or_go_to_dealer_turn(
            turn, dealer_hand, insurance_bet
        )

    def double(
        self, turn: PlayerTurn, dealer_hand: DealerHand, insurance_bet: int
    ) -> GameState:
        turn.current_hand.double(self.shoe.draw_card())
        return self.play_player_turn_or_go_to_dealer_turn(
            turn, dealer_hand, insurance_bet
        )

    def split(
        self, turn: PlayerTurn, dealer_hand: DealerHand, insurance_bet: int
    ) -> GameState:
        new_hand = turn.current_hand.split()
        return DealFirstSplitCardState(turn, new_hand, dealer_hand, insurance_bet)

    def deal_first_split_card(
        self,
        turn: PlayerTurn,
        new_hand: PlayerHand,
        dealer_hand: DealerHand,
        insurance_bet: int,
    ) -> GameState:
        turn.current_hand.add_card(self.shoe.draw_card())
        return DealSecondSplitCardState(turn, new_hand, dealer_hand, insurance_bet)

    def deal_second_split_card(
        self,
        turn: PlayerTurn,
        new_hand: PlayerHand,
        dealer_hand: DealerHand,
        insurance_bet: int,
    ) -> GameState:
        """The second split hand is queued behind the first and played after it."""
        new_hand.add_card(self.shoe.draw_card())
        turn.defer(new_hand)
        return self.play_player_turn_or_go_to_dealer_turn(
            turn, dealer_hand, insurance_bet
        )

    def late_surrender(
        self, turn: PlayerTurn, dealer_hand: DealerHand, insurance_bet: int
    ) -> GameState:
        turn.current_hand.surrender()
        return self.play_player_turn_or_go_to_dealer_turn(
            turn, dealer_hand, insurance_bet
        )

    def play_player_turn_or_go_to_dealer_turn(
        self, turn: PlayerTurn, dealer_hand: DealerHand, insurance_bet: int
    ) -> GameState:
        """
        Continue the player's turn if a hand is still in play, otherwise
        hand over to the dealer.
        """
        player_hands = turn.continue_playing()
        if player_hands is None:
            return PlayPlayerTurnState(turn, dealer_hand, insurance_bet)

        # With no hand left standing, the dealer just flips the hole card and stands.
        if dealer_hand.status == Status.IN_PLAY and not any(
            hand.status == Status.STOOD for hand in player_hands
        ):
            dealer_hand.status = Status.STOOD
        return RevealHoleCardState(player_hands, dealer_hand, insurance_bet)

    def play_dealer_turn_or_end_round(
        self, player_hands: List[PlayerHand], dealer_hand: DealerHand, insurance_bet: int
    ) -> GameState:
        if dealer_hand.status == Status.IN_PLAY:
            return PlayDealerTurnState(player_hands, dealer_hand, insurance_bet)
        return RoundOverState(player_hands, dealer_hand, insurance_bet)

    def play_dealer_turn(
        self, player_hands: List[PlayerHand], dealer_hand: DealerHand, insurance_bet: int
    ) -> GameState:
        dealer_hand.add_card(self.shoe.draw_card())
        return self.play_dealer_turn_or_end_round(
            player_hands, dealer_hand, insurance_bet
        )

    def end_round(
        self, player_hands: List[PlayerHand], dealer_hand: DealerHand, insurance: int
    ) -> GameState:
        """
        Settle every hand against the dealer. Insurance pays 2:1 on a dealer
        blackjack and is lost otherwise.
        """
        total_bet = sum(hand.bet for hand in player_hands) + insurance
        for hand in player_hands:
            hand.winnings = hand.calculate_winnings(
                dealer_hand, self.rules.blackjack_payout
            )
        winnings = sum(hand.winnings for hand in player_hands)
        if dealer_hand.status == Status.BLACKJACK:
            winnings += insurance * 3
        self.statistics.update(player_hands, dealer_hand)
        return PayoutState(total_bet, winnings)

    def pay_out_winnings(self, total_bet: int, winnings: int) -> GameState:
        """
        Credit the winnings. The game is over once the player can no longer
        place the minimum bet; otherwise the shoe is shuffled if needed and
        betting opens again.
        """
        self.chips += winnings
        decision_logger.log_round_result(total_bet, winnings, self.chips)
        if not self.rules.can_keep_playing(self.chips):
            logger.info("Game over with %d chips", self.chips)
            return GameOverState()
        if self.shoe.needs_shuffle():
            return ShuffleState()
        return BettingState()

    def shuffle_shoe(self) -> GameState:
        self.shoe.shuffle()
        return BettingState()


def _why(reason) -> str:
    return f"({reason.value})" if reason is not None else ""
