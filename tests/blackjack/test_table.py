"""Rounds played through the table state machine against stacked shoes."""

import pytest

from holecard.blackjack.action import Action
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
from holecard.blackjack.hand import Status
from holecard.blackjack.rules import Rules
from holecard.blackjack.state import (
    Bet,
    BettingState,
    Choice,
    DealFirstPlayerCardState,
    GameOverState,
    OfferEarlySurrenderState,
    OfferInsuranceState,
    PayoutState,
    Play,
    PlayPlayerTurnState,
    RoundOverState,
    ShuffleState,
    SplitState,
    SurrenderState,
)


def start_round(table, advance_state, bet=10):
    state = table.play(BettingState(), Bet(bet))
    return advance_state(table, state)


class TestBetting:
    def test_bet_takes_chips(self, make_table):
        table = make_table(["10", "6", "8", "10"])
        state = table.play(BettingState(), Bet(40))
        assert state == DealFirstPlayerCardState(40)
        assert table.chips == 60

    @pytest.mark.parametrize(
        "amount, reason",
        [
            (5, BetErrorReason.BET_TOO_LOW),
            (60, BetErrorReason.BET_TOO_HIGH),
            (40, BetErrorReason.CANT_AFFORD),
        ],
    )
    def test_rejected_bet_leaves_state_unchanged(self, make_table, amount, reason):
        table = make_table(["10", "6", "8", "10"], chips=30, rules=Rules(min_bet=10, max_bet=50))
        state = BettingState()

        with pytest.raises(BetError) as exc_info:
            table.play(state, Bet(amount))

        assert exc_info.value.reason == reason
        assert exc_info.value.state is state
        assert table.chips == 30

    def test_negative_bet_rejected_without_minimum(self, make_table):
        table = make_table(["10", "6", "8", "10"], chips=30, rules=Rules(min_bet=0))
        state = BettingState()

        with pytest.raises(BetError) as exc_info:
            table.play(state, Bet(-10))

        assert exc_info.value.reason == BetErrorReason.BET_TOO_LOW
        assert table.chips == 30

    def test_missing_input(self, make_table):
        table = make_table(["10"])
        with pytest.raises(WrongInputError):
            table.play(BettingState())

    def test_wrong_input_kind(self, make_table):
        table = make_table(["10"])
        with pytest.raises(WrongInputError):
            table.play(BettingState(), Play(Action.HIT))

    def test_game_over_accepts_nothing(self, make_table):
        table = make_table(["10"])
        with pytest.raises(WrongInputError):
            table.play(GameOverState(), Bet(10))


class TestRounds:
    def test_dealer_bust(self, make_table, advance_state):
        table = make_table(["10", "6", "8", "10", "K"])
        state = start_round(table, advance_state, bet=50)
        assert isinstance(state, PlayPlayerTurnState)
        assert state.turn.current_hand.value.total == 18

        state = advance_state(table, table.play(state, Play(Action.STAND)), until=PayoutState)
        assert state == PayoutState(50, 100)

        state = table.play(state)
        assert state == BettingState()
        assert table.chips == 150
        assert table.statistics.rounds_played == 1

    def test_player_blackjack_pays_three_to_two(self, make_table, advance_state):
        table = make_table(["A", "9", "K", "7"])
        state = table.play(BettingState(), Bet(100))
        assert table.chips == 0

        state = advance_state(table, state, until=PayoutState)
        assert state == PayoutState(100, 250)
        assert table.play(state) == BettingState()
        assert table.chips == 250

    def test_blackjack_against_blackjack_pushes(self, make_table, advance_state):
        table = make_table(["A", "A", "K", "K"])
        state = advance_state(table, table.play(BettingState(), Bet(10)), until=PayoutState)
        assert state == PayoutState(10, 10)

    def test_dealer_blackjack_ends_round(self, make_table, advance_state):
        table = make_table(["10", "A", "9", "K"])
        state = advance_state(table, table.play(BettingState(), Bet(10)), until=RoundOverState)
        assert state.dealer_hand.status == Status.BLACKJACK
        assert table.play(state) == PayoutState(10, 0)

    def test_dealer_checks_ten_without_blackjack(self, make_table, advance_state):
        table = make_table(["10", "K", "7", "9"])
        state = start_round(table, advance_state)
        assert isinstance(state, PlayPlayerTurnState)
        assert state.dealer_hand.status == Status.STOOD

    def test_dealer_hits_soft_17(self, make_table, advance_state):
        table = make_table(
            ["10", "A", "8", "6", "2"], rules=Rules(dealer_hit_soft_17=True)
        )
        state = start_round(table, advance_state)
        state = advance_state(table, table.play(state, Play(Action.STAND)), until=RoundOverState)
        assert state.dealer_hand.size == 3
        assert state.dealer_hand.value.total == 19
        assert table.play(state) == PayoutState(10, 0)

    def test_dealer_skips_drawing_when_player_busts(self, make_table, advance_state):
        table = make_table(["10", "6", "6", "10", "K"])
        state = start_round(table, advance_state)
        state = advance_state(table, table.play(state, Play(Action.HIT)), until=RoundOverState)

        assert state.player_hands[0].status == Status.BUSTED
        assert state.dealer_hand.status == Status.STOOD
        assert state.dealer_hand.size == 2

    def test_dealer_skips_drawing_after_double(self, make_table, advance_state):
        table = make_table(["5", "6", "6", "10", "10"])
        state = start_round(table, advance_state)
        state = table.play(state, Play(Action.DOUBLE))
        assert table.chips == 80

        state = advance_state(table, state, until=PayoutState)
        assert state == PayoutState(20, 40)
        table.play(state)
        assert table.chips == 120

    def test_round_ending_at_cut_card_shuffles(self, make_table, advance_state):
        table = make_table(["10", "6", "8", "10", "K"], filler=())
        state = start_round(table, advance_state)
        state = advance_state(table, table.play(state, Play(Action.STAND)), until=PayoutState)

        assert table.play(state) == ShuffleState()
        assert table.play(ShuffleState()) == BettingState()
        assert table.shoe.next_card_index == 0


class TestGameOver:
    def test_chips_at_minimum_bet_keep_playing(self, make_table, advance_state):
        table = make_table(["10", "10", "7", "9"], chips=20, rules=Rules(min_bet=10))
        state = start_round(table, advance_state)
        state = advance_state(table, table.play(state, Play(Action.STAND)), until=PayoutState)
        assert table.play(state) == BettingState()
        assert table.chips == 10

    def test_chips_below_minimum_bet_end_game(self, make_table, advance_state):
        table = make_table(["10", "10", "7", "9"], chips=19, rules=Rules(min_bet=10))
        state = start_round(table, advance_state)
        state = advance_state(table, table.play(state, Play(Action.STAND)), until=PayoutState)
        assert table.play(state) == GameOverState()
        assert table.chips == 9


class TestInsurance:
    rules = Rules(offer_insurance=True)

    def offer(self, make_table, advance_state, ranks, chips=100):
        table = make_table(ranks, chips=chips, rules=self.rules)
        state = start_round(table, advance_state, bet=50)
        assert isinstance(state, OfferInsuranceState)
        assert state.max_insurance == 25
        return table, state

    def test_insurance_pays_on_dealer_blackjack(self, make_table, advance_state):
        table, state = self.offer(make_table, advance_state, ["10", "A", "9", "K"])
        state = table.play(state, Bet(25))
        assert table.chips == 25

        state = advance_state(table, state, until=PayoutState)
        assert state == PayoutState(75, 75)
        table.play(state)
        assert table.chips == 100

    def test_insurance_lost_without_dealer_blackjack(self, make_table, advance_state):
        table, state = self.offer(make_table, advance_state, ["10", "A", "9", "7"])
        state = advance_state(table, table.play(state, Bet(25)))
        assert isinstance(state, PlayPlayerTurnState)
        assert state.insurance_bet == 25

        state = advance_state(table, table.play(state, Play(Action.STAND)), until=PayoutState)
        assert state == PayoutState(75, 100)
        table.play(state)
        assert table.chips == 125

    def test_declined_insurance(self, make_table, advance_state):
        table, state = self.offer(make_table, advance_state, ["10", "A", "9", "K"])
        state = advance_state(table, table.play(state, Bet(0)), until=PayoutState)
        assert state == PayoutState(50, 0)

    def test_insurance_above_half_the_bet(self, make_table, advance_state):
        table, state = self.offer(make_table, advance_state, ["10", "A", "9", "K"])
        with pytest.raises(BetError) as exc_info:
            table.play(state, Bet(26))
        assert exc_info.value.reason == BetErrorReason.BET_TOO_HIGH
        assert exc_info.value.state is state
        assert table.chips == 50

    def test_negative_insurance_rejected(self, make_table, advance_state):
        table, state = self.offer(make_table, advance_state, ["10", "A", "9", "7"])
        with pytest.raises(BetError) as exc_info:
            table.play(state, Bet(-1000))
        assert exc_info.value.reason == BetErrorReason.BET_TOO_LOW
        assert exc_info.value.state is state
        assert table.chips == 50

    def test_insurance_beyond_chips(self, make_table, advance_state):
        table, state = self.offer(make_table, advance_state, ["10", "A", "9", "K"], chips=60)
        with pytest.raises(BetError) as exc_info:
            table.play(state, Bet(20))
        assert exc_info.value.reason == BetErrorReason.CANT_AFFORD

    def test_not_offered_against_a_ten(self, make_table, advance_state):
        table = make_table(["10", "K", "9", "7"], rules=self.rules)
        state = start_round(table, advance_state)
        assert isinstance(state, PlayPlayerTurnState)


class TestSurrender:
    def test_early_surrender(self, make_table, advance_state):
        table = make_table(["10", "A", "6", "K"], rules=Rules(offer_early_surrender=True))
        state = start_round(table, advance_state, bet=50)
        assert isinstance(state, OfferEarlySurrenderState)

        state = table.play(state, Choice(True))
        assert isinstance(state, SurrenderState)
        state = advance_state(table, state, until=PayoutState)
        assert state == PayoutState(50, 25)
        table.play(state)
        assert table.chips == 75

    def test_declining_early_surrender_offers_insurance(self, make_table, advance_state):
        rules = Rules(offer_early_surrender=True, offer_insurance=True)
        table = make_table(["10", "A", "6", "K"], rules=rules)
        state = start_round(table, advance_state)
        assert isinstance(table.play(state, Choice(False)), OfferInsuranceState)

    def test_player_blackjack_is_not_offered_anything(self, make_table, advance_state):
        rules = Rules(offer_early_surrender=True, offer_insurance=True)
        table = make_table(["A", "A", "K", "5"], rules=rules)
        state = advance_state(table, table.play(BettingState(), Bet(10)), until=PayoutState)
        assert state == PayoutState(10, 25)

    def test_late_surrender(self, make_table, advance_state):
        table = make_table(["10", "6", "6", "10"], rules=Rules(offer_late_surrender=True))
        state = start_round(table, advance_state)
        state = advance_state(table, table.play(state, Play(Action.SURRENDER)), until=PayoutState)
        assert state == PayoutState(10, 5)
        table.play(state)
        assert table.chips == 95

    def test_late_surrender_not_offered(self, make_table, advance_state):
        table = make_table(["10", "6", "6", "10"])
        state = start_round(table, advance_state)
        with pytest.raises(SurrenderError) as exc_info:
            table.play(state, Play(Action.SURRENDER))
        assert exc_info.value.reason == SurrenderErrorReason.LATE_SURRENDER_NOT_ALLOWED

    def test_late_surrender_after_hit(self, make_table, advance_state):
        table = make_table(["2", "6", "3", "10", "4"], rules=Rules(offer_late_surrender=True))
        state = start_round(table, advance_state)
        state = advance_state(table, table.play(state, Play(Action.HIT)))
        with pytest.raises(SurrenderError) as exc_info:
            table.play(state, Play(Action.SURRENDER))
        assert exc_info.value.reason == SurrenderErrorReason.NOT_TWO_CARDS


class TestDouble:
    def test_double_after_hit(self, make_table, advance_state):
        table = make_table(["2", "6", "3", "10", "4"])
        state = start_round(table, advance_state)
        state = advance_state(table, table.play(state, Play(Action.HIT)))
        with pytest.raises(DoubleError) as exc_info:
            table.play(state, Play(Action.DOUBLE))
        assert exc_info.value.reason == DoubleErrorReason.NOT_TWO_CARDS
        assert exc_info.value.state is state

    def test_double_without_chips(self, make_table, advance_state):
        table = make_table(["5", "6", "6", "10"], chips=10)
        state = start_round(table, advance_state)
        with pytest.raises(DoubleError) as exc_info:
            table.play(state, Play(Action.DOUBLE))
        assert exc_info.value.reason == DoubleErrorReason.CANT_AFFORD
        assert table.chips == 0

    def test_double_after_split_not_allowed(self, make_table, advance_state):
        table = make_table(
            ["8", "6", "8", "10", "3", "2"], rules=Rules(double_after_split=False)
        )
        state = start_round(table, advance_state)
        state = advance_state(table, table.play(state, Play(Action.SPLIT)))
        with pytest.raises(DoubleError) as exc_info:
            table.play(state, Play(Action.DOUBLE))
        assert exc_info.value.reason == DoubleErrorReason.DOUBLE_AFTER_SPLIT_NOT_ALLOWED


class TestSplit:
    def test_split_hands_play_in_order(self, make_table, advance_state):
        table = make_table(["8", "6", "8", "10", "3", "2"])
        state = start_round(table, advance_state)

        state = table.play(state, Play(Action.SPLIT))
        assert isinstance(state, SplitState)
        assert table.chips == 80

        state = advance_state(table, state)
        assert state.turn.current_hand.value.total == 11
        assert state.turn.deferred[0].value.total == 10
        assert state.turn.current_hand.splits == 1
        assert state.turn.deferred[0].splits == 1

        state = advance_state(table, table.play(state, Play(Action.STAND)))
        assert isinstance(state, PlayPlayerTurnState)
        assert state.turn.current_hand.value.total == 10

        state = advance_state(table, table.play(state, Play(Action.STAND)), until=RoundOverState)
        assert [hand.value.total for hand in state.player_hands] == [11, 10]
        assert table.play(state) == PayoutState(20, 0)

    def test_max_splits_reached(self, make_table, advance_state):
        table = make_table(["8", "6", "8", "10", "8", "2"], rules=Rules(max_splits=1))
        state = start_round(table, advance_state)
        state = advance_state(table, table.play(state, Play(Action.SPLIT)))
        assert state.turn.current_hand.is_pair()

        with pytest.raises(SplitError) as exc_info:
            table.play(state, Play(Action.SPLIT))
        assert exc_info.value.reason == SplitErrorReason.MAX_SPLITS_REACHED
        assert exc_info.value.state is state
        assert table.chips == 80

    def test_split_aces_not_allowed(self, make_table, advance_state):
        table = make_table(["A", "6", "A", "10"], rules=Rules(split_aces=False))
        state = start_round(table, advance_state)
        with pytest.raises(SplitError) as exc_info:
            table.play(state, Play(Action.SPLIT))
        assert exc_info.value.reason == SplitErrorReason.SPLIT_ACES_NOT_ALLOWED

    def test_split_needs_pair(self, make_table, advance_state):
        table = make_table(["8", "6", "9", "10"])
        state = start_round(table, advance_state)
        with pytest.raises(SplitError) as exc_info:
            table.play(state, Play(Action.SPLIT))
        assert exc_info.value.reason == SplitErrorReason.NOT_PAIR

    def test_split_without_chips(self, make_table, advance_state):
        table = make_table(["8", "6", "8", "10"], chips=10)
        state = start_round(table, advance_state)
        with pytest.raises(SplitError) as exc_info:
            table.play(state, Play(Action.SPLIT))
        assert exc_info.value.reason == SplitErrorReason.CANT_AFFORD

    def test_ten_valued_cards_split(self, make_table, advance_state):
        table = make_table(["K", "6", "Q", "10", "5", "4"])
        state = start_round(table, advance_state)
        assert isinstance(table.play(state, Play(Action.SPLIT)), SplitState)

    def test_wrong_input_during_turn(self, make_table, advance_state):
        table = make_table(["8", "6", "8", "10"])
        state = start_round(table, advance_state)
        with pytest.raises(WrongInputError) as exc_info:
            table.play(state, Bet(10))
        assert exc_info.value.state is state


class TestSimulation:
    def test_runs_to_next_decision(self, make_table):
        table = make_table(["10", "6", "8", "10", "K"], simulation=True)
        state = table.play(BettingState(), Bet(50))
        assert isinstance(state, PlayPlayerTurnState)

        assert table.play(state, Play(Action.STAND)) == BettingState()
        assert table.chips == 150

    def test_bets_are_not_validated(self, make_table):
        table = make_table(["10", "6", "8", "10", "K"], simulation=True, rules=Rules(min_bet=10))
        state = table.play(BettingState(), Bet(5))
        assert isinstance(state, PlayPlayerTurnState)
        assert table.chips == 95
