#!/usr/bin/env python3
"""
State machine demo.

Plays one round by hand against a stacked shoe, printing every state the
table passes through, then shows a rejected input leaving the state as it was.
"""

from holecard.blackjack.action import Action
from holecard.blackjack.errors import TransitionError
from holecard.blackjack.rules import Rules
from holecard.blackjack.state import Bet, BettingState, GameOverState, Play
from holecard.blackjack.table import Table
from holecard.common.card import Card, Rank, Suit
from holecard.common.shoe import Shoe


def stacked_table():
    # Player 8, dealer 6, player 8, dealer hole 10, then split cards and dealer draw
    ranks = [Rank.EIGHT, Rank.SIX, Rank.EIGHT, Rank.TEN, Rank.THREE, Rank.KING, Rank.NINE]
    cards = [Card(Suit.SPADES, rank) for rank in ranks]
    cards += [Card(Suit.HEARTS, Rank.TWO), Card(Suit.HEARTS, Rank.FIVE)]
    return Table(100, Shoe.stacked(cards), Rules(max_splits=1))


def main():
    table = stacked_table()
    state = BettingState()
    decisions = iter(
        [Bet(10), Play(Action.SPLIT), Play(Action.SPLIT), Play(Action.DOUBLE), Play(Action.STAND)]
    )

    while not isinstance(state, GameOverState):
        user_input = next(decisions, None) if state.requires_input else None
        if state.requires_input and user_input is None:
            break
        try:
            state = table.play(state, user_input)
        except TransitionError as exc:
            print(f"  rejected {user_input}: {exc}")
            state = exc.state
            continue
        print(f"{state} (chips: {table.chips})")

    print(f"Final chips: {table.chips}")


if __name__ == "__main__":
    main()
