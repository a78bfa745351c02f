"""
Pytest fixtures shared by the test suite.

Most blackjack tests run rounds against a stacked shoe so that every card is
known in advance. Cards are dealt in this order: first player card, dealer
up-card, second player card, dealer hole card, then any further draws.
"""

import random
from itertools import cycle

import pytest

from holecard.blackjack.rules import Rules
from holecard.blackjack.state import GameOverState
from holecard.blackjack.table import Table
from holecard.common.card import Card, Rank, Suit
from holecard.common.shoe import Shoe


@pytest.fixture
def cards():
    """Build cards from rank labels such as "A", "10" or "K"."""

    def _cards(*ranks):
        suits = cycle(Suit)
        return [Card(next(suits), Rank(rank)) for rank in ranks]

    return _cards


@pytest.fixture
def stacked_shoe(cards):
    def _shoe(*ranks, penetration=0.0):
        return Shoe.stacked(cards(*ranks), penetration=penetration, rng=random.Random(0))

    return _shoe


@pytest.fixture
def make_table(stacked_shoe):
    """
    Build a table dealing the given ranks in order.

    Two filler cards are added so a finished round does not use up the shoe.
    """

    def _table(ranks, chips=100, rules=None, simulation=False, filler=("2", "3")):
        shoe = stacked_shoe(*ranks, *filler)
        return Table(chips, shoe, rules or Rules(), simulation=simulation)

    return _table


def advance(table, state, until=None):
    """
    Play states that need no input until one does, or until a state of type
    ``until`` is reached.
    """
    while not (
        state.requires_input
        or isinstance(state, GameOverState)
        or (until is not None and isinstance(state, until))
    ):
        state = table.play(state)
    return state


@pytest.fixture
def advance_state():
    return advance
