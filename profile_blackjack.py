#!/usr/bin/env python3
"""Profile blackjack simulation to identify performance bottlenecks."""

import cProfile
import pstats
import io
import os
import random

# Decision logging dominates the profile otherwise
os.environ.setdefault("BLACKJACK_DISABLE_LOGGING", "1")

from holecard.blackjack.game import BlackjackGame
from holecard.blackjack.rules import Rules
from holecard.blackjack.strategy import BasicStrategy
from holecard.blackjack.table import Table
from holecard.common.shoe import Shoe


def build_game(rounds, seed=0):
    rules = Rules(
        min_bet=10,
        max_bet=1000,
        dealer_hit_soft_17=False,
        offer_insurance=True,
        offer_late_surrender=True,
        max_splits=3,
    )
    shoe = Shoe(num_decks=6, penetration=0.75, rng=random.Random(seed))
    table = Table(100_000, shoe, rules, simulation=True)
    return BlackjackGame(table, BasicStrategy(rounds, 10))


def profile_simulation(rounds=10_000):
    """Profile a simulated session of ``rounds`` rounds."""
    game = build_game(rounds)

    profiler = cProfile.Profile()
    profiler.enable()
    game.play()
    profiler.disable()

    print(f"Rounds played: {game.rounds_played:,}")

    # Print statistics
    s = io.StringIO()
    ps = pstats.Stats(profiler, stream=s).sort_stats("cumulative")
    ps.print_stats(50)  # Top 50 functions
    print(s.getvalue())

    # Also print by total time
    print("\n\n=== BY TOTAL TIME ===\n")
    s = io.StringIO()
    ps = pstats.Stats(profiler, stream=s).sort_stats("tottime")
    ps.print_stats(30)  # Top 30 functions
    print(s.getvalue())


if __name__ == "__main__":
    print("Profiling simulated session...")
    profile_simulation()
