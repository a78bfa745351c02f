"""
This module contains the Statistics class which is responsible for
tracking the outcomes of finished blackjack rounds.
"""

from typing import List

import numpy as np

from holecard.blackjack.hand import DealerHand, PlayerHand, Status


class Statistics:
    """
    Running totals over the rounds played at a table.

    Updating is additive only and has no effect on play.
    """

    def __init__(self):
        self.rounds_played = 0
        self.hands_played = 0
        self.player_wins = 0
        self.dealer_wins = 0
        self.draws = 0
        self.player_blackjacks = 0
        self.player_busts = 0
        self.surrenders = 0
        self.doubles = 0
        self.split_hands = 0
        self.dealer_blackjacks = 0
        self.dealer_busts = 0
        self.total_bet = 0
        self.total_returned = 0
        self.round_results: List[int] = []

    def update(self, player_hands: List[PlayerHand], dealer_hand: DealerHand) -> None:
        """Record a settled round. Every hand must already have its winnings."""
        self.rounds_played += 1
        round_result = 0

        for hand in player_hands:
            self.hands_played += 1
            self.total_bet += hand.bet
            self.total_returned += hand.winnings
            round_result += hand.winnings - hand.bet

            if hand.winnings > hand.bet:
                self.player_wins += 1
            elif hand.winnings == hand.bet:
                self.draws += 1
            else:
                self.dealer_wins += 1

            if hand.status == Status.BLACKJACK:
                self.player_blackjacks += 1
            elif hand.status == Status.BUSTED:
                self.player_busts += 1
            elif hand.status == Status.SURRENDERED:
                self.surrenders += 1
            if hand.doubled:
                self.doubles += 1
            if hand.splits > 0:
                self.split_hands += 1

        if dealer_hand.status == Status.BLACKJACK:
            self.dealer_blackjacks += 1
        elif dealer_hand.status == Status.BUSTED:
            self.dealer_busts += 1

        self.round_results.append(round_result)

    @property
    def net(self) -> int:
        return self.total_returned - self.total_bet

    def report(self) -> dict:
        """
        Returns a dictionary containing the current statistics.
        """
        results = np.array(self.round_results, dtype=float)
        if results.size:
            mean_result = float(results.mean())
            result_std = float(results.std())
        else:
            mean_result = 0.0
            result_std = 0.0
        house_edge = -self.net / self.total_bet * 100 if self.total_bet else 0.0

        return {
            "rounds_played": self.rounds_played,
            "hands_played": self.hands_played,
            "player_wins": self.player_wins,
            "dealer_wins": self.dealer_wins,
            "draws": self.draws,
            "player_blackjacks": self.player_blackjacks,
            "player_busts": self.player_busts,
            "surrenders": self.surrenders,
            "doubles": self.doubles,
            "split_hands": self.split_hands,
            "dealer_blackjacks": self.dealer_blackjacks,
            "dealer_busts": self.dealer_busts,
            "total_bet": self.total_bet,
            "total_returned": self.total_returned,
            "net": self.net,
            "mean_round_result": mean_result,
            "round_result_std": result_std,
            "house_edge": house_edge,
        }
