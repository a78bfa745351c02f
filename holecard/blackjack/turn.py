"""
The player's turn: the hand being played plus the hands waiting behind it.
"""

from collections import deque
from typing import Deque, List, Optional

from holecard.blackjack.hand import PlayerHand


class PlayerTurn:
    """
    Ordered working set of a player's hands within one round.

    Splitting defers the new hand to a queue. Deferred hands are played in
    the order they were split off, after the current hand is finished.
    """

    def __init__(self, hand: PlayerHand):
        self.current_hand = hand
        self.deferred: Deque[PlayerHand] = deque()
        self.finished: List[PlayerHand] = []

    def defer(self, hand: PlayerHand) -> None:
        self.deferred.append(hand)

    @property
    def hands(self) -> List[PlayerHand]:
        """Every hand of the turn: finished, current, then deferred."""
        return [*self.finished, self.current_hand, *self.deferred]

    def continue_playing(self) -> Optional[List[PlayerHand]]:
        """
        Move past the current hand if it is finished.

        Returns:
            ``None`` while a hand remains to be played, with the next deferred
            hand made current if needed. Once every hand is finished, the
            hands in play order.
        """
        while self.current_hand.is_finished:
            self.finished.append(self.current_hand)
            if not self.deferred:
                return self.finished
            self.current_hand = self.deferred.popleft()
        return None

    def __eq__(self, other):
        if isinstance(other, PlayerTurn):
            return (
                self.current_hand == other.current_hand
                and list(self.deferred) == list(other.deferred)
                and self.finished == other.finished
            )
        return NotImplemented

    def __repr__(self) -> str:
        return (
            f"PlayerTurn(current_hand={self.current_hand!r}, "
            f"deferred={list(self.deferred)!r}, finished={self.finished!r})"
        )
