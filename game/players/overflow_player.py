from __future__ import annotations

from typing import Optional

from game.overflow_game import OverflowGame
from game.position import GameColor, Position


class OverflowPlayer:
    """Base player with shared state and lifecycle hooks."""

    def __init__(self, game: OverflowGame, n):
        self.game = game
        self.n = n
        self.color = GameColor.from_player(n)
        self.name = f"Player {n}"
        self.opponent: Optional[OverflowPlayer] = None

    def get_action(self) -> Optional[Position]:
        """Return the next move, or None if the player has no legal move."""
        raise NotImplementedError

    def get_opposite_color(self) -> GameColor:
        return self.color.opposite()

    @property
    def situation(self):
        """The current situation of the game this player takes part in."""
        return self.game.situation

    def __repr__(self):
        return f"{type(self).__name__}(n={self.n}, color={self.color.value})"
