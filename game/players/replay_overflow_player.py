from __future__ import annotations

from game.overflow_game import OverflowGame
from game.players.overflow_player import OverflowPlayer


class ReplayOverflowPlayer(OverflowPlayer):
    """Player that replays moves from a list of positions."""

    def __init__(self, game: OverflowGame, n, moves):
        super().__init__(game, n)
        self.moves = list(moves)
        self.move_index = 0
        self.name = f"Replay {n}"

    def get_action(self):
        """Return the next move from the replay list."""
        if self.move_index >= len(self.moves):
            raise ValueError(f"No more moves for player {self.n}")

        move = self.moves[self.move_index]
        self.move_index += 1
        return move
