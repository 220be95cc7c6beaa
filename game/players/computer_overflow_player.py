from __future__ import annotations

import numpy as np

from ai.strategy import Difficulty, Strategy
from game.constants import INTERACTIVE_THINKING_TIME_MS, MAX_TREE_DEPTH, W_GAIN, W_LOSS
from game.overflow_game import OverflowGame
from game.players.overflow_player import OverflowPlayer


class ComputerOverflowPlayer(OverflowPlayer):
    """Local computer player that asks its strategy for every move."""

    NAME_PREFIXES = {
        Difficulty.RANDOM: "Random",
        Difficulty.HEURISTIC: "Heuristic",
        Difficulty.SEARCH: "Search",
    }

    def __init__(self, game: OverflowGame, n, difficulty=Difficulty.SEARCH,
                 thinking_time_ms=INTERACTIVE_THINKING_TIME_MS, max_tree_depth=MAX_TREE_DEPTH,
                 w_gain=W_GAIN, w_loss=W_LOSS, rng_seed=None, clock=None):
        """Initialize a computer player.

        Args:
            game: OverflowGame instance
            n: Player number (1 or 2)
            difficulty: Difficulty (or its string value) selecting the evaluator
            thinking_time_ms: Thinking time budget for the search in milliseconds
            max_tree_depth: Maximum search depth for iterative deepening
            w_gain: Weight for opponent tokens threatened by this player
            w_loss: Weight for own tokens threatened by the opponent
            rng_seed: Optional integer seed for tie-break randomness
            clock: Optional callable returning seconds (default: time.monotonic)
        """
        super().__init__(game, n)
        self.difficulty = Difficulty(difficulty)
        self.thinking_time_ms = thinking_time_ms
        self.rng_seed = rng_seed
        self.name = f"{self.NAME_PREFIXES[self.difficulty]} {n}"

        self.strategy = Strategy(
            self,
            self.difficulty,
            thinking_time_ms=thinking_time_ms,
            max_tree_depth=max_tree_depth,
            w_gain=w_gain,
            w_loss=w_loss,
            rng=np.random.default_rng(rng_seed),
            clock=clock,
        )

    def get_action(self):
        """Select a move with the configured strategy (blocking)."""
        return self.strategy.request_move()
