"""Move selection for computer players at a chosen difficulty."""

from __future__ import annotations

import logging
from enum import Enum

from ai.game_tree_evaluator import GameTreeEvaluator
from ai.random_evaluator import RandomEvaluator
from ai.rule_based_evaluator import RuleBasedEvaluator
from game.constants import INTERACTIVE_THINKING_TIME_MS, MAX_TREE_DEPTH, W_GAIN, W_LOSS

logger = logging.getLogger(__name__)


class Difficulty(Enum):
    RANDOM = "random"
    HEURISTIC = "heuristic"
    SEARCH = "search"

    @classmethod
    def from_str(cls, value: str) -> "Difficulty":
        try:
            return cls(value.strip().lower())
        except ValueError:
            valid = ", ".join(d.value for d in cls)
            raise ValueError(f"Unknown difficulty '{value}'. Expected one of: {valid}") from None


def create_evaluator(
    player,
    difficulty: Difficulty,
    thinking_time_ms: float = INTERACTIVE_THINKING_TIME_MS,
    max_tree_depth: int = MAX_TREE_DEPTH,
    w_gain: float = W_GAIN,
    w_loss: float = W_LOSS,
    rng=None,
    clock=None,
):
    """Build the evaluator matching a difficulty. Search settings apply to SEARCH only."""
    if difficulty is Difficulty.RANDOM:
        return RandomEvaluator(player, rng=rng, clock=clock)
    if difficulty is Difficulty.HEURISTIC:
        return RuleBasedEvaluator(player, rng=rng, clock=clock)
    if difficulty is Difficulty.SEARCH:
        return GameTreeEvaluator(
            player,
            thinking_time_ms,
            max_tree_depth=max_tree_depth,
            w_gain=w_gain,
            w_loss=w_loss,
            rng=rng,
            clock=clock,
        )
    raise ValueError(f"Unsupported difficulty: {difficulty}")


class Strategy:
    """Owns the evaluator of a computer player and answers its move requests."""

    def __init__(self, player, difficulty: Difficulty = Difficulty.SEARCH, **evaluator_kwargs):
        self.player = player
        self.difficulty = difficulty
        self.evaluator = create_evaluator(player, difficulty, **evaluator_kwargs)

    def request_move(self):
        """Block until the evaluator has chosen a move.

        Returns:
            The chosen position, or None if the player has no legal move.
        """
        move = self.evaluator.select_move()
        if move is None:
            logger.warning("%s has no legal move", self.player.color.value)
        return move
