"""Iterative deepening alphabeta search bounded by a thinking time budget.

Each outer iteration searches one ply deeper than the last and narrows the
candidate frontier to the moves that tied for the best score. The loop stops
when the time budget runs out, a forced win is found, or the maximum tree
depth is reached. Remaining ties are broken by the rule ladder and finally at
random.

A search that runs out of time returns None instead of a score. None
propagates to the root so the candidate is discarded, and a root iteration in
which every candidate was discarded keeps the previous frontier. The first
iteration (depth 1) is never aborted.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from ai.evaluator import Evaluator
from ai.rule_based_evaluator import RuleBasedEvaluator
from game.constants import MAX_TREE_DEPTH, TIME_BUDGET_RATIO, W_GAIN, W_LOSS
from game.game_situation import GameSituation
from game.position import GameColor, Position

logger = logging.getLogger(__name__)

WIN_SCORE = sys.float_info.max
LOSS_SCORE = -sys.float_info.max


class GameTreeEvaluator(Evaluator):
    """Selects moves by time-bounded iterative deepening alphabeta search."""

    def __init__(
        self,
        player,
        thinking_time_ms: float,
        max_tree_depth: int = MAX_TREE_DEPTH,
        w_gain: float = W_GAIN,
        w_loss: float = W_LOSS,
        time_budget_ratio: float = TIME_BUDGET_RATIO,
        rng=None,
        clock=None,
    ):
        """Initialize the search.

        Args:
            player: The searching player
            thinking_time_ms: Time budget per move in milliseconds
            max_tree_depth: Deepest iteration of the outer loop
            w_gain: Weight of opponent tokens threatened by the searching player
            w_loss: Weight of own tokens threatened by the opponent
            time_budget_ratio: Share of the budget after which the search aborts
            rng: Random generator for tie breaks, shared with the move orderer
            clock: Callable returning the current time in seconds
        """
        super().__init__(player, rng=rng, clock=clock)
        if max_tree_depth < 1:
            raise ValueError(f"max_tree_depth must be at least 1, got {max_tree_depth}")

        self.thinking_time_ms = thinking_time_ms
        self.max_tree_depth = max_tree_depth
        self.w_gain = w_gain
        self.w_loss = w_loss
        self.time_budget_ratio = time_budget_ratio

        self.current_max_tree_depth = 0
        self.is_winning_situation = False
        self.secondary_evaluator = RuleBasedEvaluator(player, rng=self.rng, clock=self.clock)

    def select_best_position(self) -> Optional[Position]:
        color = self.player.color
        situation = self.player.situation

        self.current_max_tree_depth = 0
        self.is_winning_situation = False
        has_reached_max_thinking_time = False

        legal_positions = self.get_legal_positions(color, situation)
        if not legal_positions:
            return None
        best_positions = self._presort(legal_positions, color, situation)

        while (
            not has_reached_max_thinking_time
            and not self.is_winning_situation
            and self.current_max_tree_depth < self.max_tree_depth
        ):
            self.current_max_tree_depth += 1

            evaluated = self.get_evaluated_positions(best_positions, color)
            current_best = self.get_best_positions(evaluated)

            if not current_best:
                has_reached_max_thinking_time = True
                logger.debug("depth %d aborted on time", self.current_max_tree_depth)
            else:
                best_positions = current_best
                logger.debug(
                    "depth %d: %d best of %d, score %s",
                    self.current_max_tree_depth,
                    len(best_positions),
                    len(evaluated),
                    evaluated[0].score,
                )

        # Break remaining ties with the rule ladder
        post_evaluated = self.secondary_evaluator.get_evaluated_positions(best_positions, color)
        best_positions = self.get_best_positions(post_evaluated)
        return self.get_one_best_position(best_positions)

    def evaluate_position(self, color, situation, pos):
        """Score a root move by searching the situation it leads to."""
        branch = situation.clone()
        branch.place_token(pos, self.player.color, display=False)

        rating = self.alphabeta(branch, 1, -sys.float_info.max, sys.float_info.max)
        logger.debug("move %s -> rating (depth %d): %s", pos, self.current_max_tree_depth, rating)
        return rating

    def alphabeta(
        self, situation: GameSituation, depth: int, alpha: float, beta: float
    ) -> Optional[float]:
        """Depth limited alphabeta from the searching player's point of view.

        Even depths are the searching player's turn (maximizing), odd depths
        the opponent's (minimizing).

        Returns:
            The score of `situation`, or None if the time budget ran out.
        """
        self.passed_thinking_time = self._now_ms() - self.start_time
        if not self.is_in_time():
            return None

        if situation.is_uniform():
            if situation.dominant_color() is self.player.color:
                self.is_winning_situation = True
                return WIN_SCORE
            return LOSS_SCORE

        if depth == self.current_max_tree_depth:
            return self.evaluate_situation(situation)

        active_color = self.active_color_of_depth(depth)
        maximizing = self.is_alpha(depth)

        legal_moves = self.get_legal_positions(active_color, situation)
        legal_moves = self._presort(legal_moves, active_color, situation)
        for move in legal_moves:
            branch = situation.clone()
            branch.place_token(move, active_color, display=False)

            child = self.alphabeta(branch, depth + 1, alpha, beta)
            if child is None:
                return None

            if maximizing:
                alpha = max(alpha, child)
                if alpha >= beta:
                    return alpha
            else:
                beta = min(beta, child)
                if alpha >= beta:
                    return beta

        return alpha if maximizing else beta

    def evaluate_situation(self, situation: GameSituation) -> float:
        """Static evaluation of a whole situation for the searching player."""
        own_color = self.player.color
        opponent_color = own_color.opposite()

        value = 0.0
        for pos in situation.get_positions():
            field_color = situation.get_color(pos)
            if field_color is None:
                continue

            tokens = situation.get_tokens(pos)
            if field_color is own_color:
                if self.is_threatened(own_color, situation, pos):
                    value -= self.w_loss * tokens
                else:
                    value += tokens
            else:
                if self.is_threatened(opponent_color, situation, pos):
                    value += self.w_gain * tokens
                else:
                    value -= tokens
        return value

    def is_in_time(self) -> bool:
        # The first iteration always runs to completion
        if self.current_max_tree_depth <= 1:
            return True
        return self.passed_thinking_time < self.time_budget_ratio * self.thinking_time_ms

    def is_alpha(self, depth: int) -> bool:
        return depth % 2 == 0

    def active_color_of_depth(self, depth: int) -> GameColor:
        if self.is_alpha(depth):
            return self.player.color
        return self.player.color.opposite()

    def _presort(self, positions, color, situation):
        evaluated = self.secondary_evaluator.get_evaluated_positions(positions, color, situation)
        return [item.position for item in evaluated]
