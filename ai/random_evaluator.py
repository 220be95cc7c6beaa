from __future__ import annotations

from ai.evaluator import Evaluator


class RandomEvaluator(Evaluator):
    """Scores every candidate the same, so the choice is uniform over legal moves."""

    def evaluate_position(self, color, situation, pos):
        return 0.0
