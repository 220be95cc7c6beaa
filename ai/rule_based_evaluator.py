"""Fast rule ladder for scoring a single candidate move.

Rules are tried top to bottom and the first match decides the score:

    +5  threatened and full
    +4  occupied, with an opponent neighbor of equal capacity and none larger
    +3  not full, smaller capacity than every neighbor, next to an opponent
    +2  not full, smaller capacity than every neighbor
    +1  empty, no opponent neighbor
    -1  full
    -2  next to an opponent
     0  anything else
"""

from __future__ import annotations

from ai.evaluator import Evaluator


class RuleBasedEvaluator(Evaluator):
    """Scores candidates with a fixed rule ladder. Also used to order moves in the game tree."""

    def evaluate_position(self, color, situation, pos):
        if self.is_threatened(color, situation, pos) and situation.is_full(pos):
            return 5.0

        if not situation.is_empty(pos) and self.has_overtaking_opponents(color, situation, pos):
            return 4.0

        if not situation.is_full(pos) and self.has_lowest_limit_among_neighbors(situation, pos):
            if self.has_opponents(color, situation, pos):
                return 3.0
            return 2.0

        if situation.is_empty(pos) and not self.has_opponents(color, situation, pos):
            return 1.0

        if situation.is_full(pos):
            return -1.0

        if self.has_opponents(color, situation, pos):
            return -2.0

        return 0.0

    def has_overtaking_opponents(self, color, situation, pos) -> bool:
        """True if an opponent neighbor shares the limit of `pos` and none has a larger one."""
        limit = situation.get_limit(pos)
        overtaking = False
        for opponent in self.opponents_of_position(color, situation, pos):
            opponent_limit = situation.get_limit(opponent)
            if opponent_limit > limit:
                return False
            if opponent_limit == limit:
                overtaking = True
        return overtaking

    def has_lowest_limit_among_neighbors(self, situation, pos) -> bool:
        limit = situation.get_limit(pos)
        return all(limit < situation.get_limit(neighbor) for neighbor in situation.get_neighbors(pos))
