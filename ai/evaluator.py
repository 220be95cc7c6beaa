"""Base class shared by the random, rule-based and game tree evaluators.

An evaluator scores candidate moves for the player it belongs to and picks
one of the best-scored moves at random. Subclasses only decide how a single
candidate is scored; the game tree evaluator also overrides the selection to
run its iterative deepening loop.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Callable, Optional

import numpy as np

from ai.scored_position import ScoredPosition
from game.game_situation import GameSituation
from game.position import GameColor, Position

logger = logging.getLogger(__name__)


class Evaluator(ABC):
    """Scores candidate moves and selects one of the best."""

    def __init__(
        self,
        player,
        rng: Optional[np.random.Generator] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        """Initialize the evaluator.

        Args:
            player: The player the evaluator selects moves for. Must expose
                `color` and `situation`.
            rng: Random generator used to break ties (default: unseeded)
            clock: Callable returning the current time in seconds
                (default: time.monotonic)
        """
        self.player = player
        self.rng = rng if rng is not None else np.random.default_rng()
        self.clock = clock if clock is not None else time.monotonic

        # Milliseconds
        self.start_time = 0.0
        self.passed_thinking_time = 0.0

    @abstractmethod
    def evaluate_position(
        self, color: GameColor, situation: GameSituation, pos: Position
    ) -> Optional[float]:
        """Score placing a token of `color` on `pos`.

        Returns:
            The score, or None if the evaluation ran out of time.
        """

    def select_move(self) -> Optional[Position]:
        """Run the evaluation and return the chosen move.

        Returns:
            A best-scored legal position, or None if the player has no legal move.
        """
        logger.info("calculate next move for %s", self.player.color.value)
        self.start_time = self._now_ms()

        selected = self.select_best_position()

        self.passed_thinking_time = self._now_ms() - self.start_time
        logger.info("calculation took %.0f ms", self.passed_thinking_time)
        return selected

    def select_best_position(self) -> Optional[Position]:
        color = self.player.color
        legal_positions = self.get_legal_positions(color, self.player.situation)
        evaluated = self.get_evaluated_positions(legal_positions, color)
        best_positions = self.get_best_positions(evaluated)
        return self.get_one_best_position(best_positions)

    def get_legal_positions(self, color: GameColor, situation: GameSituation) -> list[Position]:
        """Fields that are empty or already hold tokens of `color`, in board order."""
        return [
            pos
            for pos in situation.get_positions()
            if situation.get_color(pos) in (None, color)
        ]

    def get_evaluated_positions(
        self,
        positions: list[Position],
        color: GameColor,
        situation: Optional[GameSituation] = None,
    ) -> list[ScoredPosition]:
        """Score positions for this evaluator's player and sort them.

        Args:
            positions: Candidate positions
            color: Color on turn. The result is sorted descending when it is
                the evaluator's own color and ascending otherwise.
            situation: Situation to score on (default: the live situation)

        Returns:
            Sorted scored positions, or an empty list if any score was aborted.
        """
        if situation is None:
            situation = self.player.situation

        own_color = self.player.color
        evaluated = []
        for pos in positions:
            score = self.evaluate_position(own_color, situation, pos)
            if score is None:
                return []
            evaluated.append(ScoredPosition(pos, score))

        if color is own_color:
            return ScoredPosition.sort_descending(evaluated)
        return ScoredPosition.sort_ascending(evaluated)

    def get_best_positions(self, evaluated: list[ScoredPosition]) -> list[Position]:
        """Return the leading positions that share the first (extreme) score."""
        if not evaluated:
            return []

        extreme = evaluated[0].score
        best = []
        for item in evaluated:
            if item.score != extreme:
                break
            best.append(item.position)
        return best

    def get_one_best_position(self, best_positions: list[Position]) -> Optional[Position]:
        """Pick one of equally scored positions uniformly at random."""
        if not best_positions:
            return None
        return best_positions[int(self.rng.integers(len(best_positions)))]

    #
    # Neighborhood helpers
    #
    def is_opponent(self, color: GameColor, situation: GameSituation, pos: Position) -> bool:
        """True if `pos` holds tokens of the other color."""
        field_color = situation.get_color(pos)
        return field_color is not None and field_color is not color

    def opponents_of_position(
        self, color: GameColor, situation: GameSituation, pos: Position
    ) -> list[Position]:
        """Neighbors of `pos` that hold tokens of the other color, in neighbor order."""
        return [
            neighbor
            for neighbor in situation.get_neighbors(pos)
            if self.is_opponent(color, situation, neighbor)
        ]

    def has_opponents(self, color: GameColor, situation: GameSituation, pos: Position) -> bool:
        return len(self.opponents_of_position(color, situation, pos)) > 0

    def is_threatened(self, color: GameColor, situation: GameSituation, pos: Position) -> bool:
        """True if the first opponent neighbor of `pos` is full.

        Only the first opponent neighbor (in neighbor order) is inspected; the
        fullness of any further opponent neighbors is ignored.
        """
        for opponent in self.opponents_of_position(color, situation, pos):
            return situation.is_full(opponent)
        return False

    def _now_ms(self) -> float:
        return self.clock() * 1000.0
