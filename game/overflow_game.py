from __future__ import annotations

from typing import Iterable

from .constants import (
    MAX_BOARD_DIMENSION,
    MIN_BOARD_DIMENSION,
    PLAYER_1_WIN,
    PLAYER_2_WIN,
)
from .game_situation import FieldSetup, GameSituation
from .overflow_board import OverflowBoard
from .position import GameColor, Position


class IllegalMoveError(Exception):
    """Raised when a move breaks the rules, e.g. placing on an opponent field."""


class OverflowGame:
    """A running game: board, current situation, move history and observers.

    White (player 1) moves on odd turns and black (player 2) on even turns.
    The game is over as soon as the situation is uniform in one color.
    """

    def __init__(
        self,
        width=4,
        height=4,
        setup: Iterable[FieldSetup] | None = None,
    ):
        for name, value in (("width", width), ("height", height)):
            if not MIN_BOARD_DIMENSION <= value <= MAX_BOARD_DIMENSION:
                raise ValueError(
                    f"Unsupported board {name}: {value}. "
                    f"Must be between {MIN_BOARD_DIMENSION} and {MAX_BOARD_DIMENSION}."
                )

        self.board = OverflowBoard(width, height)
        self.situation = GameSituation(self.board, setup)
        self.move_history: list[tuple[GameColor, Position]] = []
        self.observers = []

        self._previous_situation: GameSituation | None = None
        self._is_undone = False

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def add_observer(self, observer) -> None:
        if observer not in self.observers:
            self.observers.append(observer)
        self.situation.observer = self

    def remove_observer(self, observer) -> None:
        if observer in self.observers:
            self.observers.remove(observer)

    def on_token_placed(self, situation, pos) -> None:
        for observer in self.observers:
            observer.on_token_placed(situation, pos)

    def on_overflow_step(self, situation) -> None:
        for observer in self.observers:
            observer.on_overflow_step(situation)

    # ------------------------------------------------------------------
    # Turns
    # ------------------------------------------------------------------

    def get_turn(self) -> int:
        return len(self.move_history) + 1

    def get_color_of_turn(self, turn: int) -> GameColor:
        return GameColor.WHITE if turn % 2 == 1 else GameColor.BLACK

    def get_current_color(self) -> GameColor:
        return self.get_color_of_turn(self.get_turn())

    def get_cur_player_value(self) -> int:
        # Returns 1 if white (player 1) is on turn and 2 if black (player 2) is
        return 1 if self.get_current_color() is GameColor.WHITE else 2

    def get_latest_move(self) -> Position | None:
        if not self.move_history:
            return None
        return self.move_history[-1][1]

    def get_legal_positions(self, color: GameColor) -> list[Position]:
        """Fields that are empty or already hold tokens of the given color."""
        situation = self.situation
        return [
            pos
            for pos in situation.get_positions()
            if situation.get_color(pos) in (None, color)
        ]

    # ------------------------------------------------------------------
    # Moves
    # ------------------------------------------------------------------

    def validate_move(self, color: GameColor, pos: Position) -> None:
        """Raise IllegalMoveError if the move is not allowed."""
        if color is not self.get_current_color():
            raise IllegalMoveError(f"inactive player tried to move: {color.value}")

        if not self.board.contains(pos):
            raise IllegalMoveError(f"move {pos} is outside the board")

        field_color = self.situation.get_color(pos)
        if field_color is not None and field_color is not color:
            raise IllegalMoveError(f"illegal move by {color.value}: {pos} is occupied")

    def make_move(self, color: GameColor, pos: Position, display: bool = True) -> None:
        """Validate and apply a move, then notify observers.

        Args:
            color: Color of the moving player
            pos: Field to place the token on
            display: If True, observers follow the move and its cascade
        """
        self.validate_move(color, pos)

        self._previous_situation = self.situation.clone()
        self._is_undone = False

        self.situation.place_token(pos, color, display)
        self.move_history.append((color, pos))

        if display:
            for observer in self.observers:
                observer.on_move_completed(color, pos, self.situation)

    def can_undo(self) -> bool:
        return self._previous_situation is not None and not self._is_undone

    def undo(self) -> bool:
        """Restore the situation before the latest move (single level).

        Returns:
            bool: True if a move was undone
        """
        if not self.can_undo():
            return False

        previous = self._previous_situation
        previous.observer = self.situation.observer
        self.situation = previous
        self.move_history.pop()
        self._previous_situation = None
        self._is_undone = True
        return True

    # ------------------------------------------------------------------
    # Outcome
    # ------------------------------------------------------------------

    def get_winner_color(self) -> GameColor | None:
        return self.situation.dominant_color()

    def is_game_over(self) -> bool:
        return self.get_winner_color() is not None

    def get_game_ended(self):
        # Returns None if the game is running, otherwise the outcome constant
        winner = self.get_winner_color()
        if winner is None:
            return None
        return PLAYER_1_WIN if winner is GameColor.WHITE else PLAYER_2_WIN
