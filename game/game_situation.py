"""Token state on an overflow board and the cascade mechanics that change it."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

import numpy as np

from game.overflow_board import OverflowBoard
from game.position import GameColor, Position

if TYPE_CHECKING:  # pragma: no cover - used for type hints only
    from shared.interfaces import ISituationObserver


@dataclass(frozen=True)
class FieldSetup:
    """Pre-populates one field when a situation is created."""

    position: Position
    color: GameColor
    tokens: int


class GameSituation:
    """Signed token counts for every field of a board.

    FIELD STATE (self.fields): 2D int16 array, shape (width, height), indexed [x, y]
       > 0: white tokens (value = count)
       < 0: black tokens (-value = count)
       = 0: empty field

    Between moves every field holds at most capacity - 1 tokens. While a
    cascade is being resolved a field may temporarily hold more.
    """

    def __init__(
        self,
        board: OverflowBoard,
        setup: Iterable[FieldSetup] | None = None,
        clone: GameSituation | None = None,
    ):
        """Initialize a situation.

        Args:
            board: Shared board geometry
            setup: Optional field setups describing a game already in progress
            clone: GameSituation to copy the field state from
        """
        self.board = board
        self.observer: ISituationObserver | None = None

        if clone is not None:
            self.fields = np.copy(clone.fields)
            return

        self.fields = np.zeros((board.width, board.height), dtype=np.int16)
        for field in setup or ():
            if not board.contains(field.position):
                raise ValueError(f"Setup position {field.position} is outside the board")
            limit = board.get_limit(field.position)
            if not 0 <= field.tokens < limit:
                raise ValueError(
                    f"Setup for {field.position} has {field.tokens} tokens; "
                    f"expected 0 to {limit - 1}"
                )
            self.fields[field.position.x, field.position.y] = field.color.sign * field.tokens

    # ------------------------------------------------------------------
    # Board geometry passthroughs
    # ------------------------------------------------------------------

    @property
    def width(self) -> int:
        return self.board.width

    @property
    def height(self) -> int:
        return self.board.height

    def get_positions(self) -> tuple[Position, ...]:
        return self.board.positions

    def get_limit(self, pos: Position) -> int:
        return self.board.get_limit(pos)

    def get_neighbors(self, pos: Position) -> tuple[Position, ...]:
        return self.board.get_neighbors(pos)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_tokens(self, pos: Position) -> int:
        return abs(int(self.fields[pos.xy]))

    def total_tokens(self) -> int:
        return int(np.abs(self.fields).sum())

    def get_color(self, pos: Position) -> GameColor | None:
        """Color of the tokens on a field, or None if the field is empty."""
        value = self.fields[pos.xy]
        if value > 0:
            return GameColor.WHITE
        if value < 0:
            return GameColor.BLACK
        return None

    def is_empty(self, pos: Position) -> bool:
        return self.get_tokens(pos) == 0

    def is_full(self, pos: Position) -> bool:
        """True if one more token makes this field overflow."""
        return self.board.get_limit(pos) - self.get_tokens(pos) == 1

    def is_overflowing(self, pos: Position) -> bool:
        return self.get_tokens(pos) >= self.board.get_limit(pos)

    def dominant_color(self) -> GameColor | None:
        """Return the color of the board if every occupied field shares it.

        At least two fields have to be occupied; a single stack of tokens
        gives the board no color, so the same holds for fewer than two tokens.
        """
        occupied = self.fields[self.fields != 0]
        if occupied.size < 2:
            return None
        if np.all(occupied > 0):
            return GameColor.WHITE
        if np.all(occupied < 0):
            return GameColor.BLACK
        return None

    def is_uniform(self) -> bool:
        return self.dominant_color() is not None

    # ------------------------------------------------------------------
    # Token operations
    # ------------------------------------------------------------------

    def place_token(self, pos: Position, color: GameColor, display: bool = False) -> None:
        """Add a token of the given color and resolve any resulting overflows.

        Args:
            pos: Field receiving the token
            color: Color of the token (recolors tokens already on the field)
            display: If True, the observer is notified about every step
        """
        self.relocate_token(pos, color)
        self._resolve_overflows(pos, display)

    def relocate_token(self, pos: Position, color: GameColor) -> None:
        """Add one token without triggering overflows."""
        tokens = self.get_tokens(pos) + 1
        self.fields[pos.xy] = color.sign * tokens

    def remove_token(self, pos: Position) -> GameColor | None:
        """Remove one token and return its color (None if the field was empty)."""
        color = self.get_color(pos)
        if color is not None:
            self.fields[pos.xy] -= color.sign
        return color

    def clone(self) -> GameSituation:
        """Copy the field state; the board is shared and the observer is not copied."""
        return GameSituation(self.board, clone=self)

    # ------------------------------------------------------------------
    # Cascade resolution
    # ------------------------------------------------------------------

    def _resolve_overflows(self, start: Position, display: bool) -> None:
        if display and self.observer is not None:
            self.observer.on_token_placed(self, start)

        # Fields waiting to overflow, in order of arrival, without duplicates
        pending: deque[Position] = deque()
        if self.is_overflowing(start):
            pending.append(start)

        # Stop as soon as the board is won
        while pending and not self.is_uniform():
            self._overflow_step(pending)
            if display and self.observer is not None:
                self.observer.on_overflow_step(self)

    def _overflow_step(self, pending: deque[Position]) -> None:
        head = pending[0]

        for neighbor in self.board.get_neighbors(head):
            self.relocate_token(neighbor, self.remove_token(head))
            if self.is_overflowing(neighbor) and neighbor not in pending:
                pending.append(neighbor)

        # A field can be refilled above its capacity by several overflows
        if not self.is_overflowing(head):
            pending.popleft()

    def __repr__(self) -> str:
        return f"GameSituation({self.width}x{self.height}, tokens={self.total_tokens()})"
