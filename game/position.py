"""Value objects for board coordinates and token colors."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class GameColor(Enum):
    """The two token colors. WHITE belongs to player 1 and moves first."""

    WHITE = "white"
    BLACK = "black"

    def opposite(self) -> GameColor:
        return GameColor.BLACK if self is GameColor.WHITE else GameColor.WHITE

    @property
    def sign(self) -> int:
        """Sign used for this color in a situation's field array."""
        return 1 if self is GameColor.WHITE else -1

    @classmethod
    def from_player(cls, n: int) -> GameColor:
        """Map player number (1 or 2) to its color."""
        if n not in (1, 2):
            raise ValueError(f"Invalid player number: {n}. Must be 1 or 2")
        return cls.WHITE if n == 1 else cls.BLACK


@dataclass(frozen=True)
class Position:
    """A single field on the board. Equal and hashable by value."""

    x: int
    y: int

    @property
    def xy(self) -> tuple[int, int]:
        return self.x, self.y

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"

    @classmethod
    def from_str(cls, text: str) -> Position:
        """Parse the 'x,y' form used on the command line.

        Examples:
            >>> Position.from_str("2,3")
            Position(x=2, y=3)
        """
        parts = text.strip().strip("()").split(",")
        if len(parts) != 2:
            raise ValueError(f"Invalid position: {text!r}. Expected X,Y")
        try:
            x, y = int(parts[0]), int(parts[1])
        except ValueError as e:
            raise ValueError(f"Invalid position: {text!r}. Expected X,Y") from e
        if x < 0 or y < 0:
            raise ValueError(f"Invalid position: {text!r}. Coordinates must be non-negative")
        return cls(x, y)
