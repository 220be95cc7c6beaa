"""Game move writers for Overflow.

Writers combine the transcript formatter with an output stream to log a game
move by move.
"""

import sys
from abc import ABC, abstractmethod
from typing import TextIO

from game.formatters import TranscriptFormatter


class GameWriter(ABC):
    """Abstract base class for game move writers.

    A GameWriter combines a formatter with an output stream. Subclasses
    implement the header and move formatting.
    """

    def __init__(self, output: TextIO):
        """Initialize the writer.

        Args:
            output: Output stream to write to (file, stdout, etc.)
        """
        self.output = output
        self._game_started = False

    @abstractmethod
    def write_header(
        self,
        seed: int,
        width: int,
        height: int,
        player1_name: str | None = None,
        player2_name: str | None = None,
    ) -> None:
        """Write the header with game metadata.

        Args:
            seed: Random seed for this game
            width: Board width
            height: Board height
            player1_name: Optional name for player 1
            player2_name: Optional name for player 2
        """

    @abstractmethod
    def write_move(self, player_num: int, pos) -> None:
        """Write one move.

        Args:
            player_num: Player number (1 or 2)
            pos: Position the token was placed on
        """

    def write_comment(self, message: str) -> None:
        """Write a status message. The default implementation ignores it."""

    def write_footer(self, game=None) -> None:
        """Write a footer with the final game state (optional)."""

    def flush(self) -> None:
        self.output.flush()

    def close(self) -> None:
        """Close the output stream, except stdout and stderr."""
        if self.output in (sys.stdout, sys.stderr):
            return
        self.output.close()


class TranscriptWriter(GameWriter):
    """Writes games in transcript format.

    File format:
        # Seed: 12345              # Header comments
        # Board: 4x4
        # Player 1: Search 1
        # Player 2: Random 2
        #
        Player 1: 0,0              # Move with player prefix
        Player 2: 3,3
        #
        # Final game state:        # Footer comments
        # ...
    """

    def __init__(self, output: TextIO):
        super().__init__(output)
        self.formatter = TranscriptFormatter()

    def write_header(self, seed, width, height, player1_name=None, player2_name=None) -> None:
        self.output.write(f"# Seed: {seed}\n")
        self.output.write(f"# Board: {width}x{height}\n")

        if player1_name:
            self.output.write(f"# Player 1: {player1_name}\n")
        if player2_name:
            self.output.write(f"# Player 2: {player2_name}\n")

        self.output.write("#\n")
        self._game_started = True
        self.flush()

    def write_move(self, player_num, pos) -> None:
        self.output.write(f"Player {player_num}: {self.formatter.move_to_transcript(pos)}\n")
        self.flush()

    def write_comment(self, message: str) -> None:
        self.output.write(f"# {message}\n")
        self.flush()

    def write_footer(self, game=None) -> None:
        """Write the final board and the number of moves played.

        Args:
            game: OverflowGame instance to read the final state from
        """
        if game is None:
            return

        self.output.write("#\n")
        self.output.write("# Final game state:\n")
        self.output.write("# ---------------\n")
        for line in self.formatter.situation_to_lines(game.situation):
            self.output.write(f"# {line}\n")
        self.output.write("# ---------------\n")
        self.output.write(f"# Moves: {len(game.move_history)}\n")
        self.flush()
