"""Transcript formatter for Overflow.

Converts moves and situations to the plain text used in transcripts.
Move format: "x,y" (the same form accepted by --replay-moves).
Field format: "W3" for three white tokens, "B1" for one black token, "." for empty.
"""

from __future__ import annotations

from game.game_situation import GameSituation
from game.position import GameColor, Position

COLOR_LETTERS = {GameColor.WHITE: "W", GameColor.BLACK: "B"}


class TranscriptFormatter:
    """Converts moves and situations to/from transcript text."""

    @staticmethod
    def move_to_transcript(pos: Position) -> str:
        return f"{pos.x},{pos.y}"

    @staticmethod
    def transcript_to_position(transcript_str: str) -> Position:
        """Parse a move written by move_to_transcript.

        Raises:
            ValueError: If the string is not of the form "x,y"
        """
        return Position.from_str(transcript_str)

    @staticmethod
    def player_label(player_num: int, player_name: str | None = None) -> str:
        """Format a player label like "Player 1" or "Player 1 (Search 1)"."""
        base = f"Player {player_num}"
        if player_name:
            return f"{base} ({player_name})"
        return base

    @staticmethod
    def field_to_text(situation: GameSituation, pos: Position) -> str:
        color = situation.get_color(pos)
        if color is None:
            return "."
        return f"{COLOR_LETTERS[color]}{situation.get_tokens(pos)}"

    @classmethod
    def situation_to_lines(cls, situation: GameSituation) -> list[str]:
        """Render a situation as one line per board row, top row first."""
        cell_width = 3
        lines = []
        for y in range(situation.height):
            cells = [
                cls.field_to_text(situation, Position(x, y)).rjust(cell_width)
                for x in range(situation.width)
            ]
            lines.append("".join(cells).rstrip())
        return lines
