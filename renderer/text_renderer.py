"""Text-based renderer that prints the board to a stream."""

from __future__ import annotations

import sys
from typing import TextIO

from game.formatters import TranscriptFormatter
from shared.interfaces import IRenderer


class TextRenderer(IRenderer):
    """Renderer that prints the board after each move, and optionally after each cascade step."""

    def __init__(self, stream: TextIO | None = None, show_steps: bool = False):
        self._stream: TextIO = stream or sys.stdout
        self.show_steps = show_steps
        self.formatter = TranscriptFormatter()
        self._step = 0

    def reset_board(self) -> None:
        self.report_status("Board reset.")

    def report_status(self, message: str) -> None:
        if message is None:
            return
        print(message, file=self._stream)

    def on_token_placed(self, situation, pos) -> None:
        self._step = 0
        if self.show_steps:
            self.report_status(f"Token placed on {pos}")
            self._print_situation(situation)

    def on_overflow_step(self, situation) -> None:
        self._step += 1
        if self.show_steps:
            self.report_status(f"Overflow step {self._step}")
            self._print_situation(situation)

    def on_move_completed(self, color, pos, situation) -> None:
        suffix = f" ({self._step} overflow steps)" if self._step else ""
        self.report_status(f"{color.value.capitalize()} played {pos}{suffix}")
        self._print_situation(situation)

    def _print_situation(self, situation) -> None:
        for line in self.formatter.situation_to_lines(situation):
            print(line, file=self._stream)
        print(file=self._stream)
