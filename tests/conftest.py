"""Shared fixtures for the Overflow test suite."""

import sys
from pathlib import Path

import pytest

# Add parent directory to path to import modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from game.game_situation import FieldSetup, GameSituation
from game.overflow_board import OverflowBoard
from game.overflow_game import OverflowGame
from game.position import GameColor, Position


class FakeClock:
    """Clock returning seconds; moves forward by `step` on every call."""

    def __init__(self, start=1000.0, step=0.0):
        self.now = start
        self.step = step

    def __call__(self):
        value = self.now
        self.now += self.step
        return value

    def advance(self, seconds):
        self.now += seconds


class RecordingObserver:
    """Situation observer that records every notification."""

    def __init__(self):
        self.events = []

    def on_token_placed(self, situation, pos):
        self.events.append(("placed", pos, situation.total_tokens()))

    def on_overflow_step(self, situation):
        self.events.append(("step", None, situation.total_tokens()))

    def on_move_completed(self, color, pos, situation):
        self.events.append(("completed", pos, situation.total_tokens()))

    def kinds(self):
        return [kind for kind, _, _ in self.events]


def build_setup(fields):
    """Turn {(x, y): (color, tokens)} into FieldSetup entries."""
    return [
        FieldSetup(Position(x, y), color, tokens)
        for (x, y), (color, tokens) in (fields or {}).items()
    ]


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def make_situation():
    """Factory for situations: make_situation(width, height, {(x, y): (color, tokens)})."""

    def _make(width=3, height=3, fields=None):
        return GameSituation(OverflowBoard(width, height), build_setup(fields))

    return _make


@pytest.fixture
def make_game():
    """Factory for games: make_game(width, height, {(x, y): (color, tokens)})."""

    def _make(width=3, height=3, fields=None):
        return OverflowGame(width, height, build_setup(fields))

    return _make


W = GameColor.WHITE
B = GameColor.BLACK
