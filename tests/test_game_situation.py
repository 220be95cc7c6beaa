"""Tests for GameSituation queries, token operations and cascade resolution."""

import numpy as np
import pytest

from conftest import B, W, RecordingObserver
from game.game_situation import FieldSetup, GameSituation
from game.overflow_board import OverflowBoard
from game.position import Position


class TestSetupAndQueries:
    def test_empty_situation(self, make_situation):
        situation = make_situation(3, 3)
        assert situation.total_tokens() == 0
        assert situation.dominant_color() is None
        assert not situation.is_uniform()
        assert all(situation.is_empty(pos) for pos in situation.get_positions())

    def test_setup_populates_fields(self, make_situation):
        situation = make_situation(4, 4, {(0, 0): (W, 1), (2, 1): (B, 3)})
        assert situation.get_tokens(Position(0, 0)) == 1
        assert situation.get_color(Position(0, 0)) is W
        assert situation.get_tokens(Position(2, 1)) == 3
        assert situation.get_color(Position(2, 1)) is B
        assert situation.get_color(Position(1, 1)) is None
        assert situation.total_tokens() == 4

    def test_setup_rejects_overflowing_field(self):
        board = OverflowBoard(3, 3)
        with pytest.raises(ValueError, match="expected 0 to 1"):
            GameSituation(board, [FieldSetup(Position(0, 0), W, 2)])

    def test_setup_rejects_position_outside_board(self):
        board = OverflowBoard(3, 3)
        with pytest.raises(ValueError, match="outside the board"):
            GameSituation(board, [FieldSetup(Position(3, 0), W, 1)])

    def test_full_and_overflowing(self, make_situation):
        situation = make_situation(3, 3, {(0, 0): (W, 1), (1, 0): (B, 1), (1, 1): (W, 3)})
        assert situation.is_full(Position(0, 0))
        assert not situation.is_full(Position(1, 0))
        assert situation.is_full(Position(1, 1))
        assert not situation.is_full(Position(2, 2))
        assert not situation.is_overflowing(Position(1, 1))

    def test_get_tokens_returns_python_int(self, make_situation):
        situation = make_situation(3, 3, {(1, 1): (B, 2)})
        tokens = situation.get_tokens(Position(1, 1))
        assert tokens == 2
        assert type(tokens) is int
        assert type(situation.is_empty(Position(1, 1))) is bool


class TestDominantColor:
    def test_single_field_has_no_color(self, make_situation):
        situation = make_situation(3, 3, {(1, 1): (W, 3)})
        assert situation.dominant_color() is None

    def test_single_token_has_no_color(self, make_situation):
        situation = make_situation(3, 3, {(0, 0): (B, 1)})
        assert situation.total_tokens() < 2
        assert situation.dominant_color() is None

    def test_two_white_fields(self, make_situation):
        situation = make_situation(3, 3, {(0, 0): (W, 1), (2, 2): (W, 1)})
        assert situation.dominant_color() is W
        assert situation.is_uniform()

    def test_two_black_fields(self, make_situation):
        situation = make_situation(3, 3, {(0, 0): (B, 1), (1, 1): (B, 2)})
        assert situation.dominant_color() is B

    def test_mixed_fields(self, make_situation):
        situation = make_situation(3, 3, {(0, 0): (W, 1), (1, 1): (B, 2)})
        assert situation.dominant_color() is None


class TestTokenOperations:
    def test_relocate_token_does_not_cascade(self, make_situation):
        situation = make_situation(3, 3)
        corner = Position(0, 0)
        situation.relocate_token(corner, W)
        situation.relocate_token(corner, W)
        assert situation.get_tokens(corner) == 2
        assert situation.is_overflowing(corner)

    def test_relocate_token_recolors_field(self, make_situation):
        situation = make_situation(3, 3, {(1, 0): (B, 2)})
        situation.relocate_token(Position(1, 0), W)
        assert situation.get_color(Position(1, 0)) is W
        assert situation.get_tokens(Position(1, 0)) == 3

    def test_remove_token(self, make_situation):
        situation = make_situation(3, 3, {(1, 1): (B, 2)})
        assert situation.remove_token(Position(1, 1)) is B
        assert situation.get_tokens(Position(1, 1)) == 1
        assert situation.remove_token(Position(1, 1)) is B
        assert situation.is_empty(Position(1, 1))

    def test_remove_token_from_empty_field(self, make_situation):
        situation = make_situation(3, 3)
        assert situation.remove_token(Position(1, 1)) is None
        assert situation.total_tokens() == 0

    def test_clone_is_independent(self, make_situation):
        situation = make_situation(3, 3, {(1, 1): (W, 1)})
        situation.observer = RecordingObserver()
        copy = situation.clone()

        copy.place_token(Position(1, 1), W)
        copy.place_token(Position(0, 0), B)

        assert situation.get_tokens(Position(1, 1)) == 1
        assert situation.is_empty(Position(0, 0))
        assert copy.board is situation.board
        assert copy.observer is None
        assert not np.shares_memory(copy.fields, situation.fields)


class TestCascade:
    def test_corner_overflow_on_3x3(self, make_situation):
        situation = make_situation(3, 3)
        corner = Position(0, 0)

        situation.place_token(corner, W)
        assert situation.is_full(corner)
        assert situation.get_tokens(corner) == 1

        situation.place_token(corner, W)
        assert situation.is_empty(corner)
        assert situation.get_tokens(Position(1, 0)) == 1
        assert situation.get_tokens(Position(0, 1)) == 1
        assert situation.get_color(Position(1, 0)) is W
        assert situation.get_color(Position(0, 1)) is W
        assert situation.total_tokens() == 2

    def test_overflow_captures_opponent_tokens(self, make_situation):
        situation = make_situation(3, 3, {(0, 0): (W, 1), (1, 0): (B, 1), (2, 2): (B, 1)})
        situation.place_token(Position(0, 0), W)
        assert situation.get_color(Position(1, 0)) is W
        assert situation.get_tokens(Position(1, 0)) == 2
        assert situation.get_color(Position(2, 2)) is B

    def test_chain_reaction(self, make_situation):
        situation = make_situation(3, 3, {(0, 0): (W, 1), (1, 0): (W, 2), (2, 2): (B, 1)})
        situation.place_token(Position(0, 0), W)

        # (0,0) overflows into (1,0), which then overflows itself
        assert situation.is_empty(Position(1, 0))
        assert situation.get_tokens(Position(0, 0)) == 1
        assert situation.get_tokens(Position(2, 0)) == 1
        assert situation.get_tokens(Position(1, 1)) == 1
        assert situation.get_tokens(Position(0, 1)) == 1
        assert situation.total_tokens() == 5

    def test_cascade_stops_when_board_is_won(self, make_situation):
        situation = make_situation(3, 3, {(0, 0): (W, 1), (1, 0): (B, 2)})
        situation.place_token(Position(0, 0), W)

        # (1,0) was captured with 3 tokens; the board is white before it overflows
        assert situation.dominant_color() is W
        assert situation.get_tokens(Position(1, 0)) == 3
        assert situation.is_overflowing(Position(1, 0))
        assert situation.total_tokens() == 4

    @pytest.mark.parametrize("width,height,seed", [(3, 3, 1), (4, 4, 2), (5, 3, 3), (4, 4, 4)])
    def test_token_conservation(self, make_situation, width, height, seed):
        rng = np.random.default_rng(seed)
        situation = make_situation(width, height)
        color = W

        for _ in range(200):
            legal = [
                pos
                for pos in situation.get_positions()
                if situation.get_color(pos) in (None, color)
            ]
            pos = legal[int(rng.integers(len(legal)))]
            before = situation.total_tokens()

            situation.place_token(pos, color)
            assert situation.total_tokens() == before + 1

            if situation.is_uniform():
                break
            # Between moves no field holds as many tokens as its capacity
            assert not any(situation.is_overflowing(p) for p in situation.get_positions())
            color = color.opposite()

    def test_observer_notified_only_with_display(self, make_situation):
        situation = make_situation(3, 3, {(0, 0): (W, 1), (2, 2): (B, 1)})
        observer = RecordingObserver()
        situation.observer = observer

        situation.clone().place_token(Position(0, 0), W, display=True)
        assert observer.events == []

        situation.place_token(Position(0, 0), W, display=False)
        assert observer.events == []

    def test_observer_sees_each_step(self, make_situation):
        situation = make_situation(3, 3, {(0, 0): (W, 1), (1, 0): (W, 2), (2, 2): (B, 1)})
        observer = RecordingObserver()
        situation.observer = observer

        situation.place_token(Position(0, 0), W, display=True)
        assert observer.kinds() == ["placed", "step", "step"]
        assert observer.events[0][1] == Position(0, 0)
