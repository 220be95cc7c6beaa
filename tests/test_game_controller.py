"""
Unit tests for OverflowGameController.

Tests that the game controller correctly handles:
- Game ending in headless mode
- max_games limit enforcement
- Replay mode (complete, exhausted and illegal replays)
- Winner display and statistics
"""

from io import StringIO

import pytest

from controller.overflow_game_controller import OverflowGameController
from factory import OverflowFactory
from game.constants import PLAYER_1_WIN, PLAYER_2_WIN, TIE
from game.player_config import PlayerConfig
from game.position import Position
from renderer.text_renderer import TextRenderer


def moves(text):
    return [Position.from_str(move) for move in text.split()]


# White overflows its corner into black's only field on the third move
WHITE_WINS = "0,0 1,0 0,0"


class TestGameControllerHeadless:
    def test_replay_game_ends_with_winner(self, capsys):
        controller = OverflowGameController(
            width=3,
            height=3,
            seed=1,
            replay_moves=moves(WHITE_WINS),
            log_to_screen=True,
            track_statistics=True,
        )
        controller.run()

        out = capsys.readouterr().out
        assert "Player 1: 0,0" in out
        assert "Player 2: 1,0" in out
        assert "# Winner: Player 1 (Replay 1) after 3 moves" in out
        assert "# Replay complete" in out
        assert controller.session.get_games_played() == 1
        assert controller.win_loss_stats[PLAYER_1_WIN] == 1

    def test_exhausted_replay_stops(self, capsys):
        controller = OverflowGameController(width=3, height=3, seed=1, replay_moves=moves("0,0 2,2"), log_to_screen=True)
        controller.run()

        out = capsys.readouterr().out
        assert "# Replay finished: No more moves for player 1" in out
        assert controller.session.get_games_played() == 0
        assert len(controller.session.game.move_history) == 2

    def test_illegal_replay_stops(self, capsys):
        controller = OverflowGameController(width=3, height=3, seed=1, replay_moves=moves("0,0 0,0"), log_to_screen=True)
        controller.run()

        out = capsys.readouterr().out
        assert "# Replay stopped: illegal move by black" in out
        assert len(controller.session.game.move_history) == 1

    def test_max_games_limit(self):
        controller = OverflowGameController(
            width=3,
            height=3,
            seed=3,
            player1_config=PlayerConfig.random(),
            player2_config=PlayerConfig.heuristic(),
            max_games=2,
            headless=True,
            track_statistics=True,
        )
        controller.run()

        assert controller.session.get_games_played() == 2
        assert len(controller.game_stats) == 2
        assert sum(controller.win_loss_stats.values()) == 2
        assert controller.win_loss_stats[TIE] == 0

    def test_each_game_ends_with_a_uniform_board(self):
        controller = OverflowGameController(
            width=3,
            height=3,
            seed=8,
            player1_config=PlayerConfig.heuristic(),
            player2_config=PlayerConfig.random(),
            max_games=1,
            headless=True,
        )
        controller.run()

        assert controller.session.game.get_game_ended() in (PLAYER_1_WIN, PLAYER_2_WIN)

    def test_no_move_ends_game_as_tie(self):
        controller = OverflowGameController(
            width=3,
            height=3,
            seed=1,
            player1_config=PlayerConfig.random(),
            player2_config=PlayerConfig.random(),
            max_games=1,
            track_statistics=True,
        )
        controller.session.player1.get_action = lambda: None
        controller.run()

        assert controller.win_loss_stats[TIE] == 1
        assert controller.session.get_games_played() == 1

    def test_game_ending_is_processed_once(self):
        controller = OverflowGameController(
            width=3, height=3, seed=1, replay_moves=moves(WHITE_WINS), track_statistics=True
        )
        controller.run()
        controller.run()

        assert controller.session.get_games_played() == 1
        assert controller.win_loss_stats[PLAYER_1_WIN] == 1

    def test_update_game_reports_completion(self):
        controller = OverflowGameController(width=3, height=3, seed=1, replay_moves=moves(WHITE_WINS))
        assert controller.update_game() is False
        assert controller.update_game() is False
        assert controller.update_game() is True
        assert controller.update_game() is True
        assert controller.session.get_games_played() == 1

    def test_move_delay_between_moves(self, monkeypatch):
        sleeps = []
        monkeypatch.setattr("controller.overflow_game_controller.time.sleep", sleeps.append)
        controller = OverflowGameController(
            width=3, height=3, seed=1, replay_moves=moves(WHITE_WINS), move_delay=0.25
        )
        controller.run()
        assert sleeps == [0.25, 0.25]

    def test_no_delay_by_default(self, monkeypatch):
        sleeps = []
        monkeypatch.setattr("controller.overflow_game_controller.time.sleep", sleeps.append)
        OverflowGameController(width=3, height=3, seed=1, replay_moves=moves(WHITE_WINS)).run()
        assert sleeps == []

    def test_invalid_renderer(self):
        with pytest.raises(TypeError, match="renderer_or_factory"):
            OverflowGameController(width=3, height=3, seed=1, renderer_or_factory=42)


class TestStatusRouting:
    def test_every_game_reports_seed_to_transcript(self, capsys):
        controller = OverflowGameController(
            width=3,
            height=3,
            seed=3,
            player1_config=PlayerConfig.random(),
            player2_config=PlayerConfig.random(),
            max_games=2,
            headless=True,
            log_to_screen=True,
        )
        controller.run()

        lines = capsys.readouterr().out.splitlines()
        seed_lines = [line for line in lines if "-- Setting Seed:" in line]
        assert len(seed_lines) == 2
        assert seed_lines[0] == "# -- Setting Seed: 3"
        assert all(line.startswith("# ") for line in seed_lines)
        assert lines.count("# ** New game (3x3) **") == 2

    def test_headless_run_without_transcript_is_silent(self, capsys):
        controller = OverflowGameController(
            width=3,
            height=3,
            seed=3,
            player1_config=PlayerConfig.random(),
            player2_config=PlayerConfig.random(),
            max_games=2,
            headless=True,
        )
        controller.run()
        assert capsys.readouterr().out == ""

    def test_first_game_messages_reach_renderer(self):
        stream = StringIO()
        controller = OverflowFactory(text_stream=stream).create_controller(
            width=3, height=3, seed=1, replay_moves=moves(WHITE_WINS)
        )
        controller.run()
        assert stream.getvalue().startswith("-- Setting Seed: 1\n** New game (3x3) **\n-- Replay Mode --\n")


class TestStatistics:
    def test_print_statistics(self, capsys):
        controller = OverflowGameController(
            width=3, height=3, seed=1, replay_moves=moves(WHITE_WINS), track_statistics=True
        )
        controller.run()
        capsys.readouterr()

        controller.print_statistics()
        out = capsys.readouterr().out
        assert "STATISTICS" in out
        assert "Games played: 1" in out
        assert "Player 1 wins: 1 (100.0%)" in out
        assert "Mean moves per game: 3.0" in out
        assert "Shortest game: 3" in out

    def test_summary(self):
        controller = OverflowGameController(
            width=3, height=3, seed=1, replay_moves=moves(WHITE_WINS), track_statistics=True
        )
        controller.run()

        summary = controller.summarize_statistics()
        assert summary["games"] == 1
        assert summary["outcomes"]["Player 1 wins"] == (1, 100.0)
        assert summary["outcomes"]["Ties"] == (0, 0.0)
        assert (summary["min_moves"], summary["max_moves"]) == (3, 3)
        assert summary["std_time"] == 0.0

    def test_no_statistics_without_tracking(self, capsys):
        controller = OverflowGameController(width=3, height=3, seed=1, replay_moves=moves(WHITE_WINS))
        controller.run()
        assert controller.summarize_statistics() is None
        capsys.readouterr()

        controller.print_statistics()
        assert capsys.readouterr().out == ""


class TestFactory:
    def test_text_renderer_follows_game(self):
        stream = StringIO()
        controller = OverflowFactory(text_stream=stream).create_controller(
            width=3, height=3, seed=1, replay_moves=moves(WHITE_WINS)
        )
        assert isinstance(controller.renderer, TextRenderer)

        controller.run()

        output = stream.getvalue()
        assert "White played (0, 0)" in output
        assert "Black played (1, 0)" in output
        assert "White played (0, 0) (1 overflow steps)" in output
        assert "Winner: Player 1 (Replay 1) after 3 moves" in output

    def test_show_steps(self):
        stream = StringIO()
        controller = OverflowFactory(text_stream=stream).create_controller(
            width=3, height=3, seed=1, replay_moves=moves(WHITE_WINS), show_steps=True
        )
        controller.run()
        assert "Overflow step 1" in stream.getvalue()

    def test_headless_has_no_renderer(self):
        controller = OverflowFactory().create_controller(width=3, height=3, seed=1, headless=True)
        assert controller.renderer is None
        assert controller.session.game.observers == []
