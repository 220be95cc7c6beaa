"""Game controller for Overflow.

Runs the move loop between two players, keeps the transcript writers and the
renderer up to date, and collects statistics over a series of games.
"""

from __future__ import annotations

import logging
import statistics
import time

from controller.game_logger import GameLogger
from controller.game_session import GameSession, split_replay_moves
from game.constants import DEFAULT_HEIGHT, DEFAULT_WIDTH, PLAYER_1_WIN, PLAYER_2_WIN, TIE
from game.formatters import TranscriptFormatter
from game.overflow_game import IllegalMoveError
from shared.interfaces import IRenderer, IRendererFactory

logger = logging.getLogger(__name__)


class OverflowGameController:
    def __init__(
        self,
        width=DEFAULT_WIDTH,
        height=DEFAULT_HEIGHT,
        setup=None,
        seed=None,
        replay_moves=None,
        player1_config=None,
        player2_config=None,
        log_to_file: str | None = None,
        log_to_screen=False,
        max_games=None,
        headless=False,
        move_delay=0.0,
        renderer_or_factory: IRenderer | IRendererFactory | None = None,
        track_statistics=False,
        clock=None,
    ):
        """Initialize the controller.

        Args:
            width: Board width
            height: Board height
            setup: Optional field setups every game starts from
            seed: Session seed (time-based if None)
            replay_moves: Alternating list of positions to replay, player 1 first
            player1_config: PlayerConfig for player 1 (default: search)
            player2_config: PlayerConfig for player 2 (default: search)
            log_to_file: Directory for transcript files (None to disable)
            log_to_screen: Whether to write the transcript to stdout
            max_games: Number of games to play (None means play indefinitely)
            headless: Selects the headless thinking time default
            move_delay: Seconds to wait between moves
            renderer_or_factory: Renderer, factory producing one, or None
            track_statistics: Whether to record game durations and outcomes
            clock: Optional callable returning seconds, passed to computer players
        """
        self.max_games = max_games
        self.move_delay = move_delay
        self.formatter = TranscriptFormatter()

        # Statistics tracking
        self.track_statistics = track_statistics
        self.game_stats = []  # Game durations in seconds
        self.move_counts = []
        self.win_loss_stats = {PLAYER_1_WIN: 0, PLAYER_2_WIN: 0, TIE: 0}
        self.current_game_start_time = None
        self.total_start_time = None

        self.renderer = None
        self._game_ending_processed = False
        self._finished = False

        if replay_moves is not None:
            replay_moves = split_replay_moves(replay_moves)

        # Messages of the first game are held until the logger and renderer exist
        pending_status = []
        self.session = GameSession(
            width=width,
            height=height,
            setup=setup,
            seed=seed,
            replay_moves=replay_moves,
            headless=headless,
            status_reporter=pending_status.append,
            player1_config=player1_config,
            player2_config=player2_config,
            clock=clock,
        )

        self.logger = GameLogger(
            session=self.session,
            transcript_dir=log_to_file,
            log_to_screen=log_to_screen,
            status_reporter=self._report,
        )

        if isinstance(renderer_or_factory, IRenderer):
            self.renderer = renderer_or_factory
        elif isinstance(renderer_or_factory, IRendererFactory):
            self.renderer = renderer_or_factory(self)
        elif renderer_or_factory is None:
            pass
        else:
            raise TypeError(
                "renderer_or_factory must be an IRenderer, IRendererFactory, or None"
            )

        self.session.set_status_reporter(self._report)
        self._attach_renderer()
        for message in pending_status:
            self._report(message)

        self.logger.start_log()

        if self.track_statistics:
            self.total_start_time = time.time()
            self.current_game_start_time = time.time()

    def _attach_renderer(self):
        if self.renderer is not None:
            self.session.game.add_observer(self.renderer)

    def _close_log_file(self):
        self.logger.end_log(self.session.game)

    def run(self):
        """Play moves until every game is finished, waiting move_delay seconds between moves."""
        while not self.update_game():
            if self.move_delay > 0:
                time.sleep(self.move_delay)

    def _reset_board(self):
        """Finish the current transcript and start a new game."""
        self._close_log_file()
        self._game_ending_processed = False

        self.session.reset_game()

        if self.renderer is not None:
            self.renderer.reset_board()
        self._attach_renderer()

        self.logger.start_log()

        if self.track_statistics:
            self.current_game_start_time = time.time()

    def update_game(self) -> bool:
        """Play one move. Returns True once all games are finished."""
        if self._finished or self._check_game_status():
            return True

        game = self.session.game
        player = self.session.get_current_player()

        if not game.get_legal_positions(player.color):
            self._report(f"{player.name} has no legal move")
            return self._handle_game_ending(TIE)

        try:
            pos = player.get_action()
        except ValueError as e:
            if self.session.is_replay_mode():
                self._report(f"Replay finished: {e}")
                return self._finish()
            raise

        if pos is None:
            self._report(f"{player.name} has no legal move")
            return self._handle_game_ending(TIE)

        try:
            game.make_move(player.color, pos, display=self.renderer is not None)
        except IllegalMoveError as e:
            if self.session.is_replay_mode():
                self._report(f"Replay stopped: {e}")
                return self._finish()
            raise

        logger.debug("turn %d: %s -> %s", game.get_turn() - 1, player.name, pos)
        self.logger.log_move(player.n, pos)

        return self._check_game_status()

    def _check_game_status(self) -> bool:
        """Handle the ending if the game is over. Returns True once all games are finished."""
        game_over = self.session.game.get_game_ended()
        if game_over is None:
            return False
        return self._handle_game_ending(game_over)

    def _handle_game_ending(self, game_over) -> bool:
        """Report the result, record statistics and start the next game if any.

        Calling it again for a game that has already ended has no effect.

        Args:
            game_over: Game result (PLAYER_1_WIN, PLAYER_2_WIN, or TIE)

        Returns:
            True if all games are finished, False if the next game has started
        """
        if self._game_ending_processed:
            return True
        self._game_ending_processed = True

        game = self.session.game
        self._report("")
        if game_over in (PLAYER_1_WIN, PLAYER_2_WIN):
            player_num = 1 if game_over == PLAYER_1_WIN else 2
            player = self.session.get_player(player_num)
            label = self.formatter.player_label(player_num, player.name)
            self._report(f"Winner: {label} after {len(game.move_history)} moves")
        else:
            self._report(f"Game ended in a tie after {len(game.move_history)} moves")

        if self.track_statistics and self.current_game_start_time is not None:
            self.game_stats.append(time.time() - self.current_game_start_time)
            self.move_counts.append(len(game.move_history))
            self.win_loss_stats[game_over] += 1

        self.session.increment_games_played()

        if self.session.is_replay_mode():
            self._report("Replay complete")
            return self._finish()
        if (
            self.max_games is not None
            and self.session.get_games_played() >= self.max_games
        ):
            self._report(f"Completed {self.session.get_games_played()} game(s)")
            return self._finish()

        self._reset_board()
        return False

    def _finish(self) -> bool:
        if not self._finished:
            self._finished = True
            self._close_log_file()
        return True

    def _report(self, message: str | None) -> None:
        """Forward status messages to the transcript writers and the renderer."""
        if message is None:
            return
        text = str(message)

        self.logger.log_comment(text)
        if self.renderer is not None:
            self.renderer.report_status(text)

    def summarize_statistics(self) -> dict | None:
        """Collect outcome, move and timing figures over all recorded games.

        Returns:
            dict with the figures, or None if no statistics were recorded
        """
        if not self.track_statistics or not self.game_stats:
            return None

        games = len(self.game_stats)
        return {
            "games": games,
            "outcomes": {
                label: (self.win_loss_stats[outcome], self.win_loss_stats[outcome] / games * 100)
                for label, outcome in (
                    ("Player 1 wins", PLAYER_1_WIN),
                    ("Player 2 wins", PLAYER_2_WIN),
                    ("Ties", TIE),
                )
            },
            "mean_moves": statistics.mean(self.move_counts),
            "min_moves": min(self.move_counts),
            "max_moves": max(self.move_counts),
            "mean_time": statistics.mean(self.game_stats),
            "std_time": statistics.stdev(self.game_stats) if games > 1 else 0.0,
            "total_time": time.time() - self.total_start_time if self.total_start_time else 0.0,
        }

    def print_statistics(self) -> None:
        """Print outcome, move and timing statistics for all games played."""
        summary = self.summarize_statistics()
        if summary is None:
            return

        rule = "=" * 60
        print("\n" + rule)
        print("STATISTICS")
        print(rule)
        print(f"Games played: {summary['games']}")
        print()
        print("Outcomes:")
        for label, (count, pct) in summary["outcomes"].items():
            print(f"  {label}: {count} ({pct:.1f}%)")
        print()
        print("Moves:")
        print(f"  Mean moves per game: {summary['mean_moves']:.1f}")
        print(f"  Shortest game: {summary['min_moves']}")
        print(f"  Longest game: {summary['max_moves']}")
        print()
        print("Timing:")
        print(f"  Mean time per game: {summary['mean_time']:.3f}s (std {summary['std_time']:.3f}s)")
        print(f"  Total execution time: {summary['total_time']:.3f}s")
        print(rule)
