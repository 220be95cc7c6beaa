"""Game session management for Overflow.

Manages a single game's lifecycle including board, players, and seed management.
"""

import hashlib
import random
import time
from typing import Callable, Iterable

import numpy as np

from game.constants import DEFAULT_HEIGHT, DEFAULT_WIDTH
from game.game_situation import FieldSetup
from game.overflow_game import OverflowGame
from game.player_config import PlayerConfig
from game.players import ComputerOverflowPlayer, ReplayOverflowPlayer
from game.position import Position


def split_replay_moves(moves: Iterable[Position]) -> tuple[list[Position], list[Position]]:
    """Split an alternating move list into (player1_moves, player2_moves)."""
    moves = list(moves)
    return moves[0::2], moves[1::2]


class GameSession:
    """Manages a single game's lifecycle (board, players, current game)."""

    def __init__(
        self,
        width=DEFAULT_WIDTH,
        height=DEFAULT_HEIGHT,
        setup: Iterable[FieldSetup] | None = None,
        seed=None,
        replay_moves=None,
        headless=False,
        status_reporter: Callable[[str], None] | None = None,
        player1_config: PlayerConfig | None = None,
        player2_config: PlayerConfig | None = None,
        clock: Callable[[], float] | None = None,
    ):
        """Initialize a game session.

        Args:
            width: Board width (3 to 20)
            height: Board height (3 to 20)
            setup: Optional field setups every game starts from
            seed: Random seed for reproducibility (auto-generated if None)
            replay_moves: Tuple of (player1_moves, player2_moves) for replay mode
            headless: Whether the session runs without display; selects the
                default thinking time of search players
            status_reporter: Optional callback for status messages
            player1_config: Configuration for player 1 (default: search)
            player2_config: Configuration for player 2 (default: search)
            clock: Optional callable returning seconds, passed to computer players
        """
        self.width = width
        self.height = height
        self.setup = tuple(setup or ())
        self.headless = headless
        self.clock = clock
        self._status_reporter: Callable[[str], None] | None = status_reporter

        self.player1_config = player1_config if player1_config is not None else PlayerConfig.search()
        self.player2_config = player2_config if player2_config is not None else PlayerConfig.search()

        # Replay mode setup
        self.replay_mode = replay_moves is not None
        self.replay_moves = replay_moves

        # Seed management
        if seed is None:
            seed = int(time.time())
        self.current_seed = seed
        self._apply_seed(seed)

        # Game state
        self.game = None
        self.player1 = None
        self.player2 = None
        self.games_played = 0

        self.reset_game()

    def _apply_seed(self, seed):
        """Apply a seed to both global random number generators."""
        self._report(f"-- Setting Seed: {seed}")
        np.random.seed(seed)
        random.seed(seed)

    def _generate_next_seed(self):
        """Derive the next seed deterministically from the current one."""
        hash_obj = hashlib.sha256(str(self.current_seed).encode())
        new_seed = int.from_bytes(hash_obj.digest()[:8], byteorder="big")
        # Keep it in the range np.random.seed accepts
        return new_seed % (2**32)

    def _player_seed(self, player_num: int, config: PlayerConfig):
        """Per-player seed: the configured one, else derived from the session seed."""
        if config.rng_seed is not None:
            return config.rng_seed
        return (self.current_seed * 2 + player_num) % (2**32)

    def _create_player_from_config(self, player_num: int, config: PlayerConfig):
        """Create a computer player from a PlayerConfig.

        Returns:
            ComputerOverflowPlayer: Configured player with name set from config
        """
        if config.player_type not in ("random", "heuristic", "search"):
            raise ValueError(f"Unknown player type: {config.player_type}")

        player = ComputerOverflowPlayer(
            self.game,
            player_num,
            difficulty=config.player_type,
            thinking_time_ms=config.resolve_thinking_time(self.headless),
            max_tree_depth=config.max_tree_depth,
            w_gain=config.w_gain,
            w_loss=config.w_loss,
            rng_seed=self._player_seed(player_num, config),
            clock=self.clock,
        )

        if config.name is not None:
            player.name = config.name

        return player

    def reset_game(self):
        """Create a new game and new players. Every game after the first gets a new seed."""
        self._report(f"** New game ({self.width}x{self.height}) **")

        if self.game is not None:
            self.current_seed = self._generate_next_seed()
            self._apply_seed(self.current_seed)

        self.game = OverflowGame(self.width, self.height, self.setup)

        if self.replay_mode:
            self._report("-- Replay Mode --")
            player1_moves, player2_moves = self.replay_moves
            self.player1 = ReplayOverflowPlayer(self.game, 1, player1_moves)
            self.player2 = ReplayOverflowPlayer(self.game, 2, player2_moves)

            if self.player1_config.name:
                self.player1.name = self.player1_config.name
            if self.player2_config.name:
                self.player2.name = self.player2_config.name
        else:
            self.player1 = self._create_player_from_config(1, self.player1_config)
            self.player2 = self._create_player_from_config(2, self.player2_config)

        self.player1.opponent = self.player2
        self.player2.opponent = self.player1

    def get_current_player(self):
        """Get the player whose turn it is."""
        p_ix = self.game.get_cur_player_value()
        return self.player1 if p_ix == 1 else self.player2

    def get_player(self, player_num: int):
        return self.player1 if player_num == 1 else self.player2

    def increment_games_played(self):
        self.games_played += 1

    def get_seed(self):
        return self.current_seed

    def is_replay_mode(self):
        return self.replay_mode

    def get_games_played(self):
        return self.games_played

    def set_status_reporter(self, reporter: Callable[[str], None] | None) -> None:
        """Set or update the status reporter callback."""
        self._status_reporter = reporter

    def _report(self, message: str | None) -> None:
        if message is None:
            return
        if self._status_reporter is not None:
            self._status_reporter(message)
        else:
            print(message)
