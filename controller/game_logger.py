"""Game logging for Overflow.

Writes game transcripts to the screen and/or one file per game.
"""

import os
import sys
from typing import Callable

from game.writers import GameWriter, TranscriptWriter


class GameLogger:
    """Manages the transcript writers of a session.

    Screen writers persist across games. File writers are created when a game
    starts and closed when it ends, one file per game named after its seed.
    """

    def __init__(
        self,
        session,
        transcript_dir: str | None = None,
        log_to_screen: bool = False,
        status_reporter: Callable[[str], None] | None = None,
    ):
        """Initialize the game logger.

        Args:
            session: GameSession instance (board size, seed and player names)
            transcript_dir: Directory path for transcript files (None to disable)
            log_to_screen: Whether to write the transcript to stdout
            status_reporter: Optional callback for status messages
        """
        self.session = session
        self._transcript_dir = transcript_dir
        self._log_to_screen = log_to_screen
        self._status_reporter = status_reporter
        self._game_active = False

        self._log_filenames = []

        self.writers: list[GameWriter] = []
        self._screen_writers: list[GameWriter] = []
        if self._log_to_screen:
            writer = TranscriptWriter(sys.stdout)
            self.writers.append(writer)
            self._screen_writers.append(writer)

    def _create_file_writer(self, directory, filename):
        """Create a transcript file writer.

        Errors are reported to stderr and disable the file for this game.

        Returns:
            TranscriptWriter on success, None on failure
        """
        try:
            os.makedirs(directory, exist_ok=True)
            filepath = os.path.join(directory, filename)
            writer = TranscriptWriter(open(filepath, "w"))
        except PermissionError as e:
            print(f"Error: Cannot create transcript directory or file: {e}", file=sys.stderr)
            print(f"Attempted path: {directory}", file=sys.stderr)
            print("Transcript logging to file disabled for this game", file=sys.stderr)
            return None
        except OSError as e:
            print(f"Error: Failed to create transcript file: {e}", file=sys.stderr)
            print(f"Attempted path: {directory}", file=sys.stderr)
            print("Transcript logging to file disabled for this game", file=sys.stderr)
            return None

        self._log_filenames.append(filepath)
        return writer

    def _create_game_file_writers(self):
        """Open this game's transcript file. Returns its path, or None."""
        if not self._transcript_dir:
            return None
        session = self.session
        filename = f"overflowlog_{session.width}x{session.height}_{session.get_seed()}.txt"
        writer = self._create_file_writer(self._transcript_dir, filename)
        if writer is None:
            return None
        self.writers.append(writer)
        return self._log_filenames[-1]

    def _close_file_writers(self):
        kept = []
        for writer in self.writers:
            if writer in self._screen_writers:
                kept.append(writer)
            else:
                writer.close()
        self.writers = kept

    def get_log_filenames(self):
        """Paths of all transcript files created so far."""
        return self._log_filenames.copy()

    def start_log(self) -> None:
        """Start logging a new game and write headers to all writers."""
        if self._game_active:
            self._close_file_writers()
        filepath = self._create_game_file_writers()

        session = self.session
        player1_name = session.player1.name if session.player1 else None
        player2_name = session.player2.name if session.player2 else None

        for writer in self.writers:
            writer.write_header(
                session.get_seed(), session.width, session.height, player1_name, player2_name
            )

        self._game_active = True

        # Every transcript starts with its header
        if filepath is not None:
            self._report(f"Logging game to {filepath}")

    def end_log(self, game=None) -> None:
        """Write footers and close the file writers of the current game.

        Args:
            game: Optional OverflowGame instance for the final state
        """
        for writer in self.writers:
            writer.write_footer(game)

        self._close_file_writers()
        self._game_active = False

    def log_move(self, player_num: int, pos) -> None:
        for writer in self.writers:
            writer.write_move(player_num, pos)

    def log_comment(self, message: str) -> None:
        for writer in self.writers:
            writer.write_comment(message)

    def set_status_reporter(self, reporter: Callable[[str], None] | None) -> None:
        self._status_reporter = reporter

    def _report(self, message: str | None) -> None:
        if message is None:
            return
        if self._status_reporter is not None:
            self._status_reporter(message)
        else:
            print(message)
