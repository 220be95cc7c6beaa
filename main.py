"""Main entry point for the Overflow game."""

import argparse
import logging

from factory import OverflowFactory
from game.constants import DEFAULT_HEIGHT, DEFAULT_WIDTH, MAX_BOARD_DIMENSION, MIN_BOARD_DIMENSION
from game.player_config import parse_player_spec
from game.formatters import TranscriptFormatter
from game.position import Position


def parse_replay_moves(text: str) -> list[Position]:
    """Parse "x,y x,y ..." into positions, player 1 first."""
    return [TranscriptFormatter.transcript_to_position(move) for move in text.split()]


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Overflow - a two-player chain reaction game",
        epilog="""
Player Configuration:
  Use --player1 and --player2 to configure each player with the format:
    TYPE[:PARAM=VALUE,PARAM=VALUE,...]

  Types:
    random          - Random choice among all legal moves
    heuristic       - Fast rule-based evaluation of each move
    search          - Iterative deepening alphabeta search

  Parameters (examples):
    time=MS         - Thinking time per move in ms (search only,
                      default: 1000, or 5000 with --headless)
    depth=N         - Maximum search depth (search only, default: 20)
    gain=X          - Weight of threatened opponent tokens (default: 1.0)
    loss=X          - Weight of own threatened tokens (default: 0.5)
    seed=N          - Random seed for tie breaks
    name=TEXT       - Display name

  Examples:
    --player1 heuristic
    --player2 search:time=2000,depth=6
    --player1 random:seed=7 --player2 search:depth=3 --headless --games 20 --stats
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "--player1",
        type=str,
        default="search",
        metavar="SPEC",
        help="Player 1 (white) configuration (default: search). See --help for format."
    )
    parser.add_argument(
        "--player2",
        type=str,
        default="heuristic",
        metavar="SPEC",
        help="Player 2 (black) configuration (default: heuristic). See --help for format."
    )
    parser.add_argument(
        "--width",
        type=int,
        default=DEFAULT_WIDTH,
        help=f"Board width, {MIN_BOARD_DIMENSION} to {MAX_BOARD_DIMENSION} (default: {DEFAULT_WIDTH})",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=DEFAULT_HEIGHT,
        help=f"Board height, {MIN_BOARD_DIMENSION} to {MAX_BOARD_DIMENSION} (default: {DEFAULT_HEIGHT})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible games",
    )
    parser.add_argument(
        "--replay-moves",
        type=str,
        metavar="MOVES",
        help='Replay a game from alternating moves, e.g. "0,0 3,3 0,1"',
    )
    parser.add_argument(
        "--transcript-file",
        nargs="?",
        const=".",
        default=None,
        metavar="DIR",
        help="Log each game to overflowlog_<size>_<seed>.txt in DIR (default: current directory)",
    )
    parser.add_argument(
        "--transcript-screen",
        action="store_true",
        help="Output the game transcript to screen",
    )
    parser.add_argument(
        "--headless", action="store_true", help="Run without printing the board"
    )
    parser.add_argument(
        "--show-steps",
        action="store_true",
        help="Print the board after every overflow step, not only after each move",
    )
    parser.add_argument(
        "--games", type=int, default=1, help="Number of games to play (default: 1)"
    )
    parser.add_argument(
        "--move-delay",
        type=float,
        default=0.0,
        help="Delay between moves in seconds (default: 0)",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Track and report statistics for each game",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log move calculations",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        player1_config = parse_player_spec(args.player1)
        player2_config = parse_player_spec(args.player2)
    except ValueError as e:
        parser.error(f"Invalid player configuration: {e}")
        return

    replay_moves = None
    if args.replay_moves:
        try:
            replay_moves = parse_replay_moves(args.replay_moves)
        except ValueError as e:
            parser.error(f"Invalid replay moves: {e}")
            return

    for name in ("width", "height"):
        value = getattr(args, name)
        if not MIN_BOARD_DIMENSION <= value <= MAX_BOARD_DIMENSION:
            parser.error(f"--{name} must be between {MIN_BOARD_DIMENSION} and {MAX_BOARD_DIMENSION}")

    factory = OverflowFactory()
    controller = factory.create_controller(
        width=args.width,
        height=args.height,
        seed=args.seed,
        replay_moves=replay_moves,
        player1_config=player1_config,
        player2_config=player2_config,
        log_to_file=args.transcript_file,
        log_to_screen=args.transcript_screen,
        headless=args.headless,
        show_steps=args.show_steps,
        max_games=args.games,
        move_delay=args.move_delay,
        track_statistics=args.stats,
    )
    controller.run()

    if args.stats:
        controller.print_statistics()


if __name__ == "__main__":
    main()
