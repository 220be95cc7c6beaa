"""Controller module for Overflow.

Contains the game controller, session and transcript logging.
"""

from controller.overflow_game_controller import OverflowGameController

__all__ = ["OverflowGameController"]
