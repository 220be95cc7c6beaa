"""Players."""

from .computer_overflow_player import ComputerOverflowPlayer
from .overflow_player import OverflowPlayer
from .replay_overflow_player import ReplayOverflowPlayer

__all__ = ["OverflowPlayer", "ComputerOverflowPlayer", "ReplayOverflowPlayer"]
