"""Game constants shared across modules.

This module contains outcome constants, board limits and the default AI
settings used by the game layer, the AI evaluators and the controller.
"""

# Game outcome constants
PLAYER_1_WIN = 1
PLAYER_2_WIN = -1
TIE = 0  # Only reached when the player on turn has no legal move

# Board dimensions (fields per axis)
MIN_BOARD_DIMENSION = 3
MAX_BOARD_DIMENSION = 20
DEFAULT_WIDTH = 4
DEFAULT_HEIGHT = 4

# Thinking time budgets in milliseconds, resolved per execution context
INTERACTIVE_THINKING_TIME_MS = 1000
HEADLESS_THINKING_TIME_MS = 5000

# Game tree search settings
MAX_TREE_DEPTH = 20
W_GAIN = 1.0  # Weight for opponent tokens threatened by self
W_LOSS = 0.5  # Weight for own tokens threatened by the opponent
TIME_BUDGET_RATIO = 0.99  # Fraction of the thinking time a search may use
