import numpy as np

from game.constants import MIN_BOARD_DIMENSION
from game.position import Position


class OverflowBoard:
    # The overflow board is a rectangular grid of fields, addressed by (x, y)
    #   x grows to the east, y grows to the south
    #   Each field is adjacent to the fields north, east, south and west of it
    #   There is no wraparound: border fields simply have fewer neighbors
    #
    # 4 x 4 board, capacities (number of neighbors) per field
    #   2 3 3 2
    #   3 4 4 3
    #   3 4 4 3
    #   2 3 3 2
    #
    # A field overflows when its token count reaches its capacity, so corners
    # overflow at 2 tokens, edges at 3 and interior fields at 4.
    #
    # The board only holds geometry. Token state lives in GameSituation, and a
    # single board is shared by reference between every situation (and every
    # clone of a situation) of the same game.

    # Neighbor directions in their fixed iteration order
    DIRECTION_NORTH = (0, -1)
    DIRECTION_EAST = (1, 0)
    DIRECTION_SOUTH = (0, 1)
    DIRECTION_WEST = (-1, 0)
    DIRECTIONS = [DIRECTION_NORTH, DIRECTION_EAST, DIRECTION_SOUTH, DIRECTION_WEST]

    def __init__(self, width=4, height=4):
        """Initialize the board geometry.

        Args:
            width: Number of fields on the x-axis
            height: Number of fields on the y-axis
        """
        if width < MIN_BOARD_DIMENSION or height < MIN_BOARD_DIMENSION:
            raise ValueError(
                f"Unsupported board size: {width}x{height}. "
                f"Both dimensions must be at least {MIN_BOARD_DIMENSION}."
            )

        self.width = width
        self.height = height

        # All positions in row-major order (index = y * width + x)
        self.positions = tuple(
            Position(x, y) for y in range(height) for x in range(width)
        )

        # Neighbor lists and the capacity grid, computed once
        self._neighbors = {}
        self.limits = np.zeros((width, height), dtype=np.int16)
        for pos in self.positions:
            neighbors = tuple(
                Position(pos.x + dx, pos.y + dy)
                for dx, dy in self.DIRECTIONS
                if 0 <= pos.x + dx < width and 0 <= pos.y + dy < height
            )
            self._neighbors[pos] = neighbors
            self.limits[pos.xy] = len(neighbors)

    @property
    def size(self):
        return self.width * self.height

    def contains(self, pos):
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def get_neighbors(self, pos):
        """Return the neighbors of a field in north, east, south, west order."""
        return self._neighbors[pos]

    def get_limit(self, pos):
        """Return the capacity of a field: the token count at which it overflows."""
        return int(self.limits[pos.xy])

    def __repr__(self):
        return f"OverflowBoard(width={self.width}, height={self.height})"
