"""Board representation for the playfield."""

from __future__ import annotations

from typing import List

import numpy as np
from numpy.typing import NDArray

from .tetromino import Tetromino


# Reference dimensions of the playfield.
WIDTH = 12
HEIGHT = 20

Grid = NDArray[np.uint8]


def create_empty_grid(width: int = WIDTH, height: int = HEIGHT) -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((height, width), dtype=np.uint8)


class Board:
    """Grid of settled cells, indexed ``grid[y, x]`` with row 0 at the top.

    The dimensions are fixed at construction; only cell contents change.
    """

    def __init__(self, width: int = WIDTH, height: int = HEIGHT) -> None:
        self.width = width
        self.height = height
        self.grid: Grid = create_empty_grid(width, height)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_cell(self, x: int, y: int) -> int:
        """Return the value at ``(x, y)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if self.in_bounds(x, y):
            return int(self.grid[y, x])
        raise IndexError("Cell out of bounds")

    def set_cell(self, x: int, y: int, value: int) -> None:
        """Set the value at ``(x, y)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if self.in_bounds(x, y):
            self.grid[y, x] = np.uint8(value)
        else:
            raise IndexError("Cell out of bounds")

    def merge(self, piece: Tetromino) -> None:
        """Write the piece's occupied cells into the grid.

        No collision checking is done here; callers test with
        :func:`blockdrop.utils.collide` first.  Cells above the top edge are
        skipped.
        """

        for x, y, value in piece.cells():
            if y >= 0:
                self.grid[y, x] = value

    def clear_all(self) -> None:
        """Reset every cell to zero in place."""

        self.grid.fill(0)

    def is_row_full(self, y: int) -> bool:
        return bool(np.all(self.grid[y] != 0))

    def sweep(self) -> int:
        """Remove full rows and return how many were removed.

        Rows are scanned from the bottom up to row 1; the top row is never
        swept.  A removed row is replaced by an empty row at the top and the
        same index is checked again, since the rows above have moved down.
        """

        cleared = 0
        y = self.height - 1
        while y > 0:
            if self.is_row_full(y):
                self.grid[1 : y + 1] = self.grid[0:y].copy()
                self.grid[0] = 0
                cleared += 1
            else:
                y -= 1
        return cleared

    def rows(self) -> List[List[int]]:
        """Return the grid as a list of lists."""

        return self.grid.tolist()

    def __repr__(self) -> str:
        return f"Board(width={self.width}, height={self.height})"
