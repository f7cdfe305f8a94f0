"""Utility helpers for the game engine."""

from __future__ import annotations

from typing import List, Optional

from .board import Board
from .tetromino import Tetromino


def collide(board: Board, piece: Tetromino) -> bool:
    """Return ``True`` if ``piece`` overlaps the walls, floor or settled cells.

    A cell collides when it falls outside the board horizontally, at or below
    the bottom row, or onto a non-zero board cell.  Cells above the top edge
    never collide, so pieces may spawn or rotate partly outside the board.
    This is checked before every committed move or rotation.
    """

    for x, y, _ in piece.cells():
        if x < 0 or x >= board.width or y >= board.height:
            return True
        if y >= 0 and board.grid[y, x] != 0:
            return True
    return False


def render_grid(board: Board, piece: Optional[Tetromino] = None) -> List[List[int]]:
    """Return a copy of the board grid with ``piece`` overlaid.

    Renderers can draw a single 2D array without locking the piece into the
    board.  Cells of the piece outside the board are dropped.
    """

    grid = board.rows()
    if piece is not None:
        for x, y, value in piece.cells():
            if board.in_bounds(x, y):
                grid[y][x] = value
    return grid
