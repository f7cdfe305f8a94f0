"""Tetromino definitions and the active falling piece.

Each shape is stored as a small matrix whose occupied cells carry the piece's
identity value.  The same integer is written into the board when the piece
lands, so a single value serves both occupancy tests and colour lookup.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

Matrix = NDArray[np.uint8]


class TetrominoType(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    O = "O"
    T = "T"
    S = "S"
    Z = "Z"
    J = "J"
    L = "L"

    @property
    def value_of(self) -> int:
        """Return the cell value stored in the grid for this shape."""

        return PIECE_VALUES[self]


# Cell values baked into each shape.  ``0`` always represents an empty cell.
PIECE_VALUES: Dict[TetrominoType, int] = {
    TetrominoType.T: 1,
    TetrominoType.O: 2,
    TetrominoType.L: 3,
    TetrominoType.J: 4,
    TetrominoType.I: 5,
    TetrominoType.S: 6,
    TetrominoType.Z: 7,
}

# Colour identifiers indexed by cell value.
PIECE_COLORS: Tuple[str | None, ...] = (
    None,
    "#FF0D72",
    "#0DC2FF",
    "#0DFF72",
    "#F538FF",
    "#FF8E0D",
    "#FFE138",
    "#3877FF",
)

# Alphabet the random spawner draws from.
SPAWN_ORDER = "ILJOTSZ"

# Spawn orientation of every shape, written with ``1`` for occupied cells.
# ``create_piece`` replaces the ones with the shape's identity value.
_BASE_SHAPES: Dict[TetrominoType, List[List[int]]] = {
    TetrominoType.T: [[0, 1, 0], [1, 1, 1], [0, 0, 0]],
    TetrominoType.O: [[1, 1], [1, 1]],
    TetrominoType.L: [[0, 1, 0], [0, 1, 0], [0, 1, 1]],
    TetrominoType.J: [[0, 1, 0], [0, 1, 0], [1, 1, 0]],
    TetrominoType.I: [[0, 1, 0, 0], [0, 1, 0, 0], [0, 1, 0, 0], [0, 1, 0, 0]],
    TetrominoType.S: [[0, 1, 1], [1, 1, 0], [0, 0, 0]],
    TetrominoType.Z: [[1, 1, 0], [0, 1, 1], [0, 0, 0]],
}


def create_piece(kind: TetrominoType | str) -> Matrix:
    """Return a new matrix for ``kind`` in its spawn orientation.

    Every call builds a fresh array so callers may rotate or otherwise mutate
    the result without affecting other pieces.
    """

    kind = TetrominoType(kind)
    base = np.array(_BASE_SHAPES[kind], dtype=np.uint8)
    return base * np.uint8(PIECE_VALUES[kind])


def rotate_matrix(matrix: Matrix, direction: int = 1) -> Matrix:
    """Return ``matrix`` rotated by 90 degrees.

    The matrix is transposed and then either every row is reversed
    (``direction > 0``, clockwise) or the row order is reversed (otherwise,
    counter-clockwise).  Rectangular matrices are supported; the result has
    the swapped dimensions.
    """

    transposed = matrix.T
    if direction > 0:
        rotated = transposed[:, ::-1]
    else:
        rotated = transposed[::-1, :]
    return np.ascontiguousarray(rotated, dtype=np.uint8)


@dataclass(eq=False)
class Tetromino:
    """Active falling piece in the game.

    ``x`` and ``y`` give the board position of the matrix's top-left cell.
    """

    kind: TetrominoType
    matrix: Optional[Matrix] = None
    x: int = 0
    y: int = 0

    def __post_init__(self) -> None:
        self.kind = TetrominoType(self.kind)
        if self.matrix is None:
            self.matrix = create_piece(self.kind)
        else:
            self.matrix = np.array(self.matrix, dtype=np.uint8)

    @property
    def width(self) -> int:
        return int(self.matrix.shape[1])

    @property
    def height(self) -> int:
        return int(self.matrix.shape[0])

    @property
    def position(self) -> Tuple[int, int]:
        """Return ``(x, y)``."""

        return self.x, self.y

    def move(self, dx: int, dy: int) -> None:
        """Move the piece by the given offsets."""

        self.x += dx
        self.y += dy

    def rotate(self, direction: int = 1) -> None:
        """Rotate the shape in place, ignoring the board.

        Collision handling and kicks live in :mod:`blockdrop.rotation`.
        """

        self.matrix = rotate_matrix(self.matrix, direction)

    def cells(self) -> List[Tuple[int, int, int]]:
        """Return ``(x, y, value)`` board coordinates of every occupied cell."""

        return [
            (self.x + int(col), self.y + int(row), int(self.matrix[row, col]))
            for row, col in np.argwhere(self.matrix != 0)
        ]

    def copy(self) -> "Tetromino":
        return Tetromino(self.kind, self.matrix.copy(), self.x, self.y)
