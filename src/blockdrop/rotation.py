"""Rotation with horizontal kicks."""

from __future__ import annotations

import logging

from .board import Board
from .tetromino import Tetromino
from .utils import collide


LOGGER = logging.getLogger(__name__)


def next_kick(offset: int) -> int:
    """Return the kick step following ``offset``: +1, -2, +3, -4, ...

    Applied cumulatively, the steps visit columns progressively farther on
    alternating sides of the original one.
    """

    return -(offset + (1 if offset > 0 else -1))


def player_rotate(board: Board, piece: Tetromino, direction: int = 1) -> bool:
    """Rotate ``piece`` on ``board``, kicking it sideways if needed.

    Returns ``True`` when the rotation is kept.  The search gives up once the
    next step would be wider than the rotated shape; the shape is then
    rotated back and the original column restored, leaving the piece exactly
    as it was.  The row is never changed.
    """

    original_x = piece.x
    offset = 1
    piece.rotate(direction)
    while collide(board, piece):
        piece.x += offset
        offset = next_kick(offset)
        if abs(offset) > piece.width:
            piece.rotate(-direction)
            piece.x = original_x
            LOGGER.debug("Rotation of %s rejected at x=%d", piece.kind.value, original_x)
            return False
    return True
