"""Score policy for a sweep pass."""

from __future__ import annotations


LINE_POINTS = 10


def sweep_points(rows_cleared: int) -> int:
    """Return the points earned by clearing ``rows_cleared`` rows in one pass.

    The first row is worth ``LINE_POINTS`` and every further row in the same
    pass is worth twice the previous one: 10, 20, 40, ...
    """

    points = 0
    multiplier = 1
    for _ in range(rows_cleared):
        points += multiplier * LINE_POINTS
        multiplier *= 2
    return points
