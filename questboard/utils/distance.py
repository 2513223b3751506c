"""Distance calculations for the board grid."""


def manhattan_distance(x1: int, y1: int, x2: int, y2: int) -> int:
    """Calculate Manhattan distance between two points.

    Manhattan distance is the sum of absolute coordinate differences. Path
    cells only connect along the four axis directions, so two cells are
    neighbours exactly when their Manhattan distance is 1.

    Args:
        x1: X coordinate of first point
        y1: Y coordinate of first point
        x2: X coordinate of second point
        y2: Y coordinate of second point

    Returns:
        Manhattan distance between the two points

    Examples:
        >>> manhattan_distance(0, 0, 3, 3)
        6
        >>> manhattan_distance(2, 5, 2, 4)
        1
    """
    return abs(x2 - x1) + abs(y2 - y1)


def neighbors(x: int, y: int) -> list[tuple[int, int]]:
    """Return the four axis-adjacent cells (unbounded)."""
    return [(x + 1, y), (x, y - 1), (x - 1, y), (x, y + 1)]
