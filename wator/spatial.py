"""
Spatial utility functions for the toroidal grid.

Coordinates wrap at every edge: column 0 is adjacent to column N-1 and
row 0 to row N-1.
"""

from typing import List, Tuple


def wrap(coord: int, size: int) -> int:
    """
    Wrap a coordinate onto the torus.

    Args:
        coord: Any integer coordinate (may be negative or >= size)
        size: Grid size

    Returns:
        Equivalent coordinate in [0, size)
    """
    return coord % size


def neighbors(x: int, y: int, size: int) -> List[Tuple[int, int]]:
    """
    Four orthogonal neighbours of a cell, wrapping at the edges.

    Order is fixed (west, east, north, south) so candidate lists built
    from it are deterministic before random selection.

    Args:
        x: Column in [0, size)
        y: Row in [0, size)
        size: Grid size (>= 1)

    Returns:
        List of 4 (x, y) tuples. On grids smaller than 3 some entries
        repeat (on a 1x1 grid all four are the cell itself).
    """
    return [
        (wrap(x - 1, size), y),  # West
        (wrap(x + 1, size), y),  # East
        (x, wrap(y - 1, size)),  # North
        (x, wrap(y + 1, size)),  # South
    ]
