"""
Text rendering of the grid for console output.

Symbols:
    '.' = empty cell
    'F' = fish
    'S' = shark
"""

from .constants import SYMBOL_EMPTY, SYMBOL_FISH, SYMBOL_SHARK
from .creature import Species
from .world import World, cell_view

_SYMBOLS = {
    Species.EMPTY: SYMBOL_EMPTY,
    Species.FISH: SYMBOL_FISH,
    Species.SHARK: SYMBOL_SHARK,
}


def render_grid(world: World) -> str:
    """
    Render the world as text, one line per row (y), cells separated by spaces.

    Returns:
        Multi-line string without trailing newline
    """
    lines = []
    for y in range(world.size):
        lines.append(" ".join(_SYMBOLS[cell_view(world, x, y)] for x in range(world.size)))
    return "\n".join(lines)
