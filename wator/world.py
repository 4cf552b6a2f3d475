"""
World: a grid plus the parameters it runs under.

A World is never advanced in place. Each chronon produces a brand-new
World (see transition.py) and the previous one is discarded.
"""

from dataclasses import dataclass
from typing import Optional

from .creature import Species
from .data_types import SimulationParameters
from .grid import Grid


@dataclass
class World:
    """
    Attributes:
        grid: Cell storage
        params: Simulation parameters (None until initialize_world runs)
    """
    grid: Grid
    params: Optional[SimulationParameters] = None

    @property
    def size(self) -> int:
        return self.grid.size

    def require_params(self) -> SimulationParameters:
        """
        Parameters of an initialized world.

        Raises:
            ValueError: If the world has no parameters yet
        """
        if self.params is None:
            raise ValueError("World has no simulation parameters; call initialize_world() first")
        return self.params


def create_world(size: int, params: Optional[SimulationParameters] = None) -> World:
    """
    Create a world with an empty grid.

    Args:
        size: Width and height of the grid
        params: Optional parameters to attach immediately

    Returns:
        New World instance
    """
    return World(grid=Grid(size), params=params)


def cell_view(world: World, x: int, y: int) -> Species:
    """
    Read-only occupant tag for renderers.

    Args:
        world: World to inspect
        x: Column in [0, size)
        y: Row in [0, size)

    Returns:
        Species tag (Species.EMPTY for an empty cell)
    """
    return world.grid.species_at(x, y)
