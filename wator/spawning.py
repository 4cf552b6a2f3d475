"""
Creature spawning system.

Scatters the initial fish and shark populations onto distinct, uniformly
chosen empty cells. Sharks are placed first, then fish.
"""

import numpy as np

from .creature import Creature, Species
from .data_types import SimulationParameters
from .grid import InvariantViolation
from .world import World


class PopulationOverflowError(InvariantViolation):
    """Raised when the requested population does not fit on the grid"""
    pass


def initialize_world(world: World, params: SimulationParameters, rng: np.random.Generator) -> World:
    """
    Attach parameters to a world and scatter its initial population.

    Any creatures already on the grid are kept; new ones only land on
    cells that are empty. Nothing is placed if the request cannot be met.

    Args:
        world: World to populate (typically fresh from create_world())
        params: Simulation parameters (grid_size must match the world)
        rng: Generator used for cell selection

    Returns:
        The same World, now populated

    Raises:
        ValueError: If params.grid_size differs from the world's size
        PopulationOverflowError: If sharks + fish exceed the empty cells
    """
    if params.grid_size != world.size:
        raise ValueError(
            f"Parameter grid_size={params.grid_size} does not match world size {world.size}"
        )

    requested = params.initial_shark_count + params.initial_fish_count
    empty_cells = _empty_cell_indices(world)

    if requested > len(empty_cells):
        raise PopulationOverflowError(
            f"Cannot place {requested} creatures "
            f"({params.initial_shark_count} sharks, {params.initial_fish_count} fish) "
            f"on {len(empty_cells)} empty cells of a {world.size}x{world.size} grid"
        )

    world.params = params

    if requested == 0:
        return world

    # One draw without replacement guarantees distinct cells
    chosen = rng.choice(empty_cells, size=requested, replace=False)
    shark_cells = chosen[:params.initial_shark_count]
    fish_cells = chosen[params.initial_shark_count:]

    _place(world, shark_cells, lambda: Creature.new_shark(params.starve_threshold))
    _place(world, fish_cells, Creature.new_fish)

    return world


def _empty_cell_indices(world: World) -> np.ndarray:
    """Flat (x * size + y) indices of every empty cell, in scan order"""
    return np.flatnonzero(world.grid.species == Species.EMPTY)


def _place(world: World, flat_indices: np.ndarray, factory):
    """
    Place one new creature per flat index.

    Args:
        world: Target world
        flat_indices: Cell indices from _empty_cell_indices()
        factory: Zero-argument callable returning a new Creature
    """
    for flat in flat_indices:
        x, y = divmod(int(flat), world.size)
        world.grid.set(x, y, factory())
