"""
Population census.

Read-only scans over a world's species map. The driver stops a run when
both counts reach zero.
"""

import numpy as np
from typing import Tuple

from .creature import Species
from .world import World


def count_population(world: World) -> Tuple[int, int]:
    """
    Count fish and sharks.

    Args:
        world: World to inspect (not modified)

    Returns:
        (fish_count, shark_count)
    """
    species = world.grid.species_map()
    fish = int(np.count_nonzero(species == Species.FISH))
    sharks = int(np.count_nonzero(species == Species.SHARK))
    return fish, sharks


def is_extinct(world: World) -> bool:
    """True when no creature of either species remains"""
    return not np.any(world.grid.species_map())


def population_summary(world: World) -> dict:
    """
    Aggregate statistics for monitoring.

    Returns:
        Dict with fish, sharks, total, occupancy (fraction of cells filled),
        mean_shark_energy and mean_age (0.0 when no creature qualifies)
    """
    grid = world.grid
    species = grid.species_map()
    fish, sharks = count_population(world)
    total = fish + sharks

    shark_mask = species == Species.SHARK
    occupied_mask = species != Species.EMPTY

    return {
        'fish': fish,
        'sharks': sharks,
        'total': total,
        'occupancy': total / float(grid.size * grid.size),
        'mean_shark_energy': float(np.mean(grid.energy[shark_mask])) if sharks else 0.0,
        'mean_age': float(np.mean(grid.age[occupied_mask])) if total else 0.0,
    }
