"""
Data types mirroring the YAML parameter schema.

These dataclasses are populated by loader.py from YAML files, or built
directly by callers and tests.
"""

from dataclasses import dataclass, asdict
from typing import Optional

from .constants import (
    DEFAULT_INITIAL_SHARKS,
    DEFAULT_INITIAL_FISH,
    DEFAULT_FISH_BREED,
    DEFAULT_SHARK_BREED,
    DEFAULT_STARVE,
    DEFAULT_GRID_SIZE,
)


# ============================================================================
# Simulation Parameters
# ============================================================================

@dataclass(frozen=True)
class SimulationParameters:
    """
    The six numeric parameters of a run, fixed at initialization.

    Attributes:
        initial_shark_count: Sharks scattered at initialization
        initial_fish_count: Fish scattered at initialization
        fish_breed_threshold: breed_timer value at which a fish reproduces
        shark_breed_threshold: breed_timer value at which a shark reproduces
        starve_threshold: Shark energy at birth and after each meal
        grid_size: Width and height of the square grid
    """
    initial_shark_count: int = DEFAULT_INITIAL_SHARKS
    initial_fish_count: int = DEFAULT_INITIAL_FISH
    fish_breed_threshold: int = DEFAULT_FISH_BREED
    shark_breed_threshold: int = DEFAULT_SHARK_BREED
    starve_threshold: int = DEFAULT_STARVE
    grid_size: int = DEFAULT_GRID_SIZE

    def __post_init__(self):
        """Reject values no run could use"""
        for name in ('initial_shark_count', 'initial_fish_count',
                     'fish_breed_threshold', 'shark_breed_threshold',
                     'starve_threshold'):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be >= 0, got {value}")

        if self.grid_size < 1:
            raise ValueError(f"grid_size must be >= 1, got {self.grid_size}")

    def to_dict(self) -> dict:
        return asdict(self)


# ============================================================================
# Run Configuration
# ============================================================================

@dataclass(frozen=True)
class RunConfig:
    """
    Parameters plus the RNG seed, as loaded from a parameter file.

    Attributes:
        params: Simulation parameters
        seed: RNG seed (None = fresh entropy each run)
    """
    params: SimulationParameters
    seed: Optional[int] = None
