"""
Square grid storage for the Wa-Tor world.

Cells are stored struct-of-arrays style: one (N, N) numpy array per
creature field, indexed [x, y]. The species array doubles as the occupancy
map (Species.EMPTY = 0), so empty cells carry no creature record at all.

Creatures are copied by value on every get/set. No creature reference is
ever shared between two grids, which keeps a retired grid inert after a
chronon completes.

The grid performs no coordinate wrapping; callers wrap with
spatial.wrap() / spatial.neighbors() first.
"""

import numpy as np
from typing import Iterator, Optional, Tuple

from .creature import Creature, Species


class InvariantViolation(RuntimeError):
    """Raised when the core would otherwise produce an inconsistent state"""
    pass


class CellOccupiedError(InvariantViolation):
    """Raised when placing a creature on a cell that already holds one"""
    pass


class Grid:
    """
    Fixed-size square grid holding at most one creature per cell.

    SoA layout:
        species[x, y]: Species tag (int8), EMPTY when unoccupied
        age[x, y]: Chronons alive
        energy[x, y]: Shark energy (0 for fish)
        breed_timer[x, y]: Chronons since last reproduction
    """

    def __init__(self, size: int):
        """
        Args:
            size: Width and height of the grid (>= 1)
        """
        if size < 1:
            raise ValueError(f"Grid size must be >= 1, got {size}")

        self.size = size
        self.species = np.zeros((size, size), dtype=np.int8)
        self.age = np.zeros((size, size), dtype=np.int32)
        self.energy = np.zeros((size, size), dtype=np.int32)
        self.breed_timer = np.zeros((size, size), dtype=np.int32)

    def _check_bounds(self, x: int, y: int):
        # numpy would silently accept negative indices
        if not (0 <= x < self.size and 0 <= y < self.size):
            raise IndexError(f"Cell ({x}, {y}) outside {self.size}x{self.size} grid")

    def get(self, x: int, y: int) -> Optional[Creature]:
        """
        Read the occupant of a cell.

        Returns:
            A fresh Creature copy, or None if the cell is empty
        """
        self._check_bounds(x, y)
        tag = self.species[x, y]
        if tag == Species.EMPTY:
            return None
        return Creature(
            species=Species(int(tag)),
            age=int(self.age[x, y]),
            energy=int(self.energy[x, y]),
            breed_timer=int(self.breed_timer[x, y]),
        )

    def set(self, x: int, y: int, creature: Creature):
        """
        Place a creature on an empty cell (fields are copied by value).

        Raises:
            CellOccupiedError: If the cell already holds a creature
        """
        self._check_bounds(x, y)
        if self.species[x, y] != Species.EMPTY:
            raise CellOccupiedError(
                f"Cell ({x}, {y}) already holds a {Species(int(self.species[x, y])).name.lower()}"
            )

        self.species[x, y] = creature.species
        self.age[x, y] = creature.age
        self.energy[x, y] = creature.energy
        self.breed_timer[x, y] = creature.breed_timer

    def is_empty(self, x: int, y: int) -> bool:
        self._check_bounds(x, y)
        return self.species[x, y] == Species.EMPTY

    def species_at(self, x: int, y: int) -> Species:
        """Occupant tag of a cell (Species.EMPTY when unoccupied)"""
        self._check_bounds(x, y)
        return Species(int(self.species[x, y]))

    def species_map(self) -> np.ndarray:
        """Read-only view of the (N, N) species array"""
        view = self.species.view()
        view.flags.writeable = False
        return view

    def occupied_cells(self) -> Iterator[Tuple[int, int, Creature]]:
        """
        Iterate occupied cells in scan order (x outer, y inner).

        Yields:
            (x, y, creature) tuples
        """
        for x, y in zip(*np.nonzero(self.species)):
            yield int(x), int(y), self.get(int(x), int(y))

    def copy(self) -> 'Grid':
        """Deep copy (independent arrays)"""
        clone = Grid(self.size)
        clone.species[:] = self.species
        clone.age[:] = self.age
        clone.energy[:] = self.energy
        clone.breed_timer[:] = self.breed_timer
        return clone

    def __len__(self) -> int:
        """Number of occupied cells"""
        return int(np.count_nonzero(self.species))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (
            self.size == other.size
            and np.array_equal(self.species, other.species)
            and np.array_equal(self.age, other.age)
            and np.array_equal(self.energy, other.energy)
            and np.array_equal(self.breed_timer, other.breed_timer)
        )
