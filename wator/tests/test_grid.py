"""
Tests for SoA grid storage.

Verifies:
- get/set round trip and empty cells
- Occupied-cell placement is rejected
- Bounds are enforced (no silent wrapping)
- Creatures are copied by value
"""

import numpy as np
import pytest

from wator.creature import Creature, Species
from wator.grid import Grid, CellOccupiedError, InvariantViolation


def test_new_grid_is_empty():
    grid = Grid(4)
    assert len(grid) == 0
    for x in range(4):
        for y in range(4):
            assert grid.is_empty(x, y)
            assert grid.get(x, y) is None
            assert grid.species_at(x, y) == Species.EMPTY


def test_set_and_get():
    grid = Grid(3)
    grid.set(1, 2, Creature(Species.SHARK, age=4, energy=3, breed_timer=2))

    shark = grid.get(1, 2)
    assert shark == Creature(Species.SHARK, age=4, energy=3, breed_timer=2)
    assert grid.species_at(1, 2) == Species.SHARK
    assert not grid.is_empty(1, 2)
    assert len(grid) == 1


def test_set_on_occupied_cell_raises():
    grid = Grid(3)
    grid.set(0, 0, Creature.new_fish())

    with pytest.raises(CellOccupiedError):
        grid.set(0, 0, Creature.new_shark(5))

    # Original occupant untouched
    assert grid.species_at(0, 0) == Species.FISH


def test_cell_occupied_is_invariant_violation():
    assert issubclass(CellOccupiedError, InvariantViolation)
    assert issubclass(InvariantViolation, RuntimeError)


def test_out_of_bounds_raises():
    grid = Grid(3)
    with pytest.raises(IndexError):
        grid.get(-1, 0)
    with pytest.raises(IndexError):
        grid.set(3, 0, Creature.new_fish())
    with pytest.raises(IndexError):
        grid.species_at(0, 3)


def test_invalid_size():
    with pytest.raises(ValueError):
        Grid(0)


def test_get_returns_copy():
    """Mutating a read creature must not change the grid"""
    grid = Grid(2)
    grid.set(0, 1, Creature.new_fish())

    fish = grid.get(0, 1)
    fish.age = 99
    fish.breed_timer = 42

    stored = grid.get(0, 1)
    assert stored.age == 0
    assert stored.breed_timer == 0


def test_set_copies_fields():
    grid = Grid(2)
    shark = Creature.new_shark(5)
    grid.set(0, 0, shark)
    shark.energy = 1
    assert grid.get(0, 0).energy == 5


def test_species_map_is_read_only():
    grid = Grid(3)
    grid.set(2, 0, Creature.new_fish())
    view = grid.species_map()

    assert view[2, 0] == Species.FISH
    with pytest.raises(ValueError):
        view[0, 0] = Species.SHARK


def test_occupied_cells_scan_order():
    grid = Grid(3)
    grid.set(2, 0, Creature.new_fish())
    grid.set(0, 2, Creature.new_shark(4))
    grid.set(0, 1, Creature.new_fish())

    cells = [(x, y, c.species) for x, y, c in grid.occupied_cells()]
    assert cells == [
        (0, 1, Species.FISH),
        (0, 2, Species.SHARK),
        (2, 0, Species.FISH),
    ]


def test_copy_is_independent():
    grid = Grid(3)
    grid.set(1, 1, Creature.new_shark(5))
    clone = grid.copy()

    assert clone == grid
    assert not np.shares_memory(clone.species, grid.species)

    clone.set(0, 0, Creature.new_fish())
    assert grid.is_empty(0, 0)
    assert clone != grid


def test_creature_rejects_empty_species():
    with pytest.raises(ValueError):
        Creature(Species.EMPTY)


def test_creature_to_dict():
    shark = Creature(Species.SHARK, age=2, energy=3, breed_timer=1)
    assert shark.to_dict() == {'species': 'shark', 'age': 2, 'energy': 3, 'breed_timer': 1}
    assert shark.is_shark and not shark.is_fish
