"""
Creature runtime representation.

A creature is a plain value record: the grid stores its fields by value,
so reading a cell always yields a fresh Creature that can be mutated and
written forward without touching the grid it came from.
"""

from dataclasses import dataclass
from enum import IntEnum


class Species(IntEnum):
    """Cell occupant tag (stored directly in the grid's species array)"""
    EMPTY = 0
    FISH = 1
    SHARK = 2


@dataclass
class Creature:
    """
    A single fish or shark.

    Attributes:
        species: Species.FISH or Species.SHARK
        age: Chronons alive (monotonically increasing)
        energy: Remaining energy, meaningful for sharks only
        breed_timer: Chronons since last reproduction
    """
    species: Species
    age: int = 0
    energy: int = 0
    breed_timer: int = 0

    def __post_init__(self):
        """Normalise species to the enum and reject empty creatures"""
        self.species = Species(self.species)
        if self.species == Species.EMPTY:
            raise ValueError("A creature cannot have species EMPTY")

    @classmethod
    def new_fish(cls) -> 'Creature':
        """Newborn fish (age 0, breed_timer 0)"""
        return cls(species=Species.FISH)

    @classmethod
    def new_shark(cls, energy: int) -> 'Creature':
        """
        Newborn shark with full energy.

        Args:
            energy: Starting energy (the starvation threshold)
        """
        return cls(species=Species.SHARK, energy=energy)

    @property
    def is_fish(self) -> bool:
        return self.species == Species.FISH

    @property
    def is_shark(self) -> bool:
        return self.species == Species.SHARK

    def to_dict(self) -> dict:
        """
        Serialize creature to JSON-compatible dict.

        Returns:
            Dict with all creature fields
        """
        return {
            'species': self.species.name.lower(),
            'age': self.age,
            'energy': self.energy,
            'breed_timer': self.breed_timer,
        }
