"""
Chronon transition engine.

Computes the next World from the current one. Every creature decision in a
chronon appears simultaneous because the engine reads only from the old
grid and writes only to a freshly allocated new grid.

SCAN CONTRACT (Critical Invariant):

    Read:  old grid, never modified
    Write: new grid, each cell written at most once

    Every old cell is visited exactly once (x outer, y inner). A visited
    creature ends up in exactly one of these outcomes:
      - moved to a free neighbour
      - stayed (no valid destination)
      - reproduced (child left on the source cell, parent moved)
      - removed (shark starved, or fish eaten before its turn)

Fish rule:
    Candidates are neighbours empty in BOTH grids. Move to one at random,
    leaving a newborn fish behind when breed_timer >= fish_breed_threshold.

Shark rule:
    Lose one energy; die at <= 0. Otherwise prefer neighbours holding a fish
    in the old grid that are still unclaimed in the new grid (eating resets
    energy to starve_threshold), falling back to the fish movement rule.
    Reproduction mirrors the fish rule with shark_breed_threshold.
"""

from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

from .constants import TELEMETRY_KEYS
from .creature import Creature, Species
from .grid import InvariantViolation
from .rng import choose
from .spatial import neighbors
from .world import World, create_world

Cell = Tuple[int, int]


class TransitionState(Enum):
    SCANNING = "scanning"
    DONE = "done"


class ChrononTransition:
    """
    One-shot transition from an old World to the next.

    Not long-lived: construct, call run() once, keep the returned World.
    """

    def __init__(self, old_world: World, rng: np.random.Generator):
        """
        Args:
            old_world: Current state (read-only for the whole pass)
            rng: Generator for every candidate selection
        """
        self.params = old_world.require_params()
        self.old = old_world.grid
        self.rng = rng

        # Allocate the write buffer up front, same size and parameters
        self.new_world = create_world(old_world.size, self.params)
        self.new = self.new_world.grid

        self.state = TransitionState.SCANNING
        self.counts: Dict[str, int] = {key: 0 for key in TELEMETRY_KEYS}

    def run(self) -> World:
        """
        Scan every old cell exactly once and build the next World.

        Returns:
            New World for the next chronon

        Raises:
            RuntimeError: If this transition already ran
        """
        if self.state is TransitionState.DONE:
            raise RuntimeError("ChrononTransition.run() may only be called once")

        size = self.old.size
        for x in range(size):
            for y in range(size):
                if self.old.species[x, y] == Species.EMPTY:
                    continue

                # Already claimed in the new grid: a shark ate this fish
                if not self.new.is_empty(x, y):
                    self._record_eaten(x, y)
                    continue

                creature = self.old.get(x, y)
                creature.age += 1
                creature.breed_timer += 1

                if creature.species == Species.FISH:
                    self._process_fish(x, y, creature)
                else:
                    self._process_shark(x, y, creature)

        self.state = TransitionState.DONE
        return self.new_world

    # ------------------------------------------------------------------
    # Species rules
    # ------------------------------------------------------------------

    def _process_fish(self, x: int, y: int, fish: Creature):
        free = self._free_cells(x, y)
        if not free:
            self._stay(x, y, fish)
            return

        dest = choose(self.rng, free)
        self._relocate(
            x, y, fish, dest,
            threshold=self.params.fish_breed_threshold,
            spawn_child=Creature.new_fish,
            birth_key='fish_births',
        )

    def _process_shark(self, x: int, y: int, shark: Creature):
        shark.energy -= 1
        if shark.energy <= 0:
            # Starved: nothing is written for this cell
            self.counts['starvations'] += 1
            return

        prey = self._prey_cells(x, y)
        if prey:
            dest = choose(self.rng, prey)
            shark.energy = self.params.starve_threshold
            self.counts['meals'] += 1
        else:
            free = self._free_cells(x, y)
            if not free:
                self._stay(x, y, shark)
                return
            dest = choose(self.rng, free)

        self._relocate(
            x, y, shark, dest,
            threshold=self.params.shark_breed_threshold,
            spawn_child=lambda: Creature.new_shark(self.params.starve_threshold),
            birth_key='shark_births',
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _free_cells(self, x: int, y: int) -> List[Cell]:
        """Neighbours empty in the old grid and unclaimed in the new grid"""
        return [
            (nx, ny) for nx, ny in neighbors(x, y, self.old.size)
            if self.old.species[nx, ny] == Species.EMPTY and self.new.is_empty(nx, ny)
        ]

    def _prey_cells(self, x: int, y: int) -> List[Cell]:
        """Neighbours holding a fish in the old grid and unclaimed in the new grid"""
        return [
            (nx, ny) for nx, ny in neighbors(x, y, self.old.size)
            if self.old.species[nx, ny] == Species.FISH and self.new.is_empty(nx, ny)
        ]

    def _stay(self, x: int, y: int, creature: Creature):
        self.new.set(x, y, creature)
        self.counts['stayed'] += 1

    def _relocate(
        self,
        x: int,
        y: int,
        creature: Creature,
        dest: Cell,
        threshold: int,
        spawn_child: Callable[[], Creature],
        birth_key: str
    ):
        """
        Move a creature to dest, leaving a child behind if it is ready to breed.

        Args:
            x, y: Source cell (unclaimed in the new grid)
            creature: Creature being forwarded (already aged)
            dest: Chosen destination (unclaimed in the new grid)
            threshold: Breed threshold for this species
            spawn_child: Factory for the newborn
            birth_key: Telemetry counter to bump on reproduction
        """
        if creature.breed_timer >= threshold:
            self.new.set(x, y, spawn_child())
            creature.breed_timer = 0
            self.counts[birth_key] += 1

        self.new.set(dest[0], dest[1], creature)

    def _record_eaten(self, x: int, y: int):
        """Account for an old occupant whose cell was taken by a predator"""
        if self.old.species[x, y] != Species.FISH or self.new.species[x, y] != Species.SHARK:
            raise InvariantViolation(
                f"Cell ({x}, {y}) claimed before its turn by "
                f"{Species(int(self.new.species[x, y])).name.lower()}, "
                f"old occupant {Species(int(self.old.species[x, y])).name.lower()}"
            )
        self.counts['fish_eaten'] += 1


def process_chronon(
    world: World,
    rng: np.random.Generator,
    telemetry: Optional[Dict[str, int]] = None
) -> World:
    """
    Advance the simulation by one chronon.

    Args:
        world: Current World (left unmodified)
        rng: Generator for candidate selection
        telemetry: Optional dict filled with this chronon's counters
                   (fish_births, shark_births, meals, starvations,
                   fish_eaten, stayed)

    Returns:
        Brand-new World for the next chronon
    """
    transition = ChrononTransition(world, rng)
    new_world = transition.run()

    if telemetry is not None:
        telemetry.update(transition.counts)

    return new_world
