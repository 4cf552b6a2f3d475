"""
Wa-Tor simulation driver.

Owns the current World and the RNG, advances one chronon per tick, and
keeps population history, telemetry totals and tick timing. Console output
(summaries, grid rendering) lives here; the core never prints.
"""

import time
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import numpy as np

from .census import count_population, is_extinct, population_summary
from .constants import (
    MAX_CHRONONS_DEFAULT,
    TELEMETRY_KEYS,
    TICK_TIME_WINDOW,
)
from .data_types import SimulationParameters
from .loader import load_run_config
from .render import render_grid
from .rng import make_rng, make_seed
from .spawning import initialize_world
from .transition import process_chronon
from .world import World, create_world


class WaTorSimulation:
    """
    Main simulation class for the Wa-Tor ocean.

    Manages world lifecycle, the chronon loop, and monitoring.
    """

    def __init__(
        self,
        params: SimulationParameters,
        seed: Optional[int] = None,
        verbose: bool = True,
        world: Optional[World] = None,
        run_id: Optional[int] = None
    ):
        """
        Initialize simulation and scatter the initial population.

        Args:
            params: Simulation parameters
            seed: RNG seed (None = non-reproducible run)
            verbose: Print status lines to console
            world: Optional pre-built world (skips random scatter; its
                   parameters are replaced by params)
            run_id: Optional run number; with a seed, the RNG is seeded from
                    make_seed(seed, "run", run_id) so each run of a batch
                    gets its own reproducible stream

        Raises:
            ValueError: If a pre-built world does not match params.grid_size
        """
        self.params = params
        self.seed = seed
        self.run_id = run_id
        self.verbose = verbose

        rng_seed = seed
        if seed is not None and run_id is not None:
            rng_seed = make_seed(seed, "run", run_id)
        self.rng: np.random.Generator = make_rng(rng_seed)

        if world is None:
            self._log(f"Scattering {params.initial_shark_count} sharks and "
                      f"{params.initial_fish_count} fish on a "
                      f"{params.grid_size}x{params.grid_size} grid...")
            world = initialize_world(create_world(params.grid_size), params, self.rng)
        else:
            if world.size != params.grid_size:
                raise ValueError(
                    f"Parameter grid_size={params.grid_size} does not match world size {world.size}"
                )
            world.params = params

        self.world: World = world
        self.chronon: int = 0

        # Population history: (fish, sharks) per chronon, index 0 = initial state
        self.history: List[Tuple[int, int]] = [count_population(self.world)]

        # Telemetry
        self.last_telemetry: Dict[str, int] = {key: 0 for key in TELEMETRY_KEYS}
        self.telemetry_totals: Dict[str, int] = {key: 0 for key in TELEMETRY_KEYS}

        # Performance metrics
        self._tick_times: List[float] = []
        self._tick_time_sum: float = 0.0
        self._tick_time_window: int = TICK_TIME_WINDOW  # Rolling average window

        fish, sharks = self.history[0]
        self._log(f"[OK] Simulation initialized: {fish} fish, {sharks} sharks, seed={seed}, run={run_id}")

    @classmethod
    def from_yaml(cls, file_path: Optional[Path] = None, verbose: bool = True) -> 'WaTorSimulation':
        """
        Build a simulation from a parameter file.

        Args:
            file_path: YAML parameter file (None = bundled defaults)
            verbose: Print status lines to console
        """
        config = load_run_config(file_path)
        return cls(config.params, seed=config.seed, verbose=verbose)

    def _log(self, message: str):
        if self.verbose:
            print(message)

    @property
    def population(self) -> Tuple[int, int]:
        """Current (fish, sharks)"""
        return self.history[-1]

    @property
    def extinct(self) -> bool:
        return is_extinct(self.world)

    def tick(self) -> Tuple[int, int]:
        """
        Advance simulation by one chronon.

        Returns:
            (fish, sharks) after the chronon
        """
        start_time = time.perf_counter()

        telemetry: Dict[str, int] = {}
        self.world = process_chronon(self.world, self.rng, telemetry)

        elapsed = time.perf_counter() - start_time
        self._record_tick_time(elapsed)

        self.chronon += 1
        self.last_telemetry = telemetry
        for key, value in telemetry.items():
            self.telemetry_totals[key] += value

        counts = count_population(self.world)
        self.history.append(counts)
        return counts

    def run(
        self,
        max_chronons: int = MAX_CHRONONS_DEFAULT,
        delay_seconds: float = 0.0,
        render: bool = False,
        summary_every: int = 1
    ) -> int:
        """
        Run until the chronon budget is spent or all life is extinct.

        Args:
            max_chronons: Maximum chronons to advance
            delay_seconds: Pause after each chronon (console pacing)
            render: Print the grid after each summary line
            summary_every: Print a summary every N chronons (0 = never)

        Returns:
            Number of chronons advanced
        """
        for _ in range(max_chronons):
            self.tick()

            if summary_every and self.chronon % summary_every == 0:
                self.print_tick_summary()
                if render and self.verbose:
                    print(render_grid(self.world))
                    print()

            if self.extinct:
                self._log("All life extinct!")
                break

            if delay_seconds > 0:
                time.sleep(delay_seconds)

        return self.chronon

    def get_tick_stats(self) -> dict:
        """
        Get current tick timing statistics.

        Returns:
            Dict with chronon, avg_tick_time_ms, last_tick_time_ms
        """
        if not self._tick_times:
            return {
                'chronon': self.chronon,
                'avg_tick_time_ms': 0.0,
                'last_tick_time_ms': 0.0
            }

        avg_time = self._tick_time_sum / len(self._tick_times)
        last_time = self._tick_times[-1]

        return {
            'chronon': self.chronon,
            'avg_tick_time_ms': avg_time * 1000.0,
            'last_tick_time_ms': last_time * 1000.0
        }

    def _record_tick_time(self, elapsed: float):
        """
        Record tick timing for rolling average.

        Args:
            elapsed: Tick time in seconds
        """
        self._tick_times.append(elapsed)
        self._tick_time_sum += elapsed

        # Maintain rolling window
        if len(self._tick_times) > self._tick_time_window:
            removed = self._tick_times.pop(0)
            self._tick_time_sum -= removed

    def get_snapshot(self) -> dict:
        """
        Get complete simulation state snapshot (in memory only).

        Returns:
            Dict with chronon, parameters, population, creatures, timing
        """
        return {
            'chronon': self.chronon,
            'parameters': self.params.to_dict(),
            'population': population_summary(self.world),
            'creatures': [
                {'x': x, 'y': y, **creature.to_dict()}
                for x, y, creature in self.world.grid.occupied_cells()
            ],
            'telemetry': dict(self.telemetry_totals),
            'timing': self.get_tick_stats()
        }

    def print_tick_summary(self):
        """Print chronon summary to console (lightweight monitoring)"""
        if not self.verbose:
            return
        fish, sharks = self.population
        stats = self.get_tick_stats()
        print(f"Chronon {self.chronon:5d} | "
              f"Fish={fish} | Sharks={sharks} | "
              f"Avg: {stats['avg_tick_time_ms']:6.3f} ms")

    def print_telemetry(self):
        """Print accumulated transition counters"""
        if not self.verbose:
            return
        totals = self.telemetry_totals
        print(f"  [Ecosystem] fish_births={totals['fish_births']} "
              f"shark_births={totals['shark_births']} | "
              f"meals={totals['meals']} eaten={totals['fish_eaten']} | "
              f"starvations={totals['starvations']} stayed={totals['stayed']}")
