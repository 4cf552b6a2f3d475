"""
Console runner for the Wa-Tor simulation.

Loads parameters (bundled defaults or a YAML file), applies command-line
overrides, then prints the population and grid every chronon until the
budget runs out or all life is extinct.

Usage:
    python scripts/run_wator.py
    python scripts/run_wator.py --config my_run.yaml --seed 42 --no-render
    python scripts/run_wator.py --seed 42 --run 3
"""

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from wator.constants import MAX_CHRONONS_DEFAULT, STEP_DELAY_SECONDS
from wator.loader import DataLoadError, load_run_config
from wator.simulation import WaTorSimulation
from wator.spawning import PopulationOverflowError


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Wa-Tor predator-prey simulation")
    parser.add_argument('--config', type=Path, default=None,
                        help="YAML parameter file (default: bundled default.yaml)")
    parser.add_argument('--seed', type=int, default=None,
                        help="RNG seed (overrides the file's seed)")
    parser.add_argument('--run', type=int, default=None, dest='run_id',
                        help="Run number; derives an independent stream from the seed")
    parser.add_argument('--chronons', type=int, default=MAX_CHRONONS_DEFAULT,
                        help="Maximum chronons to run")
    parser.add_argument('--delay', type=float, default=STEP_DELAY_SECONDS,
                        help="Seconds to pause between chronons")
    parser.add_argument('--no-render', action='store_true',
                        help="Print population lines only, not the grid")

    # Parameter overrides
    parser.add_argument('--sharks', type=int, dest='initial_shark_count')
    parser.add_argument('--fish', type=int, dest='initial_fish_count')
    parser.add_argument('--fish-breed', type=int, dest='fish_breed_threshold')
    parser.add_argument('--shark-breed', type=int, dest='shark_breed_threshold')
    parser.add_argument('--starve', type=int, dest='starve_threshold')
    parser.add_argument('--size', type=int, dest='grid_size')
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Run the simulation from the command line."""
    args = parse_args(argv)

    print("Wa-Tor Simulation:")

    try:
        config = load_run_config(args.config)
        overrides = {
            name: getattr(args, name)
            for name in ('initial_shark_count', 'initial_fish_count',
                         'fish_breed_threshold', 'shark_breed_threshold',
                         'starve_threshold', 'grid_size')
            if getattr(args, name) is not None
        }
        params = replace(config.params, **overrides)
        seed = args.seed if args.seed is not None else config.seed

        sim = WaTorSimulation(params, seed=seed, run_id=args.run_id)
    except (DataLoadError, PopulationOverflowError, ValueError) as e:
        print(f"[FAIL] {e}")
        return 1

    try:
        sim.run(
            max_chronons=args.chronons,
            delay_seconds=args.delay,
            render=not args.no_render,
        )
    except KeyboardInterrupt:
        print("\n[WARN] Interrupted")

    sim.print_telemetry()
    return 0


if __name__ == '__main__':
    sys.exit(main())
