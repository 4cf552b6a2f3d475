"""
Random number utilities for the Wa-Tor simulation.

All randomness flows through an explicitly passed
numpy.random.Generator(PCG64) instance, so a fixed seed replays a run
exactly. Seeds for sub-streams are derived with SHA256 from hierarchical
components (world_seed, run_id, ...).
"""

import hashlib
import numpy as np
from typing import Any, Optional, Sequence, TypeVar

T = TypeVar('T')


def make_seed(*components: Any) -> int:
    """
    Derive a 64-bit seed from a base seed plus labels.

    Used to give each numbered run of a batch its own stream while keeping
    the whole batch reproducible from one base seed.

    Args:
        *components: Base seed followed by labels (e.g. seed, "run", 3)

    Returns:
        Seed in [0, 2**64)
    """
    key = ":".join(str(c) for c in components).encode('utf-8')
    return int.from_bytes(hashlib.sha256(key).digest()[:8], byteorder='big')


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """
    Create a PCG64 generator.

    Args:
        seed: Integer seed, or None to draw fresh OS entropy
              (non-reproducible run)

    Returns:
        numpy Generator instance
    """
    return np.random.Generator(np.random.PCG64(seed))


def choose(rng: np.random.Generator, candidates: Sequence[T]) -> T:
    """
    Pick one candidate uniformly at random.

    Args:
        rng: Generator to draw from
        candidates: Non-empty sequence

    Returns:
        The selected element
    """
    if not candidates:
        raise ValueError("choose() requires at least one candidate")
    return candidates[int(rng.integers(len(candidates)))]
