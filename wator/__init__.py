"""
Wa-Tor Simulation

A headless predator-prey simulator: fish and sharks on a toroidal grid,
advanced one chronon at a time by a double-buffered transition engine.

Architecture: the core (grid, transition, census) is the source of truth.
Console rendering and the run loop are thin consumers.
"""

__version__ = "0.1.0"
