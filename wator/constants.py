"""
Central configuration constants for the Wa-Tor simulation.

Defines default simulation parameters and driver settings
used across multiple modules.
"""

# ============================================================================
# Default Simulation Parameters
# ============================================================================

DEFAULT_INITIAL_SHARKS = 100     # Sharks scattered at initialization
DEFAULT_INITIAL_FISH = 300       # Fish scattered at initialization
DEFAULT_FISH_BREED = 3           # Chronons before a fish may reproduce
DEFAULT_SHARK_BREED = 10         # Chronons before a shark may reproduce
DEFAULT_STARVE = 5               # Shark energy at birth / after a meal
DEFAULT_GRID_SIZE = 50           # Width and height of the square grid


# ============================================================================
# Driver Configuration
# ============================================================================

# Upper bound on chronons for a single run
MAX_CHRONONS_DEFAULT = 10000

# Pause between chronons when rendering to console (seconds)
STEP_DELAY_SECONDS = 0.1

# Tick timing window for rolling average
TICK_TIME_WINDOW = 100  # Number of chronons to average


# ============================================================================
# Rendering
# ============================================================================

SYMBOL_EMPTY = '.'
SYMBOL_FISH = 'F'
SYMBOL_SHARK = 'S'


# ============================================================================
# Transition Telemetry
# ============================================================================

# Counters filled by process_chronon when a telemetry dict is supplied
TELEMETRY_KEYS = (
    'fish_births',
    'shark_births',
    'meals',
    'starvations',
    'fish_eaten',
    'stayed',
)
