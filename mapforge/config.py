"""
Configuration constants.

Centralizes all magic numbers and default parameters used by the generators.
Organized by functional area for easy maintenance.
"""

from mapforge.types import Glyph, RandomSeed

# =============================================================================
# GENERAL
# =============================================================================

# RANDOM_SEED = "burrito1"
RANDOM_SEED: RandomSeed = None

# Map size used by the command line front end when none is given
DEFAULT_MAP_WIDTH = 50
DEFAULT_MAP_HEIGHT = 50

# =============================================================================
# RENDERING
# =============================================================================

WALL_GLYPH: Glyph = "#"
FLOOR_GLYPH: Glyph = "."

# Elevation bands for rendering normalized noise, checked in order with "<".
# Anything at or above the last threshold renders as PEAK_GLYPH.
ELEVATION_BANDS: tuple[tuple[float, Glyph], ...] = (
    (0.3, "~"),  # water
    (0.45, "."),  # plains
    (0.7, "^"),  # hills
)
PEAK_GLYPH: Glyph = "A"

# =============================================================================
# SIMPLE ROOM PLACEMENT
# =============================================================================

ROOMS_MAX_ROOMS = 10
ROOMS_MIN_ROOM_SIZE = 4
ROOMS_MAX_ROOM_SIZE = 8

# Total room samples (accepted + rejected) before giving up
ROOM_PLACEMENT_MAX_ATTEMPTS = 10_000

# =============================================================================
# BINARY SPACE PARTITION
# =============================================================================

BSP_MIN_SIZE = 6  # Nodes stop splitting once both sides are <= 2 * this
BSP_GUTTER = 1  # Empty margin between a room and its leaf boundary
BSP_MIN_ROOM_SIZE = 3
BSP_SPLIT_RATIO = 1.25  # Aspect ratio that forces a split along the long axis

# =============================================================================
# CELLULAR AUTOMATA
# =============================================================================

CELLULAR_WALL_CHANCE = 0.5
CELLULAR_ITERATIONS = 5

# =============================================================================
# DRUNKARD'S WALK
# =============================================================================

DRUNKARD_OPEN_PERCENT = 0.33
DRUNKARD_MAX_STEPS = 200

# Walkers allowed before the target open fraction is declared unreachable
DRUNKARD_MAX_WALKERS = 10_000

# Respawn sampling tries per map cell. Scaling by area keeps the chance of
# missing the only floor cell on a large map negligible.
RESPAWN_ATTEMPTS_PER_CELL = 32

# =============================================================================
# DIFFUSION-LIMITED AGGREGATION
# =============================================================================

DLA_SEED_SIZE = 2
DLA_MAX_PARTICLES = 4000

# Steps a single particle may wander before it is discarded
DLA_MAX_WALK_STEPS = 1_000_000

# =============================================================================
# VORONOI
# =============================================================================

REGION_SYMBOLS = "ABCDEFGHIJ"
VORONOI_NUM_SEEDS = 5
VORONOI_DISTANCE_METRIC = "manhattan"

# =============================================================================
# PERLIN NOISE
# =============================================================================

NOISE_OCTAVES = 4
NOISE_FREQUENCY = 4.0
NOISE_GAIN = 0.5
NOISE_LACUNARITY = 2.0
