from __future__ import annotations

from typing import Literal

# =============================================================================
# TILE-BASED COORDINATE SYSTEMS (Always integers)
# =============================================================================


TileCoord = int  # Always integer tile position

# Map coordinates - absolute positions on the generated grid
WorldTileCoord = TileCoord  # Example: x=5, y=3
WorldTilePos = tuple[WorldTileCoord, WorldTileCoord]  # Example: (5, 3)

# =============================================================================
# GENERATION-RELATED TYPES
# =============================================================================

# Random seed for deterministic generation.
# Can be an int for numeric seeds or a descriptive string like "burrito1".
RandomSeed = int | str | None

# Distance metrics understood by the Voronoi generator. Names are matched
# case-insensitively, so this is the normalized (lowercase) form.
DistanceMetricName = Literal["euclidean", "manhattan", "chebyshev"]

# A single character used to draw one cell of a rendered map.
Glyph = str
