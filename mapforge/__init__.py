"""Procedural grid-map generation.

Each generator in :mod:`mapforge.environment.generators` builds a fixed-size
grid (walls and floors, region symbols, or elevation) from a handful of
parameters and an optional seed, and can render it as plain text.
"""

__version__ = "0.1.0"
