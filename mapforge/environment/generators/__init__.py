"""Map generation algorithms for mapforge.

Dungeon generators (produce wall/floor tile grids):
- SimpleRoomPlacementGenerator: Random non-overlapping rooms in a chain
- BSPGenerator: Rooms in the leaves of a binary space partition

Cave generators (produce wall/floor tile grids):
- CellularAutomataGenerator: Smoothed random noise
- DrunkardsWalkGenerator: Random walkers carving tunnels
- DiffusionLimitedAggregationGenerator: Particles sticking to a seed

Field generators:
- VoronoiGenerator: Region symbols by nearest seed point
- PerlinNoiseGenerator: Normalized elevation values

Use create_generator() / generate_by_name() to pick one by name.
"""

from .base import (
    BaseMapGenerator,
    GenerationError,
    GenerationFailed,
    GeneratorConfigError,
)
from .bsp import BSPGenerator, BSPNode
from .cellular import CellularAutomataGenerator
from .dla import DiffusionLimitedAggregationGenerator
from .drunkard import DrunkardsWalkGenerator
from .factory import (
    DEFAULT_GENERATE_PARAMS,
    GENERATOR_NAMES,
    create_generator,
    generate_by_name,
)
from .noise import PerlinNoiseGenerator
from .rooms import SimpleRoomPlacementGenerator
from .voronoi import SeedPoint, VoronoiGenerator

__all__ = [
    "DEFAULT_GENERATE_PARAMS",
    "GENERATOR_NAMES",
    "BSPGenerator",
    "BSPNode",
    "BaseMapGenerator",
    "CellularAutomataGenerator",
    "DiffusionLimitedAggregationGenerator",
    "DrunkardsWalkGenerator",
    "GenerationError",
    "GenerationFailed",
    "GeneratorConfigError",
    "PerlinNoiseGenerator",
    "SeedPoint",
    "SimpleRoomPlacementGenerator",
    "VoronoiGenerator",
    "create_generator",
    "generate_by_name",
]
