"""Factory functions for creating generators by name.

These functions let callers (the command line, the benchmark script) pick an
algorithm with a string and run it with sensible defaults:

    generator = generate_by_name("cellular", 50, 50, seed=42)
    print(generator.render())

Available generators:
- "rooms": Non-overlapping rooms chained by corridors
- "bsp": Binary space partition rooms joined bottom-up
- "cellular": Cellular automaton caves
- "drunkard": Drunkard's walk caves
- "dla": Diffusion-limited aggregation caves
- "voronoi": Nearest-seed region map
- "noise": Perlin noise elevation map
"""

from __future__ import annotations

from typing import Any

from mapforge import config
from mapforge.types import RandomSeed

from .base import BaseMapGenerator, GeneratorConfigError
from .bsp import BSPGenerator
from .cellular import CellularAutomataGenerator
from .dla import DiffusionLimitedAggregationGenerator
from .drunkard import DrunkardsWalkGenerator
from .noise import PerlinNoiseGenerator
from .rooms import SimpleRoomPlacementGenerator
from .voronoi import VoronoiGenerator

_GENERATOR_CLASSES: dict[str, type[BaseMapGenerator]] = {
    "rooms": SimpleRoomPlacementGenerator,
    "bsp": BSPGenerator,
    "cellular": CellularAutomataGenerator,
    "drunkard": DrunkardsWalkGenerator,
    "dla": DiffusionLimitedAggregationGenerator,
    "voronoi": VoronoiGenerator,
    "noise": PerlinNoiseGenerator,
}

GENERATOR_NAMES: tuple[str, ...] = tuple(_GENERATOR_CLASSES)

# Arguments passed to generate() when the caller does not override them.
# These match the classic 50x50 demo maps.
DEFAULT_GENERATE_PARAMS: dict[str, dict[str, Any]] = {
    "rooms": {},
    "bsp": {},
    "cellular": {"iterations": config.CELLULAR_ITERATIONS},
    "drunkard": {
        "open_percent": config.DRUNKARD_OPEN_PERCENT,
        "max_steps": config.DRUNKARD_MAX_STEPS,
    },
    "dla": {
        "seed_size": config.DLA_SEED_SIZE,
        "max_particles": config.DLA_MAX_PARTICLES,
    },
    "voronoi": {
        "num_seeds": config.VORONOI_NUM_SEEDS,
        "distance_metric": config.VORONOI_DISTANCE_METRIC,
    },
    "noise": {
        "octaves": config.NOISE_OCTAVES,
        "frequency": config.NOISE_FREQUENCY,
        "gain": config.NOISE_GAIN,
        "lacunarity": config.NOISE_LACUNARITY,
    },
}


def create_generator(
    name: str,
    width: int,
    height: int,
    seed: RandomSeed = None,
) -> BaseMapGenerator:
    """Create a generator by name with its default construction parameters.

    Args:
        name: One of GENERATOR_NAMES.
        width: Map width in tiles.
        height: Map height in tiles.
        seed: Optional random seed for deterministic generation.

    Raises:
        GeneratorConfigError: If the name is not recognized, or the map size
            does not suit the generator.
    """
    try:
        generator_class = _GENERATOR_CLASSES[name]
    except KeyError:
        raise GeneratorConfigError(
            f"Unknown generator name: {name!r} "
            f"(expected one of {', '.join(GENERATOR_NAMES)})"
        ) from None
    return generator_class(width, height, seed=seed)


def generate_by_name(
    name: str,
    width: int,
    height: int,
    seed: RandomSeed = None,
    **overrides: Any,
) -> BaseMapGenerator:
    """Create a generator by name, run it, and return it with its grid filled.

    ``overrides`` replace entries of DEFAULT_GENERATE_PARAMS[name]; keys the
    generator's ``generate()`` does not take are rejected.
    """
    generator = create_generator(name, width, height, seed)
    params = dict(DEFAULT_GENERATE_PARAMS[name])
    unknown = set(overrides) - set(params)
    if unknown:
        raise GeneratorConfigError(
            f"{name} does not accept {', '.join(sorted(unknown))}"
        )
    params.update(overrides)
    generator.generate(**params)
    return generator
