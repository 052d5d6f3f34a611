"""Cave generation with a cellular automaton.

Algorithm:
1. Initialize every tile independently: wall with probability wall_chance.
2. For each iteration, rebuild the whole map from the previous snapshot:
   - Border tiles always become walls.
   - Every other tile counts walls in its 8-tile Moore neighbourhood
     (tiles outside the map count as walls):
       0 walls   -> wall
       1-4 walls -> floor
       5-8 walls -> wall
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from mapforge import config
from mapforge.environment import tile_types
from mapforge.environment.tile_types import TileTypeID

from .base import BaseMapGenerator, GeneratorConfigError

if TYPE_CHECKING:
    from mapforge.types import RandomSeed, TileCoord

logger = logging.getLogger(__name__)

# Offsets of the 8 neighbours around a tile
_NEIGHBOR_OFFSETS = tuple(
    (dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0)
)

# Neighbour wall counts that turn a tile into floor
_FLOOR_MIN_WALLS = 1
_FLOOR_MAX_WALLS = 4


def count_wall_neighbors(is_wall: np.ndarray) -> np.ndarray:
    """Count wall tiles among the 8 neighbours of every tile.

    Tiles outside the map are treated as walls.
    """
    width, height = is_wall.shape
    padded = np.pad(is_wall, 1, mode="constant", constant_values=True)
    counts = np.zeros((width, height), dtype=np.uint8)
    for dx, dy in _NEIGHBOR_OFFSETS:
        counts += padded[1 + dx : 1 + dx + width, 1 + dy : 1 + dy + height]
    return counts


class CellularAutomataGenerator(BaseMapGenerator):
    """Generates organic caves by smoothing random noise."""

    rng_domain = "map.cellular"

    def __init__(
        self,
        map_width: TileCoord,
        map_height: TileCoord,
        *,
        wall_chance: float = config.CELLULAR_WALL_CHANCE,
        seed: RandomSeed = None,
    ) -> None:
        super().__init__(map_width, map_height, seed=seed)
        if not 0.0 <= wall_chance <= 1.0:
            raise GeneratorConfigError(
                f"wall_chance must be within [0, 1], got {wall_chance}"
            )
        self.wall_chance = wall_chance

    def _random_fill(self) -> np.ndarray:
        tiles = self._new_tiles(TileTypeID.FLOOR)
        for x in range(self.map_width):
            for y in range(self.map_height):
                if self.rng.random() < self.wall_chance:
                    tiles[x, y] = TileTypeID.WALL
        return tiles

    def _smooth(self, tiles: np.ndarray) -> np.ndarray:
        walls = count_wall_neighbors(tiles == TileTypeID.WALL)
        becomes_floor = (walls >= _FLOOR_MIN_WALLS) & (walls <= _FLOOR_MAX_WALLS)

        smoothed = self._new_tiles(TileTypeID.WALL)
        smoothed[becomes_floor] = TileTypeID.FLOOR
        smoothed[0, :] = TileTypeID.WALL
        smoothed[-1, :] = TileTypeID.WALL
        smoothed[:, 0] = TileTypeID.WALL
        smoothed[:, -1] = TileTypeID.WALL
        return smoothed

    def generate(self, iterations: int = config.CELLULAR_ITERATIONS) -> np.ndarray:
        if iterations < 0:
            raise GeneratorConfigError(f"iterations must be >= 0, got {iterations}")

        tiles = self._random_fill()
        for _ in range(iterations):
            tiles = self._smooth(tiles)

        logger.debug(
            "Cellular automaton ran %d iterations, %d floor tiles",
            iterations,
            int(np.count_nonzero(tile_types.get_walkable_map(tiles))),
        )
        return self._publish(tiles)
