"""Cave generation by diffusion-limited aggregation (DLA).

A small open seed is carved at the map center. Particles are then released
from random points on the map edge and wander (8-directional random walk)
until they touch open space, where they stick and become floor. Particles
that wander back out to the border are discarded. The result is a branching,
coral-like structure growing outward from the seed.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from mapforge import config
from mapforge.environment.tile_types import TileTypeID
from mapforge.util.coordinates import is_carvable_tile_pos, is_interior_tile_pos

from .base import BaseMapGenerator, GeneratorConfigError

if TYPE_CHECKING:
    from mapforge.types import RandomSeed, TileCoord, WorldTilePos

logger = logging.getLogger(__name__)

_NEIGHBOR_OFFSETS = tuple(
    (dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0)
)


class DiffusionLimitedAggregationGenerator(BaseMapGenerator):
    """Generates dendritic caves from random-walking particles."""

    rng_domain = "map.dla"
    min_dimension = 3

    def __init__(
        self,
        map_width: TileCoord,
        map_height: TileCoord,
        *,
        max_walk_steps: int | None = None,
        seed: RandomSeed = None,
    ) -> None:
        super().__init__(map_width, map_height, seed=seed)
        self.max_walk_steps = (
            config.DLA_MAX_WALK_STEPS if max_walk_steps is None else max_walk_steps
        )
        if self.max_walk_steps < 1:
            raise GeneratorConfigError(
                f"max_walk_steps must be >= 1, got {self.max_walk_steps}"
            )
        self.stuck_particles = 0
        self.discarded_particles = 0

    def seed_region(self, seed_size: int) -> tuple[slice, slice]:
        """Return the (x, y) slices of the open seed square, clipped to the map.

        Row 0 and column 0 are never part of the seed.
        """
        center_x = self.map_width // 2
        center_y = self.map_height // 2
        xs = slice(
            max(center_x - seed_size, 1),
            min(center_x + seed_size + 1, self.map_width),
        )
        ys = slice(
            max(center_y - seed_size, 1),
            min(center_y + seed_size + 1, self.map_height),
        )
        return xs, ys

    def _spawn_on_edge(self) -> WorldTilePos:
        if bool(self.rng.getrandbits(1)):
            x = 0 if bool(self.rng.getrandbits(1)) else self.map_width - 1
            y = self.rng.randrange(self.map_height)
        else:
            x = self.rng.randrange(self.map_width)
            y = 0 if bool(self.rng.getrandbits(1)) else self.map_height - 1
        return x, y

    def _touches_open(self, tiles: np.ndarray, x: int, y: int) -> bool:
        for dx, dy in _NEIGHBOR_OFFSETS:
            nx, ny = x + dx, y + dy
            if (
                is_carvable_tile_pos((nx, ny), self.map_width, self.map_height)
                and tiles[nx, ny] == TileTypeID.FLOOR
            ):
                return True
        return False

    def _release_particle(self, tiles: np.ndarray) -> bool:
        """Walk one particle until it sticks (True) or is discarded (False)."""
        x, y = self._spawn_on_edge()
        for _ in range(self.max_walk_steps):
            dx, dy = self.rng.choice(_NEIGHBOR_OFFSETS)
            new_x, new_y = x + dx, y + dy
            if not is_interior_tile_pos(
                (new_x, new_y), self.map_width, self.map_height
            ):
                return False

            x, y = new_x, new_y
            if self._touches_open(tiles, x, y):
                tiles[x, y] = TileTypeID.FLOOR
                return True
        return False

    def generate(
        self,
        seed_size: int = config.DLA_SEED_SIZE,
        max_particles: int = config.DLA_MAX_PARTICLES,
    ) -> np.ndarray:
        if seed_size < 0:
            raise GeneratorConfigError(f"seed_size must be >= 0, got {seed_size}")
        if max_particles < 0:
            raise GeneratorConfigError(
                f"max_particles must be >= 0, got {max_particles}"
            )

        tiles = self._new_tiles(TileTypeID.WALL)
        tiles[self.seed_region(seed_size)] = TileTypeID.FLOOR

        stuck = 0
        for _ in range(max_particles):
            if self._release_particle(tiles):
                stuck += 1

        logger.debug("DLA: %d of %d particles stuck", stuck, max_particles)
        self.stuck_particles = stuck
        self.discarded_particles = max_particles - stuck
        return self._publish(tiles)
