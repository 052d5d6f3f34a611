"""Cave generation with a drunkard's walk.

A walker starts on a random tile and staggers one tile at a time in a random
cardinal direction, carving floor as it goes. After max_steps steps it passes
out and a new walker appears on a random floor tile. Walkers keep coming until
the requested fraction of the map is open.

Moves are clamped one tile in from the map edge rather than reflected, so a
walker pressed against a border keeps bumping into it.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

import numpy as np

from mapforge import config
from mapforge.environment.tile_types import TileTypeID

from .base import BaseMapGenerator, GenerationFailed, GeneratorConfigError

if TYPE_CHECKING:
    from mapforge.types import RandomSeed, TileCoord, WorldTilePos

logger = logging.getLogger(__name__)

# left, right, up, down
_STEPS: tuple[WorldTilePos, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


class DrunkardsWalkGenerator(BaseMapGenerator):
    """Generates winding caves by random walks."""

    rng_domain = "map.drunkard"
    min_dimension = 3

    def __init__(
        self,
        map_width: TileCoord,
        map_height: TileCoord,
        *,
        max_walkers: int | None = None,
        seed: RandomSeed = None,
    ) -> None:
        super().__init__(map_width, map_height, seed=seed)
        self.max_walkers = (
            config.DRUNKARD_MAX_WALKERS if max_walkers is None else max_walkers
        )
        if self.max_walkers < 1:
            raise GeneratorConfigError(
                f"max_walkers must be >= 1, got {self.max_walkers}"
            )
        self.open_count = 0

    def _step(self, x: int, y: int) -> WorldTilePos:
        dx, dy = self.rng.choice(_STEPS)
        # Only the axis that moved is clamped, so a walker that starts on the
        # border can slide along it.
        if dx:
            x = min(max(x + dx, 1), self.map_width - 2)
        else:
            y = min(max(y + dy, 1), self.map_height - 2)
        return x, y

    def _respawn(self, tiles: np.ndarray) -> WorldTilePos:
        """Pick a random floor tile by rejection sampling."""
        attempts = self.map_width * self.map_height * config.RESPAWN_ATTEMPTS_PER_CELL
        for _ in range(attempts):
            x = self.rng.randrange(self.map_width)
            y = self.rng.randrange(self.map_height)
            if tiles[x, y] == TileTypeID.FLOOR:
                return x, y
        raise GenerationFailed(
            f"No floor tile found for a new walker after {attempts} attempts"
        )

    def generate(
        self,
        open_percent: float = config.DRUNKARD_OPEN_PERCENT,
        max_steps: int = config.DRUNKARD_MAX_STEPS,
    ) -> np.ndarray:
        if not 0.0 <= open_percent <= 1.0:
            raise GeneratorConfigError(
                f"open_percent must be within [0, 1], got {open_percent}"
            )
        if max_steps < 1:
            raise GeneratorConfigError(f"max_steps must be >= 1, got {max_steps}")

        tiles = self._new_tiles(TileTypeID.WALL)
        target_open = math.floor(self.map_width * self.map_height * open_percent)
        open_count = 0
        walkers = 0

        x = self.rng.randrange(self.map_width)
        y = self.rng.randrange(self.map_height)

        while open_count < target_open:
            if walkers >= self.max_walkers:
                raise GenerationFailed(
                    f"Opened {open_count} of {target_open} tiles before running "
                    f"out of walkers ({self.max_walkers})"
                )
            walkers += 1

            for _ in range(max_steps):
                if tiles[x, y] == TileTypeID.WALL:
                    tiles[x, y] = TileTypeID.FLOOR
                    open_count += 1

                if open_count >= target_open:
                    break

                x, y = self._step(x, y)

            if open_count < target_open:
                x, y = self._respawn(tiles)

        logger.debug(
            "Drunkard's walk opened %d/%d tiles with %d walkers",
            open_count,
            self.map_width * self.map_height,
            walkers,
        )
        self.open_count = open_count
        return self._publish(tiles)
