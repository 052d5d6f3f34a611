"""Base classes and errors for map generation."""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Any, ClassVar

import numpy as np

from mapforge.environment import tile_types
from mapforge.environment.tile_types import TileTypeID
from mapforge.util.rng import RNGProvider

if TYPE_CHECKING:
    from mapforge.types import RandomSeed, TileCoord
    from mapforge.util.rng import RNGStream


class GenerationError(Exception):
    """Base class for everything a generator can raise."""


class GeneratorConfigError(GenerationError, ValueError):
    """Raised when a generator is built or called with unusable parameters.

    Raised before any work is done, so the generator's previous grid (if any)
    is left untouched.
    """


class GenerationFailed(GenerationError):
    """Raised when a bounded sampling loop cannot satisfy its constraints.

    For example, when rooms keep overlapping because the map is too crowded,
    or a drunkard's walk cannot open the requested fraction of the map.
    """


class BaseMapGenerator(abc.ABC):
    """Abstract base class for map generation algorithms.

    Subclasses set ``rng_domain`` and implement ``generate()``, which must
    build into a fresh array and hand it to ``_publish()`` only once it is
    complete. Until the first successful call ``grid`` is None.
    """

    rng_domain: ClassVar[str] = "map"
    # Smallest width/height the algorithm can work with
    min_dimension: ClassVar[int] = 1

    def __init__(
        self,
        map_width: TileCoord,
        map_height: TileCoord,
        *,
        seed: RandomSeed = None,
    ) -> None:
        if map_width <= 0 or map_height <= 0:
            raise GeneratorConfigError(
                f"Map dimensions must be positive, got {map_width}x{map_height}"
            )
        if map_width < self.min_dimension or map_height < self.min_dimension:
            raise GeneratorConfigError(
                f"{type(self).__name__} needs at least "
                f"{self.min_dimension}x{self.min_dimension} tiles, "
                f"got {map_width}x{map_height}"
            )
        self.map_width = map_width
        self.map_height = map_height
        self._rng_provider = RNGProvider(seed)
        self.rng: RNGStream = self._rng_provider.get(self.rng_domain)
        self.grid: np.ndarray | None = None

    @property
    def seed(self) -> RandomSeed:
        return self._rng_provider.master_seed

    def reseed(self, seed: RandomSeed = None) -> None:
        """Restart this generator's random stream from ``seed``."""
        self._rng_provider.reset(seed)

    @abc.abstractmethod
    def generate(self, *args: Any, **kwargs: Any) -> np.ndarray:
        """Generate the map and return its grid."""
        raise NotImplementedError

    def _new_tiles(self, fill: TileTypeID = TileTypeID.WALL) -> np.ndarray:
        return np.full(
            (self.map_width, self.map_height),
            fill_value=fill,
            dtype=np.uint8,
            order="F",
        )

    def _publish(self, grid: np.ndarray) -> np.ndarray:
        self.grid = grid
        return grid

    def glyphs(self) -> np.ndarray:
        """Return a ``(width, height)`` array of characters for the grid."""
        return tile_types.get_glyph_map(self._require_grid())

    def render(self) -> str:
        """Render the grid as text, one line per row, top row first."""
        glyphs = self.glyphs()
        # Grids are indexed [x, y]; the transpose walks rows in y order.
        return "".join("".join(row) + "\n" for row in glyphs.T)

    def _require_grid(self) -> np.ndarray:
        if self.grid is None:
            raise GenerationError(
                f"{type(self).__name__} has no map yet - call generate() first"
            )
        return self.grid

    def __str__(self) -> str:
        if self.grid is None:
            return f"<{type(self).__name__} {self.map_width}x{self.map_height}>"
        return self.render()
