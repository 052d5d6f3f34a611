"""Region maps from a Voronoi diagram.

Seed points are scattered over the map and every tile joins the region of the
nearest seed under the chosen distance metric. Ties go to the seed that was
placed first.

Regions are drawn with a fixed alphabet of symbols. When there are more seeds
than symbols the alphabet wraps, so two distinct regions can share a symbol;
``region_ids`` keeps them apart.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

import numpy as np

from mapforge import config

from .base import BaseMapGenerator, GeneratorConfigError

if TYPE_CHECKING:
    from mapforge.types import DistanceMetricName, RandomSeed, TileCoord

logger = logging.getLogger(__name__)

DistanceFn: TypeAlias = Callable[[np.ndarray, np.ndarray, int, int], np.ndarray]


@dataclass(frozen=True)
class SeedPoint:
    """A region's reference location and the symbol it is drawn with."""

    x: TileCoord
    y: TileCoord
    symbol: str
    region_id: int


def euclidean_distance(xs: np.ndarray, ys: np.ndarray, x: int, y: int) -> np.ndarray:
    """Straight-line distance."""
    return np.sqrt((xs - x) ** 2 + (ys - y) ** 2)


def manhattan_distance(xs: np.ndarray, ys: np.ndarray, x: int, y: int) -> np.ndarray:
    """Grid (taxicab) distance."""
    return (np.abs(xs - x) + np.abs(ys - y)).astype(np.float64)


def chebyshev_distance(xs: np.ndarray, ys: np.ndarray, x: int, y: int) -> np.ndarray:
    """King's-move distance."""
    return np.maximum(np.abs(xs - x), np.abs(ys - y)).astype(np.float64)


DISTANCE_METRICS: dict[str, DistanceFn] = {
    "euclidean": euclidean_distance,
    "manhattan": manhattan_distance,
    "chebyshev": chebyshev_distance,
}


def resolve_distance_metric(name: str) -> DistanceFn:
    """Look up a distance function by name, ignoring case."""
    try:
        return DISTANCE_METRICS[name.lower()]
    except KeyError:
        raise GeneratorConfigError(
            f"Unknown distance metric {name!r}; "
            f"expected one of {', '.join(DISTANCE_METRICS)}"
        ) from None


class VoronoiGenerator(BaseMapGenerator):
    """Partitions the map into nearest-seed regions."""

    rng_domain = "map.voronoi"

    def __init__(
        self,
        map_width: TileCoord,
        map_height: TileCoord,
        *,
        symbols: Sequence[str] = config.REGION_SYMBOLS,
        seed: RandomSeed = None,
    ) -> None:
        super().__init__(map_width, map_height, seed=seed)
        if not symbols:
            raise GeneratorConfigError("Voronoi needs at least one region symbol")
        if any(len(symbol) != 1 for symbol in symbols):
            raise GeneratorConfigError(
                f"Region symbols must be single characters, got {list(symbols)!r}"
            )
        self.symbols = tuple(symbols)
        self.seeds: list[SeedPoint] = []
        self.region_ids: np.ndarray | None = None

    def place_seeds(self, num_seeds: int) -> list[SeedPoint]:
        """Scatter ``num_seeds`` seed points uniformly over the map."""
        if num_seeds < 1:
            raise GeneratorConfigError(f"num_seeds must be >= 1, got {num_seeds}")
        if num_seeds > len(self.symbols):
            logger.warning(
                "%d seeds but only %d region symbols; symbols will repeat",
                num_seeds,
                len(self.symbols),
            )

        seeds = []
        for i in range(num_seeds):
            x = self.rng.randrange(self.map_width)
            y = self.rng.randrange(self.map_height)
            seeds.append(SeedPoint(x, y, self.symbols[i % len(self.symbols)], i))
        return seeds

    def assign_regions(
        self,
        seeds: Sequence[SeedPoint],
        distance_metric: DistanceMetricName | str = "euclidean",
    ) -> np.ndarray:
        """Assign every tile to its nearest seed and return the symbol grid.

        A seed only takes a tile from an earlier seed when it is strictly
        closer, so equal distances resolve to the first seed in ``seeds``.
        """
        if not seeds:
            raise GeneratorConfigError("assign_regions needs at least one seed")
        distance = resolve_distance_metric(distance_metric)

        xs, ys = np.meshgrid(
            np.arange(self.map_width), np.arange(self.map_height), indexing="ij"
        )
        best = np.full((self.map_width, self.map_height), np.inf)
        owner = np.zeros((self.map_width, self.map_height), dtype=np.int16)

        for index, seed in enumerate(seeds):
            dist = distance(xs, ys, seed.x, seed.y)
            closer = dist < best
            best[closer] = dist[closer]
            owner[closer] = index

        seed_symbols = np.array([seed.symbol for seed in seeds], dtype="U1")
        seed_region_ids = np.array([seed.region_id for seed in seeds], dtype=np.int16)
        symbols = np.asfortranarray(seed_symbols[owner])

        self.seeds = list(seeds)
        self.region_ids = np.asfortranarray(seed_region_ids[owner])
        return self._publish(symbols)

    def generate(
        self,
        num_seeds: int = config.VORONOI_NUM_SEEDS,
        distance_metric: DistanceMetricName | str = "euclidean",
    ) -> np.ndarray:
        # Fail on a bad metric before consuming any randomness
        resolve_distance_metric(distance_metric)
        seeds = self.place_seeds(num_seeds)
        symbols = self.assign_regions(seeds, distance_metric)
        logger.debug(
            "Voronoi: %d regions, %s distance", len(seeds), distance_metric.lower()
        )
        return symbols

    def glyphs(self) -> np.ndarray:
        return self._require_grid()
