"""Elevation maps from multi-octave Perlin noise.

The height field is a sum of Perlin layers. Each octave samples at a higher
frequency (times ``lacunarity``) with a smaller amplitude (times ``gain``), and
the total is min-max normalized to [0, 1] over the whole map.

Gradients come from a shuffled 256-entry permutation table (duplicated to 512
so corner hashes never need wrapping). Only the four diagonal gradients are
used, which is enough for smooth terrain at map scale.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from mapforge import config

from .base import BaseMapGenerator, GeneratorConfigError

if TYPE_CHECKING:
    from mapforge.types import RandomSeed, TileCoord

logger = logging.getLogger(__name__)

_PERMUTATION_SIZE = 256

# Gradient per (hash & 3): x+y, -x+y, x-y, -x-y
_GRAD_X = np.array([1.0, -1.0, 1.0, -1.0])
_GRAD_Y = np.array([1.0, 1.0, -1.0, -1.0])


def _fade(t: np.ndarray) -> np.ndarray:
    return t * t * t * (t * (t * 6 - 15) + 10)


def _lerp(a: np.ndarray, b: np.ndarray, t: np.ndarray) -> np.ndarray:
    return a + t * (b - a)


def _grad(hashes: np.ndarray, x: np.ndarray, y: np.ndarray) -> np.ndarray:
    index = hashes & 3
    return _GRAD_X[index] * x + _GRAD_Y[index] * y


def perlin(x: np.ndarray, y: np.ndarray, permutation: np.ndarray) -> np.ndarray:
    """Sample 2D Perlin noise at every (x, y) pair.

    Args:
        x: Sample x coordinates in noise space.
        y: Sample y coordinates, same shape as ``x``.
        permutation: 512-entry hash table (a 256 permutation repeated twice).

    Returns:
        Noise values, roughly within [-1, 1], in the shape of ``x``.
    """
    x_floor = np.floor(x)
    y_floor = np.floor(y)
    xi = x_floor.astype(np.int64) & 255
    yi = y_floor.astype(np.int64) & 255

    # Local coordinates within each lattice cell
    xf = x - x_floor
    yf = y - y_floor
    u = _fade(xf)
    v = _fade(yf)

    aa = permutation[permutation[xi] + yi]
    ab = permutation[permutation[xi] + yi + 1]
    ba = permutation[permutation[xi + 1] + yi]
    bb = permutation[permutation[xi + 1] + yi + 1]

    x1 = _lerp(_grad(aa, xf, yf), _grad(ba, xf - 1, yf), u)
    x2 = _lerp(_grad(ab, xf, yf - 1), _grad(bb, xf - 1, yf - 1), u)
    return _lerp(x1, x2, v)


def elevation_glyphs(heights: np.ndarray) -> np.ndarray:
    """Map normalized elevations to display glyphs, band by band."""
    glyphs = np.full(heights.shape, config.PEAK_GLYPH, dtype="U1", order="F")
    # Walk the bands from the top down so lower bands overwrite higher ones
    for upper_bound, glyph in reversed(config.ELEVATION_BANDS):
        glyphs[heights < upper_bound] = glyph
    return glyphs


class PerlinNoiseGenerator(BaseMapGenerator):
    """Generates a normalized height field.

    Unlike the tile generators, ``grid`` holds float64 elevations in [0, 1]
    rather than tile type IDs.
    """

    rng_domain = "map.noise"

    def __init__(
        self,
        map_width: TileCoord,
        map_height: TileCoord,
        *,
        seed: RandomSeed = None,
    ) -> None:
        super().__init__(map_width, map_height, seed=seed)
        self.permutation: np.ndarray | None = None

    def _build_permutation(self) -> np.ndarray:
        values = list(range(_PERMUTATION_SIZE))
        self.rng.shuffle(values)
        return np.array(values + values, dtype=np.int64)

    def generate(
        self,
        octaves: int = config.NOISE_OCTAVES,
        frequency: float = config.NOISE_FREQUENCY,
        gain: float = config.NOISE_GAIN,
        lacunarity: float = config.NOISE_LACUNARITY,
    ) -> np.ndarray:
        if octaves < 1:
            raise GeneratorConfigError(f"octaves must be >= 1, got {octaves}")
        if frequency <= 0:
            raise GeneratorConfigError(f"frequency must be > 0, got {frequency}")
        if lacunarity <= 0:
            raise GeneratorConfigError(f"lacunarity must be > 0, got {lacunarity}")

        permutation = self._build_permutation()
        xs, ys = np.meshgrid(
            np.arange(self.map_width, dtype=np.float64),
            np.arange(self.map_height, dtype=np.float64),
            indexing="ij",
        )

        heights = np.zeros((self.map_width, self.map_height), dtype=np.float64)
        amplitude = 1.0
        octave_frequency = frequency
        for _ in range(octaves):
            sample_x = xs * octave_frequency / self.map_width
            sample_y = ys * octave_frequency / self.map_height
            heights += perlin(sample_x, sample_y, permutation) * amplitude
            amplitude *= gain
            octave_frequency *= lacunarity

        low = heights.min()
        high = heights.max()
        if high == low:
            logger.warning(
                "Noise field is flat (%.4f) on a %dx%d map; returning zeros",
                low,
                self.map_width,
                self.map_height,
            )
            normalized = np.zeros_like(heights)
        else:
            normalized = (heights - low) / (high - low)

        logger.debug(
            "Perlin noise: %d octaves, frequency %.2f, gain %.2f, lacunarity %.2f",
            octaves,
            frequency,
            gain,
            lacunarity,
        )
        self.permutation = permutation
        return self._publish(np.asfortranarray(normalized))

    def glyphs(self) -> np.ndarray:
        return elevation_glyphs(self._require_grid())
