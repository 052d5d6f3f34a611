"""Tests for cellular automata caves."""

from __future__ import annotations

import numpy as np
import pytest

from mapforge.environment.generators import (
    CellularAutomataGenerator,
    GeneratorConfigError,
)
from mapforge.environment.generators.cellular import count_wall_neighbors
from mapforge.environment.tile_types import TileTypeID


def test_count_wall_neighbors_treats_outside_as_wall() -> None:
    is_wall = np.zeros((3, 3), dtype=bool)
    counts = count_wall_neighbors(is_wall)
    assert counts[1, 1] == 0
    assert counts[0, 0] == 5  # corner: 5 of 8 neighbours are off the map
    assert counts[1, 0] == 3  # edge


def test_count_wall_neighbors_counts_moore_neighbourhood() -> None:
    is_wall = np.ones((5, 5), dtype=bool)
    is_wall[2, 2] = False
    counts = count_wall_neighbors(is_wall)
    assert counts[2, 2] == 8
    assert counts[1, 1] == 7


@pytest.mark.parametrize("iterations", [1, 5])
def test_borders_are_walls_after_smoothing(iterations: int) -> None:
    tiles = CellularAutomataGenerator(30, 20, seed=11).generate(iterations)
    assert np.all(tiles[0, :] == TileTypeID.WALL)
    assert np.all(tiles[-1, :] == TileTypeID.WALL)
    assert np.all(tiles[:, 0] == TileTypeID.WALL)
    assert np.all(tiles[:, -1] == TileTypeID.WALL)


def test_zero_iterations_returns_raw_fill() -> None:
    tiles = CellularAutomataGenerator(30, 20, seed=11).generate(iterations=0)
    raw = CellularAutomataGenerator(30, 20, seed=11)._random_fill()
    assert np.array_equal(tiles, raw)


def test_smoothing_rule() -> None:
    """A floor tile with 1-4 wall neighbours stays floor, 0 or 5+ becomes wall."""
    gen = CellularAutomataGenerator(5, 5, seed=0)
    tiles = np.full((5, 5), TileTypeID.FLOOR, dtype=np.uint8, order="F")
    smoothed = gen._smooth(tiles)
    # Interior centre has no wall neighbours at all
    assert smoothed[2, 2] == TileTypeID.WALL

    tiles[1, 1] = TileTypeID.WALL
    smoothed = gen._smooth(tiles)
    assert smoothed[2, 2] == TileTypeID.FLOOR


def test_wall_chance_extremes() -> None:
    all_wall = CellularAutomataGenerator(10, 10, wall_chance=1.0, seed=1)
    assert np.all(all_wall.generate(iterations=0) == TileTypeID.WALL)
    all_floor = CellularAutomataGenerator(10, 10, wall_chance=0.0, seed=1)
    assert np.all(all_floor.generate(iterations=0) == TileTypeID.FLOOR)


def test_same_seed_same_map() -> None:
    a = CellularAutomataGenerator(40, 40, seed=99).generate()
    b = CellularAutomataGenerator(40, 40, seed=99).generate()
    assert np.array_equal(a, b)


def test_invalid_parameters() -> None:
    with pytest.raises(GeneratorConfigError):
        CellularAutomataGenerator(10, 10, wall_chance=1.5)
    gen = CellularAutomataGenerator(10, 10, seed=1)
    with pytest.raises(GeneratorConfigError):
        gen.generate(iterations=-1)
    assert gen.grid is None


def test_debug_summary_counts_walkable_tiles(caplog: pytest.LogCaptureFixture) -> None:
    gen = CellularAutomataGenerator(30, 20, seed=11)
    with caplog.at_level("DEBUG", logger="mapforge"):
        tiles = gen.generate(iterations=2)
    floor = int(np.count_nonzero(tiles == TileTypeID.FLOOR))
    assert f"ran 2 iterations, {floor} floor tiles" in caplog.text
