"""Tests for simple room placement."""

from __future__ import annotations

import numpy as np
import pytest

from mapforge.environment.generators import (
    GenerationFailed,
    GeneratorConfigError,
    SimpleRoomPlacementGenerator,
)
from mapforge.environment.tile_types import TileTypeID


def _make(seed: int = 7, **kwargs) -> SimpleRoomPlacementGenerator:
    params = {"max_rooms": 6, "min_room_size": 4, "max_room_size": 8}
    params.update(kwargs)
    return SimpleRoomPlacementGenerator(40, 30, seed=seed, **params)


class TestRoomPlacement:
    def test_places_requested_room_count(self) -> None:
        gen = _make()
        gen.generate()
        assert len(gen.rooms) == 6

    def test_rooms_never_touch(self) -> None:
        gen = _make()
        gen.generate()
        for i, a in enumerate(gen.rooms):
            for b in gen.rooms[i + 1 :]:
                assert not a.intersects(b)

    def test_rooms_are_carved_inside_the_border(self) -> None:
        gen = _make()
        tiles = gen.generate()

        for room in gen.rooms:
            assert room.x >= 1 and room.y >= 1
            assert room.x2 <= gen.map_width - 1
            assert room.y2 <= gen.map_height - 1
            assert np.all(tiles[room.x : room.x2, room.y : room.y2] == TileTypeID.FLOOR)

        # Top and left edges are never carved
        assert np.all(tiles[0, :] == TileTypeID.WALL)
        assert np.all(tiles[:, 0] == TileTypeID.WALL)

    def test_consecutive_rooms_are_joined(self) -> None:
        """Each room's center is reachable from the previous room's center."""
        gen = _make()
        tiles = gen.generate()
        walkable = tiles == TileTypeID.FLOOR

        start = gen.rooms[0].center()
        seen = {start}
        frontier = [start]
        while frontier:
            x, y = frontier.pop()
            for nx, ny in ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)):
                if (
                    0 <= nx < gen.map_width
                    and 0 <= ny < gen.map_height
                    and walkable[nx, ny]
                    and (nx, ny) not in seen
                ):
                    seen.add((nx, ny))
                    frontier.append((nx, ny))

        assert all(room.center() in seen for room in gen.rooms)

    def test_same_seed_same_map(self) -> None:
        assert np.array_equal(_make(seed=3).generate(), _make(seed=3).generate())


class TestRoomPlacementErrors:
    def test_room_too_big_for_map(self) -> None:
        with pytest.raises(GeneratorConfigError):
            SimpleRoomPlacementGenerator(10, 10, max_room_size=9)

    def test_inverted_size_bounds(self) -> None:
        with pytest.raises(GeneratorConfigError):
            SimpleRoomPlacementGenerator(
                40, 30, min_room_size=6, max_room_size=4
            )

    def test_non_positive_dimensions(self) -> None:
        with pytest.raises(GeneratorConfigError):
            SimpleRoomPlacementGenerator(0, 30)

    def test_crowded_map_fails_after_attempt_cap(self) -> None:
        """Ten 8x8 rooms can never fit on a 12x12 map."""
        gen = SimpleRoomPlacementGenerator(
            12,
            12,
            max_rooms=10,
            min_room_size=8,
            max_room_size=8,
            max_attempts=200,
            seed=1,
        )
        with pytest.raises(GenerationFailed):
            gen.generate()
        assert gen.grid is None
