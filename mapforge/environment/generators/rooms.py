"""Dungeon-style map generation with rooms and corridors."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from mapforge import config
from mapforge.environment.tile_types import TileTypeID
from mapforge.util.coordinates import Rect

from .base import BaseMapGenerator, GenerationFailed, GeneratorConfigError

if TYPE_CHECKING:
    from mapforge.types import RandomSeed, TileCoord

logger = logging.getLogger(__name__)


class RoomCarvingGenerator(BaseMapGenerator):
    """Shared carving helpers for generators that build rooms and corridors."""

    def __init__(
        self,
        map_width: TileCoord,
        map_height: TileCoord,
        *,
        seed: RandomSeed = None,
    ) -> None:
        super().__init__(map_width, map_height, seed=seed)
        self.rooms: list[Rect] = []

    def _carve_room(self, tiles: np.ndarray, room: Rect) -> None:
        tiles[
            max(room.x, 0) : min(room.x2, self.map_width),
            max(room.y, 0) : min(room.y2, self.map_height),
        ] = TileTypeID.FLOOR

    # Tunnels never touch column 0 or row 0, so the top and left edges of the
    # map always stay solid.

    def _carve_h_tunnel(self, tiles: np.ndarray, x1: int, x2: int, y: int) -> None:
        if not 0 < y < self.map_height:
            return
        h_slice = slice(max(min(x1, x2), 1), min(max(x1, x2) + 1, self.map_width))
        tiles[h_slice, y] = TileTypeID.FLOOR

    def _carve_v_tunnel(self, tiles: np.ndarray, y1: int, y2: int, x: int) -> None:
        if not 0 < x < self.map_width:
            return
        v_slice = slice(max(min(y1, y2), 1), min(max(y1, y2) + 1, self.map_height))
        tiles[x, v_slice] = TileTypeID.FLOOR

    def _carve_dogleg(self, tiles: np.ndarray, room_a: Rect, room_b: Rect) -> None:
        """Join two room centers with an L-shaped corridor.

        A coin flip decides whether the corridor runs horizontally first
        (bending under ``room_b``) or vertically first (bending beside ``room_a``).
        """
        prev_x, prev_y = room_a.center()
        new_x, new_y = room_b.center()
        if bool(self.rng.getrandbits(1)):
            self._carve_h_tunnel(tiles, prev_x, new_x, prev_y)
            self._carve_v_tunnel(tiles, prev_y, new_y, new_x)
        else:
            self._carve_v_tunnel(tiles, prev_y, new_y, prev_x)
            self._carve_h_tunnel(tiles, prev_x, new_x, new_y)


class SimpleRoomPlacementGenerator(RoomCarvingGenerator):
    """Generates a map with non-overlapping rooms chained by corridors.

    Rooms are sampled at random and kept only if they do not touch any room
    already placed. Each accepted room is linked to the one accepted before it,
    so the rooms form a single chain.
    """

    rng_domain = "map.rooms"

    def __init__(
        self,
        map_width: TileCoord,
        map_height: TileCoord,
        *,
        max_rooms: int = config.ROOMS_MAX_ROOMS,
        min_room_size: int = config.ROOMS_MIN_ROOM_SIZE,
        max_room_size: int = config.ROOMS_MAX_ROOM_SIZE,
        max_attempts: int | None = None,
        seed: RandomSeed = None,
    ) -> None:
        super().__init__(map_width, map_height, seed=seed)
        if max_rooms < 1:
            raise GeneratorConfigError(f"max_rooms must be >= 1, got {max_rooms}")
        if not 1 <= min_room_size <= max_room_size:
            raise GeneratorConfigError(
                "Room size bounds must satisfy 1 <= min <= max, "
                f"got min={min_room_size}, max={max_room_size}"
            )
        # Rooms sit at least one tile in from the top/left edge and leave at
        # least one tile free on the bottom/right edge.
        if max_room_size > map_width - 2 or max_room_size > map_height - 2:
            raise GeneratorConfigError(
                f"max_room_size={max_room_size} does not fit a "
                f"{map_width}x{map_height} map with a 1-tile border"
            )
        self.max_rooms = max_rooms
        self.min_room_size = min_room_size
        self.max_room_size = max_room_size
        self.max_attempts = (
            config.ROOM_PLACEMENT_MAX_ATTEMPTS if max_attempts is None else max_attempts
        )

    def _sample_room(self) -> Rect:
        w = self.rng.randint(self.min_room_size, self.max_room_size)
        h = self.rng.randint(self.min_room_size, self.max_room_size)
        x = self.rng.randint(1, self.map_width - w - 1)
        y = self.rng.randint(1, self.map_height - h - 1)
        return Rect(x, y, w, h)

    def generate(self) -> np.ndarray:
        tiles = self._new_tiles(TileTypeID.WALL)
        rooms: list[Rect] = []
        attempts = 0

        while len(rooms) < self.max_rooms:
            if attempts >= self.max_attempts:
                raise GenerationFailed(
                    f"Placed only {len(rooms)} of {self.max_rooms} rooms in "
                    f"{attempts} attempts on a {self.map_width}x{self.map_height} map"
                )
            attempts += 1

            new_room = self._sample_room()
            if any(new_room.intersects(other) for other in rooms):
                continue

            self._carve_room(tiles, new_room)
            if rooms:
                self._carve_dogleg(tiles, rooms[-1], new_room)
            rooms.append(new_room)

        logger.debug(
            "Placed %d rooms in %d attempts on a %dx%d map",
            len(rooms),
            attempts,
            self.map_width,
            self.map_height,
        )
        self.rooms = rooms
        return self._publish(tiles)
