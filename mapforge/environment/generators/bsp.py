"""Binary Space Partitioning (BSP) dungeon generation.

The map rectangle is split recursively into a binary tree of partitions. Every
leaf partition receives one room, and sibling subtrees are joined with
dogleg corridors while walking the tree bottom-up, so every room ends up
connected.

Split rules:
- A partition stops splitting once both sides are <= 2 * min_size.
- The split axis is a coin flip unless the partition is clearly elongated
  (aspect ratio >= BSP_SPLIT_RATIO), in which case the long axis is cut.
- The split offset is uniform in [min_size, length - min_size]. A partition
  too short to honour that range simply stays a leaf.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from mapforge import config
from mapforge.environment.tile_types import TileTypeID
from mapforge.util.coordinates import Rect

from .base import GeneratorConfigError
from .rooms import RoomCarvingGenerator

if TYPE_CHECKING:
    from mapforge.types import RandomSeed, TileCoord
    from mapforge.util.rng import RNG

logger = logging.getLogger(__name__)


@dataclass
class BSPNode:
    """A partition of the map. Either a leaf or split into exactly two children."""

    rect: Rect
    left: BSPNode | None = None
    right: BSPNode | None = None
    room: Rect | None = None

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def split(self, rng: RNG, min_size: int) -> bool:
        """Split this node into two children.

        Returns:
            True if the node was split, False if it stays a leaf.
        """
        if not self.is_leaf():
            return False

        width, height = self.rect.width, self.rect.height
        split_vertically = bool(rng.getrandbits(1))

        # Bias toward cutting across the longer axis
        if width > height and width / height >= config.BSP_SPLIT_RATIO:
            split_vertically = True
        elif height > width and height / width >= config.BSP_SPLIT_RATIO:
            split_vertically = False

        length = width if split_vertically else height
        max_split = length - min_size
        if max_split <= min_size:
            return False

        split = rng.randint(min_size, max_split)
        if split >= length - 1:
            return False

        x, y = self.rect.x, self.rect.y
        if split_vertically:
            self.left = BSPNode(Rect(x, y, split, height))
            self.right = BSPNode(Rect(x + split, y, width - split, height))
        else:
            self.left = BSPNode(Rect(x, y, width, split))
            self.right = BSPNode(Rect(x, y + split, width, height - split))
        return True

    def get_room(self) -> Rect | None:
        """Get the first room in this subtree (own room, then left, then right)."""
        if self.room is not None:
            return self.room

        if self.left is not None:
            left_room = self.left.get_room()
            if left_room is not None:
                return left_room

        if self.right is not None:
            return self.right.get_room()

        return None

    def leaves(self) -> Iterator[BSPNode]:
        """Yield leaf nodes left to right."""
        if self.is_leaf():
            yield self
            return
        assert self.left is not None and self.right is not None
        yield from self.left.leaves()
        yield from self.right.leaves()


class BSPGenerator(RoomCarvingGenerator):
    """Generates a dungeon by recursively partitioning the map."""

    rng_domain = "map.bsp"

    def __init__(
        self,
        map_width: TileCoord,
        map_height: TileCoord,
        *,
        min_size: int = config.BSP_MIN_SIZE,
        gutter: int = config.BSP_GUTTER,
        min_room_size: int = config.BSP_MIN_ROOM_SIZE,
        seed: RandomSeed = None,
    ) -> None:
        super().__init__(map_width, map_height, seed=seed)
        if gutter < 0:
            raise GeneratorConfigError(f"gutter must be >= 0, got {gutter}")
        if min_room_size < 1:
            raise GeneratorConfigError(
                f"min_room_size must be >= 1, got {min_room_size}"
            )
        # Smallest leaf side that still holds a room: the room, a gutter on
        # both sides, and one extra tile so the size range is never empty.
        min_leaf = min_room_size + 2 * gutter + 1
        if min_size < min_leaf:
            raise GeneratorConfigError(
                f"min_size={min_size} leaves no room for a {min_room_size}-tile room "
                f"with gutter {gutter}; need min_size >= {min_leaf}"
            )
        if map_width < min_leaf or map_height < min_leaf:
            raise GeneratorConfigError(
                f"A {map_width}x{map_height} map is too small for BSP rooms; "
                f"need at least {min_leaf}x{min_leaf}"
            )
        self.min_size = min_size
        self.gutter = gutter
        self.min_room_size = min_room_size
        self.root: BSPNode | None = None

    def _split_space(self, node: BSPNode) -> None:
        rect = node.rect
        if rect.width <= self.min_size * 2 and rect.height <= self.min_size * 2:
            return
        if node.split(self.rng, self.min_size):
            assert node.left is not None and node.right is not None
            self._split_space(node.left)
            self._split_space(node.right)

    def _room_for_leaf(self, leaf: Rect) -> Rect:
        g = self.gutter
        room_w = self.rng.randint(self.min_room_size, leaf.width - g * 2 - 1)
        room_h = self.rng.randint(self.min_room_size, leaf.height - g * 2 - 1)
        room_x = leaf.x + g + self.rng.randrange(max(1, leaf.width - room_w - g * 2))
        room_y = leaf.y + g + self.rng.randrange(max(1, leaf.height - room_h - g * 2))
        room = Rect(room_x, room_y, room_w, room_h)
        assert leaf.contains_rect(room, margin=g)
        return room

    def _create_rooms(self, tiles: np.ndarray, root: BSPNode) -> list[Rect]:
        rooms = []
        for leaf in root.leaves():
            room = self._room_for_leaf(leaf.rect)
            self._carve_room(tiles, room)
            leaf.room = room
            rooms.append(room)
        return rooms

    def _connect_rooms(self, tiles: np.ndarray, node: BSPNode) -> None:
        if node.left is None or node.right is None:
            return

        self._connect_rooms(tiles, node.left)
        self._connect_rooms(tiles, node.right)

        room_a = node.left.get_room()
        room_b = node.right.get_room()
        if room_a is not None and room_b is not None:
            self._carve_dogleg(tiles, room_a, room_b)

    def leaves(self) -> list[BSPNode]:
        if self.root is None:
            return []
        return list(self.root.leaves())

    def generate(self) -> np.ndarray:
        tiles = self._new_tiles(TileTypeID.WALL)

        root = BSPNode(Rect(0, 0, self.map_width, self.map_height))
        self._split_space(root)
        rooms = self._create_rooms(tiles, root)
        self._connect_rooms(tiles, root)

        logger.debug(
            "BSP produced %d leaves on a %dx%d map, %d of %d tiles in rooms",
            len(rooms),
            self.map_width,
            self.map_height,
            sum(room.area for room in rooms),
            root.rect.area,
        )
        self.root = root
        self.rooms = rooms
        return self._publish(tiles)
