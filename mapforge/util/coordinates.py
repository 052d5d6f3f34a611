"""Rectangle and bounds helpers for grid coordinates."""

from __future__ import annotations

from dataclasses import dataclass

from mapforge.types import TileCoord, WorldTilePos


@dataclass(frozen=True)
class Rect:
    """Rectangle/bounding box in tile coordinates.

    ``(x, y)`` is the top-left tile; ``x2``/``y2`` are exclusive edges.
    """

    x: TileCoord
    y: TileCoord
    width: TileCoord
    height: TileCoord

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError(f"Rect origin must be non-negative, got {self!r}")
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Rect must be at least 1x1, got {self!r}")

    @property
    def x2(self) -> TileCoord:
        return self.x + self.width

    @property
    def y2(self) -> TileCoord:
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    def center(self) -> WorldTilePos:
        return (self.x + self.width // 2, self.y + self.height // 2)

    def intersects(self, other: Rect) -> bool:
        # Closed intervals: rooms that only share an edge or a corner still
        # count as intersecting, which keeps a wall between placed rooms.
        return (
            self.x <= other.x2
            and self.x2 >= other.x
            and self.y <= other.y2
            and self.y2 >= other.y
        )

    def contains_rect(self, other: Rect, margin: int = 0) -> bool:
        """Check that ``other`` fits inside this rect with ``margin`` to spare."""
        return (
            other.x >= self.x + margin
            and other.y >= self.y + margin
            and other.x2 <= self.x2 - margin
            and other.y2 <= self.y2 - margin
        )


# =============================================================================
# BOUNDS CHECKING HELPERS
# =============================================================================


def is_carvable_tile_pos(
    pos: WorldTilePos, map_width: TileCoord, map_height: TileCoord
) -> bool:
    """Check if a tile is inside the map and off its top and left edges.

    Corridor carving and aggregation use this looser test, so the bottom and
    right edges stay reachable.
    """
    x, y = pos
    return 0 < x < map_width and 0 < y < map_height


def is_interior_tile_pos(
    pos: WorldTilePos, map_width: TileCoord, map_height: TileCoord
) -> bool:
    """Check if a tile is inside the map and not on its outer ring."""
    x, y = pos
    return 0 < x < map_width - 1 and 0 < y < map_height - 1
