"""
Tile Type system for two-valued maps using the flyweight pattern.

This module defines:
- `TileTypeData`: The intrinsic properties of a *type* of tile (walkable,
  the glyph it renders as, and a display name). These are the flyweight objects.
- A small registration system for `TileTypeData` instances. Each registered
  tile type is assigned a unique integer ID (`TileTypeID`). Generators store a
  NumPy array of these IDs rather than characters.
- Helper functions to convert a `TileTypeID` map into a map of one property
  (glyphs for rendering, walkability for tests and analysis).
"""

from enum import IntEnum

import numpy as np

from mapforge import config

# Defines the intrinsic data for a *type* of tile (flyweight).
TileTypeData = np.dtype(
    [
        ("walkable", bool),
        ("glyph", "U1"),  # Character used by text rendering
        ("display_name", "U32"),  # Human-readable name (Unicode string, max 32 chars)
    ]
)

# --- Tile Type Registration ---

# The index of a tile type in this list becomes its TileTypeID.
_registered_tile_type_data_list: list[np.ndarray] = []

# Maps symbolic names (e.g., "WALL") to their assigned TileTypeID.
_tile_type_name_to_id_map: dict[str, int] = {}


def register_tile_type(name: str, tile_type_data_instance: np.ndarray) -> int:
    """
    Registers a new tile type, assigns it a unique ID, and stores it.

    Args:
        name: A symbolic, unique string name for this tile type (e.g., "WALL").
              Case-insensitive for registration checking.
        tile_type_data_instance: The numpy array (structured with TileTypeData dtype)
                                 containing the properties of this tile type.

    Returns:
        The automatically assigned unique integer ID for this tile type.

    Raises:
        ValueError: If the name (case-insensitive) is already registered.
    """
    normalized_name = name.upper()
    if normalized_name in _tile_type_name_to_id_map:
        raise ValueError(
            f"Tile type name '{name}' (as '{normalized_name}') is already registered."
        )

    tile_type_id = len(_registered_tile_type_data_list)
    _registered_tile_type_data_list.append(tile_type_data_instance)
    _tile_type_name_to_id_map[normalized_name] = tile_type_id
    return tile_type_id


def make_tile_type_data(
    *,  # Forces keyword arguments - prevents bugs from wrong parameter order
    walkable: bool,
    glyph: str,
    display_name: str,
) -> np.ndarray:  # Returns an instance of TileTypeData
    """Helper function to create a TileTypeData instance."""
    if len(glyph) != 1:
        raise ValueError(f"Tile glyph must be a single character, got {glyph!r}")
    return np.array((walkable, glyph, display_name), dtype=TileTypeData)


# --- Define and Register Core Tile Types ---
# WALL is registered first so that ID 0 is the natural fill value.

_WALL_ID = register_tile_type(
    "WALL",
    make_tile_type_data(walkable=False, glyph=config.WALL_GLYPH, display_name="Wall"),
)
_FLOOR_ID = register_tile_type(
    "FLOOR",
    make_tile_type_data(
        walkable=True, glyph=config.FLOOR_GLYPH, display_name="Floor"
    ),
)


class TileTypeID(IntEnum):
    """IDs of the registered tile types, usable directly as numpy values."""

    WALL = _WALL_ID
    FLOOR = _FLOOR_ID


# --- Pre-calculated Property Arrays for Efficient Lookups ---
# Built *after* all tile types have been registered, so that a map of
# TileTypeIDs can be converted to a property map with one fancy-index.

_tile_type_properties_walkable = np.array(
    [t["walkable"] for t in _registered_tile_type_data_list], dtype=bool
)
_tile_type_properties_glyph = np.array(
    [t["glyph"] for t in _registered_tile_type_data_list], dtype="U1"
)

# --- Public Helper Functions for Accessing Tile Properties ---


def get_walkable_map(tile_type_ids_map: np.ndarray) -> np.ndarray:
    """
    Converts a map of TileTypeIDs into a boolean map of walkability.
    True means the tile at that position is floor.
    """
    return _tile_type_properties_walkable[tile_type_ids_map]


def get_glyph_map(tile_type_ids_map: np.ndarray) -> np.ndarray:
    """Converts a map of TileTypeIDs into a map of single-character glyphs."""
    return _tile_type_properties_glyph[tile_type_ids_map]


def get_tile_type_name_by_id(tile_type_id: int) -> str:
    """Return the display name of a tile type, e.g. "Wall"."""
    if 0 <= tile_type_id < len(_registered_tile_type_data_list):
        return str(_registered_tile_type_data_list[tile_type_id]["display_name"])
    raise IndexError(
        f"Invalid TileTypeID: {tile_type_id}. "
        f"Registered IDs are 0 to {len(_registered_tile_type_data_list) - 1}."
    )
