"""
project: Adventure Mapgen
module: __init__.py
License: MIT

Seeded room-graph dungeon generator.

Rooms are scattered on a coarse grid, linked through an adjacency graph, a
route is found through the mandatory waypoint rooms with A*, and the rooms on
that route (plus a few random branches) are rasterized into a tile grid that a
view layer can query and subscribe to.
"""

from .dungeon import (  # noqa: F401
    Door,
    EdgeKind,
    Facing,
    GenerationError,
    GenerationOptions,
    Map,
    MapPoint,
    MapSettings,
    NoPathError,
    PlacementExhausted,
    Room,
    Tile,
    TileEdge,
    TileType,
)

__version__ = "0.3.0"

__all__ = [
    "Door",
    "EdgeKind",
    "Facing",
    "GenerationError",
    "GenerationOptions",
    "Map",
    "MapPoint",
    "MapSettings",
    "NoPathError",
    "PlacementExhausted",
    "Room",
    "Tile",
    "TileEdge",
    "TileType",
]
