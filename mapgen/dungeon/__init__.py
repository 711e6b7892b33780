"""Public dungeon package interface."""

from .config import GenerationOptions, MapPoint, MapSettings
from .errors import (
    GenerationError,
    NoPathError,
    PathPreconditionError,
    PlacementExhausted,
    TileMapPreconditionError,
)
from .pipeline import Map
from .rooms import ROOM_PROTOTYPES, Door, Rect, Room
from .tiles import EdgeKind, Facing, Tile, TileEdge, TileGrid, TileType

__all__ = [
    "GenerationOptions",
    "MapPoint",
    "MapSettings",
    "GenerationError",
    "NoPathError",
    "PathPreconditionError",
    "PlacementExhausted",
    "TileMapPreconditionError",
    "Map",
    "ROOM_PROTOTYPES",
    "Door",
    "Rect",
    "Room",
    "EdgeKind",
    "Facing",
    "Tile",
    "TileEdge",
    "TileGrid",
    "TileType",
]
