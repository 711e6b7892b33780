"""Fine-grained tile model.

Tiles are the only generation output that outlives ``Map.generate``; a view
layer queries them through ``Map.get_tile_at`` and listens on their change
events. Walls and doors live on tile *edges*: a boundary tile is still a
floor, it just carries a WALL (or DOOR) edge on the side facing out of its
room.
"""
from __future__ import annotations

from collections import Counter
from enum import Enum
from typing import Iterator, List, NamedTuple, Optional, Tuple

from .events import Event


class TileType(Enum):
    FLOOR = "floor"
    WALL = "wall"
    DOOR = "door"
    DEBUG = "debug"  # two rooms rasterized onto the same coordinate


class Facing(Enum):
    NORTH = "n"
    EAST = "e"
    SOUTH = "s"
    WEST = "w"


class EdgeKind(Enum):
    WALL = "wall"
    DOOR = "door"


class TileEdge(NamedTuple):
    facing: Facing
    kind: EdgeKind = EdgeKind.WALL


class Tile:
    """One unit tile. Width and height are always 1."""

    __slots__ = ("x", "y", "room_id", "_type", "_edges", "changed")

    width = 1
    height = 1

    def __init__(self, x: int, y: int, tile_type: TileType = TileType.FLOOR, edges: Tuple[TileEdge, ...] = (), room_id: int = 0):
        self.x = x
        self.y = y
        self.room_id = room_id
        self._type = tile_type
        self._edges = tuple(edges)
        self.changed = Event(f"tile_{x}_{y}")

    @property
    def type(self) -> TileType:
        return self._type

    @type.setter
    def type(self, value: TileType) -> None:
        if value is self._type:
            return
        self._type = value
        self.changed.emit(self)

    @property
    def edges(self) -> Tuple[TileEdge, ...]:
        return self._edges

    @edges.setter
    def edges(self, value) -> None:
        value = tuple(value)
        if value == self._edges:
            return
        self._edges = value
        self.changed.emit(self)

    def edge(self, facing: Facing) -> Optional[TileEdge]:
        for e in self._edges:
            if e.facing is facing:
                return e
        return None

    def set_edge_kind(self, facing: Facing, kind: EdgeKind) -> bool:
        """Switch the kind of an existing edge. Returns False when the tile has no edge on that side."""
        if self.edge(facing) is None:
            return False
        self.edges = tuple(TileEdge(e.facing, kind) if e.facing is facing else e for e in self._edges)
        return True

    def __repr__(self) -> str:
        edges = ",".join(f"{e.facing.value}:{e.kind.value}" for e in self._edges)
        return f"Tile({self.x},{self.y},{self._type.value},[{edges}])"


class TileGrid:
    """Dense column-major tile storage (``cells[x][y]``); empty slots are None."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.cells: List[List[Optional[Tile]]] = [[None for _ in range(height)] for _ in range(width)]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> Optional[Tile]:
        if not self.in_bounds(x, y):
            return None
        return self.cells[x][y]

    def put(self, tile: Tile) -> None:
        self.cells[tile.x][tile.y] = tile

    def __iter__(self) -> Iterator[Tile]:
        for column in self.cells:
            for tile in column:
                if tile is not None:
                    yield tile

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def type_counts(self) -> Counter:
        return Counter(t.type for t in self)


__all__ = ["TileType", "Facing", "EdgeKind", "TileEdge", "Tile", "TileGrid"]
