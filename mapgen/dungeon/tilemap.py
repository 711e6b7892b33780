"""Route -> final room set -> tile grid.

Three steps, each usable on its own:

* ``collect_final_rooms`` walks the route, adds a door between every pair
  of consecutive rooms and grows random side branches off each route room.
* ``rasterize_rooms`` expands every final room into ``unit_size`` tiles per
  room-unit: floors with WALL edges on the room boundary.
* ``place_door_tiles`` turns the centre tile of each door segment into a
  DOOR tile and flips its boundary edge to a DOOR edge.
"""
from __future__ import annotations

import random
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from ..logging_utils import get_logger
from .config import MapSettings
from .errors import TileMapPreconditionError
from .rooms import Door, Room, intersect
from .tiles import EdgeKind, Facing, Tile, TileEdge, TileGrid, TileType

log = get_logger("mapgen.tilemap")


def add_door_between(a: Room, b: Room) -> Tuple[Door, Door]:
    """Record the boundary shared by ``a`` and ``b`` as a door on both rooms."""
    shared = intersect(a.rect, b.rect)
    door_a = Door(shared.x - a.x, shared.y - a.y, shared.w, shared.h)
    door_b = Door(shared.x - b.x, shared.y - b.y, shared.w, shared.h)
    a.doors.append(door_a)
    b.doors.append(door_b)
    return door_a, door_b


def _pairs(path: Sequence[Room]) -> Iterator[Tuple[Room, Optional[Room]]]:
    for i, room in enumerate(path):
        yield room, path[i + 1] if i + 1 < len(path) else None


def add_branches(
    root: Room,
    percentages: Sequence[int],
    rng: random.Random,
    final: List[Room],
    seen: Dict[int, Room],
) -> List[Room]:
    """Grow random branches off ``root``.

    Depth-first, in the same order a recursive walk would visit rooms: each
    neighbour draws once; it joins when the draw is below the percentage for
    its depth and it is not already in the final set, and its own neighbours
    are then tried one level deeper before the next sibling.
    """
    added: List[Room] = []
    if not percentages:
        return added
    # stack of (room, depth, iterator over its neighbours)
    stack = [(root, 0, iter(root.neighbours))]
    while stack:
        current, depth, pending = stack[-1]
        neighbour = next(pending, None)
        if neighbour is None:
            stack.pop()
            continue
        if rng.randrange(100) >= percentages[depth]:
            continue
        if neighbour.id in seen:
            continue
        seen[neighbour.id] = neighbour
        final.append(neighbour)
        added.append(neighbour)
        add_door_between(current, neighbour)
        if depth + 1 < len(percentages):
            stack.append((neighbour, depth + 1, iter(neighbour.neighbours)))
    return added


def collect_final_rooms(path: Sequence[Room], percentages: Sequence[int], rng: random.Random) -> Tuple[List[Room], int]:
    """Return (final rooms, branch count). Route rooms come first in route order."""
    final: List[Room] = []
    seen: Dict[int, Room] = {}
    branches = 0
    for current, following in _pairs(path):
        if following is not None:
            add_door_between(current, following)
        if current.id not in seen:
            seen[current.id] = current
            final.append(current)
        branches += len(add_branches(current, percentages, rng, final, seen))
    return final, branches


def _boundary_edges(x: int, y: int, room_w: int, room_h: int) -> Tuple[TileEdge, ...]:
    edges = []
    if x == 0:
        edges.append(TileEdge(Facing.WEST))
    if x == room_w - 1:
        edges.append(TileEdge(Facing.EAST))
    if y == 0:
        edges.append(TileEdge(Facing.SOUTH))
    if y == room_h - 1:
        edges.append(TileEdge(Facing.NORTH))
    return tuple(edges)


def rasterize_rooms(rooms: Sequence[Room], settings: MapSettings) -> Tuple[TileGrid, int]:
    """Return (tile grid, collision count).

    A coordinate written twice keeps its first tile and is marked DEBUG.
    """
    if not rooms:
        raise TileMapPreconditionError("rasterize_rooms called before any rooms were selected")
    unit = settings.unit_size
    grid = TileGrid(settings.actual_width, settings.actual_height)
    collisions = 0
    for room in rooms:
        room_w, room_h = room.w * unit, room.h * unit
        ox, oy = room.x * unit, room.y * unit
        for x in range(room_w):
            for y in range(room_h):
                existing = grid.cells[ox + x][oy + y]
                if existing is not None:
                    existing.type = TileType.DEBUG
                    collisions += 1
                    log.warn(event="tile_collision", x=ox + x, y=oy + y, room=room.id, other=existing.room_id, seed=settings.seed)
                    continue
                grid.put(Tile(ox + x, oy + y, TileType.FLOOR, _boundary_edges(x, y, room_w, room_h), room_id=room.id))
    return grid, collisions


def door_tile_coords(room: Room, door: Door, unit: int) -> Tuple[int, int, Facing]:
    """Tile coordinate and facing for the centre of ``door`` on ``room``'s side.

    Doors on the max-x / max-y sides are stored on the boundary line, which
    in tile space is the first column/row of the next room; those are pulled
    back by one into ``room``.
    """
    if door.vertical:
        offset = ((door.h * unit) - 1) // 2
        tx = (room.x + door.x) * unit
        ty = (room.y + door.y) * unit + offset
        facing = Facing.WEST
    else:
        offset = ((door.w * unit) - 1) // 2
        tx = (room.x + door.x) * unit + offset
        ty = (room.y + door.y) * unit
        facing = Facing.SOUTH
    if tx == room.max_x * unit:
        tx -= 1
        facing = Facing.EAST if door.vertical else facing
    if ty == room.max_y * unit:
        ty -= 1
        facing = Facing.NORTH if not door.vertical else facing
    return tx, ty, facing


def place_door_tiles(rooms: Sequence[Room], grid: TileGrid, unit: int) -> int:
    placed = 0
    for room in rooms:
        for door in room.doors:
            tx, ty, facing = door_tile_coords(room, door, unit)
            tile = grid.get(tx, ty)
            if tile is None:
                log.error(event="door_tile_missing", x=tx, y=ty, room=room.id)
                continue
            if tile.type is TileType.DEBUG:
                continue
            tile.type = TileType.DOOR
            tile.set_edge_kind(facing, EdgeKind.DOOR)
            placed += 1
    return placed


def build_tiles(rooms: Sequence[Room], settings: MapSettings, *, door_tiles: bool = True) -> Tuple[TileGrid, Dict[str, int]]:
    grid, collisions = rasterize_rooms(rooms, settings)
    doors = place_door_tiles(rooms, grid, settings.unit_size) if door_tiles else 0
    return grid, {"tile_collisions": collisions, "door_tiles": doors}


__all__ = [
    "add_door_between",
    "add_branches",
    "collect_final_rooms",
    "rasterize_rooms",
    "door_tile_coords",
    "place_door_tiles",
    "build_tiles",
]
