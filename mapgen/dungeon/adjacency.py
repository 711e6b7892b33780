"""Room adjacency from the occupancy grid.

Only edge contact counts; rooms touching at a corner are not neighbours.
A side lying on the grid boundary contributes nothing.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from .occupancy import EMPTY, OccupancyGrid
from .rooms import Room


def _edge_ids(room: Room, grid: OccupancyGrid) -> List[int]:
    ids: List[int] = []
    # cells just above and below, across the full width
    for ny in (room.y + room.h, room.y - 1):
        if 0 <= ny < grid.height:
            ids.extend(grid.cells[nx][ny] for nx in range(room.x, room.x + room.w))
    # cells just right and left, across the full height
    for nx in (room.x + room.w, room.x - 1):
        if 0 <= nx < grid.width:
            column = grid.cells[nx]
            ids.extend(column[ny] for ny in range(room.y, room.y + room.h))
    return ids


def resolve_neighbours(room: Room, rooms_by_id: Dict[int, Room] | Sequence[Room], grid: OccupancyGrid) -> List[Room]:
    """Distinct rooms sharing an edge with ``room``, in id order.

    ``rooms_by_id`` may be a mapping of id -> room or the dense room list
    where room ``i`` has id ``i + 1``.
    """
    found = {rid for rid in _edge_ids(room, grid) if rid != EMPTY and rid != room.id}
    if isinstance(rooms_by_id, dict):
        return [rooms_by_id[rid] for rid in sorted(found)]
    return [rooms_by_id[rid - 1] for rid in sorted(found)]


def resolve_all(rooms: Sequence[Room], grid: OccupancyGrid) -> None:
    for room in rooms:
        room.neighbours = resolve_neighbours(room, rooms, grid)


def neighbour_ids(rooms: Iterable[Room]) -> Dict[int, List[int]]:
    return {r.id: [n.id for n in r.neighbours] for r in rooms}


__all__ = ["resolve_neighbours", "resolve_all", "neighbour_ids"]
