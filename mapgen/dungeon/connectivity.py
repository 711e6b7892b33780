"""Door connectivity checks over a generated room set.

Doors are stored per room in local coordinates; two rooms are linked when
each holds a door describing the same absolute boundary segment.
"""
from __future__ import annotations

from collections import deque
from typing import Dict, Iterable, List, Set, Tuple

from .rooms import Room, intersect

Segment = Tuple[int, int, int, int]


def door_segments(room: Room) -> Set[Segment]:
    """Absolute (x, y, w, h) of every door on ``room``."""
    return {(room.x + d.x, room.y + d.y, d.w, d.h) for d in room.doors}


def door_links(rooms: Iterable[Room]) -> Dict[int, Set[int]]:
    """Room id -> ids of rooms in the set that share a door with it (both sides recorded)."""
    rooms = list(rooms)
    ids = {r.id for r in rooms}
    segments = {r.id: door_segments(r) for r in rooms}
    links: Dict[int, Set[int]] = {r.id: set() for r in rooms}
    for r in rooms:
        for other in r.neighbours:
            if other.id not in ids:
                continue
            shared = tuple(intersect(r.rect, other.rect))
            if shared in segments[r.id] and shared in segments[other.id]:
                links[r.id].add(other.id)
    return links


def one_sided_doors(rooms: Iterable[Room]) -> List[Tuple[int, Segment]]:
    """Doors with no matching door on any neighbouring room."""
    rooms = list(rooms)
    by_id = {r.id: r for r in rooms}
    out = []
    for r in rooms:
        for seg in door_segments(r):
            matched = any(seg in door_segments(n) for n in r.neighbours if n.id in by_id)
            if not matched:
                out.append((r.id, seg))
    return out


def reachable(links: Dict[int, Set[int]], start: int) -> Set[int]:
    seen = {start}
    q = deque([start])
    while q:
        cur = q.popleft()
        for nxt in links.get(cur, ()):
            if nxt not in seen:
                seen.add(nxt)
                q.append(nxt)
    return seen


__all__ = ["door_segments", "door_links", "one_sided_doors", "reachable"]
