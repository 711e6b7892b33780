"""Room model and seeded room placement.

Placement runs in two passes over an ``OccupancyGrid``:

1. Waypoint anchoring: one 1x1 room per ``MapPoint``, sampled within
   ``waypoint_radius`` cells of the point. These rooms are the mandatory stops
   of the route.
2. Space filling: prototypes from largest to smallest are dropped at random
   positions until one of them misses ``max_retry_attempts`` times in a row;
   the smallest prototype is then packed by a full scan so no free cell is
   left behind.

Every random draw goes through the single ``random.Random`` passed in, in a
fixed order, so a seed always reproduces the same layout.
"""
from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import List, NamedTuple, Tuple

from ..logging_utils import get_logger
from .config import GenerationOptions, MapSettings
from .errors import PlacementExhausted
from .occupancy import OccupancyGrid

log = get_logger("mapgen.rooms")

# (w, h) in room-units, largest first. The last entry is packed by scanning, not sampling.
ROOM_PROTOTYPES: Tuple[Tuple[int, int], ...] = (
    (5, 5),
    (5, 3),
    (3, 3),
    (2, 3),
    (2, 2),
    (2, 1),
    (1, 1),
)

DIFFICULTY_RANGE = (1, 100)


class Rect(NamedTuple):
    x: int
    y: int
    w: int
    h: int

    @property
    def max_x(self) -> int:
        return self.x + self.w

    @property
    def max_y(self) -> int:
        return self.y + self.h

    def overlaps(self, other: "Rect") -> bool:
        """Strict overlap; rects that only share an edge do not overlap."""
        return self.x < other.max_x and other.x < self.max_x and self.y < other.max_y and other.y < self.max_y


def intersect(a: Rect, b: Rect) -> Rect:
    """Shared region of two rects, edges included.

    Rooms that touch along a side yield a zero-width or zero-height rect lying
    on that side. Disjoint rects yield ``Rect(0, 0, 0, 0)``.
    """
    x_touch = (b.x <= a.x <= b.max_x) or (a.x <= b.x <= a.max_x)
    y_touch = (b.y <= a.y <= b.max_y) or (a.y <= b.y <= a.max_y)
    if not (x_touch and y_touch):
        return Rect(0, 0, 0, 0)
    x1, x2 = min(a.max_x, b.max_x), max(a.x, b.x)
    y1, y2 = min(a.max_y, b.max_y), max(a.y, b.y)
    return Rect(min(x1, x2), min(y1, y2), max(0, x1 - x2), max(0, y1 - y2))


class Door(NamedTuple):
    """Shared boundary segment, in the owning room's local coordinates."""

    x: int
    y: int
    w: int
    h: int

    @property
    def vertical(self) -> bool:
        return self.w == 0


@dataclass(eq=False)
class Room:
    x: int
    y: int
    w: int
    h: int
    id: int = 0
    difficulty: int = 0
    label: str = ""
    doors: List[Door] = field(default_factory=list)
    neighbours: List["Room"] = field(default_factory=list, repr=False)

    @property
    def max_x(self) -> int:
        return self.x + self.w

    @property
    def max_y(self) -> int:
        return self.y + self.h

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.w, self.h)

    @property
    def cost(self) -> int:
        return self.difficulty

    def cells(self):
        for ix in range(self.x, self.x + self.w):
            for iy in range(self.y, self.y + self.h):
                yield ix, iy


class PlacementResult(NamedTuple):
    rooms: List[Room]
    waypoints: List[Room]
    grid: OccupancyGrid
    attempts: int


def _draw(rng: random.Random, lo: int, hi: int) -> int:
    # An empty range collapses to its lower bound; validation then rejects the sample
    if hi <= lo:
        return lo
    return rng.randrange(lo, hi)


def place_rooms(settings: MapSettings, rng: random.Random, options: GenerationOptions | None = None) -> PlacementResult:
    """Place waypoint rooms then fill the remaining grid.

    Raises ``PlacementExhausted`` when waypoint anchoring runs out of attempts.
    """
    options = options or GenerationOptions()
    width, height = settings.width, settings.height
    grid = OccupancyGrid(width, height)
    rooms: List[Room] = []
    waypoints: List[Room] = []
    attempts = 0

    def commit(room: Room) -> None:
        room.id = len(rooms) + 1
        grid.fill(room)
        rooms.append(room)

    # Pass 1: waypoints share one retry budget
    radius = options.waypoint_radius
    budget = options.max_retry_attempts
    for point in settings.map_points:
        mp_x = math.floor(point.x * width)
        mp_y = math.floor(point.y * height)
        while True:
            rx = _draw(rng, max(mp_x - radius, 0), min(mp_x + radius, width))
            ry = _draw(rng, max(mp_y - radius, 0), min(mp_y + radius, height))
            attempts += 1
            if grid.validate(rx, ry, 1, 1):
                room = Room(rx, ry, 1, 1, label=point.label)
                commit(room)
                waypoints.append(room)
                break
            budget -= 1
            if budget <= 0:
                log.warn(event="placement_exhausted", phase="waypoints", label=point.label, seed=settings.seed, attempts=attempts)
                raise PlacementExhausted(
                    f"could not anchor waypoint {point} within {options.max_retry_attempts} attempts",
                    attempts=attempts,
                    label=point.label,
                    seed=settings.seed,
                )

    # Pass 2: random fill, one prototype at a time
    index = 0
    last = len(ROOM_PROTOTYPES) - 1
    while index < last:
        pw, ph = ROOM_PROTOTYPES[index]
        # Rotate half the time so rectangular prototypes are not favoured over square ones
        w, h = (pw, ph) if rng.randrange(2) == 1 else (ph, pw)
        budget = options.max_retry_attempts
        placed = False
        while budget > 0:
            rx = _draw(rng, 0, width)
            ry = _draw(rng, 0, height)
            attempts += 1
            if grid.validate(rx, ry, w, h):
                commit(Room(rx, ry, w, h))
                placed = True
                break
            budget -= 1
        if not placed:
            log.debug(event="prototype_exhausted", w=pw, h=ph, rooms=len(rooms), seed=settings.seed)
            index += 1

    # Pass 3: pack the smallest prototype into every remaining gap
    w, h = ROOM_PROTOTYPES[last]
    for x in range(width):
        for y in range(height):
            if grid.validate(x, y, w, h):
                commit(Room(x, y, w, h))

    log.debug(event="rooms_placed", rooms=len(rooms), waypoints=len(waypoints), attempts=attempts, seed=settings.seed)
    return PlacementResult(rooms, waypoints, grid, attempts)


def assign_difficulty(rooms: List[Room], rng: random.Random) -> None:
    lo, hi = DIFFICULTY_RANGE
    for room in rooms:
        room.difficulty = rng.randrange(lo, hi)


__all__ = [
    "ROOM_PROTOTYPES",
    "Rect",
    "intersect",
    "Door",
    "Room",
    "PlacementResult",
    "place_rooms",
    "assign_difficulty",
]
