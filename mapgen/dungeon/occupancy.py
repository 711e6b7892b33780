from __future__ import annotations

from typing import List

EMPTY = 0


class OccupancyGrid:
    """Room-unit grid recording which room id owns each cell (``cells[x][y]``, 0 = free)."""

    __slots__ = ("width", "height", "cells")

    def __init__(self, width: int, height: int):
        self.width = max(0, width)
        self.height = max(0, height)
        self.cells: List[List[int]] = [[EMPTY for _ in range(self.height)] for _ in range(self.width)]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> int:
        if not self.in_bounds(x, y):
            return EMPTY
        return self.cells[x][y]

    def validate(self, x: int, y: int, w: int, h: int) -> bool:
        """True when every cell of the w*h footprint at (x, y) is inside the grid and unoccupied."""
        if x < 0 or y < 0 or x + w > self.width or y + h > self.height:
            return False
        for ix in range(x, x + w):
            column = self.cells[ix]
            for iy in range(y, y + h):
                if column[iy] != EMPTY:
                    return False
        return True

    def fill(self, room) -> None:
        for ix, iy in room.cells():
            self.cells[ix][iy] = room.id

    def occupied_count(self) -> int:
        return sum(1 for column in self.cells for v in column if v != EMPTY)


__all__ = ["OccupancyGrid", "EMPTY"]
