"""A* over the room graph.

The graph decides which transitions exist; the step cost is the Euclidean
distance between the rooms' size-adjusted corners ``(x + w, y + h)`` and the
heuristic is the distance between top-left corners. Frontier ties are broken
by insertion order through a monotonically increasing counter in the heap key.

Paths come back goal-first (goal ... start). ``path_between`` keeps that
convention across segments, so a multi-waypoint route reads from the last
waypoint back to the first.
"""
from __future__ import annotations

import heapq
import math
from typing import Dict, List, Optional, Sequence

from ..logging_utils import get_logger
from .errors import NoPathError, PathPreconditionError
from .graph import RoomGraph
from .rooms import Room

log = get_logger("mapgen.pathfinding")


def heuristic_cost(a: Room, b: Room) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


def step_cost(a: Room, b: Room) -> float:
    return math.hypot((a.x + a.w) - (b.x + b.w), (a.y + a.h) - (b.y + b.h))


class PathfinderAStar:
    def __init__(self, graph: RoomGraph, seed: Optional[int] = None):
        self.graph = graph
        self.seed = seed
        self.expanded = 0

    def path_to(self, start: Room, goal: Room) -> List[Room]:
        graph = self.graph
        if start.id not in graph or goal.id not in graph:
            raise NoPathError(start.id, goal.id, seed=self.seed)
        nodes = graph.nodes
        goal_room = graph.node(goal.id).room

        g_score: Dict[int, float] = {nid: math.inf for nid in nodes}
        g_score[start.id] = 0.0
        came_from: Dict[int, int] = {}
        closed: set[int] = set()
        counter = 0
        open_heap = [(heuristic_cost(nodes[start.id].room, goal_room), counter, start.id)]
        in_open = {start.id}

        while open_heap:
            _, _, current_id = heapq.heappop(open_heap)
            if current_id in closed:
                continue  # stale entry left behind by a later improvement
            if current_id == goal.id:
                return self._reconstruct(came_from, current_id)
            in_open.discard(current_id)
            closed.add(current_id)
            self.expanded += 1
            current = nodes[current_id].room

            for edge in nodes[current_id].edges:
                nid = edge.node_id
                if nid in closed:
                    continue
                neighbour = nodes[nid].room
                tentative = g_score[current_id] + step_cost(current, neighbour)
                if nid in in_open and tentative >= g_score[nid]:
                    continue
                came_from[nid] = current_id
                g_score[nid] = tentative
                counter += 1
                heapq.heappush(open_heap, (tentative + heuristic_cost(neighbour, goal_room), counter, nid))
                in_open.add(nid)

        log.debug(event="no_path", start=start.id, goal=goal.id, expanded=self.expanded, seed=self.seed)
        raise NoPathError(start.id, goal.id, seed=self.seed)

    def _reconstruct(self, came_from: Dict[int, int], current_id: int) -> List[Room]:
        nodes = self.graph.nodes
        path = [nodes[current_id].room]
        while current_id in came_from:
            current_id = came_from[current_id]
            path.append(nodes[current_id].room)
        return path

    def path_between(self, waypoints: Sequence[Room]) -> List[Room]:
        """Join per-segment paths through every waypoint, in order.

        Fewer than two waypoints is a caller error. Any unreachable segment
        fails the whole route.
        """
        if len(waypoints) < 2:
            raise PathPreconditionError(f"path_between needs at least 2 waypoints, got {len(waypoints)}")
        if len(waypoints) == 2:
            return self.path_to(waypoints[0], waypoints[1])
        route: List[Room] = [waypoints[0]]
        for i in range(len(waypoints) - 1):
            segment = self.path_to(waypoints[i], waypoints[i + 1])
            # segment ends with waypoints[i] and the route so far starts with it;
            # only that boundary copy is dropped, earlier passes through it stay
            route = segment + route[1:]
        return route


__all__ = ["PathfinderAStar", "heuristic_cost", "step_cost"]
