"""Weighted room graph used by the pathfinder.

Nodes are keyed by room id rather than by room object. An edge A -> B exists
for every neighbour B of A whose cost (B's difficulty) is positive; zero-cost
rooms are left out so they cannot short-circuit cost comparisons.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List

from .rooms import Room


@dataclass(frozen=True)
class Edge:
    cost: float
    node_id: int


@dataclass
class Node:
    room: Room
    edges: List[Edge] = field(default_factory=list)


class RoomGraph:
    def __init__(self):
        self.nodes: Dict[int, Node] = {}

    def __contains__(self, room_id: int) -> bool:
        return room_id in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    def node(self, room_id: int) -> Node:
        return self.nodes[room_id]

    def edge_count(self) -> int:
        return sum(len(n.edges) for n in self.nodes.values())


def build_room_graph(
    rooms: Iterable[Room],
    neighbours: Callable[[Room], List[Room]] = lambda r: r.neighbours,
    cost: Callable[[Room], float] = lambda r: r.cost,
) -> RoomGraph:
    graph = RoomGraph()
    rooms = list(rooms)
    for room in rooms:
        graph.nodes[room.id] = Node(room)
    for room in rooms:
        node = graph.nodes[room.id]
        for other in neighbours(room):
            c = cost(other)
            if c > 0 and other.id in graph.nodes:
                node.edges.append(Edge(c, other.id))
    return graph


__all__ = ["Edge", "Node", "RoomGraph", "build_room_graph"]
