"""Room placement invariants.

1. Every cell of the grid ends up owned by exactly one room (final scan packs gaps).
2. Rooms stay in bounds and never overlap.
3. Waypoint rooms are 1x1, labelled, and anchored near their map point.
4. Same seed -> same layout.
5. Waypoint anchoring gives up after the retry budget instead of looping forever.
"""

import math
import random
from itertools import combinations

import pytest

from mapgen.dungeon import GenerationOptions, MapPoint, MapSettings, PlacementExhausted
from mapgen.dungeon.rooms import ROOM_PROTOTYPES, assign_difficulty, place_rooms


def layout(placed):
    return [(r.id, r.x, r.y, r.w, r.h) for r in placed.rooms]


def test_grid_fully_packed_and_ids_match(corner_settings, fast_options):
    placed = place_rooms(corner_settings, random.Random(corner_settings.seed), fast_options)
    assert placed.grid.occupied_count() == corner_settings.width * corner_settings.height
    assert [r.id for r in placed.rooms] == list(range(1, len(placed.rooms) + 1))
    for r in placed.rooms:
        for x, y in r.cells():
            assert placed.grid.get(x, y) == r.id


def test_rooms_in_bounds_and_disjoint(corner_settings, fast_options):
    placed = place_rooms(corner_settings, random.Random(5), fast_options)
    for r in placed.rooms:
        assert 0 <= r.x and r.max_x <= corner_settings.width
        assert 0 <= r.y and r.max_y <= corner_settings.height
        assert (max(r.w, r.h), min(r.w, r.h)) in {(max(p), min(p)) for p in ROOM_PROTOTYPES}
    for a, b in combinations(placed.rooms, 2):
        assert not a.rect.overlaps(b.rect), f"rooms {a.id} and {b.id} overlap"


def test_waypoints_anchored_near_points(corner_settings, fast_options):
    placed = place_rooms(corner_settings, random.Random(corner_settings.seed), fast_options)
    assert len(placed.waypoints) == len(corner_settings.map_points)
    # Waypoints are placed first and keep their ids
    assert [w.id for w in placed.waypoints] == [1, 2, 3, 4]
    assert [w.label for w in placed.waypoints] == ["Start", "", "", "End"]
    for room, point in zip(placed.waypoints, corner_settings.map_points):
        assert (room.w, room.h) == (1, 1)
        mp_x = math.floor(point.x * corner_settings.width)
        mp_y = math.floor(point.y * corner_settings.height)
        assert mp_x - 5 <= room.x < mp_x + 5
        assert mp_y - 5 <= room.y < mp_y + 5


def test_coincident_waypoints_get_distinct_cells(fast_options):
    settings = MapSettings(width=8, height=8, unit_size=1, seed=3, map_points=[MapPoint(0.5, 0.5)] * 3)
    placed = place_rooms(settings, random.Random(3), fast_options)
    cells = {(w.x, w.y) for w in placed.waypoints}
    assert len(cells) == 3


def test_same_seed_same_layout(corner_settings, fast_options):
    a = place_rooms(corner_settings, random.Random(11), fast_options)
    b = place_rooms(corner_settings, random.Random(11), fast_options)
    assert layout(a) == layout(b)
    c = place_rooms(corner_settings, random.Random(12), fast_options)
    assert layout(a) != layout(c)


def test_waypoint_budget_exhausted_on_empty_grid():
    settings = MapSettings(width=0, height=16, unit_size=3, seed=1, map_points=[MapPoint(0.2, 0.2), MapPoint(0.8, 0.8)])
    with pytest.raises(PlacementExhausted) as info:
        place_rooms(settings, random.Random(1), GenerationOptions(max_retry_attempts=50))
    assert info.value.attempts == 50
    assert info.value.phase == "place_rooms"


def test_difficulty_range_and_determinism(corner_settings, fast_options):
    placed = place_rooms(corner_settings, random.Random(2), fast_options)
    rng = random.Random(99)
    assign_difficulty(placed.rooms, rng)
    values = [r.difficulty for r in placed.rooms]
    assert all(1 <= v < 100 for v in values)
    rng = random.Random(99)
    assign_difficulty(placed.rooms, rng)
    assert [r.difficulty for r in placed.rooms] == values
