import pytest

from mapgen.dungeon import EdgeKind, Facing, Map, TileType
from mapgen.dungeon.connectivity import door_segments, one_sided_doors
from mapgen.dungeon.rooms import Room
from mapgen.dungeon.tilemap import add_door_between, door_tile_coords


def test_door_between_side_by_side_rooms():
    a = Room(0, 0, 2, 2, id=1)
    b = Room(2, 0, 1, 2, id=2)
    door_a, door_b = add_door_between(a, b)
    assert tuple(door_a) == (2, 0, 0, 2)
    assert tuple(door_b) == (0, 0, 0, 2)
    assert door_a.vertical and door_b.vertical
    assert door_segments(a) == door_segments(b) == {(2, 0, 0, 2)}


def test_vertical_door_tiles_face_each_other():
    a = Room(0, 0, 2, 2, id=1)
    b = Room(2, 0, 1, 2, id=2)
    door_a, door_b = add_door_between(a, b)
    assert door_tile_coords(a, door_a, 3) == (5, 2, Facing.EAST)
    assert door_tile_coords(b, door_b, 3) == (6, 2, Facing.WEST)


def test_horizontal_door_tiles_face_each_other():
    a = Room(0, 0, 2, 1, id=1)
    b = Room(0, 1, 3, 1, id=2)
    door_a, door_b = add_door_between(a, b)
    assert tuple(door_a) == (0, 1, 2, 0)
    assert tuple(door_b) == (0, 0, 2, 0)
    assert door_tile_coords(a, door_a, 2) == (1, 1, Facing.NORTH)
    assert door_tile_coords(b, door_b, 2) == (1, 2, Facing.SOUTH)


def test_generated_doors_are_degenerate_and_paired(generated_map):
    for room in generated_map.rooms:
        for door in room.doors:
            assert door.w == 0 or door.h == 0, f"Room {room.id} has a non-linear door {door}"
    assert one_sided_doors(generated_map.rooms) == []


def test_door_count_is_even(generated_map):
    total = sum(len(r.doors) for r in generated_map.rooms)
    assert total % 2 == 0
    assert generated_map.metrics["doors_created"] == total // 2


def test_door_tiles_carry_door_edges(generated_map):
    doors = [t for t in generated_map.iter_tiles() if t.type is TileType.DOOR]
    assert doors, "Expected at least one door tile on the reference layout"
    for tile in doors:
        kinds = [e.kind for e in tile.edges]
        assert EdgeKind.DOOR in kinds, f"{tile!r} has no door edge"


@pytest.mark.parametrize("seed", [2, 3, 42])
def test_no_one_sided_doors_across_seeds(corner_settings, fast_options, seed):
    m = Map(corner_settings.with_seed(seed), fast_options)
    assert m.generate()
    assert one_sided_doors(m.rooms) == []


# Seeds whose route revisits a waypoint room on an earlier leg
@pytest.mark.parametrize("seed", [259, 260, 282])
def test_route_revisiting_waypoint_keeps_doors_paired(corner_settings, seed):
    m = Map(corner_settings.with_seed(seed))
    assert m.generate()
    for cur, nxt in zip(m.route, m.route[1:]):
        assert nxt in cur.neighbours, f"seed={seed}: route steps from {cur.id} to non-adjacent {nxt.id}"
    assert one_sided_doors(m.rooms) == []
    for room in m.rooms:
        for door in room.doors:
            assert not (door.w == 0 and door.h == 0), f"seed={seed}: room {room.id} has empty door {door}"
