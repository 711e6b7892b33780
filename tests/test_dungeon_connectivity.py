import pytest

from mapgen.dungeon import Map, MapPoint, MapSettings, PathPreconditionError, TileType
from mapgen.dungeon.connectivity import door_links, one_sided_doors, reachable


def test_reference_scenario(corner_settings):
    m = Map(corner_settings)
    assert m.generate() is True
    assert m.rooms
    links = door_links(m.rooms)
    reach = reachable(links, m.waypoints[0].id)
    missing = [w.id for w in m.waypoints if w.id not in reach]
    assert not missing, f"Waypoint rooms {missing} not reachable through doors"
    assert not [t for t in m.iter_tiles() if t.type is TileType.DEBUG]
    assert m.metrics["tile_collisions"] == 0


def test_every_final_room_is_reachable(generated_map):
    links = door_links(generated_map.rooms)
    reach = reachable(links, generated_map.waypoints[0].id)
    assert reach == {r.id for r in generated_map.rooms}
    assert one_sided_doors(generated_map.rooms) == []


def test_route_runs_from_last_waypoint_to_first(generated_map):
    route_ids = [r.id for r in generated_map.route]
    assert route_ids[0] == generated_map.waypoints[-1].id
    assert route_ids[-1] == generated_map.waypoints[0].id
    assert {w.id for w in generated_map.waypoints} <= set(route_ids)


def test_route_rooms_are_all_kept(generated_map):
    final_ids = [r.id for r in generated_map.rooms]
    assert final_ids[0] == generated_map.route[0].id
    assert {r.id for r in generated_map.route} <= set(final_ids)
    assert len(final_ids) == len(set(final_ids))


def test_too_small_grid_returns_false(corner_settings, fast_options):
    settings = MapSettings(width=0, height=16, unit_size=3, seed=1, map_points=corner_settings.map_points)
    m = Map(settings, fast_options)
    assert m.generate() is False
    assert m.metrics["rooms_placed"] == 0


@pytest.mark.parametrize("points", [(), (MapPoint(0.5, 0.5),)])
def test_fewer_than_two_waypoints_raise(points, fast_options):
    m = Map(MapSettings(width=8, height=8, unit_size=1, map_points=points), fast_options)
    with pytest.raises(PathPreconditionError):
        m.generate()
