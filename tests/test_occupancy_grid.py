from mapgen.dungeon.occupancy import OccupancyGrid
from mapgen.dungeon.rooms import Room


def test_validate_bounds_and_occupancy():
    g = OccupancyGrid(4, 3)
    assert g.validate(0, 0, 4, 3)
    assert not g.validate(1, 0, 4, 1), "footprint past the right edge"
    assert not g.validate(0, 2, 1, 2), "footprint past the top edge"
    assert not g.validate(-1, 0, 1, 1)

    g.fill(Room(1, 1, 2, 1, id=7))
    assert g.get(1, 1) == 7 and g.get(2, 1) == 7
    assert g.get(0, 0) == 0
    assert not g.validate(0, 0, 2, 2)
    assert g.validate(0, 0, 1, 3)
    assert g.occupied_count() == 2


def test_get_out_of_range_is_empty():
    g = OccupancyGrid(2, 2)
    assert g.get(5, 5) == 0
    assert g.get(-1, 0) == 0


def test_zero_sized_grid_rejects_everything():
    g = OccupancyGrid(0, 5)
    assert not g.validate(0, 0, 1, 1)
    assert g.occupied_count() == 0
