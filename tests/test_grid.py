import pytest

from tsoax.coordinate import Coordinate
from tsoax.grid import Grid


def make_grid():
    grid = Grid(Coordinate(10.0, 10.0, 10.0))
    grid.set_bin_size(2.5)
    return grid


def test_bin_count_from_bin_size():
    grid = make_grid()
    assert grid.num_bins() == 4 * 4 * 4


def test_largest_dimension_truncates():
    grid = Grid(Coordinate(3.5, 7.9, 2.0))
    assert grid.largest_grid_dimension() == 7


def test_grid_dimensions_round_trip():
    grid = Grid()
    size = Coordinate(2.0, 3.0, 4.0)
    grid.set_grid_dimensions(size)
    assert grid.grid_dimensions() == size


def test_bin_position_round_trip():
    grid = make_grid()
    for index in range(grid.num_bins()):
        assert grid.grid_positions_to_bin(*grid.bin_to_grid_positions(index)) == index


def test_put_in_grid_returns_bin_of_coordinate():
    grid = make_grid()
    c = Coordinate(6.0, 1.0, 9.0)
    assert grid.put_in_grid((0, 0), c) == grid.get_bin(c)
    assert grid.tags_in_bins([grid.get_bin(c)]) == [(0, 0)]
    assert grid.num_entries() == 1


def test_positions_are_clamped():
    grid = make_grid()
    x, y, z = grid.pos_to_grid_positions(Coordinate(-5.0, 100.0, 1.0))
    assert (x, y, z) == (0, 3, 0)


def test_periodic_wrap():
    grid = make_grid()
    grid.set_periodic(True, False, False)
    assert grid.grid_positions_to_bin(-1, 0, 0) == grid.grid_positions_to_bin(3, 0, 0)


def test_neighboring_tags_default_block():
    grid = make_grid()
    grid.put_in_grid((0, 0), Coordinate(1.0, 1.0, 1.0))
    grid.put_in_grid((1, 0), Coordinate(3.0, 3.0, 3.0))
    grid.put_in_grid((2, 0), Coordinate(9.0, 9.0, 9.0))
    near = grid.neighboring_tags(Coordinate(1.0, 1.0, 1.0))
    assert sorted(near) == [(0, 0), (1, 0)]


def test_neighboring_tags_shell_level():
    grid = make_grid()
    grid.put_in_grid((0, 0), Coordinate(1.0, 1.0, 1.0))
    grid.put_in_grid((1, 0), Coordinate(3.0, 3.0, 3.0))
    grid.put_in_grid((2, 0), Coordinate(6.0, 1.0, 1.0))
    shell = grid.neighboring_tags(Coordinate(1.0, 1.0, 1.0), 2)
    assert shell == [(2, 0)]
    assert grid.neighboring_tags(Coordinate(1.0, 1.0, 1.0), 0) == [(0, 0)]


def test_clear_resets_entries():
    grid = make_grid()
    grid.put_in_grid((0, 0), Coordinate(1.0, 1.0, 1.0))
    grid.clear()
    assert grid.num_entries() == 0
    assert grid.tags_in_bins(range(grid.num_bins())) == []


def test_shift_first_index():
    grid = make_grid()
    grid.put_in_grid((2, 5), Coordinate(1.0, 1.0, 1.0))
    grid.shift_first_index(3)
    assert grid.tags_in_bins(range(grid.num_bins())) == [(5, 5)]


def test_remove_element_decrements_others():
    grid = make_grid()
    grid.put_in_grid((1, 0), Coordinate(1.0, 1.0, 1.0))
    grid.put_in_grid((2, 4), Coordinate(1.0, 1.0, 1.0))
    grid.remove_element(1)
    assert grid.tags_in_bins(range(grid.num_bins())) == [(1, 4)]


def test_tag_list_and_distances():
    grid = make_grid()
    a = Coordinate(1.0, 1.0, 1.0)
    b = Coordinate(9.0, 1.0, 1.0)
    grid.put_in_grid((0, 0), a)
    grid.put_in_grid((0, 1), a)
    grid.put_in_grid((1, 0), b)
    grid.construct_tag_list()
    assert grid.grid_pos_from_id(0, 0) == grid.pos_to_grid_positions(a)
    assert grid.grid_pos_from_id(1, 0) == grid.pos_to_grid_positions(b)
    assert grid.grid_level_dist_between_ids((0, 0), (0, 1)) == 1
    assert grid.min_dist_between_ids((0, 0), (0, 1)) == 0.0
    assert grid.min_dist_between_ids((0, 0), (1, 0)) == grid.min_dist_between_bins(
        grid.grid_pos_from_id(0, 0), grid.grid_pos_from_id(1, 0)
    )
    assert grid.min_dist_between_ids((0, 0), (1, 0)) > 0.0


def test_invalid_bin_count_raises():
    grid = Grid(Coordinate(10.0, 10.0, 10.0))
    with pytest.raises(ValueError):
        grid.set_num_bins(0, 1, 1)


def test_put_without_bins_raises():
    grid = Grid()
    with pytest.raises(ValueError):
        grid.put_in_grid((0, 0), Coordinate())