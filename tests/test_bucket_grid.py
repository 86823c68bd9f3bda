import pytest

from graphgeo.locator import BucketGrid, BucketQuadrant, idx_of


@pytest.mark.parametrize(
    "coord, expected",
    [
        (0.0, 0),
        (1.9, 0),
        (2.0, 1),
        (2.1, 1),
        (-1.0, -1),
        (-1.9, -1),
        (-2.0, -1),
        (-2.1, -2),
    ],
)
def test_idx_of_with_cell_size_two(coord, expected):
    assert idx_of(coord, 2.0) == expected


def test_idx_of_rejects_non_positive_cell_size():
    with pytest.raises(ValueError):
        idx_of(1.0, 0.0)
    with pytest.raises(ValueError):
        idx_of(1.0, -2.0)


def test_quadrant_only_accepts_non_negative_indexes():
    quadrant = BucketQuadrant()
    quadrant.add_all(["a", "b"], 0, 3)
    assert quadrant.get(0, 3) == {"a", "b"}
    assert quadrant.get(5, 5) == frozenset()
    quadrant.remove_all(["a", "b"], 0, 3)
    assert len(quadrant) == 0
    with pytest.raises(ValueError):
        quadrant.get(-1, 0)


def test_single_cell_add_and_get():
    grid = BucketGrid()
    grid.add("a", 0, 0)
    grid.add("b", -1, -1)
    assert grid.get(0, 0) == {"a"}
    assert grid.get(-1, -1) == {"b"}
    assert grid.get(-1, 0) == set()
    assert len(grid) == 2


def test_range_get_is_exact_union_across_quadrants():
    grid = BucketGrid()
    grid.add("a", 0, 0)
    grid.add("b", -1, -1)
    grid.add("c", 1, -2)
    grid.add("d", 5, 5)
    grid.add("wide", -3, -3, 3, 3)

    assert grid.get(-1, -1, 0, 0) == {"a", "b", "wide"}
    assert grid.get(-1, -2, 1, 0) == {"a", "b", "c", "wide"}
    assert grid.get(4, 4, 6, 6) == {"d"}
    assert grid.get(-10, -10, 10, 10) == {"a", "b", "c", "d", "wide"}


def test_range_element_is_reported_once():
    grid = BucketGrid()
    grid.add("wide", -2, -2, 2, 2)
    assert grid.cells_of("wide") == {(ix, iy) for ix in range(-2, 3) for iy in range(-2, 3)}
    assert grid.get(-2, -2, 2, 2) == {"wide"}
    assert grid.occupied_cell_count() == 25


def test_invalid_ranges_are_rejected():
    grid = BucketGrid()
    with pytest.raises(ValueError):
        grid.get(1, 0, 0, 0)
    with pytest.raises(ValueError):
        grid.add("a", 0, 2, 0, 1)
    with pytest.raises(TypeError):
        grid.get(0, 0, 1, None)


def test_remove_clears_every_cell_and_is_idempotent():
    grid = BucketGrid()
    grid.add("a", -1, -1, 1, 1)
    grid.add("b", 0, 0)
    grid.remove("a")
    grid.remove("a")
    grid.remove("never-added")
    assert "a" not in grid
    assert grid.cells_of("a") == frozenset()
    assert grid.get(-1, -1, 1, 1) == {"b"}
    assert grid.occupied_cell_count() == 1


def test_add_all_and_remove_all():
    grid = BucketGrid()
    grid.add_all(["a", "b", "c"], 2, 2)
    grid.add_all([], 0, 0)
    assert grid.get(2, 2) == {"a", "b", "c"}
    grid.remove_all(["a", "c"])
    assert grid.get(2, 2) == {"b"}
    assert grid.elements() == {"b"}


def test_clear_empties_the_grid():
    grid = BucketGrid()
    grid.add("a", -5, 3, 5, 4)
    grid.clear()
    assert len(grid) == 0
    assert grid.get(-5, 3, 5, 4) == set()


def test_negative_coordinates_index_into_negative_cells():
    grid = BucketGrid()
    cell = 2.0
    ix, iy = idx_of(-1.0, cell), idx_of(-3.0, cell)
    grid.add("p", ix, iy)
    assert (ix, iy) == (-1, -2)
    assert grid.get(idx_of(-0.5, cell), idx_of(-2.5, cell)) == {"p"}
    assert grid.get(idx_of(0.5, cell), idx_of(-2.5, cell)) == set()
