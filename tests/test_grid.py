import pytest

from gridpath.core.types import Cell, Grid, OutOfBoundsError


def test_grid_shape_and_walls() -> None:
    g = Grid(3, 4, walls=[(1, 1), (3, 2)])
    assert (g.rows, g.cols) == (3, 4)
    assert len(g) == 12
    assert len(g.cells) == 3
    assert all(len(row) == 4 for row in g.cells)
    assert not g.get_cell((1, 1)).passable
    assert not g.get_cell((3, 2)).passable
    assert g.get_cell((0, 0)).passable
    assert g.is_wall((1, 1))


def test_walls_outside_bounds_are_inert() -> None:
    g = Grid(2, 2, walls=[(5, 5), (-1, 0), (0, 2)])
    assert g.walls == frozenset()
    assert all(cell.passable for cell in g)


def test_duplicate_walls_are_harmless() -> None:
    g = Grid(2, 2, walls=[(0, 1), (0, 1)])
    assert g.walls == frozenset({(0, 1)})


def test_cells_know_their_coordinates() -> None:
    g = Grid(2, 3)
    assert [cell.coord for cell in g] == [(0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (2, 1)]
    assert g.get_cell((2, 1)) == Cell((2, 1), True)
    assert g.get_cell((2, 1)).x == 2 and g.get_cell((2, 1)).y == 1


@pytest.mark.parametrize("coord", [(-1, 0), (0, -1), (3, 0), (0, 2), (10, 10)])
def test_get_cell_rejects_out_of_bounds(coord) -> None:
    g = Grid(2, 3)
    with pytest.raises(OutOfBoundsError) as exc:
        g.get_cell(coord)
    assert exc.value.coord == coord
    assert isinstance(exc.value, IndexError)


@pytest.mark.parametrize("rows,cols", [(0, 5), (5, 0), (-2, 3), (0, 0)])
def test_degenerate_dimensions_give_empty_grid(rows, cols) -> None:
    g = Grid(rows, cols, walls=[(0, 0)])
    assert len(g) == 0
    assert list(g) == []
    assert (0, 0) not in g
    with pytest.raises(OutOfBoundsError):
        g.get_cell((0, 0))


def test_contains() -> None:
    g = Grid(2, 2)
    assert (1, 1) in g
    assert (2, 1) not in g
    assert "nope" not in g


def test_orthogonal_neighbours_in_fixed_order() -> None:
    g = Grid(3, 3)
    centre = g.get_cell((1, 1))
    coords = [c.coord for c in g.get_neighbours(centre, diagonals=False)]
    assert coords == [(1, 0), (1, 2), (2, 1), (0, 1)]


def test_diagonal_neighbours_follow_orthogonals() -> None:
    g = Grid(3, 3)
    centre = g.get_cell((1, 1))
    coords = [c.coord for c in g.get_neighbours(centre, diagonals=True)]
    assert coords == [(1, 0), (1, 2), (2, 1), (0, 1), (2, 0), (0, 0), (2, 2), (0, 2)]


def test_corner_neighbours_are_clipped_to_bounds() -> None:
    g = Grid(3, 3)
    corner = g.get_cell((0, 0))
    assert [c.coord for c in g.get_neighbours(corner)] == [(0, 1), (1, 0)]
    assert [c.coord for c in g.get_neighbours(corner, True)] == [(0, 1), (1, 0), (1, 1)]


def test_neighbours_include_walls() -> None:
    g = Grid(3, 3, walls=[(1, 0)])
    coords = [c.coord for c in g.get_neighbours(g.get_cell((1, 1)))]
    assert (1, 0) in coords
