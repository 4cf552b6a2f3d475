from wator.spatial import neighbors, wrap


def test_neighbors_order_west_east_north_south():
    assert neighbors(2, 3, 10) == [(1, 3), (3, 3), (2, 2), (2, 4)]


def test_neighbors_wrap_at_origin():
    n = 7
    result = neighbors(0, 0, n)
    assert result == [(n - 1, 0), (1, 0), (0, n - 1), (0, 1)]


def test_neighbors_wrap_at_far_corner():
    n = 5
    assert neighbors(4, 4, n) == [(3, 4), (0, 4), (4, 3), (4, 0)]


def test_neighbors_wrap_all_boundary_cells():
    """Every neighbour of every edge cell stays on the grid and is adjacent on the torus"""
    n = 6
    for x in range(n):
        for y in range(n):
            for nx, ny in neighbors(x, y, n):
                assert 0 <= nx < n and 0 <= ny < n
                dx = min((nx - x) % n, (x - nx) % n)
                dy = min((ny - y) % n, (y - ny) % n)
                assert dx + dy == 1


def test_neighbors_single_cell_grid():
    assert neighbors(0, 0, 1) == [(0, 0)] * 4


def test_neighbors_two_cell_grid_repeats():
    # West and east coincide on a 2-wide torus
    assert neighbors(0, 0, 2) == [(1, 0), (1, 0), (0, 1), (0, 1)]


def test_wrap():
    assert wrap(-1, 5) == 4
    assert wrap(5, 5) == 0
    assert wrap(12, 5) == 2
    assert wrap(3, 5) == 3
