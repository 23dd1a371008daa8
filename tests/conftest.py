# tests/conftest.py
import pytest

from roadnav.domain.entities.geography import Way
from roadnav.domain.graph import RoadGraph
from roadnav.domain.spatial.kdtree import KdTree

# A(0,0) -> B(0,1) -> C(1,1) -> D(1,0), lon/lat degrees
A, B, C, D = 1, 2, 3, 4
SQUARE = {A: (0.0, 0.0), B: (0.0, 1.0), C: (1.0, 1.0), D: (1.0, 0.0)}


def square_graph(*ways: Way) -> RoadGraph:
    g = RoadGraph()
    for vid, (lon, lat) in SQUARE.items():
        g.add_vertex(vid, lon, lat)
    for w in ways:
        g.add_way(w)
    return g


def grid_graph(n: int = 6, step: float = 0.01, lon0: float = -122.45, lat0: float = 37.75):
    """n x n street grid: rows are "Row <i> St", columns "Col <j> Ave"."""
    g = RoadGraph()
    vid = lambda i, j: i * n + j + 1  # noqa: E731
    for i in range(n):
        for j in range(n):
            g.add_vertex(vid(i, j), lon0 + j * step, lat0 + i * step)
    for i in range(n):
        g.add_way(Way(1000 + i, tuple(vid(i, j) for j in range(n)), f"Row {i} St"))
    for j in range(n):
        g.add_way(Way(2000 + j, tuple(vid(i, j) for i in range(n)), f"Col {j} Ave"))
    g.prune()
    return g


@pytest.fixture
def main_st():
    g = square_graph(Way(10, (A, B, C, D), "Main St"))
    g.prune()
    return g, KdTree.build(g.iter_vertices())


@pytest.fixture
def grid():
    g = grid_graph()
    return g, KdTree.build(g.iter_vertices())
