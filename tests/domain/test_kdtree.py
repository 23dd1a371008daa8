import numpy as np
import pytest

from roadnav.domain.entities.geography import Vertex
from roadnav.domain.errors import EmptyIndex
from roadnav.domain.geodesy import haversine_mi
from roadnav.domain.spatial.kdtree import KdTree, degrees_bound


def _random_vertices(rng, n, lon_range, lat_range, dup_every=5):
    out = []
    for i in range(n):
        if dup_every and i % dup_every == 4 and out:
            src = out[int(rng.integers(0, len(out)))]
            out.append(Vertex(i, src.lon, src.lat))  # duplicate coordinate
        else:
            out.append(Vertex(i, float(rng.uniform(*lon_range)), float(rng.uniform(*lat_range))))
    return out


def _brute_min(vertices, lon, lat):
    return min(haversine_mi(v.lon, v.lat, lon, lat) for v in vertices)


def test_empty_index_raises():
    with pytest.raises(EmptyIndex):
        KdTree().nearest(0.0, 0.0)


def test_equal_coordinate_goes_right():
    t = KdTree()
    t.insert(Vertex(1, 0.0, 0.0))
    t.insert(Vertex(2, 0.0, 5.0))  # lon tie at depth 0
    t.insert(Vertex(3, -1.0, 0.0))
    t.insert(Vertex(4, 0.5, 5.0))  # lat tie at depth 1
    assert t.root.right.point.id == 2
    assert t.root.left.point.id == 3
    assert t.root.right.right.point.id == 4
    assert t.root.right.right.depth == 2
    assert len(t) == 4


@pytest.mark.parametrize(
    "lon_range, lat_range",
    [
        ((-122.55, -122.35), (37.70, 37.85)),  # city scale
        ((-180.0, 180.0), (-80.0, 80.0)),  # whole globe, antimeridian included
        ((179.0, 180.0), (-10.0, 10.0)),
    ],
)
def test_nearest_matches_brute_force(lon_range, lat_range):
    rng = np.random.default_rng(20240501)
    pts = _random_vertices(rng, 400, lon_range, lat_range)
    tree = KdTree.build(pts)
    for _ in range(300):
        lon = float(rng.uniform(*lon_range))
        lat = float(rng.uniform(*lat_range))
        got = tree.nearest_vertex(lon, lat)
        assert haversine_mi(got.lon, got.lat, lon, lat) == _brute_min(pts, lon, lat)


def test_queries_across_the_antimeridian():
    pts = [Vertex(1, 179.9, 0.0), Vertex(2, 0.0, 0.0), Vertex(3, 90.0, 0.0)]
    tree = KdTree.build(pts)
    assert tree.nearest(-179.9, 0.0) == 1
    # unnormalised longitudes wrap
    assert tree.nearest(180.2, 0.0) == 1
    assert tree.nearest(450.0, 0.0) == 3


def test_legacy_degree_bound_at_city_scale():
    rng = np.random.default_rng(99)
    pts = _random_vertices(rng, 300, (-122.55, -122.35), (37.70, 37.85))
    tree = KdTree.build(pts, prune_bound=degrees_bound)
    for _ in range(100):
        lon, lat = float(rng.uniform(-122.55, -122.35)), float(rng.uniform(37.70, 37.85))
        got = tree.nearest_vertex(lon, lat)
        assert haversine_mi(got.lon, got.lat, lon, lat) == _brute_min(pts, lon, lat)


def test_degenerate_chain_does_not_recurse():
    # sorted insertion builds a single right-leaning chain
    pts = [Vertex(i, -120.0 + i * 1e-4, 35.0 + i * 1e-4) for i in range(1500)]
    tree = KdTree.build(pts)
    assert tree.nearest(-120.0, 35.0) == 0
    assert tree.nearest(-119.0, 36.0) == 1499


def test_single_point_and_duplicates():
    tree = KdTree.build([Vertex(5, 1.0, 1.0), Vertex(6, 1.0, 1.0)])
    assert tree.nearest(40.0, -3.0) in (5, 6)
    assert KdTree.build([Vertex(5, 1.0, 1.0)]).nearest(-1.0, -1.0) == 5
