import numpy as np
import pytest
from scipy.spatial import Delaunay

from quadvoronoi import DelaunayTriangulation, TriangulationConfig, Point
from quadvoronoi.core.conformity import (
    check_quadedge_invariants, check_delaunay, check_triangle_orientation,
    convex_hull_size, expected_triangle_count,
)

HAND_PICKED = [(0, 0), (10, 1), (13, 8), (7, 14), (-2, 9), (4, 5), (8, 6.5), (3, 9.5), (6, 2.5)]


def _random_triangulation(n, seed, config=None):
    rng = np.random.default_rng(seed)
    pts = rng.uniform(0.0, 100.0, size=(n, 2))
    dt = DelaunayTriangulation(config)
    # the sentinel box is sized once, before any insertion
    dt.set_bounding_box(0.0, 0.0, 100.0, 100.0)
    dt.insert_points(pts)
    return dt, pts


@pytest.mark.parametrize("seed", [0, 1, 7])
def test_random_points_are_delaunay(seed):
    dt, _ = _random_triangulation(150, seed)
    points, tris = dt.to_arrays()
    assert tris.shape[0] > 0
    assert check_delaunay(points, tris) == []
    assert check_triangle_orientation(points, tris) == []
    ok, msgs = check_quadedge_invariants(dt.arena)
    assert ok, msgs


def test_euler_relation_hand_picked():
    dt = DelaunayTriangulation(TriangulationConfig(bbox_scale=1000.0))
    dt.set_bounding_box(-2.0, 0.0, 13.0, 14.0)
    dt.insert_points(HAND_PICKED)
    n = len(HAND_PICKED)
    h = convex_hull_size(HAND_PICKED)
    assert h == 5
    assert len(dt.compute_triangles()) == 2 * n - 2 - h == 11
    assert len(dt.compute_edges()) == 3 * n - 3 - h == 19


def test_triangle_count_matches_scipy():
    rng = np.random.default_rng(3)
    interior = rng.uniform(5.0, 95.0, size=(60, 2))
    pts = np.vstack([[[0.0, 0.0], [100.0, 0.0], [100.0, 100.0], [0.0, 100.0]], interior])
    dt = DelaunayTriangulation(TriangulationConfig(bbox_scale=1000.0))
    dt.set_bounding_box(0.0, 0.0, 100.0, 100.0)
    dt.insert_points(pts)
    _, tris = dt.to_arrays()
    assert tris.shape[0] == expected_triangle_count(pts) == 2 * len(pts) - 2 - 4
    assert tris.shape[0] == Delaunay(pts).simplices.shape[0]


def test_one_cell_per_distinct_point():
    rng = np.random.default_rng(11)
    base = rng.uniform(0.0, 100.0, size=(40, 2))
    pts = np.vstack([base, base[:10]])
    dt = DelaunayTriangulation()
    dt.set_bounding_box(0.0, 0.0, 100.0, 100.0)
    dt.insert_points(pts)
    assert len(dt) == 40
    assert dt.stats.duplicates == 10
    assert len(dt.compute_voronoi()) == 40


def test_duplicates_leave_output_unchanged():
    dt, pts = _random_triangulation(50, 5)
    edges = {(a.as_tuple(), b.as_tuple()) for a, b in dt.compute_edges()}
    tris = {tuple(sorted(v.as_tuple() for v in t)) for t in dt.compute_triangles()}
    dt.insert_points(pts[::3])
    assert {(a.as_tuple(), b.as_tuple()) for a, b in dt.compute_edges()} == edges
    assert {tuple(sorted(v.as_tuple() for v in t)) for t in dt.compute_triangles()} == tris


def test_every_point_is_an_edge_endpoint():
    dt, pts = _random_triangulation(80, 9)
    endpoints = set()
    for a, b in dt.compute_edges():
        endpoints.add(a.as_tuple())
        endpoints.add(b.as_tuple())
    assert endpoints == {(float(x), float(y)) for x, y in pts}


def test_points_stay_inside_sentinel_box():
    dt = DelaunayTriangulation()
    rng = np.random.default_rng(2)
    for p in rng.normal(0.0, 50.0, size=(30, 2)):
        dt.insert_point(p)
    a, b, c, d = dt.corners
    for v in dt.vertices:
        assert a.x < v.x < b.x
        assert a.y < v.y < d.y
    assert (c.x, c.y) == (b.x, d.y)


def test_located_triangle_contains_query():
    dt, _ = _random_triangulation(100, 4)
    arena = dt.arena
    rng = np.random.default_rng(8)
    for q in rng.uniform(10.0, 90.0, size=(25, 2)):
        e = dt.locate(q)
        p = Point(*q)
        darts = [e, arena.left_next(e), arena.left_next(arena.left_next(e))]
        assert arena.left_next(darts[2]) == e
        assert not any(arena.is_at_right_of(d, p) for d in darts)
