"""Unit tests for the quad-edge arena: navigation and topological operators."""
import pytest

from quadvoronoi.core.geometry import Point
from quadvoronoi.core.quadedge import QuadEdgeArena
from quadvoronoi.core.conformity import check_quadedge_invariants


def make_triangle(arena, a, b, c):
    """Closed triangle a -> b -> c built with make_edge/splice/connect."""
    e1 = arena.make_edge(a, b)
    e2 = arena.make_edge(b, c)
    arena.splice(arena.sym(e1), e2)
    e3 = arena.connect(e2, e1)
    return e1, e2, e3


def snapshot_next(arena):
    return [arena.next(e) for e in range(arena.n_darts)]


def test_make_edge_template():
    arena = QuadEdgeArena()
    p, q = Point(0.0, 0.0), Point(1.0, 0.0)
    e = arena.make_edge(p, q)
    assert arena.origin(e) is p
    assert arena.destination(e) is q
    assert arena.origin(arena.rot(e)) is None
    # rot^4 = id and rot^2 = sym
    assert arena.rot(arena.rot(arena.rot(arena.rot(e)))) == e
    assert arena.rot(arena.rot(e)) == arena.sym(e)
    assert arena.inv_rot(arena.rot(e)) == e
    # isolated segment: each endpoint ring holds one dart, one face around it
    assert arena.next(e) == e
    assert arena.next(arena.sym(e)) == arena.sym(e)
    assert arena.left_next(e) == arena.sym(e)
    assert arena.left_previous(e) == arena.sym(e)
    ok, msgs = check_quadedge_invariants(arena)
    assert ok, msgs


def test_arena_grows_past_initial_capacity():
    arena = QuadEdgeArena(capacity=2)
    edges = [arena.make_edge(Point(float(i), 0.0), Point(float(i), 1.0)) for i in range(10)]
    assert arena.n_quads == 10
    assert list(arena.live_quads()) == edges
    for i, e in enumerate(edges):
        assert arena.origin(e) == Point(float(i), 0.0)
        assert arena.next(e) == e
    ok, msgs = check_quadedge_invariants(arena)
    assert ok, msgs


def test_splice_merges_rings_and_is_self_inverse():
    arena = QuadEdgeArena()
    p = Point(0.0, 0.0)
    a = arena.make_edge(p, Point(1.0, 0.0))
    b = arena.make_edge(p, Point(0.0, 1.0))
    before = snapshot_next(arena)

    arena.splice(a, b)
    assert arena.next(a) == b
    assert arena.next(b) == a
    ok, msgs = check_quadedge_invariants(arena)
    assert ok, msgs

    arena.splice(a, b)
    assert snapshot_next(arena) == before


def test_connect_closes_a_triangle():
    arena = QuadEdgeArena()
    a, b, c = Point(0.0, 0.0), Point(4.0, 0.0), Point(0.0, 3.0)
    e1, e2, e3 = make_triangle(arena, a, b, c)
    assert arena.origin(e3) is c
    assert arena.destination(e3) is a
    # one face a -> b -> c and the reversed face on the other side
    assert arena.left_next(e1) == e2
    assert arena.left_next(e2) == e3
    assert arena.left_next(e3) == e1
    s1, s2, s3 = arena.sym(e1), arena.sym(e2), arena.sym(e3)
    assert arena.left_next(s1) == s3
    assert arena.left_next(s3) == s2
    assert arena.left_next(s2) == s1
    ok, msgs = check_quadedge_invariants(arena)
    assert ok, msgs


def test_dart_predicates():
    arena = QuadEdgeArena()
    e = arena.make_edge(Point(0.0, 0.0), Point(2.0, 0.0))
    assert arena.is_at_right_of(e, Point(1.0, -1.0))
    assert not arena.is_at_right_of(e, Point(1.0, 1.0))
    assert not arena.is_at_right_of(e, Point(1.0, 0.0))
    assert arena.is_on_line(e, Point(1.0, 0.0))
    assert not arena.is_on_line(e, Point(1.0, 0.5))


def test_delete_edge_retires_quad():
    arena = QuadEdgeArena()
    e1, e2, e3 = make_triangle(arena, Point(0.0, 0.0), Point(4.0, 0.0), Point(0.0, 3.0))
    arena.delete_edge(e3)
    assert not arena.is_live(e3)
    assert list(arena.live_quads()) == [e1, e2]
    # back to an open chain a -> b -> c
    assert arena.next(e1) == e1
    assert arena.next(e2) == arena.sym(e1)
    assert arena.left_next(e1) == e2
    assert arena.left_next(e2) == arena.sym(e2)
    ok, msgs = check_quadedge_invariants(arena)
    assert ok, msgs


def test_swap_edge_flips_square_diagonal():
    from quadvoronoi.core.triangulation import DelaunayTriangulation

    dt = DelaunayTriangulation()
    dt.insert_points([(0, 0), (10, 0), (10, 10), (0, 10)])
    arena = dt.arena
    diagonals = ({(0.0, 0.0), (10.0, 10.0)}, {(10.0, 0.0), (0.0, 10.0)})
    diag = None
    for q in arena.live_quads():
        ends = {arena.origin(q).as_tuple(), arena.destination(q).as_tuple()}
        if ends in diagonals:
            diag = q
            old = ends
            break
    assert diag is not None

    arena.swap_edge(diag)
    new = {arena.origin(diag).as_tuple(), arena.destination(diag).as_tuple()}
    assert new in diagonals and new != old
    ok, msgs = check_quadedge_invariants(arena)
    assert ok, msgs
    tris = dt.compute_triangles()
    assert len(tris) == 2
    for tri in tris:
        assert {p.as_tuple() for p in tri} >= new


def test_marks_reset():
    arena = QuadEdgeArena()
    e = arena.make_edge(Point(0.0, 0.0), Point(1.0, 1.0))
    arena.set_mark(e)
    arena.set_mark(arena.sym(e))
    assert arena.mark(e) and arena.mark(arena.sym(e))
    arena.reset_marks()
    assert not any(arena.mark(d) for d in arena.live_darts())


def test_clear_dual_origins_keeps_primal_origins():
    arena = QuadEdgeArena()
    p, q = Point(0.0, 0.0), Point(1.0, 1.0)
    e = arena.make_edge(p, q)
    arena.set_origin(arena.rot(e), Point(5.0, 5.0))
    arena.clear_dual_origins()
    assert arena.origin(arena.rot(e)) is None
    assert arena.origin(e) is p and arena.destination(e) is q
