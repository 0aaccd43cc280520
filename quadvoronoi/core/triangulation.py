"""Incremental Delaunay triangulation and its Voronoi dual.

The triangulation lives inside a bounding quadrilateral of four sentinel
corner points. Every inserted point is kept strictly inside it: when a point
falls outside the recorded extent the corners are moved outward (in place, the
topology of the sentinel edges is untouched). Sentinel corners are recognised
by object identity, never by value, so extraction filters them out even after
they have moved.

Insertion follows Guibas & Stolfi: walk to the triangle containing the new
point, fan it to the surrounding vertices, then flip suspect edges until the
empty-circumcircle condition holds around the new point.

Not thread safe: insertion rewires the dart graph and extraction writes the
transient dart marks.
"""
from __future__ import annotations
import math
import time
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .config import TriangulationConfig
from .geometry import Point, as_point, circumcenter, in_circle
from .logging_utils import get_logger
from .quadedge import QuadEdgeArena
from .stats import InsertionStats

__all__ = ['DelaunayTriangulation']

logger = get_logger('quadvoronoi.triangulation')


class DelaunayTriangulation:
    """Delaunay triangulation built one point at a time.

    Example
    -------
        >>> dt = DelaunayTriangulation()
        >>> dt.insert_points([(0, 0), (4, 0), (0, 3)])
        >>> len(dt.compute_triangles())
        1
    """

    def __init__(self, config: Optional[TriangulationConfig] = None):
        self.config = config if config is not None else TriangulationConfig()
        self.arena = QuadEdgeArena()
        self.stats = InsertionStats()
        self._vertices: List[Point] = []

        # recorded extent of the real points; empty until the first insertion
        self._min_x = math.inf
        self._min_y = math.inf
        self._max_x = -math.inf
        self._max_y = -math.inf

        # lower-left, lower-right, upper-right, upper-left
        self._corners = (Point(0.0, 0.0), Point(0.0, 0.0), Point(0.0, 0.0), Point(0.0, 0.0))
        a, b, c, d = self._corners
        arena = self.arena
        ab = arena.make_edge(a, b)
        bc = arena.make_edge(b, c)
        cd = arena.make_edge(c, d)
        da = arena.make_edge(d, a)
        arena.splice(arena.sym(ab), bc)
        arena.splice(arena.sym(bc), cd)
        arena.splice(arena.sym(cd), da)
        arena.splice(arena.sym(da), ab)

        self._starting_edge = ab
        self._dual_cache_valid = True

    def __len__(self) -> int:
        return len(self._vertices)

    def __repr__(self):
        return f"DelaunayTriangulation(n_vertices={len(self._vertices)}, n_quads={self.arena.n_quads})"

    @property
    def vertices(self) -> Tuple[Point, ...]:
        """Distinct inserted points, in insertion order."""
        return tuple(self._vertices)

    @property
    def corners(self) -> Tuple[Point, Point, Point, Point]:
        return self._corners

    @property
    def extent(self) -> Tuple[float, float, float, float]:
        """(min_x, min_y, max_x, max_y) covered by the sentinel box."""
        return (self._min_x, self._min_y, self._max_x, self._max_y)

    # ------------------------------------------------------------------
    # bounding box
    # ------------------------------------------------------------------
    def set_bounding_box(self, min_x: float, min_y: float, max_x: float, max_y: float):
        """Record the extent and move the sentinel corners around it.

        Each axis is widened by ``bbox_margin`` and scaled by ``bbox_scale``
        around the extent's center, so every point of the extent ends up
        strictly inside the sentinel box.
        """
        if not (min_x <= max_x and min_y <= max_y):
            raise ValueError(f"invalid extent ({min_x}, {min_y}, {max_x}, {max_y})")
        if self._vertices and (min_x > self._min_x or max_x < self._max_x
                               or min_y > self._min_y or max_y < self._max_y):
            raise ValueError("bounding box must cover the points already inserted")
        self._min_x, self._min_y = float(min_x), float(min_y)
        self._max_x, self._max_y = float(max_x), float(max_y)

        scale = self.config.bbox_scale
        margin = self.config.bbox_margin
        center_x = (min_x + max_x) / 2.0
        center_y = (min_y + max_y) / 2.0
        x_min = (min_x - center_x - margin) * scale + center_x
        x_max = (max_x - center_x + margin) * scale + center_x
        y_min = (min_y - center_y - margin) * scale + center_y
        y_max = (max_y - center_y + margin) * scale + center_y

        a, b, c, d = self._corners
        a.x, a.y = x_min, y_min
        b.x, b.y = x_max, y_min
        c.x, c.y = x_max, y_max
        d.x, d.y = x_min, y_max
        self._dual_cache_valid = False
        self.stats.bbox_resizes += 1
        logger.debug("sentinel box moved to [%g, %g] x [%g, %g]", x_min, x_max, y_min, y_max)

    def _update_bounding_box(self, p: Point):
        self.set_bounding_box(min(self._min_x, p.x), min(self._min_y, p.y),
                              max(self._max_x, p.x), max(self._max_y, p.y))

    def _is_sentinel(self, p: Optional[Point]) -> bool:
        a, b, c, d = self._corners
        return p is a or p is b or p is c or p is d

    # ------------------------------------------------------------------
    # point location and insertion
    # ------------------------------------------------------------------
    def locate(self, p) -> int:
        """Return a dart of the triangle containing ``p``.

        If ``p`` coincides with a vertex, the returned dart has that vertex
        as origin or destination. Grows the sentinel box first when ``p`` is
        outside the current extent.
        """
        p = as_point(p)
        if p.x < self._min_x or p.x > self._max_x or p.y < self._min_y or p.y > self._max_y:
            self._update_bounding_box(p)

        arena = self.arena
        limit = self.config.max_walk_steps
        e = self._starting_edge
        steps = 0
        while True:
            if p == arena.origin(e) or p == arena.destination(e):
                break
            if arena.is_at_right_of(e, p):
                e = arena.sym(e)
            elif not arena.is_at_right_of(arena.next(e), p):
                e = arena.next(e)
            elif not arena.is_at_right_of(arena.destination_previous(e), p):
                e = arena.destination_previous(e)
            else:
                break
            steps += 1
            if limit is not None and steps > limit:
                self.stats.walk_steps += steps
                raise RuntimeError(f"point location for {p} did not settle within {limit} steps")
        self.stats.walk_steps += steps
        return e

    def insert_point(self, p):
        """Insert ``p`` and restore the Delaunay condition. Duplicates are ignored."""
        p = as_point(p)
        stats = self.stats
        stats.attempts += 1
        t0 = time.perf_counter()
        try:
            self._insert(p)
        finally:
            stats.record_time(time.perf_counter() - t0)

    def insert_points(self, points: Iterable):
        """Insert every point of ``points`` (Points, pairs or an (n, 2) array) in order."""
        for p in points:
            self.insert_point(p)

    def _insert(self, p: Point):
        arena = self.arena
        e = self.locate(p)

        if p == arena.origin(e) or p == arena.destination(e):
            self.stats.duplicates += 1
            logger.debug("duplicate point %s ignored", p)
            return

        # on an existing edge: remove it and fan the resulting quadrilateral
        if arena.is_on_line(e, p):
            e = arena.previous(e)
            arena.delete_edge(arena.next(e))
            self.stats.on_edge += 1
            logger.debug("point %s lies on an edge, splitting quadrilateral", p)

        # connect p to every vertex of the enclosing polygon
        base = arena.make_edge(arena.origin(e), p)
        arena.splice(base, e)
        start = base
        while True:
            base = arena.connect(e, arena.sym(base))
            e = arena.previous(base)
            if arena.left_next(e) == start:
                break

        # flip suspect edges around p
        flips = 0
        while True:
            t = arena.previous(e)
            t_dest = arena.destination(t)
            if (arena.is_at_right_of(e, t_dest)
                    and in_circle(arena.origin(e), t_dest, arena.destination(e), p)):
                arena.swap_edge(e)
                flips += 1
                e = arena.previous(e)
            elif arena.next(e) == start:
                break
            else:
                e = arena.left_previous(arena.next(e))

        self._starting_edge = start
        self._vertices.append(p)
        self._dual_cache_valid = False
        self.stats.inserted += 1
        self.stats.flips += flips

    # ------------------------------------------------------------------
    # extraction
    # ------------------------------------------------------------------
    def _mark_sentinel_darts(self):
        """Reset marks, then mark every dart leaving a sentinel corner."""
        arena = self.arena
        arena.reset_marks()
        for q in arena.live_quads():
            if self._is_sentinel(arena.origin(q)):
                arena.set_mark(q)
            if self._is_sentinel(arena.destination(q)):
                arena.set_mark(arena.sym(q))

    def compute_edges(self) -> List[Tuple[Point, Point]]:
        """Every edge between two real points as an (origin, destination) pair."""
        arena = self.arena
        self._mark_sentinel_darts()
        edges = []
        for q in arena.live_quads():
            qs = arena.sym(q)
            if arena.mark(q) or arena.mark(qs):
                continue
            edges.append((arena.origin(q), arena.destination(q)))
            arena.set_mark(q)
            arena.set_mark(qs)
        return edges

    def compute_triangles(self) -> List[Tuple[Point, Point, Point]]:
        """Every triangle whose three corners are real points."""
        arena = self.arena
        self._mark_sentinel_darts()
        triangles = []
        for q1 in arena.live_quads():
            # left face of q1, then left face of its reverse
            for s1 in (q1, arena.sym(q1)):
                s2 = arena.left_next(s1)
                s3 = arena.left_next(s2)
                if not (arena.mark(s1) or arena.mark(s2) or arena.mark(s3)):
                    triangles.append((arena.origin(s1), arena.origin(s2), arena.origin(s3)))
            arena.set_mark(q1)
            arena.set_mark(arena.sym(q1))
        return triangles

    def compute_voronoi(self) -> List[List[Point]]:
        """One Voronoi cell (ordered circumcenters) per real vertex.

        Cells of vertices on the convex hull are closed by the circumcenters
        of triangles that touch the sentinel corners.
        """
        arena = self.arena
        if not self._dual_cache_valid:
            arena.clear_dual_origins()
            self._dual_cache_valid = True
        self._mark_sentinel_darts()

        cells = []
        for qe in arena.live_quads():
            for q_start in (qe, arena.sym(qe)):
                if arena.mark(q_start):
                    continue
                poly = []
                q = q_start
                while True:
                    arena.set_mark(q)
                    r = arena.rot(q)
                    center = arena.origin(r)
                    if center is None:
                        center = self.get_circumcenter(q)
                        arena.set_origin(r, center)
                    poly.append(center)
                    q = arena.next(q)
                    if q == q_start:
                        break
                cells.append(poly)
        return cells

    def get_circumcenter(self, q: int) -> Point:
        """Circumcenter of the left face of dart ``q``."""
        arena = self.arena
        q2 = arena.left_next(q)
        q3 = arena.left_next(q2)
        return circumcenter(arena.origin(q), arena.origin(q2), arena.origin(q3),
                            truncate=self.config.truncate_circumcenters)

    def to_arrays(self):
        """Index form of the finite triangles: (points (N,2), triangles (M,3) int32).

        Points are listed in insertion order.
        """
        index = {id(v): i for i, v in enumerate(self._vertices)}
        points = np.array([v.as_tuple() for v in self._vertices], dtype=np.float64).reshape(-1, 2)
        tris = [(index[id(a)], index[id(b)], index[id(c)]) for a, b, c in self.compute_triangles()]
        triangles = np.array(tris, dtype=np.int32).reshape(-1, 3)
        return points, triangles
