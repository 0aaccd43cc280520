"""Structural and Delaunay validity checks (canonical package copy)."""
from __future__ import annotations
import numpy as np
from scipy.spatial import ConvexHull

from .constants import EPS_INCIRCLE, EPS_COLINEAR
from .geometry import triangles_signed_areas, triangles_circumcircles

__all__ = [
	'check_quadedge_invariants','check_delaunay','check_triangle_orientation',
	'convex_hull_size','expected_triangle_count'
]


def check_quadedge_invariants(arena, max_messages=20):
	"""Verify the quad-edge invariants over all live darts of ``arena``.

	Checks rot^4 = id, rot^2 = sym staying inside the quad, that ``next`` is a
	permutation of the live darts whose rings close, and that every primal
	origin ring shares one origin object.

	Returns (ok, messages).
	"""
	msgs = []
	def report(msg):
		if len(msgs) < max_messages:
			msgs.append(msg)

	live = list(arena.live_darts())
	live_set = set(live)
	seen_targets = set()
	for e in live:
		r1 = arena.rot(e)
		r2 = arena.rot(r1)
		r4 = arena.rot(arena.rot(r2))
		if r4 != e:
			report(f"dart {e}: rot^4 returns {r4}")
		if (r1 >> 2) != (e >> 2) or r2 == e or arena.sym(r2) != e:
			report(f"dart {e}: rot leaves its quad or rot^2 is not an involution")
		n = arena.next(e)
		if n not in live_set:
			report(f"dart {e}: next points at dead dart {n}")
			continue
		if n in seen_targets:
			report(f"dart {e}: next target {n} shared with another dart")
		seen_targets.add(n)

	# ring closure and shared origins (primal darts have even parity)
	visited = set()
	for e in live:
		if e in visited:
			continue
		ring = [e]
		visited.add(e)
		cur = arena.next(e)
		while cur != e and len(ring) <= len(live):
			if cur not in live_set:
				break
			ring.append(cur)
			visited.add(cur)
			cur = arena.next(cur)
		if cur != e:
			report(f"dart {e}: next ring does not close")
			continue
		if e % 2 == 0:
			o = arena.origin(e)
			if any(arena.origin(d) is not o for d in ring):
				report(f"dart {e}: origin ring mixes different vertices")
	return (len(msgs) == 0), msgs


def check_delaunay(points, triangles, tol=EPS_INCIRCLE):
	"""Return (triangle_index, point_index) pairs violating the empty circle rule.

	A point counts as inside when its distance to the circumcenter is below
	``radius * (1 - tol)``; triangle corners are never reported.
	"""
	pts = np.asarray(points, dtype=float).reshape(-1, 2)
	tris = np.asarray(triangles, dtype=np.int64).reshape(-1, 3)
	if tris.shape[0] == 0 or pts.shape[0] == 0:
		return []
	centers, radii = triangles_circumcircles(pts, tris)
	# (M, N) distances of every point to every circumcenter
	diff = pts[None, :, :] - centers[:, None, :]
	dist = np.hypot(diff[..., 0], diff[..., 1])
	inside = dist < (radii * (1.0 - tol))[:, None]
	rows = np.arange(tris.shape[0])
	for k in range(3):
		inside[rows, tris[:, k]] = False
	ti, pi = np.nonzero(inside)
	return [(int(t), int(p)) for t, p in zip(ti, pi)]


def check_triangle_orientation(points, triangles, eps=EPS_COLINEAR):
	"""Indices of triangles that are not strictly counter-clockwise."""
	tris = np.asarray(triangles, dtype=np.int64).reshape(-1, 3)
	if tris.shape[0] == 0:
		return []
	areas = triangles_signed_areas(points, tris)
	return [int(i) for i in np.nonzero(areas <= eps)[0]]


def convex_hull_size(points):
	"""Number of convex hull vertices (collinear boundary points excluded)."""
	pts = np.asarray(points, dtype=float).reshape(-1, 2)
	if pts.shape[0] < 3:
		return int(pts.shape[0])
	return int(len(ConvexHull(pts).vertices))


def expected_triangle_count(points):
	"""Triangle count 2n - 2 - h of a triangulation of points in general position."""
	pts = np.asarray(points, dtype=float).reshape(-1, 2)
	n = int(pts.shape[0])
	if n < 3:
		return 0
	return 2 * n - 2 - convex_hull_size(pts)
