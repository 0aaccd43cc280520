"""Geometry primitives and orientation predicates.

All predicates use plain floating-point arithmetic. Near-collinear triples and
near-cocircular quadruples may be misclassified by rounding; callers needing
robust results must supply exact or adaptive predicates of their own.
"""
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Iterator

import numpy as np

__all__ = [
	'Point','as_point','det33','is_counter_clockwise','is_on_line','in_circle',
	'circumcenter','triangles_signed_areas','triangles_circumcircles'
]


@dataclass
class Point:
	"""A 2D site. Equality is exact coordinate equality; identity is ``is``."""
	x: float
	y: float

	def __iter__(self) -> Iterator[float]:
		yield self.x
		yield self.y

	def as_tuple(self):
		return (self.x, self.y)


def as_point(p) -> Point:
	"""Build a fresh Point from a Point or an (x, y) pair.

	Always copies, so later changes to the caller's object cannot move a
	vertex that is already triangulated.
	"""
	try:
		x, y = p
		pt = Point(float(x), float(y))
	except (TypeError, ValueError):
		raise ValueError(f"expected a Point or an (x, y) pair, got {p!r}")
	if not (math.isfinite(pt.x) and math.isfinite(pt.y)):
		raise ValueError(f"point coordinates must be finite, got {pt!r}")
	return pt


def det33(m00, m01, m02, m10, m11, m12, m20, m21, m22):
	"""Determinant of a 3x3 matrix given row by row."""
	det = m00 * (m11 * m22 - m12 * m21)
	det -= m01 * (m10 * m22 - m12 * m20)
	det += m02 * (m10 * m21 - m11 * m20)
	return det


def is_counter_clockwise(a: Point, b: Point, c: Point) -> bool:
	"""True when a -> b -> c makes a strict counter-clockwise turn."""
	return (a.x - b.x) * (b.y - c.y) > (a.y - b.y) * (b.x - c.x)


def is_on_line(a: Point, b: Point, p: Point) -> bool:
	"""True when p is exactly collinear with the segment endpoints a, b."""
	return (p.x - a.x) * (p.y - b.y) == (p.y - a.y) * (p.x - b.x)


def in_circle(a: Point, b: Point, c: Point, d: Point) -> bool:
	"""True iff d lies strictly inside the circle through a, b, c (CCW).

	Expands the 4x4 determinant over rows (x^2+y^2, x, y, 1) along the row
	of ``d``. Points exactly on the circle are reported outside.
	"""
	a2 = a.x * a.x + a.y * a.y
	b2 = b.x * b.x + b.y * b.y
	c2 = c.x * c.x + c.y * c.y
	d2 = d.x * d.x + d.y * d.y

	det44 = d2 * det33(a.x, a.y, 1.0, b.x, b.y, 1.0, c.x, c.y, 1.0)
	det44 -= d.x * det33(a2, a.y, 1.0, b2, b.y, 1.0, c2, c.y, 1.0)
	det44 += d.y * det33(a2, a.x, 1.0, b2, b.x, 1.0, c2, c.x, 1.0)
	det44 -= det33(a2, a.x, a.y, b2, b.x, b.y, c2, c.x, c.y)
	return det44 < 0.0


def circumcenter(p0: Point, p1: Point, p2: Point, truncate: bool = False) -> Point:
	"""Center of the circle through p0, p1, p2.

	Intersects the perpendicular bisector of (p1, p2) with the one of (p0, p1).
	With ``truncate`` the coordinates are cut toward zero to whole numbers.
	Raises ValueError for collinear input.
	"""
	ex = p1.x - p0.x
	ey = p1.y - p0.y
	nx = p2.y - p1.y
	ny = p1.x - p2.x
	dx = (p0.x - p2.x) * 0.5
	dy = (p0.y - p2.y) * 0.5
	denom = ex * nx + ey * ny
	if denom == 0.0:
		raise ValueError(f"degenerate face, no circumcenter for {p0}, {p1}, {p2}")
	s = (ex * dx + ey * dy) / denom
	cx = (p1.x + p2.x) * 0.5 + s * nx
	cy = (p1.y + p2.y) * 0.5 + s * ny
	if truncate:
		return Point(float(math.trunc(cx)), float(math.trunc(cy)))
	return Point(cx, cy)


# ============================================================================
# VECTORIZED HELPERS (index meshes: points (N,2), triangles (M,3))
# ============================================================================

def triangles_signed_areas(points, triangles):
	"""Signed areas of all triangles; positive for counter-clockwise."""
	pts = np.asarray(points, dtype=float)
	tris = np.asarray(triangles, dtype=np.int64).reshape(-1, 3)
	a = pts[tris[:, 0]]; b = pts[tris[:, 1]]; c = pts[tris[:, 2]]
	return 0.5 * ((b[:, 0] - a[:, 0]) * (c[:, 1] - a[:, 1]) - (b[:, 1] - a[:, 1]) * (c[:, 0] - a[:, 0]))


def triangles_circumcircles(points, triangles):
	"""Return (centers (M,2), radii (M,)) of the circumcircles of all triangles.

	Degenerate triangles get NaN centers and infinite radii.
	"""
	pts = np.asarray(points, dtype=float)
	tris = np.asarray(triangles, dtype=np.int64).reshape(-1, 3)
	a = pts[tris[:, 0]]; b = pts[tris[:, 1]]; c = pts[tris[:, 2]]
	bx = b[:, 0] - a[:, 0]; by = b[:, 1] - a[:, 1]
	cx = c[:, 0] - a[:, 0]; cy = c[:, 1] - a[:, 1]
	d = 2.0 * (bx * cy - by * cx)
	b2 = bx * bx + by * by
	c2 = cx * cx + cy * cy
	with np.errstate(divide='ignore', invalid='ignore'):
		ux = (cy * b2 - by * c2) / d
		uy = (bx * c2 - cx * b2) / d
	centers = np.column_stack((a[:, 0] + ux, a[:, 1] + uy))
	radii = np.hypot(ux, uy)
	degenerate = d == 0.0
	centers[degenerate] = np.nan
	radii[degenerate] = np.inf
	return centers, radii
