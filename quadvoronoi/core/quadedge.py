"""Quad-edge topology (Guibas-Stolfi) stored in a flat dart arena.

Every physical edge is a *quad* of four darts: the primal edge, its reverse
and the two dual darts that cross it. Quad ``q`` owns darts ``4q .. 4q+3``
where ``4q`` is the primal dart created by :meth:`QuadEdgeArena.make_edge`.
Darts are referenced by integer index only; the two stored pointers are

* ``next``: next dart counter-clockwise around the same origin, and
* ``rot``:  the dart rotated by 90 degrees (primal <-> dual).

All other navigation is derived from these two. Origins are :class:`Point`
objects for primal darts; dual darts start with ``None`` and are used as a
cache slot for the circumcenter of the face they stand for.
"""
from __future__ import annotations
from typing import Iterator, List, Optional

import numpy as np

from .geometry import Point, is_counter_clockwise, is_on_line

__all__ = ['QuadEdgeArena']

_INITIAL_QUADS = 64


class QuadEdgeArena:
    """Growable storage for quad-edge darts plus the topological operators.

    The arena never reuses the slots of deleted quads; they are tombstoned
    so dart indices held by callers stay valid for the arena's lifetime.
    """

    def __init__(self, capacity: int = _INITIAL_QUADS):
        capacity = max(1, int(capacity))
        self._next = np.zeros(4 * capacity, dtype=np.int32)
        self._rot = np.zeros(4 * capacity, dtype=np.int32)
        self._mark = np.zeros(4 * capacity, dtype=bool)
        self._alive = np.zeros(capacity, dtype=bool)
        self._origin: List[Optional[Point]] = []
        self._n_quads = 0

    # ------------------------------------------------------------------
    # storage
    # ------------------------------------------------------------------
    def _grow(self):
        cap = self._alive.shape[0] * 2
        self._next = np.resize(self._next, 4 * cap)
        self._rot = np.resize(self._rot, 4 * cap)
        mark = np.zeros(4 * cap, dtype=bool)
        mark[:self._mark.shape[0]] = self._mark
        self._mark = mark
        alive = np.zeros(cap, dtype=bool)
        alive[:self._alive.shape[0]] = self._alive
        self._alive = alive

    @property
    def n_quads(self) -> int:
        """Number of quads ever allocated (live and deleted)."""
        return self._n_quads

    @property
    def n_darts(self) -> int:
        return 4 * self._n_quads

    def is_live(self, e: int) -> bool:
        return bool(self._alive[e >> 2])

    def live_quads(self) -> Iterator[int]:
        """Canonical primal dart of every live quad, in allocation order."""
        for q in np.flatnonzero(self._alive[:self._n_quads]):
            yield 4 * int(q)

    def live_darts(self) -> Iterator[int]:
        for e in self.live_quads():
            yield e
            yield e + 1
            yield e + 2
            yield e + 3

    # ------------------------------------------------------------------
    # stored fields
    # ------------------------------------------------------------------
    def next(self, e: int) -> int:
        return int(self._next[e])

    def rot(self, e: int) -> int:
        return int(self._rot[e])

    def origin(self, e: int) -> Optional[Point]:
        return self._origin[e]

    def set_origin(self, e: int, p: Optional[Point]):
        self._origin[e] = p

    def mark(self, e: int) -> bool:
        return bool(self._mark[e])

    def set_mark(self, e: int, value: bool = True):
        self._mark[e] = value

    def reset_marks(self):
        self._mark[:] = False

    def clear_dual_origins(self):
        """Drop every cached face value held in the dual darts."""
        origin = self._origin
        for e in range(1, len(origin), 2):
            origin[e] = None

    # ------------------------------------------------------------------
    # derived navigation
    # ------------------------------------------------------------------
    def sym(self, e: int) -> int:
        """Same edge, opposite direction."""
        return int(self._rot[self._rot[e]])

    def inv_rot(self, e: int) -> int:
        """Dual dart rotated the other way (rot applied three times)."""
        return int(self._rot[self._rot[self._rot[e]]])

    def destination(self, e: int) -> Optional[Point]:
        return self._origin[self.sym(e)]

    def previous(self, e: int) -> int:
        """Previous dart around the origin (clockwise neighbour)."""
        return self.rot(self.next(self.rot(e)))

    def destination_previous(self, e: int) -> int:
        """Previous dart around the destination."""
        return self.inv_rot(self.next(self.inv_rot(e)))

    def left_next(self, e: int) -> int:
        """Next dart counter-clockwise around the left face."""
        return self.rot(self.next(self.inv_rot(e)))

    def left_previous(self, e: int) -> int:
        return self.sym(self.next(e))

    # ------------------------------------------------------------------
    # dart level predicates
    # ------------------------------------------------------------------
    def is_on_line(self, e: int, p: Point) -> bool:
        return is_on_line(self._origin[e], self.destination(e), p)

    def is_at_right_of(self, e: int, p: Point) -> bool:
        return is_counter_clockwise(p, self.destination(e), self._origin[e])

    # ------------------------------------------------------------------
    # operators
    # ------------------------------------------------------------------
    def make_edge(self, origin: Point, destination: Point) -> int:
        """Allocate an isolated edge and return its primal dart."""
        if self._n_quads == self._alive.shape[0]:
            self._grow()
        q0 = 4 * self._n_quads
        q1, q2, q3 = q0 + 1, q0 + 2, q0 + 3
        self._n_quads += 1
        self._alive[q0 >> 2] = True

        # a lonely segment: each endpoint ring holds only its own dart,
        # while both dual darts see the single face on either side
        self._next[q0] = q0
        self._next[q2] = q2
        self._next[q1] = q3
        self._next[q3] = q1

        self._rot[q0] = q1
        self._rot[q1] = q2
        self._rot[q2] = q3
        self._rot[q3] = q0

        self._mark[q0:q0 + 4] = False
        self._origin.extend((origin, None, destination, None))
        return q0

    def splice(self, a: int, b: int):
        """Exchange the origin rings of a and b (and the matching dual rings).

        Merges two distinct rings or splits one; applying it twice with the
        same arguments restores the original topology.
        """
        nxt = self._next
        alpha = self.rot(nxt[a])
        beta = self.rot(nxt[b])

        t1 = int(nxt[b])
        t2 = int(nxt[a])
        t3 = int(nxt[beta])
        t4 = int(nxt[alpha])

        nxt[a] = t1
        nxt[b] = t2
        nxt[alpha] = t3
        nxt[beta] = t4

    def connect(self, a: int, b: int) -> int:
        """Add an edge from a's destination to b's origin closing their left faces."""
        e = self.make_edge(self.destination(a), self._origin[b])
        self.splice(e, self.left_next(a))
        self.splice(self.sym(e), b)
        return e

    def swap_edge(self, e: int):
        """Flip e to the other diagonal of the quadrilateral around it."""
        a = self.previous(e)
        b = self.previous(self.sym(e))
        self.splice(e, a)
        self.splice(self.sym(e), b)
        self.splice(e, self.left_next(a))
        self.splice(self.sym(e), self.left_next(b))
        self._origin[e] = self.destination(a)
        self._origin[self.sym(e)] = self.destination(b)

    def delete_edge(self, e: int):
        """Detach e from both endpoint rings and retire its quad."""
        self.splice(e, self.previous(e))
        es = self.sym(e)
        self.splice(es, self.previous(es))
        self._alive[e >> 2] = False
