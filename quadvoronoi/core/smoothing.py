"""Polygon smoothing for Voronoi cells.

Chaikin corner cutting rounds a closed polygon; edges shorter than a threshold
are dropped on every pass, which merges vertices that lie almost on top of
each other (truncated circumcenters often coincide). A final contraction pulls
every vertex a fixed distance toward the barycenter so neighbouring cells do
not touch.
"""
from __future__ import annotations
from typing import Optional

import numpy as np

from .config import SmoothingConfig
from .logging_utils import get_logger

__all__ = ['chaikin', 'contract', 'smooth_polygon']

logger = get_logger('quadvoronoi.smoothing')


def _as_curve(points) -> np.ndarray:
    if isinstance(points, np.ndarray):
        return np.asarray(points, dtype=float).reshape(-1, 2)
    return np.asarray([tuple(p) for p in points], dtype=float).reshape(-1, 2)


def chaikin(curve, proportion: float = 0.2, threshold: float = 3.0) -> np.ndarray:
    """One corner-cutting pass over the closed polygon ``curve``.

    Each edge (p, q) at least ``threshold`` long is replaced by the two points
    ``p*(1-r) + q*r`` and ``p*r + q*(1-r)``; shorter edges vanish.
    """
    pts = _as_curve(curve)
    if pts.shape[0] == 0:
        return pts
    nxt = np.roll(pts, -1, axis=0)
    keep = np.hypot(*(nxt - pts).T) >= threshold
    p = pts[keep]
    q = nxt[keep]
    out = np.empty((2 * p.shape[0], 2), dtype=float)
    out[0::2] = p * (1.0 - proportion) + q * proportion
    out[1::2] = p * proportion + q * (1.0 - proportion)
    return out


def contract(curve, amount: float = 5.0) -> np.ndarray:
    """Move every vertex ``amount`` toward the vertex barycenter.

    Vertices sitting exactly on the barycenter are left in place.
    """
    pts = _as_curve(curve)
    if pts.shape[0] == 0:
        raise ValueError("cannot contract an empty polygon")
    barycenter = pts.mean(axis=0)
    direction = pts - barycenter
    norm = np.hypot(direction[:, 0], direction[:, 1])
    scale = np.zeros_like(norm)
    nz = norm > 0.0
    scale[nz] = amount / norm[nz]
    return pts - direction * scale[:, None]


def smooth_polygon(points, config: Optional[SmoothingConfig] = None) -> np.ndarray:
    """Apply ``config.depth`` Chaikin passes then one contraction.

    Raises ValueError when the thresholded passes eat the whole polygon.
    """
    cfg = config if config is not None else SmoothingConfig()
    curve = _as_curve(points)
    for _ in range(cfg.depth):
        curve = chaikin(curve, cfg.proportion, cfg.threshold)
    if curve.shape[0] == 0:
        logger.warning("polygon with %d vertices collapsed below threshold %g",
                       len(points), cfg.threshold)
    return contract(curve, cfg.contraction)
