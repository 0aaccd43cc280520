"""Random layer generation: sites -> Delaunay -> Voronoi cells -> smoothed polygons.

This is the caller side of the engine. It owns all randomness; the
triangulation itself is deterministic for a given point sequence.
"""
from __future__ import annotations
from typing import List, Optional

import numpy as np

from .config import LayerConfig
from .logging_utils import get_logger
from .smoothing import smooth_polygon
from .triangulation import DelaunayTriangulation

__all__ = ['sample_points', 'build_triangulation', 'generate_layer', 'generate_layers']

logger = get_logger('quadvoronoi.layers')


def sample_points(config: LayerConfig, rng: np.random.Generator) -> np.ndarray:
    """Draw ``config.n_points`` uniform sites inside the canvas minus its margin."""
    low = np.array([config.margin, config.margin], dtype=float)
    high = np.array([config.width - config.margin, config.height - config.margin], dtype=float)
    return rng.uniform(low, high, size=(config.n_points, 2))


def build_triangulation(points, config: Optional[LayerConfig] = None) -> DelaunayTriangulation:
    cfg = config if config is not None else LayerConfig()
    dt = DelaunayTriangulation(cfg.triangulation)
    pts = np.asarray(points, dtype=float).reshape(-1, 2)
    if pts.shape[0]:
        # size the sentinel box once so it never moves under existing triangles
        lo = pts.min(axis=0)
        hi = pts.max(axis=0)
        dt.set_bounding_box(lo[0], lo[1], hi[0], hi[1])
    dt.insert_points(pts)
    return dt


def generate_layer(config: Optional[LayerConfig] = None,
                   rng: Optional[np.random.Generator] = None) -> List[np.ndarray]:
    """Return the smoothed Voronoi cells of one random layer.

    Without ``rng`` a generator seeded with ``config.seed`` is used, so two
    calls with the same config produce the same polygons.
    """
    cfg = config if config is not None else LayerConfig()
    if rng is None:
        rng = np.random.default_rng(cfg.seed)
    points = sample_points(cfg, rng)
    dt = build_triangulation(points, cfg)
    cells = dt.compute_voronoi()
    polygons = [smooth_polygon(cell, cfg.smoothing) for cell in cells]
    logger.debug("layer: %d sites, %d cells, %d flips", len(dt), len(polygons), dt.stats.flips)
    return polygons


def generate_layers(count: int, config: Optional[LayerConfig] = None,
                    rng: Optional[np.random.Generator] = None) -> List[List[np.ndarray]]:
    """Generate ``count`` layers drawing from one shared generator."""
    cfg = config if config is not None else LayerConfig()
    if rng is None:
        rng = np.random.default_rng(cfg.seed)
    return [generate_layer(cfg, rng) for _ in range(count)]
