"""Configuration objects for the triangulation engine and the layer pipeline."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .constants import BBOX_SCALE, BBOX_MARGIN


@dataclass
class TriangulationConfig:
    bbox_scale: float = BBOX_SCALE
    bbox_margin: float = BBOX_MARGIN
    # Voronoi vertices are truncated toward zero to whole coordinates
    truncate_circumcenters: bool = True
    # None = the locate walk is unbounded
    max_walk_steps: Optional[int] = None

    def __post_init__(self):
        if not self.bbox_scale > 1.0:
            raise ValueError(f"bbox_scale must be > 1, got {self.bbox_scale}")
        if self.bbox_margin < 0.0:
            raise ValueError(f"bbox_margin must be >= 0, got {self.bbox_margin}")
        if self.max_walk_steps is not None and self.max_walk_steps <= 0:
            raise ValueError(f"max_walk_steps must be positive, got {self.max_walk_steps}")


@dataclass
class SmoothingConfig:
    depth: int = 10
    proportion: float = 0.2
    threshold: float = 3.0
    contraction: float = 5.0

    def __post_init__(self):
        if self.depth < 0:
            raise ValueError(f"depth must be >= 0, got {self.depth}")
        if not 0.0 < self.proportion < 0.5:
            raise ValueError(f"proportion must lie in (0, 0.5), got {self.proportion}")
        if self.threshold < 0.0:
            raise ValueError(f"threshold must be >= 0, got {self.threshold}")


@dataclass
class LayerConfig:
    """Parameters of one generated layer.

    Attributes
    ----------
    width, height : int
        Canvas size; points are drawn inside it.
    margin : float
        Distance kept free of points along every canvas border.
    n_points : int
        Number of random sites fed to the triangulation.
    seed : int, optional
        Seed for ``numpy.random.default_rng`` when no generator is supplied.
    smoothing : SmoothingConfig
        Post-processing applied to every Voronoi cell.
    triangulation : TriangulationConfig
        Engine settings.
    """
    width: int = 2025
    height: int = 2025
    margin: float = 200.0
    n_points: int = 10
    seed: Optional[int] = 20250102
    smoothing: SmoothingConfig = field(default_factory=SmoothingConfig)
    triangulation: TriangulationConfig = field(default_factory=TriangulationConfig)

    def __post_init__(self):
        if self.n_points < 0:
            raise ValueError(f"n_points must be >= 0, got {self.n_points}")
        if 2 * self.margin >= min(self.width, self.height):
            raise ValueError("margin leaves no room for points on the canvas")


__all__ = ['TriangulationConfig', 'SmoothingConfig', 'LayerConfig']
