"""Central numeric constants for the triangulation engine.

Keeps the bounding box growth rule and the tolerances used by the validity
checks in one place so they are not scattered as literals.
"""
from __future__ import annotations

# Sentinel bounding box growth
BBOX_SCALE: float = 10.0      # each axis is expanded by this factor around the box center
BBOX_MARGIN: float = 1.0      # added to each half-extent before scaling

# Validity check tolerances (never used by the insertion predicates)
EPS_INCIRCLE: float = 1e-9    # relative slack for empty-circumcircle checks
EPS_COLINEAR: float = 1e-15   # near-colinearity threshold for degenerate triangles

__all__ = [
    'BBOX_SCALE',
    'BBOX_MARGIN',
    'EPS_INCIRCLE',
    'EPS_COLINEAR',
]
