"""
quadvoronoi example: random Voronoi layers

This example walks through the whole pipeline:
1. Triangulate a handful of points and inspect the result
2. Check the triangulation with the validity helpers
3. Generate several layers of smoothed Voronoi cells
4. Print the insertion statistics per layer

Perfect for: first-time users, quick start guide
"""

import numpy as np

from quadvoronoi import (
    DelaunayTriangulation, LayerConfig, SmoothingConfig,
    configure_logging, format_stats_table, smooth_polygon,
)
from quadvoronoi.core.conformity import check_delaunay, check_quadedge_invariants
from quadvoronoi.core.layers import build_triangulation, sample_points


def main():
    configure_logging('INFO')
    print("=" * 60)
    print("quadvoronoi example: random Voronoi layers")
    print("=" * 60)

    # Step 1: a small triangulation
    print("\n[1] Triangulating a square with a center point...")
    dt = DelaunayTriangulation()
    dt.insert_points([(0, 0), (10, 0), (10, 10), (0, 10), (5, 4)])
    points, triangles = dt.to_arrays()
    print(f"  {len(points)} vertices, {len(triangles)} triangles, {len(dt.compute_edges())} edges")
    for cell in dt.compute_voronoi():
        print("  cell:", [p.as_tuple() for p in cell])

    # Step 2: validity
    print("\n[2] Checking the triangulation...")
    ok, msgs = check_quadedge_invariants(dt.arena)
    print(f"  quad-edge invariants: {'ok' if ok else msgs}")
    print(f"  empty circle violations: {len(check_delaunay(points, triangles))}")

    # Step 3: layers
    print("\n[3] Generating layers...")
    cfg = LayerConfig(n_points=25, smoothing=SmoothingConfig(depth=6))
    rng = np.random.default_rng(cfg.seed)
    stats = {}
    for k in range(3):
        dt = build_triangulation(sample_points(cfg, rng), cfg)
        stats[f"layer{k}"] = dt.stats.to_dict()
        polygons = [smooth_polygon(cell, cfg.smoothing) for cell in dt.compute_voronoi()]
        sizes = [len(poly) for poly in polygons]
        print(f"  layer {k}: {len(polygons)} polygons, {min(sizes)}-{max(sizes)} vertices each")

    # Step 4: statistics
    print("\n[4] Insertion statistics")
    print(format_stats_table(stats))


if __name__ == "__main__":
    main()
