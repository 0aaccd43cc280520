"""Public package API for quadvoronoi.

This facade provides a flat import surface on top of the internal
implementation package ``quadvoronoi.core``. The scipy-backed validity checks
are loaded on first use to keep ``import quadvoronoi`` fast.

Example
-------
    from quadvoronoi import DelaunayTriangulation, Point

    dt = DelaunayTriangulation()
    dt.insert_points([(0, 0), (10, 0), (10, 10), (0, 10)])
    cells = dt.compute_voronoi()

The deeper modules (``quadvoronoi.core.*``) are considered internal and may
change; rely on this layer for public symbols.
"""
from importlib import import_module as _imp
import logging as _logging

try:
    from importlib.metadata import version as _pkg_version, PackageNotFoundError as _NotFound
    __version__ = _pkg_version("quadvoronoi")
except _NotFound:  # pragma: no cover - running from a source checkout
    __version__ = "0.0.0+dev"

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

# Eager light-weight submodules
_geom = _imp('quadvoronoi.core.geometry')
_const = _imp('quadvoronoi.core.constants')
_config = _imp('quadvoronoi.core.config')
_qe = _imp('quadvoronoi.core.quadedge')
_tri = _imp('quadvoronoi.core.triangulation')
_stats = _imp('quadvoronoi.core.stats')
_smooth = _imp('quadvoronoi.core.smoothing')
_layers = _imp('quadvoronoi.core.layers')
_log = _imp('quadvoronoi.core.logging_utils')


def _lazy_module(mod_name):
    class _ModuleProxy:
        __slots__ = ('_m',)
        def _load(self):
            try:
                return self._m
            except AttributeError:
                self._m = _imp(mod_name)
                return self._m
        def __getattr__(self, item):
            if item == '_m':
                raise AttributeError(item)
            return getattr(self._load(), item)
        def __dir__(self):
            return dir(self._load())
    return _ModuleProxy()


# scipy is only needed by the validity checks
conformity = _lazy_module('quadvoronoi.core.conformity')

# Core types and engine
Point = _geom.Point
QuadEdgeArena = _qe.QuadEdgeArena
DelaunayTriangulation = _tri.DelaunayTriangulation

# Predicates
is_counter_clockwise = _geom.is_counter_clockwise
is_on_line = _geom.is_on_line
in_circle = _geom.in_circle
circumcenter = _geom.circumcenter

# Configuration and statistics
TriangulationConfig = _config.TriangulationConfig
SmoothingConfig = _config.SmoothingConfig
LayerConfig = _config.LayerConfig
InsertionStats = _stats.InsertionStats
format_stats_table = _stats.format_stats_table

# Caller side pipeline
smooth_polygon = _smooth.smooth_polygon
generate_layer = _layers.generate_layer
generate_layers = _layers.generate_layers

configure_logging = _log.configure_logging
get_logger = _log.get_logger

# Namespace submodules for exploratory users
geometry = _geom
constants = _const
config = _config
quadedge = _qe
triangulation = _tri
stats = _stats
smoothing = _smooth
layers = _layers

__all__ = [
    '__version__',
    # engine
    'Point', 'QuadEdgeArena', 'DelaunayTriangulation',
    # predicates
    'is_counter_clockwise', 'is_on_line', 'in_circle', 'circumcenter',
    # configuration / stats
    'TriangulationConfig', 'SmoothingConfig', 'LayerConfig',
    'InsertionStats', 'format_stats_table',
    # pipeline
    'smooth_polygon', 'generate_layer', 'generate_layers',
    # logging
    'configure_logging', 'get_logger',
    # submodules / namespaces
    'geometry', 'constants', 'config', 'quadedge', 'triangulation', 'stats',
    'smoothing', 'layers', 'conformity',
]
