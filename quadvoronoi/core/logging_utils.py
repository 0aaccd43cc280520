"""Logging utilities for quadvoronoi.

Provides a consistent logger hierarchy and formatting without modifying the
process root logger. All quadvoronoi code should obtain loggers via get_logger().
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, Union

_ROOT_NAME = 'quadvoronoi'
_FORMAT = logging.Formatter('%(levelname)s %(name)s: %(message)s')


def _ensure_root() -> logging.Logger:
    """Ensure the 'quadvoronoi' logger has a single stream handler and is
    isolated from the process root logger. Returns the 'quadvoronoi' logger.
    """
    root = logging.getLogger(_ROOT_NAME)
    # The package __init__ only installs a NullHandler; swap it for a real one
    has_non_null = any(not isinstance(h, logging.NullHandler) for h in root.handlers)
    if not has_non_null:
        for h in list(root.handlers):
            root.removeHandler(h)
        handler = logging.StreamHandler(stream=sys.stdout)
        handler.setFormatter(_FORMAT)
        root.addHandler(handler)
    root.propagate = False
    return root


def _to_level(level: Union[str, int, None], default: int = logging.INFO) -> int:
    if level is None:
        return default
    if isinstance(level, int):
        return level
    lvl = getattr(logging, str(level).upper(), None)
    return lvl if isinstance(lvl, int) else default


def configure_logging(level: Union[str, int] = 'INFO') -> logging.Logger:
    """Configure the 'quadvoronoi' logger family level.

    This does NOT modify the process root logger.
    """
    root = _ensure_root()
    root.setLevel(_to_level(level))
    return root


def get_logger(name: str, level: Optional[Union[str, int]] = None) -> logging.Logger:
    """Return a logger under the 'quadvoronoi' namespace.

    Without an explicit level the logger is left at NOTSET so it inherits
    whatever configure_logging() set on the parent. Loggers created here do
    not install handlers; until configure_logging() is called the package
    NullHandler keeps the library silent.
    """
    if name != _ROOT_NAME and not name.startswith(_ROOT_NAME + '.'):
        name = f'{_ROOT_NAME}.{name}'
    log = logging.getLogger(name)
    if level is not None:
        log.setLevel(_to_level(level))
    return log


__all__ = ['get_logger', 'configure_logging']
