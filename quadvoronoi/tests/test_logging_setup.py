import logging

from quadvoronoi.core.logging_utils import configure_logging, get_logger


def test_get_logger_namespaces_names():
    assert get_logger('triangulation').name == 'quadvoronoi.triangulation'
    assert get_logger('quadvoronoi.layers').name == 'quadvoronoi.layers'
    assert get_logger('quadvoronoi').name == 'quadvoronoi'


def test_configure_logging_isolated_from_root():
    root_handlers = list(logging.getLogger().handlers)
    try:
        log = configure_logging('debug')
        assert log.name == 'quadvoronoi'
        assert log.level == logging.DEBUG
        assert log.propagate is False
        assert any(not isinstance(h, logging.NullHandler) for h in log.handlers)
        # calling again does not stack handlers
        n = len(log.handlers)
        configure_logging(logging.INFO)
        assert len(log.handlers) == n
        assert log.level == logging.INFO
        assert logging.getLogger().handlers == root_handlers
    finally:
        configure_logging('WARNING')


def test_unknown_level_falls_back_to_info():
    try:
        assert configure_logging('not-a-level').level == logging.INFO
    finally:
        configure_logging('WARNING')
