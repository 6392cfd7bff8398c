"""Test fixtures and configuration for pytest."""

import logging

import pytest

from cycle_metrics.registry import MetricRegistry


@pytest.fixture
def registry():
    """Create a registry whose run started at the epoch."""
    return MetricRegistry(start=0)


@pytest.fixture
def info_logs(caplog):
    """Capture INFO records from the registry logger."""
    caplog.set_level(logging.INFO, logger="cycle_metrics")
    return caplog


@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level after logging setup tests."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
