"""Pytest configuration with shared expressions and a log capture helper."""

import logging

import pytest

from derivlab.logger import logger_name

__all__ = ["quadratic", "all_methods", "derivlab_caplog"]

ALL_METHODS = ["Forward Difference", "Backward Difference", "Central Difference"]


@pytest.fixture
def quadratic():
    """The default expression, f(x) = (x + 1)^2 with f'(1) = 4."""
    return "x^2 + 2*x + 1"


@pytest.fixture
def all_methods():
    """Names of the three built-in methods, in registry order."""
    return list(ALL_METHODS)


@pytest.fixture
def derivlab_caplog(caplog):
    """caplog capturing DEBUG and above from the derivlab logger."""
    caplog.set_level(logging.DEBUG, logger=logger_name)
    return caplog
