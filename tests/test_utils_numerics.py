"""Tests for numerical helpers."""

import math

import numpy as np

from derivlab.utils.numerics import (
    absolute_error,
    loglog_slope,
    relative_error_percent,
    to_nan_if_nonfinite,
)


def test_absolute_error():
    """|a - b|, or None without a reference."""
    assert absolute_error(4.1, 4.0) == abs(4.1 - 4.0)
    assert absolute_error(4.1, None) is None
    assert math.isnan(absolute_error(float("nan"), 4.0))


def test_relative_error_percent():
    """Percent error, undefined at a zero reference."""
    assert np.isclose(relative_error_percent(4.1, 4.0), 2.5)
    assert relative_error_percent(0.1, 0.0) is None
    assert relative_error_percent(0.1, -0.0) is None
    assert relative_error_percent(0.1, None) is None
    assert math.isnan(relative_error_percent(0.1, float("nan")))


def test_to_nan_if_nonfinite():
    """Infinities become NaN; scalars stay scalars."""
    assert math.isnan(to_nan_if_nonfinite(float("inf")))
    assert to_nan_if_nonfinite(2.0) == 2.0
    out = to_nan_if_nonfinite([1.0, -np.inf, np.nan])
    assert out[0] == 1.0 and np.isnan(out[1]) and np.isnan(out[2])


def test_loglog_slope():
    """Power laws give their exponent; bad points are dropped."""
    x = np.logspace(-4, -1, 10)
    assert np.isclose(loglog_slope(x, 3 * x**2), 2.0)
    y = x.copy()
    y[0] = 0.0
    y[1] = np.nan
    assert np.isclose(loglog_slope(x, y), 1.0)
    assert math.isnan(loglog_slope([1.0], [1.0]))
