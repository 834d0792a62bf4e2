"""Tests for input validation helpers."""

import pytest

from derivlab.utils.validate import validate_point, validate_positive_int, validate_stepsize


def test_validate_stepsize_accepts_positive():
    """Positive finite steps pass and come back as floats."""
    assert validate_stepsize(1) == 1.0
    assert isinstance(validate_stepsize(1), float)


@pytest.mark.parametrize("h", [0, -1e-3, float("nan"), float("inf")])
def test_validate_stepsize_rejects(h):
    """Zero, negative and non-finite steps are rejected."""
    with pytest.raises(ValueError):
        validate_stepsize(h)


@pytest.mark.parametrize("x0", [float("nan"), float("-inf")])
def test_validate_point_rejects_nonfinite(x0):
    """The point must be finite."""
    with pytest.raises(ValueError):
        validate_point(x0)


def test_validate_positive_int():
    """Integers at or above the minimum pass."""
    assert validate_positive_int(3, "n", minimum=2) == 3
    with pytest.raises(ValueError):
        validate_positive_int(1, "n", minimum=2)
    with pytest.raises(ValueError):
        validate_positive_int(True, "n")
