"""Tests for the finite-difference method registry."""

import math

import numpy as np
import pytest

from derivlab.finite import methods as fm
from derivlab.finite.methods import (
    BACKWARD,
    CENTRAL,
    FORWARD,
    DifferenceMethod,
    available_methods,
    get_method,
    register_method,
    resolve_methods,
)


def cubic(x):
    """Cubic function for testing, f'(x) = 3x^2 - 4."""
    return x**3 - 4 * x + 1


def test_builtin_methods_in_order():
    """The registry lists forward, backward and central, in that order."""
    assert available_methods()[:3] == ["Forward Difference", "Backward Difference", "Central Difference"]


def test_descriptors():
    """Descriptors carry their formula, order and stencil offsets."""
    assert FORWARD.formula == "(f(x+h) - f(x)) / h"
    assert BACKWARD.order == "O(h)"
    assert CENTRAL.order == "O(h²)"
    assert (FORWARD.truncation_order, BACKWARD.truncation_order, CENTRAL.truncation_order) == (1, 1, 2)
    assert FORWARD.offsets == (0, 1)
    assert BACKWARD.offsets == (-1, 0)
    assert CENTRAL.offsets == (-1, 1)


def test_estimates_on_quadratic():
    """On x^2 + 2x + 1 at 1 with h = 0.1: 4.1, 3.9 and exactly 4."""
    f = lambda x: x**2 + 2 * x + 1
    assert np.isclose(FORWARD.estimate(f, 1.0, 0.1), 4.1, atol=1e-12)
    assert np.isclose(BACKWARD.estimate(f, 1.0, 0.1), 3.9, atol=1e-12)
    assert np.isclose(CENTRAL.estimate(f, 1.0, 0.1), 4.0, atol=1e-12)


@pytest.mark.parametrize("h", [1e-1, 5e-2, 1e-2])
def test_truncation_error_bounds_on_cubic(h):
    """Errors follow f''h/2 for one-sided and f'''h^2/6 for central differences."""
    x0 = 0.7
    exact = 3 * x0**2 - 4
    # f'' = 6x, f''' = 6
    assert abs(FORWARD.estimate(cubic, x0, h) - exact) <= 0.5 * 6 * (x0 + h) * h + 1e-12
    assert abs(BACKWARD.estimate(cubic, x0, h) - exact) <= 0.5 * 6 * x0 * h + 1e-12
    assert np.isclose(CENTRAL.estimate(cubic, x0, h) - exact, h**2, rtol=1e-6)


def test_estimate_returns_float():
    """Estimates are plain floats."""
    assert isinstance(CENTRAL.estimate(np.sin, 0.0, 1e-3), float)


def test_nan_sample_gives_nan_estimate():
    """A NaN function value propagates into the estimate."""
    f = lambda x: float("nan") if x == 0.0 else 1.0 / x
    assert math.isnan(FORWARD.estimate(f, 0.0, 0.1))
    assert math.isnan(BACKWARD.estimate(f, 0.0, 0.1))
    assert not math.isnan(CENTRAL.estimate(f, 0.0, 0.1))


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Central Difference", CENTRAL),
        ("central difference", CENTRAL),
        ("central_difference", CENTRAL),
        ("central", CENTRAL),
        ("FD", FORWARD),
        ("backward", BACKWARD),
        ("unknown", None),
    ],
)
def test_get_method_normalizes_names(name, expected):
    """Lookup ignores case, spacing and punctuation."""
    assert get_method(name) is expected


def test_resolve_methods_skips_unknown_and_keeps_order(derivlab_caplog):
    """Unknown names are dropped (with a debug message); order is kept."""
    resolved = resolve_methods(["Central Difference", "Spline", "Forward Difference"])
    assert resolved == [CENTRAL, FORWARD]
    assert any("Spline" in r.getMessage() for r in derivlab_caplog.records)


@pytest.fixture
def restore_registry(monkeypatch):
    """Keeps registrations made by a test out of the other tests."""
    monkeypatch.setattr(fm, "_METHOD_SPECS", list(fm._METHOD_SPECS))
    fm._method_map.cache_clear()
    yield
    fm._method_map.cache_clear()


def test_register_method(restore_registry):
    """A registered method can be looked up and is listed last."""
    five_point = DifferenceMethod(
        name="Five-Point Central Difference",
        formula="(-f(x+2h) + 8f(x+h) - 8f(x-h) + f(x-2h)) / (12h)",
        order="O(h⁴)",
        truncation_order=4,
        offsets=(-2, -1, 1, 2),
        estimator=lambda f, x, h: (-f(x + 2 * h) + 8 * f(x + h) - 8 * f(x - h) + f(x - 2 * h)) / (12 * h),
    )
    register_method(five_point, aliases=("five-point",))
    assert available_methods()[-1] == "Five-Point Central Difference"
    assert get_method("five point") is five_point
    assert np.isclose(five_point.estimate(np.exp, 0.0, 1e-2), 1.0, atol=1e-9)


def test_register_duplicate_name_raises(restore_registry):
    """Names and aliases must be unique."""
    with pytest.raises(ValueError):
        register_method(CENTRAL)
