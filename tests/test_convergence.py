"""Tests for the convergence sweep."""

import numpy as np
import pytest

from derivlab.convergence import (
    ConvergenceSeries,
    convergence_step_sizes,
    sweep_convergence,
    sweep_expression,
)
from derivlab.expressions.evaluate import compile_expression
from derivlab.expressions.parser import ParseError
from derivlab.expressions.symbolic import differentiate


def test_default_step_sizes():
    """Twenty geometric steps from 1e-4 to 10^-0.2."""
    hs = convergence_step_sizes()
    assert hs.shape == (20,)
    assert np.isclose(hs[0], 1e-4)
    assert np.isclose(hs[-1], 10 ** (-4 + 19 * 0.2))
    ratios = hs[1:] / hs[:-1]
    assert np.allclose(ratios, 10**0.2)


@pytest.mark.parametrize(
    "kwargs",
    [{"num_steps": 1}, {"exponent_step": 0.0}, {"exponent_step": -0.2}],
)
def test_invalid_step_grid_raises(kwargs):
    """The grid needs two or more increasing steps."""
    with pytest.raises(ValueError):
        convergence_step_sizes(**kwargs)


def test_observed_orders_match_truncation_orders(all_methods):
    """Slopes are about 1 for one-sided and 2 for central differences."""
    series = sweep_expression("sin(x)", 1.0, all_methods)
    assert [s.method for s in series] == all_methods
    slopes = {s.method: s.observed_order(max_step=1e-1) for s in series}
    assert slopes["Forward Difference"] == pytest.approx(1.0, abs=0.1)
    assert slopes["Backward Difference"] == pytest.approx(1.0, abs=0.1)
    assert slopes["Central Difference"] == pytest.approx(2.0, abs=0.1)
    for s in series:
        assert s.truncation_order == round(slopes[s.method])


def test_central_error_quarters_when_step_halves():
    """Halving h divides the central error by about four."""
    f = compile_expression("exp(x)")
    df = differentiate("exp(x)")
    hs = np.array([0.1, 0.05, 0.025])
    (series,) = sweep_convergence(f, df, 0.3, ["Central Difference"], step_sizes=hs)
    ratios = series.errors[:-1] / series.errors[1:]
    assert np.allclose(ratios, 4.0, rtol=0.01)


def test_round_off_turns_error_upward():
    """At tiny steps the error grows again as cancellation dominates."""
    f = compile_expression("exp(x)")
    df = differentiate("exp(x)")
    hs = convergence_step_sizes(num_steps=20, start_exponent=-13.0, exponent_step=0.5)
    (series,) = sweep_convergence(f, df, 1.0, ["Forward Difference"], step_sizes=hs)
    best = int(np.argmin(series.errors))
    assert 0 < best < len(hs) - 1
    assert series.errors[0] > series.errors[best]


def test_no_reference_means_no_series(all_methods):
    """Without a symbolic derivative the sweep is empty."""
    f = compile_expression("floor(x)")
    assert sweep_convergence(f, None, 0.5, all_methods) == []
    assert sweep_expression("floor(x)", 0.5, all_methods) == []


def test_unknown_methods_skipped():
    """Only known methods produce a series."""
    series = sweep_expression("x^2", 1.0, ["nope", "Central Difference"])
    assert [s.method for s in series] == ["Central Difference"]


def test_series_pairs_and_shapes():
    """Each series pairs every step with its error."""
    (series,) = sweep_expression("x^3", 2.0, ["Backward Difference"])
    assert isinstance(series, ConvergenceSeries)
    assert series.errors.shape == series.step_sizes.shape == (20,)
    pairs = series.pairs()
    assert len(pairs) == 20
    assert all(isinstance(h, float) and isinstance(e, float) for h, e in pairs)
    assert np.all(series.errors >= 0)


def test_observed_order_needs_two_points():
    """With fewer than two usable points the order is NaN."""
    series = ConvergenceSeries(
        method="Central Difference",
        step_sizes=np.array([0.1, 0.01]),
        errors=np.array([0.0, 1e-5]),
        truncation_order=2,
    )
    assert np.isnan(series.observed_order())


def test_nan_reference_gives_nan_errors():
    """A reference undefined at the point makes every error NaN."""
    series = sweep_expression("1/x", 0.0, ["Central Difference"])
    assert np.all(np.isnan(series[0].errors))


def test_sweep_expression_propagates_parse_error():
    """Malformed text fails loudly here."""
    with pytest.raises(ParseError):
        sweep_expression("x^^2", 0.0, ["Central Difference"])
