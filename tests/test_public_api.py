"""Unit tests for public API."""

from __future__ import annotations

import derivlab
from derivlab import (
    DerivativeLab,
    compile_expression,
    differentiate,
    evaluate_methods,
    sweep_convergence,
)


def test_engine_operations_importable_from_top_level():
    """The four engine operations and the lab are exported at top level."""
    assert callable(compile_expression)
    assert callable(differentiate)
    assert callable(evaluate_methods)
    assert callable(sweep_convergence)
    assert DerivativeLab is not None


def test_public_all_names_resolve():
    """Every name in __all__ exists on the package."""
    for name in derivlab.__all__:
        assert hasattr(derivlab, name), name


def test_end_to_end_through_public_names():
    """Compile, differentiate, evaluate and sweep with top-level imports only."""
    f = compile_expression("x^2 + 2*x + 1")
    df = differentiate("x^2 + 2*x + 1")
    (result,) = evaluate_methods(f, df, 1.0, 0.1, ["Central Difference"])
    assert abs(result.numerical - 4.0) < 1e-10
    (series,) = sweep_convergence(f, df, 1.0, ["Forward Difference"])
    assert len(series.step_sizes) == 20
