"""Convergence sweep of difference methods over shrinking step sizes.

For a fixed point the absolute error of each method is measured on a
logarithmic grid of step sizes. Plotted on log-log axes, an ``O(h)`` method
shows a line of slope one and an ``O(h²)`` method a line of slope two, until
round-off in ``f(x+h) - f(x)`` takes over at small ``h`` and the error grows
again. That upturn is expected.

Examples:
--------
>>> from derivlab.convergence import sweep_expression
>>> series = sweep_expression("exp(x)", 0.5, ["Forward Difference"])
>>> len(series[0].step_sizes)
20
>>> round(series[0].observed_order(max_step=1e-1), 1)
1.0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np

from derivlab.expressions.evaluate import compile_expression
from derivlab.expressions.symbolic import differentiate
from derivlab.finite.methods import resolve_methods
from derivlab.utils.numerics import loglog_slope
from derivlab.utils.types import FloatArray, ScalarFunction
from derivlab.utils.validate import validate_point, validate_positive_int

__all__ = [
    "ConvergenceSeries",
    "convergence_step_sizes",
    "sweep_convergence",
    "sweep_expression",
]


@dataclass(frozen=True)
class ConvergenceSeries:
    """Absolute error of one method over the sweep.

    Attributes:
        method: Display name of the method.
        step_sizes: Step sizes in increasing order.
        errors: ``|estimate(h) - f'(x0)|`` for each step size.
        truncation_order: Declared order of the method, for comparison
            with :meth:`observed_order`.
    """

    method: str
    step_sizes: FloatArray
    errors: FloatArray
    truncation_order: int

    def pairs(self) -> list[tuple[float, float]]:
        """Returns the ``(step size, error)`` pairs as floats."""
        return [(float(h), float(e)) for h, e in zip(self.step_sizes, self.errors)]

    def observed_order(
        self,
        min_step: float | None = None,
        max_step: float | None = None,
    ) -> float:
        """Estimates the convergence order from the log-log slope.

        Args:
            min_step: Ignore step sizes below this value, e.g. to leave out
                the round-off dominated region.
            max_step: Ignore step sizes above this value.

        Returns:
            The least-squares slope of ``log10(error)`` against
            ``log10(h)``, or NaN if fewer than two usable points remain.
        """
        mask = np.ones_like(self.step_sizes, dtype=bool)
        if min_step is not None:
            mask &= self.step_sizes >= min_step
        if max_step is not None:
            mask &= self.step_sizes <= max_step
        return loglog_slope(self.step_sizes[mask], self.errors[mask])


def convergence_step_sizes(
    num_steps: int = 20,
    start_exponent: float = -4.0,
    exponent_step: float = 0.2,
) -> FloatArray:
    """Builds the geometric grid of step sizes ``10**(start + i * step)``.

    With the defaults this runs from ``1e-4`` up to ``10**-0.2``.

    Args:
        num_steps: Number of step sizes.
        start_exponent: Base-10 exponent of the first step size.
        exponent_step: Increment of the exponent; must be positive.

    Returns:
        Increasing array of step sizes.

    Raises:
        ValueError: If ``num_steps < 2`` or ``exponent_step <= 0``.
    """
    num_steps = validate_positive_int(num_steps, "num_steps", minimum=2)
    if not exponent_step > 0:
        raise ValueError("exponent_step must be positive.")
    exponents = start_exponent + exponent_step * np.arange(num_steps)
    return np.power(10.0, exponents)


def sweep_convergence(
    function: ScalarFunction,
    analytical: ScalarFunction | None,
    x0: float,
    methods: Iterable[str],
    step_sizes: FloatArray | None = None,
) -> list[ConvergenceSeries]:
    """Measures each method's error across the step-size grid.

    Args:
        function: The function to differentiate.
        analytical: The exact derivative. Without it there is nothing to
            measure against and no series is produced.
        x0: The point at which the derivative is evaluated.
        methods: Names of the methods to sweep. Unknown names are skipped.
        step_sizes: Step sizes to use; defaults to
            :func:`convergence_step_sizes`.

    Returns:
        One series per known method in selection order, or an empty list
        if ``analytical`` is ``None``.
    """
    if analytical is None:
        return []
    x0 = validate_point(x0)
    hs = convergence_step_sizes() if step_sizes is None else np.asarray(step_sizes, dtype=float)
    if np.any(~(hs > 0)):
        raise ValueError("step_sizes must all be positive.")

    reference = float(analytical(x0))
    series = []
    for method in resolve_methods(methods):
        estimates = np.array([method.estimate(function, x0, float(h)) for h in hs])
        series.append(
            ConvergenceSeries(
                method=method.name,
                step_sizes=hs,
                errors=np.abs(estimates - reference),
                truncation_order=method.truncation_order,
            )
        )
    return series


def sweep_expression(
    expression: str,
    x0: float,
    methods: Iterable[str],
    step_sizes: FloatArray | None = None,
) -> list[ConvergenceSeries]:
    """Compiles an expression and runs :func:`sweep_convergence` on it.

    Raises:
        ParseError: If the expression does not parse.
    """
    function = compile_expression(expression)
    return sweep_convergence(function, differentiate(expression), x0, methods, step_sizes)
