"""Compares finite-difference estimates with the analytical derivative.

:func:`evaluate_methods` works on already compiled functions;
:func:`compare_methods` starts from expression text and turns a parse error
into a report without results.

Examples:
--------
>>> from derivlab.comparison import compare_methods
>>> report = compare_methods(
...     "x^2 + 2*x + 1",
...     x0=1.0,
...     stepsize=0.1,
...     methods=["Forward Difference", "Central Difference"],
... )
>>> [round(r.numerical, 6) for r in report.results]
[4.1, 4.0]
>>> report.results[0].analytical
4.0
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from derivlab.expressions.evaluate import compile_expression
from derivlab.expressions.parser import ParseError
from derivlab.expressions.symbolic import differentiate
from derivlab.finite.methods import resolve_methods
from derivlab.logger import derivlab_logger
from derivlab.utils.numerics import absolute_error, relative_error_percent
from derivlab.utils.types import ScalarFunction
from derivlab.utils.validate import validate_point, validate_stepsize

__all__ = [
    "DifferentiationResult",
    "DifferentiationReport",
    "evaluate_methods",
    "compare_methods",
]


@dataclass(frozen=True)
class DifferentiationResult:
    """Outcome of one difference method at one point and step.

    ``analytical``, ``absolute_error`` and ``relative_error`` are ``None``
    when no symbolic derivative is available. ``relative_error`` is in
    percent and is also ``None`` when the analytical value is exactly zero.
    """

    method: str
    numerical: float
    analytical: float | None
    absolute_error: float | None
    relative_error: float | None
    formula: str = ""
    order: str = ""


@dataclass(frozen=True)
class DifferentiationReport:
    """All results for one ``(expression, x0, stepsize, methods)`` input.

    Attributes:
        expression: The expression text.
        x0: The evaluation point.
        stepsize: The step size.
        results: One entry per known selected method, in selection order.
        error: Message of the parse error, if the expression was rejected.
            A report with an error never has results.
        derivative: Text of the symbolic derivative, if there is one.
    """

    expression: str
    x0: float
    stepsize: float
    results: list[DifferentiationResult] = field(default_factory=list)
    error: str | None = None
    derivative: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def has_reference(self) -> bool:
        """True if the results carry analytical values."""
        return any(r.analytical is not None for r in self.results)


def evaluate_methods(
    function: ScalarFunction,
    analytical: ScalarFunction | None,
    x0: float,
    stepsize: float,
    methods: Iterable[str],
) -> list[DifferentiationResult]:
    """Applies the selected difference methods and measures their errors.

    Args:
        function: The function to differentiate.
        analytical: The exact derivative, or ``None`` if unavailable.
        x0: The point at which the derivative is evaluated.
        stepsize: Step size ``h``; must be positive.
        methods: Names of the methods to apply. Unknown names are skipped.

    Returns:
        One result per known method, in the order given. A NaN function
        value at a sample point gives a NaN estimate, never an exception.

    Raises:
        ValueError: If ``stepsize`` is not positive or either input is
            not finite.
    """
    x0 = validate_point(x0)
    stepsize = validate_stepsize(stepsize)

    reference = float(analytical(x0)) if analytical is not None else None

    results = []
    for method in resolve_methods(methods):
        numerical = method.estimate(function, x0, stepsize)
        results.append(
            DifferentiationResult(
                method=method.name,
                numerical=numerical,
                analytical=reference,
                absolute_error=absolute_error(numerical, reference),
                relative_error=relative_error_percent(numerical, reference),
                formula=method.formula,
                order=method.order,
            )
        )
    return results


def compare_methods(
    expression: str,
    x0: float,
    stepsize: float,
    methods: Iterable[str],
) -> DifferentiationReport:
    """Compiles an expression and compares the selected methods on it.

    A malformed expression does not raise: the report carries the error
    message and no results, so no stale values survive a bad edit. A
    missing symbolic derivative only blanks the analytical and error
    fields.

    Args:
        expression: Text over the single free variable ``x``.
        x0: The point at which the derivative is evaluated.
        stepsize: Step size ``h``; must be positive.
        methods: Names of the methods to apply.

    Returns:
        The report for this input.

    Raises:
        ValueError: If ``stepsize`` or ``x0`` is invalid.
    """
    try:
        function = compile_expression(expression)
    except ParseError as exc:
        derivlab_logger.warning("Invalid function syntax: %s", exc)
        return DifferentiationReport(
            expression=expression,
            x0=x0,
            stepsize=stepsize,
            error=f"Invalid function syntax: {exc}",
        )

    analytical = differentiate(expression)
    results = evaluate_methods(function, analytical, x0, stepsize, methods)
    return DifferentiationReport(
        expression=expression,
        x0=float(x0),
        stepsize=float(stepsize),
        results=results,
        derivative=analytical.expression if analytical is not None else None,
    )
