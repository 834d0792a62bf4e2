"""Validation utilities for derivlab."""

from __future__ import annotations

import math

__all__ = [
    "validate_point",
    "validate_stepsize",
    "validate_positive_int",
]


def validate_point(x0: float) -> float:
    """Checks that the evaluation point is a finite real number.

    Args:
        x0: The point at which the derivative is evaluated.

    Returns:
        ``x0`` converted to a Python float.

    Raises:
        ValueError: If ``x0`` is NaN or infinite.
    """
    x0 = float(x0)
    if not math.isfinite(x0):
        raise ValueError(f"x0 must be finite; got {x0}.")
    return x0


def validate_stepsize(stepsize: float) -> float:
    """Checks that the step size is finite and strictly positive.

    A zero step turns every difference quotient into a division by zero,
    so it is rejected here rather than inside the estimators.

    Args:
        stepsize: Step size ``h`` of the difference quotient.

    Returns:
        ``stepsize`` converted to a Python float.

    Raises:
        ValueError: If ``stepsize`` is not finite or not positive.
    """
    stepsize = float(stepsize)
    if not math.isfinite(stepsize):
        raise ValueError(f"stepsize must be finite; got {stepsize}.")
    if stepsize <= 0:
        raise ValueError("stepsize must be positive.")
    return stepsize


def validate_positive_int(value: int, name: str, *, minimum: int = 1) -> int:
    """Checks an integer setting against a lower bound."""
    if isinstance(value, bool) or int(value) != value:
        raise ValueError(f"{name} must be an integer; got {value!r}.")
    if value < minimum:
        raise ValueError(f"{name} must be at least {minimum}; got {value}.")
    return int(value)
