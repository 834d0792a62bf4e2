"""Utility functions for derivlab package."""

from .numerics import (
    absolute_error,
    loglog_slope,
    relative_error_percent,
    to_nan_if_nonfinite,
)
from .validate import validate_point, validate_positive_int, validate_stepsize

__all__ = [
    "absolute_error",
    "relative_error_percent",
    "to_nan_if_nonfinite",
    "loglog_slope",
    "validate_point",
    "validate_stepsize",
    "validate_positive_int",
]
