"""Numerical utilities."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

__all__ = [
    "absolute_error",
    "relative_error_percent",
    "to_nan_if_nonfinite",
    "loglog_slope",
]


def absolute_error(numerical: float, analytical: float | None) -> float | None:
    """Computes ``|numerical - analytical|``.

    Args:
        numerical: The finite-difference estimate.
        analytical: The exact derivative, or ``None`` if unavailable.

    Returns:
        The absolute error, or ``None`` when there is no reference value.
        NaN inputs give NaN.
    """
    if analytical is None:
        return None
    return abs(numerical - analytical)


def relative_error_percent(numerical: float, analytical: float | None) -> float | None:
    """Computes the relative error in percent.

    The relative error is ``|numerical - analytical| / |analytical| * 100``.
    It is undefined when the analytical value is exactly zero, in which case
    ``None`` is returned rather than zero or infinity. Very small nonzero
    analytical values are not guarded against and give very large errors.

    Args:
        numerical: The finite-difference estimate.
        analytical: The exact derivative, or ``None`` if unavailable.

    Returns:
        The relative error in percent, or ``None``.
    """
    if analytical is None or analytical == 0:
        return None
    return abs((numerical - analytical) / analytical) * 100


def to_nan_if_nonfinite(value: ArrayLike) -> float | NDArray[np.float64]:
    """Replaces infinities by NaN.

    Scalars come back as Python floats, arrays as float arrays.
    """
    arr = np.asarray(value, dtype=float)
    cleaned = np.where(np.isfinite(arr), arr, np.nan)
    if cleaned.ndim == 0:
        return float(cleaned)
    return cleaned


def loglog_slope(x: ArrayLike, y: ArrayLike) -> float:
    """Least-squares slope of ``log10(y)`` against ``log10(x)``.

    Points where either coordinate is non-finite or not strictly positive
    are dropped.

    Args:
        x: Abscissae, e.g. step sizes.
        y: Ordinates, e.g. absolute errors.

    Returns:
        The fitted slope, or NaN if fewer than two usable points remain.
    """
    x_arr = np.asarray(x, dtype=float)
    y_arr = np.asarray(y, dtype=float)
    mask = np.isfinite(x_arr) & np.isfinite(y_arr) & (x_arr > 0) & (y_arr > 0)
    if np.count_nonzero(mask) < 2:
        return float("nan")
    slope, _ = np.polyfit(np.log10(x_arr[mask]), np.log10(y_arr[mask]), 1)
    return float(slope)
