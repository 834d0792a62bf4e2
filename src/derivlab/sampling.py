"""Plot data for a function, its tangents and the sampled stencil points.

Nothing here draws anything; the functions return arrays that a plotting
front end can hand to its library of choice.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable

import numpy as np

from derivlab.comparison import DifferentiationResult
from derivlab.finite.methods import DifferenceMethod, get_method
from derivlab.utils.types import FloatArray
from derivlab.utils.validate import validate_point, validate_positive_int, validate_stepsize

__all__ = [
    "Curve",
    "PlotData",
    "sample_curve",
    "tangent_line",
    "stencil_points",
    "build_plot_data",
]


@dataclass(frozen=True)
class Curve:
    """A labelled set of points."""

    label: str
    x: FloatArray
    y: FloatArray


@dataclass(frozen=True)
class PlotData:
    """Everything needed to draw ``f``, its tangents and the stencils.

    Attributes:
        curve: Samples of ``f`` around the evaluation point.
        point: The evaluation point ``(x0, f(x0))`` as a one-point curve.
        tangents: One tangent segment per result, slope = numerical estimate.
        stencils: The points each method sampled, one curve per method.
    """

    curve: Curve
    point: Curve
    tangents: list[Curve] = field(default_factory=list)
    stencils: list[Curve] = field(default_factory=list)


def sample_curve(
    function: Callable,
    x0: float,
    num_points: int = 200,
    spacing: float = 0.1,
) -> Curve:
    """Samples ``function`` on an evenly spaced grid around ``x0``.

    The grid is ``x_i = (i - num_points // 2) * spacing + x0`` for
    ``i = 0 .. num_points - 1``. ``function`` is called once on the whole
    grid, so it must accept arrays. Points where it cannot be evaluated
    are NaN, which plotting libraries draw as gaps.
    """
    x0 = validate_point(x0)
    num_points = validate_positive_int(num_points, "num_points", minimum=2)
    x = (np.arange(num_points) - num_points // 2) * spacing + x0
    y = np.asarray(function(x), dtype=float)
    return Curve(label="f(x)", x=x, y=y)


def tangent_line(
    function: Callable,
    x0: float,
    slope: float,
    half_width: float = 1.0,
    label: str = "tangent",
) -> Curve:
    """Returns the segment ``y = f(x0) + slope (x - x0)`` over ``x0 ± half_width``."""
    y0 = function(x0)
    x = np.array([x0 - half_width, x0 + half_width])
    return Curve(label=label, x=x, y=y0 + slope * (x - x0))


def stencil_points(
    method: DifferenceMethod,
    function: Callable,
    x0: float,
    stepsize: float,
) -> Curve:
    """Returns the points ``(x0 + k h, f(x0 + k h))`` a method sampled."""
    x = np.array([x0 + k * stepsize for k in method.offsets], dtype=float)
    y = np.asarray(function(x), dtype=float)
    return Curve(label=f"{method.name} Points", x=x, y=y)


def build_plot_data(
    function: Callable,
    results: Iterable[DifferentiationResult],
    x0: float,
    stepsize: float,
    *,
    num_points: int = 200,
    spacing: float = 0.1,
    tangent_half_width: float = 1.0,
) -> PlotData:
    """Collects curve samples, tangents and stencil points for one input.

    Args:
        function: The function being differentiated.
        results: Results of :func:`derivlab.comparison.evaluate_methods`;
            each gives one tangent and one set of stencil points.
        x0: The evaluation point.
        stepsize: The step size used for the results.
        num_points: Number of curve samples.
        spacing: Distance between curve samples.
        tangent_half_width: Half the width of each tangent segment.

    Returns:
        The plot data.
    """
    x0 = validate_point(x0)
    stepsize = validate_stepsize(stepsize)
    tangents = []
    stencils = []
    for result in results:
        tangents.append(
            tangent_line(
                function,
                x0,
                result.numerical,
                half_width=tangent_half_width,
                label=f"{result.method} Tangent",
            )
        )
        method = get_method(result.method)
        if method is not None:
            stencils.append(stencil_points(method, function, x0, stepsize))

    return PlotData(
        curve=sample_curve(function, x0, num_points=num_points, spacing=spacing),
        point=Curve(label="Evaluation Point", x=np.array([x0]), y=np.array([function(x0)])),
        tangents=tangents,
        stencils=stencils,
    )
