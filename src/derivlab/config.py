"""Configuration for :class:`derivlab.derivative_lab.DerivativeLab`.

The config controls which difference methods are compared by default, how
the convergence sweep lays out its step sizes and how much of the curve is
sampled for plotting.
"""

from __future__ import annotations

import math

from derivlab.utils.validate import validate_positive_int

#: Expression shown when nothing else is given.
DEFAULT_EXPRESSION = "x^2 + 2*x + 1"
#: Default evaluation point.
DEFAULT_X0 = 1.0
#: Default step size.
DEFAULT_STEPSIZE = 0.1


class LabConfig:
    """Configuration for the comparison, the convergence sweep and plotting."""

    def __init__(
        self,
        methods=("Central Difference",),
        sweep_num_steps: int = 20,
        sweep_start_exponent: float = -4.0,
        sweep_exponent_step: float = 0.2,
        plot_num_points: int = 200,
        plot_spacing: float = 0.1,
        tangent_half_width: float = 1.0,
    ):
        """Initialize configuration.

        Args:
            methods:
                Names of the difference methods selected when the lab is
                created without an explicit selection. Unknown names are
                skipped at computation time.

            sweep_num_steps:
                Number of step sizes in the convergence sweep.

            sweep_start_exponent:
                Base-10 exponent of the smallest step size. With the
                defaults the sweep runs from ``1e-4`` to ``10**-0.2``.

            sweep_exponent_step:
                Increment of the base-10 exponent between neighbouring
                step sizes; must be positive.

            plot_num_points:
                Number of curve samples around the evaluation point.

            plot_spacing:
                Distance between neighbouring curve samples.

            tangent_half_width:
                Half the horizontal extent of each tangent segment.

        Raises:
            ValueError: If a count is below its minimum or a width or
                spacing is not a positive finite number.
        """
        self.methods = tuple(methods)
        self.sweep_num_steps = validate_positive_int(sweep_num_steps, "sweep_num_steps", minimum=2)
        self.sweep_start_exponent = float(sweep_start_exponent)
        self.sweep_exponent_step = _positive(sweep_exponent_step, "sweep_exponent_step")
        self.plot_num_points = validate_positive_int(plot_num_points, "plot_num_points", minimum=2)
        self.plot_spacing = _positive(plot_spacing, "plot_spacing")
        self.tangent_half_width = _positive(tangent_half_width, "tangent_half_width")

        if not math.isfinite(self.sweep_start_exponent):
            raise ValueError("sweep_start_exponent must be finite.")

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in vars(self).items())
        return f"LabConfig({fields})"


def _positive(value: float, name: str) -> float:
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"{name} must be a positive finite number; got {value}.")
    return value
