"""Provides the DerivativeLab front end.

The lab holds the current input: expression, evaluation point, step size
and method selection. Any of them can be changed at any time; calling
:meth:`DerivativeLab.recompute` rebuilds every derived result from scratch
and keeps it as the last snapshot.

Examples:
    Basic usage:

        >>> from derivlab.derivative_lab import DerivativeLab
        >>> lab = DerivativeLab("sin(x)", x0=0.0, stepsize=1e-3)
        >>> snap = lab.recompute()
        >>> round(snap.report.results[0].numerical, 8)
        0.99999983

    A malformed expression clears previous results:

        >>> lab.expression = "x^^2"
        >>> snap = lab.recompute()
        >>> snap.report.results, snap.series
        ([], [])
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from derivlab.comparison import DifferentiationReport, compare_methods
from derivlab.config import DEFAULT_EXPRESSION, DEFAULT_STEPSIZE, DEFAULT_X0, LabConfig
from derivlab.convergence import ConvergenceSeries, convergence_step_sizes, sweep_convergence
from derivlab.expressions.evaluate import compile_expression
from derivlab.expressions.symbolic import differentiate
from derivlab.export import save_report
from derivlab.sampling import PlotData, build_plot_data

__all__ = [
    "LabSnapshot",
    "DerivativeLab",
]


@dataclass(frozen=True)
class LabSnapshot:
    """Results derived from one input of the lab.

    Attributes:
        report: Numerical estimates, reference values and errors.
        series: Convergence series, empty without a symbolic derivative
            or on a parse error.
        plot: Curve, tangent and stencil data, ``None`` on a parse error.
    """

    report: DifferentiationReport
    series: list[ConvergenceSeries] = field(default_factory=list)
    plot: PlotData | None = None

    @property
    def error(self) -> str | None:
        return self.report.error


class DerivativeLab:
    """Interactive comparison of finite-difference methods.

    Attributes:
        expression: Text of the function of ``x``.
        x0: The point at which the derivative is evaluated.
        stepsize: Step size ``h`` for the comparison.
        methods: Names of the selected methods, in display order.
        config: Sweep and plotting settings.
        last_snapshot: Result of the latest :meth:`recompute`, or ``None``.
    """

    def __init__(
        self,
        expression: str = DEFAULT_EXPRESSION,
        x0: float = DEFAULT_X0,
        stepsize: float = DEFAULT_STEPSIZE,
        methods: Iterable[str] | None = None,
        config: LabConfig | None = None,
    ):
        """Initializes the lab with an input tuple.

        Args:
            expression: Text of the function of ``x``.
            x0: Point at which to evaluate the derivative.
            stepsize: Step size of the difference quotients.
            methods: Selected method names; defaults to ``config.methods``.
            config: Settings; defaults to :class:`LabConfig()`.
        """
        self.config = config or LabConfig()
        self.expression = expression
        self.x0 = x0
        self.stepsize = stepsize
        self.methods = list(methods) if methods is not None else list(self.config.methods)
        self.last_snapshot: LabSnapshot | None = None

    def select(self, name: str, selected: bool = True) -> None:
        """Adds a method to, or removes it from, the selection."""
        if selected and name not in self.methods:
            self.methods.append(name)
        elif not selected:
            self.methods = [m for m in self.methods if m != name]

    def recompute(self) -> LabSnapshot:
        """Rebuilds the report, the convergence series and the plot data.

        Returns:
            The new snapshot, also stored as :attr:`last_snapshot`.

        Raises:
            ValueError: If ``x0`` or ``stepsize`` is invalid. The previous
                snapshot is discarded in that case too.
        """
        self.last_snapshot = None
        report = compare_methods(self.expression, self.x0, self.stepsize, self.methods)
        if not report.ok:
            self.last_snapshot = LabSnapshot(report=report)
            return self.last_snapshot

        cfg = self.config
        function = compile_expression(self.expression)
        analytical = differentiate(self.expression)
        step_sizes = convergence_step_sizes(
            cfg.sweep_num_steps, cfg.sweep_start_exponent, cfg.sweep_exponent_step
        )
        series = sweep_convergence(function, analytical, self.x0, self.methods, step_sizes)
        plot = build_plot_data(
            function,
            report.results,
            self.x0,
            self.stepsize,
            num_points=cfg.plot_num_points,
            spacing=cfg.plot_spacing,
            tangent_half_width=cfg.tangent_half_width,
        )
        self.last_snapshot = LabSnapshot(report=report, series=series, plot=plot)
        return self.last_snapshot

    def export(self, path=None) -> str:
        """Writes the latest report as JSON.

        Recomputes first if nothing has been computed yet.

        Args:
            path: Destination file; defaults to
                :data:`derivlab.export.DEFAULT_FILENAME`.

        Returns:
            The path written to.
        """
        snapshot = self.last_snapshot or self.recompute()
        return save_report(snapshot.report, path)
