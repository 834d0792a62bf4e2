"""Provides all derivlab methods."""

from importlib.metadata import PackageNotFoundError, version

from derivlab.comparison import (
    DifferentiationReport,
    DifferentiationResult,
    compare_methods,
    evaluate_methods,
)
from derivlab.config import LabConfig
from derivlab.convergence import (
    ConvergenceSeries,
    convergence_step_sizes,
    sweep_convergence,
    sweep_expression,
)
from derivlab.derivative_lab import DerivativeLab, LabSnapshot
from derivlab.export import dumps_report, load_report, loads_report, save_report
from derivlab.expressions import (
    CompiledFunction,
    DifferentiationError,
    ParseError,
    compile_expression,
    differentiate,
)
from derivlab.finite import DifferenceMethod, available_methods, register_method
from derivlab.sampling import PlotData, build_plot_data

try:
    __version__ = version("derivlab")
except PackageNotFoundError:
    pass

__all__ = [
    "CompiledFunction",
    "ConvergenceSeries",
    "DerivativeLab",
    "DifferenceMethod",
    "DifferentiationError",
    "DifferentiationReport",
    "DifferentiationResult",
    "LabConfig",
    "LabSnapshot",
    "ParseError",
    "PlotData",
    "available_methods",
    "build_plot_data",
    "compare_methods",
    "compile_expression",
    "convergence_step_sizes",
    "differentiate",
    "dumps_report",
    "evaluate_methods",
    "load_report",
    "loads_report",
    "register_method",
    "save_report",
    "sweep_convergence",
    "sweep_expression",
]
