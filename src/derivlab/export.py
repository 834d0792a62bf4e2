"""JSON export of a comparison report.

The document layout is::

    {
      "function": "x^2 + 2*x + 1",
      "evaluationPoint": 1.0,
      "stepSize": 0.1,
      "results": [
        {"method": "Central Difference", "numerical": 4.0, "analytical": 4.0,
         "absoluteError": 0.0, "relativeError": 0.0,
         "formula": "(f(x+h) - f(x-h)) / (2h)", "order": "O(h²)"}
      ]
    }

Finite floats are written with ``repr`` precision and read back exactly.
JSON has no NaN or infinity; such values are written as ``null`` and read
back as ``None``.
"""

from __future__ import annotations

import json
import math
import os
from typing import Any

from derivlab.comparison import DifferentiationReport, DifferentiationResult

__all__ = [
    "DEFAULT_FILENAME",
    "report_to_dict",
    "report_from_dict",
    "dumps_report",
    "loads_report",
    "save_report",
    "load_report",
]

#: File name used when no path is given.
DEFAULT_FILENAME = "numerical_differentiation_results.json"

_RESULT_KEYS = {
    "method": "method",
    "numerical": "numerical",
    "analytical": "analytical",
    "absolute_error": "absoluteError",
    "relative_error": "relativeError",
    "formula": "formula",
    "order": "order",
}


def _json_float(value: float | None) -> float | None:
    if value is None or not math.isfinite(value):
        return None
    return float(value)


def report_to_dict(report: DifferentiationReport) -> dict[str, Any]:
    """Converts a report into the export document."""
    results = []
    for result in report.results:
        entry = {}
        for attr, key in _RESULT_KEYS.items():
            value = getattr(result, attr)
            entry[key] = value if isinstance(value, str) else _json_float(value)
        results.append(entry)
    return {
        "function": report.expression,
        "evaluationPoint": _json_float(report.x0),
        "stepSize": _json_float(report.stepsize),
        "results": results,
    }


def report_from_dict(data: dict[str, Any]) -> DifferentiationReport:
    """Rebuilds a report from an export document.

    Raises:
        ValueError: If a required key is missing.
    """
    try:
        results = [
            DifferentiationResult(
                method=entry["method"],
                numerical=_read_float(entry["numerical"]),
                analytical=entry.get("analytical"),
                absolute_error=entry.get("absoluteError"),
                relative_error=entry.get("relativeError"),
                formula=entry.get("formula", ""),
                order=entry.get("order", ""),
            )
            for entry in data["results"]
        ]
        return DifferentiationReport(
            expression=data["function"],
            x0=data["evaluationPoint"],
            stepsize=data["stepSize"],
            results=results,
        )
    except KeyError as exc:
        raise ValueError(f"Export document is missing key {exc.args[0]!r}.") from None


def _read_float(value: float | None) -> float:
    # the estimate is always a number; null stands for NaN
    return float("nan") if value is None else float(value)


def dumps_report(report: DifferentiationReport, indent: int | None = 2) -> str:
    """Serializes a report to JSON text."""
    return json.dumps(report_to_dict(report), indent=indent, ensure_ascii=False, allow_nan=False)


def loads_report(text: str) -> DifferentiationReport:
    """Parses JSON text written by :func:`dumps_report`."""
    return report_from_dict(json.loads(text))


def save_report(report: DifferentiationReport, path: str | os.PathLike | None = None) -> str:
    """Writes a report to ``path`` (default :data:`DEFAULT_FILENAME`).

    Returns:
        The path written to.
    """
    path = os.fspath(path) if path is not None else DEFAULT_FILENAME
    with open(path, "w", encoding="utf-8") as fh:
        fh.write(dumps_report(report))
    return path


def load_report(path: str | os.PathLike) -> DifferentiationReport:
    """Reads a report written by :func:`save_report`."""
    with open(path, encoding="utf-8") as fh:
        return loads_report(fh.read())
