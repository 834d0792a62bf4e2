"""Elementary functions understood by the expression parser.

Each entry couples the NumPy implementation used for evaluation with the
outer derivative ``f'(u)`` used by the chain rule. Functions without a
derivative rule can be evaluated but not differentiated symbolically.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import numpy as np

from derivlab.expressions.algebra import add, call, div, mul, neg, num, power, sub
from derivlab.expressions.nodes import Node

__all__ = [
    "FunctionSpec",
    "FUNCTIONS",
    "FUNCTION_ALIASES",
    "resolve_function",
]


@dataclass(frozen=True)
class FunctionSpec:
    """Evaluation and differentiation rule for one elementary function.

    Attributes:
        name: Canonical name used in expression text.
        evaluate: Elementwise NumPy implementation.
        derivative: Builds ``f'(u)`` for an argument tree ``u``, or ``None``
            if the function has no symbolic derivative.
    """

    name: str
    evaluate: Callable[[np.ndarray], np.ndarray]
    derivative: Callable[[Node], Node] | None = None


def _round_half_away(x):
    return np.sign(x) * np.floor(np.abs(x) + 0.5)


def _one_minus_square(u: Node) -> Node:
    return sub(num(1), power(u, num(2)))


_SPECS = [
    FunctionSpec("sin", np.sin, lambda u: call("cos", u)),
    FunctionSpec("cos", np.cos, lambda u: neg(call("sin", u))),
    FunctionSpec("tan", np.tan, lambda u: power(call("sec", u), num(2))),
    FunctionSpec("sec", lambda x: 1.0 / np.cos(x), lambda u: mul(call("sec", u), call("tan", u))),
    FunctionSpec("csc", lambda x: 1.0 / np.sin(x), lambda u: neg(mul(call("csc", u), call("cot", u)))),
    FunctionSpec("cot", lambda x: np.cos(x) / np.sin(x), lambda u: neg(power(call("csc", u), num(2)))),
    FunctionSpec("asin", np.arcsin, lambda u: div(num(1), call("sqrt", _one_minus_square(u)))),
    FunctionSpec("acos", np.arccos, lambda u: neg(div(num(1), call("sqrt", _one_minus_square(u))))),
    FunctionSpec("atan", np.arctan, lambda u: div(num(1), add(num(1), power(u, num(2))))),
    FunctionSpec("sinh", np.sinh, lambda u: call("cosh", u)),
    FunctionSpec("cosh", np.cosh, lambda u: call("sinh", u)),
    FunctionSpec("tanh", np.tanh, lambda u: sub(num(1), power(call("tanh", u), num(2)))),
    FunctionSpec("exp", np.exp, lambda u: call("exp", u)),
    FunctionSpec("log", np.log, lambda u: div(num(1), u)),
    FunctionSpec("log10", np.log10, lambda u: div(num(1), mul(u, call("log", num(10))))),
    FunctionSpec("log2", np.log2, lambda u: div(num(1), mul(u, call("log", num(2))))),
    FunctionSpec("sqrt", np.sqrt, lambda u: div(num(1), mul(num(2), call("sqrt", u)))),
    FunctionSpec("cbrt", np.cbrt, lambda u: div(num(1), mul(num(3), power(call("cbrt", u), num(2))))),
    FunctionSpec("abs", np.abs, lambda u: call("sign", u)),
    # evaluable only
    FunctionSpec("sign", np.sign),
    FunctionSpec("floor", np.floor),
    FunctionSpec("ceil", np.ceil),
    FunctionSpec("round", _round_half_away),
]

#: Registry of supported functions keyed by canonical name.
FUNCTIONS: dict[str, FunctionSpec] = {spec.name: spec for spec in _SPECS}

#: Alternative spellings accepted in expression text.
FUNCTION_ALIASES = {
    "ln": "log",
    "arcsin": "asin",
    "arccos": "acos",
    "arctan": "atan",
}


def resolve_function(name: str) -> FunctionSpec | None:
    """Looks up a function by name or alias; returns ``None`` if unknown."""
    return FUNCTIONS.get(FUNCTION_ALIASES.get(name, name))
