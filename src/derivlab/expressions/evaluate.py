"""Compiles expression trees into callables.

Evaluation is done with NumPy on ``float64`` values so that the same
compiled function works for a single point and for an array of points.
Evaluation never raises: division by zero, domain errors and overflow all
produce NaN, which then propagates through every later operation.

Examples:
--------
>>> from derivlab.expressions.evaluate import compile_expression
>>> f = compile_expression("x^2 + 2*x + 1")
>>> f(1.0)
4.0
>>> import math
>>> math.isnan(compile_expression("1/x")(0.0))
True
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from derivlab.expressions.functions import FUNCTIONS
from derivlab.expressions.nodes import (
    BinaryOp,
    Call,
    Constant,
    Node,
    Number,
    UnaryOp,
    Variable,
)
from derivlab.expressions.parser import parse
from derivlab.logger import derivlab_logger
from derivlab.utils.numerics import to_nan_if_nonfinite

__all__ = [
    "CompiledFunction",
    "evaluate_tree",
    "compile_tree",
    "compile_expression",
]


def _divide(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return np.where(b == 0, np.nan, np.divide(a, b))


_BINARY = {
    "+": np.add,
    "-": np.subtract,
    "*": np.multiply,
    "/": _divide,
    "^": np.power,
}


def evaluate_tree(node: Node, x: np.ndarray) -> np.ndarray:
    """Evaluates a tree with the free variable bound to ``x``.

    Non-finite intermediate values are kept as they are; callers are
    expected to run inside ``np.errstate(all="ignore")`` and to clean up the
    final value.

    Args:
        node: Root of the expression tree.
        x: Value(s) of the free variable as a float array.

    Returns:
        An array broadcastable to the shape of ``x``.
    """
    match node:
        case Number(value=value):
            return np.float64(value)
        case Constant():
            return np.float64(node.value)
        case Variable():
            return x
        case UnaryOp(op="-", operand=operand):
            return np.negative(evaluate_tree(operand, x))
        case UnaryOp(operand=operand):
            return evaluate_tree(operand, x)
        case BinaryOp(op=op, left=left, right=right):
            return _BINARY[op](evaluate_tree(left, x), evaluate_tree(right, x))
        case Call(name=name, argument=argument):
            return FUNCTIONS[name].evaluate(evaluate_tree(argument, x))
    raise TypeError(f"Unknown expression node {node!r}.")


class CompiledFunction:
    """A callable real function of one variable built from an expression.

    Calling it with a float returns a float; calling it with an array
    returns a float array of the same shape. Points where the expression
    cannot be evaluated to a finite real number give NaN, and so does a
    tree too deep to walk.

    Attributes:
        expression: The source text (or the rendered tree when compiled
            from a tree directly).
        tree: The expression tree being evaluated.
    """

    __slots__ = ("_expression", "_tree")

    def __init__(self, tree: Node, expression: str | None = None):
        self._tree = tree
        self._expression = expression if expression is not None else str(tree)

    @property
    def expression(self) -> str:
        return self._expression

    @property
    def tree(self) -> Node:
        return self._tree

    def __call__(self, x: ArrayLike) -> float | NDArray[np.float64]:
        x_arr = np.asarray(x, dtype=float)
        with np.errstate(all="ignore"):
            try:
                value = evaluate_tree(self._tree, x_arr)
            except RecursionError:
                derivlab_logger.debug(
                    "Expression %r is too deeply nested to evaluate.", self._expression
                )
                value = np.nan
            value = np.broadcast_to(np.asarray(value, dtype=float), x_arr.shape)
        return to_nan_if_nonfinite(value)

    def __repr__(self) -> str:
        return f"CompiledFunction({self._expression!r})"


def compile_tree(tree: Node, expression: str | None = None) -> CompiledFunction:
    """Wraps an already parsed tree into a :class:`CompiledFunction`."""
    return CompiledFunction(tree, expression)


def compile_expression(expression: str) -> CompiledFunction:
    """Parses expression text and returns the evaluable function.

    Args:
        expression: Text over the single free variable ``x``.

    Returns:
        The compiled function.

    Raises:
        ParseError: If the text is not a valid single-variable expression.
    """
    return CompiledFunction(parse(expression), expression)
