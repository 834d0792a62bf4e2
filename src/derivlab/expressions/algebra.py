"""Node constructors with light constant folding.

These helpers build expression trees the way a person would write them
down: ``0 * u`` collapses to ``0``, ``u + 0`` to ``u``, ``u^1`` to ``u`` and
operations on two literals are evaluated right away. They keep derivative
trees readable; no further simplification is attempted.
"""

from __future__ import annotations

import math

from derivlab.expressions.nodes import BinaryOp, Call, Node, Number, UnaryOp

__all__ = ["num", "add", "sub", "mul", "div", "power", "neg", "call"]


def num(value: float) -> Number:
    """Wraps a float in a literal node."""
    return Number(float(value))


def _is(node: Node, value: float) -> bool:
    return isinstance(node, Number) and node.value == value


def _fold(op: str, a: float, b: float) -> Number | None:
    try:
        match op:
            case "+":
                value = a + b
            case "-":
                value = a - b
            case "*":
                value = a * b
            case "/":
                value = a / b
            case "^":
                value = a ** b
            case _:
                return None
    except (ZeroDivisionError, OverflowError):
        return None
    if isinstance(value, complex) or not math.isfinite(value):
        return None
    return num(value)


def _binary(op: str, left: Node, right: Node) -> Node:
    if isinstance(left, Number) and isinstance(right, Number):
        folded = _fold(op, left.value, right.value)
        if folded is not None:
            return folded
    return BinaryOp(op, left, right)


def neg(u: Node) -> Node:
    """Returns ``-u``."""
    if isinstance(u, Number):
        return num(-u.value)
    if isinstance(u, UnaryOp) and u.op == "-":
        return u.operand
    return UnaryOp("-", u)


def add(u: Node, v: Node) -> Node:
    """Returns ``u + v``."""
    if _is(u, 0):
        return v
    if _is(v, 0):
        return u
    if isinstance(v, UnaryOp) and v.op == "-":
        return sub(u, v.operand)
    return _binary("+", u, v)


def sub(u: Node, v: Node) -> Node:
    """Returns ``u - v``."""
    if _is(v, 0):
        return u
    if _is(u, 0):
        return neg(v)
    if isinstance(v, UnaryOp) and v.op == "-":
        return add(u, v.operand)
    return _binary("-", u, v)


def mul(u: Node, v: Node) -> Node:
    """Returns ``u * v``."""
    if _is(u, 0) or _is(v, 0):
        return num(0)
    if _is(u, 1):
        return v
    if _is(v, 1):
        return u
    if _is(u, -1):
        return neg(v)
    if _is(v, -1):
        return neg(u)
    # keep literal factors in front: 2 * x rather than x * 2
    if isinstance(v, Number) and not isinstance(u, Number):
        u, v = v, u
    return _binary("*", u, v)


def div(u: Node, v: Node) -> Node:
    """Returns ``u / v``. Division by a literal zero is left in the tree."""
    if _is(v, 1):
        return u
    if _is(u, 0) and not _is(v, 0):
        return num(0)
    return _binary("/", u, v)


def power(u: Node, v: Node) -> Node:
    """Returns ``u^v``."""
    if _is(v, 1):
        return u
    if _is(v, 0):
        return num(1)
    return _binary("^", u, v)


def call(name: str, u: Node) -> Call:
    """Returns ``name(u)``."""
    return Call(name, u)
