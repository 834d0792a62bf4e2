"""Exact first derivatives of expression trees.

The derivative is computed structurally: every node kind has its rule
(sum, product, quotient, power and the chain rule through the function
table) and the result is a new tree of the same node types, so it can be
rendered, compiled and evaluated like any parsed expression.

Examples:
--------
>>> from derivlab.expressions.symbolic import derivative_text, differentiate
>>> derivative_text("x^2 + 2*x + 1")
'2 * x + 2'
>>> differentiate("sin(x)")(0.0)
1.0
>>> differentiate("floor(x)") is None
True
"""

from __future__ import annotations

from derivlab.expressions.algebra import add, call, div, mul, neg, num, power, sub
from derivlab.expressions.evaluate import CompiledFunction
from derivlab.expressions.functions import FUNCTIONS
from derivlab.expressions.nodes import (
    BinaryOp,
    Call,
    Constant,
    Node,
    Number,
    UnaryOp,
    Variable,
    depends_on_variable,
)
from derivlab.expressions.parser import ParseError, parse
from derivlab.logger import derivlab_logger

__all__ = [
    "DifferentiationError",
    "derivative_tree",
    "derivative_text",
    "differentiate",
]


class DifferentiationError(ValueError):
    """Raised when an expression has no symbolic derivative."""


def derivative_tree(node: Node) -> Node:
    """Returns the tree of ``d node / dx``.

    Args:
        node: Root of the expression tree.

    Returns:
        Root of the derivative tree.

    Raises:
        DifferentiationError: If a function without a derivative rule
            (such as ``floor``) depends on ``x``.
    """
    match node:
        case Number() | Constant():
            return num(0)
        case Variable():
            return num(1)
        case UnaryOp(op="-", operand=u):
            return neg(derivative_tree(u))
        case UnaryOp(operand=u):
            return derivative_tree(u)
        case BinaryOp(op="+", left=u, right=v):
            return add(derivative_tree(u), derivative_tree(v))
        case BinaryOp(op="-", left=u, right=v):
            return sub(derivative_tree(u), derivative_tree(v))
        case BinaryOp(op="*", left=u, right=v):
            return add(mul(derivative_tree(u), v), mul(u, derivative_tree(v)))
        case BinaryOp(op="/", left=u, right=v):
            if not depends_on_variable(v):
                return div(derivative_tree(u), v)
            numerator = sub(mul(derivative_tree(u), v), mul(u, derivative_tree(v)))
            return div(numerator, power(v, num(2)))
        case BinaryOp(op="^", left=u, right=v):
            return _power_rule(u, v)
        case Call(name=name, argument=u):
            return _chain_rule(name, u)
    raise DifferentiationError(f"Cannot differentiate node {node!r}.")


def _power_rule(u: Node, v: Node) -> Node:
    u_varies = depends_on_variable(u)
    v_varies = depends_on_variable(v)
    if not v_varies:
        if not u_varies:
            return num(0)
        # d(u^n) = n u^(n-1) u'
        exponent = num(v.value - 1) if isinstance(v, Number) else sub(v, num(1))
        return mul(mul(v, power(u, exponent)), derivative_tree(u))
    if not u_varies:
        # d(a^v) = a^v ln(a) v'
        return mul(mul(power(u, v), call("log", u)), derivative_tree(v))
    # d(u^v) = u^v (v' ln(u) + v u' / u)
    inner = add(
        mul(derivative_tree(v), call("log", u)),
        div(mul(v, derivative_tree(u)), u),
    )
    return mul(power(u, v), inner)


def _chain_rule(name: str, u: Node) -> Node:
    if not depends_on_variable(u):
        return num(0)
    rule = FUNCTIONS[name].derivative
    if rule is None:
        raise DifferentiationError(f"Function {name!r} has no symbolic derivative.")
    return mul(rule(u), derivative_tree(u))


def derivative_text(expression: str) -> str:
    """Renders the derivative of expression text.

    Raises:
        ParseError: If the text does not parse.
        DifferentiationError: If there is no symbolic derivative.
    """
    return str(derivative_tree(parse(expression)))


def differentiate(expression: str) -> CompiledFunction | None:
    """Compiles the exact first derivative of an expression.

    An expression that cannot be differentiated symbolically is not an
    error: ``None`` is returned and callers treat the analytical reference
    as unavailable.

    Args:
        expression: Text over the single free variable ``x``.

    Returns:
        The compiled derivative, or ``None`` if the text does not parse,
        contains a construct without a derivative rule or is nested too
        deeply to differentiate.
    """
    try:
        return CompiledFunction(derivative_tree(parse(expression)))
    except (ParseError, DifferentiationError, RecursionError) as exc:
        derivlab_logger.info(
            "No analytical derivative for %r: %s", expression, exc
        )
        return None
