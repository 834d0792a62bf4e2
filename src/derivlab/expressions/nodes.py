"""Expression tree nodes.

An expression is a tree of immutable nodes. Leaves are numeric literals,
named constants and the free variable; inner nodes are unary and binary
operators and single-argument function calls.

``str(node)`` renders a fully parenthesised-where-needed expression that
parses back into an equivalent tree:

>>> from derivlab.expressions.nodes import BinaryOp, Number, Variable
>>> str(BinaryOp("^", Variable("x"), Number(2.0)))
'x^2'
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

__all__ = [
    "Number",
    "Constant",
    "Variable",
    "UnaryOp",
    "BinaryOp",
    "Call",
    "Node",
    "VARIABLE",
    "BINARY_OPERATORS",
    "CONSTANTS",
    "depends_on_variable",
]

#: Name of the single free variable.
VARIABLE = "x"

#: Binary operators and their binding strength (higher binds tighter).
BINARY_OPERATORS = {"+": 1, "-": 1, "*": 2, "/": 2, "^": 4}

#: Named constants recognised by the parser.
CONSTANTS = {
    "pi": 3.141592653589793,
    "e": 2.718281828459045,
}

_UNARY_PRECEDENCE = 3
_ATOM_PRECEDENCE = 5


@dataclass(frozen=True)
class Number:
    """Numeric literal."""

    value: float

    def __str__(self) -> str:
        value = float(self.value)
        if value.is_integer() and abs(value) < 1e16:
            return str(int(value))
        return repr(value)


@dataclass(frozen=True)
class Constant:
    """Named mathematical constant such as ``pi``."""

    name: str

    @property
    def value(self) -> float:
        return CONSTANTS[self.name]

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Variable:
    """The free variable."""

    name: str = VARIABLE

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class UnaryOp:
    """Prefix operator, ``-`` or ``+``."""

    op: str
    operand: Node

    def __str__(self) -> str:
        return f"{self.op}{_wrap(self.operand, _UNARY_PRECEDENCE)}"


@dataclass(frozen=True)
class BinaryOp:
    """Infix operator applied to two sub-expressions."""

    op: str
    left: Node
    right: Node

    def __str__(self) -> str:
        prec = BINARY_OPERATORS[self.op]
        if self.op == "^":
            # right associative: parenthesise a power on the left
            left = _wrap(self.left, prec + 1)
            right = _wrap(self.right, _UNARY_PRECEDENCE)
            return f"{left}^{right}"
        left = _wrap(self.left, prec)
        # a - (b - c) and a / (b * c) need their brackets
        right = _wrap(self.right, prec + 1)
        return f"{left} {self.op} {right}"


@dataclass(frozen=True)
class Call:
    """Elementary function applied to one argument."""

    name: str
    argument: Node

    def __str__(self) -> str:
        return f"{self.name}({self.argument})"


Node: TypeAlias = Number | Constant | Variable | UnaryOp | BinaryOp | Call


def _precedence(node: Node) -> int:
    if isinstance(node, BinaryOp):
        return BINARY_OPERATORS[node.op]
    if isinstance(node, UnaryOp):
        return _UNARY_PRECEDENCE
    if isinstance(node, Number) and node.value < 0:
        return _UNARY_PRECEDENCE
    return _ATOM_PRECEDENCE


def _wrap(node: Node, minimum: int) -> str:
    text = str(node)
    return text if _precedence(node) >= minimum else f"({text})"


def depends_on_variable(node: Node) -> bool:
    """Returns True if the free variable occurs anywhere in ``node``."""
    match node:
        case Variable():
            return True
        case Number() | Constant():
            return False
        case UnaryOp(operand=operand):
            return depends_on_variable(operand)
        case BinaryOp(left=left, right=right):
            return depends_on_variable(left) or depends_on_variable(right)
        case Call(argument=argument):
            return depends_on_variable(argument)
    raise TypeError(f"Unknown expression node {node!r}.")
