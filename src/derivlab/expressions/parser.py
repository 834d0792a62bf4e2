"""Recursive-descent parser for single-variable expressions.

The grammar, from lowest to highest precedence::

    expression := term (("+" | "-") term)*
    term       := unary (("*" | "/") unary | unary)*
    unary      := ("+" | "-") unary | power
    power      := primary ("^" unary)?
    primary    := NUMBER | NAME | NAME "(" expression ")" | "(" expression ")"

A factor written right after another one without an operator (``2x``,
``3sin(x)``, ``(x+1)(x-1)``) is an implicit multiplication and binds like
``*``. Exponentiation is right associative and binds tighter than a leading
minus, so ``-x^2`` is ``-(x^2)`` and ``2^-1`` is ``2^(-1)``.

Examples:
--------
>>> from derivlab.expressions.parser import parse
>>> str(parse("x^2 + 2*x + 1"))
'x^2 + 2 * x + 1'
>>> parse("x^^2")
Traceback (most recent call last):
...
derivlab.expressions.parser.ParseError: Unexpected '^' at position 2 in 'x^^2'.
"""

from __future__ import annotations

import re
from typing import NamedTuple

from derivlab.expressions.functions import FUNCTION_ALIASES, resolve_function
from derivlab.expressions.nodes import (
    CONSTANTS,
    VARIABLE,
    BinaryOp,
    Call,
    Constant,
    Node,
    Number,
    UnaryOp,
    Variable,
)

__all__ = [
    "ParseError",
    "Token",
    "tokenize",
    "parse",
]


class ParseError(ValueError):
    """Raised when an expression is not a valid single-variable expression.

    Attributes:
        expression: The offending text.
        position: Character offset of the problem, or ``None`` if it
            concerns the whole expression.
    """

    def __init__(self, message: str, expression: str = "", position: int | None = None):
        super().__init__(message)
        self.expression = expression
        self.position = position


class Token(NamedTuple):
    kind: str
    text: str
    position: int


_TOKEN_RE = re.compile(
    r"""
    (?P<number>(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)
    |(?P<name>[A-Za-z_][A-Za-z_0-9]*)
    |(?P<op>[-+*/^])
    |(?P<lparen>\()
    |(?P<rparen>\))
    |(?P<space>\s+)
    """,
    re.VERBOSE,
)


def tokenize(expression: str) -> list[Token]:
    """Splits expression text into tokens, ending with an ``end`` token.

    Raises:
        ParseError: On a character that cannot start any token.
    """
    tokens: list[Token] = []
    pos = 0
    while pos < len(expression):
        match = _TOKEN_RE.match(expression, pos)
        if match is None:
            raise ParseError(
                f"Unexpected character {expression[pos]!r} at position {pos} in {expression!r}.",
                expression,
                pos,
            )
        kind = match.lastgroup
        if kind != "space":
            tokens.append(Token(kind, match.group(), pos))
        pos = match.end()
    tokens.append(Token("end", "", len(expression)))
    return tokens


class _Parser:
    def __init__(self, expression: str):
        self.expression = expression
        self.tokens = tokenize(expression)
        self.index = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.index]

    def advance(self) -> Token:
        token = self.tokens[self.index]
        self.index += 1
        return token

    def error(self, message: str, token: Token | None = None) -> ParseError:
        token = token or self.current
        return ParseError(
            f"{message} at position {token.position} in {self.expression!r}.",
            self.expression,
            token.position,
        )

    def unexpected(self) -> ParseError:
        token = self.current
        if token.kind == "end":
            return self.error("Unexpected end of expression")
        return self.error(f"Unexpected {token.text!r}")

    def parse(self) -> Node:
        if self.current.kind == "end":
            raise ParseError("Expression is empty.", self.expression, None)
        node = self.expression_rule()
        if self.current.kind != "end":
            raise self.unexpected()
        return node

    def expression_rule(self) -> Node:
        node = self.term()
        while self.current.kind == "op" and self.current.text in "+-":
            op = self.advance().text
            node = BinaryOp(op, node, self.term())
        return node

    def term(self) -> Node:
        node = self.unary()
        while True:
            token = self.current
            if token.kind == "op" and token.text in "*/":
                self.advance()
                node = BinaryOp(token.text, node, self.unary())
            elif token.kind in ("name", "lparen"):
                node = BinaryOp("*", node, self.unary())
            else:
                return node

    def unary(self) -> Node:
        token = self.current
        if token.kind == "op" and token.text in "+-":
            self.advance()
            operand = self.unary()
            if token.text == "+":
                return operand
            if isinstance(operand, Number):
                return Number(-operand.value)
            return UnaryOp("-", operand)
        return self.power()

    def power(self) -> Node:
        base = self.primary()
        if self.current.kind == "op" and self.current.text == "^":
            self.advance()
            return BinaryOp("^", base, self.unary())
        return base

    def primary(self) -> Node:
        token = self.current
        match token.kind:
            case "number":
                self.advance()
                return Number(float(token.text))
            case "lparen":
                self.advance()
                node = self.expression_rule()
                if self.current.kind != "rparen":
                    raise self.error("Missing closing parenthesis ')'")
                self.advance()
                return node
            case "name":
                return self.name()
        raise self.unexpected()

    def name(self) -> Node:
        token = self.advance()
        text = token.text
        if text == VARIABLE:
            return Variable(text)
        if text in CONSTANTS:
            return Constant(text)
        spec = resolve_function(text)
        if spec is None:
            if self.current.kind == "lparen":
                raise self.error(f"Unknown function {text!r}", token)
            raise self.error(f"Unknown symbol {text!r}", token)
        if self.current.kind != "lparen":
            raise self.error(f"Expected '(' after function {text!r}")
        self.advance()
        argument = self.expression_rule()
        if self.current.kind != "rparen":
            raise self.error(f"Missing closing parenthesis ')' after argument of {text!r}")
        self.advance()
        return Call(FUNCTION_ALIASES.get(text, text), argument)


def parse(expression: str) -> Node:
    """Parses expression text into a tree.

    Args:
        expression: Text over the single free variable ``x``.

    Returns:
        The root node of the expression tree.

    Raises:
        ParseError: If the text is empty, contains unknown symbols or
            functions, is not syntactically valid or is nested too deeply.
    """
    if not isinstance(expression, str):
        raise ParseError(f"Expression must be a string; got {type(expression).__name__}.")
    try:
        return _Parser(expression).parse()
    except RecursionError:
        raise ParseError("Expression is too deeply nested.", expression, None) from None
