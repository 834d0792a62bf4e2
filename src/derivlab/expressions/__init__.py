"""Expression parsing, evaluation and symbolic differentiation."""

from derivlab.expressions.evaluate import (
    CompiledFunction,
    compile_expression,
    compile_tree,
)
from derivlab.expressions.parser import ParseError, parse
from derivlab.expressions.symbolic import (
    DifferentiationError,
    derivative_text,
    derivative_tree,
    differentiate,
)

__all__ = [
    "CompiledFunction",
    "DifferentiationError",
    "ParseError",
    "compile_expression",
    "compile_tree",
    "derivative_text",
    "derivative_tree",
    "differentiate",
    "parse",
]
