"""Finite-difference schemes for first derivatives."""

from derivlab.finite.methods import (
    BACKWARD,
    CENTRAL,
    FORWARD,
    DifferenceMethod,
    available_methods,
    get_method,
    register_method,
    resolve_methods,
)

__all__ = [
    "DifferenceMethod",
    "FORWARD",
    "BACKWARD",
    "CENTRAL",
    "available_methods",
    "get_method",
    "register_method",
    "resolve_methods",
]
