"""Provides the finite-difference method registry.

Each method is a :class:`DifferenceMethod` descriptor: a display name, the
formula as text, its truncation order and the estimator itself. The
built-in set holds the forward, backward and central first-derivative
quotients, in that order.

Adding methods
--------------
New schemes can be registered without touching this module by calling
``register_method``:

    >>> from derivlab.finite.methods import DifferenceMethod, register_method
    >>> five_point = DifferenceMethod(
    ...     name="Five-Point Central Difference",
    ...     formula="(-f(x+2h) + 8f(x+h) - 8f(x-h) + f(x-2h)) / (12h)",
    ...     order="O(h⁴)",
    ...     truncation_order=4,
    ...     offsets=(-2, -1, 1, 2),
    ...     estimator=lambda f, x, h: (
    ...         -f(x + 2 * h) + 8 * f(x + h) - 8 * f(x - h) + f(x - 2 * h)
    ...     ) / (12 * h),
    ... )
    >>> register_method(five_point, aliases=("five-point",))  # doctest: +SKIP

Notes:
    - Method names are case/spacing/punctuation insensitive; the short
      aliases ``"forward"``, ``"backward"`` and ``"central"`` are accepted.
    - The estimators do not guard against ``h == 0``; callers validate the
      step size first.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Iterable, Mapping

from derivlab.logger import derivlab_logger

__all__ = [
    "DifferenceMethod",
    "FORWARD",
    "BACKWARD",
    "CENTRAL",
    "available_methods",
    "get_method",
    "resolve_methods",
    "register_method",
]


@dataclass(frozen=True)
class DifferenceMethod:
    """Descriptor of one finite-difference scheme.

    Attributes:
        name: Display name, also the key used to select the method.
        formula: Human-readable formula.
        order: Truncation order as displayed, e.g. ``"O(h)"``.
        truncation_order: Exponent ``p`` of the leading error term ``O(h^p)``.
        offsets: Sample locations relative to ``x`` in units of ``h``.
        estimator: ``estimator(f, x, h)`` returning the derivative estimate.
    """

    name: str
    formula: str
    order: str
    truncation_order: int
    offsets: tuple[int, ...]
    estimator: Callable[[Callable[[float], float], float, float], float]

    def estimate(self, function: Callable[[float], float], x0: float, stepsize: float) -> float:
        """Applies the estimator at ``(x0, stepsize)``."""
        return float(self.estimator(function, x0, stepsize))


def _forward(f, x, h):
    return (f(x + h) - f(x)) / h


def _backward(f, x, h):
    return (f(x) - f(x - h)) / h


def _central(f, x, h):
    return (f(x + h) - f(x - h)) / (2 * h)


FORWARD = DifferenceMethod(
    name="Forward Difference",
    formula="(f(x+h) - f(x)) / h",
    order="O(h)",
    truncation_order=1,
    offsets=(0, 1),
    estimator=_forward,
)

BACKWARD = DifferenceMethod(
    name="Backward Difference",
    formula="(f(x) - f(x-h)) / h",
    order="O(h)",
    truncation_order=1,
    offsets=(-1, 0),
    estimator=_backward,
)

CENTRAL = DifferenceMethod(
    name="Central Difference",
    formula="(f(x+h) - f(x-h)) / (2h)",
    order="O(h²)",
    truncation_order=2,
    offsets=(-1, 1),
    estimator=_central,
)

# These are the built-in methods, in display order.
_METHOD_SPECS: list[tuple[DifferenceMethod, list[str]]] = [
    (FORWARD, ["forward", "fd"]),
    (BACKWARD, ["backward", "bd"]),
    (CENTRAL, ["central", "cd"]),
]


def _norm(s: str) -> str:
    """Normalize a method string for robust matching (case/spacing/punct insensitive)."""
    return re.sub(r"[^a-z0-9]+", "", s.lower())


@lru_cache(maxsize=1)
def _method_map() -> Mapping[str, DifferenceMethod]:
    """Builds and caches the lookup table from normalized names and aliases.

    The cache is cleared by :func:`register_method`.
    """
    method_map: dict[str, DifferenceMethod] = {}
    for method, aliases in _METHOD_SPECS:
        method_map[_norm(method.name)] = method
        for a in aliases:
            method_map[_norm(a)] = method
    return method_map


def register_method(method: DifferenceMethod, *, aliases: Iterable[str] = ()) -> None:
    """Register a new difference method.

    The method is appended after the existing ones and can be selected by
    its display name or any of the aliases.

    Args:
        method: Descriptor of the new scheme.
        aliases: Additional accepted spellings.

    Raises:
        ValueError: If the name or an alias is already taken.
    """
    taken = _method_map()
    for key in [method.name, *aliases]:
        if _norm(key) in taken:
            raise ValueError(f"Difference method name '{key}' is already registered.")
    _METHOD_SPECS.append((method, list(aliases)))
    _method_map.cache_clear()


def get_method(name: str) -> DifferenceMethod | None:
    """Looks up a method by name or alias.

    Args:
        name: Display name or alias.

    Returns:
        The descriptor, or ``None`` if no method matches.
    """
    return _method_map().get(_norm(name))


def resolve_methods(names: Iterable[str]) -> list[DifferenceMethod]:
    """Resolves a selection of names, dropping unknown ones.

    The order of the selection is preserved.
    """
    methods = []
    for name in names:
        method = get_method(name)
        if method is None:
            derivlab_logger.debug("Skipping unknown difference method %r.", name)
            continue
        methods.append(method)
    return methods


def available_methods() -> list[str]:
    """List the display names of all registered methods, in order.

    Returns:
        List of method names.
    """
    return [method.name for method, _ in _METHOD_SPECS]
