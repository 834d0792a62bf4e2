"""Shared typing aliases for derivlab."""

from __future__ import annotations

from typing import Callable, TypeAlias

import numpy as np
from numpy.typing import NDArray

FloatArray: TypeAlias = NDArray[np.float64]
ScalarFunction: TypeAlias = Callable[[float], float]
