"""Type definitions for dualopt.

This module provides type aliases using numpy.typing for clear,
consistent type annotations throughout the package.
"""

from __future__ import annotations

from typing import Any, Callable, List, Protocol, Sequence, Union

import numpy as np
from numpy.typing import ArrayLike, NDArray

# Core numeric types
Float64Array = NDArray[np.float64]
ObjectArray = NDArray[np.object_]

# One variable block as handed to a function body
Block = Union[Float64Array, ObjectArray]

# Caller-provided inputs and output storage
Variables = Sequence[ArrayLike]
Gradient = List[Float64Array]
Hessian = List[List[Float64Array]]


class FunctionBody(Protocol):
    """Protocol for user-supplied function bodies.

    A function body takes one block per variable and returns a scalar. It
    must only use arithmetic operators and the elementary functions in
    ``dualopt.autodiff.functions`` (or the matching numpy ufuncs) so the
    same code runs on float arrays and on arrays of dual numbers. Reduce
    blocks with ``dualopt.sum`` and ``dualopt.dot`` rather than numpy
    reductions, which round differently on the two kinds of array.
    """

    def __call__(self, *blocks: Block) -> Any:
        ...


LogFunction = Callable[[str], None]
