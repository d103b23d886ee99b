"""
Elementary functions generic over the scalar type.

Function bodies call these instead of ``math``: each accepts a plain
float, a numpy array, or a (nested) Dual and returns the same kind.
Plain inputs go straight to the numpy ufunc, so the value-only path and
the differentiating path perform identical floating-point operations.
"""

import functools
import operator

from .dual import Dual, _elementary, value_of


def sin(x):
    return _elementary("sin", x)


def cos(x):
    return _elementary("cos", x)


def tan(x):
    return _elementary("tan", x)


def arcsin(x):
    return _elementary("arcsin", x)


def arccos(x):
    return _elementary("arccos", x)


def arctan(x):
    return _elementary("arctan", x)


def sinh(x):
    return _elementary("sinh", x)


def cosh(x):
    return _elementary("cosh", x)


def tanh(x):
    return _elementary("tanh", x)


def exp(x):
    return _elementary("exp", x)


def log(x):
    return _elementary("log", x)


def log1p(x):
    return _elementary("log1p", x)


def sqrt(x):
    return _elementary("sqrt", x)


def absolute(x):
    """|x|; for duals the derivative takes the sign of the base value (+1 at zero)."""
    return abs(x)


def pow(x, p):
    """x ** p with a constant or dual exponent."""
    return x ** p


def hypot(x, y):
    """sqrt(x² + y²), composed so both paths share one formula."""
    return sqrt(x * x + y * y)


def sum(values):
    """
    Left-to-right sum of a block or any iterable of scalars.

    numpy reductions sum float arrays pairwise but object arrays in order,
    so they round differently on the two evaluation paths. This one adds
    strictly in order on both. An empty input sums to 0.0.
    """
    return functools.reduce(operator.add, values, 0.0)


def dot(a, b):
    """Inner product of two equal-length blocks, summed in order."""
    if len(a) != len(b):
        raise ValueError(f"dot needs equal lengths, got {len(a)} and {len(b)}")
    return sum(x * y for x, y in zip(a, b))


def is_dual(x) -> bool:
    return isinstance(x, Dual)


__all__ = [
    "sin",
    "cos",
    "tan",
    "arcsin",
    "arccos",
    "arctan",
    "sinh",
    "cosh",
    "tanh",
    "exp",
    "log",
    "log1p",
    "sqrt",
    "absolute",
    "pow",
    "hypot",
    "sum",
    "dot",
    "is_dual",
    "value_of",
]
