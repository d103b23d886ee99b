"""
Forward-mode automatic differentiation with nested dual numbers.

This module provides:
- Dual: one dual-number type, used at order 1 (gradients) and order 2 (Hessians)
- functions: sin, cos, sqrt, exp, log, ..., sum, dot generic over float and Dual
- seeds: block-aware seeding of duals and extraction of derivatives

A function body written against these functions is evaluated once on
order-2 duals to obtain value, gradient and Hessian together.
"""

from .dual import Dual, value_of
from .functions import (
    absolute,
    arccos,
    arcsin,
    arctan,
    cos,
    cosh,
    dot,
    exp,
    hypot,
    is_dual,
    log,
    log1p,
    pow,
    sin,
    sinh,
    sqrt,
    sum,
    tan,
    tanh,
)
from .seeds import (
    block_offsets,
    extract_gradient,
    extract_hessian,
    seed_gradient,
    seed_hessian,
)

__all__ = [
    "Dual",
    "value_of",
    "is_dual",
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
    "block_offsets",
    "seed_gradient",
    "seed_hessian",
    "extract_gradient",
    "extract_hessian",
]
