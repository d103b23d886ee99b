"""
dualopt: Automatic derivatives for block-structured objective terms.

Write a term's value once, generic over its scalar type, and get its
gradient and full block Hessian by forward-over-forward dual numbers.

Key Features
------------
- One Dual type used at two nesting depths (gradients and Hessians)
- AutoDiffTerm: value-only, value + gradient, value + gradient + Hessian
- Function: sum of terms over shared variable blocks
- NewtonSolver / LBFGSSolver with backtracking line search

Basic Usage
-----------
>>> import numpy as np
>>> from dualopt import AutoDiffTerm, Function, NewtonSolver, sin, sqrt
>>>
>>> def body(x, y):
...     return y[0] * sqrt(x[0]) + sin(sqrt(x[0]))
>>>
>>> term = AutoDiffTerm(body, 1, 1)
>>> gradient, hessian = term.allocate_gradient(), term.allocate_hessian()
>>> value = term.evaluate([[1.3], [2.0]], gradient, hessian)
>>>
>>> x = np.array([-1.2, 1.0])
>>> f = Function()
>>> f.add_term(AutoDiffTerm(lambda x: (1 - x[0]) ** 2 + 100 * (x[1] - x[0] ** 2) ** 2, 2), x)
>>> results = NewtonSolver().solve(f)
>>> print(results.summary())
"""

__version__ = "0.1.0"

# Dual arithmetic
from .autodiff import (
    Dual,
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
    value_of,
)

# Terms
from .terms import AutoDiffTerm, SizedTerm, Term, allocate_gradient, allocate_hessian

# Objective
from .function import Function

# Solvers
from .solver import (
    ExitCondition,
    LBFGSSolver,
    NewtonSolver,
    Solver,
    SolverResults,
    get_solver,
)

__all__ = [
    # Version
    "__version__",
    # Dual arithmetic
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
    # Terms
    "Term",
    "SizedTerm",
    "AutoDiffTerm",
    "allocate_gradient",
    "allocate_hessian",
    # Objective
    "Function",
    # Solvers
    "Solver",
    "NewtonSolver",
    "LBFGSSolver",
    "SolverResults",
    "ExitCondition",
    "get_solver",
]
