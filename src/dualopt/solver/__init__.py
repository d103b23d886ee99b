"""Minimizers for aggregate Functions built from terms."""

from .results import ExitCondition, SolverResults
from .base import Solver
from .newton import NewtonSolver
from .lbfgs import LBFGSSolver, two_loop_direction

SOLVER_REGISTRY = {
    "newton": NewtonSolver,
    "lbfgs": LBFGSSolver,
}


def get_solver(name: str, **kwargs) -> Solver:
    """
    Get a solver by name.

    Args:
        name: Solver name. Available:
              - 'newton': Newton's method with full Hessians
              - 'lbfgs': limited-memory BFGS (value + gradient only)
        **kwargs: Solver options, e.g. maximum_iterations=50

    Returns:
        Instantiated solver
    """
    if name not in SOLVER_REGISTRY:
        raise ValueError(f"Unknown solver: {name}. Available: {list(SOLVER_REGISTRY.keys())}")
    return SOLVER_REGISTRY[name](**kwargs)


__all__ = [
    "ExitCondition",
    "SolverResults",
    "Solver",
    "NewtonSolver",
    "LBFGSSolver",
    "two_loop_direction",
    "get_solver",
    "SOLVER_REGISTRY",
]
