"""Solver base: options, logging hook and backtracking line search."""

import time
import warnings
from typing import Any, Dict, Optional, Protocol

import numpy as np
from tqdm import tqdm

from .._typing import Float64Array, LogFunction
from .results import ExitCondition, SolverResults


class Objective(Protocol):
    """Anything the line search can probe: a value-only evaluate(x)."""

    def evaluate(self, x: Float64Array, *args) -> float:
        ...


class Solver:
    """
    Base class for iterative minimizers of a Function.

    Options are plain attributes and can be changed between solves.

    Args:
        maximum_iterations: Upper bound on outer iterations
        gradient_tolerance: Stop when |g|_inf / (1 + |f|) falls below this
        function_improvement_tolerance: Stop when |Δf| / (|f| + tol) falls below this
        argument_improvement_tolerance: Stop when |Δx| / (|x| + tol) falls below this
        line_search_rho: Step shrink factor for backtracking
        line_search_c: Sufficient-decrease (Armijo) constant
        max_backtracking_attempts: Halvings before the line search gives up
        verbose: Print progress
        log_function: Optional callable receiving progress and diagnostic lines
    """

    name = "Solver"

    def __init__(
        self,
        maximum_iterations: int = 100,
        gradient_tolerance: float = 1e-12,
        function_improvement_tolerance: float = 1e-12,
        argument_improvement_tolerance: float = 1e-12,
        line_search_rho: float = 0.5,
        line_search_c: float = 1e-4,
        max_backtracking_attempts: int = 100,
        verbose: bool = False,
        log_function: Optional[LogFunction] = None,
    ):
        if maximum_iterations < 0:
            raise ValueError(f"maximum_iterations must be >= 0, got {maximum_iterations}")
        if not 0.0 < line_search_rho < 1.0:
            raise ValueError(f"line_search_rho must be in (0, 1), got {line_search_rho}")
        if not 0.0 < line_search_c < 1.0:
            raise ValueError(f"line_search_c must be in (0, 1), got {line_search_c}")

        self.maximum_iterations = maximum_iterations
        self.gradient_tolerance = gradient_tolerance
        self.function_improvement_tolerance = function_improvement_tolerance
        self.argument_improvement_tolerance = argument_improvement_tolerance
        self.line_search_rho = line_search_rho
        self.line_search_c = line_search_c
        self.max_backtracking_attempts = max_backtracking_attempts
        self.verbose = verbose
        self.log_function = log_function

    def options(self) -> Dict[str, Any]:
        """Current option values (for reports)."""
        return {
            "solver": self.name,
            "maximum_iterations": self.maximum_iterations,
            "gradient_tolerance": self.gradient_tolerance,
            "function_improvement_tolerance": self.function_improvement_tolerance,
            "argument_improvement_tolerance": self.argument_improvement_tolerance,
            "line_search_rho": self.line_search_rho,
            "line_search_c": self.line_search_c,
            "max_backtracking_attempts": self.max_backtracking_attempts,
        }

    def log(self, message: str) -> None:
        if self.log_function is not None:
            self.log_function(message)
        elif self.verbose:
            tqdm.write(message)

    def solve(self, function) -> SolverResults:
        """Minimize the function, writing the final point back to its variables."""
        raise NotImplementedError("Subclasses must implement solve()")

    def perform_linesearch(
        self,
        function: Objective,
        x: Float64Array,
        fval: float,
        g: Float64Array,
        p: Float64Array,
        start_alpha: float = 1.0,
    ) -> float:
        """
        Backtracking line search.

        Accepts the first α = start_alpha * rho^n with
        f(x + αp) <= f(x) + c α gᵀp. Only value evaluations are used.
        Newton and quasi-Newton methods should start at α = 1.

        Args:
            function: Object with evaluate(x) -> float
            x: (n,) current point
            fval: f(x)
            g: (n,) gradient at x
            p: (n,) descent direction (gᵀp < 0)
            start_alpha: First trial step

        Returns:
            Accepted step length, or 0.0 if backtracking failed
        """
        alpha = start_alpha
        rho = self.line_search_rho
        c = self.line_search_c
        gTp = float(np.dot(g, p))
        backtracking_attempts = 0

        while True:
            lhs = function.evaluate(x + alpha * p)
            rhs = fval + c * alpha * gTp
            if lhs <= rhs:
                break
            alpha *= rho

            backtracking_attempts += 1
            if backtracking_attempts > self.max_backtracking_attempts:
                message = "Backtracking failed, returning zero step."
                warnings.warn(message, UserWarning)
                self.log(message)
                return 0.0

        return alpha

    # ----- shared stopping tests
    def _gradient_converged(self, fval: float, gradient_norm: float) -> bool:
        return gradient_norm / (1.0 + abs(fval)) < self.gradient_tolerance

    def _function_converged(self, fval: float, fprev: float) -> bool:
        tol = self.function_improvement_tolerance
        return abs(fval - fprev) / (abs(fval) + tol) < tol

    def _argument_converged(self, x: Float64Array, step: Float64Array) -> bool:
        tol = self.argument_improvement_tolerance
        return np.linalg.norm(step) / (np.linalg.norm(x) + tol) < tol

    def _iterations(self, desc: str):
        # Wrap iteration range with a progress bar when verbose
        iterator = range(self.maximum_iterations)
        if self.verbose and self.log_function is None:
            iterator = tqdm(iterator, desc=desc, ncols=80)
        return iterator

    def _start(self, function) -> tuple:
        start = time.perf_counter()
        x = function.copy_user_to_global()
        results = SolverResults(_solver=self.name, _n_scalars=x.size)
        results.startup_time = time.perf_counter() - start
        return start, x, results

    def _finish(self, function, x, results: SolverResults, start: float) -> SolverResults:
        function.copy_global_to_user(x)
        results.total_time = time.perf_counter() - start
        self.log(f"{self.name} finished: {results.exit_condition.value} "
                 f"after {results.iterations} iterations, f = {results.function_value:.6e}")
        return results

    @staticmethod
    def _is_invalid(fval: float, *arrays: np.ndarray) -> bool:
        if not np.isfinite(fval):
            return True
        return any(not np.all(np.isfinite(a)) for a in arrays)


__all__ = ["Solver", "Objective", "ExitCondition", "SolverResults"]
