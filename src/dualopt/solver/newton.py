"""
Newton's method with a regularized Hessian and backtracking line search.

Each iteration:
1. Evaluate f, g, H at x (one order-2 dual evaluation per term)
2. Stop if the gradient is small or f stopped improving
3. Solve (H + τI) p = -g, τ >= 0 chosen so the system is positive definite
4. Backtrack from α = 1 along p, stop if no step is accepted
5. x ← x + αp, stop if the step is negligible
"""

import time

import numpy as np

from ..utils.linalg import condition_number, newton_step
from .base import Solver
from .results import ExitCondition, SolverResults


class NewtonSolver(Solver):
    """Second-order solver using full Hessians from the terms."""

    name = "NewtonSolver"

    def solve(self, function) -> SolverResults:
        start, x, results = self._start(function)
        n = x.size
        g = np.zeros(n)
        H = np.zeros((n, n))
        fprev = np.nan
        results.exit_condition = ExitCondition.NO_CONVERGENCE

        for iteration in self._iterations(desc="Newton"):
            t0 = time.perf_counter()
            fval = function.evaluate(x, g, H)
            results.function_evaluation_time += time.perf_counter() - t0

            results.function_value = fval
            results.gradient_norm = float(np.max(np.abs(g))) if n else 0.0

            if self._is_invalid(fval, g, H):
                results.exit_condition = ExitCondition.INVALID_NUMBER
                break
            if self._gradient_converged(fval, results.gradient_norm):
                results.exit_condition = ExitCondition.GRADIENT_TOLERANCE
                break
            if iteration > 0 and self._function_converged(fval, fprev):
                results.exit_condition = ExitCondition.FUNCTION_TOLERANCE
                break

            t0 = time.perf_counter()
            p, tau = newton_step(H, g)
            results.linear_solver_time += time.perf_counter() - t0

            t0 = time.perf_counter()
            alpha = self.perform_linesearch(function, x, fval, g, p, start_alpha=1.0)
            results.line_search_time += time.perf_counter() - t0

            step = alpha * p
            results.iterations = iteration + 1
            results.history.append({
                "iteration": iteration,
                "f": fval,
                "gradient_norm": results.gradient_norm,
                "step_norm": float(np.linalg.norm(step)),
                "alpha": alpha,
                "hessian_shift": tau,
                "condition_number": condition_number(H),
            })
            self.log(
                f"{iteration:4d}  f = {fval:+.6e}  |g| = {results.gradient_norm:.3e}  "
                f"|step| = {np.linalg.norm(step):.3e}  tau = {tau:.1e}"
            )

            if alpha == 0.0:
                results.exit_condition = ExitCondition.LINE_SEARCH_FAILED
                break

            x = x + step
            fprev = fval
            if self._argument_converged(x, step):
                results.exit_condition = ExitCondition.ARGUMENT_TOLERANCE
                results.function_value = function.evaluate(x)
                break
        else:
            results.function_value = function.evaluate(x)

        return self._finish(function, x, results, start)
