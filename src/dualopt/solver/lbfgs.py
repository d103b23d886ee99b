"""
Limited-memory BFGS.

Uses only value and gradient evaluations (order-1 duals), which makes each
iteration much cheaper than a Newton iteration when D is large. The search
direction comes from the standard two-loop recursion over the last m
curvature pairs (s, y).
"""

import time
from collections import deque

import numpy as np

from .base import Solver
from .results import ExitCondition, SolverResults


def two_loop_direction(g, s_history, y_history, rho_history):
    """
    Compute p = -H_k g with the L-BFGS two-loop recursion.

    Args:
        g: (n,) current gradient
        s_history: Steps s_i = x_{i+1} - x_i, oldest first
        y_history: Gradient changes y_i = g_{i+1} - g_i, oldest first
        rho_history: 1 / (y_iᵀ s_i)

    Returns:
        (n,) search direction
    """
    q = g.copy()
    alphas = []
    for s, y, rho in zip(reversed(s_history), reversed(y_history), reversed(rho_history)):
        a = rho * np.dot(s, q)
        q -= a * y
        alphas.append(a)

    if s_history:
        s, y = s_history[-1], y_history[-1]
        q *= np.dot(s, y) / np.dot(y, y)

    for (s, y, rho), a in zip(zip(s_history, y_history, rho_history), reversed(alphas)):
        b = rho * np.dot(y, q)
        q += s * (a - b)

    return -q


class LBFGSSolver(Solver):
    """
    Quasi-Newton solver.

    Args:
        lbfgs_history_size: Number of curvature pairs kept
        **kwargs: Solver options
    """

    name = "LBFGSSolver"

    def __init__(self, lbfgs_history_size: int = 10, **kwargs):
        super().__init__(**kwargs)
        if lbfgs_history_size < 1:
            raise ValueError(f"lbfgs_history_size must be >= 1, got {lbfgs_history_size}")
        self.lbfgs_history_size = lbfgs_history_size

    def options(self):
        options = super().options()
        options["lbfgs_history_size"] = self.lbfgs_history_size
        return options

    def solve(self, function) -> SolverResults:
        start, x, results = self._start(function)
        n = x.size
        m = self.lbfgs_history_size
        s_history, y_history, rho_history = deque(maxlen=m), deque(maxlen=m), deque(maxlen=m)

        g = np.zeros(n)
        t0 = time.perf_counter()
        fval = function.evaluate(x, g)
        results.function_evaluation_time += time.perf_counter() - t0
        fprev = np.nan
        results.exit_condition = ExitCondition.NO_CONVERGENCE

        for iteration in self._iterations(desc="L-BFGS"):
            results.function_value = fval
            results.gradient_norm = float(np.max(np.abs(g))) if n else 0.0

            if self._is_invalid(fval, g):
                results.exit_condition = ExitCondition.INVALID_NUMBER
                break
            if self._gradient_converged(fval, results.gradient_norm):
                results.exit_condition = ExitCondition.GRADIENT_TOLERANCE
                break
            if iteration > 0 and self._function_converged(fval, fprev):
                results.exit_condition = ExitCondition.FUNCTION_TOLERANCE
                break

            t0 = time.perf_counter()
            p = two_loop_direction(g, s_history, y_history, rho_history)
            if np.dot(g, p) >= 0:
                # Not a descent direction; restart from steepest descent
                s_history.clear()
                y_history.clear()
                rho_history.clear()
                p = -g
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
                "history_size": len(s_history),
            })
            self.log(
                f"{iteration:4d}  f = {fval:+.6e}  |g| = {results.gradient_norm:.3e}  "
                f"|step| = {np.linalg.norm(step):.3e}"
            )

            if alpha == 0.0:
                results.exit_condition = ExitCondition.LINE_SEARCH_FAILED
                break

            x_new = x + step
            g_new = np.zeros(n)
            t0 = time.perf_counter()
            f_new = function.evaluate(x_new, g_new)
            results.function_evaluation_time += time.perf_counter() - t0

            y = g_new - g
            sy = float(np.dot(step, y))
            if sy > 1e-16 * float(np.dot(y, y)) and sy > 0.0:
                s_history.append(step)
                y_history.append(y)
                rho_history.append(1.0 / sy)

            x, g, fprev, fval = x_new, g_new, fval, f_new
            if self._argument_converged(x, step):
                results.exit_condition = ExitCondition.ARGUMENT_TOLERANCE
                results.function_value = fval
                results.gradient_norm = float(np.max(np.abs(g))) if n else 0.0
                break
        else:
            results.function_value = fval

        return self._finish(function, x, results, start)
