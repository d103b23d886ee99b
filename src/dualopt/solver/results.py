"""Solver results and exit conditions."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd


class ExitCondition(Enum):
    """Why a solver stopped."""

    GRADIENT_TOLERANCE = "gradient_tolerance"
    FUNCTION_TOLERANCE = "function_tolerance"
    ARGUMENT_TOLERANCE = "argument_tolerance"
    NO_CONVERGENCE = "no_convergence"
    INVALID_NUMBER = "invalid_number"
    LINE_SEARCH_FAILED = "line_search_failed"
    NA = "na"


CONVERGED = (
    ExitCondition.GRADIENT_TOLERANCE,
    ExitCondition.FUNCTION_TOLERANCE,
    ExitCondition.ARGUMENT_TOLERANCE,
)


@dataclass
class SolverResults:
    """Result of one solver run."""

    exit_condition: ExitCondition = ExitCondition.NA
    iterations: int = 0
    function_value: float = np.nan
    gradient_norm: float = np.nan
    startup_time: float = 0.0
    function_evaluation_time: float = 0.0
    linear_solver_time: float = 0.0
    line_search_time: float = 0.0
    total_time: float = 0.0
    history: List[Dict[str, Any]] = field(default_factory=list)

    # Metadata fields (set by the solver)
    _solver: Optional[str] = field(default=None, repr=False)
    _n_scalars: Optional[int] = field(default=None, repr=False)

    @property
    def converged(self) -> bool:
        return self.exit_condition in CONVERGED

    def timing(self) -> Dict[str, float]:
        return {
            "startup_time": self.startup_time,
            "function_evaluation_time": self.function_evaluation_time,
            "linear_solver_time": self.linear_solver_time,
            "line_search_time": self.line_search_time,
            "total_time": self.total_time,
        }

    def history_frame(self) -> pd.DataFrame:
        """Per-iteration history as a DataFrame (one row per iteration)."""
        return pd.DataFrame(self.history)

    def __repr__(self) -> str:
        """Short representation."""
        from ..utils.formatting import format_short_repr
        return format_short_repr(
            class_name="SolverResults",
            exit_condition=self.exit_condition.value,
            function_value=self.function_value,
            iterations=self.iterations,
        )

    def summary(self) -> str:
        """
        Generate statsmodels-style summary.

        Returns:
            Formatted summary string
        """
        from ..utils.formatting import format_full_summary

        solver = self._solver if self._solver else "unknown"

        return format_full_summary(
            title=f"{solver} Results",
            function_value=self.function_value,
            gradient_norm=self.gradient_norm,
            solver=solver,
            exit_condition=self.exit_condition.value,
            n_scalars=self._n_scalars,
            iterations=self.iterations,
            timing=self.timing(),
        )
