"""Summary formatting utilities for solver results."""

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

import numpy as np


def format_value(value: Any, fmt: str = "{:.6e}") -> str:
    """
    Format a number for display.

    Args:
        value: Number (or anything else, shown via str)
        fmt: Format for finite floats

    Returns:
        Formatted string ("nan" / "inf" spelled out)
    """
    if isinstance(value, (float, np.floating)):
        if np.isnan(value):
            return "nan"
        if np.isinf(value):
            return "inf" if value > 0 else "-inf"
        return fmt.format(value)
    return str(value)


def format_summary_header(
    title: str,
    solver: Optional[str] = None,
    exit_condition: Optional[str] = None,
    n_scalars: Optional[int] = None,
    iterations: Optional[int] = None,
    width: int = 78,
) -> str:
    """
    Format statsmodels-style header block.

    Args:
        title: Main title (e.g., "Newton Solver Results")
        solver: Solver name
        exit_condition: Why the solver stopped
        n_scalars: Number of scalar variables
        iterations: Number of iterations performed
        width: Total width of output

    Returns:
        Formatted header string
    """
    lines = []
    sep = "=" * width

    lines.append(sep)
    lines.append(f"{title:^{width}}")
    lines.append(sep)

    # Get current date/time
    now = datetime.now()
    date_str = now.strftime("%a, %d %b %Y")
    time_str = now.strftime("%H:%M:%S")

    # Build two-column layout
    left_col: List[Tuple[str, str]] = []
    right_col: List[Tuple[str, str]] = []

    if solver is not None:
        left_col.append(("Solver:", solver))
    if exit_condition is not None:
        right_col.append(("Exit:", exit_condition))

    if n_scalars is not None:
        left_col.append(("No. Variables:", str(n_scalars)))
    if iterations is not None:
        right_col.append(("Iterations:", str(iterations)))

    left_col.append(("Date:", date_str))
    right_col.append(("Time:", time_str))

    # Format columns
    half_width = width // 2
    for left, right in zip(left_col, right_col):
        left_str = f"{left[0]:<18}{left[1]:<{half_width - 18}}"
        right_str = f"{right[0]:<18}{right[1]}"
        lines.append(f"{left_str}{right_str}")

    # Handle unequal lengths
    if len(left_col) > len(right_col):
        for item in left_col[len(right_col):]:
            lines.append(f"{item[0]:<18}{item[1]}")
    elif len(right_col) > len(left_col):
        for item in right_col[len(left_col):]:
            lines.append(" " * half_width + f"{item[0]:<18}{item[1]}")

    lines.append(sep)

    return "\n".join(lines)


def format_result_table(
    function_value: float,
    gradient_norm: float,
    width: int = 78,
) -> str:
    """Format final function value and gradient norm."""
    lines = []
    lines.append(f"{'':>12}{'f(x)':>22}{'|g(x)|_inf':>22}")
    lines.append("-" * width)
    lines.append(
        f"{'final':>12}{format_value(function_value):>22}{format_value(gradient_norm):>22}"
    )
    lines.append("=" * width)
    return "\n".join(lines)


def format_timing_footer(
    timing: Dict[str, float],
    width: int = 78,
) -> str:
    """
    Format timing section.

    Args:
        timing: Mapping of phase name to seconds
        width: Total width of output

    Returns:
        Formatted timing string
    """
    lines = []
    lines.append("Timing:")

    for key, seconds in timing.items():
        label = key.replace("_", " ").capitalize()
        lines.append(f"  {label + ':':<25} {seconds:.6f} s")

    lines.append("-" * width)

    return "\n".join(lines)


def format_short_repr(
    class_name: str,
    exit_condition: str,
    function_value: float,
    iterations: int,
) -> str:
    """
    Format short __repr__ string.

    Args:
        class_name: Name of result class
        exit_condition: Why the solver stopped
        function_value: Final function value
        iterations: Iterations performed

    Returns:
        Short repr string
    """
    return (
        f"<{class_name}: exit={exit_condition}, f={format_value(function_value, '{:.6g}')}, "
        f"iterations={iterations}>"
    )


def format_full_summary(
    title: str,
    function_value: float,
    gradient_norm: float,
    solver: Optional[str] = None,
    exit_condition: Optional[str] = None,
    n_scalars: Optional[int] = None,
    iterations: Optional[int] = None,
    timing: Optional[Dict[str, float]] = None,
    width: int = 78,
) -> str:
    """
    Format complete summary output.

    Returns:
        Complete formatted summary string
    """
    parts = []

    # Header
    parts.append(format_summary_header(
        title=title,
        solver=solver,
        exit_condition=exit_condition,
        n_scalars=n_scalars,
        iterations=iterations,
        width=width,
    ))

    # Final values
    parts.append(format_result_table(
        function_value=function_value,
        gradient_norm=gradient_norm,
        width=width,
    ))

    # Timing footer (if provided)
    if timing:
        parts.append(format_timing_footer(timing, width=width))

    return "\n".join(parts)
