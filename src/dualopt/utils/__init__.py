"""Utility functions."""

from .linalg import newton_step, condition_number
from .formatting import (
    format_value,
    format_summary_header,
    format_result_table,
    format_timing_footer,
    format_short_repr,
    format_full_summary,
)

__all__ = [
    "newton_step",
    "condition_number",
    "format_value",
    "format_summary_header",
    "format_result_table",
    "format_timing_footer",
    "format_short_repr",
    "format_full_summary",
]
