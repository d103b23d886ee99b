"""Terms: scalar functions of vector-valued variable blocks."""

from .base import SizedTerm, Term, allocate_gradient, allocate_hessian, term_dimensions
from .auto_diff import AutoDiffTerm

__all__ = [
    "Term",
    "SizedTerm",
    "AutoDiffTerm",
    "allocate_gradient",
    "allocate_hessian",
    "term_dimensions",
]
