"""
Generic automatic-differentiation term.

Wraps a user function body written once over a generic scalar type and
derives its gradient and block Hessian with nested forward-mode duals:

    value only:          f(x)              on float64 arrays
    value + gradient:    f(x) on order-1 Duals
    value + Hessian:     f(x) on order-2 Duals (one evaluation)
"""

from typing import Optional

from ..autodiff import extract_gradient, extract_hessian, seed_gradient, seed_hessian
from .._typing import FunctionBody, Gradient, Hessian, Variables
from .base import SizedTerm


class AutoDiffTerm(SizedTerm):
    """
    Term whose derivatives are computed from its value by autodiff.

    The term owns the function body: it holds the only reference, never
    hands it out, and releases it exactly once, on close() or when the
    term is dropped.

    Args:
        function: Callable f(*blocks) -> scalar, generic over the scalar type
        *dimensions: Dimension of each variable block

    Example:
        >>> def body(x, y):
        ...     return y[0] * sqrt(x[0]) + sin(sqrt(x[0]))
        >>> term = AutoDiffTerm(body, 1, 1)
        >>> grad, hess = term.allocate_gradient(), term.allocate_hessian()
        >>> value = term.evaluate([[1.3], [2.0]], grad, hess)
    """

    def __init__(self, function: FunctionBody, *dimensions: int):
        super().__init__(*dimensions)
        if not callable(function):
            raise ValueError(f"Function body must be callable, got {type(function).__name__}")
        self._function = function
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Release the owned function body. Further calls are no-ops."""
        if self._closed:
            return
        self._closed = True
        self._function = None

    def __enter__(self) -> "AutoDiffTerm":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("AutoDiffTerm used after close()")

    def evaluate(
        self,
        variables: Variables,
        gradient: Optional[Gradient] = None,
        hessian: Optional[Hessian] = None,
    ) -> float:
        """
        Evaluate the function body, optionally with derivatives.

        Args:
            variables: k arrays, array i of length N_i
            gradient: Optional k vectors (N_i,), filled in place
            hessian: Optional k x k grid of (N_i, N_j) matrices, filled in
                place; requires gradient

        Returns:
            Function value. Identical across the three paths for the same input.
        """
        self._check_open()
        blocks = self.check_variables(variables)

        if gradient is None:
            if hessian is not None:
                raise ValueError("A Hessian can only be computed together with a gradient")
            return float(self._function(*blocks))

        self.check_gradient(gradient)
        if hessian is None:
            result = self._function(*seed_gradient(blocks))
            return extract_gradient(result, self.dimensions, gradient)

        self.check_hessian(hessian)
        result = self._function(*seed_hessian(blocks))
        return extract_hessian(result, self.dimensions, gradient, hessian)

    def __repr__(self) -> str:
        name = getattr(self._function, "__name__", type(self._function).__name__)
        return f"AutoDiffTerm({name}, dimensions={self.dimensions})"
