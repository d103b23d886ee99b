"""Base term protocol and the shape-only SizedTerm."""

from typing import List, Optional, Protocol, runtime_checkable

import numpy as np

from .._typing import Float64Array, Gradient, Hessian, Variables


@runtime_checkable
class Term(Protocol):
    """
    Protocol that all terms must implement.

    A term is a scalar function of k vector-valued variable blocks. The
    optimizer reads its shape first, allocates storage, then evaluates.
    """

    def number_of_variables(self) -> int:
        """Number of variable blocks k."""
        ...

    def variable_dimension(self, var: int) -> int:
        """Dimension N_i of block i, for i in [0, k)."""
        ...

    def evaluate(
        self,
        variables: Variables,
        gradient: Optional[Gradient] = None,
        hessian: Optional[Hessian] = None,
    ) -> float:
        """
        Evaluate the term.

        Args:
            variables: k arrays, array i of length N_i
            gradient: Optional k vectors (N_i,) filled in place
            hessian: Optional k x k matrices (N_i, N_j) filled in place

        Returns:
            Function value
        """
        ...


class SizedTerm:
    """
    Term whose block count and dimensions are fixed at construction.

    Carries shape only. Subclasses implement evaluate().

    Args:
        *dimensions: N_0, ..., N_{k-1}, each an integer >= 1
    """

    def __init__(self, *dimensions: int):
        for d in dimensions:
            if isinstance(d, bool) or not isinstance(d, (int, np.integer)) or d < 1:
                raise ValueError(
                    f"Variable dimensions must be integers >= 1, got {dimensions}"
                )
        self._dimensions = tuple(int(d) for d in dimensions)

    @property
    def dimensions(self) -> tuple:
        return self._dimensions

    def number_of_variables(self) -> int:
        return len(self._dimensions)

    def variable_dimension(self, var: int) -> int:
        if not 0 <= var < len(self._dimensions):
            raise IndexError(
                f"Variable index {var} out of range for a term with "
                f"{len(self._dimensions)} variables"
            )
        return self._dimensions[var]

    def evaluate(
        self,
        variables: Variables,
        gradient: Optional[Gradient] = None,
        hessian: Optional[Hessian] = None,
    ) -> float:
        """Must be implemented by subclasses."""
        raise NotImplementedError("Subclasses must implement evaluate()")

    # ----- shape checks
    def check_variables(self, variables: Variables) -> List[Float64Array]:
        """
        Validate variable blocks and convert them to float64 arrays.

        Raises:
            ValueError: on wrong block count or block length
        """
        if len(variables) != len(self._dimensions):
            raise ValueError(
                f"Expected {len(self._dimensions)} variable blocks, got {len(variables)}"
            )
        blocks = []
        for i, (block, n) in enumerate(zip(variables, self._dimensions)):
            array = np.asarray(block, dtype=np.float64)
            if array.shape != (n,):
                raise ValueError(
                    f"Variable block {i} must have shape ({n},), got {array.shape}"
                )
            blocks.append(array)
        return blocks

    def check_gradient(self, gradient: Gradient) -> None:
        if len(gradient) != len(self._dimensions):
            raise ValueError(
                f"Expected {len(self._dimensions)} gradient vectors, got {len(gradient)}"
            )
        for i, (g, n) in enumerate(zip(gradient, self._dimensions)):
            if np.shape(g) != (n,):
                raise ValueError(
                    f"Gradient vector {i} must have shape ({n},), got {np.shape(g)}"
                )

    def check_hessian(self, hessian: Hessian) -> None:
        k = len(self._dimensions)
        if len(hessian) != k:
            raise ValueError(f"Expected {k} Hessian rows, got {len(hessian)}")
        for i, row in enumerate(hessian):
            if len(row) != k:
                raise ValueError(f"Hessian row {i} must hold {k} blocks, got {len(row)}")
            for j, block in enumerate(row):
                expected = (self._dimensions[i], self._dimensions[j])
                if np.shape(block) != expected:
                    raise ValueError(
                        f"Hessian block ({i}, {j}) must have shape {expected}, "
                        f"got {np.shape(block)}"
                    )

    # ----- storage
    def allocate_gradient(self) -> Gradient:
        """Zeroed gradient storage: one (N_i,) vector per block."""
        return allocate_gradient(self)

    def allocate_hessian(self) -> Hessian:
        """Zeroed Hessian storage: k x k grid of (N_i, N_j) matrices."""
        return allocate_hessian(self)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}{self._dimensions}"


def allocate_gradient(term: Term) -> Gradient:
    """Allocate gradient storage matching any term's shape."""
    return [np.zeros(n) for n in term_dimensions(term)]


def allocate_hessian(term: Term) -> Hessian:
    """Allocate block Hessian storage matching any term's shape."""
    dims = term_dimensions(term)
    return [[np.zeros((ni, nj)) for nj in dims] for ni in dims]


def term_dimensions(term: Term) -> List[int]:
    """Dimensions N_0, ..., N_{k-1} of any term."""
    return [term.variable_dimension(i) for i in range(term.number_of_variables())]
