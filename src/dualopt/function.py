"""
Aggregate objective over many terms.

A Function owns no data of its own: variables are user arrays that are
registered once, laid out back to back in a global vector

    x = [ v_0 | v_1 | ... | v_{m-1} ]

and every term reads the blocks it was attached to. Gradients and Hessians
of the terms are scattered into dense global storage.
"""

import time
from typing import List, Optional, Tuple

import numpy as np

from .terms import Term, allocate_gradient, allocate_hessian
from ._typing import Float64Array


class Function:
    """
    Sum of terms plus a constant, evaluated on a global vector.

    Example:
        >>> x = np.array([-1.2, 1.0])
        >>> f = Function()
        >>> f.add_term(AutoDiffTerm(rosenbrock, 2), x)
        >>> g = np.zeros(2)
        >>> value = f.evaluate(f.copy_user_to_global(), g)
    """

    def __init__(self):
        self.constant = 0.0
        self._variables: List[Float64Array] = []
        self._offsets: List[int] = []
        self._index = {}
        self._terms: List[Tuple[Term, List[int]]] = []
        self._n_scalars = 0

        # Diagnostics
        self.evaluations_without_gradient = 0
        self.evaluations_with_gradient = 0
        self.evaluate_time = 0.0
        self.evaluate_with_gradient_time = 0.0

    # ----- structure
    def add_variable(self, variable: Float64Array) -> int:
        """
        Register a user array as a variable block.

        The array is updated in place by copy_global_to_user(). Adding the
        same array again returns its existing index.

        Args:
            variable: 1-D float64 numpy array

        Returns:
            Index of the variable block
        """
        key = id(variable)
        if key in self._index:
            return self._index[key]

        if not isinstance(variable, np.ndarray) or variable.dtype != np.float64:
            raise ValueError("Variables must be float64 numpy arrays")
        if variable.ndim != 1 or variable.size < 1:
            raise ValueError(f"Variables must be non-empty 1-D arrays, got shape {variable.shape}")

        index = len(self._variables)
        self._index[key] = index
        self._variables.append(variable)
        self._offsets.append(self._n_scalars)
        self._n_scalars += variable.size
        return index

    def add_term(self, term: Term, *variables: Float64Array) -> None:
        """
        Attach a term to variable blocks, registering them if needed.

        Raises:
            ValueError: if the number or sizes of the blocks do not match the term
        """
        if term.number_of_variables() != len(variables):
            raise ValueError(
                f"Term expects {term.number_of_variables()} variables, got {len(variables)}"
            )
        indices = []
        for i, variable in enumerate(variables):
            index = self.add_variable(variable)
            if term.variable_dimension(i) != variable.size:
                raise ValueError(
                    f"Variable {i} has size {variable.size} but the term expects "
                    f"{term.variable_dimension(i)}"
                )
            indices.append(index)
        self._terms.append((term, indices))

    def number_of_variables(self) -> int:
        return len(self._variables)

    def number_of_scalars(self) -> int:
        return self._n_scalars

    def number_of_terms(self) -> int:
        return len(self._terms)

    # ----- global vector
    def copy_user_to_global(self) -> Float64Array:
        if not self._variables:
            return np.zeros(0)
        return np.concatenate(self._variables)

    def copy_global_to_user(self, x: Float64Array) -> None:
        x = self._check_point(x)
        for variable, offset in zip(self._variables, self._offsets):
            variable[:] = x[offset:offset + variable.size]

    def _check_point(self, x) -> Float64Array:
        x = np.asarray(x, dtype=np.float64)
        if x.shape != (self._n_scalars,):
            raise ValueError(f"Point must have shape ({self._n_scalars},), got {x.shape}")
        return x

    def _blocks(self, x: Float64Array) -> List[Float64Array]:
        return [x[o:o + v.size] for v, o in zip(self._variables, self._offsets)]

    # ----- evaluation
    def evaluate(
        self,
        x: Float64Array,
        gradient: Optional[Float64Array] = None,
        hessian: Optional[Float64Array] = None,
    ) -> float:
        """
        Evaluate the sum of all terms at a global point.

        Args:
            x: (n,) global point
            gradient: Optional (n,) output, overwritten in place
            hessian: Optional (n, n) output, overwritten in place; requires gradient

        Returns:
            Function value
        """
        x = self._check_point(x)
        blocks = self._blocks(x)
        start = time.perf_counter()

        if gradient is None:
            if hessian is not None:
                raise ValueError("A Hessian can only be computed together with a gradient")
            value = self.constant
            for term, indices in self._terms:
                value += term.evaluate([blocks[i] for i in indices])
            self.evaluations_without_gradient += 1
            self.evaluate_time += time.perf_counter() - start
            return value

        n = self._n_scalars
        if np.shape(gradient) != (n,):
            raise ValueError(f"Gradient must have shape ({n},), got {np.shape(gradient)}")
        if hessian is not None and np.shape(hessian) != (n, n):
            raise ValueError(f"Hessian must have shape ({n}, {n}), got {np.shape(hessian)}")

        gradient[:] = 0.0
        if hessian is not None:
            hessian[:, :] = 0.0

        value = self.constant
        for term, indices in self._terms:
            term_gradient = allocate_gradient(term)
            term_hessian = allocate_hessian(term) if hessian is not None else None
            value += term.evaluate([blocks[i] for i in indices], term_gradient, term_hessian)

            for a, ia in enumerate(indices):
                oa, na = self._offsets[ia], self._variables[ia].size
                gradient[oa:oa + na] += term_gradient[a]
                if term_hessian is None:
                    continue
                for b, ib in enumerate(indices):
                    ob, nb = self._offsets[ib], self._variables[ib].size
                    hessian[oa:oa + na, ob:ob + nb] += term_hessian[a][b]

        self.evaluations_with_gradient += 1
        self.evaluate_with_gradient_time += time.perf_counter() - start
        return value

    def __repr__(self) -> str:
        return (
            f"Function(variables={self.number_of_variables()}, "
            f"scalars={self._n_scalars}, terms={self.number_of_terms()})"
        )
