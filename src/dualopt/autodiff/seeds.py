"""
Seeding and extraction of block-structured derivatives.

Variables arrive as k blocks of sizes N_0..N_{k-1}. Component j of block i
gets the global direction m = offset(i) + j, with D = Σ N_i directions.

Gradient seeding (order 1):
    x_m = (v_m, e_m)

Hessian seeding (order 2, forward over forward):
    x_m = ((v_m, e_m), [(δ_mn, 0) for n in 0..D-1])

so that a single evaluation r = f(x) gives
    value       = r.real.real
    gradient[n] = r.real.eps[n]
    hessian[m, n] = r.eps[m].eps[n]
"""

from typing import List, Sequence

import numpy as np

from .dual import Dual, value_of
from .._typing import Float64Array, Gradient, Hessian, ObjectArray


def block_offsets(dimensions: Sequence[int]) -> List[int]:
    """Global direction index of the first component of each block."""
    offsets = []
    total = 0
    for n in dimensions:
        offsets.append(total)
        total += n
    return offsets


def seed_gradient(blocks: Sequence[Float64Array]) -> List[ObjectArray]:
    """
    Wrap each scalar in an order-1 Dual seeded with its unit direction.

    Args:
        blocks: k float64 arrays

    Returns:
        k object arrays of order-1 Duals with D-wide tangents
    """
    size = sum(len(block) for block in blocks)
    identity = np.eye(size)

    seeded = []
    m = 0
    for block in blocks:
        duals = np.empty(len(block), dtype=object)
        for j in range(len(block)):
            duals[j] = Dual(block[j], identity[m])
            m += 1
        seeded.append(duals)
    return seeded


def seed_hessian(blocks: Sequence[Float64Array]) -> List[ObjectArray]:
    """
    Wrap each scalar in an order-2 Dual seeded on both levels.

    The inner tangent and the outer tangent of variable m are both the
    unit vector e_m; the outer tangent entries are order-1 constants.

    Args:
        blocks: k float64 arrays

    Returns:
        k object arrays of order-2 Duals
    """
    size = sum(len(block) for block in blocks)
    identity = np.eye(size)
    zero = np.zeros(size)

    seeded = []
    m = 0
    for block in blocks:
        duals = np.empty(len(block), dtype=object)
        for j in range(len(block)):
            outer = np.empty(size, dtype=object)
            for n in range(size):
                outer[n] = Dual(identity[m, n], zero)
            duals[j] = Dual(Dual(block[j], identity[m]), outer)
            m += 1
        seeded.append(duals)
    return seeded


def _tangent(x, size: int) -> Float64Array:
    if isinstance(x, Dual):
        return np.asarray(x.eps, dtype=np.float64)
    return np.zeros(size)


def extract_gradient(
    result,
    dimensions: Sequence[int],
    gradient: Gradient,
) -> float:
    """
    Unpack value and gradient from an order-1 result into caller storage.

    A plain (non-dual) result means the body ignored its inputs; the
    gradient is then zero.

    Returns:
        Function value
    """
    size = sum(dimensions)
    if isinstance(result, Dual) and result.order != 1:
        raise ValueError(f"Expected an order-1 result, got order {result.order}")

    tangent = _tangent(result, size)
    for i, offset in enumerate(block_offsets(dimensions)):
        gradient[i][:] = tangent[offset:offset + dimensions[i]]

    return float(value_of(result))


def extract_hessian(
    result,
    dimensions: Sequence[int],
    gradient: Gradient,
    hessian: Hessian,
) -> float:
    """
    Unpack value, gradient and Hessian from an order-2 result.

    Every block (i, j) is copied from its own entries of the full D x D
    matrix, so hessian[i][j] and hessian[j][i] are filled independently.

    Returns:
        Function value
    """
    size = sum(dimensions)
    if isinstance(result, Dual):
        if result.order != 2:
            raise ValueError(f"Expected an order-2 result, got order {result.order}")
        first = _tangent(result.real, size)
        if size > 0:
            second = np.vstack([_tangent(entry, size) for entry in result.eps])
        else:
            second = np.zeros((0, 0))
    else:
        first = np.zeros(size)
        second = np.zeros((size, size))

    offsets = block_offsets(dimensions)
    for i, (oi, ni) in enumerate(zip(offsets, dimensions)):
        gradient[i][:] = first[oi:oi + ni]
        for j, (oj, nj) in enumerate(zip(offsets, dimensions)):
            hessian[i][j][:, :] = second[oi:oi + ni, oj:oj + nj]

    return float(value_of(result))
