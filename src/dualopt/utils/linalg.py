"""Linear algebra utilities with numerical stability."""

from typing import Tuple

import numpy as np
import torch


def newton_step(
    hessian: np.ndarray,
    gradient: np.ndarray,
    min_eigenvalue: float = 1e-10,
) -> Tuple[np.ndarray, float]:
    """
    Solve (H + τI) p = -g for a descent direction p.

    Uses adaptive eigenvalue regularization: τ = 0 when H is safely
    positive definite, otherwise τ lifts the smallest eigenvalue to
    min_eigenvalue * max(1, |λ|_max).

    Args:
        hessian: (n, n) symmetric matrix
        gradient: (n,) gradient
        min_eigenvalue: Relative eigenvalue floor

    Returns:
        (p, τ) with p of shape (n,)
    """
    n = gradient.shape[0]
    if n == 0:
        return np.zeros(0), 0.0

    H = torch.as_tensor(hessian, dtype=torch.float64)
    g = torch.as_tensor(gradient, dtype=torch.float64)
    H = 0.5 * (H + H.T)
    eye = torch.eye(n, dtype=H.dtype)

    # Check minimum eigenvalue
    try:
        eigvals = torch.linalg.eigvalsh(H)
        floor = min_eigenvalue * max(1.0, eigvals.abs().max().item())
        min_eig = eigvals.min().item()
        tau = 0.0 if min_eig >= floor else floor - min_eig
    except RuntimeError:
        # If eigenvalue computation fails (e.g. NaN entries), fall back to a gradient step
        return -np.asarray(gradient, dtype=np.float64), float("inf")

    regularized = H + tau * eye

    try:
        # Try direct solve first
        p = torch.linalg.solve(regularized, -g)
    except RuntimeError:
        # Fall back to pseudo-inverse
        p = -(torch.linalg.pinv(regularized) @ g)

    return p.numpy(), tau


def condition_number(matrix: np.ndarray) -> float:
    """
    Compute condition number of a matrix.

    Args:
        matrix: (d, d) matrix

    Returns:
        Condition number (ratio of largest to smallest singular value)
    """
    if matrix.size == 0:
        return 1.0
    s = torch.linalg.svdvals(torch.as_tensor(matrix, dtype=torch.float64))
    if s.min() < 1e-300:
        return float('inf')
    return (s.max() / s.min()).item()
