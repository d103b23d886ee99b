"""Pytest configuration and fixtures for dualopt tests."""

import numpy as np
import pytest

from dualopt import cos, sin, sqrt


@pytest.fixture
def seed():
    """Random seed for reproducibility."""
    return 42


@pytest.fixture
def sqrt_body():
    """Two-block body f(x, y) = y·√x + sin(√x) with scalar blocks."""

    def body(x, y):
        z = sqrt(x[0])
        return y[0] * z + sin(z)

    return body


@pytest.fixture
def one_block_body():
    """One block of size 2: f(x) = sin(x0) + cos(x1) + 1.4·x0·x1 + 1."""

    def body(x):
        return sin(x[0]) + cos(x[1]) + 1.4 * x[0] * x[1] + 1.0

    return body


@pytest.fixture
def two_block_body():
    """Two blocks of size 1: f(x, y) = sin(x) + cos(y) + 1.4·x·y + 1."""

    def body(x, y):
        return sin(x[0]) + cos(y[0]) + 1.4 * x[0] * y[0] + 1.0

    return body


@pytest.fixture
def rosenbrock_pair():
    """Body of one Rosenbrock summand over two scalar blocks."""

    def body(x, y):
        return 100.0 * (y[0] - x[0] * x[0]) ** 2 + (1.0 - x[0]) ** 2

    return body


@pytest.fixture
def random_point(seed):
    """Random point for a (2, 1, 3)-block function, kept away from singularities."""
    rng = np.random.default_rng(seed)
    return [rng.uniform(0.2, 1.0, size=2), rng.uniform(0.2, 1.0, size=1), rng.uniform(0.2, 1.0, size=3)]
