"""Tests for the regularized Newton step and condition numbers."""

import numpy as np
import pytest

from dualopt.utils.linalg import condition_number, newton_step


class TestNewtonStep:
    def test_positive_definite_is_exact(self):
        H = np.array([[4.0, 1.0], [1.0, 3.0]])
        g = np.array([1.0, 2.0])
        p, tau = newton_step(H, g)
        assert tau == 0.0
        np.testing.assert_allclose(p, -np.linalg.solve(H, g))

    def test_indefinite_is_shifted(self):
        """An indefinite Hessian still yields a descent direction."""
        H = np.array([[1.0, 0.0], [0.0, -2.0]])
        g = np.array([1.0, 1.0])
        p, tau = newton_step(H, g)
        assert tau > 2.0
        assert np.dot(g, p) < 0

    def test_asymmetric_input_is_symmetrized(self):
        H = np.array([[2.0, 1.0], [0.0, 2.0]])
        g = np.array([1.0, 0.0])
        p, _ = newton_step(H, g)
        S = 0.5 * (H + H.T)
        np.testing.assert_allclose(p, -np.linalg.solve(S, g))

    def test_empty(self):
        p, tau = newton_step(np.zeros((0, 0)), np.zeros(0))
        assert p.shape == (0,)
        assert tau == 0.0


class TestConditionNumber:
    def test_diagonal(self):
        assert condition_number(np.diag([1.0, 4.0])) == pytest.approx(4.0)

    def test_singular(self):
        assert condition_number(np.zeros((2, 2))) == float("inf")

    def test_empty(self):
        assert condition_number(np.zeros((0, 0))) == 1.0
