"""Tests for the dual arithmetic engine."""

import math

import numpy as np
import pytest

from dualopt.autodiff import (
    Dual,
    absolute,
    arccos,
    arcsin,
    arctan,
    cos,
    cosh,
    dot,
    exp,
    hypot,
    log,
    log1p,
    pow,
    seed_gradient,
    seed_hessian,
    sin,
    sinh,
    sqrt,
    sum,
    tan,
    tanh,
    value_of,
)


def first_order(value, direction=0, size=1):
    """Order-1 dual seeded along one direction."""
    return seed_gradient([np.full(size, value)])[0][direction]


def second_order(value):
    """Order-2 dual of a single scalar variable."""
    return seed_hessian([np.array([value])])[0][0]


class TestOrderOne:
    """Arithmetic on order-1 duals against closed-form derivatives."""

    def test_product_rule(self):
        """u*v = (u0 v0, u0 v̇ + v0 u̇)."""
        u, v = seed_gradient([np.array([3.0, -2.0])])[0]
        w = u * v
        assert w.real == -6.0
        np.testing.assert_array_equal(w.eps, [-2.0, 3.0])

    def test_quotient_rule(self):
        u, v = seed_gradient([np.array([3.0, 2.0])])[0]
        w = u / v
        assert w.real == pytest.approx(1.5)
        np.testing.assert_allclose(w.eps, [1 / 2.0, -3.0 / 4.0])

    def test_sqrt(self):
        """sqrt(u) = (√u0, u̇ / (2√u0))."""
        u = first_order(4.0)
        w = sqrt(u)
        assert w.real == 2.0
        assert w.eps[0] == pytest.approx(0.25)

    def test_constants_on_both_sides(self):
        u = first_order(2.0)
        assert (3.0 + u).eps[0] == 1.0
        assert (3.0 - u).real == 1.0
        assert (3.0 - u).eps[0] == -1.0
        assert (u - 3.0).eps[0] == 1.0
        assert (3.0 * u).eps[0] == 3.0
        assert (u / 4.0).eps[0] == 0.25
        assert (1.0 / u).eps[0] == pytest.approx(-0.25)
        assert (-u).eps[0] == -1.0
        assert (+u) is u

    def test_numpy_scalar_constants(self):
        """numpy scalars act as constants, never strip the tangent."""
        u = first_order(2.0)
        w = np.float64(3.0) * u
        assert isinstance(w, Dual)
        assert w.eps[0] == pytest.approx(3.0)

    @pytest.mark.parametrize(
        "fn, x, derivative",
        [
            (sin, 0.7, math.cos(0.7)),
            (cos, 0.7, -math.sin(0.7)),
            (tan, 0.7, 1.0 / math.cos(0.7) ** 2),
            (arcsin, 0.3, 1.0 / math.sqrt(1 - 0.09)),
            (arccos, 0.3, -1.0 / math.sqrt(1 - 0.09)),
            (arctan, 0.3, 1.0 / 1.09),
            (sinh, 0.5, math.cosh(0.5)),
            (cosh, 0.5, math.sinh(0.5)),
            (tanh, 0.5, 1.0 - math.tanh(0.5) ** 2),
            (exp, 0.5, math.exp(0.5)),
            (log, 2.5, 1.0 / 2.5),
            (log1p, 2.5, 1.0 / 3.5),
            (sqrt, 2.5, 0.5 / math.sqrt(2.5)),
        ],
    )
    def test_elementary_derivatives(self, fn, x, derivative):
        w = fn(first_order(x))
        assert w.real == fn(np.float64(x))
        assert w.eps[0] == pytest.approx(derivative, rel=1e-12)

    def test_power_rules(self):
        u = first_order(1.5)
        assert (u ** 3).eps[0] == pytest.approx(3 * 1.5 ** 2)
        assert (2.0 ** u).eps[0] == pytest.approx(2.0 ** 1.5 * math.log(2.0))
        assert pow(u, 0.5).eps[0] == pytest.approx(0.5 / math.sqrt(1.5))

    def test_dual_exponent(self):
        """d/dx x^y and d/dy x^y for a dual exponent."""
        x, y = seed_gradient([np.array([1.5, 2.5])])[0]
        w = x ** y
        assert w.real == pytest.approx(1.5 ** 2.5)
        np.testing.assert_allclose(
            w.eps, [2.5 * 1.5 ** 1.5, math.log(1.5) * 1.5 ** 2.5], rtol=1e-12
        )

    def test_zero_power_at_zero(self):
        """x**0 has derivative 0 everywhere, including x = 0."""
        w = first_order(0.0) ** 0
        assert w.real == 1.0
        assert w.eps[0] == 0.0

    def test_absolute_and_hypot(self):
        u = first_order(-2.0)
        assert absolute(u).real == 2.0
        assert absolute(u).eps[0] == -1.0
        x, y = seed_gradient([np.array([3.0, 4.0])])[0]
        h = hypot(x, y)
        assert h.real == 5.0
        np.testing.assert_allclose(h.eps, [0.6, 0.8])

    def test_comparisons_use_base_value(self):
        u = first_order(2.0)
        assert u > 1.0
        assert u >= 2.0
        assert u < 3.0
        assert u <= second_order(2.0)
        assert max(u, first_order(1.0)) is u

    def test_equality_uses_base_value(self):
        u = first_order(2.0)
        assert u == 2.0
        assert 2.0 == u
        assert u == second_order(2.0)
        assert u == first_order(2.0)
        assert u != 3.0
        assert not (u != 2.0)
        assert u != "2.0"

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(first_order(1.0))

    def test_sequential_sum_and_dot(self):
        block = seed_gradient([np.array([0.5, 1.5, -2.0])])[0]
        s = sum(block * block)
        assert s.real == (0.0 + 0.25 + 2.25) + 4.0
        np.testing.assert_array_equal(s.eps, [1.0, 3.0, -4.0])
        d = dot(block, [1.0, 2.0, 3.0])
        np.testing.assert_array_equal(d.eps, [1.0, 2.0, 3.0])
        assert sum([]) == 0.0
        with pytest.raises(ValueError):
            dot(block, [1.0])


class TestOrderTwo:
    """Nested duals: second derivatives of one scalar variable."""

    @pytest.mark.parametrize(
        "fn, x, first, second",
        [
            (sin, 0.7, math.cos(0.7), -math.sin(0.7)),
            (exp, 0.4, math.exp(0.4), math.exp(0.4)),
            (log, 2.0, 0.5, -0.25),
            (sqrt, 2.0, 0.5 / math.sqrt(2.0), -0.25 * 2.0 ** -1.5),
            (tanh, 0.3, 1 - math.tanh(0.3) ** 2,
             -2 * math.tanh(0.3) * (1 - math.tanh(0.3) ** 2)),
        ],
    )
    def test_second_derivatives(self, fn, x, first, second):
        r = fn(second_order(x))
        assert r.order == 2
        assert value_of(r) == fn(np.float64(x))
        assert r.real.eps[0] == pytest.approx(first, rel=1e-12)
        assert r.eps[0].real == pytest.approx(first, rel=1e-12)
        assert r.eps[0].eps[0] == pytest.approx(second, rel=1e-12)

    def test_mixed_partials_symmetric(self):
        """∂²f/∂x∂y = ∂²f/∂y∂x for f = x² y + exp(x y)."""
        x, y = seed_hessian([np.array([0.3, 1.7])])[0]
        r = x * x * y + exp(x * y)
        assert r.eps[0].eps[1] == pytest.approx(r.eps[1].eps[0], rel=1e-14)
        expected = 2 * 0.3 + math.exp(0.51) * (1 + 0.51)
        assert r.eps[0].eps[1] == pytest.approx(expected, rel=1e-12)

    def test_lower_order_dual_is_outer_constant(self):
        """An order-1 dual is constant along the outer directions of an order-2 dual."""
        x = second_order(2.0)
        c = first_order(3.0)
        r = x * c
        assert r.order == 2
        assert value_of(r) == 6.0
        # Inner level: both factors vary along direction 0
        assert r.real.eps[0] == pytest.approx(5.0)
        # Outer level: only x varies
        assert r.eps[0].real == pytest.approx(3.0)


class TestNumpyInterop:
    """Function bodies may use numpy ufuncs and object arrays."""

    def test_ufunc_on_object_array(self):
        block = seed_gradient([np.array([0.1, 0.2, 0.3])])[0]
        r = np.sum(np.sin(block) * block)
        expected = [math.cos(v) * v + math.sin(v) for v in (0.1, 0.2, 0.3)]
        np.testing.assert_allclose(r.eps, expected, rtol=1e-12)

    def test_ufunc_on_single_dual(self):
        r = np.exp(first_order(0.5))
        assert isinstance(r, Dual)
        assert r.eps[0] == pytest.approx(math.exp(0.5))

    def test_math_module_rejects_duals(self):
        """math.* would silently drop derivatives, so it must fail loudly."""
        with pytest.raises(TypeError):
            math.sin(first_order(0.5))
        with pytest.raises(TypeError):
            float(first_order(0.5))

    def test_plain_inputs_use_numpy(self):
        assert sin(0.5) == np.sin(0.5)
        np.testing.assert_array_equal(sqrt(np.array([4.0, 9.0])), [2.0, 3.0])


class TestDomainFaults:
    """Invalid numeric results propagate untouched."""

    def test_sqrt_of_negative_is_nan(self):
        with np.errstate(all="ignore"):
            r = sqrt(second_order(-1.0))
        assert np.isnan(value_of(r))
        assert np.isnan(r.real.eps[0])
        assert np.isnan(r.eps[0].eps[0])

    def test_log_of_zero_is_infinite(self):
        with np.errstate(all="ignore"):
            r = log(first_order(0.0))
        assert r.real == -np.inf
        assert np.isinf(r.eps[0])
