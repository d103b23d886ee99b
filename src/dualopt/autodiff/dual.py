"""
Forward-mode dual numbers.

A Dual pairs a value with a tangent vector over D directions. The value
may itself be a Dual, which nests two levels of forward mode:

    order 1:  (v, v̇)    v: float    v̇: (D,) float64
    order 2:  (u, u̇)    u: Dual     u̇: (D,) object array of order-1 Duals

Every operator below is written once against the underlying scalar and
reused at both levels. Tangent arrays are never modified in place.
"""

import numbers

import numpy as np

_CONSTANT = "constant"
_PARTNER = "partner"


def value_of(x):
    """Innermost plain value of a (possibly nested) dual number."""
    while isinstance(x, Dual):
        x = x.real
    return x


def _elementary(name, x):
    """Apply the numpy ufunc `name` to a plain value, or the Dual method to a Dual."""
    if isinstance(x, Dual):
        return getattr(x, name)()
    return getattr(np, name)(x)


class Dual:
    """
    Dual number with a dense tangent vector.

    Args:
        real: Value, a float for order 1 or a Dual for order 2
        eps: (D,) tangent; float64 for order 1, object array for order 2

    Elementary functions are methods named after their numpy ufuncs, so
    ``np.sin`` on an object array of Duals dispatches to ``Dual.sin``.
    """

    __slots__ = ("real", "eps", "order")

    def __init__(self, real, eps):
        self.real = real
        self.eps = eps
        self.order = real.order + 1 if isinstance(real, Dual) else 1

    @property
    def size(self) -> int:
        """Number of tangent directions D."""
        return len(self.eps)

    def __repr__(self) -> str:
        return f"Dual(real={self.real!r}, eps={self.eps!r})"

    def _kind(self, other):
        # Lower-order duals are constants here; higher orders handle us instead.
        if isinstance(other, Dual):
            if other.order == self.order:
                return _PARTNER
            if other.order < self.order:
                return _CONSTANT
            return None
        if isinstance(other, numbers.Real):
            return _CONSTANT
        return None

    def _chain(self, value, derivative):
        return Dual(value, self.eps * derivative)

    # ----- unary
    def __neg__(self):
        return Dual(-self.real, -self.eps)

    def __pos__(self):
        return self

    def __abs__(self):
        if value_of(self) < 0:
            return -self
        return self

    # ----- addition
    def __add__(self, other):
        kind = self._kind(other)
        if kind is _PARTNER:
            return Dual(self.real + other.real, self.eps + other.eps)
        if kind is _CONSTANT:
            return Dual(self.real + other, self.eps)
        return NotImplemented

    def __radd__(self, other):
        if self._kind(other) is _CONSTANT:
            return Dual(other + self.real, self.eps)
        return NotImplemented

    # ----- subtraction
    def __sub__(self, other):
        kind = self._kind(other)
        if kind is _PARTNER:
            return Dual(self.real - other.real, self.eps - other.eps)
        if kind is _CONSTANT:
            return Dual(self.real - other, self.eps)
        return NotImplemented

    def __rsub__(self, other):
        if self._kind(other) is _CONSTANT:
            return Dual(other - self.real, -self.eps)
        return NotImplemented

    # ----- multiplication
    def __mul__(self, other):
        kind = self._kind(other)
        if kind is _PARTNER:
            return Dual(
                self.real * other.real,
                self.eps * other.real + other.eps * self.real,
            )
        if kind is _CONSTANT:
            return Dual(self.real * other, self.eps * other)
        return NotImplemented

    def __rmul__(self, other):
        if self._kind(other) is _CONSTANT:
            return Dual(other * self.real, self.eps * other)
        return NotImplemented

    # ----- division
    def __truediv__(self, other):
        kind = self._kind(other)
        if kind is _PARTNER:
            real = self.real / other.real
            return Dual(real, (self.eps - other.eps * real) / other.real)
        if kind is _CONSTANT:
            return Dual(self.real / other, self.eps / other)
        return NotImplemented

    def __rtruediv__(self, other):
        if self._kind(other) is _CONSTANT:
            real = other / self.real
            return Dual(real, self.eps * (-real / self.real))
        return NotImplemented

    # ----- power
    def __pow__(self, other):
        kind = self._kind(other)
        if kind is _PARTNER:
            real = self.real ** other.real
            eps = (
                self.eps * (other.real * self.real ** (other.real - 1))
                + other.eps * (_elementary("log", self.real) * real)
            )
            return Dual(real, eps)
        if kind is _CONSTANT:
            real = self.real ** other
            if isinstance(other, numbers.Real) and other == 0:
                return Dual(real, self.eps * 0.0)
            return self._chain(real, other * self.real ** (other - 1))
        return NotImplemented

    def __rpow__(self, other):
        if self._kind(other) is _CONSTANT:
            real = other ** self.real
            return self._chain(real, real * _elementary("log", other))
        return NotImplemented

    # ----- comparisons (on the innermost value)
    # Unhashable: equality compares base values only.
    __hash__ = None

    def __eq__(self, other):
        if isinstance(other, (Dual, numbers.Real)):
            return value_of(self) == value_of(other)
        return NotImplemented

    def __ne__(self, other):
        if isinstance(other, (Dual, numbers.Real)):
            return value_of(self) != value_of(other)
        return NotImplemented

    def __lt__(self, other):
        return value_of(self) < value_of(other)

    def __le__(self, other):
        return value_of(self) <= value_of(other)

    def __gt__(self, other):
        return value_of(self) > value_of(other)

    def __ge__(self, other):
        return value_of(self) >= value_of(other)

    # ----- elementary functions
    def sin(self):
        return self._chain(_elementary("sin", self.real), _elementary("cos", self.real))

    def cos(self):
        return self._chain(_elementary("cos", self.real), -_elementary("sin", self.real))

    def tan(self):
        t = _elementary("tan", self.real)
        return self._chain(t, 1.0 + t * t)

    def arcsin(self):
        x = self.real
        return self._chain(_elementary("arcsin", x), 1.0 / _elementary("sqrt", 1.0 - x * x))

    def arccos(self):
        x = self.real
        return self._chain(_elementary("arccos", x), -1.0 / _elementary("sqrt", 1.0 - x * x))

    def arctan(self):
        x = self.real
        return self._chain(_elementary("arctan", x), 1.0 / (1.0 + x * x))

    def sinh(self):
        return self._chain(_elementary("sinh", self.real), _elementary("cosh", self.real))

    def cosh(self):
        return self._chain(_elementary("cosh", self.real), _elementary("sinh", self.real))

    def tanh(self):
        t = _elementary("tanh", self.real)
        return self._chain(t, 1.0 - t * t)

    def exp(self):
        e = _elementary("exp", self.real)
        return self._chain(e, e)

    def log(self):
        return self._chain(_elementary("log", self.real), 1.0 / self.real)

    def log1p(self):
        return self._chain(_elementary("log1p", self.real), 1.0 / (1.0 + self.real))

    def sqrt(self):
        s = _elementary("sqrt", self.real)
        return Dual(s, self.eps / (2.0 * s))
