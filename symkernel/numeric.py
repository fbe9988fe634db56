# symkernel - Numeric Tower
# Copyright (c) 2024 symkernel Contributors. All rights reserved.

"""
Exact and arbitrary precision numbers.

The tower is Integer ⊂ Rational ⊂ Real ⊂ Complex, mirrored by the class
hierarchy: every Integer is a Rational, every Rational a Real, and so on.
Constructors always return the most specific type able to hold the value
exactly:

    >>> Rational(6, 3)
    2
    >>> type(Complex(5, 0)).__name__
    'Integer'
    >>> Integer(6) / Integer(3)
    2

Integer and Rational arithmetic is exact (``int`` and ``Fraction``). Real and
Complex arithmetic runs on mpmath at ``Config.precision`` digits; results that
land within ``Config.zero_tolerance`` of an integer, or that a short continued
fraction reproduces, are turned back into exact numbers.

No operation raises for mathematical reasons. Undefined results are NaN,
overflowing ones are signed infinities:

    >>> Real.nan + 1
    NaN
    >>> Real.positive_infinity - Real.positive_infinity
    NaN
    >>> Integer(1) / Integer(0)
    +oo
"""

from __future__ import annotations
from abc import abstractmethod
import logging
import math
import operator
from fractions import Fraction
from typing import Any, Callable, ClassVar, Optional, Union

from mpmath.ctx_mp import MPContext

from .config import get_config
from .domain import Domain
from .entity import Entity, Priority, WEIGHT, WEIGHT_MAJOR
from .exceptions import InvalidNumberError, UnsupportedOperandError
from .rational import find_rational, integer_log, integer_root, to_fraction

logger = logging.getLogger(__name__)


# Type for things that can be converted to numbers
NumberLike = Union['Number', int, float, complex, Fraction, str]

_INTEGER, _RATIONAL, _REAL, _COMPLEX = range(4)

# Integer powers of exact complex numbers above this are computed numerically
_MAX_EXACT_POWER = 4096
# Exact roots are only searched for up to this degree
_MAX_ROOT_DEGREE = 64
# math.factorial is used up to this argument
_MAX_EXACT_FACTORIAL = 10000
# Trial divisors tried by the totient before giving up
_MAX_TOTIENT_DIVISOR = 10**6

_mp = MPContext()


def _context() -> MPContext:
    """The private mpmath context, synchronised with the active precision."""
    precision = get_config().precision
    if _mp.dps != precision:
        _mp.dps = precision
    return _mp


def _tolerance() -> Any:
    tol = get_config().zero_tolerance
    return _context().mpf(tol.numerator) / tol.denominator


class Number(Entity):
    """
    Base class of the numeric tower.

    Numbers are leaves of the expression tree and evaluate to themselves.
    """

    _tower_level: ClassVar[int] = _COMPLEX

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def _init_direct_children(self):
        return ()

    def _rebuild(self, children):
        return self

    def _inner_eval(self) -> Entity:
        return self

    def _inner_simplify(self) -> Entity:
        return self

    @property
    def codomain(self) -> Domain:
        return Domain.ANY

    @property
    @abstractmethod
    def is_exact(self) -> bool:
        """Whether the value is free of rounding error."""
        ...

    @property
    def is_zero(self) -> bool:
        return False

    @property
    def is_real(self) -> bool:
        return isinstance(self, Real)

    def approx_equals(self, other: NumberLike, tolerance: Optional[Fraction] = None) -> bool:
        """
        Compare within ``tolerance`` (``Config.equality_tolerance`` by default).

        NaN equals NaN and each infinity equals itself.
        """
        other = number(other)
        if self == other:
            return True
        if self.is_nan or other.is_nan or not (self.is_finite and other.is_finite):
            return False
        if tolerance is None:
            tolerance = get_config().equality_tolerance
        distance = abs_(subtract(self, other))
        return _ordered(distance, _from_fraction(Fraction(tolerance)), operator.le)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if isinstance(other, bool):
            return False
        if isinstance(other, (int, float, complex, Fraction)):
            other = number(other)
        if not isinstance(other, Number):
            return NotImplemented if not isinstance(other, Entity) else False
        return type(self) is type(other) and self._leaf_key() == other._leaf_key()

    def __hash__(self) -> int:
        return hash(self._leaf_key())

    # Arithmetic stays inside the tower when both operands are numbers and
    # builds expression nodes otherwise

    def __add__(self, other):
        n = _coerce(other)
        return add(self, n) if n is not None else Entity.__add__(self, other)

    def __radd__(self, other):
        n = _coerce(other)
        return add(n, self) if n is not None else Entity.__radd__(self, other)

    def __sub__(self, other):
        n = _coerce(other)
        return subtract(self, n) if n is not None else Entity.__sub__(self, other)

    def __rsub__(self, other):
        n = _coerce(other)
        return subtract(n, self) if n is not None else Entity.__rsub__(self, other)

    def __mul__(self, other):
        n = _coerce(other)
        return multiply(self, n) if n is not None else Entity.__mul__(self, other)

    def __rmul__(self, other):
        n = _coerce(other)
        return multiply(n, self) if n is not None else Entity.__rmul__(self, other)

    def __truediv__(self, other):
        n = _coerce(other)
        return divide(self, n) if n is not None else Entity.__truediv__(self, other)

    def __rtruediv__(self, other):
        n = _coerce(other)
        return divide(n, self) if n is not None else Entity.__rtruediv__(self, other)

    def __pow__(self, other):
        n = _coerce(other)
        return power(self, n) if n is not None else Entity.__pow__(self, other)

    def __rpow__(self, other):
        n = _coerce(other)
        return power(n, self) if n is not None else Entity.__rpow__(self, other)

    def __neg__(self):
        return negate(self)

    def __abs__(self):
        return abs_(self)

    def __lt__(self, other):
        return _compare(self, other, operator.lt)

    def __le__(self, other):
        return _compare(self, other, operator.le)

    def __gt__(self, other):
        return _compare(self, other, operator.gt)

    def __ge__(self, other):
        return _compare(self, other, operator.ge)


class Complex(Number):
    """
    A complex number with Real components.

    Downcasts to Real when the imaginary part is zero (or within the zero
    tolerance), and to NaN when either part is NaN.
    """

    def __new__(cls, real: NumberLike = 0, imaginary: NumberLike = 0):
        if isinstance(real, complex) and not isinstance(imaginary, Number) and imaginary == 0:
            real, imaginary = real.real, real.imag
        if hasattr(real, '_mpc_') and imaginary == 0:
            return _from_mp(_context().convert(real))
        return _make_complex(_as_real(real), _as_real(imaginary))

    def __reduce__(self):
        return (Complex, (self._real, self._imaginary))

    @property
    def real(self) -> Real:
        return self._real

    @property
    def imaginary(self) -> Real:
        return self._imaginary

    @property
    def is_exact(self) -> bool:
        return self.real.is_exact and self.imaginary.is_exact

    @property
    def _this_is_finite(self) -> bool:
        return self.real.is_finite and self.imaginary.is_finite

    @property
    def priority(self) -> Priority:
        if not self.real.is_zero:
            return Priority.SUM
        if self.imaginary == 1:
            return Priority.LEAF
        return Priority.PRODUCT

    def _leaf_key(self) -> Any:
        return (self.real._leaf_key(), self.imaginary._leaf_key())

    def _own_simplicity(self) -> float:
        return WEIGHT + self.real._own_simplicity() + self.imaginary._own_simplicity()

    def __complex__(self) -> complex:
        return complex(float(self.real), float(self.imaginary))

    def _render(self) -> str:
        im = self.imaginary
        if im == 1:
            im_text = 'i'
        elif im == -1:
            im_text = '-i'
        else:
            im_text = f"{im}i"
        if self.real.is_zero:
            return im_text
        if _ordered(im, ZERO, operator.lt):
            tail = 'i' if im == -1 else f"{negate(im)}i"
            return f"{self.real} - {tail}"
        return f"{self.real} + {im_text}"


class Real(Complex):
    """
    An arbitrary precision real number, or one of +oo, -oo and NaN.

    Finite Reals come from rounding operations and are inexact; the three
    special values are exact.
    """

    _tower_level: ClassVar[int] = _REAL

    # Filled in below once the class exists
    nan: ClassVar[Real]
    positive_infinity: ClassVar[Real]
    negative_infinity: ClassVar[Real]

    def __new__(cls, value: NumberLike = 0):
        return _real_from(value)

    def __reduce__(self):
        return (_raw_real, (self._value,))

    @property
    def value(self) -> Any:
        """The underlying mpmath value."""
        return self._value

    @property
    def real(self) -> Real:
        return self

    @property
    def imaginary(self) -> Real:
        return ZERO

    @property
    def is_exact(self) -> bool:
        return not _mp.isfinite(self._value)

    @property
    def is_nan(self) -> bool:
        return bool(_mp.isnan(self._value))

    @property
    def is_negative(self) -> bool:
        return not self.is_nan and self._value < 0

    @property
    def _this_is_finite(self) -> bool:
        return bool(_mp.isfinite(self._value))

    @property
    def priority(self) -> Priority:
        return Priority.SUM if self.is_negative else Priority.LEAF

    def _leaf_key(self) -> Any:
        return 'nan' if self.is_nan else self._value

    def _own_simplicity(self) -> float:
        return WEIGHT + (WEIGHT_MAJOR if self.is_negative else 0.0)

    def __float__(self) -> float:
        return float(self._value)

    def __complex__(self) -> complex:
        return complex(float(self))

    def _render(self) -> str:
        return _render_mpf(self._value)


class Rational(Real):
    """
    An exact fraction in lowest terms with denominator greater than one.

    ``Rational(a, 1)`` and any fraction that reduces to a whole number
    construct an Integer instead.
    """

    _tower_level: ClassVar[int] = _RATIONAL

    def __new__(cls, numerator: Union[int, Fraction, Integer] = 0, denominator: Union[int, Integer] = 1):
        if isinstance(numerator, Fraction) and denominator == 1:
            return _from_fraction(numerator)
        num = _as_int(numerator, 'numerator')
        den = _as_int(denominator, 'denominator')
        if den == 0:
            raise InvalidNumberError("Rational denominator must not be zero", denominator)
        return _from_fraction(Fraction(num, den))

    def __reduce__(self):
        return (Rational, (self.numerator, self.denominator))

    @property
    def value(self) -> Fraction:
        return self._value

    @property
    def numerator(self) -> int:
        return self._value.numerator

    @property
    def denominator(self) -> int:
        return self._value.denominator

    @property
    def is_exact(self) -> bool:
        return True

    @property
    def is_nan(self) -> bool:
        return False

    @property
    def is_negative(self) -> bool:
        return self._value < 0

    @property
    def _this_is_finite(self) -> bool:
        return True

    @property
    def priority(self) -> Priority:
        return Priority.SUM if self.is_negative else Priority.PRODUCT

    def _leaf_key(self) -> Any:
        return self._value

    def _own_simplicity(self) -> float:
        extra = WEIGHT if self.numerator == 1 else 0.0
        return super()._own_simplicity() + extra

    def __float__(self) -> float:
        return float(self._value)

    def _render(self) -> str:
        return f"{self.numerator}/{self.denominator}"


class Integer(Rational):
    """An arbitrary precision integer."""

    _tower_level: ClassVar[int] = _INTEGER

    def __new__(cls, value: Union[int, Fraction, Integer] = 0):
        if isinstance(value, Integer):
            return value
        obj = object.__new__(Integer)
        object.__setattr__(obj, '_value', _as_int(value, 'value'))
        return obj

    def __reduce__(self):
        return (Integer, (self._value,))

    @property
    def value(self) -> int:
        return self._value

    @property
    def numerator(self) -> int:
        return self._value

    @property
    def denominator(self) -> int:
        return 1

    @property
    def is_zero(self) -> bool:
        return self._value == 0

    @property
    def priority(self) -> Priority:
        return Priority.SUM if self._value < 0 else Priority.LEAF

    def _own_simplicity(self) -> float:
        return WEIGHT + (WEIGHT_MAJOR if self._value < 0 else 0.0)

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def _render(self) -> str:
        return str(self._value)


# ----------------------------------------------------------------------
# Construction helpers
# ----------------------------------------------------------------------

def _as_int(value: Any, role: str) -> int:
    if isinstance(value, Integer):
        return value.value
    if isinstance(value, Fraction) and value.denominator == 1:
        return value.numerator
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidNumberError(
            f"Integer {role} expected, got {type(value).__name__} {value!r}", value
        )
    return value


def _raw_real(value: Any) -> Real:
    obj = object.__new__(Real)
    object.__setattr__(obj, '_value', value)
    return obj


def _from_fraction(value: Fraction) -> Rational:
    if value.denominator == 1:
        return Integer(value.numerator)
    obj = object.__new__(Rational)
    object.__setattr__(obj, '_value', value)
    return obj


def _real_from_mpf(value: Any) -> Real:
    """Wrap an mpmath real, downcasting it to an exact number if possible."""
    mp = _context()
    if mp.isnan(value):
        return NAN
    if mp.isinf(value):
        return POSITIVE_INFINITY if value > 0 else NEGATIVE_INFINITY
    if not value:
        return ZERO
    # Beyond the working precision every value looks integral
    if mp.mag(value) >= mp.prec - 32:
        return _raw_real(value)
    config = get_config()
    tolerance = _tolerance()
    nearest = mp.nint(value)
    if abs(value - nearest) < tolerance:
        return Integer(int(nearest))
    if abs(value) <= config.max_rational_part:
        found = find_rational(value, tolerance, config.max_rational_part,
                              config.rational_search_depth)
        if found is not None:
            return _from_fraction(found)
    return _raw_real(value)


def _real_from(value: Any) -> Real:
    if isinstance(value, Real):
        return value
    if isinstance(value, Complex):
        raise InvalidNumberError(f"{value} is not a real number", value)
    if isinstance(value, bool):
        raise InvalidNumberError("bool is not a number", value)
    if isinstance(value, int):
        return Integer(value)
    if isinstance(value, Fraction):
        return _from_fraction(value)
    if isinstance(value, float):
        if math.isnan(value):
            return NAN
        if math.isinf(value):
            return POSITIVE_INFINITY if value > 0 else NEGATIVE_INFINITY
        return _from_fraction(to_fraction(value))
    if isinstance(value, str):
        try:
            return _from_fraction(Fraction(value))
        except ValueError:
            pass
        try:
            return _real_from_mpf(_context().mpf(value))
        except ValueError as error:
            raise InvalidNumberError(f"Cannot parse {value!r} as a real number", value) from error
    if hasattr(value, '_mpf_'):
        return _real_from_mpf(_context().convert(value))
    raise InvalidNumberError(f"Cannot build a real number from {type(value).__name__}", value)


def _as_real(value: Any) -> Real:
    return value if isinstance(value, Real) else _real_from(value)


def _make_complex(real: Real, imaginary: Real) -> Complex:
    if real.is_nan or imaginary.is_nan:
        return NAN
    if imaginary.is_zero:
        return real
    if imaginary.is_finite and not imaginary.is_exact:
        if abs(imaginary.value) < _tolerance():
            return real
    obj = object.__new__(Complex)
    object.__setattr__(obj, '_real', real)
    object.__setattr__(obj, '_imaginary', imaginary)
    return obj


def _from_mp(value: Any) -> Complex:
    """Wrap an mpmath real or complex result."""
    if hasattr(value, '_mpc_'):
        return _make_complex(_real_from_mpf(value.real), _real_from_mpf(value.imag))
    return _real_from_mpf(value)


def number(value: NumberLike) -> Number:
    """
    Convert a Python or mpmath value to the most specific Number.

    Examples:
        >>> number(0.5)
        1/2
        >>> number(2 + 0j)
        2

    Raises:
        UnsupportedOperandError: For values that are not numbers.
    """
    if isinstance(value, Number):
        return value
    if isinstance(value, complex) or hasattr(value, '_mpc_'):
        return Complex(value)
    if isinstance(value, bool):
        raise UnsupportedOperandError(value)
    if isinstance(value, (int, float, Fraction, str)) or hasattr(value, '_mpf_'):
        return _real_from(value)
    raise UnsupportedOperandError(value)


def _coerce(value: Any) -> Optional[Number]:
    if isinstance(value, Number):
        return value
    if isinstance(value, bool) or isinstance(value, Entity):
        return None
    if isinstance(value, (int, float, complex, Fraction)) or hasattr(value, '_mpf_') \
            or hasattr(value, '_mpc_'):
        return number(value)
    return None


def _render_mpf(value: Any) -> str:
    if _mp.isnan(value):
        return 'NaN'
    if _mp.isinf(value):
        return '+oo' if value > 0 else '-oo'
    return _mp.nstr(value, 15)


# ----------------------------------------------------------------------
# Access at a given tower level
# ----------------------------------------------------------------------

def _fraction(n: Rational) -> Fraction:
    return Fraction(n.value) if isinstance(n, Integer) else n.value


def _mpf(n: Real) -> Any:
    mp = _context()
    if isinstance(n, Integer):
        return mp.mpf(n.value)
    if isinstance(n, Rational):
        return mp.mpf(n.numerator) / n.denominator
    return n.value


def _mpc(n: Complex) -> Any:
    if isinstance(n, Real):
        return _mpf(n)
    return _context().mpc(_mpf(n.real), _mpf(n.imaginary))


def _guarded(compute: Callable[[MPContext], Any]) -> Complex:
    """Run an mpmath computation, folding its errors into NaN."""
    mp = _context()
    try:
        return _from_mp(compute(mp))
    except (ZeroDivisionError, ValueError, OverflowError) as error:
        logger.debug("Numeric operation folded to NaN: %s", error)
        return NAN


def _ordered(a: Real, b: Real, op: Callable[[Any, Any], bool]) -> bool:
    # An undefined operand makes the comparison undefined, which reads as true
    if a.is_nan or b.is_nan:
        return True
    if isinstance(a, Rational) and isinstance(b, Rational):
        return op(_fraction(a), _fraction(b))
    return bool(op(_mpf(a), _mpf(b)))


def _compare(a: Number, other: Any, op: Callable[[Any, Any], bool]) -> bool:
    b = _coerce(other)
    if b is None:
        return NotImplemented
    if not isinstance(a, Real) or not isinstance(b, Real):
        raise TypeError(f"Cannot order non-real numbers {a} and {b}")
    return _ordered(a, b, op)


# ----------------------------------------------------------------------
# Arithmetic
# ----------------------------------------------------------------------

def add(a: Complex, b: Complex) -> Complex:
    """a + b"""
    if a.is_nan or b.is_nan:
        return NAN
    level = max(a._tower_level, b._tower_level)
    if level <= _RATIONAL:
        return _from_fraction(_fraction(a) + _fraction(b))
    if level == _REAL:
        return _real_from_mpf(_mpf(a) + _mpf(b))
    return _make_complex(add(a.real, b.real), add(a.imaginary, b.imaginary))


def negate(a: Complex) -> Complex:
    """-a"""
    if isinstance(a, Integer):
        return Integer(-a.value)
    if isinstance(a, Rational):
        return _from_fraction(-a.value)
    if isinstance(a, Real):
        return a if a.is_nan else _raw_real(-a.value)
    return _make_complex(negate(a.real), negate(a.imaginary))


def subtract(a: Complex, b: Complex) -> Complex:
    """a - b"""
    return add(a, negate(b))


def multiply(a: Complex, b: Complex) -> Complex:
    """a * b"""
    if a.is_nan or b.is_nan:
        return NAN
    level = max(a._tower_level, b._tower_level)
    if level <= _RATIONAL:
        return _from_fraction(_fraction(a) * _fraction(b))
    if level == _REAL:
        return _real_from_mpf(_mpf(a) * _mpf(b))
    re = subtract(_component_product(a.real, b.real), _component_product(a.imaginary, b.imaginary))
    im = add(_component_product(a.real, b.imaginary), _component_product(a.imaginary, b.real))
    return _make_complex(re, im)


def _component_product(a: Real, b: Real) -> Real:
    # Inside a complex product a zero component annihilates even infinities
    if a.is_zero or b.is_zero:
        return ZERO
    return multiply(a, b)


def divide(a: Complex, b: Complex) -> Complex:
    """
    a / b

    Division by zero gives a signed infinity, or NaN for ``0 / 0``.
    """
    if a.is_nan or b.is_nan:
        return NAN
    if b.is_zero:
        return _divide_by_zero(a)
    level = max(a._tower_level, b._tower_level)
    if level <= _RATIONAL:
        return _from_fraction(_fraction(a) / _fraction(b))
    if level == _REAL:
        return _real_from_mpf(_mpf(a) / _mpf(b))
    if isinstance(b, Real):
        return _make_complex(divide(a.real, b), divide(a.imaginary, b))
    # (a + bi) / (c + di) = ((ac + bd) + (bc - ad)i) / (c^2 + d^2)
    c, d = b.real, b.imaginary
    norm = add(multiply(c, c), multiply(d, d))
    re = add(multiply(a.real, c), multiply(a.imaginary, d))
    im = subtract(multiply(a.imaginary, c), multiply(a.real, d))
    return _make_complex(divide(re, norm), divide(im, norm))


def _divide_by_zero(a: Complex) -> Complex:
    if a.is_zero:
        return NAN
    if isinstance(a, Real):
        return NEGATIVE_INFINITY if a.is_negative else POSITIVE_INFINITY
    re = ZERO if a.real.is_zero else _divide_by_zero(a.real)
    im = ZERO if a.imaginary.is_zero else _divide_by_zero(a.imaginary)
    return _make_complex(re, im)


def power(base: Complex, exponent: Complex) -> Complex:
    """
    base ** exponent

    Integer exponents of exact numbers and rational exponents of perfect
    powers give exact results. ``0 ** 0`` is 1.
    """
    if base.is_nan or exponent.is_nan:
        return NAN
    if exponent.is_zero:
        return ONE
    if isinstance(exponent, Integer):
        return _integer_power(base, exponent.value)
    if isinstance(exponent, Rational) and isinstance(base, Rational):
        root = _exact_root(_fraction(base), exponent.denominator)
        if root is not None:
            return _integer_power(root, exponent.numerator)
    if base.is_zero:
        if isinstance(exponent, Real):
            return ZERO if not exponent.is_negative else POSITIVE_INFINITY
        return ZERO if _ordered(exponent.real, ZERO, operator.gt) else NAN
    return _guarded(lambda mp: mp.power(_as_mp_base(base), _mpc(exponent)))


def _as_mp_base(base: Complex) -> Any:
    # Negative reals are raised to fractional powers on the principal branch
    if isinstance(base, Real) and base.is_negative:
        return _context().mpc(_mpf(base))
    return _mpc(base)


def _integer_power(base: Complex, n: int) -> Complex:
    if base.is_zero:
        return ZERO if n > 0 else POSITIVE_INFINITY
    if isinstance(base, Rational):
        return _from_fraction(_fraction(base) ** n)
    if base.is_exact and abs(n) <= _MAX_EXACT_POWER:
        result, square, k = ONE, base, abs(n)
        while k:
            if k & 1:
                result = multiply(result, square)
            k >>= 1
            if k:
                square = multiply(square, square)
        return divide(ONE, result) if n < 0 else result
    return _guarded(lambda mp: mp.power(_mpc(base), n))


def _exact_root(value: Fraction, degree: int) -> Optional[Rational]:
    if degree > _MAX_ROOT_DEGREE:
        return None
    sign = 1
    if value < 0:
        if degree % 2 == 0:
            return None
        sign = -1
    num = integer_root(abs(value.numerator), degree)
    den = integer_root(value.denominator, degree)
    if num is None or den is None:
        return None
    return _from_fraction(Fraction(sign * num, den))


# ----------------------------------------------------------------------
# Functions
# ----------------------------------------------------------------------

def sqrt(z: Complex) -> Complex:
    """Principal square root."""
    return power(z, HALF)


def ln(z: Complex) -> Complex:
    """Natural logarithm, principal branch. ``ln(0)`` is -oo."""
    if z.is_nan:
        return NAN
    if z.is_zero:
        return NEGATIVE_INFINITY
    if z == ONE:
        return ZERO
    return _guarded(lambda mp: mp.ln(_as_mp_base(z)))


def log(base: Complex, z: Complex) -> Complex:
    """Logarithm of ``z`` in ``base``; exact when ``z`` is a power of ``base``."""
    if base.is_nan or z.is_nan:
        return NAN
    if isinstance(base, Rational) and isinstance(z, Rational):
        k = integer_log(_fraction(z), _fraction(base))
        if k is not None:
            return Integer(k)
    return divide(ln(z), ln(base))


def sin(z: Complex) -> Complex:
    if z.is_nan:
        return NAN
    if z.is_zero:
        return ZERO
    return _guarded(lambda mp: mp.sin(_mpc(z)))


def cos(z: Complex) -> Complex:
    if z.is_nan:
        return NAN
    if z.is_zero:
        return ONE
    return _guarded(lambda mp: mp.cos(_mpc(z)))


def tan(z: Complex) -> Complex:
    return divide(sin(z), cos(z))


def cotan(z: Complex) -> Complex:
    return divide(cos(z), sin(z))


def sec(z: Complex) -> Complex:
    return divide(ONE, cos(z))


def cosec(z: Complex) -> Complex:
    return divide(ONE, sin(z))


def arcsin(z: Complex) -> Complex:
    if z.is_nan:
        return NAN
    return _guarded(lambda mp: mp.asin(_mpc(z)))


def arccos(z: Complex) -> Complex:
    if z.is_nan:
        return NAN
    return _guarded(lambda mp: mp.acos(_mpc(z)))


def arctan(z: Complex) -> Complex:
    if z.is_nan:
        return NAN
    return _guarded(lambda mp: mp.atan(_mpc(z)))


def arccotan(z: Complex) -> Complex:
    return arctan(divide(ONE, z))


def arcsec(z: Complex) -> Complex:
    return arccos(divide(ONE, z))


def arccosec(z: Complex) -> Complex:
    return arcsin(divide(ONE, z))


def abs_(z: Complex) -> Real:
    """Absolute value (modulus for complex numbers)."""
    if z.is_nan:
        return NAN
    if isinstance(z, Real):
        return negate(z) if z.is_negative else z
    if not z.is_finite:
        return POSITIVE_INFINITY
    return sqrt(add(multiply(z.real, z.real), multiply(z.imaginary, z.imaginary)))


def signum(z: Complex) -> Complex:
    """``z / |z|``, with ``signum(0) == 0``."""
    if z.is_nan:
        return NAN
    if z.is_zero:
        return ZERO
    if isinstance(z, Real):
        return MINUS_ONE if z.is_negative else ONE
    return divide(z, abs_(z))


def factorial(z: Complex) -> Complex:
    """``gamma(z + 1)``; NaN at the negative integers."""
    if z.is_nan:
        return NAN
    if isinstance(z, Integer):
        if z.value < 0:
            return NAN
        if z.value <= _MAX_EXACT_FACTORIAL:
            return Integer(math.factorial(z.value))
    return _guarded(lambda mp: mp.gamma(_mpc(z) + 1))


def phi(z: Complex) -> Optional[Complex]:
    """
    Euler's totient of an integer, 0 for the non-positive integers.

    Returns NaN for any other number and None when ``z`` has a prime
    factor beyond the trial-division bound.
    """
    if not isinstance(z, Integer):
        return NAN
    n = z.value
    if n <= 0:
        return ZERO
    result = n
    divisor = 2
    while divisor * divisor <= n:
        if divisor > _MAX_TOTIENT_DIVISOR:
            return None
        if n % divisor == 0:
            while n % divisor == 0:
                n //= divisor
            result -= result // divisor
        divisor += 1 if divisor == 2 else 2
    if n > 1:
        result -= result // n
    return Integer(result)


def constant_value(name: str) -> Real:
    """Numeric value of the named constants ``pi`` and ``e``."""
    mp = _context()
    if name == 'pi':
        return _real_from_mpf(+mp.pi)
    if name == 'e':
        return _real_from_mpf(+mp.e)
    raise KeyError(name)


ZERO = Integer(0)
ONE = Integer(1)
MINUS_ONE = Integer(-1)
HALF = Rational(1, 2)
NAN = _raw_real(_mp.nan)
POSITIVE_INFINITY = _raw_real(_mp.inf)
NEGATIVE_INFINITY = _raw_real(_mp.ninf)
IMAGINARY_ONE = Complex(0, 1)

Real.nan = NAN
Real.positive_infinity = POSITIVE_INFINITY
Real.negative_infinity = NEGATIVE_INFINITY
