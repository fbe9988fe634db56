# symkernel - Trigonometric Nodes
# Copyright (c) 2024 symkernel Contributors. All rights reserved.

"""
Trigonometric functions and their inverses.

Simplification knows the exact values at rational multiples of pi whose
denominator is 1, 2, 3, 4 or 6, and removes a function applied to its own
inverse:

    >>> Sin(Variable('pi') / 3).inner_simplified()
    sqrt(3) / 2
    >>> Cos(Arccos(Variable('x'))).inner_simplified()
    x
"""

from __future__ import annotations
from abc import abstractmethod
from dataclasses import dataclass
from fractions import Fraction
from typing import ClassVar, Optional, Type

from . import numeric as num
from .arithmetic import Div, Mul, Pow, exact_or_none, is_number, negative
from .entity import Entity, Variable
from .numeric import Integer, Rational


# Exact values are known for multiples of pi/12 with these denominators
_TABLE_DENOMINATORS = (1, 2, 3, 4, 6)


def pi_multiple(e: Entity) -> Optional[Fraction]:
    """
    Return ``q`` if ``e`` is written as ``q * pi`` with rational ``q``.

    Recognises ``pi``, ``r * pi``, ``pi * r``, ``pi / n`` and ``r * pi / n``.
    """
    if isinstance(e, Variable) and e.name == 'pi':
        return Fraction(1)
    if isinstance(e, Mul):
        if isinstance(e.multiplier, Rational):
            inner = pi_multiple(e.multiplicand)
            return None if inner is None else inner * num._fraction(e.multiplier)
        if isinstance(e.multiplicand, Rational):
            inner = pi_multiple(e.multiplier)
            return None if inner is None else inner * num._fraction(e.multiplicand)
    if isinstance(e, Div) and isinstance(e.divisor, Rational) and not e.divisor.is_zero:
        inner = pi_multiple(e.dividend)
        return None if inner is None else inner / num._fraction(e.divisor)
    return None


def _twelfths(arg: Entity, period: int, shift: int = 0) -> Optional[int]:
    """``arg`` as a whole number of pi/12 steps, shifted and reduced modulo ``period``."""
    q = pi_multiple(arg)
    if q is None or q.denominator not in _TABLE_DENOMINATORS:
        return None
    return (int(q * 12) + shift) % period


def _root_over(radicand: int, denominator: int) -> Entity:
    root = Pow(Integer(radicand), num.HALF)
    return root if denominator == 1 else Div(root, Integer(denominator))


# sin over the first quadrant, in pi/12 steps
_SIN_QUADRANT = {
    0: num.ZERO,
    2: num.HALF,
    3: _root_over(2, 2),
    4: _root_over(3, 2),
    6: num.ONE,
}

# tan over the first half period, in pi/12 steps
_TAN_QUADRANT = {
    0: num.ZERO,
    2: _root_over(3, 3),
    3: num.ONE,
    4: _root_over(3, 1),
}


def exact_sin(arg: Entity, shift: int = 0) -> Optional[Entity]:
    n = _twelfths(arg, 24, shift)
    if n is None:
        return None
    sign = 1
    if n > 12:
        n -= 12
        sign = -1
    if n > 6:
        n = 12 - n
    value = _SIN_QUADRANT[n]
    return value if sign > 0 else negative(value)


def exact_cos(arg: Entity) -> Optional[Entity]:
    # cos(x) = sin(x + pi/2)
    return exact_sin(arg, shift=6)


def exact_tan(arg: Entity) -> Optional[Entity]:
    n = _twelfths(arg, 12)
    if n is None or n == 6:
        return None
    if n > 6:
        return negative(_TAN_QUADRANT[12 - n])
    return _TAN_QUADRANT[n]


def exact_cotan(arg: Entity) -> Optional[Entity]:
    n = _twelfths(arg, 12)
    if n is None or n == 0:
        return None
    shifted = (6 - n) % 12
    if shifted > 6:
        return negative(_TAN_QUADRANT[12 - shifted])
    return _TAN_QUADRANT[shifted]


def _reciprocal(value: Optional[Entity]) -> Optional[Entity]:
    if value is None or (isinstance(value, num.Number) and value.is_zero):
        return None
    if isinstance(value, num.Number):
        return num.divide(num.ONE, value)
    return Div(num.ONE, value)


@dataclass(frozen=True, eq=False, repr=False)
class TrigonometricFunction(Entity):
    """Common machinery of the trigonometric kinds."""
    argument: Entity
    _inverse: ClassVar[Optional[Type[Entity]]] = None

    @staticmethod
    @abstractmethod
    def _numeric(z):
        ...

    @staticmethod
    def _exact(arg: Entity) -> Optional[Entity]:
        return None

    def _init_direct_children(self):
        return (self.argument,)

    def _rebuild(self, children):
        return type(self)(*children)

    def _eval_rule(self, arg: Entity) -> Optional[Entity]:
        if is_number(arg):
            return self._numeric(arg)
        return None

    def _simplify_rule(self, arg: Entity) -> Optional[Entity]:
        if is_number(arg):
            return exact_or_none(self._numeric(arg))
        inverse = type(self)._inverse
        if inverse is not None and isinstance(arg, inverse):
            return arg.argument
        return self._exact(arg)

    def _inner_eval(self) -> Entity:
        return self._reduce_eval(self._eval_rule)

    def _inner_simplify(self) -> Entity:
        return self._reduce_simplify(self._simplify_rule)


@dataclass(frozen=True, eq=False, repr=False)
class Sin(TrigonometricFunction):
    _numeric = staticmethod(num.sin)
    _exact = staticmethod(exact_sin)


@dataclass(frozen=True, eq=False, repr=False)
class Cos(TrigonometricFunction):
    _numeric = staticmethod(num.cos)
    _exact = staticmethod(exact_cos)


@dataclass(frozen=True, eq=False, repr=False)
class Tan(TrigonometricFunction):
    _numeric = staticmethod(num.tan)
    _exact = staticmethod(exact_tan)


@dataclass(frozen=True, eq=False, repr=False)
class Cotan(TrigonometricFunction):
    _numeric = staticmethod(num.cotan)
    _exact = staticmethod(exact_cotan)


@dataclass(frozen=True, eq=False, repr=False)
class Sec(TrigonometricFunction):
    _numeric = staticmethod(num.sec)
    _exact = staticmethod(lambda arg: _reciprocal(exact_cos(arg)))


@dataclass(frozen=True, eq=False, repr=False)
class Cosec(TrigonometricFunction):
    _numeric = staticmethod(num.cosec)
    _exact = staticmethod(lambda arg: _reciprocal(exact_sin(arg)))


@dataclass(frozen=True, eq=False, repr=False)
class Arcsin(TrigonometricFunction):
    _numeric = staticmethod(num.arcsin)


@dataclass(frozen=True, eq=False, repr=False)
class Arccos(TrigonometricFunction):
    _numeric = staticmethod(num.arccos)


@dataclass(frozen=True, eq=False, repr=False)
class Arctan(TrigonometricFunction):
    _numeric = staticmethod(num.arctan)


@dataclass(frozen=True, eq=False, repr=False)
class Arccotan(TrigonometricFunction):
    _numeric = staticmethod(num.arccotan)


@dataclass(frozen=True, eq=False, repr=False)
class Arcsec(TrigonometricFunction):
    _numeric = staticmethod(num.arcsec)


@dataclass(frozen=True, eq=False, repr=False)
class Arccosec(TrigonometricFunction):
    _numeric = staticmethod(num.arccosec)


# f(f^-1(x)) = x holds on the whole complex plane; the other order does not
Sin._inverse = Arcsin
Cos._inverse = Arccos
Tan._inverse = Arctan
Cotan._inverse = Arccotan
Sec._inverse = Arcsec
Cosec._inverse = Arccosec
