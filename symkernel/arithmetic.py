# symkernel - Arithmetic Nodes
# Copyright (c) 2024 symkernel Contributors. All rights reserved.

"""
Arithmetic expression nodes.

Each node kind comes with two rule functions. The ``*_eval`` rules run on
evaluated children and may fold any numbers; the ``*_simplify`` rules run on
simplified children and only fold exact numbers. Identities that would hide an
undefined value (``x/x``, ``0/x``, ``0^x``) only fire when the operand is
provably nonzero.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import ClassVar, Optional

from . import numeric as num
from .entity import (
    Entity, Priority, WEIGHT, WEIGHT_HEAVY, WEIGHT_MINOR, WEIGHT_TINY,
)
from .numeric import Integer, Number, Real


def is_number(e: Entity) -> bool:
    return isinstance(e, Number)


def is_zero(e: Entity) -> bool:
    return isinstance(e, Number) and e.is_zero


def is_one(e: Entity) -> bool:
    return isinstance(e, Number) and e == num.ONE


def is_minus_one(e: Entity) -> bool:
    return isinstance(e, Number) and e == num.MINUS_ONE


def exact_or_none(value: Number) -> Optional[Number]:
    """Return ``value`` if it may be folded during simplification."""
    return value if value.is_exact else None


def provably_nonzero(e: Entity) -> bool:
    """Whether ``e`` evaluates to a finite, nonzero number."""
    value = e.evaled()
    return isinstance(value, Number) and value.is_finite and not value.is_zero


def provably_positive(e: Entity) -> bool:
    """Whether ``e`` evaluates to a finite, positive real number."""
    value = e.evaled()
    return (
        isinstance(value, Real) and value.is_finite
        and not value.is_zero and not value.is_negative
    )


def negative(e: Entity) -> Entity:
    """``-e``, folded when ``e`` is a number."""
    if isinstance(e, Number):
        return num.negate(e)
    return Mul(num.MINUS_ONE, e)


# ----------------------------------------------------------------------
# Sum
# ----------------------------------------------------------------------

def _sum_eval(a: Entity, b: Entity) -> Optional[Entity]:
    if is_number(a) and is_number(b):
        return num.add(a, b)
    return None


def _sum_simplify(a: Entity, b: Entity) -> Optional[Entity]:
    if is_number(a) and is_number(b):
        return exact_or_none(num.add(a, b))
    if is_zero(a):
        return b
    if is_zero(b):
        return a
    return None


@dataclass(frozen=True, eq=False, repr=False)
class Sum(Entity):
    """Addition: augend + addend."""
    augend: Entity
    addend: Entity
    priority: ClassVar[Priority] = Priority.SUM

    def _init_direct_children(self):
        return (self.augend, self.addend)

    def _rebuild(self, children):
        return Sum(*children)

    def _inner_eval(self) -> Entity:
        return self._reduce_eval(_sum_eval)

    def _inner_simplify(self) -> Entity:
        return self._reduce_simplify(_sum_simplify)

    def _render(self) -> str:
        return f"{self._wrap(self.augend)} + {self._wrap(self.addend)}"


# ----------------------------------------------------------------------
# Minus
# ----------------------------------------------------------------------

def _minus_eval(a: Entity, b: Entity) -> Optional[Entity]:
    if is_number(a) and is_number(b):
        return num.subtract(a, b)
    return None


def _minus_simplify(a: Entity, b: Entity) -> Optional[Entity]:
    if is_number(a) and is_number(b):
        return exact_or_none(num.subtract(a, b))
    if is_zero(b):
        return a
    if is_zero(a):
        return negative(b)
    return None


@dataclass(frozen=True, eq=False, repr=False)
class Minus(Entity):
    """Subtraction: subtrahend - minuend."""
    subtrahend: Entity
    minuend: Entity
    priority: ClassVar[Priority] = Priority.SUM

    def _init_direct_children(self):
        return (self.subtrahend, self.minuend)

    def _rebuild(self, children):
        return Minus(*children)

    def _inner_eval(self) -> Entity:
        return self._reduce_eval(_minus_eval)

    def _inner_simplify(self) -> Entity:
        return self._reduce_simplify(_minus_simplify)

    def _render(self) -> str:
        return f"{self._wrap(self.subtrahend)} - {self._wrap(self.minuend, right=True)}"


# ----------------------------------------------------------------------
# Mul
# ----------------------------------------------------------------------

def _mul_eval(a: Entity, b: Entity) -> Optional[Entity]:
    if is_number(a) and is_number(b):
        return num.multiply(a, b)
    if is_zero(a) or is_zero(b):
        return num.ZERO
    if is_one(a):
        return b
    if is_one(b):
        return a
    return None


def _mul_simplify(a: Entity, b: Entity) -> Optional[Entity]:
    if is_number(a) and is_number(b):
        return exact_or_none(num.multiply(a, b))
    if is_zero(a) or is_zero(b):
        return num.ZERO
    if is_one(a):
        return b
    if is_one(b):
        return a
    if is_minus_one(a) and isinstance(b, Mul) and is_minus_one(b.multiplier):
        return b.multiplicand
    if a == b:
        return Pow(a, num.Integer(2))
    return None


@dataclass(frozen=True, eq=False, repr=False)
class Mul(Entity):
    """Multiplication: multiplier * multiplicand."""
    multiplier: Entity
    multiplicand: Entity
    priority: ClassVar[Priority] = Priority.PRODUCT

    def _init_direct_children(self):
        return (self.multiplier, self.multiplicand)

    def _rebuild(self, children):
        return Mul(*children)

    def _inner_eval(self) -> Entity:
        return self._reduce_eval(_mul_eval)

    def _inner_simplify(self) -> Entity:
        return self._reduce_simplify(_mul_simplify)

    def _render(self) -> str:
        if is_minus_one(self.multiplier):
            return f"-{self._wrap(self.multiplicand, right=True)}"
        return f"{self._wrap(self.multiplier)} * {self._wrap(self.multiplicand)}"


# ----------------------------------------------------------------------
# Div
# ----------------------------------------------------------------------

def _div_eval(a: Entity, b: Entity) -> Optional[Entity]:
    if is_number(a) and is_number(b):
        return num.divide(a, b)
    if is_one(b):
        return a
    if is_zero(a) and provably_nonzero(b):
        return num.ZERO
    return None


def _div_simplify(a: Entity, b: Entity) -> Optional[Entity]:
    if is_number(a) and is_number(b):
        return exact_or_none(num.divide(a, b)) if not b.is_zero else None
    if is_one(b):
        return a
    if is_minus_one(b):
        return negative(a)
    if is_zero(a) and provably_nonzero(b):
        return num.ZERO
    if a == b and provably_nonzero(b):
        return num.ONE
    return None


@dataclass(frozen=True, eq=False, repr=False)
class Div(Entity):
    """Division: dividend / divisor."""
    dividend: Entity
    divisor: Entity
    priority: ClassVar[Priority] = Priority.PRODUCT
    _simplicity_weight: ClassVar[float] = WEIGHT + WEIGHT_MINOR

    def _init_direct_children(self):
        return (self.dividend, self.divisor)

    def _rebuild(self, children):
        return Div(*children)

    def intrinsic_condition(self, dividend: Entity, divisor: Entity) -> Optional[bool]:
        if is_zero(divisor):
            return False
        if divisor.is_set_like:
            contains_zero = divisor.try_contains(num.ZERO)
            return None if contains_zero is None else not contains_zero
        if is_number(divisor):
            return True
        return None

    def _inner_eval(self) -> Entity:
        return self._reduce_eval(_div_eval)

    def _inner_simplify(self) -> Entity:
        return self._reduce_simplify(_div_simplify, allow_nan_as_exact=False)

    def _render(self) -> str:
        return f"{self._wrap(self.dividend)} / {self._wrap(self.divisor, right=True)}"


# ----------------------------------------------------------------------
# Pow
# ----------------------------------------------------------------------

def _pow_eval(a: Entity, b: Entity) -> Optional[Entity]:
    if is_number(a) and is_number(b):
        return num.power(a, b)
    if is_one(a) or is_zero(b):
        return num.ONE
    if is_one(b):
        return a
    return None


def _pow_simplify(a: Entity, b: Entity) -> Optional[Entity]:
    if is_number(a) and is_number(b):
        return exact_or_none(num.power(a, b))
    if is_one(a) or is_zero(b):
        return num.ONE
    if is_one(b):
        return a
    if is_minus_one(b):
        return Div(num.ONE, a)
    if is_zero(a) and provably_positive(b):
        return num.ZERO
    return None


@dataclass(frozen=True, eq=False, repr=False)
class Pow(Entity):
    """Exponentiation: base ^ exponent."""
    base: Entity
    exponent: Entity
    priority: ClassVar[Priority] = Priority.POWER

    def _init_direct_children(self):
        return (self.base, self.exponent)

    def _rebuild(self, children):
        return Pow(*children)

    def intrinsic_condition(self, base: Entity, exponent: Entity) -> Optional[bool]:
        if is_zero(base) and isinstance(exponent, Real):
            return not exponent.is_negative
        return True

    def _own_simplicity(self) -> float:
        exponent = self.exponent
        if isinstance(exponent, Real) and exponent.is_negative:
            return WEIGHT + WEIGHT_HEAVY
        return WEIGHT

    def _inner_eval(self) -> Entity:
        return self._reduce_eval(_pow_eval)

    def _inner_simplify(self) -> Entity:
        return self._reduce_simplify(_pow_simplify)

    def _render(self) -> str:
        if self.exponent == num.HALF:
            return f"sqrt({self.base})"
        return f"{self._wrap(self.base, right=True)} ^ {self._wrap(self.exponent)}"


# ----------------------------------------------------------------------
# Log
# ----------------------------------------------------------------------

def _log_eval(base: Entity, antilog: Entity) -> Optional[Entity]:
    if is_number(base) and is_number(antilog):
        return num.log(base, antilog)
    return None


def _log_simplify(base: Entity, antilog: Entity) -> Optional[Entity]:
    if is_number(base) and is_number(antilog):
        return exact_or_none(num.log(base, antilog))
    if is_one(antilog):
        return num.ZERO
    if base == antilog and _valid_log_base(base):
        return num.ONE
    return None


def _valid_log_base(base: Entity) -> bool:
    value = base.evaled()
    return isinstance(value, Number) and value.is_finite \
        and not value.is_zero and value != num.ONE


@dataclass(frozen=True, eq=False, repr=False)
class Log(Entity):
    """Logarithm of ``antilog`` in ``base``."""
    base: Entity
    antilog: Entity
    _simplicity_weight: ClassVar[float] = WEIGHT + WEIGHT_TINY

    def _init_direct_children(self):
        return (self.base, self.antilog)

    def _rebuild(self, children):
        return Log(*children)

    def _inner_eval(self) -> Entity:
        return self._reduce_eval(_log_eval)

    def _inner_simplify(self) -> Entity:
        return self._reduce_simplify(_log_simplify)

    def _render(self) -> str:
        return f"log({self.base}, {self.antilog})"


# ----------------------------------------------------------------------
# Factorial, Phi, Signum, Abs
# ----------------------------------------------------------------------

def _factorial_eval(arg: Entity) -> Optional[Entity]:
    if is_number(arg):
        return num.factorial(arg)
    return None


def _factorial_simplify(arg: Entity) -> Optional[Entity]:
    if is_number(arg):
        return exact_or_none(num.factorial(arg))
    return None


@dataclass(frozen=True, eq=False, repr=False)
class Factorial(Entity):
    """Factorial, extended to complex arguments as gamma(argument + 1)."""
    argument: Entity
    priority: ClassVar[Priority] = Priority.FACTORIAL

    def _init_direct_children(self):
        return (self.argument,)

    def _rebuild(self, children):
        return Factorial(*children)

    def intrinsic_condition(self, argument: Entity) -> Optional[bool]:
        if isinstance(argument, Integer):
            return argument.value >= 0
        return True

    def _inner_eval(self) -> Entity:
        return self._reduce_eval(_factorial_eval)

    def _inner_simplify(self) -> Entity:
        return self._reduce_simplify(_factorial_simplify)

    def _render(self) -> str:
        return f"{self._wrap(self.argument, right=True)}!"


def _phi_eval(arg: Entity) -> Optional[Entity]:
    if is_number(arg):
        return num.phi(arg)
    return None


@dataclass(frozen=True, eq=False, repr=False)
class Phi(Entity):
    """Euler's totient, defined on the integers."""
    argument: Entity

    def _init_direct_children(self):
        return (self.argument,)

    def _rebuild(self, children):
        return Phi(*children)

    def intrinsic_condition(self, argument: Entity) -> Optional[bool]:
        if isinstance(argument, Number):
            return isinstance(argument, Integer)
        return None

    def _inner_eval(self) -> Entity:
        return self._reduce_eval(_phi_eval)

    def _inner_simplify(self) -> Entity:
        # Integer totients are exact, so folding happens before the rules run
        return self._reduce_simplify(lambda arg: None)

    def _render(self) -> str:
        return f"phi({self.argument})"


def _signum_eval(arg: Entity) -> Optional[Entity]:
    if is_number(arg):
        return num.signum(arg)
    return None


def _signum_simplify(arg: Entity) -> Optional[Entity]:
    if is_number(arg):
        return exact_or_none(num.signum(arg))
    if isinstance(arg, Signum):
        return arg
    return None


@dataclass(frozen=True, eq=False, repr=False)
class Signum(Entity):
    """Sign of a number, ``z / |z|`` for complex arguments."""
    argument: Entity

    def _init_direct_children(self):
        return (self.argument,)

    def _rebuild(self, children):
        return Signum(*children)

    def _inner_eval(self) -> Entity:
        return self._reduce_eval(_signum_eval)

    def _inner_simplify(self) -> Entity:
        return self._reduce_simplify(_signum_simplify)


def _abs_eval(arg: Entity) -> Optional[Entity]:
    if is_number(arg):
        return num.abs_(arg)
    return None


def _abs_simplify(arg: Entity) -> Optional[Entity]:
    if is_number(arg):
        return exact_or_none(num.abs_(arg))
    if isinstance(arg, Abs):
        return arg
    if isinstance(arg, Mul) and is_minus_one(arg.multiplier):
        return Abs(arg.multiplicand)
    return None


@dataclass(frozen=True, eq=False, repr=False)
class Abs(Entity):
    """Absolute value (modulus)."""
    argument: Entity

    def _init_direct_children(self):
        return (self.argument,)

    def _rebuild(self, children):
        return Abs(*children)

    def _inner_eval(self) -> Entity:
        return self._reduce_eval(_abs_eval)

    def _inner_simplify(self) -> Entity:
        return self._reduce_simplify(_abs_simplify)
